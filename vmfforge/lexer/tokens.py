"""Token vocabulary produced by the VMF lexer."""

from dataclasses import dataclass
from enum import IntEnum, StrEnum

from vmfforge.text import TextRange


class TokenKind(IntEnum):
    """Every kind of token the lexer emits, trivia included."""

    EOF = 1

    # Trivia: owned by neighbouring tokens in the CST, never seen by the parser.
    WHITESPACE = 10  # run of spaces and tabs
    NEWLINE = 11  # \n, \r\n or a lone \r

    SKIPPED = 13  # a character that starts no token

    NAME = 20  # bare block name
    STRING = 21  # "...", no escape sequences

    LBRACE = 60
    RBRACE = 61

    @property
    def is_trivia(self) -> bool:
        return self is TokenKind.WHITESPACE or self is TokenKind.NEWLINE


class NameRule(StrEnum):
    """Character set accepted for block names.

    STRICT: ASCII letters, digits and underscore.
    LOOSE: anything except whitespace, braces and double quotes.
    """

    STRICT = "strict"
    LOOSE = "loose"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    range: TextRange
    unterminated: bool = False  # STRING that ran to end of input


@dataclass(frozen=True, slots=True)
class Trivia:
    """Whitespace or line break skipped by the token source.

    `trailing` trivia belongs to the token before it, the rest to the token after.
    """

    kind: TokenKind
    range: TextRange
    trailing: bool


@dataclass(frozen=True, slots=True)
class TriviaPiece:
    """Trivia as stored in the CST: kind and length only."""

    kind: TokenKind
    length: int
