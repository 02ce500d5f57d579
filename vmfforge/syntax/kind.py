"""Syntax kinds shared by the parser, the CST and lowering."""

from enum import IntEnum

from vmfforge.lexer import TokenKind


class VmfSyntaxKind(IntEnum):
    """Token and node kinds of the VMF CST.

    Token kinds reuse the numeric values of `TokenKind`; node kinds start at 1000.
    """

    TOMBSTONE = 0  # placeholder start event of an uncompleted marker
    EOF = TokenKind.EOF.value

    WHITESPACE = TokenKind.WHITESPACE.value
    NEWLINE = TokenKind.NEWLINE.value
    SKIPPED = TokenKind.SKIPPED.value

    NAME = TokenKind.NAME.value
    STRING = TokenKind.STRING.value

    LBRACE = TokenKind.LBRACE.value
    RBRACE = TokenKind.RBRACE.value

    ROOT = 1000
    ERROR = 1001
    SOURCE_FILE = 1002
    BLOCK = 1003
    KEY_VALUE = 1004

    @property
    def is_trivia(self) -> bool:
        return self is VmfSyntaxKind.WHITESPACE or self is VmfSyntaxKind.NEWLINE

    @property
    def is_token(self) -> bool:
        return VmfSyntaxKind.TOMBSTONE < self < VmfSyntaxKind.ROOT

    @property
    def is_node(self) -> bool:
        return self >= VmfSyntaxKind.ROOT

    @staticmethod
    def from_token_kind(kind: TokenKind) -> "VmfSyntaxKind":
        return VmfSyntaxKind(kind.value)
