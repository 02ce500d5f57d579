"""Lossless VMF lexer."""

import re

from vmfforge.diagnostics import Diagnostic
from vmfforge.diagnostics.codes import LEXER_INVALID_CHARACTER, LEXER_UNTERMINATED_STRING
from vmfforge.lexer.tokens import NameRule, Token, TokenKind
from vmfforge.text import TextRange, slice_text_range

_WHITESPACE = re.compile(r"[ \t]+")
_NEWLINE = re.compile(r"\r\n?|\n")
_NAME_PATTERNS: dict[NameRule, re.Pattern[str]] = {
    NameRule.STRICT: re.compile(r"[A-Za-z0-9_]+"),
    NameRule.LOOSE: re.compile(r'[^\s{}"]+'),
}
_PUNCTUATION: dict[str, TokenKind] = {"{": TokenKind.LBRACE, "}": TokenKind.RBRACE}


class Lexer:
    """Splits VMF source into tokens; every character lands in exactly one token.

    Characters that start no token become SKIPPED tokens and are reported as
    diagnostics instead of raising, so the caller decides how to fail.
    """

    def __init__(self, source: str, *, name_rule: NameRule = NameRule.STRICT) -> None:
        self._source = source
        self._position = 0
        self._name_rule = name_rule
        self._name_pattern = _NAME_PATTERNS[name_rule]
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> str:
        return self._source

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    @property
    def name_rule(self) -> NameRule:
        return self._name_rule

    @property
    def position(self) -> int:
        return self._position

    def next_token(self) -> Token:
        """Lex one token. Returns an empty EOF token, repeatedly, once the input is exhausted."""
        start = self._position
        if start >= len(self._source):
            return Token(TokenKind.EOF, TextRange(start, start))

        kind, end, unterminated = self._scan(start)
        self._position = end
        return Token(kind, TextRange(start, end), unterminated)

    def lex(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.kind == TokenKind.EOF:
                return tokens

    def _scan(self, start: int) -> tuple[TokenKind, int, bool]:
        source = self._source
        ch = source[start]

        punctuation = _PUNCTUATION.get(ch)
        if punctuation is not None:
            return punctuation, start + 1, False

        if ch == '"':
            return self._scan_string(start)

        for kind, pattern in (
            (TokenKind.WHITESPACE, _WHITESPACE),
            (TokenKind.NEWLINE, _NEWLINE),
            (TokenKind.NAME, self._name_pattern),
        ):
            match = pattern.match(source, start)
            if match is not None:
                return kind, match.end(), False

        self._diagnostics.append(
            LEXER_INVALID_CHARACTER.at(
                TextRange(start, start + 1),
                message=f"Unexpected character {ch!r}",
            )
        )
        return TokenKind.SKIPPED, start + 1, False

    def _scan_string(self, start: int) -> tuple[TokenKind, int, bool]:
        # No escapes: the next quote always closes the string.
        closing = self._source.find('"', start + 1)
        if closing != -1:
            return TokenKind.STRING, closing + 1, False

        end = len(self._source)
        self._diagnostics.append(LEXER_UNTERMINATED_STRING.at(TextRange(start, end)))
        return TokenKind.STRING, end, True


def invalid_name_char(name: str, rule: NameRule) -> str | None:
    """First character of `name` that a NAME token under `rule` cannot hold, if any."""
    match = _NAME_PATTERNS[rule].match(name)
    end = match.end() if match is not None else 0
    return name[end] if end < len(name) else None


def token_text(source: str, token: Token) -> str:
    return slice_text_range(source, token.range)


def string_content(text: str) -> str:
    """Strip the delimiting quotes from STRING token text.

    An unterminated string only loses its opening quote.
    """
    if text.startswith('"'):
        text = text[1:]
    if text.endswith('"'):
        text = text[:-1]
    return text
