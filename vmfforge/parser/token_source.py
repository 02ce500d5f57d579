"""Trivia-skipping view of the lexer used by the parser."""

from vmfforge.diagnostics import Diagnostic
from vmfforge.lexer import Lexer, Token, TokenKind, Trivia
from vmfforge.text import TextRange, TextSize


class TokenSource:
    """Feeds the parser non-trivia tokens and records the trivia it skips.

    Trivia after a token, up to but excluding the next line break, is marked
    trailing and stays with that token. Everything else leads the next token.
    """

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self._trivia: list[Trivia] = []
        self._current = self._next_significant(trailing=False)

    @property
    def text(self) -> str:
        return self._lexer.source

    @property
    def current(self) -> TokenKind:
        return self._current.kind

    @property
    def current_token(self) -> Token:
        return self._current

    @property
    def current_range(self) -> TextRange:
        return self._current.range

    @property
    def position(self) -> TextSize:
        return self._current.range.start

    @property
    def trivia(self) -> list[Trivia]:
        return self._trivia

    def bump(self) -> None:
        if self._current.kind != TokenKind.EOF:
            self._current = self._next_significant(trailing=True)

    def finish(self) -> tuple[list[Trivia], list[Diagnostic]]:
        return self._trivia, self._lexer.diagnostics

    def _next_significant(self, *, trailing: bool) -> Token:
        while True:
            token = self._lexer.next_token()
            if not token.kind.is_trivia:
                return token
            if token.kind == TokenKind.NEWLINE:
                trailing = False
            self._trivia.append(Trivia(token.kind, token.range, trailing))
