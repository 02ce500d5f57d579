"""Lexer."""

from vmfforge.lexer.lexer import Lexer, invalid_name_char, string_content, token_text
from vmfforge.lexer.tokens import NameRule, Token, TokenKind, Trivia, TriviaPiece

__all__ = [
    "Lexer",
    "NameRule",
    "Token",
    "TokenKind",
    "Trivia",
    "TriviaPiece",
    "invalid_name_char",
    "string_content",
    "token_text",
]
