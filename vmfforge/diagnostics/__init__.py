"""Diagnostics."""

from vmfforge.diagnostics.codes import (
    LEXER_INVALID_CHARACTER,
    LEXER_UNTERMINATED_STRING,
    PARSER_DEPTH_LIMIT_EXCEEDED,
    PARSER_EXPECTED_TOKEN,
    PARSER_EXPECTED_VALUE,
    PARSER_UNEXPECTED_TOKEN,
    DiagnosticSpec,
)
from vmfforge.diagnostics.diagnostic import Diagnostic, Severity
from vmfforge.diagnostics.report import collect_diagnostics, first_error, has_errors

__all__ = [
    "LEXER_INVALID_CHARACTER",
    "LEXER_UNTERMINATED_STRING",
    "PARSER_DEPTH_LIMIT_EXCEEDED",
    "PARSER_EXPECTED_TOKEN",
    "PARSER_EXPECTED_VALUE",
    "PARSER_UNEXPECTED_TOKEN",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "collect_diagnostics",
    "first_error",
    "has_errors",
]
