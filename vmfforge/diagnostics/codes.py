"""Catalogue of diagnostic codes emitted while parsing VMF text."""

from dataclasses import dataclass
from typing import Final

from vmfforge.diagnostics.diagnostic import Diagnostic, Severity
from vmfforge.text import TextRange


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    """Template for one diagnostic code; `at` places it in the source."""

    code: str
    message: str
    category: str
    hint: str | None = None
    severity: Severity = Severity.ERROR

    def at(self, range: TextRange, *, message: str | None = None, hint: str | None = None) -> Diagnostic:
        return Diagnostic(
            code=self.code,
            message=self.message if message is None else message,
            range=range,
            severity=self.severity,
            hint=self.hint if hint is None else hint,
            category=self.category,
        )


def _lexer(code: str, message: str, hint: str) -> DiagnosticSpec:
    return DiagnosticSpec(code=f"LEXER_{code}", message=message, category="lexer", hint=hint)


def _parser(code: str, message: str, hint: str | None = None) -> DiagnosticSpec:
    return DiagnosticSpec(code=f"PARSER_{code}", message=message, category="parser", hint=hint)


LEXER_UNTERMINATED_STRING: Final = _lexer(
    "UNTERMINATED_STRING",
    "Unterminated string literal",
    "expected a closing '\"' (VMF strings have no escape sequences)",
)
LEXER_INVALID_CHARACTER: Final = _lexer(
    "INVALID_CHARACTER",
    "Character cannot start a block name, string or brace",
    "expected a block name, a quoted string or a brace",
)

PARSER_EXPECTED_TOKEN: Final = _parser("EXPECTED_TOKEN", "Expected token")
PARSER_EXPECTED_VALUE: Final = _parser(
    "EXPECTED_VALUE",
    "Expected a quoted value after the key",
    "expected a quoted value",
)
PARSER_UNEXPECTED_TOKEN: Final = _parser("UNEXPECTED_TOKEN", "Unexpected token")
PARSER_DEPTH_LIMIT_EXCEEDED: Final = _parser(
    "DEPTH_LIMIT_EXCEEDED",
    "Block nesting exceeds the configured maximum depth",
    "Raise ParserOptions.max_depth if the input is trusted.",
)
