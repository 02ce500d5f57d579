"""Diagnostic records produced by the lexer and the parser."""

from dataclasses import dataclass
from enum import StrEnum

from vmfforge.text import TextRange


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A problem found in source text, located by character range.

    Diagnostics are data; `VmfSyntaxError.from_diagnostic` turns the first
    error into an exception at the public boundary.
    """

    code: str
    message: str
    range: TextRange
    severity: Severity = Severity.ERROR
    hint: str | None = None
    category: str | None = None  # "lexer" or "parser"

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def __str__(self) -> str:
        start, end = self.range.as_tuple()
        return f"{self.severity}[{self.code}] {self.message} at {start}..{end}"
