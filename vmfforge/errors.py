"""Exceptions raised at the public parse/serialize boundary."""

from __future__ import annotations

from vmfforge.diagnostics import Diagnostic
from vmfforge.text import LineIndex


class VmfError(Exception):
    """Base class for every error raised by vmfforge."""


class VmfSyntaxError(VmfError):
    """Input text does not match the VMF grammar.

    Carries the 0-based character offset and the 1-based line/column of the
    first unmatched token, plus what the grammar expected there.
    """

    def __init__(
        self,
        message: str,
        *,
        offset: int,
        line: int,
        column: int,
        code: str,
        expected: str | None = None,
        diagnostic: Diagnostic | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.line = line
        self.column = column
        self.code = code
        self.expected = expected
        self.diagnostic = diagnostic

    @classmethod
    def from_diagnostic(
        cls,
        diagnostic: Diagnostic,
        source: str,
        *,
        line_index: LineIndex | None = None,
    ) -> VmfSyntaxError:
        index = line_index if line_index is not None else LineIndex(source)
        offset = diagnostic.range.start.value
        position = index.line_column(offset)
        return cls(
            diagnostic.message,
            offset=offset,
            line=position.line,
            column=position.column,
            code=diagnostic.code,
            expected=diagnostic.hint,
            diagnostic=diagnostic,
        )

    def __str__(self) -> str:
        return f"{self.message} at line {self.line}, column {self.column}"


class DepthLimitExceeded(VmfSyntaxError):
    """Block nesting went past `ParserOptions.max_depth`."""

    def __init__(self, message: str, *, limit: int, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.limit = limit


class InternalConsistencyError(VmfError):
    """The concrete syntax tree violates a shape the grammar guarantees.

    This is a parser/builder mismatch, never a problem with the input.
    """


class InvalidBlockNameError(VmfError, ValueError):
    """Block name is empty or contains whitespace, braces or quotes."""


class MissingKeyError(VmfError, KeyError):
    """A required key is absent from a block."""

    def __init__(self, block: str, key: str) -> None:
        super().__init__(f"Block {block!r} is missing required key {key!r}")
        self.block = block
        self.key = key

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidValueError(VmfError, ValueError):
    """A key's value cannot be converted to the expected type."""

    def __init__(self, block: str, key: str, value: str, expected: str) -> None:
        super().__init__(f"Block {block!r} key {key!r}: expected {expected}, got {value!r}")
        self.block = block
        self.key = key
        self.value = value
        self.expected = expected


class StructuredDataError(VmfError, ValueError):
    """Structured data does not describe a VMF document."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


__all__ = [
    "DepthLimitExceeded",
    "InternalConsistencyError",
    "InvalidBlockNameError",
    "InvalidValueError",
    "MissingKeyError",
    "StructuredDataError",
    "VmfError",
    "VmfSyntaxError",
]
