"""Pipeline run result carriers for tool entrypoints."""

from __future__ import annotations

from dataclasses import dataclass

from vmfforge.diagnostics import Diagnostic
from vmfforge.pipeline.result import VmfParseResult


@dataclass(frozen=True, slots=True)
class FormatRunResult:
    """Result of formatting from a shared parse result."""

    parse: VmfParseResult
    formatted_text: str
    diagnostics: list[Diagnostic]
    changed: bool
