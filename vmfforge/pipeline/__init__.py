"""Parse carriers and library entrypoints."""

from vmfforge.pipeline.entrypoints import parse, parse_file
from vmfforge.pipeline.result import VmfParseResult
from vmfforge.pipeline.results import FormatRunResult

__all__ = [
    "FormatRunResult",
    "VmfParseResult",
    "parse",
    "parse_file",
]
