"""Parse and serialize Valve Map Format (VMF) files."""

from vmfforge.convert import from_data, from_json, to_data, to_json
from vmfforge.errors import (
    DepthLimitExceeded,
    InternalConsistencyError,
    InvalidBlockNameError,
    InvalidValueError,
    MissingKeyError,
    StructuredDataError,
    VmfError,
    VmfSyntaxError,
)
from vmfforge.format import FormatOptions, run_format, serialize, write_document
from vmfforge.lexer import NameRule
from vmfforge.model import (
    Block,
    Document,
    Entry,
    KeyValue,
    VersionInfo,
    ViewSettings,
    VisGroup,
    VisGroups,
)
from vmfforge.parser import DEFAULT_MAX_DEPTH, ParseMode, ParserOptions, parse_cst, parse_result
from vmfforge.pipeline import FormatRunResult, VmfParseResult, parse, parse_file

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "Block",
    "DepthLimitExceeded",
    "Document",
    "Entry",
    "FormatOptions",
    "FormatRunResult",
    "InternalConsistencyError",
    "InvalidBlockNameError",
    "InvalidValueError",
    "KeyValue",
    "MissingKeyError",
    "NameRule",
    "ParseMode",
    "ParserOptions",
    "StructuredDataError",
    "VersionInfo",
    "ViewSettings",
    "VisGroup",
    "VisGroups",
    "VmfError",
    "VmfParseResult",
    "VmfSyntaxError",
    "from_data",
    "from_json",
    "parse",
    "parse_cst",
    "parse_file",
    "parse_result",
    "run_format",
    "serialize",
    "to_data",
    "to_json",
    "write_document",
]
