"""Serialization back to VMF text."""

from vmfforge.format.runner import run_format
from vmfforge.format.serializer import (
    FormatOptions,
    TextSink,
    serialize,
    serialize_block,
    write_document,
)

__all__ = [
    "FormatOptions",
    "TextSink",
    "run_format",
    "serialize",
    "serialize_block",
    "write_document",
]
