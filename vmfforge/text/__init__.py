"""Text offsets, ranges and line/column lookup."""

from vmfforge.text.text import (
    LineColumn,
    LineIndex,
    TextRange,
    TextSize,
    slice_text_range,
)

__all__ = [
    "LineColumn",
    "LineIndex",
    "TextRange",
    "TextSize",
    "slice_text_range",
]
