"""Serialize a `Document` back to VMF text."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Protocol

from vmfforge.model import Block, Document, KeyValue

logger = logging.getLogger(__name__)


class TextSink(Protocol):
    def write(self, text: str, /) -> object: ...


@dataclass(frozen=True, slots=True)
class FormatOptions:
    """Layout of serialized output. Hammer itself writes one tab per level."""

    indent: str = "\t"
    newline: str = "\n"

    def __post_init__(self) -> None:
        if not set(self.indent) <= {" ", "\t"}:
            raise ValueError("indent must consist of spaces and tabs only")
        if self.newline not in ("\n", "\r\n"):
            raise ValueError("newline must be '\\n' or '\\r\\n'")


def serialize(document: Document, options: FormatOptions | None = None) -> str:
    buffer = io.StringIO()
    write_document(document, buffer, options)
    return buffer.getvalue()


def serialize_block(block: Block, options: FormatOptions | None = None, *, depth: int = 0) -> str:
    buffer = io.StringIO()
    lossy = _write_block(block, buffer, options or FormatOptions(), depth)
    _warn_if_lossy(lossy)
    return buffer.getvalue()


def write_document(document: Document, sink: TextSink, options: FormatOptions | None = None) -> None:
    """Write every top-level block to `sink`.

    Keys and values are written verbatim between quotes. VMF has no escape
    syntax, so a `"` inside either one produces text that parses differently;
    this is logged, not rejected.
    """
    resolved = options or FormatOptions()
    lossy = 0
    for block in document.blocks:
        lossy += _write_block(block, sink, resolved, 0)
    _warn_if_lossy(lossy)
    logger.debug("Serialized %d top-level blocks", len(document.blocks))


def _write_block(root: Block, sink: TextSink, options: FormatOptions, depth: int) -> int:
    lossy = 0
    newline = options.newline
    # (entry, depth, closing) - explicit stack keeps deep trees off the call stack.
    stack: list[tuple[KeyValue | Block, int, bool]] = [(root, depth, False)]

    while stack:
        entry, level, closing = stack.pop()
        indent = options.indent * level

        if closing:
            sink.write(f"{indent}}}{newline}")
            continue

        if isinstance(entry, KeyValue):
            if '"' in entry.key or '"' in entry.value:
                lossy += 1
            sink.write(f'{indent}"{entry.key}" "{entry.value}"{newline}')
            continue

        sink.write(f"{indent}{entry.name}{newline}{indent}{{{newline}")
        stack.append((entry, level, True))
        for child in reversed(entry.body):
            stack.append((child, level + 1, False))

    return lossy


def _warn_if_lossy(lossy: int) -> None:
    if lossy:
        logger.warning("%d key-value pair(s) contain '\"' and will not survive a round trip", lossy)
