"""Convert documents to and from plain JSON-compatible data.

Blocks become ``{"name": str, "body": [...]}`` and key-values become
``{"key": str, "value": str}``. Body order is kept as-is, so duplicate keys
and interleaved blocks survive the trip.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from vmfforge.errors import InvalidBlockNameError, StructuredDataError
from vmfforge.lexer import NameRule
from vmfforge.model import Block, Document

logger = logging.getLogger(__name__)

_BLOCK_FIELDS = frozenset({"name", "body"})
_KEY_VALUE_FIELDS = frozenset({"key", "value"})


# =============================================================================
# Document -> data
# =============================================================================


def to_data(document: Document) -> list[dict[str, Any]]:
    """Convert a document into a list of block dicts."""
    out: list[dict[str, Any]] = []
    stack: list[tuple[Block, list[dict[str, Any]]]] = []
    for block in reversed(document.blocks):
        body: list[dict[str, Any]] = []
        out.append({"name": block.name, "body": body})
        stack.append((block, body))
    out.reverse()

    while stack:
        block, body = stack.pop()
        for entry in block.body:
            if isinstance(entry, Block):
                child_body: list[dict[str, Any]] = []
                body.append({"name": entry.name, "body": child_body})
                stack.append((entry, child_body))
            else:
                body.append({"key": entry.key, "value": entry.value})
    return out


def to_json(document: Document, indent: int | None = None) -> str:
    return json.dumps(to_data(document), indent=indent, ensure_ascii=False)


# =============================================================================
# data -> Document
# =============================================================================


def from_data(data: Any, *, name_rule: NameRule = NameRule.STRICT) -> Document:
    """Build a document from `to_data`-shaped data.

    Block names are checked against `name_rule`; pass `NameRule.LOOSE` for
    data meant to be read back with a PERMISSIVE parse.

    Raises `StructuredDataError` naming the offending location, e.g.
    ``$[0].body[2]``.
    """
    if not isinstance(data, list):
        raise StructuredDataError(f"expected a list of blocks, got {_type_name(data)}", "$")

    document = Document()
    stack: list[tuple[Block, list[Any], str]] = []
    for index, item in enumerate(data):
        path = f"$[{index}]"
        if not _is_block_shape(item):
            raise StructuredDataError(_describe_mismatch(item, top_level=True), path)
        block, body = _new_block(item, path, name_rule)
        document.append(block)
        stack.append((block, body, path))

    while stack:
        block, body, path = stack.pop()
        for index, item in enumerate(body):
            entry_path = f"{path}.body[{index}]"
            if _is_key_value_shape(item):
                key, value = item["key"], item["value"]
                if not isinstance(key, str) or not isinstance(value, str):
                    raise StructuredDataError("key and value must both be strings", entry_path)
                block.append_key_value(key, value)
            elif _is_block_shape(item):
                child, child_body = _new_block(item, entry_path, name_rule)
                block.append_block(child)
                stack.append((child, child_body, entry_path))
            else:
                raise StructuredDataError(_describe_mismatch(item, top_level=False), entry_path)

    logger.debug("Built document with %d top-level blocks from structured data", len(document.blocks))
    return document


def from_json(text: str, *, name_rule: NameRule = NameRule.STRICT) -> Document:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StructuredDataError(f"invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})", "$") from exc
    return from_data(data, name_rule=name_rule)


def _new_block(item: dict[str, Any], path: str, name_rule: NameRule) -> tuple[Block, list[Any]]:
    name, body = item["name"], item["body"]
    if not isinstance(name, str):
        raise StructuredDataError(f"block name must be a string, got {_type_name(name)}", f"{path}.name")
    if not isinstance(body, list):
        raise StructuredDataError(f"block body must be a list, got {_type_name(body)}", f"{path}.body")
    try:
        block = Block(name, name_rule=name_rule)
    except InvalidBlockNameError as exc:
        raise StructuredDataError(str(exc), f"{path}.name") from exc
    return block, body


def _is_block_shape(item: Any) -> bool:
    return isinstance(item, dict) and item.keys() == _BLOCK_FIELDS


def _is_key_value_shape(item: Any) -> bool:
    return isinstance(item, dict) and item.keys() == _KEY_VALUE_FIELDS


def _describe_mismatch(item: Any, *, top_level: bool) -> str:
    wanted = "a block object" if top_level else "a block or key-value object"
    if not isinstance(item, dict):
        return f"expected {wanted}, got {_type_name(item)}"
    fields = ", ".join(sorted(map(str, item.keys()))) or "no fields"
    return f"expected {wanted}, got an object with {fields}"


def _type_name(value: Any) -> str:
    return type(value).__name__


__all__ = ["from_data", "from_json", "to_data", "to_json"]
