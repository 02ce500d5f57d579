"""Typed VMF document model and CST lowering."""

from vmfforge.model.lower import lower_syntax_tree, lower_tree
from vmfforge.model.metadata import VersionInfo, ViewSettings, VisGroup, VisGroups
from vmfforge.model.model import Block, Document, Entry, KeyValue, validate_block_name

__all__ = [
    "Block",
    "Document",
    "Entry",
    "KeyValue",
    "VersionInfo",
    "ViewSettings",
    "VisGroup",
    "VisGroups",
    "lower_syntax_tree",
    "lower_tree",
    "validate_block_name",
]
