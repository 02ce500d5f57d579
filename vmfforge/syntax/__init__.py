"""Syntax kinds."""

from vmfforge.syntax.kind import VmfSyntaxKind

__all__ = ["VmfSyntaxKind"]
