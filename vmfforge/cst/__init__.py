"""Concrete syntax tree: immutable green nodes and positioned red wrappers."""

from vmfforge.cst.green import GreenElement, GreenNode, GreenToken, TreeBuilder
from vmfforge.cst.red import (
    SyntaxElement,
    SyntaxNode,
    SyntaxToken,
    SyntaxTriviaPiece,
    from_green,
)

__all__ = [
    "GreenElement",
    "GreenNode",
    "GreenToken",
    "SyntaxElement",
    "SyntaxNode",
    "SyntaxToken",
    "SyntaxTriviaPiece",
    "TreeBuilder",
    "from_green",
]
