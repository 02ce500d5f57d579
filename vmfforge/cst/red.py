"""Positioned ("red") view over the green tree.

Red elements add what green elements leave out: absolute offsets, the
parent pointer and the index within the parent.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeAlias

from vmfforge.cst.green import GreenNode, GreenToken
from vmfforge.lexer import TokenKind, TriviaPiece, string_content
from vmfforge.syntax import VmfSyntaxKind
from vmfforge.text import TextRange


@dataclass(frozen=True, slots=True)
class SyntaxTriviaPiece:
    kind: TokenKind  # WHITESPACE or NEWLINE
    text: str


class _RedElement:
    __slots__ = ("kind", "parent", "index_in_parent", "_start", "_end")

    kind: VmfSyntaxKind
    parent: SyntaxNode | None
    index_in_parent: int
    _start: int
    _end: int

    @property
    def start(self) -> int:
        """Offset of the element including its leading trivia."""
        return self._start

    @property
    def end(self) -> int:
        return self._end

    def next_sibling(self) -> SyntaxElement | None:
        siblings = self._siblings()
        index = self.index_in_parent + 1
        return siblings[index] if index < len(siblings) else None

    def prev_sibling(self) -> SyntaxElement | None:
        siblings = self._siblings()
        return siblings[self.index_in_parent - 1] if siblings and self.index_in_parent > 0 else None

    def ancestors(self) -> Iterator[SyntaxNode]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def _siblings(self) -> tuple[SyntaxElement, ...]:
        return () if self.parent is None else self.parent.children


class SyntaxToken(_RedElement):
    __slots__ = ("text", "leading_trivia", "trailing_trivia", "_token_start", "_token_end")

    def __init__(self, green: GreenToken, parent: SyntaxNode, index_in_parent: int, source: str, start: int) -> None:
        self.kind = green.kind
        self.text = green.text
        self.parent = parent
        self.index_in_parent = index_in_parent
        self._start = start

        self.leading_trivia, self._token_start = _slice_trivia(source, start, green.leading_trivia)
        self._token_end = self._token_start + len(green.text)
        self.trailing_trivia, self._end = _slice_trivia(source, self._token_end, green.trailing_trivia)

    @property
    def text_range(self) -> TextRange:
        """Range of the token itself, trivia excluded."""
        return TextRange(self._token_start, self._token_end)

    @property
    def leading_trivia_text(self) -> str:
        return "".join(piece.text for piece in self.leading_trivia)

    @property
    def trailing_trivia_text(self) -> str:
        return "".join(piece.text for piece in self.trailing_trivia)

    @property
    def text_with_trivia(self) -> str:
        return f"{self.leading_trivia_text}{self.text}{self.trailing_trivia_text}"

    @property
    def string_value(self) -> str:
        """Content of a STRING token without its delimiting quotes."""
        if self.kind != VmfSyntaxKind.STRING:
            raise ValueError(f"{self.kind.name} token has no string value")
        return string_content(self.text)

    def __repr__(self) -> str:
        return f"SyntaxToken({self.kind.name}, {self.text!r}, {self.text_range!r})"


class SyntaxNode(_RedElement):
    __slots__ = ("children", "_source")

    children: tuple[SyntaxElement, ...]

    def __init__(
        self,
        kind: VmfSyntaxKind,
        parent: SyntaxNode | None,
        index_in_parent: int,
        source: str,
        start: int,
    ) -> None:
        self.kind = kind
        self.parent = parent
        self.index_in_parent = index_in_parent
        self.children = ()
        self._source = source
        self._start = start
        self._end = start

    @property
    def text_range(self) -> TextRange:
        """Range of the node, leading trivia of its first token included."""
        return TextRange(self._start, self._end)

    @property
    def text(self) -> str:
        if self._source:
            return self._source[self._start : self._end]
        # Hand-built trees have no source; trivia text is unknown there.
        return "".join(token.text_with_trivia for token in self.descendants_tokens())

    def child_nodes(self) -> tuple[SyntaxNode, ...]:
        return tuple(child for child in self.children if isinstance(child, SyntaxNode))

    def child_tokens(self) -> tuple[SyntaxToken, ...]:
        return tuple(child for child in self.children if isinstance(child, SyntaxToken))

    def child_tokens_of_kind(self, kind: VmfSyntaxKind) -> tuple[SyntaxToken, ...]:
        return tuple(token for token in self.child_tokens() if token.kind == kind)

    def first_child_node(self, kind: VmfSyntaxKind) -> SyntaxNode | None:
        return next((node for node in self.child_nodes() if node.kind == kind), None)

    def descendants_tokens(self) -> tuple[SyntaxToken, ...]:
        """All tokens below this node in source order."""
        tokens: list[SyntaxToken] = []
        pending: list[SyntaxElement] = list(reversed(self.children))
        while pending:
            element = pending.pop()
            if isinstance(element, SyntaxNode):
                pending.extend(reversed(element.children))
            else:
                tokens.append(element)
        return tuple(tokens)

    def __repr__(self) -> str:
        return f"SyntaxNode({self.kind.name}, {self.text_range!r})"


SyntaxElement: TypeAlias = SyntaxNode | SyntaxToken


@dataclass(slots=True)
class _Frame:
    green: GreenNode
    red: SyntaxNode
    offset: int
    children: list[SyntaxElement]


def from_green(root: GreenNode, source: str = "") -> SyntaxNode:
    """Wrap a green tree in positioned red nodes.

    Uses an explicit stack, so deep nesting never hits the recursion limit.
    """
    red_root = SyntaxNode(root.kind, None, 0, source, 0)
    stack = [_Frame(root, red_root, 0, [])]

    while stack:
        frame = stack[-1]
        index = len(frame.children)

        if index == len(frame.green.children):
            stack.pop()
            frame.red.children = tuple(frame.children)
            frame.red._end = frame.offset
            if stack:
                stack[-1].children.append(frame.red)
                stack[-1].offset = frame.offset
            continue

        child = frame.green.children[index]
        if isinstance(child, GreenNode):
            stack.append(_Frame(child, SyntaxNode(child.kind, frame.red, index, source, frame.offset), frame.offset, []))
        else:
            token = SyntaxToken(child, frame.red, index, source, frame.offset)
            frame.children.append(token)
            frame.offset = token.end

    return red_root


def _slice_trivia(source: str, start: int, pieces: tuple[TriviaPiece, ...]) -> tuple[tuple[SyntaxTriviaPiece, ...], int]:
    """Materialize trivia pieces starting at `start`; returns them and the end offset."""
    sliced: list[SyntaxTriviaPiece] = []
    offset = start
    for piece in pieces:
        text = source[offset : offset + piece.length] if source else ""
        sliced.append(SyntaxTriviaPiece(piece.kind, text))
        offset += piece.length
    return tuple(sliced), offset


__all__ = [
    "SyntaxElement",
    "SyntaxNode",
    "SyntaxToken",
    "SyntaxTriviaPiece",
    "from_green",
]
