"""Immutable, position-free green tree.

Green elements only know their kind, text and width; absolute offsets and
parents live in the red layer (`vmfforge.cst.red`).
"""

from dataclasses import dataclass, field
from typing import TypeAlias

from vmfforge.lexer import TriviaPiece
from vmfforge.syntax import VmfSyntaxKind
from vmfforge.text import TextSize


@dataclass(frozen=True, slots=True)
class GreenToken:
    kind: VmfSyntaxKind
    text: str
    leading_trivia: tuple[TriviaPiece, ...] = ()
    trailing_trivia: tuple[TriviaPiece, ...] = ()
    width: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        trivia = sum(piece.length for piece in self.leading_trivia) + sum(
            piece.length for piece in self.trailing_trivia
        )
        object.__setattr__(self, "width", len(self.text) + trivia)

    @property
    def text_len(self) -> TextSize:
        return TextSize(self.width)


@dataclass(frozen=True, slots=True)
class GreenNode:
    kind: VmfSyntaxKind
    children: tuple["GreenElement", ...]
    # Children are built first, so summing their cached widths never recurses.
    width: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", sum(child.width for child in self.children))

    @property
    def text_len(self) -> TextSize:
        return TextSize(self.width)


GreenElement: TypeAlias = GreenNode | GreenToken


class TreeBuilder:
    """Assembles green nodes bottom-up from start/token/finish calls.

    Everything is collected under a synthetic ROOT node.
    """

    def __init__(self) -> None:
        self._open: list[tuple[VmfSyntaxKind, list[GreenElement]]] = [(VmfSyntaxKind.ROOT, [])]

    def start_node(self, kind: VmfSyntaxKind) -> None:
        self._open.append((kind, []))

    def token_with_trivia(
        self,
        kind: VmfSyntaxKind,
        text: str,
        leading: tuple[TriviaPiece, ...] = (),
        trailing: tuple[TriviaPiece, ...] = (),
    ) -> None:
        self._open[-1][1].append(GreenToken(kind, text, leading, trailing))

    def finish_node(self) -> None:
        if len(self._open) == 1:
            raise RuntimeError("finish_node called without a matching start_node")
        kind, children = self._open.pop()
        self._open[-1][1].append(GreenNode(kind, tuple(children)))

    def finish(self) -> GreenNode:
        if len(self._open) != 1:
            raise RuntimeError(f"Cannot finish tree: {len(self._open) - 1} node(s) left open")
        kind, children = self._open[0]
        return GreenNode(kind, tuple(children))
