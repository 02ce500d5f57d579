"""Replays parser events into a lossless green tree."""

from collections.abc import Sequence
from dataclasses import dataclass

from vmfforge.cst import GreenNode, TreeBuilder
from vmfforge.diagnostics import Diagnostic
from vmfforge.lexer import Trivia, TriviaPiece
from vmfforge.parser.event import Event, replay_events
from vmfforge.syntax import VmfSyntaxKind
from vmfforge.text import TextSize


@dataclass(frozen=True, slots=True)
class ParsedGreenTree:
    root: GreenNode
    diagnostics: list[Diagnostic]


class LosslessTreeSink:
    """Builds the green tree, handing each recorded trivia run to its owning token.

    The outermost node also receives whatever text the parser left
    unconsumed (as one SKIPPED token) and the EOF token, so the tree always
    covers the whole source.
    """

    def __init__(self, text: str, trivia: Sequence[Trivia], builder: TreeBuilder | None = None) -> None:
        self._text = text
        self._trivia = trivia
        self._next_trivia = 0
        self._offset = 0
        self._depth = 0
        self._eof_emitted = False
        self._builder = builder if builder is not None else TreeBuilder()

    def start_node(self, kind: VmfSyntaxKind) -> None:
        self._builder.start_node(kind)
        self._depth += 1

    def token(self, kind: VmfSyntaxKind, end: TextSize) -> None:
        self._emit(kind, end.value)

    def finish_node(self) -> None:
        self._depth -= 1
        if self._depth < 0:
            raise RuntimeError("finish_node called more often than start_node")
        if self._depth == 0 and not self._eof_emitted:
            self._emit_tail()
        self._builder.finish_node()

    def finish(self) -> GreenNode:
        return self._builder.finish()

    def _emit(self, kind: VmfSyntaxKind, end: int, carried: tuple[TriviaPiece, ...] = ()) -> None:
        if kind == VmfSyntaxKind.EOF:
            self._eof_emitted = True
        leading = carried + self._take_trivia(trailing=False, limit=end)
        start = self._offset
        self._offset = end
        trailing = self._take_trivia(trailing=True, limit=len(self._text))
        self._builder.token_with_trivia(kind, self._text[start:end], leading, trailing)

    def _emit_tail(self) -> None:
        text_end = len(self._text)
        leading = self._take_trivia(trailing=False, limit=text_end)
        if self._offset < text_end:
            # Input after the first error is kept verbatim.
            self._builder.token_with_trivia(VmfSyntaxKind.SKIPPED, self._text[self._offset :], leading)
            self._offset = text_end
            leading = ()
        self._next_trivia = len(self._trivia)
        self._emit(VmfSyntaxKind.EOF, text_end, leading)

    def _take_trivia(self, *, trailing: bool, limit: int) -> tuple[TriviaPiece, ...]:
        pieces: list[TriviaPiece] = []
        while self._next_trivia < len(self._trivia):
            trivia = self._trivia[self._next_trivia]
            start, end = trivia.range.as_tuple()
            if trivia.trailing != trailing or start != self._offset or end > limit:
                break
            pieces.append(TriviaPiece(trivia.kind, end - start))
            self._offset = end
            self._next_trivia += 1
        return tuple(pieces)


def build_green_tree(
    text: str,
    events: Sequence[Event],
    trivia: Sequence[Trivia],
    diagnostics: list[Diagnostic],
) -> ParsedGreenTree:
    sink = LosslessTreeSink(text, trivia)
    replay_events(events, sink)
    return ParsedGreenTree(root=sink.finish(), diagnostics=diagnostics)
