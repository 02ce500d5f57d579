"""Open and completed node markers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from vmfforge.parser.event import FINISH, PENDING_START, StartEvent
from vmfforge.syntax import VmfSyntaxKind
from vmfforge.text import TextRange, TextSize

if TYPE_CHECKING:
    from vmfforge.parser.parser import Parser


@dataclass(slots=True)
class Marker:
    """A node whose start event is still a placeholder at `pos`."""

    pos: int
    start: TextSize
    completed: bool = False

    def complete(self, parser: Parser, kind: VmfSyntaxKind) -> CompletedMarker:
        if self.completed:
            raise RuntimeError(f"Marker at event {self.pos} completed twice")
        if parser.events[self.pos] != PENDING_START:
            raise RuntimeError(f"Event {self.pos} is not a pending start event")

        parser.events[self.pos] = StartEvent(kind)
        parser.events.append(FINISH)
        self.completed = True
        end = max(self.start.value, parser.last_token_end.value)
        return CompletedMarker(kind=kind, range=TextRange(self.start.value, end))


@dataclass(frozen=True, slots=True)
class CompletedMarker:
    kind: VmfSyntaxKind
    range: TextRange  # from the node's first token to the end of its last one
