"""Flat event stream recorded by the parser and replayed into a tree sink."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final, Protocol, TypeAlias

from vmfforge.syntax import VmfSyntaxKind
from vmfforge.text import TextSize


@dataclass(frozen=True, slots=True)
class StartEvent:
    kind: VmfSyntaxKind


@dataclass(frozen=True, slots=True)
class FinishEvent:
    pass


@dataclass(frozen=True, slots=True)
class TokenEvent:
    kind: VmfSyntaxKind
    end: TextSize


Event: TypeAlias = StartEvent | FinishEvent | TokenEvent

# Written by `Parser.start`; replaced with the real kind when the marker completes.
PENDING_START: Final = StartEvent(VmfSyntaxKind.TOMBSTONE)
FINISH: Final = FinishEvent()


class EventSink(Protocol):
    def start_node(self, kind: VmfSyntaxKind) -> None: ...

    def token(self, kind: VmfSyntaxKind, end: TextSize) -> None: ...

    def finish_node(self) -> None: ...


def replay_events(events: Iterable[Event], sink: EventSink) -> None:
    for event in events:
        match event:
            case TokenEvent(kind=kind, end=end):
                sink.token(kind, end)
            case StartEvent(kind=VmfSyntaxKind.TOMBSTONE):
                raise RuntimeError("Event stream contains a node that was started but never completed")
            case StartEvent(kind=kind):
                sink.start_node(kind)
            case FinishEvent():
                sink.finish_node()
