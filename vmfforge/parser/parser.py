"""Event-recording parser core."""

from vmfforge.diagnostics import Diagnostic
from vmfforge.diagnostics.codes import PARSER_DEPTH_LIMIT_EXCEEDED
from vmfforge.errors import DepthLimitExceeded
from vmfforge.lexer import TokenKind
from vmfforge.parser.event import PENDING_START, Event, TokenEvent
from vmfforge.parser.marker import Marker
from vmfforge.parser.options import ParserOptions
from vmfforge.parser.token_source import TokenSource
from vmfforge.syntax import VmfSyntaxKind
from vmfforge.text import LineIndex, TextRange, TextSize


class Parser:
    """LL(1) parser that records a flat event stream instead of building nodes.

    Grammar routines open a `Marker`, consume tokens and complete the marker
    with a node kind; `replay_events` later turns the stream into a tree.
    """

    def __init__(self, source: TokenSource, options: ParserOptions | None = None) -> None:
        self._source = source
        self._options = options or ParserOptions()
        self._events: list[Event] = []
        self._diagnostics: list[Diagnostic] = []
        self._depth = 0
        self._last_token_end = TextSize(0)

    @property
    def source(self) -> TokenSource:
        return self._source

    @property
    def options(self) -> ParserOptions:
        return self._options

    @property
    def events(self) -> list[Event]:
        return self._events

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    @property
    def current(self) -> TokenKind:
        return self._source.current

    @property
    def current_range(self) -> TextRange:
        return self._source.current_range

    @property
    def current_text(self) -> str:
        start, end = self.current_range.as_tuple()
        return self._source.text[start:end]

    @property
    def position(self) -> TextSize:
        return self._source.position

    @property
    def last_token_end(self) -> TextSize:
        return self._last_token_end

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def has_errors(self) -> bool:
        return bool(self._diagnostics)

    def at(self, kind: TokenKind) -> bool:
        return self._source.current == kind

    def start(self) -> Marker:
        self._events.append(PENDING_START)
        return Marker(pos=len(self._events) - 1, start=self.position)

    def bump(self) -> None:
        """Consume the current token. A no-op at EOF, which the tree sink adds itself."""
        if self.at(TokenKind.EOF):
            return
        end = self.current_range.end
        self._events.append(TokenEvent(VmfSyntaxKind.from_token_kind(self.current), end))
        self._last_token_end = end
        self._source.bump()

    def eat(self, kind: TokenKind) -> bool:
        if not self.at(kind):
            return False
        self.bump()
        return True

    def error(self, diagnostic: Diagnostic) -> None:
        # One diagnostic per offset: the innermost routine reports first.
        if self._diagnostics and self._diagnostics[-1].range.start == diagnostic.range.start:
            return
        self._diagnostics.append(diagnostic)

    def enter_block(self) -> None:
        """Enter one level of block nesting; raises `DepthLimitExceeded` past `max_depth`."""
        if self._depth >= self._options.max_depth:
            raise self._depth_limit_error()
        self._depth += 1

    def leave_block(self) -> None:
        self._depth -= 1


    def finish(self) -> tuple[list[Event], list[Diagnostic]]:
        return self._events, self._diagnostics

    def _depth_limit_error(self) -> DepthLimitExceeded:
        limit = self._options.max_depth
        diagnostic = PARSER_DEPTH_LIMIT_EXCEEDED.at(
            self.current_range,
            message=f"Block nesting exceeds the maximum depth of {limit}",
        )
        location = LineIndex(self._source.text).line_column(diagnostic.range.start)
        return DepthLimitExceeded(
            diagnostic.message,
            limit=limit,
            offset=diagnostic.range.start.value,
            line=location.line,
            column=location.column,
            code=diagnostic.code,
            expected=diagnostic.hint,
            diagnostic=diagnostic,
        )
