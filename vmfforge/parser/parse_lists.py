"""Shared loop for brace-delimited and top-level element lists."""

from collections.abc import Callable
from dataclasses import dataclass

from vmfforge.lexer import TokenKind
from vmfforge.parser.parser import Parser
from vmfforge.text import TextSize


@dataclass(frozen=True, slots=True)
class ParseNodeList:
    """Parses elements until `is_at_list_end`, EOF or the first error.

    `parse_element` returns False when the current token cannot start an
    element; `on_missing` then reports it and the loop stops. VMF has no list
    node, so elements land directly in the enclosing node.
    """

    is_at_list_end: Callable[[Parser], bool]
    parse_element: Callable[[Parser], bool]
    on_missing: Callable[[Parser], None]

    def parse_list(self, parser: Parser) -> int:
        count = 0
        last_position: TextSize | None = None

        while not parser.at(TokenKind.EOF) and not self.is_at_list_end(parser):
            if parser.position == last_position:
                raise RuntimeError(f"Parser stalled on {parser.current.name} at {parser.current_range}")
            last_position = parser.position

            if not self.parse_element(parser):
                self.on_missing(parser)
                break
            count += 1
            if parser.has_errors:
                break

        return count
