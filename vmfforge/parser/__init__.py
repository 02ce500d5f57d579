"""Parser infrastructure: token source, event-recording parser and tree sink."""

from vmfforge.parser.event import Event, FinishEvent, StartEvent, TokenEvent, replay_events
from vmfforge.parser.grammar import parse_block, parse_key_value, parse_source_file
from vmfforge.parser.marker import CompletedMarker, Marker
from vmfforge.parser.options import DEFAULT_MAX_DEPTH, ParseMode, ParserOptions
from vmfforge.parser.parse_lists import ParseNodeList
from vmfforge.parser.parser import Parser
from vmfforge.parser.token_source import TokenSource
from vmfforge.parser.tree_sink import LosslessTreeSink, ParsedGreenTree, build_green_tree
from vmfforge.parser.vmf import parse_cst, parse_result, resolve_options

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "CompletedMarker",
    "Event",
    "FinishEvent",
    "LosslessTreeSink",
    "Marker",
    "ParseMode",
    "ParseNodeList",
    "ParsedGreenTree",
    "Parser",
    "ParserOptions",
    "StartEvent",
    "TokenEvent",
    "TokenSource",
    "build_green_tree",
    "parse_block",
    "parse_cst",
    "parse_key_value",
    "parse_result",
    "parse_source_file",
    "replay_events",
    "resolve_options",
]
