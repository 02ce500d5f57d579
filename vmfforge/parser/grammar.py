"""VMF grammar routines that emit CST events.

    source_file := block* EOF
    block       := NAME '{' (key_value | block)* '}'
    key_value   := STRING STRING

Parsing is all-or-nothing, so every loop stops at the first diagnostic
instead of recovering.
"""

from vmfforge.diagnostics import Diagnostic
from vmfforge.diagnostics.codes import (
    PARSER_EXPECTED_TOKEN,
    PARSER_EXPECTED_VALUE,
    PARSER_UNEXPECTED_TOKEN,
)
from vmfforge.lexer import TokenKind
from vmfforge.parser.marker import CompletedMarker, Marker
from vmfforge.parser.parse_lists import ParseNodeList
from vmfforge.parser.parser import Parser
from vmfforge.syntax import VmfSyntaxKind

_TOKEN_DESCRIPTIONS: dict[TokenKind, str] = {
    TokenKind.EOF: "end of input",
    TokenKind.NAME: "block name",
    TokenKind.STRING: "quoted string",
    TokenKind.LBRACE: "'{'",
    TokenKind.RBRACE: "'}'",
    TokenKind.SKIPPED: "invalid character",
}


def parse_source_file(parser: Parser) -> CompletedMarker:
    root = parser.start()
    ParseNodeList(
        is_at_list_end=lambda current: current.at(TokenKind.EOF),
        parse_element=_parse_top_level_element,
        on_missing=lambda current: current.error(_unexpected_token(current, "a block name")),
    ).parse_list(parser)
    return root.complete(parser, VmfSyntaxKind.SOURCE_FILE)


def parse_block(parser: Parser) -> CompletedMarker:
    """Parse one block and everything nested in it.

    Nesting is tracked on an explicit stack rather than by recursion, so
    `max_depth` is the only bound on how deep blocks may go.
    """
    open_blocks: list[tuple[Marker, str]] = []
    _open_block(parser, open_blocks)
    while True:
        if parser.has_errors or parser.eat(TokenKind.RBRACE):
            marker, _ = open_blocks.pop()
            parser.leave_block()
            completed = marker.complete(parser, VmfSyntaxKind.BLOCK)
            if not open_blocks:
                return completed
            continue

        name = open_blocks[-1][1]
        match parser.current:
            case TokenKind.STRING:
                parse_key_value(parser)
            case TokenKind.NAME:
                _open_block(parser, open_blocks)
            case TokenKind.EOF:
                parser.error(_expected_token(parser, f"'}}' to close block {name!r}"))
            case _:
                parser.error(
                    _unexpected_token(parser, f"a key-value pair, a nested block or '}}' in block {name!r}")
                )


def _open_block(parser: Parser, open_blocks: list[tuple[Marker, str]]) -> None:
    """Push a new block and consume its header, reporting a malformed one."""
    parser.enter_block()
    marker = parser.start()
    name = parser.current_text
    open_blocks.append((marker, name))

    if not parser.eat(TokenKind.NAME):
        parser.error(_expected_token(parser, "a block name"))
    elif not parser.eat(TokenKind.LBRACE):
        parser.error(_expected_token(parser, f"'{{' after block name {name!r}"))


def parse_key_value(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    parser.bump()
    if not parser.eat(TokenKind.STRING):
        parser.error(_expected_value(parser))
    return marker.complete(parser, VmfSyntaxKind.KEY_VALUE)


def _parse_top_level_element(parser: Parser) -> bool:
    if not parser.at(TokenKind.NAME):
        return False
    parse_block(parser)
    return True


def _parse_body_element(parser: Parser) -> bool:
    match parser.current:
        case TokenKind.STRING:
            parse_key_value(parser)
        case TokenKind.NAME:
            parse_block(parser)
        case _:
            return False
    return True


def describe_token(kind: TokenKind) -> str:
    return _TOKEN_DESCRIPTIONS.get(kind, kind.name)


def _expected_token(parser: Parser, expected: str) -> Diagnostic:
    return PARSER_EXPECTED_TOKEN.at(
        parser.current_range,
        message=f"Expected {expected}, found {describe_token(parser.current)}",
        hint=f"expected {expected}",
    )


def _expected_value(parser: Parser) -> Diagnostic:
    return PARSER_EXPECTED_VALUE.at(
        parser.current_range,
        message=f"{PARSER_EXPECTED_VALUE.message}, found {describe_token(parser.current)}",
    )


def _unexpected_token(parser: Parser, expected: str) -> Diagnostic:
    return PARSER_UNEXPECTED_TOKEN.at(
        parser.current_range,
        message=f"Unexpected {describe_token(parser.current)}; expected {expected}",
        hint=f"expected {expected}",
    )
