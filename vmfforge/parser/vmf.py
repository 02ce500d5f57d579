"""High-level parse entrypoints for VMF source text."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from vmfforge.diagnostics import collect_diagnostics
from vmfforge.lexer import Lexer
from vmfforge.parser.grammar import parse_source_file
from vmfforge.parser.options import ParseMode, ParserOptions
from vmfforge.parser.parser import Parser
from vmfforge.parser.token_source import TokenSource
from vmfforge.parser.tree_sink import ParsedGreenTree, build_green_tree

if TYPE_CHECKING:
    from vmfforge.pipeline import VmfParseResult

logger = logging.getLogger(__name__)


def resolve_options(
    options: ParserOptions | None,
    mode: ParseMode | None,
) -> ParserOptions:
    if mode is not None and options is not None:
        raise ValueError("Pass either options or mode, not both")

    if options is not None:
        return options

    if mode is not None:
        return ParserOptions.for_mode(mode)

    return ParserOptions()


def parse_cst(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> ParsedGreenTree:
    """Parse text into a lossless green tree plus diagnostics.

    Syntax errors are reported as diagnostics; only an exceeded nesting
    limit raises (`DepthLimitExceeded`).
    """
    resolved_options = resolve_options(options=options, mode=mode)

    lexer = Lexer(text, name_rule=resolved_options.name_rule)
    source = TokenSource(lexer)
    parser = Parser(source, options=resolved_options)

    parse_source_file(parser)
    events, parser_diagnostics = parser.finish()
    trivia, lexer_diagnostics = source.finish()
    diagnostics = collect_diagnostics(lexer_diagnostics, parser_diagnostics)

    logger.debug(
        "Parsed %d characters into %d events (%d diagnostics, mode=%s)",
        len(text),
        len(events),
        len(diagnostics),
        resolved_options.mode,
    )

    return build_green_tree(
        text=text,
        events=events,
        trivia=trivia,
        diagnostics=diagnostics,
    )


def parse_result(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> VmfParseResult:
    from vmfforge.pipeline import VmfParseResult

    resolved_options = resolve_options(options=options, mode=mode)
    parsed = parse_cst(text, options=resolved_options)
    return VmfParseResult(
        source_text=text,
        parsed=parsed,
        options=resolved_options,
    )
