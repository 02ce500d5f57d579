"""Format runner over a shared VMF parse result."""

from __future__ import annotations

from vmfforge.format.serializer import FormatOptions, serialize
from vmfforge.parser import ParseMode, ParserOptions, parse_result
from vmfforge.pipeline.result import VmfParseResult
from vmfforge.pipeline.results import FormatRunResult


def run_format(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    parse: VmfParseResult | None = None,
    format_options: FormatOptions | None = None,
) -> FormatRunResult:
    """Normalize VMF text from a single parse lifecycle.

    Text with syntax errors is returned unchanged alongside its diagnostics.
    """
    resolved_parse = _resolve_parse(text, options=options, mode=mode, parse=parse)
    diagnostics = list(resolved_parse.diagnostics)

    if resolved_parse.has_errors:
        formatted_text = resolved_parse.source_text
    else:
        formatted_text = serialize(resolved_parse.document(), format_options)

    return FormatRunResult(
        parse=resolved_parse,
        formatted_text=formatted_text,
        diagnostics=diagnostics,
        changed=formatted_text != resolved_parse.source_text,
    )


def _resolve_parse(
    text: str,
    *,
    options: ParserOptions | None,
    mode: ParseMode | None,
    parse: VmfParseResult | None,
) -> VmfParseResult:
    if parse is not None:
        if options is not None or mode is not None:
            raise ValueError("Pass either parse or options/mode, not both")
        return parse
    return parse_result(text, options=options, mode=mode)
