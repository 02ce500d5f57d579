"""Library entrypoints from VMF text to `Document`."""

from __future__ import annotations

import logging
import os

from vmfforge.model import Document
from vmfforge.parser import ParseMode, ParserOptions, parse_result

logger = logging.getLogger(__name__)


def parse(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> Document:
    """Parse VMF text into a `Document`.

    Raises `VmfSyntaxError` (or its `DepthLimitExceeded` subclass) for input
    that does not match the grammar; no partial document is ever returned.
    """
    result = parse_result(text, options=options, mode=mode)
    if result.has_errors:
        logger.debug("Rejecting input with %d diagnostics", len(result.diagnostics))
    document = result.document()
    logger.debug("Built document with %d top-level blocks", len(document.blocks))
    return document


def parse_file(
    path: str | os.PathLike[str],
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    encoding: str = "utf-8",
) -> Document:
    """Read a whole file and parse it. The buffer is fully loaded first."""
    with open(path, encoding=encoding, newline="") as handle:
        text = handle.read()
    logger.debug("Read %d characters from %s", len(text), path)
    return parse(text, options=options, mode=mode)
