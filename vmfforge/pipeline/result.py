"""Parse carrier for parse-once/consume-many workflows."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from vmfforge.cst import from_green
from vmfforge.diagnostics import first_error, has_errors
from vmfforge.errors import VmfSyntaxError
from vmfforge.parser.options import ParserOptions
from vmfforge.parser.tree_sink import ParsedGreenTree

if TYPE_CHECKING:
    from vmfforge.cst import GreenNode, SyntaxNode
    from vmfforge.diagnostics import Diagnostic
    from vmfforge.model import Document


@dataclass(slots=True)
class VmfParseResult:
    """VMF parse result with lazily built syntax tree and document."""

    source_text: str
    parsed: ParsedGreenTree
    options: ParserOptions
    _syntax_root: SyntaxNode | None = field(default=None, init=False, repr=False)
    _document: Document | None = field(default=None, init=False, repr=False)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.parsed.diagnostics

    @property
    def has_errors(self) -> bool:
        return has_errors(self.parsed.diagnostics)

    def green_root(self) -> GreenNode:
        return self.parsed.root

    def syntax_root(self) -> SyntaxNode:
        if self._syntax_root is None:
            self._syntax_root = from_green(self.parsed.root, self.source_text)
        return self._syntax_root

    def raise_for_errors(self) -> None:
        """Raise `VmfSyntaxError` for the earliest error diagnostic, if any."""
        diagnostic = first_error(self.parsed.diagnostics)
        if diagnostic is not None:
            raise VmfSyntaxError.from_diagnostic(diagnostic, self.source_text)

    def document(self) -> Document:
        """The typed document. Parsing is all-or-nothing: any error raises."""
        if self._document is None:
            self.raise_for_errors()
            from vmfforge.model.lower import lower_syntax_tree

            self._document = lower_syntax_tree(self.syntax_root(), name_rule=self.options.name_rule)
        return self._document
