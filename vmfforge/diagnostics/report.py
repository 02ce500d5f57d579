"""Helpers over diagnostic collections."""

from collections.abc import Iterable

from vmfforge.diagnostics.diagnostic import Diagnostic


def collect_diagnostics(*groups: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Merge diagnostic groups ordered by start offset.

    The sort is stable, so on equal offsets earlier groups win; callers pass
    lexer diagnostics before parser ones.
    """
    return sorted((d for group in groups for d in group), key=lambda d: d.range.start)


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.is_error for d in diagnostics)


def first_error(diagnostics: Iterable[Diagnostic]) -> Diagnostic | None:
    return next((d for d in diagnostics if d.is_error), None)
