"""Parser modes and configuration options."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from vmfforge.lexer import NameRule

DEFAULT_MAX_DEPTH: Final[int] = 128


class ParseMode(StrEnum):
    """Top-level parser behavior profile."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Feature flags controlling grammar compatibility and resource limits."""

    mode: ParseMode = ParseMode.STRICT
    name_rule: NameRule = NameRule.STRICT
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError("max_depth must be >= 1")

    @staticmethod
    def for_mode(mode: ParseMode, *, max_depth: int = DEFAULT_MAX_DEPTH) -> "ParserOptions":
        if mode == ParseMode.PERMISSIVE:
            return ParserOptions(mode=mode, name_rule=NameRule.LOOSE, max_depth=max_depth)

        return ParserOptions(mode=mode, name_rule=NameRule.STRICT, max_depth=max_depth)
