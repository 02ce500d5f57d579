"""Character offsets, ranges and line/column lookup over VMF source text.

Offsets are Python string indices (code points), so a range slices the
source directly.
"""

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class TextSize:
    """A non-negative character offset or length."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"TextSize cannot be negative, got {self.value}")

    @staticmethod
    def from_int(value: int) -> "TextSize":
        return TextSize(value)

    def __index__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"TextSize({self.value})"


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """Half-open `[start, end)` span of source text."""

    _start: int
    _end: int

    def __post_init__(self) -> None:
        if not 0 <= self._start <= self._end:
            raise ValueError(f"Invalid text range [{self._start}, {self._end})")

    @staticmethod
    def new(start: TextSize, end: TextSize) -> "TextRange":
        return TextRange(start.value, end.value)

    @staticmethod
    def empty(offset: TextSize) -> "TextRange":
        return TextRange(offset.value, offset.value)

    @property
    def start(self) -> TextSize:
        return TextSize(self._start)

    @property
    def end(self) -> TextSize:
        return TextSize(self._end)

    def len(self) -> TextSize:
        return TextSize(self._end - self._start)

    def is_empty(self) -> bool:
        return self._start == self._end

    def as_tuple(self) -> tuple[int, int]:
        return (self._start, self._end)

    def __repr__(self) -> str:
        return f"TextRange({self._start}, {self._end})"


def slice_text_range(source: str, text_range: TextRange) -> str:
    start, end = text_range.as_tuple()
    return source[start:end]


@dataclass(frozen=True, slots=True)
class LineColumn:
    """1-based line and column of an offset."""

    line: int
    column: int


class LineIndex:
    """Maps character offsets to 1-based line/column pairs.

    `\\r\\n`, `\\n` and a lone `\\r` all count as one line break, matching the lexer.
    """

    def __init__(self, source: str) -> None:
        starts = [0]
        index = 0
        length = len(source)
        while index < length:
            ch = source[index]
            if ch == "\r":
                if index + 1 < length and source[index + 1] == "\n":
                    index += 1
                starts.append(index + 1)
            elif ch == "\n":
                starts.append(index + 1)
            index += 1
        self._line_starts = starts
        self._length = length

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_column(self, offset: TextSize | int) -> LineColumn:
        value = offset.value if isinstance(offset, TextSize) else offset
        if value < 0 or value > self._length:
            raise ValueError(f"Offset {value} is outside the source text")
        line = bisect_right(self._line_starts, value) - 1
        return LineColumn(line=line + 1, column=value - self._line_starts[line] + 1)
