from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """A point in the source text.

    Line and column are 0-based; the offset is a byte offset from the start
    of the input. Two positions are ordered by offset only, which is only
    meaningful when both come from the same input.
    """

    line: int = 0
    column: int = 0
    offset: int = 0

    def advance(self, text: str) -> Position:
        """Return the position reached after consuming `text` from here."""
        line, column = self.line, self.column
        for ch in text:
            if ch == "\n":
                line += 1
                column = 0
            else:
                column += 1
        return Position(line=line, column=column, offset=self.offset + len(text.encode("utf-8")))

    def __lt__(self, other: Position) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.offset < other.offset

    def __le__(self, other: Position) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.offset <= other.offset

    def __gt__(self, other: Position) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.offset > other.offset

    def __ge__(self, other: Position) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.offset >= other.offset

    def format(self) -> str:
        return f"{self.line + 1}:{self.column + 1}"


BEGINNING = Position()


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open span [start, end) in a single input."""

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.end.offset < self.start.offset:
            raise ValueError(
                f"span end (offset {self.end.offset}) precedes its start (offset {self.start.offset})"
            )

    @classmethod
    def of_text(cls, text: str) -> Span:
        return cls(start=BEGINNING, end=BEGINNING.advance(text))

    def split_at(self, mid: Position) -> tuple[Span, Span]:
        return Span(self.start, mid), Span(mid, self.end)

    def next_char(self) -> Span:
        """One-column span right after the end, e.g. for "unexpected end of input"."""
        end = Position(line=self.end.line, column=self.end.column + 1, offset=self.end.offset + 1)
        return Span(self.end, end)

    def join(self, other: Span) -> Span:
        return Span(min(self.start, other.start), max(self.end, other.end))

    def is_empty(self) -> bool:
        return self.start.offset == self.end.offset

    def format(self) -> str:
        return self.start.format()


def span_for_whole_text(text: str) -> Span:
    return Span.of_text(text)
