from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from .spans import BEGINNING, Span


def _utf8_len(ch: str) -> int:
    code = ord(ch)
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


@dataclass(frozen=True, slots=True)
class TextSlice:
    """A view on part of the input text together with the span it occupies.

    Every slice derived from an input shares that input's buffer; `start` and
    `end` are character indexes into it and `content` is only materialized on
    access. Split indexes are byte offsets into the UTF-8 encoding of the
    content, the same unit as `Position.offset`.
    """

    span: Span
    source: str = field(repr=False)
    start: int
    end: int

    @classmethod
    def from_text(cls, content: str) -> TextSlice:
        return cls(span=Span.of_text(content), source=content, start=0, end=len(content))

    @classmethod
    def assemble(cls, content: str, span: Span) -> TextSlice:
        """Rebuild the slice of a whole input from its text and its span.

        `span` must have been computed from `content` (as `Span.of_text` does).
        """
        assert span.start == BEGINNING, "assembled span must start at the beginning of the input"
        assert span.end.offset == len(content.encode("utf-8")), "assembled span must cover the whole input"
        return cls(span=span, source=content, start=0, end=len(content))

    @property
    def content(self) -> str:
        return self.source[self.start:self.end]

    def __len__(self) -> int:
        return self.span.end.offset - self.span.start.offset

    def is_empty(self) -> bool:
        return self.start == self.end

    def first_char(self) -> str | None:
        return self.source[self.start] if self.start < self.end else None

    def _split_at_index(self, i: int) -> tuple[TextSlice, TextSlice]:
        mid = self.span.start.advance(self.source[self.start:i])
        left, right = self.span.split_at(mid)
        return (
            TextSlice(span=left, source=self.source, start=self.start, end=i),
            TextSlice(span=right, source=self.source, start=i, end=self.end),
        )

    def split_at(self, n: int) -> tuple[TextSlice, TextSlice]:
        """Split after the first `n` bytes.

        Only the head is scanned. Raises ValueError when `n` is out of bounds
        or does not fall on a character boundary.
        """
        if not 0 <= n <= len(self):
            raise ValueError(f"split index {n} out of bounds for a slice of {len(self)} bytes")
        i, count = self.start, 0
        while count < n:
            count += _utf8_len(self.source[i])
            i += 1
        if count != n:
            raise ValueError(f"split index {n} is not on a character boundary")
        return self._split_at_index(i)

    def split_first(self) -> tuple[TextSlice, TextSlice]:
        """Split after the first character (an empty head on empty input)."""
        return self._split_at_index(min(self.start + 1, self.end))

    def take_while(self, predicate: Callable[[str], bool]) -> tuple[TextSlice, TextSlice]:
        """Split off the longest prefix whose characters all satisfy `predicate`."""
        i = self.start
        while i < self.end and predicate(self.source[i]):
            i += 1
        return self._split_at_index(i)
