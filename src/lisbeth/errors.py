from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from .spans import Position, Span

if TYPE_CHECKING:
    from .lexer import Token


@dataclass(frozen=True, slots=True)
class Annotation:
    """A short message attached to a span of a single source line."""

    span: Span
    text: str

    def __post_init__(self) -> None:
        if self.span.start.line != self.span.end.line:
            raise ValueError(
                f"annotation {self.text!r} spans lines {self.span.start.line + 1} "
                f"to {self.span.end.line + 1}; multi-line annotations are not supported"
            )

    @property
    def line(self) -> int:
        return self.span.start.line

    @property
    def column(self) -> int:
        return self.span.start.column

    @property
    def width(self) -> int:
        return self.span.end.column - self.span.start.column


@dataclass(slots=True)
class AnnotatedError(Exception):
    """An error report with annotations.

    Created at the precise span where the error occurs with a message
    explaining it, then enriched with annotations:

        error = AnnotatedError(are.span, "Conjugation error")
        error = error.with_annotation(cat.span, "`cat` is singular,")
        error = error.with_annotation(are.span, "but `are` is used only for plural subject")

    Annotations keep the order in which they were added; that order says
    nothing about where they are in the text.
    """

    span: Span
    message: str
    annotations: tuple[Annotation, ...] = ()

    def __str__(self) -> str:
        return f"{self.span.format()}: {self.message}"

    def with_annotation(self, span: Span, text: str) -> AnnotatedError:
        return replace(self, annotations=self.annotations + (Annotation(span, text),))

    def bounds(self) -> tuple[Position, Position]:
        """Smallest start and largest end over the primary span and all annotations."""
        spans = [self.span] + [a.span for a in self.annotations]
        return min(s.start for s in spans), max(s.end for s in spans)

    def annotations_by_line(self) -> tuple[tuple[Annotation, ...], ...]:
        """Annotation matrix: one row per line of `bounds()`, sorted by column."""
        start, end = self.bounds()
        rows: list[list[Annotation]] = [[] for _ in range(end.line - start.line + 1)]
        for ann in self.annotations:
            rows[ann.line - start.line].append(ann)
        return tuple(tuple(sorted(row, key=lambda a: a.column)) for row in rows)

    build_layout = annotations_by_line


@dataclass(slots=True)
class LexingFailed(Exception):
    """Raised when a tokenization pass produced at least one error.

    `fatal` is True when scanning stopped before the end of the input.
    """

    errors: tuple[AnnotatedError, ...]
    tokens: tuple[Token, ...] = ()
    fatal: bool = False

    def __str__(self) -> str:
        head = "; ".join(str(e) for e in self.errors[:3])
        more = f" (+{len(self.errors) - 3} more)" if len(self.errors) > 3 else ""
        return f"{len(self.errors)} lexing error(s): {head}{more}"
