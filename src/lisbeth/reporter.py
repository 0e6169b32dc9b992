"""Rendering of annotated errors against the input they were found in.

A report looks like this:

    Error: Expected number
     --> numbers.txt:1:7
         |
       1 |                               42 31 abc 101
         |                                     ^^^
         | Expected number, found `abc`.-------'
         |

Every annotation message is written in a left column as wide as the longest
message, and joined to its marker by a connector closed with `'`. When a line
carries several annotations, connectors close left to right and keep a `|`
for each annotation that is still open on their right. Overlapping markers
are drawn in column order, a later one overwriting an earlier one; a connector
keeps no bar for an annotation starting in its own column.

Message widths and columns count characters, so wide or combining characters
in the source or in messages shift the alignment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import AnnotatedError
from .spans import Position, Span
from .text import TextSlice


_GUTTER = "     |"


@dataclass(frozen=True, slots=True)
class AnnotationMark:
    """What the renderer needs of one annotation."""

    column: int
    length: int
    text: str

    def marker(self) -> str:
        if self.length > 1:
            return "^" * self.length
        return "|"


@dataclass(frozen=True, slots=True)
class FormattedReport:
    """Everything needed to print an error, with `first_line` 0-based."""

    position: Position
    message: str
    name: str | None
    first_line: int
    snippet: str
    marks: tuple[tuple[AnnotationMark, ...], ...]

    def __post_init__(self) -> None:
        lines = self.snippet.count("\n") + 1
        if lines != len(self.marks):
            raise ValueError(f"snippet has {lines} line(s) but {len(self.marks)} annotation row(s)")

    def __str__(self) -> str:
        return self.render()

    @property
    def spacing(self) -> int:
        return max((len(m.text) for row in self.marks for m in row), default=0)

    def render(self) -> str:
        location = self.position.format()
        if self.name is not None:
            location = f"{self.name}:{location}"

        out = [f"Error: {self.message}", f" --> {location}", _GUTTER]
        spacing = self.spacing
        for idx, (line, row) in enumerate(zip(self.snippet.split("\n"), self.marks)):
            out.append(f" {self.first_line + idx + 1:>3} | {' ' * spacing} {line}")
            out.append(_underline(row, spacing))
            out.extend(_connectors(row, spacing))
            out.append(_GUTTER)
        return "".join(line + "\n" for line in out)


def _underline(row: tuple[AnnotationMark, ...], spacing: int) -> str:
    if not row:
        return _GUTTER
    cells: list[str] = []
    for mark in row:
        marker = mark.marker()
        stop = mark.column + len(marker)
        cells.extend(" " * (stop - len(cells)))
        cells[mark.column:stop] = marker
    return f"{_GUTTER} {' ' * spacing} " + "".join(cells)


def _connectors(row: tuple[AnnotationMark, ...], spacing: int) -> list[str]:
    lines = []
    for idx, mark in enumerate(row):
        cells: list[str] = []
        for later in row[idx + 1:]:
            if later.column <= mark.column:
                continue
            cells.extend(" " * (later.column + 1 - len(cells)))
            cells[later.column] = "|"
        dashes = "-" * (spacing - len(mark.text) + mark.column + 1)
        lines.append(f"{_GUTTER} {mark.text}{dashes}'" + "".join(cells[mark.column + 1:]))
    return lines


class SourceReporter:
    """Holds the whole input and renders errors found in it.

    Create it before parsing, lex and parse `reporter.text()`, and hand any
    `AnnotatedError` back to `render`. The reporter must outlive every error
    it is asked to render since the snippet is read from its content.
    """

    def __init__(
        self,
        content: str,
        name: str | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._name = name
        self._content = content
        self._raw = content.encode("utf-8")
        self._span = Span.of_text(content)
        self._log = logger or logging.getLogger("lisbeth.reporter")

    @classmethod
    def with_name(cls, name: str, content: str) -> SourceReporter:
        return cls(content, name)

    @classmethod
    def without_name(cls, content: str) -> SourceReporter:
        """For inputs that are not files, such as stdin."""
        return cls(content)

    @classmethod
    def from_path(cls, path: str | Path) -> SourceReporter:
        """Read `path` as UTF-8; OSError propagates unchanged."""
        p = Path(path)
        return cls(p.read_text(encoding="utf-8"), str(path))

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def content(self) -> str:
        return self._content

    @property
    def span(self) -> Span:
        return self._span

    def text(self) -> TextSlice:
        # self._span was built from self._content.
        return TextSlice.assemble(self._content, self._span)

    def snippet_for(self, start: Position, end: Position) -> str:
        """Smallest run of whole lines containing both positions."""
        begin = self._raw.rfind(b"\n", 0, start.offset) + 1
        lines = self._raw[begin:].decode("utf-8").split("\n")
        return "\n".join(lines[: end.line - start.line + 1])

    def render(self, error: AnnotatedError) -> FormattedReport:
        start, end = error.bounds()
        snippet = self.snippet_for(start, end)
        self._log.debug("rendering %r on lines %d-%d", error.message, start.line + 1, end.line + 1)

        marks = tuple(
            tuple(AnnotationMark(column=a.column, length=a.width, text=a.text) for a in row)
            for row in error.annotations_by_line()
        )
        return FormattedReport(
            position=error.span.start,
            message=error.message,
            name=self._name,
            first_line=start.line,
            snippet=snippet,
            marks=marks,
        )

    def format_error(self, error: AnnotatedError) -> str:
        return self.render(error).render()
