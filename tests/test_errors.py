from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lisbeth import AnnotatedError, Annotation, TextSlice


def _words(src: str) -> tuple[TextSlice, TextSlice, TextSlice]:
    text = TextSlice.from_text(src)
    first, rest = text.take_while(str.isalpha)
    middle, rest = rest.split_first()
    last, _ = rest.take_while(lambda c: True)
    return first, middle, last


def test_bounds_without_annotations_is_the_primary_span() -> None:
    _, comma, _ = _words("hello,world")
    error = AnnotatedError(comma.span, "oops")
    assert error.bounds() == (comma.span.start, comma.span.end)


def test_bounds_covers_annotations() -> None:
    first, comma, last = _words("hello,world")
    error = AnnotatedError(comma.span, "oops").with_annotation(last.span, "b").with_annotation(first.span, "a")
    start, end = error.bounds()
    assert start == first.span.start
    assert end == last.span.end


def test_with_annotation_keeps_call_order_and_does_not_mutate() -> None:
    first, comma, last = _words("hello,world")
    base = AnnotatedError(comma.span, "oops")
    error = base.with_annotation(last.span, "second").with_annotation(first.span, "first")
    assert base.annotations == ()
    assert [a.text for a in error.annotations] == ["second", "first"]


def test_matrix_rows_sorted_by_column() -> None:
    first, comma, last = _words("hello,world")
    error = (
        AnnotatedError(comma.span, "oops")
        .with_annotation(last.span, "c")
        .with_annotation(first.span, "a")
        .with_annotation(comma.span, "b")
    )
    (row,) = error.annotations_by_line()
    assert [a.text for a in row] == ["a", "b", "c"]


def test_matrix_has_one_row_per_line() -> None:
    text = TextSlice.from_text("Hello\n\nWorld")
    hello, rest = text.split_at(5)
    _, world = rest.split_at(2)
    error = AnnotatedError(hello.span, "two lines").with_annotation(world.span, "w").with_annotation(hello.span, "h")
    rows = error.build_layout()
    assert [[a.text for a in row] for row in rows] == [["h"], [], ["w"]]


def test_multi_line_annotation_is_rejected() -> None:
    text = TextSlice.from_text("Hello\nWorld")
    with pytest.raises(ValueError, match="multi-line"):
        Annotation(text.span, "everything")
    with pytest.raises(ValueError):
        AnnotatedError(text.span, "oops").with_annotation(text.span, "everything")


def test_error_can_be_raised_and_str_is_located() -> None:
    _, comma, _ = _words("hello,world")
    with pytest.raises(AnnotatedError) as e:
        raise AnnotatedError(comma.span, "unexpected comma")
    assert str(e.value) == "1:6: unexpected comma"


@given(st.text(min_size=1, max_size=30), st.data())
def test_bounds_always_include_primary_span(content: str, data: st.DataObject) -> None:
    text = TextSlice.from_text(content)
    i = data.draw(st.integers(min_value=0, max_value=len(content)))
    j = data.draw(st.integers(min_value=i, max_value=len(content)))
    n_i = len(content[:i].encode("utf-8"))
    n_j = len(content[:j].encode("utf-8"))
    primary = text.split_at(n_j)[0].split_at(n_i)[1]
    error = AnnotatedError(primary.span, "primary")
    start, end = error.bounds()
    assert start <= primary.span.start
    assert end >= primary.span.end
