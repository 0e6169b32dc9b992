from __future__ import annotations

import time
from pathlib import Path

import pytest

from lisbeth import LexingFailed, SourceReporter
from lisbeth.cli import main
from lisbeth.numbers import Number, NumberToken, parse_numbers


HANDBOOK_REPORT = (
    "Error: Expected number\n"
    " --> numbers.ssn:1:7\n"
    "     |\n"
    "   1 |                               42 31 abc 101\n"
    "     |                                     ^^^\n"
    "     | Expected number, found `abc`.-------'\n"
    "     |\n"
)


def test_parse_numbers() -> None:
    reporter = SourceReporter.without_name("42 101 13\n7")
    assert parse_numbers(reporter) == [42, 101, 13, 7]


def test_word_is_reported() -> None:
    reporter = SourceReporter.with_name("numbers.ssn", "42 31 abc 101")
    with pytest.raises(LexingFailed) as e:
        parse_numbers(reporter)
    (error,) = e.value.errors
    assert reporter.format_error(error) == HANDBOOK_REPORT


def test_every_word_is_reported() -> None:
    reporter = SourceReporter.without_name("1 two 3 four")
    with pytest.raises(LexingFailed) as e:
        parse_numbers(reporter)
    assert [err.annotations[0].text for err in e.value.errors] == [
        "Expected number, found `two`.",
        "Expected number, found `four`.",
    ]
    assert not e.value.fatal


def test_punctuation_stops_the_pass() -> None:
    reporter = SourceReporter.without_name("1, 2 x")
    with pytest.raises(LexingFailed) as e:
        parse_numbers(reporter)
    assert e.value.fatal
    assert [err.message for err in e.value.errors] == ["Unknown start of token"]


def test_number_description() -> None:
    assert Number.description == "a number"
    assert Number(12).specific_description() == "`12`"
    assert NumberToken.general_descriptions() == ("a number", "whitespace", "a word")


def test_cli_prints_numbers(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = tmp_path / "ok.txt"
    p.write_text("1 2 3\n", encoding="utf-8")
    assert main([str(p)]) == 0
    assert capsys.readouterr().out == "1 2 3\n"


def test_cli_reports_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = tmp_path / "bad.txt"
    p.write_text("42 31 abc 101", encoding="utf-8")
    assert main([str(p)]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: Expected number\n")
    assert f" --> {p}:1:7\n" in err


def test_cli_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        main([str(tmp_path / "missing.txt")])


def test_lexing_a_large_file_stays_linear() -> None:
    start = time.perf_counter()
    numbers = parse_numbers(SourceReporter.without_name("12 " * 100_000))
    elapsed = time.perf_counter() - start
    assert numbers == [12] * 100_000
    assert elapsed < 20
