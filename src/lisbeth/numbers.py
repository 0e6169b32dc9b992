"""A small grammar of whitespace-separated decimal numbers.

Words are reported and skipped so that a single pass shows every one of
them; any other character stops the pass:

    Error: Expected number
     --> numbers.txt:1:7
         |
       1 |                               42 31 abc 101
         |                                     ^^^
         | Expected number, found `abc`.-------'
         |
"""

from __future__ import annotations

import string

from .errors import AnnotatedError
from .lexer import LexFailure, Lexed, Terminal, Token, tokenize
from .reporter import SourceReporter
from .text import TextSlice


class Number(Terminal, description="a number"):
    def __init__(self, value: int) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Number({self.value})"

    @classmethod
    def lex(cls, text: TextSlice) -> Lexed[Number] | None:
        digits, tail = text.take_while(lambda c: c in string.digits)
        if digits.is_empty():
            return None
        return Lexed(cls(int(digits.content)), digits.span, tail)

    def specific_description(self) -> str:
        return f"`{self.value}`"


class Blank(Terminal, description="whitespace"):
    @classmethod
    def lex(cls, text: TextSlice) -> Lexed[Blank] | None:
        blank, tail = text.take_while(str.isspace)
        if blank.is_empty():
            return None
        return Lexed(cls(), blank.span, tail)


class Word(Terminal, description="a word"):
    """Never produced: a word where a number is expected is an error."""

    @classmethod
    def lex(cls, text: TextSlice) -> LexFailure | None:
        word, tail = text.take_while(str.isalpha)
        if word.is_empty():
            return None
        error = AnnotatedError(word.span, "Expected number").with_annotation(
            word.span, f"Expected number, found `{word.content}`."
        )
        return LexFailure(errors=(error,), tail=tail)


class NumberToken(Token, terminals=(Number, Blank, Word)):
    pass


def parse_numbers(reporter: SourceReporter) -> list[int]:
    """Return the numbers of the reporter's input, raising LexingFailed on errors."""
    tokens = tokenize(NumberToken, reporter.text())
    return [tok.value.value for tok in tokens if isinstance(tok.value, Number)]
