"""Terminals, tokens and the tokenization loop.

Each terminal of a grammar is a `Terminal` subclass that knows how to
recognize itself at the start of a `TextSlice`. A `Token` subclass lists the
terminals of the grammar in the order they must be tried:

    class Dot(Terminal, description="a dot"):
        @classmethod
        def lex(cls, text):
            if text.first_char() != ".":
                return None
            head, tail = text.split_first()
            return Lexed(cls(), head.span, tail)

    class Punct(Token, terminals=(Dot, Dash)):
        pass

    tokens = tokenize(Punct, reporter.text())

A terminal that recognizes its start but finds malformed content returns a
`LexFailure`. With a tail the lexer records the errors and resumes there;
without one scanning stops.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from .errors import AnnotatedError, LexingFailed
from .spans import Span
from .text import TextSlice


T = TypeVar("T")
TokenT = TypeVar("TokenT", bound="Token")


@dataclass(frozen=True, slots=True)
class Lexed(Generic[T]):
    """A successful match: the value, where it is, and the rest of the input."""

    value: T
    span: Span
    tail: TextSlice


@dataclass(frozen=True, slots=True)
class LexFailure:
    errors: tuple[AnnotatedError, ...]
    tail: TextSlice | None = None

    @property
    def recoverable(self) -> bool:
        return self.tail is not None


class Terminal(ABC):
    """Base class for the terminals of a grammar.

    Examples:
        class Number(Terminal, description="a number"): ...
        class Ident(Terminal): ...  # description defaults to "Ident"

    `description` describes the terminal in general ("a char literal") while
    `specific_description()` describes one value ("'a'").
    """

    description: ClassVar[str]

    def __init_subclass__(cls, description: str | None = None, **kwargs: Any) -> None:
        if description is not None:
            cls.description = description
        elif "description" not in cls.__dict__:
            cls.description = cls.__name__
        super().__init_subclass__(**kwargs)

    @classmethod
    @abstractmethod
    def lex(cls, text: TextSlice) -> Lexed[Any] | LexFailure | None:
        """Try to recognize the terminal at the start of `text`.

        Returns None when `text` does not start with this terminal.
        """

    def specific_description(self) -> str:
        return self.description


def unknown_token(text: TextSlice) -> AnnotatedError:
    head = text.split_first()[0].span
    if head.is_empty():
        head = head.next_char()
    return AnnotatedError(head, "Unknown start of token").with_annotation(head, "unknown start of token")


def lex_first(terminals: Sequence[type[Terminal]], text: TextSlice) -> Lexed[Terminal] | LexFailure:
    """Try `terminals` in order; the first one that does not return None wins.

    When none of them recognizes the input the failure is fatal.
    """
    for terminal in terminals:
        result = terminal.lex(text)
        if result is not None:
            return result
    return LexFailure(errors=(unknown_token(text),))


@dataclass(frozen=True)
class Token:
    """One lexed terminal among the alternatives listed by a subclass."""

    value: Terminal
    span: Span

    terminals: ClassVar[tuple[type[Terminal], ...]] = ()

    def __init_subclass__(cls, terminals: Sequence[type[Terminal]] | None = None, **kwargs: Any) -> None:
        if terminals is not None:
            cls.terminals = tuple(terminals)
        super().__init_subclass__(**kwargs)

    @classmethod
    def from_text(cls: type[TokenT], text: TextSlice) -> Lexed[TokenT] | LexFailure:
        result = lex_first(cls.terminals, text)
        if isinstance(result, LexFailure):
            return result
        return Lexed(cls(result.value, result.span), result.span, result.tail)

    @classmethod
    def general_descriptions(cls) -> tuple[str, ...]:
        return tuple(t.description for t in cls.terminals)

    def description(self) -> str:
        return self.value.specific_description()


class Lexer(Generic[TokenT]):
    """Drives `token_type.from_text` over an input until it is exhausted.

    Recoverable errors are collected and scanning resumes at the tail they
    provide; a fatal error stops the pass. The pass fails if any error was
    collected.
    """

    def __init__(self, token_type: type[TokenT], *, logger: logging.Logger | None = None) -> None:
        self._token_type = token_type
        self._log = logger or logging.getLogger("lisbeth.lexer")
        self.tokens: list[TokenT] = []
        self.errors: list[AnnotatedError] = []

    def run(self, text: TextSlice) -> list[TokenT]:
        self.tokens = []
        self.errors = []
        fatal = False
        while not text.is_empty():
            result = self._token_type.from_text(text)
            tail = result.tail
            if tail is not None and tail.span.start.offset <= text.span.start.offset:
                raise RuntimeError(f"{self._token_type.__name__} did not consume any input at {text.span.format()}")
            if isinstance(result, Lexed):
                self.tokens.append(result.value)
                text = result.tail
                continue

            self.errors.extend(result.errors)
            if result.tail is None:
                self._log.debug("fatal lexing error at %s, stopping", text.span.format())
                fatal = True
                break
            self._log.debug("recovered from %d error(s) at %s", len(result.errors), text.span.format())
            text = result.tail

        self._log.debug("lexed %d token(s), %d error(s)", len(self.tokens), len(self.errors))
        if self.errors:
            raise LexingFailed(errors=tuple(self.errors), tokens=tuple(self.tokens), fatal=fatal)
        return list(self.tokens)


def tokenize(token_type: type[TokenT], text: TextSlice) -> list[TokenT]:
    return Lexer(token_type).run(text)
