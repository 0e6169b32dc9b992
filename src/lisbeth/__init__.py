from __future__ import annotations

from .errors import AnnotatedError, Annotation, LexingFailed
from .lexer import LexFailure, Lexed, Lexer, Terminal, Token, lex_first, tokenize
from .reporter import AnnotationMark, FormattedReport, SourceReporter
from .spans import BEGINNING, Position, Span, span_for_whole_text
from .text import TextSlice

__all__ = [
    "BEGINNING",
    "AnnotatedError",
    "Annotation",
    "AnnotationMark",
    "FormattedReport",
    "LexFailure",
    "Lexed",
    "Lexer",
    "LexingFailed",
    "Position",
    "SourceReporter",
    "Span",
    "Terminal",
    "TextSlice",
    "Token",
    "lex_first",
    "span_for_whole_text",
    "tokenize",
]
