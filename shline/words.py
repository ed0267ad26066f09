"""Split a raw word token into literal text and variable references.

The input is the exact substring the lexer captured, quotes and backslashes
included. Rules:

* ``'...'`` is literal, no escapes and no variables.
* ``"..."`` honours ``\\"``, ``\\\\``, ``\\$``, ``\\` `` plus ``\\n``/``\\t``;
  any other ``\\x`` yields ``x``. ``$name`` and ``${name}`` are recognised.
* An unquoted backslash makes the next character literal. A trailing
  backslash is itself literal.
* ``${name}`` takes everything up to the next ``}``; ``$name`` needs
  ``[A-Za-z_][A-Za-z0-9_]*``; any other ``$`` is literal.

Unterminated quotes and braces run to the end of the word. They are
reported as diagnostics, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass

from .diagnostics import Diagnostic, DiagnosticKind
from .nodes import Span, TextPart, VarPart, Word, WordPart

_DOUBLE_QUOTE_ESCAPES = {"n": "\n", "t": "\t"}
_UNQUOTED_SPECIAL = frozenset("'\"\\$")


def is_var_start(ch: str) -> bool:
    return ch == "_" or "a" <= ch <= "z" or "A" <= ch <= "Z"


def is_var_char(ch: str) -> bool:
    return is_var_start(ch) or "0" <= ch <= "9"


class WordBuilder:
    """Accumulates word parts, merging adjacent literal text as it goes.

    Offsets passed to ``push_*`` are relative to the raw word; the builder
    shifts them by ``base_offset`` so spans point into the full input.
    """

    def __init__(self, base_offset: int = 0) -> None:
        self.base_offset = base_offset
        self._parts: list[WordPart] = []
        self._diagnostics: list[Diagnostic] = []

    def _span(self, start: int, end: int) -> Span:
        return Span(self.base_offset + start, self.base_offset + end)

    def push_text(self, value: str, start: int, end: int) -> None:
        if not value:
            return
        span = self._span(start, end)
        if self._parts and isinstance(self._parts[-1], TextPart):
            previous = self._parts[-1]
            self._parts[-1] = TextPart(previous.value + value, Span(previous.span.start, span.end))
            return
        self._parts.append(TextPart(value, span))

    def push_variable(self, name: str, braced: bool, start: int, end: int) -> None:
        self._parts.append(VarPart(name, braced, self._span(start, end)))

    def report(self, kind: DiagnosticKind, message: str, start: int, end: int) -> None:
        self._diagnostics.append(Diagnostic(kind, message, self._span(start, end)))

    @property
    def parts(self) -> tuple[WordPart, ...]:
        return tuple(self._parts)

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)


@dataclass(frozen=True, slots=True)
class WordScan:
    parts: tuple[WordPart, ...]
    diagnostics: tuple[Diagnostic, ...] = ()


class _WordScanner:
    def __init__(self, raw: str, builder: WordBuilder) -> None:
        self.raw = raw
        self.pos = 0
        self.builder = builder

    def run(self) -> None:
        raw = self.raw
        n = len(raw)
        while self.pos < n:
            ch = raw[self.pos]
            if ch == "'":
                self._single_quoted()
            elif ch == '"':
                self._double_quoted()
            elif ch == "\\":
                self._escape()
            elif ch == "$":
                self._variable()
            else:
                start = self.pos
                while self.pos < n and raw[self.pos] not in _UNQUOTED_SPECIAL:
                    self.pos += 1
                self.builder.push_text(raw[start : self.pos], start, self.pos)

    def _single_quoted(self) -> None:
        raw = self.raw
        opening = self.pos
        inner_start = opening + 1
        close = raw.find("'", inner_start)
        if close == -1:
            self.builder.push_text(raw[inner_start:], inner_start, len(raw))
            self.builder.report(
                DiagnosticKind.UNTERMINATED_SINGLE_QUOTE,
                "Unterminated single quote",
                opening,
                len(raw),
            )
            self.pos = len(raw)
            return
        self.builder.push_text(raw[inner_start:close], inner_start, close)
        self.pos = close + 1

    def _double_quoted(self) -> None:
        raw = self.raw
        n = len(raw)
        opening = self.pos
        self.pos += 1
        run_start = self.pos
        while self.pos < n:
            ch = raw[self.pos]
            if ch == '"':
                self.builder.push_text(raw[run_start : self.pos], run_start, self.pos)
                self.pos += 1
                return
            if ch == "\\":
                self.builder.push_text(raw[run_start : self.pos], run_start, self.pos)
                start = self.pos
                if start + 1 < n:
                    escaped = raw[start + 1]
                    self.builder.push_text(
                        _DOUBLE_QUOTE_ESCAPES.get(escaped, escaped), start, start + 2
                    )
                    self.pos = start + 2
                else:
                    self.builder.push_text("\\", start, start + 1)
                    self.pos = start + 1
                run_start = self.pos
                continue
            if ch == "$":
                self.builder.push_text(raw[run_start : self.pos], run_start, self.pos)
                self._variable()
                run_start = self.pos
                continue
            self.pos += 1
        self.builder.push_text(raw[run_start:n], run_start, n)
        self.builder.report(
            DiagnosticKind.UNTERMINATED_DOUBLE_QUOTE,
            "Unterminated double quote",
            opening,
            n,
        )

    def _escape(self) -> None:
        start = self.pos
        if start + 1 < len(self.raw):
            self.builder.push_text(self.raw[start + 1], start, start + 2)
            self.pos = start + 2
        else:
            self.builder.push_text("\\", start, start + 1)
            self.pos = start + 1

    def _variable(self) -> None:
        raw = self.raw
        n = len(raw)
        start = self.pos
        following = raw[start + 1] if start + 1 < n else ""
        if following == "{":
            close = raw.find("}", start + 2)
            if close == -1:
                self.builder.push_variable(raw[start + 2 :], True, start, n)
                self.builder.report(
                    DiagnosticKind.UNTERMINATED_BRACE,
                    "Unterminated ${ reference",
                    start,
                    n,
                )
                self.pos = n
                return
            self.builder.push_variable(raw[start + 2 : close], True, start, close + 1)
            self.pos = close + 1
            return
        if following and is_var_start(following):
            end = start + 2
            while end < n and is_var_char(raw[end]):
                end += 1
            self.builder.push_variable(raw[start + 1 : end], False, start, end)
            self.pos = end
            return
        self.builder.push_text("$", start, start + 1)
        self.pos = start + 1


def scan_word(raw: str, base_offset: int = 0) -> WordScan:
    """Split ``raw`` into parts and collect any recovery diagnostics."""
    builder = WordBuilder(base_offset)
    _WordScanner(raw, builder).run()
    return WordScan(builder.parts, builder.diagnostics)


def split_word_into_parts(raw: str, base_offset: int = 0) -> tuple[WordPart, ...]:
    return scan_word(raw, base_offset).parts


def make_word(raw: str, base_offset: int = 0) -> Word:
    return Word(split_word_into_parts(raw, base_offset), Span(base_offset, base_offset + len(raw)))


__all__ = [
    "WordBuilder",
    "WordScan",
    "scan_word",
    "split_word_into_parts",
    "make_word",
    "is_var_start",
    "is_var_char",
]
