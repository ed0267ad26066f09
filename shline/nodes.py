"""Immutable syntax tree for a parsed command line."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class NodeKind(str, Enum):
    WORD = "Word"
    TEXT = "Text"
    VAR = "Var"
    REDIRECTION = "Redirection"
    COMMAND = "Command"
    PIPELINE = "Pipeline"

    def __str__(self) -> str:
        return self.value


class PartKind(str, Enum):
    TEXT = "Text"
    VAR = "Var"

    def __str__(self) -> str:
        return self.value


class RedirectOp(str, Enum):
    INPUT = "<"
    OUTPUT = ">"
    APPEND = ">>"
    CLOBBER = "clobber"  # &> : stdout and stderr to one target
    DUP = "dup"

    def __str__(self) -> str:
        return self.value


STDIN = 0
STDOUT = 1
STDERR = 2


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open ``[start, end)`` offsets into the parsed text."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def slice(self, text: str) -> str:
        return text[self.start : self.end]


@dataclass(frozen=True, slots=True)
class TextPart:
    value: str
    span: Span
    kind: NodeKind = field(default=NodeKind.TEXT, init=False, repr=False)

    @property
    def part_kind(self) -> PartKind:
        return PartKind.TEXT


@dataclass(frozen=True, slots=True)
class VarPart:
    name: str
    braced: bool
    span: Span
    kind: NodeKind = field(default=NodeKind.VAR, init=False, repr=False)

    @property
    def part_kind(self) -> PartKind:
        return PartKind.VAR


WordPart = Union[TextPart, VarPart]


@dataclass(frozen=True, slots=True)
class Word:
    """One argv slot. Adjacent text parts are always merged."""

    parts: tuple[WordPart, ...]
    span: Span
    kind: NodeKind = field(default=NodeKind.WORD, init=False, repr=False)

    @property
    def is_empty(self) -> bool:
        return not self.parts

    @property
    def is_literal(self) -> bool:
        return all(isinstance(part, TextPart) for part in self.parts)

    @property
    def variables(self) -> tuple[str, ...]:
        return tuple(part.name for part in self.parts if isinstance(part, VarPart))


@dataclass(frozen=True, slots=True)
class Redirection:
    op: RedirectOp
    fd: int | None
    target: Word
    span: Span
    dup_target_fd: int | None = None
    kind: NodeKind = field(default=NodeKind.REDIRECTION, init=False, repr=False)

    @property
    def append(self) -> bool:
        return self.op is RedirectOp.APPEND

    @property
    def is_dup(self) -> bool:
        return self.op is RedirectOp.DUP

    @property
    def source_fds(self) -> tuple[int, ...]:
        if self.op is RedirectOp.CLOBBER:
            return (STDOUT, STDERR)
        if self.fd is None:
            return ()
        return (self.fd,)


@dataclass(frozen=True, slots=True)
class Command:
    """Words and redirections in textual order."""

    words: tuple[Word, ...]
    redirections: tuple[Redirection, ...]
    span: Span
    kind: NodeKind = field(default=NodeKind.COMMAND, init=False, repr=False)

    @property
    def is_empty(self) -> bool:
        return not self.words and not self.redirections


@dataclass(frozen=True, slots=True)
class Pipeline:
    commands: tuple[Command, ...]
    span: Span
    kind: NodeKind = field(default=NodeKind.PIPELINE, init=False, repr=False)

    def __len__(self) -> int:
        return len(self.commands)


__all__ = [
    "NodeKind",
    "PartKind",
    "RedirectOp",
    "Span",
    "TextPart",
    "VarPart",
    "WordPart",
    "Word",
    "Redirection",
    "Command",
    "Pipeline",
    "STDIN",
    "STDOUT",
    "STDERR",
]
