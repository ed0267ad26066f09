"""Token types produced by the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    WORD = "Word"
    PIPE = "Pipe"
    GT = "GT"  # >
    GTGT = "GTGT"  # >>
    LT = "LT"  # <
    AMP_GT = "AmpGt"  # &>
    FD_GT = "FdGt"  # n>, n>>, n>&m
    EOF = "EndOfInput"

    def __str__(self) -> str:
        return self.value


REDIRECT_KINDS = frozenset(
    {TokenKind.GT, TokenKind.GTGT, TokenKind.LT, TokenKind.AMP_GT, TokenKind.FD_GT}
)


@dataclass(frozen=True, slots=True)
class FdMeta:
    """Numeric prefix details carried by ``FD_GT`` tokens."""

    fd: int
    append: bool = False
    dup: bool = False
    dup_target: int | None = None


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str
    start: int
    end: int
    meta: FdMeta | None = None

    @property
    def is_redirect(self) -> bool:
        return self.kind in REDIRECT_KINDS


__all__ = ["TokenKind", "FdMeta", "Token", "REDIRECT_KINDS"]
