"""Records for anomalies the parser recovered from."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .nodes import Span


class DiagnosticKind(str, Enum):
    MISSING_REDIRECT_TARGET = "missing-redirect-target"
    MISSING_DUP_TARGET = "missing-dup-target"
    UNTERMINATED_SINGLE_QUOTE = "unterminated-single-quote"
    UNTERMINATED_DOUBLE_QUOTE = "unterminated-double-quote"
    UNTERMINATED_BRACE = "unterminated-brace"
    EMPTY_COMMAND = "empty-command"
    STRAY_TOKEN = "stray-token"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Diagnostic:
    kind: DiagnosticKind
    message: str
    span: Span

    def __str__(self) -> str:
        return f"{self.span.start}-{self.span.end}: {self.message} [{self.kind}]"


__all__ = ["Diagnostic", "DiagnosticKind"]
