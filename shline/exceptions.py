"""Exception hierarchy for shline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .diagnostics import Diagnostic


class ShlineError(Exception):
    """Base error for the package."""


class ParseError(ShlineError, ValueError):
    """Raised by strict parsing when the input needed recovery."""

    def __init__(self, diagnostics: tuple["Diagnostic", ...]) -> None:
        self.diagnostics = diagnostics
        if diagnostics:
            first = diagnostics[0]
            message = f"{first.message} at {first.span.start}-{first.span.end}"
            if len(diagnostics) > 1:
                message += f" (+{len(diagnostics) - 1} more)"
        else:
            message = "Parse error"
        super().__init__(message)


class UnboundVariableError(ShlineError, LookupError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{name}: unbound variable")


class ContextError(ShlineError, ValueError):
    """Invalid NAME=VALUE context entry."""


__all__ = ["ShlineError", "ParseError", "UnboundVariableError", "ContextError"]
