"""Build expansion contexts at the process boundary."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping

from .exceptions import ContextError


def environ_context(environ: Mapping[str, str] | None = None) -> dict[str, object]:
    return dict(os.environ if environ is None else environ)


def parse_assignments(assignments: Iterable[str]) -> dict[str, object]:
    """Turn ``NAME=VALUE`` strings into a mapping, splitting on the first ``=``."""
    values: dict[str, object] = {}
    for entry in assignments:
        if "=" not in entry:
            raise ContextError(f"Invalid assignment '{entry}'. Expected NAME=VALUE")
        name, value = entry.split("=", 1)
        if not name:
            raise ContextError(f"Invalid assignment '{entry}'. Missing variable name")
        values[name] = value
    return values


def build_context(
    *,
    environ: Mapping[str, str] | None = None,
    use_environ: bool = True,
    assignments: Iterable[str] = (),
) -> dict[str, object]:
    """Environment first, then explicit assignments in order."""
    context: dict[str, object] = environ_context(environ) if use_environ else {}
    context.update(parse_assignments(assignments))
    return context


__all__ = ["environ_context", "parse_assignments", "build_context"]
