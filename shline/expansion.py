"""Resolve variable references in parsed words against a context mapping."""

from __future__ import annotations

from collections.abc import Mapping

from .exceptions import UnboundVariableError
from .nodes import Command, Redirection, TextPart, VarPart, Word

Context = Mapping[str, object]


def _lookup(name: str, context: Context, nounset: bool) -> str:
    value = context.get(name)
    if value is None:
        if nounset:
            raise UnboundVariableError(name)
        return ""
    return str(value)


def expand_word(word: Word, context: Context | None = None, *, nounset: bool = False) -> str:
    """Concatenate the parts of ``word`` into exactly one string.

    Missing names (or names bound to ``None``) contribute an empty string
    unless ``nounset`` is set, in which case :class:`UnboundVariableError`
    is raised. No field splitting or globbing takes place.
    """
    context = context if context is not None else {}
    chunks: list[str] = []
    for part in word.parts:
        if isinstance(part, TextPart):
            chunks.append(part.value)
        elif isinstance(part, VarPart):
            chunks.append(_lookup(part.name, context, nounset))
        else:  # pragma: no cover
            raise TypeError(f"Unknown word part: {part!r}")
    return "".join(chunks)


def build_argv(command: Command, context: Context | None = None, *, nounset: bool = False) -> list[str]:
    return [expand_word(word, context, nounset=nounset) for word in command.words]


def expand_redirection_target(
    redirection: Redirection, context: Context | None = None, *, nounset: bool = False
) -> str:
    return expand_word(redirection.target, context, nounset=nounset)


__all__ = ["Context", "expand_word", "build_argv", "expand_redirection_target"]
