"""Deterministic human-readable and JSON-ready dumps of a pipeline."""

from __future__ import annotations

import json
from typing import Any

from .nodes import Command, Pipeline, Redirection, Span, TextPart, VarPart, Word, WordPart


def format_part(part: WordPart) -> str:
    if isinstance(part, TextPart):
        return json.dumps(part.value, ensure_ascii=False)
    if part.braced:
        return f"${{{part.name}}}"
    return f"${part.name}"


def format_word(word: Word) -> str:
    if word.is_empty:
        return '""'
    return " + ".join(format_part(part) for part in word.parts)


def word_source(word: Word) -> str:
    """Literal target text with variables left as references."""
    return "".join(
        part.value if isinstance(part, TextPart) else format_part(part) for part in word.parts
    )


def format_redirection(redirection: Redirection) -> str:
    fd = "&" if redirection.fd is None else str(redirection.fd)
    line = f"{fd} {redirection.op} -> {word_source(redirection.target) or '(none)'}"
    if redirection.is_dup:
        target = "?" if redirection.dup_target_fd is None else redirection.dup_target_fd
        line += f" (dup->{target})"
    return line


def format_pipeline(pipeline: Pipeline) -> str:
    lines = [f"Pipeline: {len(pipeline.commands)} command(s)"]
    for index, command in enumerate(pipeline.commands):
        lines.append(f"  Command {index}:")
        lines.append("    words:")
        for word in command.words:
            lines.append(f"      - {format_word(word)} (span {word.span.start}-{word.span.end})")
        if command.redirections:
            lines.append("    redirections:")
            for redirection in command.redirections:
                lines.append(f"      - {format_redirection(redirection)}")
    return "\n".join(lines)


def _span_dict(span: Span) -> dict[str, int]:
    return {"start": span.start, "end": span.end}


def _part_dict(part: WordPart) -> dict[str, Any]:
    if isinstance(part, VarPart):
        return {
            "kind": str(part.kind),
            "name": part.name,
            "braced": part.braced,
            "span": _span_dict(part.span),
        }
    return {"kind": str(part.kind), "value": part.value, "span": _span_dict(part.span)}


def _word_dict(word: Word) -> dict[str, Any]:
    return {
        "kind": str(word.kind),
        "parts": [_part_dict(part) for part in word.parts],
        "span": _span_dict(word.span),
    }


def _command_dict(command: Command) -> dict[str, Any]:
    return {
        "kind": str(command.kind),
        "words": [_word_dict(word) for word in command.words],
        "redirections": [
            {
                "kind": str(redirection.kind),
                "op": str(redirection.op),
                "fd": redirection.fd,
                "target": _word_dict(redirection.target),
                "dup_target_fd": redirection.dup_target_fd,
                "span": _span_dict(redirection.span),
            }
            for redirection in command.redirections
        ],
        "span": _span_dict(command.span),
    }


def pipeline_to_dict(pipeline: Pipeline) -> dict[str, Any]:
    return {
        "kind": str(pipeline.kind),
        "commands": [_command_dict(command) for command in pipeline.commands],
        "span": _span_dict(pipeline.span),
    }


__all__ = ["format_pipeline", "format_word", "format_redirection", "pipeline_to_dict", "word_source"]
