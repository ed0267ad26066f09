"""shline package: parse one shell-like command line into a pipeline AST."""

from .context import build_context, environ_context, parse_assignments
from .diagnostics import Diagnostic, DiagnosticKind
from .exceptions import ContextError, ParseError, ShlineError, UnboundVariableError
from .expansion import build_argv, expand_redirection_target, expand_word
from .lexer import lex
from .nodes import (
    Command,
    NodeKind,
    PartKind,
    Pipeline,
    Redirection,
    RedirectOp,
    Span,
    TextPart,
    VarPart,
    Word,
)
from .printer import format_pipeline, pipeline_to_dict
from .shell_parser import ParseResult, parse, parse_with_diagnostics
from .tokens import FdMeta, Token, TokenKind
from .words import WordBuilder, split_word_into_parts

__all__ = [
    "parse",
    "parse_with_diagnostics",
    "ParseResult",
    "lex",
    "split_word_into_parts",
    "WordBuilder",
    "expand_word",
    "build_argv",
    "expand_redirection_target",
    "format_pipeline",
    "pipeline_to_dict",
    "build_context",
    "environ_context",
    "parse_assignments",
    "Token",
    "TokenKind",
    "FdMeta",
    "Span",
    "TextPart",
    "VarPart",
    "Word",
    "Redirection",
    "RedirectOp",
    "Command",
    "Pipeline",
    "NodeKind",
    "PartKind",
    "Diagnostic",
    "DiagnosticKind",
    "ShlineError",
    "ParseError",
    "UnboundVariableError",
    "ContextError",
]
