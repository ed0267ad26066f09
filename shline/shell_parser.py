"""Recursive-descent parser for a single pipeline with redirections."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .diagnostics import Diagnostic, DiagnosticKind
from .exceptions import ParseError
from .lexer import lex
from .nodes import STDIN, STDOUT, Command, Pipeline, Redirection, RedirectOp, Span, Word
from .tokens import Token, TokenKind
from .words import scan_word

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ParseResult:
    pipeline: Pipeline
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def clean(self) -> bool:
        return not self.diagnostics


class _TokenCursor:
    """Position into the token list; the last token is always ``EOF``."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.tokens[-1]

    def advance(self) -> Token:
        token = self.peek()
        if self.pos < len(self.tokens):
            self.pos += 1
        return token

    def at(self, *kinds: TokenKind) -> bool:
        return self.peek().kind in kinds


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.cursor = _TokenCursor(lex(text))
        self.diagnostics: list[Diagnostic] = []

    def _report(self, kind: DiagnosticKind, message: str, span: Span) -> None:
        logger.debug("recovered from %s at %d-%d: %s", kind, span.start, span.end, message)
        self.diagnostics.append(Diagnostic(kind, message, span))

    def parse_pipeline(self) -> Pipeline:
        commands: list[Command] = []
        if not self.cursor.at(TokenKind.EOF):
            commands.append(self._pipeline_stage())
            while self.cursor.at(TokenKind.PIPE):
                self.cursor.advance()
                commands.append(self._pipeline_stage())
        return Pipeline(tuple(commands), Span(0, len(self.text)))

    def _pipeline_stage(self) -> Command:
        command = self.parse_command()
        if command.is_empty:
            self._report(DiagnosticKind.EMPTY_COMMAND, "Empty command in pipeline", command.span)
        return command

    def parse_command(self) -> Command:
        words: list[Word] = []
        redirections: list[Redirection] = []
        start = self.cursor.peek().start
        end = start
        while True:
            token = self.cursor.peek()
            if token.kind in (TokenKind.EOF, TokenKind.PIPE):
                break
            if token.kind is TokenKind.WORD:
                self.cursor.advance()
                words.append(self._make_word(token.text, token.start))
                end = token.end
            elif token.is_redirect:
                redirection = self.parse_redirection()
                redirections.append(redirection)
                end = redirection.span.end
            else:
                self.cursor.advance()
                self._report(
                    DiagnosticKind.STRAY_TOKEN,
                    f"Skipped unexpected {token.kind} token",
                    Span(token.start, token.end),
                )
        return Command(tuple(words), tuple(redirections), Span(start, end))

    def parse_redirection(self) -> Redirection:
        op_token = self.cursor.advance()
        op, fd, dup_target = _redirect_shape(op_token)
        op_span = Span(op_token.start, op_token.end)
        if op is RedirectOp.DUP and dup_target is None:
            self._report(
                DiagnosticKind.MISSING_DUP_TARGET,
                f"Missing descriptor after {op_token.text!r}",
                op_span,
            )

        if not self.cursor.at(TokenKind.WORD):
            if not (op is RedirectOp.DUP and dup_target is not None):
                self._report(
                    DiagnosticKind.MISSING_REDIRECT_TARGET,
                    f"Missing redirection target after {op_token.text!r}",
                    op_span,
                )
            placeholder = Word((), Span(op_token.end, op_token.end))
            return Redirection(op, fd, placeholder, op_span, dup_target)

        target_token = self.cursor.advance()
        target = self._make_word(target_token.text, target_token.start)
        return Redirection(op, fd, target, Span(op_token.start, target_token.end), dup_target)

    def _make_word(self, raw: str, start: int) -> Word:
        scan = scan_word(raw, start)
        for diagnostic in scan.diagnostics:
            self._report(diagnostic.kind, diagnostic.message, diagnostic.span)
        return Word(scan.parts, Span(start, start + len(raw)))


def _redirect_shape(token: Token) -> tuple[RedirectOp, int, int | None]:
    """Map a redirection token to ``(op, fd, dup_target_fd)``."""
    kind = token.kind
    if kind is TokenKind.LT:
        return RedirectOp.INPUT, STDIN, None
    if kind is TokenKind.GT:
        return RedirectOp.OUTPUT, STDOUT, None
    if kind is TokenKind.GTGT:
        return RedirectOp.APPEND, STDOUT, None
    if kind is TokenKind.AMP_GT:
        return RedirectOp.CLOBBER, STDOUT, None
    if kind is TokenKind.FD_GT:
        meta = token.meta
        if meta is None:
            raise ValueError(f"FD_GT token without descriptor metadata at {token.start}")
        if meta.dup:
            return RedirectOp.DUP, meta.fd, meta.dup_target
        return (RedirectOp.APPEND if meta.append else RedirectOp.OUTPUT), meta.fd, None
    raise ValueError(f"Not a redirection token: {kind}")


def parse_with_diagnostics(command_line: str, *, strict: bool = False) -> ParseResult:
    """Parse ``command_line`` and return the pipeline plus recovery notes.

    With ``strict=True`` any recorded diagnostic raises :class:`ParseError`
    instead.
    """
    parser = _Parser(command_line)
    pipeline = parser.parse_pipeline()
    diagnostics = tuple(parser.diagnostics)
    if strict and diagnostics:
        raise ParseError(diagnostics)
    return ParseResult(pipeline, diagnostics)


def parse(command_line: str, *, strict: bool = False) -> Pipeline:
    return parse_with_diagnostics(command_line, strict=strict).pipeline


__all__ = ["ParseResult", "parse", "parse_with_diagnostics"]
