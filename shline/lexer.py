"""Hand-written scanner turning one command line into tokens.

The lexer only finds token boundaries. Quotes and backslashes inside a word
are kept verbatim in ``Token.text``; their meaning is decided later by
:mod:`shline.words`.
"""

from __future__ import annotations

from .tokens import FdMeta, Token, TokenKind

WHITESPACE = frozenset(" \t\r\n")
QUOTES = frozenset("'\"")


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _scan_digits(text: str, pos: int) -> int:
    n = len(text)
    while pos < n and is_digit(text[pos]):
        pos += 1
    return pos


def _scan_fd_redirect(text: str, start: int) -> Token | None:
    """Try to read ``n>``, ``n>>`` or ``n>&m`` starting at ``start``."""
    n = len(text)
    pos = _scan_digits(text, start)
    if pos >= n or text[pos] != ">":
        return None
    fd = int(text[start:pos])
    pos += 1
    if pos < n and text[pos] == ">":
        pos += 1
        meta = FdMeta(fd=fd, append=True)
    elif pos < n and text[pos] == "&":
        pos += 1
        dup_start = pos
        pos = _scan_digits(text, pos)
        digits = text[dup_start:pos]
        meta = FdMeta(fd=fd, dup=True, dup_target=int(digits) if digits else None)
    else:
        meta = FdMeta(fd=fd)
    return Token(TokenKind.FD_GT, text[start:pos], start, pos, meta)


def _scan_word_end(text: str, start: int) -> int:
    n = len(text)
    pos = start
    while pos < n:
        ch = text[pos]
        if ch in WHITESPACE or ch in "|<>":
            break
        if ch == "&" and pos + 1 < n and text[pos + 1] == ">":
            break
        if ch in QUOTES:
            pos += 1
            while pos < n:
                inner = text[pos]
                if inner == "\\" and ch == '"':
                    pos += 2
                    continue
                pos += 1
                if inner == ch:
                    break
            continue
        if ch == "\\":
            pos += 2
            continue
        pos += 1
    return min(pos, n)


def lex(text: str) -> list[Token]:
    """Split ``text`` into tokens, always ending with one ``EOF`` token.

    Never raises: unterminated quotes simply extend the current word to the
    end of the input.
    """
    tokens: list[Token] = []
    n = len(text)
    pos = 0
    while pos < n:
        ch = text[pos]
        if ch in WHITESPACE:
            pos += 1
            continue
        if ch == "|":
            tokens.append(Token(TokenKind.PIPE, ch, pos, pos + 1))
            pos += 1
            continue
        if ch == "&" and text.startswith(">", pos + 1):
            tokens.append(Token(TokenKind.AMP_GT, "&>", pos, pos + 2))
            pos += 2
            continue
        if is_digit(ch):
            token = _scan_fd_redirect(text, pos)
            if token is not None:
                tokens.append(token)
                pos = token.end
                continue
            # digits not followed by '>' are ordinary word characters
        if ch == ">":
            if text.startswith(">", pos + 1):
                tokens.append(Token(TokenKind.GTGT, ">>", pos, pos + 2))
                pos += 2
            else:
                tokens.append(Token(TokenKind.GT, ">", pos, pos + 1))
                pos += 1
            continue
        if ch == "<":
            tokens.append(Token(TokenKind.LT, "<", pos, pos + 1))
            pos += 1
            continue
        end = _scan_word_end(text, pos)
        tokens.append(Token(TokenKind.WORD, text[pos:end], pos, end))
        pos = end
    tokens.append(Token(TokenKind.EOF, "", n, n))
    return tokens


__all__ = ["lex", "is_digit"]
