"""
code-checker — minimal PHP lexer

File: src/code_checker/lexer/php.py
Last updated: 2026-10-18

Purpose
- Split PHP source into a flat, lossless token stream that separates comments,
  string/heredoc literal bodies, whitespace, and everything else.

What should be included in this file
- Inline-HTML / code mode switching on ``<?php``, ``<?=``, ``<?`` and ``?>``.
- Line and block comments, quoted strings, heredoc and nowdoc literals.

Functional requirements
- ``tokenize`` never raises; unterminated constructs run to end of input.
- Concatenating token texts reproduces the input exactly.
- Every token carries the 1-based line it starts on.

Non-functional requirements
- Only enough of the grammar to classify literals and comments; no parsing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from code_checker.constants import PHP_EXTENSIONS

_IDENT_CHARS: Final[str] = r"A-Za-z0-9_\x80-\U0010ffff"

_OPEN_TAG_RE: Final[re.Pattern[str]] = re.compile(
    r"<\?(?:[pP][hH][pP](?=[ \t\r\n]|\Z)|=|(?=[ \t\r\n]))"
)
_CLOSE_TAG_RE: Final[re.Pattern[str]] = re.compile(r"\?>(?:\r\n|\n)?")
_WHITESPACE_RE: Final[re.Pattern[str]] = re.compile(r"[ \t\r\n]+")
_LINE_COMMENT_END_RE: Final[re.Pattern[str]] = re.compile(r"\r?\n|\?>")
_SINGLE_QUOTED_RE: Final[re.Pattern[str]] = re.compile(r"'(?:[^'\\]|\\.)*'?", re.S)
_DOUBLE_QUOTED_RE: Final[re.Pattern[str]] = re.compile(r'"(?:[^"\\]|\\.)*"?', re.S)
_BACKTICK_RE: Final[re.Pattern[str]] = re.compile(r"`(?:[^`\\]|\\.)*`?", re.S)
_HEREDOC_START_RE: Final[re.Pattern[str]] = re.compile(
    rf"<<<[ \t]*([\"']?)([A-Za-z_\x80-\U0010ffff][{_IDENT_CHARS}]*)\1\r?\n"
)
_WORD_RE: Final[re.Pattern[str]] = re.compile(rf"[{_IDENT_CHARS}]+")


class TokenKind(StrEnum):
    COMMENT = "comment"
    STRING_LITERAL = "string_literal"
    HEREDOC_START = "heredoc_start"
    WHITESPACE = "whitespace"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str
    line: int

    @property
    def is_nowdoc_start(self) -> bool:
        return self.kind is TokenKind.HEREDOC_START and "'" in self.text


class _Scanner:
    """Single-use cursor over one source text."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._length = len(source)
        self._pos = 0
        self._line = 1
        self._tokens: list[Token] = []

    def run(self) -> list[Token]:
        in_code = False
        while self._pos < self._length:
            if in_code:
                in_code = self._scan_code()
            else:
                in_code = self._scan_inline_html()
        return self._tokens

    def _emit(self, kind: TokenKind, end: int) -> None:
        if end <= self._pos:
            return
        text = self._source[self._pos : end]
        self._tokens.append(Token(kind, text, self._line))
        self._line += text.count("\n")
        self._pos = end

    def _scan_inline_html(self) -> bool:
        match = _OPEN_TAG_RE.search(self._source, self._pos)
        if match is None:
            self._emit(TokenKind.OTHER, self._length)
            return False
        self._emit(TokenKind.OTHER, match.start())
        self._emit(TokenKind.OTHER, match.end())
        return True

    def _scan_code(self) -> bool:
        source = self._source
        pos = self._pos
        char = source[pos]

        close = _CLOSE_TAG_RE.match(source, pos)
        if close is not None:
            self._emit(TokenKind.OTHER, close.end())
            return False

        if char in " \t\r\n":
            whitespace = _WHITESPACE_RE.match(source, pos)
            assert whitespace is not None
            self._emit(TokenKind.WHITESPACE, whitespace.end())
        elif source.startswith("#[", pos):
            self._emit(TokenKind.OTHER, pos + 2)
        elif char == "#" or source.startswith("//", pos):
            end = _LINE_COMMENT_END_RE.search(source, pos)
            self._emit(TokenKind.COMMENT, self._length if end is None else end.start())
        elif source.startswith("/*", pos):
            end = source.find("*/", pos + 2)
            self._emit(TokenKind.COMMENT, self._length if end < 0 else end + 2)
        elif char == "'":
            self._emit_match(_SINGLE_QUOTED_RE, TokenKind.STRING_LITERAL)
        elif char == '"':
            self._emit_match(_DOUBLE_QUOTED_RE, TokenKind.STRING_LITERAL)
        elif char == "`":
            self._emit_match(_BACKTICK_RE, TokenKind.STRING_LITERAL)
        elif source.startswith("<<<", pos) and self._scan_heredoc():
            pass
        else:
            word = _WORD_RE.match(source, pos)
            self._emit(TokenKind.OTHER, pos + 1 if word is None else word.end())
        return True

    def _emit_match(self, pattern: re.Pattern[str], kind: TokenKind) -> None:
        match = pattern.match(self._source, self._pos)
        assert match is not None
        self._emit(kind, match.end())

    def _scan_heredoc(self) -> bool:
        start = _HEREDOC_START_RE.match(self._source, self._pos)
        if start is None:
            return False
        self._emit(TokenKind.HEREDOC_START, start.end())

        label = re.escape(start.group(2))
        closing = re.compile(rf"^[ \t]*{label}(?![{_IDENT_CHARS}])", re.M)
        end = closing.search(self._source, self._pos)
        if end is None:
            self._emit(TokenKind.STRING_LITERAL, self._length)
            return True

        body_end = end.start()
        if body_end > self._pos and self._source[body_end - 1] == "\n":
            body_end -= 1
            if body_end > self._pos and self._source[body_end - 1] == "\r":
                body_end -= 1
        self._emit(TokenKind.STRING_LITERAL, body_end)
        self._emit(TokenKind.OTHER, end.end())
        return True


def tokenize(source: str) -> list[Token]:
    """Tokenize ``source``; starts in inline-HTML mode like the PHP engine."""

    return _Scanner(source).run()


def untokenize(tokens: list[Token]) -> str:
    return "".join(token.text for token in tokens)


__all__ = ["PHP_EXTENSIONS", "Token", "TokenKind", "tokenize", "untokenize"]
