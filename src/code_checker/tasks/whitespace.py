"""
code-checker — whitespace, line-ending and indentation tasks

File: src/code_checker/tasks/whitespace.py
Last updated: 2026-10-18

Purpose
- Normalize line endings and trailing whitespace; detect tab/space mixing.

Functional requirements
- Line-ending normalization is opt-in and never touches shell scripts.
- Trailing-whitespace normalization leaves non-empty content ending in exactly
  one end-of-line sequence (the first one found, else the platform default).
- Tab/space analysis of PHP ignores whitespace inside string literals but never
  changes the file.
"""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING, Final

from code_checker.constants import INDENTATION_EXTENSIONS, PHP_EXTENSIONS, SHELL_EXTENSIONS
from code_checker.domain.models import Outcome
from code_checker.lexer import TokenKind, tokenize
from code_checker.tasks.base import RTRIM_BYTES, ExtensionTask, decode, line_of

if TYPE_CHECKING:
    from collections.abc import Iterable

    from code_checker.domain.models import FileContext

_ANY_EOL_RE: Final[re.Pattern[bytes]] = re.compile(rb"\r\n|\r")
_TRAILING_BLANKS_RE: Final[re.Pattern[bytes]] = re.compile(rb"[\t ]+(\r?\n)")
_FIRST_EOL_RE: Final[re.Pattern[bytes]] = re.compile(rb"\r?\n")

# A leading run of tabs followed by a space, unless the space introduces a
# ``*`` continuation line of a block comment.
_MIXED_INDENTATION_RE: Final[re.Pattern[str]] = re.compile(r"^\t* (?!\*)", re.M | re.A)
_TAB_AFTER_CONTENT_RE: Final[re.Pattern[str]] = re.compile(r"\S *\t", re.A)
# Whitespace inside literals except line breaks, so line numbers stay put.
_LITERAL_WHITESPACE_RE: Final[re.Pattern[str]] = re.compile(r"[^\S\n]", re.A)


class LineEndingTask(ExtensionTask):
    name = "line_endings"

    def __init__(self, native_eol: str = os.linesep) -> None:
        self._native_eol = native_eol.encode("ascii")

    def check(self, context: FileContext, content: bytes) -> Outcome:
        if context.is_(*SHELL_EXTENSIONS):
            return Outcome.unchanged()
        normalized = _ANY_EOL_RE.sub(b"\n", content).replace(b"\n", self._native_eol)
        if normalized == content:
            return Outcome.unchanged()
        return Outcome.replace(normalized, "contains non-system line-endings")


class TrailingWhitespaceTask(ExtensionTask):
    name = "trailing_whitespace"

    def __init__(self, default_eol: str = os.linesep) -> None:
        self._default_eol = default_eol.encode("ascii")

    def check(self, context: FileContext, content: bytes) -> Outcome:
        normalized = _strip_trailing_blanks(content)
        first_eol = _FIRST_EOL_RE.search(normalized)
        eol = first_eol.group(0) if first_eol is not None else self._default_eol
        normalized = normalized.rstrip(RTRIM_BYTES)
        if normalized:
            normalized += eol
        if normalized == content:
            return Outcome.unchanged()
        removed = len(content) - len(normalized)
        return Outcome.replace(normalized, f"{removed} bytes of whitespaces")


class IndentationTask(ExtensionTask):
    """Report tab/space mixing in indentation-sensitive files that use tabs."""

    name = "indentation"

    def __init__(self, extensions: Iterable[str] = INDENTATION_EXTENSIONS) -> None:
        self.extensions = tuple(extensions)

    def check(self, context: FileContext, content: bytes) -> Outcome:
        if not self.applies_to(context) or b"\t" not in content:
            return Outcome.unchanged()

        text = decode(content)
        if context.is_(*PHP_EXTENSIONS):
            text = _without_literal_whitespace(text)

        outcomes: list[Outcome] = []
        mixed = _MIXED_INDENTATION_RE.search(text)
        if mixed is not None:
            line = line_of(text, mixed.start())
            outcomes.append(
                Outcome.error(f"Mixed tabs and spaces indentation on line {line}.", line=line)
            )
        tabulator = _TAB_AFTER_CONTENT_RE.search(text)
        if tabulator is not None:
            line = line_of(text, tabulator.start())
            outcomes.append(Outcome.error(f"Tabulator found on line {line}.", line=line))
        return Outcome.merge(outcomes)


def _strip_trailing_blanks(content: bytes) -> bytes:
    # Dropping " " from "\t\r \n" leaves "\t\r\n", which matches again.
    while True:
        stripped = _TRAILING_BLANKS_RE.sub(rb"\1", content)
        if stripped == content:
            return content
        content = stripped


def _without_literal_whitespace(text: str) -> str:
    return "".join(
        _LITERAL_WHITESPACE_RE.sub("", token.text)
        if token.kind is TokenKind.STRING_LITERAL
        else token.text
        for token in tokenize(text)
    )


__all__ = ["IndentationTask", "LineEndingTask", "TrailingWhitespaceTask"]
