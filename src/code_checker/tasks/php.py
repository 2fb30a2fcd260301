"""
code-checker — PHP token-aware tasks

File: src/code_checker/tasks/php.py
Last updated: 2026-10-18

Purpose
- Checks that need to know where PHP comments and string literals are.

What should be included in this file
- phpDoc marker check on block comments.
- Escape-sequence validation inside interpolating string literals.
- Removal of the trailing ``?>`` closing tag.

Functional requirements
- Only ``php``/``phpt`` files are inspected; everything else is a no-op.
- Escape validation reports the first invalid escape per literal only.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from code_checker.constants import PHP_EXTENSIONS
from code_checker.domain.models import Outcome
from code_checker.lexer import Token, TokenKind, tokenize
from code_checker.tasks.base import RTRIM_BYTES, ExtensionTask, decode

if TYPE_CHECKING:
    from collections.abc import Iterator

    from code_checker.domain.models import FileContext

_MISSING_DOC_MARKER_RE: Final[re.Pattern[str]] = re.compile(r"/\*\s.*@[a-z]", re.I | re.S)
_VALID_ESCAPES_RE: Final[re.Pattern[str]] = re.compile(r"(?:[^\\]|\\[\\nrtvefx0-7\W])*", re.A)
_CLOSING_TAG: Final[bytes] = b"?>"


class PhpDocCommentTask(ExtensionTask):
    """Warn about ``/* ... @tag`` comments that were meant to be ``/** ... */``."""

    name = "php_doc_comment"
    extensions = PHP_EXTENSIONS

    def check(self, context: FileContext, content: bytes) -> Outcome:
        if not self.applies_to(context):
            return Outcome.unchanged()
        return Outcome.merge(
            Outcome.warning(
                f"missing /** in phpDoc comment on line {token.line}", line=token.line
            )
            for token in tokenize(decode(content))
            if token.kind is TokenKind.COMMENT and _MISSING_DOC_MARKER_RE.match(token.text)
        )


class EscapeSequenceTask(ExtensionTask):
    name = "escape_sequences"
    extensions = PHP_EXTENSIONS

    def check(self, context: FileContext, content: bytes) -> Outcome:
        if not self.applies_to(context):
            return Outcome.unchanged()

        outcomes: list[Outcome] = []
        for token in _interpolated_literals(tokenize(decode(content))):
            valid_prefix = _VALID_ESCAPES_RE.match(token.text)
            end = valid_prefix.end() if valid_prefix is not None else 0
            if end < len(token.text):
                sequence = token.text[end : end + 2]
                outcomes.append(
                    Outcome.warning(
                        f"invalid escape sequence {sequence} in double quoted string "
                        f"on line {token.line}",
                        line=token.line,
                    )
                )
        return Outcome.merge(outcomes)


class ClosingTagTask(ExtensionTask):
    name = "closing_tag"
    extensions = PHP_EXTENSIONS

    def check(self, context: FileContext, content: bytes) -> Outcome:
        if not self.applies_to(context):
            return Outcome.unchanged()

        trimmed = content.rstrip(RTRIM_BYTES)
        if not trimmed.endswith(_CLOSING_TAG):
            return Outcome.unchanged()
        # Whitespace before the tag stays; repeated tags all go.
        while trimmed.endswith(_CLOSING_TAG):
            result = trimmed[: -len(_CLOSING_TAG)]
            trimmed = result.rstrip(RTRIM_BYTES)
        return Outcome.replace(result, "contains closing PHP tag ?>")


def _interpolated_literals(tokens: list[Token]) -> Iterator[Token]:
    """Yield double-quoted and backtick strings and heredoc (not nowdoc) bodies."""

    previous: Token | None = None
    for token in tokens:
        if token.kind is TokenKind.STRING_LITERAL:
            if previous is not None and previous.kind is TokenKind.HEREDOC_START:
                if not previous.is_nowdoc_start:
                    yield token
            elif token.text.startswith(('"', "`")):
                yield token
        previous = token


__all__ = ["ClosingTagTask", "EscapeSequenceTask", "PhpDocCommentTask"]
