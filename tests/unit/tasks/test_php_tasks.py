"""
code-checker — unit tests for PHP token-aware tasks

File: tests/unit/tasks/test_php_tasks.py
Last updated: 2026-10-18

Purpose
- Validate the phpDoc marker check, escape-sequence validation, and closing-tag removal.
"""

from __future__ import annotations

import pytest

from code_checker.domain.models import FileContext, Outcome, Severity
from code_checker.tasks.php import ClosingTagTask, EscapeSequenceTask, PhpDocCommentTask

pytestmark = pytest.mark.unit

PHP = FileContext.for_path("src/app.php")
TEXT = FileContext.for_path("README.txt")


def _messages(outcome: Outcome) -> list[str]:
    return [item.message for item in outcome.diagnostics]


def test_doc_comment_without_double_asterisk_is_warned() -> None:
    source = b"<?php\n\n/* @param int $a */\nfunction f($a) {}\n"

    outcome = PhpDocCommentTask().check(PHP, source)

    assert _messages(outcome) == ["missing /** in phpDoc comment on line 3"]
    assert outcome.diagnostics[0].severity is Severity.WARNING
    assert outcome.diagnostics[0].line == 3


@pytest.mark.parametrize(
    "comment",
    [
        "/** @param int $a */",
        "/* plain comment */",
        "/*@var*/",
        "// @var int",
        "/* email@ 1 */",
    ],
)
def test_doc_comment_check_ignores_other_comments(comment: str) -> None:
    source = f"<?php\n{comment}\n".encode()

    assert PhpDocCommentTask().check(PHP, source).is_noop


def test_doc_comment_marker_spanning_lines_is_found() -> None:
    source = b"<?php\n/*\n * Description\n * @Return int\n */\n"

    assert _messages(PhpDocCommentTask().check(PHP, source)) == [
        "missing /** in phpDoc comment on line 2"
    ]


def test_php_tasks_skip_other_extensions() -> None:
    source = b'<?php\n/* @var x */\n$a = "\\q";\n?>\n'

    assert PhpDocCommentTask().check(TEXT, source).is_noop
    assert EscapeSequenceTask().check(TEXT, source).is_noop
    assert ClosingTagTask().check(TEXT, source).is_noop


def test_invalid_escape_in_double_quoted_string_is_warned() -> None:
    outcome = EscapeSequenceTask().check(PHP, b'<?php\n$a = "\\q";\n')

    assert _messages(outcome) == ["invalid escape sequence \\q in double quoted string on line 2"]
    assert outcome.diagnostics[0].severity is Severity.WARNING


@pytest.mark.parametrize(
    "literal",
    ['"\\n"', '"\\\\"', '"\\$var"', '"\\x41\\101"', '"tab\\t\\"q\\""', "'\\q'", '"{$a[\'k\']}"'],
)
def test_valid_escapes_and_single_quotes_pass(literal: str) -> None:
    source = f"<?php\n$a = {literal};\n".encode()

    assert EscapeSequenceTask().check(PHP, source).is_noop


def test_only_first_invalid_escape_per_literal_is_reported() -> None:
    source = b'<?php\n$a = "\\q \\w";\n$b = "\\d";\n'

    assert _messages(EscapeSequenceTask().check(PHP, source)) == [
        "invalid escape sequence \\q in double quoted string on line 2",
        "invalid escape sequence \\d in double quoted string on line 3",
    ]


def test_heredoc_is_checked_but_nowdoc_is_not() -> None:
    heredoc = b"<?php\n$a = <<<EOT\nvalue \\q\nEOT;\n"
    nowdoc = b"<?php\n$a = <<<'EOT'\nvalue \\q\nEOT;\n"

    assert _messages(EscapeSequenceTask().check(PHP, heredoc)) == [
        "invalid escape sequence \\q in double quoted string on line 3"
    ]
    assert EscapeSequenceTask().check(PHP, nowdoc).is_noop


def test_backtick_command_strings_are_checked() -> None:
    outcome = EscapeSequenceTask().check(PHP, b"<?php\n$out = `ls \\q`;\n")

    assert _messages(outcome) == ["invalid escape sequence \\q in double quoted string on line 2"]
    assert EscapeSequenceTask().check(PHP, b"<?php\n$out = `ls \\` -la`;\n").is_noop


def test_escapes_outside_code_are_ignored() -> None:
    assert EscapeSequenceTask().check(PHP, b'<p>"\\q"</p>\n').is_noop


def test_closing_tag_is_removed() -> None:
    outcome = ClosingTagTask().check(PHP, b"<?php\necho 1;\n?>\n\n")

    assert outcome.content == b"<?php\necho 1;\n"
    assert _messages(outcome) == ["contains closing PHP tag ?>"]
    assert outcome.diagnostics[0].severity is Severity.FIX


def test_repeated_closing_tags_are_all_removed() -> None:
    outcome = ClosingTagTask().check(PHP, b"<?php echo 1; ?>\n?>")

    assert outcome.content == b"<?php echo 1; "


def test_closing_tag_in_the_middle_is_kept() -> None:
    assert ClosingTagTask().check(PHP, b"<?php echo 1; ?>\n<p>html</p>\n").is_noop
