"""
code-checker — task registry

File: src/code_checker/tasks/__init__.py
Last updated: 2026-10-18

Purpose
- Assemble the ordered task list run against every file.

Functional requirements
- Order is fixed: encoding checks, PHP source checks, optional line endings,
  closing tag, collaborator syntax checks, whitespace, then indentation.
- Importing this package imports the template and config collaborators.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from code_checker.constants import INDENTATION_EXTENSIONS
from code_checker.tasks.base import ExtensionTask, Task
from code_checker.tasks.encoding import ByteOrderMarkTask, ControlCharacterTask, Utf8EncodingTask
from code_checker.tasks.php import ClosingTagTask, EscapeSequenceTask, PhpDocCommentTask
from code_checker.tasks.syntax import ConfigSyntaxTask, TemplateSyntaxTask
from code_checker.tasks.whitespace import IndentationTask, LineEndingTask, TrailingWhitespaceTask

if TYPE_CHECKING:
    from collections.abc import Iterable


def build_default_tasks(
    *,
    normalize_line_endings: bool = False,
    native_eol: str = os.linesep,
    indentation_extensions: Iterable[str] = INDENTATION_EXTENSIONS,
) -> tuple[Task, ...]:
    tasks: list[Task] = [
        ControlCharacterTask(),
        ByteOrderMarkTask(),
        Utf8EncodingTask(),
        PhpDocCommentTask(),
        EscapeSequenceTask(),
    ]
    if normalize_line_endings:
        tasks.append(LineEndingTask(native_eol))
    tasks.extend(
        [
            ClosingTagTask(),
            TemplateSyntaxTask(),
            ConfigSyntaxTask(),
            TrailingWhitespaceTask(native_eol),
            IndentationTask(indentation_extensions),
        ]
    )
    return tuple(tasks)


__all__ = [
    "ByteOrderMarkTask",
    "ClosingTagTask",
    "ConfigSyntaxTask",
    "ControlCharacterTask",
    "EscapeSequenceTask",
    "ExtensionTask",
    "IndentationTask",
    "LineEndingTask",
    "PhpDocCommentTask",
    "Task",
    "TemplateSyntaxTask",
    "TrailingWhitespaceTask",
    "Utf8EncodingTask",
    "build_default_tasks",
]
