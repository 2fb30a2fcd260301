"""
code-checker — task interface

File: src/code_checker/tasks/base.py
Last updated: 2026-10-18

Purpose
- Define the check/fix capability every pipeline task implements.

Functional requirements
- A task is pure over ``(FileContext, content)`` and returns an ``Outcome``.
- A task that does not apply to the file's extension returns ``Outcome.unchanged()``;
  filtering is never done by the scheduler.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from code_checker.domain.models import FileContext, Outcome

# Characters stripped by a right-trim of file content.
RTRIM_BYTES = b" \t\n\r\0\x0b"


@runtime_checkable
class Task(Protocol):
    """One ordered check-and-fix pass over a file's whole content."""

    name: str

    def check(self, context: FileContext, content: bytes) -> Outcome: ...


class ExtensionTask:
    """Base for tasks restricted to a fixed set of file extensions."""

    name: ClassVar[str] = ""
    extensions: tuple[str, ...] = ()

    def applies_to(self, context: FileContext) -> bool:
        return context.is_(*self.extensions)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def decode(content: bytes) -> str:
    """Decode content already vetted by the UTF-8 validator."""

    return content.decode("utf-8", errors="surrogateescape")


def line_of(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1


__all__ = ["RTRIM_BYTES", "ExtensionTask", "Task", "decode", "line_of"]
