"""Shared utilities."""

from code_checker.utils.fs import atomic_write

__all__ = ["atomic_write"]
