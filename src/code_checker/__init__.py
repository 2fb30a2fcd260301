"""
code-checker — package root

File: src/code_checker/__init__.py
Last updated: 2026-10-18

Purpose
- Package root for a source-tree linter and auto-fixer aimed at PHP projects.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
- Must not import the template or config collaborators; the CLI checks for them
  before building the task list.
"""

from code_checker.constants import VERSION

__version__ = VERSION

__all__ = ["VERSION", "__version__"]
