"""UI package exports for the CLI and its plain-text renderer."""

from code_checker.ui.cli import StartupError, build_parser, run_cli
from code_checker.ui.render import CLIRenderer, create_renderer, format_diagnostic

__all__ = [
    "CLIRenderer",
    "StartupError",
    "build_parser",
    "create_renderer",
    "format_diagnostic",
    "run_cli",
]
