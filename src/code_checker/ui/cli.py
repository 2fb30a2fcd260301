"""Command-line interface for code-checker."""

from __future__ import annotations

import argparse
import importlib.util
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from code_checker.config import (
    ConfigLoadError,
    ConfigValidationError,
    load_config,
)
from code_checker.constants import LOG_LEVELS, VERSION
from code_checker.observability import LoggingConfig, setup_structured_logging, shutdown_logging
from code_checker.ui.render import create_renderer

# Import names of the template and config collaborators, with their distributions.
REQUIRED_COLLABORATORS: Final[tuple[tuple[str, str], ...]] = (
    ("jinja2", "Jinja2"),
    ("yaml", "PyYAML"),
)


@dataclass(frozen=True, slots=True)
class StartupError(RuntimeError):
    """Fatal failure detected before any file is scanned."""

    message: str
    exit_code: int = 2

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="code-checker",
        description=(
            "Scan a source tree for encoding, whitespace and PHP hygiene problems.\n\n"
            "Examples:\n"
            "  code-checker                  Report problems under the current directory\n"
            "  code-checker -d src -f        Fix what can be fixed under ./src\n"
            "  code-checker -f -l            Also convert line endings to the system's\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "-d",
        "--directory",
        dest="directory",
        default=None,
        help="Folder to scan (default: current directory).",
    )
    parser.add_argument(
        "-f",
        "--fix",
        action="store_true",
        default=False,
        help="Fix files in place (default: read-only).",
    )
    parser.add_argument(
        "-l",
        "--eol",
        action="store_true",
        default=False,
        help="Convert newline characters to the system's line ending.",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to TOML config (default: ./code-checker.toml if present).",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=LOG_LEVELS,
        type=str.upper,
        default=None,
        help="Structured log level written to stderr.",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write structured JSON-lines logs to this file.",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        default=False,
        help="Do not draw the progress indicator.",
    )
    return parser


# ---------------------------------------------------------------------------
# Entry
# ---------------------------------------------------------------------------


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse argv, run the checker, and return the process exit code."""

    parser = build_parser()
    namespace = parser.parse_args(list(argv) if argv is not None else None)

    try:
        return _run(namespace)
    except StartupError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return exc.exit_code


def _run(args: argparse.Namespace) -> int:
    read_only = not args.fix
    create_renderer(read_only=read_only, progress=False).banner()

    root = _scan_root(args)
    config = _load_effective_config(args)
    _require_collaborators()

    checker = config["checker"]
    observability = config["observability"]
    handle = setup_structured_logging(
        LoggingConfig(
            level=observability["log_level"],
            log_file=observability["log_file"] or None,
        )
    )
    try:
        # Deferred until the collaborators are known to be importable.
        from code_checker.pipeline import run_pipeline
        from code_checker.tasks import build_default_tasks
        from code_checker.walker import iter_files

        tasks = build_default_tasks(
            normalize_line_endings=checker["normalize_line_endings"],
            indentation_extensions=checker["indentation_extensions"],
        )
        renderer = create_renderer(
            read_only=read_only,
            progress=checker["progress"] and not args.no_progress,
        )
        renderer.run_started(str(root))
        result = run_pipeline(
            iter_files(root, checker["include"], checker["exclude"]),
            tasks,
            root=root,
            read_only=read_only,
            emit=renderer.diagnostic,
            on_progress=renderer.progress,
        )
        renderer.run_finished(result)
        return 0 if result.success else 1
    finally:
        shutdown_logging(handle)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _scan_root(args: argparse.Namespace) -> Path:
    raw = args.directory if args.directory is not None else "."
    candidate = Path(raw).expanduser().resolve()
    if not candidate.is_dir():
        raise StartupError(f"Path {candidate} is not a directory")
    return candidate


def _load_effective_config(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, object] = {
        "observability.log_level": args.log_level,
        "observability.log_file": (
            str(Path(args.log_file).expanduser().resolve()) if args.log_file else None
        ),
    }
    if args.eol:
        overrides["checker.normalize_line_endings"] = True

    try:
        return load_config(args.config_path, cli_overrides=overrides)
    except (ConfigLoadError, ConfigValidationError) as exc:
        raise StartupError(str(exc)) from exc


def _require_collaborators() -> None:
    missing = [
        distribution
        for module_name, distribution in REQUIRED_COLLABORATORS
        if importlib.util.find_spec(module_name) is None
    ]
    if missing:
        raise StartupError(f"Missing required packages: {', '.join(missing)}")


__all__ = ["REQUIRED_COLLABORATORS", "StartupError", "build_parser", "run_cli"]
