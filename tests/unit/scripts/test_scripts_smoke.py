"""
code-checker — script subprocess smoke tests

File: tests/unit/scripts/test_scripts_smoke.py
Last updated: 2026-10-18

Purpose
- Keep the no-install wrapper executable from a bare source checkout.
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[3]
SCRIPT = REPO_ROOT / "scripts" / "run_code_checker.py"


def _run_script(cwd: Path, *args: str) -> subprocess.CompletedProcess[str]:
    env = {key: value for key, value in os.environ.items() if not key.startswith("CODE_CHECKER_")}
    return subprocess.run(
        [sys.executable, str(SCRIPT), *args],
        cwd=cwd,
        text=True,
        capture_output=True,
        check=False,
        env=env,
    )


def _render_failure(label: str, completed: subprocess.CompletedProcess[str]) -> str:
    return (
        f"{label} failed with exit code {completed.returncode}\n"
        f"stdout:\n{completed.stdout}\n"
        f"stderr:\n{completed.stderr}\n"
    )


@pytest.mark.unit
def test_wrapper_help_smoke(tmp_path: Path) -> None:
    result = _run_script(tmp_path, "--help")

    assert result.returncode == 0, _render_failure("run_code_checker --help", result)
    lowered_output = result.stdout.lower()
    assert "usage" in lowered_output
    assert "--fix" in lowered_output
    assert "--eol" in lowered_output


@pytest.mark.unit
def test_wrapper_scans_directory(tmp_path: Path) -> None:
    (tmp_path / "a.php").write_bytes(b"<?php\necho 1;\n")
    (tmp_path / "b.txt").write_bytes(b"trailing  \n")

    result = _run_script(tmp_path, "--no-progress")

    assert result.returncode == 1, _render_failure("run_code_checker", result)
    assert "[FOUND] b.txt   2 bytes of whitespaces" in result.stdout.splitlines()
