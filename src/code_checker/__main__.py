"""Module entrypoint for ``python -m code_checker``."""

from __future__ import annotations

from code_checker.main import cli_entrypoint

if __name__ == "__main__":
    raise SystemExit(cli_entrypoint())
