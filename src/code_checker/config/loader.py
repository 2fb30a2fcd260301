"""
code-checker — runtime config loader.

File: src/code_checker/config/loader.py
Last updated: 2026-10-18

Purpose
- Produce the effective settings for one run from four layers.

Layering (later wins)
1. Built-in defaults from ``schema.default_config``.
2. ``code-checker.toml`` (or ``--config PATH``), parsed with ``tomllib``.
3. ``CODE_CHECKER_<SECTION>_<KEY>`` environment variables.
4. Command-line overrides keyed by dotted setting name, e.g. ``checker.progress``.

Functional requirements
- An explicitly named config file must exist; the default one is optional.
- Every layer is validated before any file is scanned.
- A relative ``observability.log_file`` is anchored at the config file's directory.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final, Literal

from code_checker.config.schema import assert_valid_config, default_config, merge_config
from code_checker.constants import DEFAULT_CONFIG_FILE

_ENV_PREFIX: Final[str] = "CODE_CHECKER_"

SettingKind = Literal["str", "bool", "list"]

# Settings that may be overridden from the environment; ``meta`` is not among them.
_ENV_SETTINGS: Final[dict[str, SettingKind]] = {
    "checker.include": "list",
    "checker.exclude": "list",
    "checker.indentation_extensions": "list",
    "checker.normalize_line_endings": "bool",
    "checker.progress": "bool",
    "observability.log_level": "str",
    "observability.log_file": "str",
}

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSY: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


class ConfigLoadError(ValueError):
    """Raised when the config file is unusable or an override cannot be coerced."""


def _env_variable(setting: str) -> str:
    """``checker.progress`` -> ``CODE_CHECKER_CHECKER_PROGRESS``."""

    return _ENV_PREFIX + setting.replace(".", "_").upper()


def load_config(
    config_path: str | Path | None = None,
    *,
    cli_overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Return the validated effective config for one run."""

    source = Path(config_path if config_path is not None else DEFAULT_CONFIG_FILE)
    source = source.expanduser().resolve()

    from_file = _read_config_file(source, required=config_path is not None)
    config = assert_valid_config(merge_config(default_config(), from_file))

    overrides = _environment_overrides(os.environ if environ is None else environ)
    for setting, value in (cli_overrides or {}).items():
        if value is not None:
            overrides[setting] = value
    config = assert_valid_config(merge_config(config, _nest(overrides)))

    _anchor_log_file(config["observability"], source.parent)
    return config


def _read_config_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.is_file():
        if required:
            raise ConfigLoadError(f"config file not found: {path}")
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"invalid TOML in {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigLoadError(f"unable to read config file {path}: {exc}") from exc


def _environment_overrides(environ: Mapping[str, str]) -> dict[str, object]:
    overrides: dict[str, object] = {}
    for setting, kind in _ENV_SETTINGS.items():
        name = _env_variable(setting)
        if name in environ:
            overrides[setting] = _coerce(environ[name].strip(), kind, name)
    return overrides


def _coerce(raw: str, kind: SettingKind, name: str) -> object:
    if kind == "list":
        return [item.strip() for item in raw.split(",") if item.strip()]
    if kind == "str":
        return raw
    if raw.lower() in _TRUTHY:
        return True
    if raw.lower() in _FALSY:
        return False
    raise ConfigLoadError(f"{name}={raw!r} is not a boolean (use 1/0, true/false, yes/no, on/off)")


def _nest(flat: Mapping[str, object]) -> dict[str, Any]:
    nested: dict[str, Any] = {}
    for setting, value in flat.items():
        section, _, key = setting.partition(".")
        if not key:
            raise ConfigLoadError(f"override {setting!r} must be of the form section.key")
        nested.setdefault(section, {})[key] = value
    return nested


def _anchor_log_file(observability: dict[str, Any], base_dir: Path) -> None:
    raw = observability["log_file"]
    if not raw.strip():
        return
    log_file = Path(raw).expanduser()
    if not log_file.is_absolute():
        log_file = base_dir / log_file
    observability["log_file"] = Path(os.path.normpath(log_file)).as_posix()


__all__ = ["ConfigLoadError", "load_config"]
