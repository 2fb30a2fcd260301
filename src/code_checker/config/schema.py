"""
code-checker — configuration schema and validation.

File: src/code_checker/config/schema.py
Last updated: 2026-10-18

Purpose
- Own the built-in defaults and the strict shape of ``code-checker.toml``.

Functional requirements
- Every section and every key is required once defaults are merged in, so a
  missing entry means a layer deleted it.
- Unknown sections and keys are rejected so typos surface at startup.
- Problems are reported all at once as ``(path, message)`` pairs, where a path
  looks like ``checker.include`` or ``checker.indentation_extensions[2]``.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final

from code_checker.constants import (
    CONFIG_SCHEMA_VERSION,
    DEFAULT_EXCLUDE,
    DEFAULT_INCLUDE,
    INDENTATION_EXTENSIONS,
    LOG_LEVELS,
)

_DEFAULTS: Final[dict[str, dict[str, Any]]] = {
    "meta": {"schema_version": CONFIG_SCHEMA_VERSION},
    "checker": {
        "include": list(DEFAULT_INCLUDE),
        "exclude": list(DEFAULT_EXCLUDE),
        "indentation_extensions": list(INDENTATION_EXTENSIONS),
        "normalize_line_endings": False,
        "progress": True,
    },
    "observability": {
        "log_level": "WARNING",
        "log_file": "",
    },
}

# A field check yields ``(path suffix, message)`` for each problem with a value.
_FieldCheck = Callable[[object], Iterator[tuple[str, str]]]


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    path: str
    message: str


class ConfigValidationError(ValueError):
    """Raised with every issue found in an effective config."""

    def __init__(self, issues: Sequence[ConfigValidationIssue]) -> None:
        self.issues = tuple(issues)
        lines = [f"- {issue.path}: {issue.message}" for issue in self.issues]
        super().__init__("invalid config:\n" + "\n".join(lines))


def default_config() -> dict[str, Any]:
    return copy.deepcopy(_DEFAULTS)


def merge_config(base: Mapping[str, object], overlay: Mapping[str, object]) -> dict[str, Any]:
    """Return ``base`` with ``overlay`` merged in; tables merge, everything else replaces."""

    merged: dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(value, Mapping):
            merged[key] = merge_config(current if isinstance(current, Mapping) else {}, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def validate_config(config: object) -> tuple[ConfigValidationIssue, ...]:
    """Return every issue in ``config``; an empty tuple means it is valid."""

    if not isinstance(config, Mapping):
        return (ConfigValidationIssue("<root>", f"expected object, got {_type_name(config)}"),)

    issues = [ConfigValidationIssue(str(name), "unknown field") for name in _extra_keys(config)]
    for section, fields in _SCHEMA.items():
        if section not in config:
            issues.append(ConfigValidationIssue(section, "missing required section"))
            continue
        body = config[section]
        if not isinstance(body, Mapping):
            issues.append(
                ConfigValidationIssue(section, f"expected object, got {_type_name(body)}")
            )
            continue
        issues.extend(
            ConfigValidationIssue(f"{section}.{name}", "unknown field")
            for name in _extra_keys(body, fields)
        )
        for key, check in fields.items():
            where = f"{section}.{key}"
            if key not in body:
                issues.append(ConfigValidationIssue(where, "missing required field"))
                continue
            issues.extend(
                ConfigValidationIssue(where + suffix, message)
                for suffix, message in check(body[key])
            )
    return tuple(issues)


def assert_valid_config(config: object) -> dict[str, Any]:
    """Return a private copy of ``config`` or raise ``ConfigValidationError``."""

    issues = validate_config(config)
    if issues:
        raise ConfigValidationError(issues)
    assert isinstance(config, Mapping)
    return copy.deepcopy(dict(config))


def _check_schema_version(value: object) -> Iterator[tuple[str, str]]:
    if isinstance(value, bool) or not isinstance(value, int):
        yield "", f"expected integer, got {_type_name(value)}"
    elif value != CONFIG_SCHEMA_VERSION:
        yield "", f"unsupported schema version {value}; expected {CONFIG_SCHEMA_VERSION}"


def _check_patterns(value: object) -> Iterator[tuple[str, str]]:
    if not isinstance(value, list):
        yield "", f"expected list of strings, got {_type_name(value)}"
        return
    for index, item in enumerate(value):
        if not isinstance(item, str) or not item.strip():
            yield f"[{index}]", "expected non-empty string"


def _check_extensions(value: object) -> Iterator[tuple[str, str]]:
    yield from _check_patterns(value)
    if isinstance(value, list):
        for index, item in enumerate(value):
            if isinstance(item, str) and item.startswith("."):
                yield f"[{index}]", "extensions are given without the leading dot"


def _check_flag(value: object) -> Iterator[tuple[str, str]]:
    if not isinstance(value, bool):
        yield "", f"expected boolean, got {_type_name(value)}"


def _check_log_level(value: object) -> Iterator[tuple[str, str]]:
    if value not in LOG_LEVELS:
        yield "", f"invalid value {value!r}; expected one of: {', '.join(LOG_LEVELS)}"


def _check_log_file(value: object) -> Iterator[tuple[str, str]]:
    if not isinstance(value, str):
        yield "", f"expected string, got {_type_name(value)}"
    elif "\x00" in value:
        yield "", "must not contain NUL bytes"


_SCHEMA: Final[dict[str, dict[str, _FieldCheck]]] = {
    "meta": {"schema_version": _check_schema_version},
    "checker": {
        "include": _check_patterns,
        "exclude": _check_patterns,
        "indentation_extensions": _check_extensions,
        "normalize_line_endings": _check_flag,
        "progress": _check_flag,
    },
    "observability": {
        "log_level": _check_log_level,
        "log_file": _check_log_file,
    },
}


def _extra_keys(payload: Mapping[Any, object], known: Mapping[str, object] = _SCHEMA) -> list[Any]:
    return sorted((key for key in payload if key not in known), key=str)


def _type_name(value: object) -> str:
    return type(value).__name__


__all__ = [
    "ConfigValidationError",
    "ConfigValidationIssue",
    "assert_valid_config",
    "default_config",
    "merge_config",
    "validate_config",
]
