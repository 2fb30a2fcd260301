"""Public config API: load and validate ``code-checker.toml`` settings."""

from code_checker.config.loader import ConfigLoadError, load_config
from code_checker.config.schema import (
    ConfigValidationError,
    ConfigValidationIssue,
    assert_valid_config,
    default_config,
    merge_config,
    validate_config,
)

__all__ = [
    "ConfigLoadError",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "assert_valid_config",
    "default_config",
    "load_config",
    "merge_config",
    "validate_config",
]
