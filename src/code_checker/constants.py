"""Stable constants shared across the checker."""

from __future__ import annotations

from typing import Final

VERSION: Final[str] = "2.2"

CONFIG_SCHEMA_VERSION: Final[int] = 1
DEFAULT_CONFIG_FILE: Final[str] = "code-checker.toml"

# File name patterns scanned by default.
DEFAULT_INCLUDE: Final[tuple[str, ...]] = (
    "*.php",
    "*.phpt",
    "*.inc",
    "*.txt",
    "*.md",
    "*.css",
    "*.less",
    "*.js",
    "*.json",
    "*.j2",
    "*.jinja",
    "*.jinja2",
    "*.htm",
    "*.html",
    "*.phtml",
    "*.xml",
    "*.ini",
    "*.neon",
    "*.yaml",
    "*.yml",
    "*.sh",
    "*.bat",
    "*.sql",
    ".htaccess",
    ".gitignore",
)

# Matched against directory names below the root; a hit prunes the whole subtree.
DEFAULT_EXCLUDE: Final[tuple[str, ...]] = (".*", "*.tmp", "tmp", "temp", "log", "vendor")

PHP_EXTENSIONS: Final[tuple[str, ...]] = ("php", "phpt")
TEMPLATE_EXTENSIONS: Final[tuple[str, ...]] = ("j2", "jinja", "jinja2")
CONFIG_EXTENSIONS: Final[tuple[str, ...]] = ("yaml", "yml")
SHELL_EXTENSIONS: Final[tuple[str, ...]] = ("sh",)
INDENTATION_EXTENSIONS: Final[tuple[str, ...]] = (
    "php",
    "phpt",
    "css",
    "less",
    "js",
    "json",
    "neon",
)

LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")

__all__ = [
    "CONFIG_EXTENSIONS",
    "CONFIG_SCHEMA_VERSION",
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_EXCLUDE",
    "DEFAULT_INCLUDE",
    "INDENTATION_EXTENSIONS",
    "LOG_LEVELS",
    "PHP_EXTENSIONS",
    "SHELL_EXTENSIONS",
    "TEMPLATE_EXTENSIONS",
    "VERSION",
]
