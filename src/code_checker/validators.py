"""
code-checker — syntax-validation collaborators

File: src/code_checker/validators.py
Last updated: 2026-10-18

Purpose
- Wrap the template engine (Jinja2) and the structured-config parser (PyYAML)
  so callers receive result values instead of library exceptions.

Functional requirements
- ``None`` means the content compiled/decoded cleanly.
- A failure carries the collaborator's message, an optional 1-based line, and
  whether it is the recoverable "unknown construct" case.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

import yaml
from jinja2 import Environment, TemplateSyntaxError

# Tags, filters and tests registered by the surrounding application are not
# known here; referencing them is not a syntax error.
_UNKNOWN_CONSTRUCT_RE: Final[re.Pattern[str]] = re.compile(
    r"(?:Encountered unknown tag|No (?:filter|test) named)"
)

_TEMPLATE_ENVIRONMENT: Final[Environment] = Environment(
    autoescape=False,
    keep_trailing_newline=True,
    extensions=["jinja2.ext.do", "jinja2.ext.loopcontrols"],
)


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    message: str
    line: int | None = None
    recoverable: bool = False

    def describe(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} on line {self.line}"


def compile_template(source: str, *, name: str | None = None) -> ValidationFailure | None:
    """Compile ``source`` as a Jinja2 template without rendering it."""

    try:
        _TEMPLATE_ENVIRONMENT.compile(source, name=name)
    except TemplateSyntaxError as exc:
        message = (exc.message or str(exc)).strip()
        return ValidationFailure(
            message=message,
            line=exc.lineno or None,
            recoverable=_UNKNOWN_CONSTRUCT_RE.match(message) is not None,
        )
    return None


def decode_config(source: str) -> ValidationFailure | None:
    """Decode every YAML document in ``source`` with the safe loader."""

    try:
        for _document in yaml.safe_load_all(source):
            pass
    except yaml.MarkedYAMLError as exc:
        line = exc.problem_mark.line + 1 if exc.problem_mark is not None else None
        message = exc.problem or exc.context or str(exc)
        return ValidationFailure(message=" ".join(message.split()), line=line)
    except yaml.YAMLError as exc:
        return ValidationFailure(message=" ".join(str(exc).split()))
    return None


__all__ = ["ValidationFailure", "compile_template", "decode_config"]
