"""Syntax validation of template and config files through their collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from code_checker.constants import CONFIG_EXTENSIONS, TEMPLATE_EXTENSIONS
from code_checker.domain.models import Outcome
from code_checker.tasks.base import ExtensionTask, decode
from code_checker.validators import compile_template, decode_config

if TYPE_CHECKING:
    from code_checker.domain.models import FileContext


class TemplateSyntaxTask(ExtensionTask):
    name = "template_syntax"
    extensions = TEMPLATE_EXTENSIONS

    def check(self, context: FileContext, content: bytes) -> Outcome:
        if not self.applies_to(context):
            return Outcome.unchanged()
        failure = compile_template(decode(content), name=context.path)
        if failure is None or failure.recoverable:
            return Outcome.unchanged()
        return Outcome.error(failure.describe(), line=failure.line)


class ConfigSyntaxTask(ExtensionTask):
    name = "config_syntax"
    extensions = CONFIG_EXTENSIONS

    def check(self, context: FileContext, content: bytes) -> Outcome:
        if not self.applies_to(context):
            return Outcome.unchanged()
        failure = decode_config(decode(content))
        if failure is None:
            return Outcome.unchanged()
        return Outcome.error(failure.describe(), line=failure.line)


__all__ = ["ConfigSyntaxTask", "TemplateSyntaxTask"]
