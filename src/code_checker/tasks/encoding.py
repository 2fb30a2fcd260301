"""Byte-level tasks: control characters, byte-order mark, UTF-8 well-formedness."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from code_checker.domain.models import Outcome

if TYPE_CHECKING:
    from code_checker.domain.models import FileContext

UTF8_BOM: Final[bytes] = b"\xef\xbb\xbf"

# Tab, LF and CR are allowed.
_CONTROL_CHARACTERS_RE: Final[re.Pattern[bytes]] = re.compile(rb"[\x00-\x08\x0b\x0c\x0e-\x1f]")


class ControlCharacterTask:
    name = "control_characters"

    def check(self, context: FileContext, content: bytes) -> Outcome:
        if _CONTROL_CHARACTERS_RE.search(content):
            return Outcome.error("contains control characters")
        return Outcome.unchanged()


class ByteOrderMarkTask:
    name = "byte_order_mark"

    def check(self, context: FileContext, content: bytes) -> Outcome:
        if content.startswith(UTF8_BOM):
            return Outcome.replace(content[len(UTF8_BOM) :], "contains BOM")
        return Outcome.unchanged()


class Utf8EncodingTask:
    name = "utf8_encoding"

    def check(self, context: FileContext, content: bytes) -> Outcome:
        try:
            content.decode("utf-8")
        except UnicodeDecodeError:
            return Outcome.error("is not valid UTF-8 file")
        return Outcome.unchanged()


__all__ = ["UTF8_BOM", "ByteOrderMarkTask", "ControlCharacterTask", "Utf8EncodingTask"]
