"""
Boolean and string parsers for record-defaults.

Booleans accept ``1``/``t``/``true`` and ``0``/``f``/``false`` in any
letter case. Strings are used verbatim.
"""

from __future__ import annotations

from typing import Any

from record_defaults.exceptions import LiteralSyntaxError
from record_defaults.parsers.base import convert

_TRUE_LITERALS = frozenset({"1", "t", "true"})
_FALSE_LITERALS = frozenset({"0", "f", "false"})


def parse_bool(literal: str, target: Any) -> Any:
    lowered = literal.lower()
    if lowered in _TRUE_LITERALS:
        return convert(True, target)
    if lowered in _FALSE_LITERALS:
        return convert(False, target)
    raise LiteralSyntaxError(f'parsing "{literal}": invalid syntax')


def parse_string(literal: str, target: Any) -> Any:
    return convert(literal, target)
