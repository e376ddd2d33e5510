"""
Parser registry for record-defaults.

Maps each ``TypeFamily`` to the function that turns a default literal into
a typed value for that family.

Design: Dispatch Table
- base.py defines the ``ParserFunc`` contract and the shared ``convert`` step.
- numbers.py implements INT, UINT, FLOAT and COMPLEX (width-checked).
- scalars.py implements BOOL and STRING.
- duration.py implements DURATION (``timedelta`` / ``pandas.Timedelta``).
- composite.py implements MAP, SLICE and ARRAY via pydantic JSON decoding.

``PARSERS`` is built once at import time and exposed read-only, so it can
be shared across threads without locking.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from record_defaults.exceptions import UnsupportedTypeError
from record_defaults.families import TypeFamily, resolve_family, type_name
from record_defaults.parsers.base import ParserFunc
from record_defaults.parsers.composite import parse_array, parse_map, parse_slice
from record_defaults.parsers.duration import parse_duration
from record_defaults.parsers.numbers import parse_complex, parse_float, parse_int, parse_uint
from record_defaults.parsers.scalars import parse_bool, parse_string

__all__ = ["PARSERS", "ParserFunc", "get_parser", "parse_literal"]

PARSERS: Mapping[TypeFamily, ParserFunc] = MappingProxyType({
    TypeFamily.INT: parse_int,
    TypeFamily.UINT: parse_uint,
    TypeFamily.FLOAT: parse_float,
    TypeFamily.COMPLEX: parse_complex,
    TypeFamily.BOOL: parse_bool,
    TypeFamily.STRING: parse_string,
    TypeFamily.DURATION: parse_duration,
    TypeFamily.MAP: parse_map,
    TypeFamily.SLICE: parse_slice,
    TypeFamily.ARRAY: parse_array,
})


def get_parser(family: TypeFamily) -> ParserFunc:
    return PARSERS[family]


def parse_literal(literal: str, target: Any) -> Any:
    """Parse *literal* for a field annotated *target* (``Optional`` already removed).

    Raises:
        UnsupportedTypeError: If *target* belongs to no type family.
        RecordDefaultsError: Any family-specific parse failure.
    """
    family = resolve_family(target)
    if family is None:
        raise UnsupportedTypeError(f'unsupported type "{type_name(target)}"')
    return PARSERS[family](literal, target)
