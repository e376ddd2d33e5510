"""
Duration parser for record-defaults.

A duration literal is a signed sequence of decimal numbers, each with an
optional fraction and a mandatory unit suffix: ``"300ms"``, ``"1.5h"``,
``"1h30m"``, ``"-2m3.5s"``. The bare literal ``"0"`` needs no unit.

Supported units:
  ns       -> nanoseconds
  us/µs/μs -> microseconds
  ms       -> milliseconds
  s        -> seconds
  m        -> minutes
  h        -> hours

Why integer nanoseconds:
  The literal is summed exactly as an int count of nanoseconds (no float
  rounding), then handed to the target type. ``pandas.Timedelta`` keeps
  every nanosecond; ``datetime.timedelta`` truncates toward zero to its
  microsecond resolution.
"""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Any

import pandas as pd

from record_defaults.exceptions import (
    InvalidDurationError,
    LiteralSyntaxError,
    OutOfRangeError,
)

NANOSECONDS_PER_UNIT: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC Greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3_600 * 1_000_000_000,
}

_MAX_NANOSECONDS = (1 << 63) - 1

# 20+ significant digits exceed the range in any unit
_MAX_WHOLE_DIGITS = 19
# Fraction digits past this are ignored (below nanosecond precision for every unit)
_MAX_FRACTION_DIGITS = 18

# One "<int>[.<frac>]<unit>" component; always matches (possibly empty)
_COMPONENT_RE = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")


def parse_duration_literal(literal: str) -> int:
    """Parse a duration literal into a signed count of nanoseconds.

    Raises:
        InvalidDurationError: If *literal* is empty or a component has no digits.
        LiteralSyntaxError: If a unit is missing or unknown.
        OutOfRangeError: If the total exceeds the signed 64-bit range.
    """
    text = literal
    negative = False
    if text[:1] in ("+", "-"):
        negative = text[0] == "-"
        text = text[1:]
    if text == "0":
        return 0
    if text == "":
        raise InvalidDurationError(f'invalid duration "{literal}"')

    total = 0
    overflow = False
    while text:
        match = _COMPONENT_RE.match(text)
        whole, fraction, unit = match.group(1), match.group(2), match.group(3)
        if not whole and not fraction:
            raise InvalidDurationError(f'invalid duration "{literal}"')
        if not unit:
            raise LiteralSyntaxError(f'missing unit in duration "{literal}"')
        scale = NANOSECONDS_PER_UNIT.get(unit)
        if scale is None:
            raise LiteralSyntaxError(f'unknown unit "{unit}" in duration "{literal}"')

        if len(whole.lstrip("0")) > _MAX_WHOLE_DIGITS:
            overflow = True
        else:
            total += int(whole or "0") * scale
        if fraction:
            fraction = fraction[:_MAX_FRACTION_DIGITS]
            total += int(fraction) * scale // 10 ** len(fraction)
        text = text[match.end():]

    limit = _MAX_NANOSECONDS + 1 if negative else _MAX_NANOSECONDS
    if overflow or total > limit:
        raise OutOfRangeError(f'invalid duration "{literal}": value out of range')
    return -total if negative else total


def _to_timedelta(nanoseconds: int) -> timedelta:
    micros = abs(nanoseconds) // 1_000
    return timedelta(microseconds=-micros if nanoseconds < 0 else micros)


def parse_duration(literal: str, target: Any) -> Any:
    """Parse a duration literal for a ``timedelta``/``pandas.Timedelta`` field.

    Raises:
        OutOfRangeError: For ``pandas.Timedelta`` targets, also when the
            literal is exactly -2**63 ns, which pandas reserves for ``NaT``.
    """
    nanoseconds = parse_duration_literal(literal)
    if isinstance(target, type) and issubclass(target, pd.Timedelta):
        if nanoseconds == -_MAX_NANOSECONDS - 1:
            raise OutOfRangeError(f'invalid duration "{literal}": value out of range')
        return pd.Timedelta(nanoseconds, unit="ns")
    return _to_timedelta(nanoseconds)
