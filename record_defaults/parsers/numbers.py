"""
Numeric literal parsers for record-defaults.

Handles the INT, UINT, FLOAT and COMPLEX families. Default literals are
written the way numeric literals are written in source code:

- Integers: optional sign (signed only), ``0x``/``0o``/``0b`` prefixes,
  legacy leading-zero octal (``0755``), ``_`` between digits
  (``1_000_000``).
- Floats: decimal or scientific (``3.14``, ``1e-3``), hexadecimal
  (``0x1p-2``), case-insensitive ``inf``/``infinity``/``nan``.
- Complex: ``a``, ``bi``, ``a+bi``, ``a-bi``, optionally parenthesised;
  each component is a float literal.

Every literal is checked against the *width* of the target annotation
(``numpy.int8`` -> 8 bits, ``float`` -> 64 bits, ...). Grammar errors raise
``LiteralSyntaxError``; well-formed values that do not fit raise
``OutOfRangeError``. Syntax is always checked before range.
"""

from __future__ import annotations

import math
import re
from typing import Any

import numpy as np

from record_defaults.exceptions import (
    LiteralSyntaxError,
    OutOfRangeError,
    UnsupportedTypeError,
)
from record_defaults.families import TypeFamily, bit_size, resolve_family, type_name
from record_defaults.parsers.base import convert

# (pattern, base, prefix length); tried in order
_INTEGER_FORMS: list[tuple[re.Pattern[str], int, int]] = [
    (re.compile(r"0[xX](?:_?[0-9a-fA-F])+"), 16, 2),
    (re.compile(r"0[oO](?:_?[0-7])+"), 8, 2),
    (re.compile(r"0[bB](?:_?[01])+"), 2, 2),
    (re.compile(r"0(?:_?[0-7])+"), 8, 1),
    (re.compile(r"[1-9](?:_?[0-9])*|0"), 10, 0),
]

_DEC = r"[0-9](?:_?[0-9])*"
_HEX = r"[0-9a-fA-F](?:_?[0-9a-fA-F])*"
_UNSIGNED_FLOAT = (
    rf"(?:{_DEC}(?:\.(?:{_DEC})?)?|\.{_DEC})(?:[eE][+-]?{_DEC})?"
    rf"|0[xX]_?(?:{_HEX}(?:\.(?:{_HEX})?)?|\.{_HEX})[pP][+-]?{_DEC}"
    r"|(?i:inf(?:inity)?)"
)
_FLOAT_RE = re.compile(rf"[+-]?(?:{_UNSIGNED_FLOAT})|(?i:nan)")
_COMPLEX_PAIR_RE = re.compile(
    rf"(?P<real>[+-]?(?:{_UNSIGNED_FLOAT})|(?i:nan))"
    rf"(?P<imag>[+-](?:{_UNSIGNED_FLOAT}|(?i:nan)))i"
)


def _message(literal: str, reason: str) -> str:
    return f'parsing "{literal}": {reason}'


def _unsupported(target: Any) -> UnsupportedTypeError:
    return UnsupportedTypeError(f'unsupported type "{type_name(target)}"')


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------

def parse_integer_literal(literal: str, signed: bool = True) -> int:
    """Parse an integer literal into an unbounded Python int.

    Raises:
        LiteralSyntaxError: If *literal* is not a valid integer literal, or
            carries a sign when *signed* is False.
        OutOfRangeError: If the literal has more digits than Python will
            convert (see ``sys.get_int_max_str_digits``).
    """
    body, negative = literal, False
    if signed and body[:1] in ("+", "-"):
        negative = body[0] == "-"
        body = body[1:]

    for pattern, base, prefix in _INTEGER_FORMS:
        if pattern.fullmatch(body):
            try:
                value = int(body[prefix:].replace("_", ""), base)
            except ValueError as exc:
                # Past the interpreter's int-string digit limit; wider than any field
                raise OutOfRangeError(_message(literal, "value out of range")) from exc
            return -value if negative else value
    raise LiteralSyntaxError(_message(literal, "invalid syntax"))


def parse_int(literal: str, target: Any) -> Any:
    """Parse a signed integer and check it against the target's bit width."""
    bits = bit_size(target)
    value = parse_integer_literal(literal, signed=True)
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        raise OutOfRangeError(_message(literal, "value out of range"))
    return convert(value, target)


def parse_uint(literal: str, target: Any) -> Any:
    """Parse an unsigned integer; any sign character is a syntax error."""
    bits = bit_size(target)
    value = parse_integer_literal(literal, signed=False)
    if value >= 1 << bits:
        raise OutOfRangeError(_message(literal, "value out of range"))
    return convert(value, target)


# ---------------------------------------------------------------------------
# Floats and complex numbers
# ---------------------------------------------------------------------------

def parse_float_literal(text: str, bits: int, literal: str | None = None) -> float:
    """Parse a float literal and check it fits a *bits*-wide float.

    Infinity and NaN literals never raise range errors; only finite
    literals that overflow do.

    Args:
        text: The float literal (one component, for complex numbers).
        bits: 32 or 64.
        literal: The full original literal, used in error messages.
    """
    literal = text if literal is None else literal
    if not _FLOAT_RE.fullmatch(text):
        raise LiteralSyntaxError(_message(literal, "invalid syntax"))

    cleaned = text.replace("_", "")
    try:
        if cleaned.lstrip("+-")[:2].lower() == "0x":
            value = float.fromhex(cleaned)
        else:
            value = float(cleaned)
    except OverflowError as exc:
        raise OutOfRangeError(_message(literal, "value out of range")) from exc

    if math.isinf(value) and not cleaned.lstrip("+-").lower().startswith("inf"):
        raise OutOfRangeError(_message(literal, "value out of range"))
    if bits == 32 and math.isfinite(value):
        with np.errstate(over="ignore"):
            if np.isinf(np.float32(value)):
                raise OutOfRangeError(_message(literal, "value out of range"))
    return value


def parse_float(literal: str, target: Any) -> Any:
    """Parse a float literal for a ``float``/``numpy.float32``/``numpy.float64`` field."""
    if resolve_family(target) is not TypeFamily.FLOAT:
        raise _unsupported(target)
    value = parse_float_literal(literal, bit_size(target))
    return convert(value, target)


def parse_complex(literal: str, target: Any) -> Any:
    """Parse ``a+bi`` style literals for ``complex``/``numpy.complex64``/``numpy.complex128``.

    Each component follows the float rules at half the complex width, so
    ``numpy.complex64`` components must fit ``float32``.
    """
    if resolve_family(target) is not TypeFamily.COMPLEX:
        raise _unsupported(target)
    component_bits = bit_size(target) // 2

    text = literal
    if len(text) >= 2 and text[0] == "(" and text[-1] == ")":
        text = text[1:-1]

    if _FLOAT_RE.fullmatch(text):
        real, imag = text, "0"
    elif text.endswith("i") and _FLOAT_RE.fullmatch(text[:-1]):
        real, imag = "0", text[:-1]
    else:
        match = _COMPLEX_PAIR_RE.fullmatch(text)
        if match is None:
            raise LiteralSyntaxError(_message(literal, "invalid syntax"))
        real, imag = match["real"], match["imag"]

    value = complex(
        parse_float_literal(real, component_bits, literal),
        parse_float_literal(imag, component_bits, literal),
    )
    return convert(value, target)
