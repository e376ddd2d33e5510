"""
Type model for record-defaults.

Maps a field annotation to the coarse *type family* that selects its
parser, and answers the small questions the engine and parsers ask about
annotations (is it optional? is it a record? how many bits wide?).

Supported families and their annotations:
  INT      -> int, numpy.int8 ... numpy.int64 (and int subclasses)
  UINT     -> numpy.uint8 ... numpy.uint64
  FLOAT    -> float, numpy.float32, numpy.float64
  COMPLEX  -> complex, numpy.complex64, numpy.complex128
  BOOL     -> bool, numpy.bool_
  STRING   -> str
  DURATION -> datetime.timedelta, pandas.Timedelta
  MAP      -> dict, dict[K, V], Mapping[K, V]
  SLICE    -> list, list[T], tuple, tuple[T, ...]
  ARRAY    -> tuple[T, T, ..., T] (homogeneous, fixed length)

Anything else resolves to ``None`` and is unsupported for parsing.
"""

from __future__ import annotations

import dataclasses
import types
from collections.abc import Mapping
from datetime import timedelta
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin

import numpy as np
from pydantic import BaseModel

_NONE_TYPE = type(None)

# Python scalar widths (Go-style: plain int is 64-bit)
_BUILTIN_BITS: dict[type, int] = {int: 64, float: 64, complex: 128}

_FLOAT_BITS = (32, 64)
_COMPLEX_BITS = (64, 128)


class TypeFamily(str, Enum):
    """Closed set of parser dispatch keys."""

    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    COMPLEX = "complex"
    BOOL = "bool"
    STRING = "string"
    DURATION = "duration"
    MAP = "map"
    SLICE = "slice"
    ARRAY = "array"


COMPOSITE_FAMILIES = frozenset({TypeFamily.MAP, TypeFamily.SLICE, TypeFamily.ARRAY})


def strip_annotated(tp: Any) -> Any:
    """Drop ``Annotated[...]`` extras, returning the underlying type."""
    while get_origin(tp) is Annotated:
        tp = tp.__origin__
    return tp


def unwrap_optional(tp: Any) -> tuple[Any, bool]:
    """Split ``Optional[T]`` / ``T | None`` into ``(T, True)``.

    Unions with more than one non-None member are polymorphic and are
    returned unchanged as ``(tp, False)``.
    """
    tp = strip_annotated(tp)
    if get_origin(tp) in (Union, types.UnionType):
        args = get_args(tp)
        members = [a for a in args if a is not _NONE_TYPE]
        if len(members) == 1 and len(members) < len(args):
            return strip_annotated(members[0]), True
    return tp, False


def is_record_type(tp: Any) -> bool:
    """True for dataclass classes and pydantic model classes."""
    if not isinstance(tp, type) or get_origin(tp) is not None:
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def bit_size(tp: Any) -> int:
    """Width in bits of a numeric annotation.

    numpy scalar types report their dtype size; builtin ``int`` and
    ``float`` are 64 bits and ``complex`` is 128.
    """
    if isinstance(tp, type) and issubclass(tp, np.generic):
        return np.dtype(tp).itemsize * 8
    for base, bits in _BUILTIN_BITS.items():
        if isinstance(tp, type) and issubclass(tp, base):
            return bits
    return 64


def array_shape(tp: Any) -> tuple[Any, int]:
    """Return ``(element_type, capacity)`` of a fixed-length tuple annotation."""
    args = get_args(strip_annotated(tp))
    return args[0], len(args)


def _resolve_generic(tp: Any) -> TypeFamily | None:
    origin = get_origin(tp)
    if origin in (dict, Mapping):
        return TypeFamily.MAP
    if origin is list:
        return TypeFamily.SLICE
    if origin is tuple:
        args = get_args(tp)
        if len(args) == 2 and args[1] is Ellipsis:
            return TypeFamily.SLICE
        if args and all(a == args[0] for a in args):
            return TypeFamily.ARRAY
    return None


def resolve_family(tp: Any) -> TypeFamily | None:
    """Map an (already unwrapped) annotation to its parser family."""
    tp = strip_annotated(tp)
    if get_origin(tp) is not None:
        return _resolve_generic(tp)
    if not isinstance(tp, type):
        return None

    if tp in (dict, Mapping):
        return TypeFamily.MAP
    if tp in (list, tuple):
        return TypeFamily.SLICE
    # bool before int: bool is an int subclass
    if issubclass(tp, (bool, np.bool_)):
        return TypeFamily.BOOL
    if issubclass(tp, np.unsignedinteger):
        return TypeFamily.UINT
    if issubclass(tp, (int, np.signedinteger)):
        return TypeFamily.INT
    if issubclass(tp, (float, np.floating)):
        return TypeFamily.FLOAT if bit_size(tp) in _FLOAT_BITS else None
    if issubclass(tp, (complex, np.complexfloating)):
        return TypeFamily.COMPLEX if bit_size(tp) in _COMPLEX_BITS else None
    if issubclass(tp, str):
        return TypeFamily.STRING
    if issubclass(tp, timedelta):
        return TypeFamily.DURATION
    return None


def type_name(tp: Any) -> str:
    """Readable name for error messages (``int``, ``numpy.int8``, ``list[str]``)."""
    tp = strip_annotated(tp)
    if isinstance(tp, type) and get_origin(tp) is None:
        if tp.__module__ == "builtins":
            return tp.__qualname__
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp).replace("typing.", "")
