"""
Map, slice and array parsers for record-defaults.

Composite defaults are written as JSON:

  dict[str, Any]       -> '{"hi": "hello", "pi": 3.14}'
  list[str]            -> '["a", "b"]'
  tuple[int, int, int] -> '[1, 2]'    (missing trailing slots stay zero)

Decoding is delegated to a pydantic ``TypeAdapter`` built for the field's
own key/value/element types, so ``list[int]`` rejects ``'["x"]'`` and
``dict[str, float]`` gives floats. Decoder failures are wrapped in
``ParseError`` with the family's "invalid ... format" prefix; the pydantic
error is chained as ``__cause__``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, get_args, get_origin

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from record_defaults.exceptions import CapacityError, ParseError, UnsupportedTypeError
from record_defaults.families import TypeFamily, array_shape, resolve_family, type_name
from record_defaults.records import zero_value


def _adapter(tp: Any) -> TypeAdapter:
    try:
        return TypeAdapter(tp)
    except PydanticSchemaGenerationError as exc:
        raise UnsupportedTypeError(f'unsupported type "{type_name(tp)}"') from exc


def _describe(exc: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def _decode(literal: str, tp: Any, kind: str) -> Any:
    try:
        return _adapter(tp).validate_json(literal)
    except ValidationError as exc:
        raise ParseError(f"invalid {kind} format: {_describe(exc)}") from exc


def parse_map(literal: str, target: Any) -> dict:
    """Decode a JSON object into a fresh dict of the target's key/value types."""
    if resolve_family(target) is not TypeFamily.MAP:
        raise ParseError(f"{type_name(target)} is not a map")
    args = get_args(target)
    return _decode(literal, dict[args] if args else dict, "map")


def parse_slice(literal: str, target: Any) -> Any:
    """Decode a JSON array into a fresh list (or variadic tuple)."""
    if resolve_family(target) is not TypeFamily.SLICE:
        raise ParseError(f"{type_name(target)} is not a slice")
    return _decode(literal, target, "slice")


def parse_array(literal: str, target: Any) -> tuple:
    """Decode a JSON array into a fixed-length tuple.

    The literal is decoded into ``list[T]`` first and then copied into a
    tuple of the target's capacity. Fewer elements than capacity is fine;
    the remaining slots hold the element type's zero value.

    Raises:
        ParseError: If the literal is not a JSON array of the element type.
        CapacityError: If the literal has more elements than the tuple holds.
    """
    if resolve_family(target) is not TypeFamily.ARRAY:
        raise ParseError(f"{type_name(target)} is not an array")
    element, capacity = array_shape(target)
    items = _decode(literal, list[element], "array")
    if len(items) > capacity:
        raise CapacityError(f"array length {len(items)} exceeds capacity {capacity}")
    padding = [zero_value(element) for _ in range(capacity - len(items))]
    return tuple(items + padding)


def is_convertible(value: Any, target: Any) -> bool:
    """Structural check that a decoded composite fits the field annotation.

    Only the container is checked (dict/list/tuple, and the length of a
    fixed array); element types are trusted to the decoder.
    """
    family = resolve_family(target)
    if family is TypeFamily.ARRAY:
        _, capacity = array_shape(target)
        return isinstance(value, tuple) and len(value) == capacity
    origin = get_origin(target) or target
    if origin is Mapping:
        return isinstance(value, Mapping)
    return isinstance(value, origin)
