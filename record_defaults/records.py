"""
Record introspection for record-defaults.

A *record* is a dataclass or a pydantic model. This module is the only
place that knows how to read a record's field list and per-field tags, and
how to build "zero" values for annotations.

Where tags live:
- dataclasses: ``field(default=0, metadata={"default": "100"})``
- pydantic:    ``Field(0, json_schema_extra={"default": "100"})``

Key functions:
- record_fields(record_type) -> tuple[FieldSpec, ...]: fields in declaration order.
- new_record(record_type): a fresh instance with every required field zeroed.
- zero_value(annotation): the zero/unset value of an annotation.
- is_unset(value, annotation): whether a field still holds its zero value.
"""

from __future__ import annotations

import dataclasses
import functools
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, get_origin, get_type_hints

import numpy as np
import pandas as pd
from pydantic import BaseModel

from record_defaults.exceptions import InvalidTagError
from record_defaults.families import (
    TypeFamily,
    array_shape,
    is_record_type,
    resolve_family,
    unwrap_optional,
)

logger = logging.getLogger(__name__)

_ZERO_LITERALS: dict[TypeFamily, Any] = {
    TypeFamily.INT: 0,
    TypeFamily.UINT: 0,
    TypeFamily.FLOAT: 0.0,
    TypeFamily.COMPLEX: 0j,
    TypeFamily.BOOL: False,
    TypeFamily.STRING: "",
    TypeFamily.DURATION: timedelta(0),
}


@dataclass(frozen=True)
class FieldSpec:
    """One field of a record type, as seen by the engine.

    Attributes:
        name: Attribute name on the record.
        annotation: Resolved annotation (may be ``Optional[...]``).
        tags: Key-value metadata attached to the field.
        writable: False when the owning record (or the field) is frozen.
    """

    name: str
    annotation: Any
    tags: Mapping[str, Any]
    writable: bool = True

    @property
    def exported(self) -> bool:
        return not self.name.startswith("_")

    def tag(self, key: str) -> str:
        """Return the tag stored under *key*, or ``""`` when absent.

        Raises:
            InvalidTagError: If the stored value is not a string.
        """
        value = self.tags.get(key, "")
        if not isinstance(value, str):
            raise InvalidTagError(
                f"tag {key!r} on field {self.name} must be a string, "
                f"got {type(value).__name__}"
            )
        return value


def _dataclass_fields(record_type: type) -> tuple[FieldSpec, ...]:
    hints = get_type_hints(record_type, include_extras=True)
    frozen = record_type.__dataclass_params__.frozen
    return tuple(
        FieldSpec(
            name=f.name,
            annotation=hints.get(f.name, f.type),
            tags=f.metadata,
            writable=not frozen,
        )
        for f in dataclasses.fields(record_type)
    )


def _model_fields(record_type: type[BaseModel]) -> tuple[FieldSpec, ...]:
    frozen = bool(record_type.model_config.get("frozen", False))
    specs = []
    for name, info in record_type.model_fields.items():
        extra = info.json_schema_extra
        specs.append(
            FieldSpec(
                name=name,
                annotation=info.annotation,
                tags=extra if isinstance(extra, dict) else {},
                writable=not (frozen or info.frozen),
            )
        )
    return tuple(specs)


@functools.lru_cache(maxsize=None)
def record_fields(record_type: type) -> tuple[FieldSpec, ...]:
    """Return the fields of a record type in declaration order.

    Results are cached: record types are treated as immutable descriptions.

    Raises:
        TypeError: If *record_type* is not a dataclass or pydantic model.
    """
    if dataclasses.is_dataclass(record_type):
        return _dataclass_fields(record_type)
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        return _model_fields(record_type)
    raise TypeError(f"{record_type!r} is not a record type")


def new_record(record_type: type) -> Any:
    """Build a fresh record with every required field set to its zero value.

    Fields that already declare a default (or default factory) keep it.
    Pydantic models are built with ``model_construct`` so no validation
    runs on the zero values.
    """
    if dataclasses.is_dataclass(record_type):
        hints = get_type_hints(record_type, include_extras=True)
        kwargs = {
            f.name: zero_value(hints.get(f.name, f.type))
            for f in dataclasses.fields(record_type)
            if f.init
            and f.default is dataclasses.MISSING
            and f.default_factory is dataclasses.MISSING
        }
        record = record_type(**kwargs)
    else:
        kwargs = {
            name: zero_value(info.annotation)
            for name, info in record_type.model_fields.items()
            if info.is_required()
        }
        record = record_type.model_construct(**kwargs)
    logger.debug("Materialized zero-valued %s", record_type.__name__)
    return record


def _scalar_zero(tp: Any, family: TypeFamily) -> Any:
    zero = _ZERO_LITERALS[family]
    # enum and other user subclasses may not accept the zero literal
    if isinstance(tp, type) and issubclass(tp, (np.generic, pd.Timedelta)):
        return tp(zero)
    return zero


def zero_value(annotation: Any) -> Any:
    """Return the zero/unset value of *annotation*.

    ``None`` for optionals and for types outside the supported families.
    numpy scalars and ``pandas.Timedelta`` keep their own type; every other
    scalar annotation (including ``IntEnum``/``str`` subclasses) gets the
    plain literal of its family.
    """
    tp, optional = unwrap_optional(annotation)
    if optional:
        return None
    if is_record_type(tp):
        return new_record(tp)

    family = resolve_family(tp)
    if family is None:
        return None
    if family is TypeFamily.ARRAY:
        element, capacity = array_shape(tp)
        return tuple(zero_value(element) for _ in range(capacity))
    if family is TypeFamily.MAP:
        return {}
    if family is TypeFamily.SLICE:
        return (get_origin(tp) or tp)()
    return _scalar_zero(tp, family)


def is_unset(value: Any, annotation: Any) -> bool:
    """Whether *value* is still the zero/unset state of *annotation*.

    ``None`` is always unset. Optional fields are unset only when ``None``.
    Maps and sequences are unset when empty, arrays when every element is
    unset, nested records when equal to a fresh zero record. Scalars
    compare against the plain zero literal of their family (``0``, ``""``,
    ``False``, ``timedelta(0)``), so enum fields are judged by their value;
    a float holding NaN is unequal to zero and therefore counts as set.
    """
    if value is None:
        return True
    tp, optional = unwrap_optional(annotation)
    if optional:
        return False

    family = resolve_family(tp)
    if family is TypeFamily.ARRAY:
        element, _ = array_shape(tp)
        return all(is_unset(item, element) for item in value)
    if family in (TypeFamily.MAP, TypeFamily.SLICE):
        return len(value) == 0
    if family is not None:
        return bool(value == _ZERO_LITERALS[family])
    if is_record_type(tp):
        return bool(value == new_record(tp))
    return False
