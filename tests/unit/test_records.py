"""
Unit tests for record introspection (record_defaults.records).

Tests field discovery on dataclasses and pydantic models, tag lookup,
writability of frozen records, zero-valued record construction, and the
zero/unset predicates.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum, IntEnum
from typing import Optional

import numpy as np
import pandas as pd
import pytest
from pydantic import BaseModel, ConfigDict, Field

from record_defaults.exceptions import InvalidTagError
from record_defaults.records import (
    FieldSpec,
    is_unset,
    new_record,
    record_fields,
    zero_value,
)


@dataclass
class Tagged:
    count: int = field(default=0, metadata={"default": "5"})
    name: str = ""
    _hidden: int = field(default=0, metadata={"default": "1"})


@dataclass(frozen=True)
class FrozenPoint:
    x: int = field(default=0, metadata={"default": "1"})


class Level(IntEnum):
    LOW = 1
    HIGH = 2


class Color(str, Enum):
    RED = "red"
    BLUE = "blue"


@dataclass
class RequiredEnums:
    level: Level
    color: Color
    levels: tuple[Level, Level]


@dataclass
class Required:
    a: int
    b: str
    c: list[int]
    d: Optional[FrozenPoint]
    e: int = 7


class Model(BaseModel):
    port: int = Field(0, json_schema_extra={"default": "8080"})
    host: str = ""
    locked: int = Field(0, frozen=True, json_schema_extra={"default": "1"})


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: int = Field(0, json_schema_extra={"default": "3"})


class RequiredModel(BaseModel):
    a: int
    b: str = "keep"


class TestRecordFields:
    """Tests for record_fields()."""

    def test_dataclass_fields_in_order(self):
        specs = record_fields(Tagged)
        assert [s.name for s in specs] == ["count", "name", "_hidden"]
        assert specs[0].annotation is int
        assert specs[0].tag("default") == "5"

    def test_missing_tag_is_empty(self):
        assert record_fields(Tagged)[1].tag("default") == ""

    def test_unexported(self):
        specs = record_fields(Tagged)
        assert specs[0].exported
        assert not specs[2].exported

    def test_frozen_dataclass_not_writable(self):
        assert not record_fields(FrozenPoint)[0].writable
        assert record_fields(Tagged)[0].writable

    def test_pydantic_fields(self):
        specs = record_fields(Model)
        assert [s.name for s in specs] == ["port", "host", "locked"]
        assert specs[0].tag("default") == "8080"
        assert specs[1].tag("default") == ""

    def test_pydantic_frozen_field(self):
        specs = record_fields(Model)
        assert specs[0].writable
        assert not specs[2].writable

    def test_pydantic_frozen_model(self):
        assert not record_fields(FrozenModel)[0].writable

    def test_cached(self):
        assert record_fields(Tagged) is record_fields(Tagged)

    def test_not_a_record(self):
        with pytest.raises(TypeError, match="not a record type"):
            record_fields(int)


class TestFieldSpecTag:
    """Tests for FieldSpec.tag()."""

    def test_non_string_tag(self):
        spec = FieldSpec(name="port", annotation=int, tags={"default": 8080})
        with pytest.raises(InvalidTagError, match="tag 'default' on field port must be a string"):
            spec.tag("default")

    def test_other_key(self):
        spec = FieldSpec(name="port", annotation=int, tags={"env": "9090"})
        assert spec.tag("env") == "9090"
        assert spec.tag("default") == ""


class TestNewRecord:
    """Tests for new_record()."""

    def test_dataclass_required_fields_zeroed(self):
        record = new_record(Required)
        assert record.a == 0
        assert record.b == ""
        assert record.c == []
        assert record.d is None
        assert record.e == 7

    def test_dataclass_with_defaults(self):
        assert new_record(Tagged) == Tagged()

    def test_pydantic_required_fields_zeroed(self):
        record = new_record(RequiredModel)
        assert record.a == 0
        assert record.b == "keep"

    def test_enum_fields_get_plain_zero(self):
        """Enum types are not called with the zero literal."""
        record = new_record(RequiredEnums)
        assert record.level == 0
        assert record.color == ""
        assert record.levels == (0, 0)


class TestZeroValue:
    """Tests for zero_value()."""

    def test_scalars(self):
        assert zero_value(int) == 0
        assert zero_value(float) == 0.0
        assert zero_value(complex) == 0j
        assert zero_value(str) == ""
        assert zero_value(bool) is False

    def test_numpy_scalars_keep_type(self):
        assert isinstance(zero_value(np.int8), np.int8)
        assert isinstance(zero_value(np.float32), np.float32)

    def test_durations(self):
        assert zero_value(timedelta) == timedelta(0)
        assert zero_value(pd.Timedelta) == pd.Timedelta(0)

    def test_optional(self):
        assert zero_value(Optional[int]) is None
        assert zero_value(FrozenPoint | None) is None

    def test_containers(self):
        assert zero_value(dict[str, int]) == {}
        assert zero_value(list[int]) == []
        assert zero_value(tuple[int, ...]) == ()
        assert zero_value(tuple[int, int, int]) == (0, 0, 0)

    def test_record(self):
        assert zero_value(FrozenPoint) == FrozenPoint()

    def test_unsupported(self):
        assert zero_value(object) is None

    def test_enum_types(self):
        assert zero_value(Level) == 0
        assert zero_value(Color) == ""

    def test_str_subclass_gets_plain_string(self):
        assert type(zero_value(Color)) is str


class TestIsUnset:
    """Tests for is_unset()."""

    def test_none_is_unset(self):
        assert is_unset(None, int)
        assert is_unset(None, Optional[int])

    def test_scalars(self):
        assert is_unset(0, int)
        assert not is_unset(5, int)
        assert is_unset("", str)
        assert not is_unset("x", str)
        assert is_unset(False, bool)
        assert not is_unset(True, bool)
        assert is_unset(np.int8(0), np.int8)

    def test_optional_set_when_not_none(self):
        assert not is_unset(0, Optional[int])

    def test_nan_counts_as_set(self):
        assert not is_unset(float("nan"), float)

    def test_empty_containers(self):
        assert is_unset({}, dict[str, int])
        assert is_unset([], list[int])
        assert not is_unset({"a": 1}, dict[str, int])
        assert not is_unset([0], list[int])

    def test_arrays(self):
        assert is_unset((0, 0), tuple[int, int])
        assert not is_unset((0, 1), tuple[int, int])

    def test_durations(self):
        assert is_unset(timedelta(0), timedelta)
        assert not is_unset(timedelta(seconds=1), timedelta)

    def test_records(self):
        assert is_unset(FrozenPoint(), FrozenPoint)
        assert not is_unset(FrozenPoint(2), FrozenPoint)

    def test_unsupported_values_are_set(self):
        assert not is_unset(object(), object)

    def test_int_enum_member_without_zero_is_set(self):
        assert not is_unset(Level.LOW, Level)
        assert not is_unset(Level.HIGH, Optional[Level])

    def test_int_enum_zero_value_is_unset(self):
        assert is_unset(0, Level)

    def test_str_enum(self):
        assert not is_unset(Color.RED, Color)
        assert is_unset("", Color)

    def test_numpy_bool_and_pandas_duration(self):
        assert is_unset(np.bool_(False), np.bool_)
        assert is_unset(pd.Timedelta(0), pd.Timedelta)
        assert not is_unset(pd.NaT, pd.Timedelta)
