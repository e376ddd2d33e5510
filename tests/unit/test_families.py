"""
Unit tests for the type model (record_defaults.families).

Tests annotation -> family resolution, Optional unwrapping, record
detection, bit widths and readable type names.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Annotated, Any, Optional, Union

import numpy as np
import pandas as pd
from pydantic import BaseModel

from record_defaults.families import (
    TypeFamily,
    array_shape,
    bit_size,
    is_record_type,
    resolve_family,
    strip_annotated,
    type_name,
    unwrap_optional,
)


@dataclass
class Point:
    x: int = 0


class Settings(BaseModel):
    name: str = ""


class TestResolveFamily:
    """Tests for resolve_family()."""

    def test_integers(self):
        for tp in (int, np.int8, np.int16, np.int32, np.int64):
            assert resolve_family(tp) is TypeFamily.INT
        for tp in (np.uint8, np.uint16, np.uint32, np.uint64):
            assert resolve_family(tp) is TypeFamily.UINT

    def test_bool_is_not_int(self):
        assert resolve_family(bool) is TypeFamily.BOOL
        assert resolve_family(np.bool_) is TypeFamily.BOOL

    def test_floats(self):
        for tp in (float, np.float32, np.float64):
            assert resolve_family(tp) is TypeFamily.FLOAT
        assert resolve_family(np.float16) is None

    def test_complex(self):
        for tp in (complex, np.complex64, np.complex128):
            assert resolve_family(tp) is TypeFamily.COMPLEX

    def test_string_and_duration(self):
        assert resolve_family(str) is TypeFamily.STRING
        assert resolve_family(timedelta) is TypeFamily.DURATION
        assert resolve_family(pd.Timedelta) is TypeFamily.DURATION

    def test_maps(self):
        for tp in (dict, dict[str, int], Mapping[str, Any], Mapping):
            assert resolve_family(tp) is TypeFamily.MAP

    def test_slices(self):
        for tp in (list, list[int], tuple, tuple[str, ...]):
            assert resolve_family(tp) is TypeFamily.SLICE

    def test_arrays(self):
        assert resolve_family(tuple[int, int, int]) is TypeFamily.ARRAY
        assert resolve_family(tuple[float]) is TypeFamily.ARRAY

    def test_heterogeneous_tuple_unsupported(self):
        assert resolve_family(tuple[int, str]) is None

    def test_annotated_is_stripped(self):
        assert resolve_family(Annotated[int, "meta"]) is TypeFamily.INT

    def test_unsupported(self):
        for tp in (object, Any, Point, set[int], bytes):
            assert resolve_family(tp) is None


class TestUnwrapOptional:
    """Tests for unwrap_optional()."""

    def test_optional(self):
        assert unwrap_optional(Optional[int]) == (int, True)

    def test_pipe_union(self):
        assert unwrap_optional(int | None) == (int, True)
        assert unwrap_optional(None | Point) == (Point, True)

    def test_plain(self):
        assert unwrap_optional(int) == (int, False)

    def test_polymorphic_union_untouched(self):
        tp = Union[int, str]
        assert unwrap_optional(tp) == (tp, False)
        tp = Union[int, str, None]
        assert unwrap_optional(tp) == (tp, False)

    def test_annotated_inside_optional(self):
        assert unwrap_optional(Optional[Annotated[int, "x"]]) == (int, True)

    def test_strip_annotated(self):
        assert strip_annotated(Annotated[list[int], "x"]) == list[int]


class TestIsRecordType:
    """Tests for is_record_type()."""

    def test_records(self):
        assert is_record_type(Point)
        assert is_record_type(Settings)

    def test_non_records(self):
        assert not is_record_type(int)
        assert not is_record_type(Point(1))
        assert not is_record_type(BaseModel.__class__)
        assert not is_record_type(list[int])
        assert not is_record_type(None)


class TestBitSize:
    """Tests for bit_size()."""

    def test_numpy(self):
        assert bit_size(np.int8) == 8
        assert bit_size(np.uint16) == 16
        assert bit_size(np.float32) == 32
        assert bit_size(np.complex64) == 64

    def test_builtins(self):
        assert bit_size(int) == 64
        assert bit_size(float) == 64
        assert bit_size(complex) == 128


class TestArrayShape:
    """Tests for array_shape()."""

    def test_shape(self):
        assert array_shape(tuple[str, str, str]) == (str, 3)


class TestTypeName:
    """Tests for type_name()."""

    def test_builtin(self):
        assert type_name(int) == "int"

    def test_numpy(self):
        assert type_name(np.int8) == "numpy.int8"

    def test_generic(self):
        assert type_name(list[str]) == "list[str]"
        assert type_name(dict[str, int]) == "dict[str, int]"

    def test_user_class(self):
        assert type_name(Point) == f"{__name__}.Point"
