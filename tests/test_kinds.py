#
# vardump - Value Kinds Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import ctypes
from collections import OrderedDict, deque, namedtuple
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, Flag, IntEnum, IntFlag
from fractions import Fraction

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from vardump.kinds import ValueKind, kind_of, value_kind


# Local Classes & Methods ----------------------------------------------------------------------------------------------

@dataclass
class Point:
    x: int


Pair = namedtuple("Pair", ["a", "b"])


class Color(IntEnum):
    RED = 1


class Shade(Enum):
    LIGHT = 1
    DARK = 2


class Perm(Flag):
    R = 4
    W = 2


class Mode(IntFlag):
    X = 1


class Row:
    def __init__(self, **columns):
        self._columns = columns

    def __iter__(self):
        return iter(self._columns.values())

    def __len__(self):
        return len(self._columns)

    def __getitem__(self, name):
        return self._columns[name]


class Countdown:
    def __iter__(self):
        return iter(())


def gen():
    yield 1


# Tests ----------------------------------------------------------------------------------------------------------------

class TestValueKind:
    @pytest.mark.parametrize("value, expected", [
        pytest.param(None, ValueKind.NONE, id="none"),
        pytest.param(True, ValueKind.BOOL, id="bool"),
        pytest.param(ctypes.c_bool(False), ValueKind.BOOL, id="c_bool"),
        pytest.param(ctypes.c_char(b"a"), ValueKind.CHAR, id="c_char"),
        pytest.param(1, ValueKind.INTEGER, id="int"),
        pytest.param(Color.RED, ValueKind.INTEGER, id="int_enum"),
        pytest.param(ctypes.c_uint16(1), ValueKind.INTEGER, id="c_uint16"),
        pytest.param(1.5, ValueKind.FLOAT, id="float"),
        pytest.param(ctypes.c_float(1.5), ValueKind.FLOAT, id="c_float"),
        pytest.param("s", ValueKind.STRING, id="str"),
        pytest.param([], ValueKind.CONTAINER, id="list"),
        pytest.param(deque(), ValueKind.CONTAINER, id="deque"),
        pytest.param(range(2), ValueKind.CONTAINER, id="range"),
        pytest.param(Countdown(), ValueKind.CONTAINER, id="iterable"),
        pytest.param((ctypes.c_int * 2)(), ValueKind.CONTAINER, id="ctypes_array"),
        pytest.param({}, ValueKind.MAP, id="dict"),
        pytest.param(OrderedDict(), ValueKind.MAP, id="ordered_dict"),
        pytest.param(set(), ValueKind.SET, id="set"),
        pytest.param({}.keys(), ValueKind.SET, id="dict_keys"),
        pytest.param((), ValueKind.TUPLE, id="tuple"),
        pytest.param(Pair(1, 2), ValueKind.TUPLE, id="namedtuple"),
        pytest.param(Point(1), ValueKind.OBJECT, id="dataclass"),
        pytest.param(Point, ValueKind.OTHER, id="dataclass_type"),
        pytest.param(b"ab", ValueKind.OTHER, id="bytes"),
        pytest.param(bytearray(b"a"), ValueKind.OTHER, id="bytearray"),
        pytest.param(Decimal("1.5"), ValueKind.OTHER, id="decimal"),
        pytest.param(Fraction(1, 3), ValueKind.OTHER, id="fraction"),
        pytest.param(1j, ValueKind.OTHER, id="complex"),
        pytest.param(iter([]), ValueKind.OTHER, id="iterator"),
        pytest.param(gen(), ValueKind.OTHER, id="generator"),
        pytest.param(ctypes.c_char_p(b"a"), ValueKind.OTHER, id="c_char_p"),
        pytest.param(object(), ValueKind.OTHER, id="object"),
        pytest.param(Shade.LIGHT, ValueKind.OTHER, id="enum_member"),
        pytest.param(Shade, ValueKind.OTHER, id="enum_class"),
        pytest.param(Perm.R | Perm.W, ValueKind.OTHER, id="flag_value"),
        pytest.param(Mode.X, ValueKind.INTEGER, id="int_flag"),
        pytest.param(Row(a=1), ValueKind.CONTAINER, id="keyed_iterable"),
    ])
    def test_kind_of(self, value, expected):
        assert kind_of(value) is expected

    def test_cached_per_type(self):
        value_kind(list)
        hits = value_kind.cache_info().hits
        value_kind(list)
        assert value_kind.cache_info().hits == hits + 1

    @pytest.mark.parametrize("kind, iterable_like", [
        pytest.param(ValueKind.CONTAINER, True, id="container"),
        pytest.param(ValueKind.MAP, True, id="map"),
        pytest.param(ValueKind.SET, True, id="set"),
        pytest.param(ValueKind.TUPLE, True, id="tuple"),
        pytest.param(ValueKind.OBJECT, True, id="object"),
        pytest.param(ValueKind.STRING, False, id="string"),
        pytest.param(ValueKind.INTEGER, False, id="integer"),
        pytest.param(ValueKind.OTHER, False, id="other"),
    ])
    def test_is_iterable_like(self, kind, iterable_like):
        assert kind.is_iterable_like is iterable_like

    @pytest.mark.parametrize("kind, primitive", [
        pytest.param(ValueKind.BOOL, True, id="bool"),
        pytest.param(ValueKind.CHAR, True, id="char"),
        pytest.param(ValueKind.INTEGER, True, id="integer"),
        pytest.param(ValueKind.FLOAT, True, id="float"),
        pytest.param(ValueKind.STRING, False, id="string"),
        pytest.param(ValueKind.NONE, False, id="none"),
    ])
    def test_is_primitive(self, kind, primitive):
        assert kind.is_primitive is primitive
