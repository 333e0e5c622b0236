"""
Classification of values into the closed set of kinds the formatters handle.

The kind depends on the concrete type only and is resolved once per type.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import ctypes
import dataclasses
import enum
import numbers
from enum import StrEnum, unique
from functools import lru_cache
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .iterable import resolve_traits
from .numeric import CTYPES_FLOAT_CODES, CTYPES_INT_CODES


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class ValueKind(StrEnum):
    NONE = "none"
    BOOL = "bool"
    CHAR = "char"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    CONTAINER = "container"
    MAP = "map"
    SET = "set"
    TUPLE = "tuple"
    OBJECT = "object"
    OTHER = "other"

    @property
    def is_iterable_like(self) -> bool:
        """Rendered as a bracketed group of child values."""
        return self in _ITERABLE_LIKE

    @property
    def is_primitive(self) -> bool:
        return self in _PRIMITIVE


_ITERABLE_LIKE = frozenset({ValueKind.CONTAINER, ValueKind.MAP, ValueKind.SET, ValueKind.TUPLE, ValueKind.OBJECT})
_PRIMITIVE = frozenset({ValueKind.BOOL, ValueKind.CHAR, ValueKind.INTEGER, ValueKind.FLOAT})


# Methods --------------------------------------------------------------------------------------------------------------

@lru_cache(maxsize=None)
def value_kind(cls: type) -> ValueKind:
    """
    Kind of the values of type cls.

    Examples:
        >>> value_kind(bool), value_kind(ctypes.c_char), value_kind(ctypes.c_int16)
        (<ValueKind.BOOL: 'bool'>, <ValueKind.CHAR: 'char'>, <ValueKind.INTEGER: 'integer'>)
        >>> value_kind(list), value_kind(dict), value_kind(type(iter([])))
        (<ValueKind.CONTAINER: 'container'>, <ValueKind.MAP: 'map'>, <ValueKind.OTHER: 'other'>)
    """
    if cls is type(None):
        return ValueKind.NONE

    # bool before int, it is a subclass
    if issubclass(cls, (bool, ctypes.c_bool)) or (_is_numpy_scalar(cls) and cls.__name__ in ("bool_", "bool")):
        return ValueKind.BOOL
    if issubclass(cls, ctypes.c_char):
        return ValueKind.CHAR
    if issubclass(cls, ctypes._SimpleCData):
        code = getattr(cls, "_type_", None)
        if isinstance(code, str) and code in CTYPES_INT_CODES:
            return ValueKind.INTEGER
        if isinstance(code, str) and code in CTYPES_FLOAT_CODES:
            return ValueKind.FLOAT
        return ValueKind.OTHER
    if issubclass(cls, numbers.Integral):
        return ValueKind.INTEGER
    if issubclass(cls, float) or (issubclass(cls, numbers.Real) and _is_numpy_scalar(cls)):
        return ValueKind.FLOAT

    # Text-like values are atomic, not sequences of characters
    if issubclass(cls, str):
        return ValueKind.STRING
    if issubclass(cls, (bytes, bytearray, memoryview)):
        return ValueKind.OTHER

    # Classes and enum members render as atoms, even when iterable or subscriptable
    if issubclass(cls, (type, enum.Enum)):
        return ValueKind.OTHER

    if dataclasses.is_dataclass(cls):
        return ValueKind.OBJECT
    if issubclass(cls, tuple):
        return ValueKind.TUPLE
    if issubclass(cls, abc.Mapping):
        return ValueKind.MAP
    if issubclass(cls, abc.Set):
        return ValueKind.SET

    try:
        resolve_traits(cls)
    except TypeError:
        return ValueKind.OTHER
    return ValueKind.CONTAINER


def kind_of(value: Any) -> ValueKind:
    return value_kind(type(value))


def _is_numpy_scalar(cls: type) -> bool:
    return getattr(cls, "__module__", "").split(".")[0] == "numpy"
