"""
Sentinel objects used across vardump.

All sentinels are singletons compared by identity (using 'is').

Sentinels:
    UNSET: An optional argument that was not provided (distinct from None)
    END: The position past the last element of a traversal
    REQUIRES_MULTILINE: A value that cannot be rendered without a line break
        at the current position

Helper Functions:
    ifnotunset: Return default if value is UNSET, otherwise return value

Example:
    >>> from vardump.formatters import fmt_any
    >>> fmt_any({"a": [1, 2]}, fail_on_newline=True) is REQUIRES_MULTILINE
    True
"""

from typing import Any, Callable, Final

__all__ = [
    'UNSET',
    'END',
    'REQUIRES_MULTILINE',
    'UnsetType',
    'EndType',
    'RequiresMultilineType',
    'ifnotunset',
]


# Base Sentinel --------------------------------------------------------------------------------------------------------

class _SentinelBase:
    """
    Base class for all sentinel objects.

    Sentinels are singleton objects optimized for identity checks.
    """
    __slots__ = ('_name',)
    _instance = None

    def __new__(cls) -> '_SentinelBase':
        """Ensures singleton behavior per sentinel class."""
        if cls.__dict__.get('_instance') is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return f'<{self._name}>'

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())


# Sentinel Types -----------------------------------------------------------------------------------------------------

class UnsetType(_SentinelBase):
    """
    Sentinel type for UNSET.

    Used by merge() methods to tell 'not provided' apart from 'explicitly set to None'.
    """
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("UNSET")


class EndType(_SentinelBase):
    """
    Sentinel type for END.

    Held by a forward cursor once its underlying iteration is exhausted.
    """
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("END")


class RequiresMultilineType(_SentinelBase):
    """
    Sentinel type for REQUIRES_MULTILINE.

    Returned instead of rendered text when a formatter was asked to fail on newline
    and the value cannot be laid out on the current line.
    """
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("REQUIRES_MULTILINE")


# Sentinel Objects -----------------------------------------------------------------------------------------------------

UNSET: Final[UnsetType] = UnsetType()
"""
Sentinel representing an unprovided optional argument.

Use with identity check: `if arg is UNSET:`
"""

END: Final[EndType] = EndType()
"""
Sentinel marking an exhausted traversal.
"""

REQUIRES_MULTILINE: Final[RequiresMultilineType] = RequiresMultilineType()
"""
Sentinel result of a fail-on-newline attempt that did not fit on one line.
"""


# Helper Functions -----------------------------------------------------------------------------------------------------

def ifnotunset(value: Any, *, default: Any = None, default_factory: Callable[[], Any] | None = None) -> Any:
    """
    Return value if it's not UNSET, otherwise return default.

    Args:
        value: The value to check. If not UNSET, this value is returned.
        default: The fallback value when value is UNSET.
        default_factory: Callable returning the fallback value. Takes precedence over default.

    Returns:
        The value itself if not UNSET, otherwise the default (or result of default_factory).

    Raises:
        ValueError: If both default and default_factory are provided.

    Example:
        >>> ifnotunset(UNSET, default=4), ifnotunset(None, default=4)
        (4, None)
    """
    if value is not UNSET:
        return value

    if default_factory is not None and default is not None:
        raise ValueError("Cannot specify both default and default_factory")

    if default_factory is not None:
        return default_factory()

    return default
