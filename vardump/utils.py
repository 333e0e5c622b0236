"""
vardump utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(
    obj: Any,
    fully_qualified: bool = False,
    fully_qualified_builtins: bool = False,
) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the fully qualified name for user objects or classes.
        fully_qualified_builtins (bool): If true, returns the fully qualified name for builtin objects or classes.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(10, fully_qualified_builtins=True)
        'builtins.int'
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Point:
        ...     x: int
        >>> class_name(Point(1))
        'Point'
    """
    cls = obj if isinstance(obj, type) else obj.__class__
    name = cls.__name__

    qualify = fully_qualified_builtins if cls.__module__ == "builtins" else fully_qualified
    if qualify:
        return f"{cls.__module__}.{name}"
    return name


def safe_repr(obj: Any) -> str:
    """
    Defensive repr() call - handle broken __repr__ methods gracefully
    """
    try:
        return repr(obj)
    except Exception as e:
        # Fallback for broken __repr__: show type and exception info
        return f"<{class_name(obj)} object (repr failed: {type(e).__name__})>"


def fmt_type(obj: Any) -> str:
    """Format type of obj for exception messages, e.g. '<int>'."""
    return f"<{class_name(obj)}>"


def fmt_value(obj: Any, max_repr: int = 80) -> str:
    """Format obj as a type-value pair for exception messages, e.g. '<int: 42>'."""
    repr_ = safe_repr(obj)
    if len(repr_) > max_repr:
        repr_ = repr_[:max_repr] + "..."
    return f"<{class_name(obj)}: {repr_}>"
