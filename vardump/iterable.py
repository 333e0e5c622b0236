"""
Uniform traversal over container-like values.

Containers differ in what they offer: some report their size, some allow jumping to
an index, some only support a plain `for` loop. Traits resolve, once per concrete
type, the cheapest way to get begin/end cursors, the size and n-step advancement,
so the formatters can treat every container the same way.

Size resolution order:
    1. native size     - len() for Sized types
    2. native distance - end minus begin for random-access cursors
    3. manual count    - step a forward cursor until it reaches the end

None of the operations mutate the container. One-shot iterators are rejected,
since traversing them would consume the value being displayed.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import ctypes
from functools import lru_cache
from typing import Any, ClassVar

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import END
from .utils import class_name


# Cursors --------------------------------------------------------------------------------------------------------------

class Cursor:
    """
    Read-only position within a container.

    Subclasses provide `value`, `step()` and equality; `advance()` falls back to
    repeated single steps unless the cursor supports random access.
    """
    random_access: ClassVar[bool] = False
    position: int

    @property
    def value(self) -> Any:
        raise NotImplementedError

    def step(self) -> None:
        raise NotImplementedError

    def advance(self, n: int) -> None:
        """Move forward by n positions."""
        for _ in range(n):
            self.step()


class ForwardCursor(Cursor):
    """
    Cursor over a single `iter()` pass of a re-iterable container.

    Two forward cursors compare equal when both are exhausted, or when they walk
    the same pass and stand at the same position.
    """
    __slots__ = ("_iterator", "_current", "position")

    def __init__(self, iterable: abc.Iterable | None = None):
        self._iterator = iter(()) if iterable is None else iter(iterable)
        self._current = next(self._iterator, END)
        self.position = 0

    @classmethod
    def exhausted(cls) -> "ForwardCursor":
        """The past-the-end cursor."""
        return cls()

    @property
    def at_end(self) -> bool:
        return self._current is END

    @property
    def value(self) -> Any:
        if self._current is END:
            raise IndexError("cursor is past the end")
        return self._current

    def step(self) -> None:
        if self._current is END:
            raise IndexError("cannot step a cursor past the end")
        self._current = next(self._iterator, END)
        self.position += 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ForwardCursor):
            return NotImplemented
        if self.at_end or other.at_end:
            return self.at_end and other.at_end
        return self._iterator is other._iterator and self.position == other.position

    __hash__ = None


class IndexCursor(Cursor):
    """Random-access cursor: an index into a container supporting `__getitem__`."""
    __slots__ = ("_container", "position")
    random_access = True

    def __init__(self, container: Any, position: int = 0):
        self._container = container
        self.position = position

    @property
    def value(self) -> Any:
        return self._container[self.position]

    def step(self) -> None:
        self.position += 1

    def advance(self, n: int) -> None:
        self.position += n

    def distance(self, other: "IndexCursor") -> int:
        """Number of steps from self to other."""
        return other.position - self.position

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexCursor):
            return NotImplemented
        return self._container is other._container and self.position == other.position

    __hash__ = None


# Traits ---------------------------------------------------------------------------------------------------------------

class IterableTraits:
    """
    Traversal for containers that only support iteration.

    Size is counted by stepping from begin to end; advance steps one by one.
    """

    def begin(self, container: Any) -> Cursor:
        return ForwardCursor(container)

    def end(self, container: Any) -> Cursor:
        return ForwardCursor.exhausted()

    def is_empty(self, container: Any) -> bool:
        return self.begin(container) == self.end(container)

    def size(self, container: Any) -> int:
        cursor, end = self.begin(container), self.end(container)
        count = 0
        while cursor != end:
            cursor.step()
            count += 1
        return count


class SizedTraits(IterableTraits):
    """Forward traversal with a native size, e.g. set, dict views, deque-like types."""

    def size(self, container: Any) -> int:
        return len(container)


class RandomAccessTraits(IterableTraits):
    """
    Index-based traversal for containers with `__getitem__`, e.g. ctypes arrays and old-style sequences.

    Size is the distance between begin and end cursors.
    """

    def begin(self, container: Any) -> Cursor:
        return IndexCursor(container, 0)

    def end(self, container: Any) -> Cursor:
        return IndexCursor(container, len(container))

    def size(self, container: Any) -> int:
        return self.begin(container).distance(self.end(container))


class SequenceTraits(RandomAccessTraits):
    """Index-based traversal with a native size for registered Sequences."""

    def size(self, container: Any) -> int:
        return len(container)


_REGISTRY: dict[type, IterableTraits] = {}


def register_traits(cls: type, traits: IterableTraits) -> None:
    """
    Use `traits` for cls and its subclasses, overriding automatic resolution.

    Call at import or setup time, before the first dump of such values.
    """
    if not isinstance(cls, type):
        raise TypeError(f"cls must be a type, got {class_name(cls)}")
    if not isinstance(traits, IterableTraits):
        raise TypeError(f"traits must be IterableTraits, got {class_name(traits)}")
    _REGISTRY[cls] = traits
    resolve_traits.cache_clear()


@lru_cache(maxsize=None)
def resolve_traits(cls: type) -> IterableTraits:
    """
    Resolve the traversal traits of a container type.

    Raises:
        TypeError: If cls is not iterable, or is a one-shot iterator.
    """
    for base in cls.__mro__:
        if base in _REGISTRY:
            return _REGISTRY[base]

    if issubclass(cls, abc.Iterator):
        raise TypeError(f"{class_name(cls)} is a one-shot iterator and cannot be traversed without consuming it")
    if issubclass(cls, abc.Sequence):
        return SequenceTraits()
    if issubclass(cls, ctypes.Array) or _has_index_protocol(cls):
        return RandomAccessTraits()
    if issubclass(cls, abc.Sized) and issubclass(cls, abc.Iterable):
        return SizedTraits()
    if issubclass(cls, abc.Iterable):
        return IterableTraits()
    raise TypeError(f"{class_name(cls)} is not iterable")


# Methods --------------------------------------------------------------------------------------------------------------

def iterable_begin(container: Any) -> Cursor:
    return resolve_traits(type(container)).begin(container)


def iterable_end(container: Any) -> Cursor:
    return resolve_traits(type(container)).end(container)


def is_empty_iterable(container: Any) -> bool:
    """True if the container has no elements; never computes the size."""
    return resolve_traits(type(container)).is_empty(container)


def iterable_size(container: Any) -> int:
    return resolve_traits(type(container)).size(container)


def iterator_advance(cursor: Cursor, n: int) -> None:
    """Move cursor forward by n positions, jumping when it supports random access."""
    cursor.advance(n)


# Private Methods ------------------------------------------------------------------------------------------------------

def _defines(cls: type, name: str) -> bool:
    """True if cls or a base defines name; attributes of the metaclass do not count."""
    return any(name in vars(base) for base in cls.__mro__ if base is not object)


def _has_index_protocol(cls: type) -> bool:
    """
    Old-style sequence: integer `__getitem__` and `__len__` without `__iter__`.

    Types defining `__iter__` may key `__getitem__` by name, so they are walked forward.
    """
    if issubclass(cls, (abc.Mapping, abc.Set)):
        return False
    return _defines(cls, "__getitem__") and _defines(cls, "__len__") and not _defines(cls, "__iter__")
