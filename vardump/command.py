"""
Per-depth export commands: value styles and container elision plans.

An ExportCommand is immutable. The command for the children of a container is
derived with next(), which consumes the outermost SkipRule so that rules can be
given per nesting level, e.g. `ExportCommand.front(4).merge(skip_rules=...)`.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
from dataclasses import dataclass, replace
from enum import StrEnum, unique
from typing import Any, NamedTuple, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .display import BoolStyle, DisplayConf, IntStyle
from .iterable import IterableTraits, iterator_advance, resolve_traits
from .sentinels import UNSET, UnsetType, ifnotunset
from .utils import fmt_type, fmt_value

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class SkipMode(StrEnum):
    """
    Which elements of an oversized container are shown.

    FRONT:  the first `count`, then `...`
    MIDDLE: `...`, the middle `count`, then `...`
    BACK:   `...`, then the last `count`
    BOTH:   the first ceil(count/2), `...`, then the last floor(count/2)
    """
    FRONT = "front"
    MIDDLE = "middle"
    BACK = "back"
    BOTH = "both"


@dataclass(frozen=True)
class SkipRule:
    """
    Elision rule of one nesting level.

    Attributes:
        mode: Which part of the container is shown, see SkipMode.
        count: Maximum number of elements shown.
    """
    mode: SkipMode = SkipMode.FRONT
    count: int = DisplayConf.MAX_ITERATION_COUNT

    def __post_init__(self):
        try:
            object.__setattr__(self, "mode", SkipMode(self.mode))
        except ValueError:
            raise ValueError(f"mode expected one of {[m.value for m in SkipMode]}, "
                             f"but found {fmt_value(self.mode)}") from None
        if not isinstance(self.count, int) or isinstance(self.count, bool):
            raise TypeError(f"SkipRule.count must be an int, got {fmt_type(self.count)}")
        if self.count < 0:
            raise ValueError(f"SkipRule.count must be >=0, but got {fmt_value(self.count)}")

    def segments(self, size: int) -> list[tuple[int, int] | None]:
        """
        Shown index ranges `(start, stop)` in order, with None marking an elided run.

        Examples:
            >>> SkipRule(SkipMode.BOTH, 3).segments(5)
            [(0, 2), None, (4, 5)]
            >>> SkipRule(SkipMode.FRONT, 8).segments(5)
            [(0, 5)]
            >>> SkipRule(SkipMode.FRONT, 0).segments(5)
            [None]
        """
        count = self.count
        if size <= count:
            segments = [(0, size)]
        elif self.mode is SkipMode.FRONT:
            segments = [(0, count), None]
        elif self.mode is SkipMode.BACK:
            segments = [None, (size - count, size)]
        elif self.mode is SkipMode.MIDDLE:
            start = (size - count) // 2
            segments = [None, (start, start + count), None]
        else:
            head = (count + 1) // 2
            tail = count // 2
            segments = [(0, head), None, (size - tail, size)]

        # Drop empty ranges, then collapse the elided runs they separated
        merged: list[tuple[int, int] | None] = []
        for segment in segments:
            if segment is not None and segment[0] == segment[1]:
                continue
            if segment is None and merged and merged[-1] is None:
                continue
            merged.append(segment)
        return merged


class SkipEntry(NamedTuple):
    """
    One entry of a skip plan.

    Attributes:
        is_ellipsis: True for a marker standing in for an elided run.
        value: The element, or None for an ellipsis marker.
        index: Position of the element in the full container; for an ellipsis
            marker, the position of the first elided element.
    """
    is_ellipsis: bool
    value: Any
    index: int


@dataclass(frozen=True)
class ExportCommand:
    """
    Value styles and elision rules applied while exporting one nesting level.

    Attributes:
        int_style: Integer radix/padding/chunking style, or None for plain decimal.
        bool_style: Boolean rendering, see BoolStyle.
        char_as_hex: Append the hex byte value to characters.
        show_index: Prefix container elements with their index.
        int_format: Python format spec for integers without int_style, e.g. ",".
        float_format: Python format spec for floats, e.g. ".3f".
        skip_rules: Elision rules per nesting level, outermost first.
        max_iteration_count: Elements shown at levels without an explicit skip rule.

    Examples:
        >>> cmd = ExportCommand.both(4).merge(show_index=True)
        >>> cmd.skip_rule
        SkipRule(mode=<SkipMode.BOTH: 'both'>, count=4)
        >>> cmd.next().skip_rule.count
        16
    """
    int_style: IntStyle | None = None
    bool_style: BoolStyle = BoolStyle.NORMAL
    char_as_hex: bool = False
    show_index: bool = False
    int_format: str | None = None
    float_format: str | None = None
    skip_rules: tuple[SkipRule, ...] = ()
    max_iteration_count: int = DisplayConf.MAX_ITERATION_COUNT

    def __post_init__(self):
        """Validate and normalize fields"""
        if not isinstance(self.int_style, (IntStyle, type(None))):
            raise TypeError(f"int_style must be IntStyle | None, got {fmt_type(self.int_style)}")
        try:
            object.__setattr__(self, "bool_style", BoolStyle(self.bool_style))
        except ValueError:
            raise ValueError(f"bool_style expected one of {[s.value for s in BoolStyle]}, "
                             f"but found {fmt_value(self.bool_style)}") from None
        for name in ("int_format", "float_format"):
            if not isinstance(getattr(self, name), (str, type(None))):
                raise TypeError(f"{name} must be str | None, got {fmt_type(getattr(self, name))}")

        skip_rules = tuple(self.skip_rules)
        if not all(isinstance(rule, SkipRule) for rule in skip_rules):
            raise TypeError(f"skip_rules must contain SkipRule items only, got {fmt_value(skip_rules)}")
        object.__setattr__(self, "skip_rules", skip_rules)

        if not isinstance(self.max_iteration_count, int) or isinstance(self.max_iteration_count, bool):
            raise TypeError(f"max_iteration_count must be an int, got {fmt_type(self.max_iteration_count)}")
        if self.max_iteration_count < 0:
            raise ValueError(f"max_iteration_count must be >=0, but got {fmt_value(self.max_iteration_count)}")

    # ----- Factories -----

    @classmethod
    def front(cls, count: int = DisplayConf.MAX_ITERATION_COUNT) -> Self:
        """Show the first `count` elements of the outermost container."""
        return cls(skip_rules=(SkipRule(SkipMode.FRONT, count),))

    @classmethod
    def middle(cls, count: int = DisplayConf.MAX_ITERATION_COUNT) -> Self:
        """Show the middle `count` elements of the outermost container."""
        return cls(skip_rules=(SkipRule(SkipMode.MIDDLE, count),))

    @classmethod
    def back(cls, count: int = DisplayConf.MAX_ITERATION_COUNT) -> Self:
        """Show the last `count` elements of the outermost container."""
        return cls(skip_rules=(SkipRule(SkipMode.BACK, count),))

    @classmethod
    def both(cls, count: int = DisplayConf.MAX_ITERATION_COUNT) -> Self:
        """Show `count` elements split between both ends of the outermost container."""
        return cls(skip_rules=(SkipRule(SkipMode.BOTH, count),))

    @classmethod
    def index(cls) -> Self:
        """Label container elements with their index."""
        return cls(show_index=True)

    def merge(self,
              # Attrs override
              int_style: IntStyle | None | UnsetType = UNSET,
              bool_style: BoolStyle | str | UnsetType = UNSET,
              char_as_hex: bool | UnsetType = UNSET,
              show_index: bool | UnsetType = UNSET,
              int_format: str | None | UnsetType = UNSET,
              float_format: str | None | UnsetType = UNSET,
              skip_rules: tuple[SkipRule, ...] | UnsetType = UNSET,
              max_iteration_count: int | UnsetType = UNSET,
              ) -> "ExportCommand":
        """
        Create a new ExportCommand instance with merged configuration options.

        Parameters not provided (UNSET) are inherited from the current instance.

        Returns:
            New ExportCommand instance with merged configuration.
        """
        return ExportCommand(
            int_style=ifnotunset(int_style, default=self.int_style),
            bool_style=ifnotunset(bool_style, default=self.bool_style),
            char_as_hex=ifnotunset(char_as_hex, default=self.char_as_hex),
            show_index=ifnotunset(show_index, default=self.show_index),
            int_format=ifnotunset(int_format, default=self.int_format),
            float_format=ifnotunset(float_format, default=self.float_format),
            skip_rules=ifnotunset(skip_rules, default=self.skip_rules),
            max_iteration_count=ifnotunset(max_iteration_count, default=self.max_iteration_count),
        )

    # ----- Per-depth behavior -----

    @property
    def skip_rule(self) -> SkipRule:
        """Elision rule of the current nesting level."""
        if self.skip_rules:
            return self.skip_rules[0]
        return SkipRule(SkipMode.FRONT, self.max_iteration_count)

    def next(self) -> "ExportCommand":
        """Command for the children of the current nesting level."""
        if not self.skip_rules:
            return self
        return replace(self, skip_rules=self.skip_rules[1:])

    def format(self, value: int | float) -> str:
        """Apply int_format/float_format to value; empty string if none applies."""
        spec = self.float_format if isinstance(value, float) else self.int_format
        if spec is None:
            return ""
        return format(value, spec)

    def create_skip_plan(self, container: Any, traits: IterableTraits | None = None) -> list[SkipEntry]:
        """
        Select the elements of container to show, with ellipsis markers for elided runs.

        The plan is computed once per container, so single-line and multi-line
        layout attempts show the very same elements.

        Args:
            container: Any re-iterable container.
            traits: Traversal traits; resolved from the container type if None.

        Returns:
            Entries in container order; indices never decrease and two ellipsis
            markers are never adjacent.

        Raises:
            TypeError: If the container type cannot be traversed.

        Examples:
            >>> ExportCommand.both(3).create_skip_plan([1, 2, 3, 4, 5])
            [SkipEntry(is_ellipsis=False, value=1, index=0),
             SkipEntry(is_ellipsis=False, value=2, index=1),
             SkipEntry(is_ellipsis=True, value=None, index=2),
             SkipEntry(is_ellipsis=False, value=5, index=4)]
        """
        traits = traits or resolve_traits(type(container))
        size = traits.size(container)
        segments = self.skip_rule.segments(size)

        plan: list[SkipEntry] = []
        cursor = traits.begin(container)
        cursor_index = 0
        next_index = 0
        for segment in segments:
            if segment is None:
                plan.append(SkipEntry(True, None, next_index))
                continue
            start, stop = segment
            iterator_advance(cursor, start - cursor_index)
            plan.append(SkipEntry(False, cursor.value, start))
            for index in range(start + 1, stop):
                cursor.step()
                plan.append(SkipEntry(False, cursor.value, index))
            cursor_index = stop - 1
            next_index = stop

        if len(segments) > 1:
            logger.debug("skip plan of %s: %d of %d elements shown", type(container).__name__,
                         sum(not entry.is_ellipsis for entry in plan), size)
        return plan
