"""
Display configuration for vardump: layout limits, indentation policy, color mode
and integer/boolean rendering styles.

All configuration objects are immutable. Derive variants with merge() or the
classmethod presets rather than mutating; the same instance can be shared by
concurrent dump calls.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass, field
from enum import StrEnum, unique
from functools import cached_property
from typing import Self

# Local ----------------------------------------------------------------------------------------------------------------
from .escape import EscapeSequence, Palette
from .sentinels import UNSET, UnsetType, ifnotunset
from .utils import fmt_type, fmt_value


# @formatter:off

class DisplayConf:
    """
    Default configuration constants for vardump formatting.

    Attributes:
        MAX_LINE_WIDTH: Maximum line width used to decide between single-line
            and multi-line layout of containers.
        MAX_DEPTH: Nesting depth at which containers collapse to `[ ... ]`.
            Also bounds recursion through self-referencing structures.
        MAX_ITERATION_COUNT: Number of container elements shown before the
            rest is elided with `...`.
        INDENT: Indentation added per multi-line nesting level.
        LOG_LABEL: Prefix of every block written by dump().
        INT_BASES: Supported integer radixes.
    """

    MAX_LINE_WIDTH = 160
    MAX_DEPTH = 4
    MAX_ITERATION_COUNT = 16
    INDENT = "  "
    LOG_LABEL = "[dump] "
    INT_BASES = (2, 8, 10, 16)

# @formatter:on


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class BoolStyle(StrEnum):
    """
    Rendering of boolean values.

    NORMAL:     "true" / "false"
    TRUE_LEFT:  "true " / "false" (same width, left-aligned)
    TRUE_RIGHT: " true" / "false" (same width, right-aligned)
    NUMBER:     "1" / "0"
    """
    NORMAL = "normal"
    TRUE_LEFT = "true_left"
    TRUE_RIGHT = "true_right"
    NUMBER = "number"


@unique
class ContIndentStyle(StrEnum):
    """
    When container elements are forced onto their own lines, regardless of width.

    NEVER: Only when the single-line form does not fit.
    ALWAYS: Always one element per line.
    WHEN_NESTED: When any shown element is itself container-like.
    WHEN_NON_TUPLES_NESTED: When any shown element is container-like and not a tuple.
    """
    NEVER = "never"
    ALWAYS = "always"
    WHEN_NESTED = "when_nested"
    WHEN_NON_TUPLES_NESTED = "when_non_tuples_nested"


@unique
class ColorMode(StrEnum):
    """
    User intent for colorized output.

    AUTO resolves at dump time: FORCE_COLOR enables, NO_COLOR disables, otherwise
    color is used only when the output stream is a TTY. Formatters treat an
    unresolved AUTO as colorless.
    """
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


@dataclass(frozen=True)
class IntStyle:
    """
    Integer rendering style.

    Attributes:
        base: Radix, one of 2, 8, 10 or 16.
        digits: Minimum digit count. Clamped to what the integer type can need.
        chunk: Insert a space every `chunk` digits. 0 disables chunking; chunks larger
            than the type can need are disabled as well.
        space_fill: Pad to `digits` with spaces instead of zeros.
        make_unsigned_or_no_space_for_minus: For non-decimal radixes on signed types,
            render the two's-complement bit pattern followed by a ` u` marker. For
            decimal (or unsigned types) drop the alignment space kept for the minus sign.

    Examples:
        >>> IntStyle.hex(digits=2)
        IntStyle(base=16, digits=2, chunk=0, space_fill=False, make_unsigned_or_no_space_for_minus=False)
        >>> IntStyle.ubin(digits=8, chunk=4).make_unsigned_or_no_space_for_minus
        True

    Raises:
        ValueError: If base is not supported or digits/chunk are negative.
    """
    base: int = 10
    digits: int = 0
    chunk: int = 0
    space_fill: bool = False
    make_unsigned_or_no_space_for_minus: bool = False

    def __post_init__(self):
        """Validate fields"""
        if self.base not in DisplayConf.INT_BASES:
            raise ValueError(f"base expected one of {DisplayConf.INT_BASES}, but found {fmt_value(self.base)}")

        for name in ("digits", "chunk"):
            val = getattr(self, name)
            if not isinstance(val, int) or isinstance(val, bool):
                raise TypeError(f"IntStyle.{name} must be an int, got {fmt_type(val)}")
            if val < 0:
                raise ValueError(f"IntStyle.{name} must be >=0, but got {fmt_value(val)}")

    @classmethod
    def bin(cls, digits: int = 0, chunk: int = 0, space_fill: bool = False) -> Self:
        return cls(2, digits, chunk, space_fill, False)

    @classmethod
    def oct(cls, digits: int = 0, chunk: int = 0, space_fill: bool = False) -> Self:
        return cls(8, digits, chunk, space_fill, False)

    @classmethod
    def dec(cls, digits: int = 0, chunk: int = 0, space_fill: bool = False) -> Self:
        return cls(10, digits, chunk, space_fill, False)

    @classmethod
    def hex(cls, digits: int = 0, chunk: int = 0, space_fill: bool = False) -> Self:
        return cls(16, digits, chunk, space_fill, False)

    @classmethod
    def ubin(cls, digits: int = 0, chunk: int = 0, space_fill: bool = False) -> Self:
        """Binary of the unsigned bit pattern, marked with ` u` for signed types."""
        return cls(2, digits, chunk, space_fill, True)

    @classmethod
    def uoct(cls, digits: int = 0, chunk: int = 0, space_fill: bool = False) -> Self:
        """Octal of the unsigned bit pattern, marked with ` u` for signed types."""
        return cls(8, digits, chunk, space_fill, True)

    @classmethod
    def udec(cls, digits: int = 0, chunk: int = 0, space_fill: bool = False) -> Self:
        """Decimal without the alignment space kept for a minus sign."""
        return cls(10, digits, chunk, space_fill, True)

    @classmethod
    def uhex(cls, digits: int = 0, chunk: int = 0, space_fill: bool = False) -> Self:
        """Hexadecimal of the unsigned bit pattern, marked with ` u` for signed types."""
        return cls(16, digits, chunk, space_fill, True)


@dataclass(frozen=True)
class DumpOptions:
    """
    Layout and output configuration threaded through every formatting call.

    Attributes:
        max_line_width: Maximum columns of a single-line container rendering.
        max_depth: Containers at this depth or deeper render as `[ ... ]`.
        cont_indent_style: Policy forcing one-element-per-line layout, see ContIndentStyle.
        color: ColorMode; only ALWAYS makes formatters emit escape codes.
        log_label: Prefix of every block written by dump().
        palette: Colors per semantic category when color is enabled.

    Examples:
        >>> opts = DumpOptions(max_line_width=40)
        >>> opts.merge(max_depth=2).max_line_width
        40
        >>> DumpOptions.plain().escape.enabled
        False
    """
    max_line_width: int = DisplayConf.MAX_LINE_WIDTH
    max_depth: int = DisplayConf.MAX_DEPTH
    cont_indent_style: ContIndentStyle = ContIndentStyle.WHEN_NESTED
    color: ColorMode = ColorMode.AUTO
    log_label: str = DisplayConf.LOG_LABEL
    palette: Palette = field(default_factory=Palette)

    def __post_init__(self):
        """Validate and normalize fields"""
        if not isinstance(self.max_line_width, int) or isinstance(self.max_line_width, bool):
            raise TypeError(f"max_line_width must be an int, got {fmt_type(self.max_line_width)}")
        if self.max_line_width <= 0:
            raise ValueError(f"max_line_width must be >0, but got {fmt_value(self.max_line_width)}")

        if not isinstance(self.max_depth, int) or isinstance(self.max_depth, bool):
            raise TypeError(f"max_depth must be an int, got {fmt_type(self.max_depth)}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >=0, but got {fmt_value(self.max_depth)}")

        if not isinstance(self.log_label, str):
            raise TypeError(f"log_label must be a str, got {fmt_type(self.log_label)}")

        # Accept plain string literals for the enums
        try:
            object.__setattr__(self, "cont_indent_style", ContIndentStyle(self.cont_indent_style))
        except ValueError:
            raise ValueError(f"cont_indent_style expected one of {[s.value for s in ContIndentStyle]}, "
                             f"but found {fmt_value(self.cont_indent_style)}") from None
        try:
            object.__setattr__(self, "color", ColorMode(self.color))
        except ValueError:
            raise ValueError(f"color expected one of {[m.value for m in ColorMode]}, "
                             f"but found {fmt_value(self.color)}") from None

    @classmethod
    def compact(cls) -> Self:
        """Narrow output that stays on one line whenever it fits."""
        return cls(max_line_width=80, cont_indent_style=ContIndentStyle.NEVER)

    @classmethod
    def debug(cls) -> Self:
        """Deep, colorized output for interactive sessions."""
        return cls(max_depth=8, color=ColorMode.ALWAYS)

    @classmethod
    def plain(cls) -> Self:
        """Default layout without escape codes, suitable for logs and files."""
        return cls(color=ColorMode.NEVER)

    def merge(self,
              # Attrs override
              max_line_width: int | UnsetType = UNSET,
              max_depth: int | UnsetType = UNSET,
              cont_indent_style: ContIndentStyle | str | UnsetType = UNSET,
              color: ColorMode | str | UnsetType = UNSET,
              log_label: str | UnsetType = UNSET,
              palette: Palette | UnsetType = UNSET,
              ) -> "DumpOptions":
        """
        Create a new DumpOptions instance with merged configuration options.

        Parameters not provided (UNSET) are inherited from the current instance.

        Returns:
            New DumpOptions instance with merged configuration.
        """
        return DumpOptions(
            max_line_width=ifnotunset(max_line_width, default=self.max_line_width),
            max_depth=ifnotunset(max_depth, default=self.max_depth),
            cont_indent_style=ifnotunset(cont_indent_style, default=self.cont_indent_style),
            color=ifnotunset(color, default=self.color),
            log_label=ifnotunset(log_label, default=self.log_label),
            palette=ifnotunset(palette, default=self.palette),
        )

    @cached_property
    def escape(self) -> EscapeSequence:
        """Escape-sequence wrappers for this configuration."""
        return EscapeSequence(enabled=self.color is ColorMode.ALWAYS, palette=self.palette)
