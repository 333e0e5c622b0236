"""
Rendering of primitive values: booleans, characters, integers and floats.

Integers are rendered against the width of their storage type (IntKind), which is
what makes digit clamping, zero padding and unsigned reinterpretation meaningful:
ctypes and NumPy-style scalars carry their own width, plain Python ints are taken as
signed 64-bit and widened in 64-bit steps when they do not fit.

Primitives never span lines, so these formatters return plain (styled) strings.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import ctypes
import logging
import operator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

# Local ----------------------------------------------------------------------------------------------------------------
from .display import BoolStyle
from .escape import EscapeSequence
from .utils import fmt_type, fmt_value

if TYPE_CHECKING:
    from .command import ExportCommand

logger = logging.getLogger(__name__)

# ctypes `_type_` codes; lowercase are signed
CTYPES_INT_CODES = "bBhHiIlLqQ"
CTYPES_FLOAT_CODES = "fdg"

_CHAR_ESCAPES = {
    0x00: "\\0",
    0x07: "\\a",
    0x08: "\\b",
    0x09: "\\t",
    0x0A: "\\n",
    0x0B: "\\v",
    0x0C: "\\f",
    0x0D: "\\r",
}

# Prefixes are appended to a least-significant-first buffer, hence reversed
_REVERSED_PREFIX = {2: "b0", 8: "o0", 16: "x0"}

_DIGITS = "0123456789ABCDEF"


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class IntKind:
    """
    Storage type of an integer: bit width and signedness.

    Examples:
        >>> IntKind(8, signed=True).min, IntKind(8, signed=True).max
        (-128, 127)
        >>> IntKind.for_value(2**63)
        IntKind(bits=128, signed=True)
    """
    bits: int = 64
    signed: bool = True

    def __post_init__(self):
        if not isinstance(self.bits, int) or self.bits <= 0:
            raise ValueError(f"IntKind.bits must be a positive int, but got {fmt_value(self.bits)}")

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    @classmethod
    def for_value(cls, value: int) -> "IntKind":
        """Signed 64-bit, widened in 64-bit steps until value fits."""
        bits = 64
        while not -(1 << (bits - 1)) <= value < (1 << (bits - 1)):
            bits += 64
        return cls(bits, True)


# Methods --------------------------------------------------------------------------------------------------------------

def std_integer(value: Any) -> tuple[int, IntKind]:
    """
    Normalize an integer-like value to a Python int and its storage kind.

    Supports Python int, ctypes integer types and NumPy-style scalars exposing
    `dtype.kind` and `dtype.itemsize` (detected without importing NumPy).

    Raises:
        TypeError: If value is a bool or not integer-like.

    Examples:
        >>> std_integer(ctypes.c_uint8(200))
        (200, IntKind(bits=8, signed=False))
        >>> std_integer(-5)
        (-5, IntKind(bits=64, signed=True))
    """
    if isinstance(value, bool):
        raise TypeError(f"boolean values are not integers here, got {fmt_value(value)}")

    # ctypes scalars know their size and signedness via the `_type_` code
    if isinstance(value, ctypes._SimpleCData):
        code = getattr(type(value), "_type_", None)
        if isinstance(code, str) and code in CTYPES_INT_CODES:
            return value.value, IntKind(ctypes.sizeof(value) * 8, code.islower())
        raise TypeError(f"unsupported ctypes integer type: {fmt_type(value)}")

    # NumPy-style integer scalars
    dtype = getattr(value, "dtype", None)
    if dtype is not None and getattr(dtype, "kind", None) in ("i", "u"):
        return operator.index(value), IntKind(dtype.itemsize * 8, dtype.kind == "i")

    try:
        as_int = operator.index(value)
    except TypeError:
        raise TypeError(f"unsupported integer type: {fmt_type(value)}") from None
    return as_int, IntKind.for_value(as_int)


def std_char(value: Any) -> int:
    """
    Normalize a single character to its byte value.

    Accepts ctypes.c_char, one-byte bytes, one-character str with code point <= 0xFF
    and ints in range 0..255.

    Raises:
        TypeError: If value is not char-like.
        ValueError: If value does not fit one byte.
    """
    if isinstance(value, ctypes.c_char):
        value = value.value or b"\x00"
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 1:
            raise ValueError(f"a char must be exactly one byte, got {fmt_value(value)}")
        return value[0]
    if isinstance(value, str):
        if len(value) != 1 or ord(value) > 0xFF:
            raise ValueError(f"a char must be one character in range 0x00-0xFF, got {fmt_value(value)}")
        return ord(value)
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value <= 0xFF:
            raise ValueError(f"a char must be in range 0..255, got {fmt_value(value)}")
        return value
    raise TypeError(f"unsupported char type: {fmt_type(value)}")


def std_float(value: Any) -> float:
    """Normalize a ctypes or NumPy-style float scalar to a Python float."""
    if isinstance(value, ctypes._SimpleCData):
        return float(value.value)
    return float(value)


def is_printable_char(code: int) -> bool:
    """Printable in the C locale: 0x20 (space) through 0x7E (~)."""
    return 0x20 <= code <= 0x7E


def escape_non_printable_char(code: int) -> str:
    """C-style escape of a non-printable byte, falling back to `\\xHH`."""
    return _CHAR_ESCAPES.get(code, f"\\x{code:02X}")


def fmt_bool(value: Any, command: "ExportCommand", es: EscapeSequence) -> str:
    """
    Render a boolean per command.bool_style.

    Examples:
        >>> from vardump.command import ExportCommand
        >>> fmt_bool(True, ExportCommand(bool_style=BoolStyle.TRUE_LEFT), EscapeSequence())
        'true '
    """
    value = bool(value.value) if isinstance(value, ctypes.c_bool) else bool(value)
    style = command.bool_style
    if style is BoolStyle.NORMAL:
        return es.reserved("true" if value else "false")
    if style is BoolStyle.TRUE_LEFT:
        return es.reserved("true " if value else "false")
    if style is BoolStyle.TRUE_RIGHT:
        return es.reserved(" true" if value else "false")
    return es.reserved("1" if value else "0")


def fmt_char(value: Any, command: "ExportCommand", es: EscapeSequence) -> str:
    """
    Render a single byte as a quoted character, optionally followed by its hex value.

    With command.char_as_hex every rendering is 8 columns wide:
    `'a' 0x61`, `'\\n'0x0A`, and `    0x1B` where the `\\xHH` escape would repeat the hex.

    Examples:
        >>> from vardump.command import ExportCommand
        >>> fmt_char("a", ExportCommand(), EscapeSequence())
        "'a'"
        >>> fmt_char(b"\\n", ExportCommand(char_as_hex=True), EscapeSequence())
        "'\\\\n'0x0A"
    """
    code = std_char(value)
    is_printable = is_printable_char(code)
    need_escape = not is_printable or chr(code) in ("'", "\\")

    if need_escape:
        escaped = "\\" + chr(code) if is_printable else escape_non_printable_char(code)
        if command.char_as_hex and len(escaped) > 2:
            output = " " * 4
        else:
            output = es.character("'") + es.escaped_char(escaped) + es.character("'")
    else:
        output = es.character(f"'{chr(code)}'")

    if not command.char_as_hex:
        return output

    if not need_escape:
        output += " "
    return output + es.number(f"0x{code:02X}")


def fmt_int(value: Any, command: "ExportCommand", es: EscapeSequence, kind: IntKind | None = None) -> str:
    """
    Render an integer per command.int_style.

    Without a style (or with a plain decimal style) the canonical decimal form is used,
    or command.int_format when set. Otherwise the value is rendered in the requested
    radix with padding, chunking, radix prefix and sign handling.

    Args:
        value: Integer-like value, see std_integer().
        command: Active export command.
        es: Escape-sequence wrappers.
        kind: Storage kind; derived from value if None.

    Examples:
        >>> from vardump.command import ExportCommand
        >>> from vardump.display import IntStyle
        >>> cmd = ExportCommand(int_style=IntStyle.hex(digits=2))
        >>> fmt_int(-5, cmd, EscapeSequence(), kind=IntKind(8))
        '-0x05'
        >>> fmt_int(5, cmd, EscapeSequence(), kind=IntKind(8))
        ' 0x05'
    """
    if kind is None:
        value, kind = std_integer(value)
    else:
        value = operator.index(value)

    int_style = command.int_style
    if int_style is None:
        return es.signed_number(command.format(value) or str(value))

    base = int_style.base
    digits = int_style.digits
    chunk = int_style.chunk
    space_fill = int_style.space_fill
    make_unsigned_or_no_space_for_minus = int_style.make_unsigned_or_no_space_for_minus

    if base == 10 and digits == 0 and chunk == 0:
        return es.signed_number(str(value))

    max_digits = _max_digits(kind, base)
    if digits > max_digits:
        logger.debug("digits=%d clamped to %d for %s in base %d", digits, max_digits, kind, base)
        digits = max_digits
    if chunk > max_digits:
        logger.debug("chunk=%d exceeds %d digits of %s in base %d, chunking disabled", chunk, max_digits, kind, base)
        chunk = 0

    make_unsigned = kind.signed and base != 10 and make_unsigned_or_no_space_for_minus
    add_extra_space = kind.signed and not make_unsigned_or_no_space_for_minus

    if make_unsigned:
        magnitude = value & kind.mask
    else:
        magnitude = abs(value)

    # Built least-significant-first, reversed at the end
    output = _abs_to_reversed_str(magnitude, base)

    need_minus = not make_unsigned and value < 0
    minus_before_fill = base == 10 and space_fill
    if need_minus and minus_before_fill:
        output += "-"

    if len(output) < digits:
        output += (" " if space_fill else "0") * (digits - len(output))

    length_was_below_digits = len(output) <= digits
    if chunk > 0:
        output = _chunk_string(output, base, chunk)

    if base != 10:
        output += _REVERSED_PREFIX[base]

    if need_minus and not minus_before_fill:
        output += "-"
    elif length_was_below_digits and add_extra_space:
        output += " "

    output = es.signed_number(output[::-1])
    if make_unsigned:
        output += es.op(" u")
    return output


def fmt_float(value: Any, command: "ExportCommand", es: EscapeSequence) -> str:
    """Render a float via command.float_format, or its shortest round-trip repr."""
    value = std_float(value)
    return es.signed_number(command.format(value) or repr(value))


# Private Methods ------------------------------------------------------------------------------------------------------

def _max_digits(kind: IntKind, base: int) -> int:
    """Digits needed in base for the largest magnitude the kind can hold."""
    largest = max(kind.max, -kind.min)
    count = 0
    while largest:
        largest //= base
        count += 1
    return count


def _abs_to_reversed_str(magnitude: int, base: int) -> str:
    """Digits of a non-negative int in base, least significant first."""
    if base == 10:
        return str(magnitude)[::-1]

    reversed_digits = []
    if base == 2:
        while True:
            reversed_digits.append("1" if magnitude & 1 else "0")
            magnitude >>= 1
            if not magnitude:
                break
    else:
        while True:
            magnitude, digit = divmod(magnitude, base)
            reversed_digits.append(_DIGITS[digit])
            if not magnitude:
                break
    return "".join(reversed_digits)


def _chunk_string(reversed_str: str, base: int, chunk: int) -> str:
    """
    Insert a space after every `chunk` digits of a reversed numeral.

    The trailing space is kept for prefixed radixes, where it ends up between
    the prefix and the most significant digits.
    """
    output = "".join(reversed_str[pos:pos + chunk] + " " for pos in range(0, len(reversed_str), chunk))
    if base == 10:
        output = output[:-1]
    return output
