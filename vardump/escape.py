"""
Escape-sequence styling for dumped values.

Wraps substrings with ANSI color codes keyed by semantic category (number, operator,
bracket, member, ...). When disabled every wrapper returns its input unchanged, so
plain output and visible width always agree. Width of colored output must be measured
with visible_len(), never len().
"""

# Standard library -----------------------------------------------------------------------------------------------------
import re
from dataclasses import dataclass

# Third-party ----------------------------------------------------------------------------------------------------------
from colorama import Fore, Style
from wcwidth import wcswidth

ANSI_PATTERN = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Palette:
    """
    ANSI color codes per semantic category.

    Brackets cycle through `brackets` by nesting depth so that matching pairs
    share a color.
    """
    number: str = Fore.LIGHTGREEN_EX
    signed_number: str = Fore.LIGHTGREEN_EX
    character: str = Fore.LIGHTYELLOW_EX
    escaped_char: str = Fore.LIGHTMAGENTA_EX
    string: str = Fore.LIGHTYELLOW_EX
    op: str = Fore.LIGHTBLACK_EX
    member: str = Fore.LIGHTCYAN_EX
    reserved: str = Fore.LIGHTBLUE_EX
    class_name: str = Fore.GREEN
    brackets: tuple[str, ...] = (Fore.YELLOW, Fore.MAGENTA, Fore.BLUE)

    def __post_init__(self):
        if not self.brackets:
            raise ValueError("brackets palette must contain at least one color")


@dataclass(frozen=True)
class EscapeSequence:
    """
    Semantic string wrappers used by all formatters.

    Attributes:
        enabled: Emit ANSI codes if True; otherwise every wrapper is the identity.
        palette: Colors per category.

    Examples:
        >>> EscapeSequence().number("42")
        '42'
        >>> EscapeSequence(enabled=True).number("42") == Fore.LIGHTGREEN_EX + "42" + Style.RESET_ALL
        True
    """
    enabled: bool = False
    palette: Palette = Palette()

    def _wrap(self, text: str, code: str) -> str:
        if not self.enabled or not text:
            return text
        return f"{code}{text}{Style.RESET_ALL}"

    def number(self, text: str) -> str:
        return self._wrap(text, self.palette.number)

    def signed_number(self, text: str) -> str:
        return self._wrap(text, self.palette.signed_number)

    def character(self, text: str) -> str:
        return self._wrap(text, self.palette.character)

    def escaped_char(self, text: str) -> str:
        return self._wrap(text, self.palette.escaped_char)

    def string(self, text: str) -> str:
        return self._wrap(text, self.palette.string)

    def op(self, text: str) -> str:
        return self._wrap(text, self.palette.op)

    def member(self, text: str) -> str:
        return self._wrap(text, self.palette.member)

    def reserved(self, text: str) -> str:
        return self._wrap(text, self.palette.reserved)

    def class_name(self, text: str) -> str:
        return self._wrap(text, self.palette.class_name)

    def bracket(self, text: str, depth: int) -> str:
        """Wrap a bracket token with the color assigned to the nesting depth."""
        brackets = self.palette.brackets
        return self._wrap(text, brackets[depth % len(brackets)])


# Methods --------------------------------------------------------------------------------------------------------------

def strip_ansi(text: str) -> str:
    return ANSI_PATTERN.sub("", text)


def visible_len(text: str) -> int:
    """
    Number of terminal columns occupied by text once escape codes are stripped.

    Wide characters count as two columns. Text containing characters without a
    defined width falls back to the code point count.
    """
    plain = strip_ansi(text)
    width = wcswidth(plain)
    return width if width >= 0 else len(plain)


def last_line_length(text: str) -> int:
    """Visible width of the text after its last newline."""
    return visible_len(text.rpartition("\n")[2])
