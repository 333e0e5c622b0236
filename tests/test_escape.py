#
# vardump - Escape Sequence Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import FrozenInstanceError

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest
from colorama import Fore, Style

# Local ----------------------------------------------------------------------------------------------------------------
from vardump.escape import EscapeSequence, Palette, last_line_length, strip_ansi, visible_len

CATEGORIES = ["number", "signed_number", "character", "escaped_char", "string",
              "op", "member", "reserved", "class_name"]


# Tests ----------------------------------------------------------------------------------------------------------------

class TestEscapeSequenceDisabled:
    @pytest.mark.parametrize("category", CATEGORIES)
    def test_identity(self, category):
        assert getattr(EscapeSequence(), category)("text") == "text"

    def test_bracket_identity(self):
        assert EscapeSequence().bracket("[ ", 3) == "[ "


class TestEscapeSequenceEnabled:
    @pytest.mark.parametrize("category", CATEGORIES)
    def test_wrapped_with_palette_code(self, category):
        es = EscapeSequence(enabled=True)
        code = getattr(Palette(), category)
        assert getattr(es, category)("text") == code + "text" + Style.RESET_ALL

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_empty_never_wrapped(self, category):
        assert getattr(EscapeSequence(enabled=True), category)("") == ""

    @pytest.mark.parametrize("depth, color", [
        pytest.param(0, Fore.YELLOW, id="depth_0"),
        pytest.param(1, Fore.MAGENTA, id="depth_1"),
        pytest.param(2, Fore.BLUE, id="depth_2"),
        pytest.param(3, Fore.YELLOW, id="depth_3_cycles"),
    ])
    def test_bracket_colors_cycle(self, depth, color):
        assert EscapeSequence(enabled=True).bracket("]", depth) == color + "]" + Style.RESET_ALL

    def test_custom_palette(self):
        es = EscapeSequence(enabled=True, palette=Palette(number=Fore.RED, brackets=(Fore.CYAN,)))
        assert es.number("1") == Fore.RED + "1" + Style.RESET_ALL
        assert es.bracket("[", 5) == Fore.CYAN + "[" + Style.RESET_ALL

    def test_wrapping_keeps_visible_width(self):
        es = EscapeSequence(enabled=True)
        assert visible_len(es.op(", ") + es.member("name")) == 6


class TestPalette:
    def test_empty_brackets_rejected(self):
        with pytest.raises(ValueError, match="at least one color"):
            Palette(brackets=())

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            Palette().number = Fore.RED


class TestWidth:
    @pytest.mark.parametrize("text, expected", [
        pytest.param("", 0, id="empty"),
        pytest.param("abc", 3, id="ascii"),
        pytest.param(Fore.RED + "abc" + Style.RESET_ALL, 3, id="ansi_stripped"),
        pytest.param("日本", 4, id="wide_chars"),
        pytest.param("a\x01b", 3, id="control_fallback"),
    ])
    def test_visible_len(self, text, expected):
        assert visible_len(text) == expected

    @pytest.mark.parametrize("text, expected", [
        pytest.param("abc", 3, id="single_line"),
        pytest.param("abc\n  de", 4, id="after_newline"),
        pytest.param("abc\n", 0, id="trailing_newline"),
    ])
    def test_last_line_length(self, text, expected):
        assert last_line_length(text) == expected

    def test_strip_ansi(self):
        assert strip_ansi(Fore.GREEN + "x" + Style.RESET_ALL + "y") == "xy"
