#
# vardump - Formatters Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import ctypes
from decimal import Decimal

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest
from colorama import Fore, Style

# Local ----------------------------------------------------------------------------------------------------------------
from vardump.command import ExportCommand
from vardump.display import BoolStyle, DumpOptions, IntStyle
from vardump.escape import EscapeSequence
from vardump.formatters import fmt_any, fmt_other, fmt_string
from vardump.result import Rendered, render_or_fail, text_of
from vardump.sentinels import REQUIRES_MULTILINE


# Local Classes & Methods ----------------------------------------------------------------------------------------------

class MultilineRepr:
    def __repr__(self):
        return "first\nsecond"


class BrokenRepr:
    def __repr__(self):
        raise RuntimeError("boom")


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFmtAnyDispatch:
    @pytest.mark.parametrize("value, expected", [
        pytest.param(None, "None", id="none"),
        pytest.param(True, "true", id="bool"),
        pytest.param(ctypes.c_char(b"a"), "'a'", id="char"),
        pytest.param(42, "42", id="int"),
        pytest.param(ctypes.c_uint8(200), "200", id="c_uint8"),
        pytest.param(1.25, "1.25", id="float"),
        pytest.param("hi", '"hi"', id="str"),
        pytest.param([1, "a"], '[ 1, "a" ]', id="list"),
        pytest.param(b"ab", "b'ab'", id="bytes"),
        pytest.param(Decimal("1.5"), "Decimal('1.5')", id="decimal"),
    ])
    def test_default_rendering(self, value, expected):
        assert fmt_any(value) == Rendered(expected)

    def test_command_reaches_children(self, plain):
        command = ExportCommand(int_style=IntStyle.hex(), bool_style=BoolStyle.NUMBER)
        assert fmt_any([255, False], command=command, options=plain) == Rendered("[ 0xFF, 0 ]")

    def test_char_as_hex_in_container(self, plain):
        command = ExportCommand(char_as_hex=True)
        assert fmt_any([ctypes.c_char(b"A")], command=command, options=plain) == Rendered("[ 'A' 0x41 ]")

    def test_iterator_not_consumed(self):
        iterator = iter([1, 2])
        assert fmt_any(iterator).text.startswith("<list_iterator object")
        assert list(iterator) == [1, 2]

    def test_colored_none(self):
        assert fmt_any(None, options=DumpOptions(color="always")) == Rendered(
            Fore.LIGHTBLUE_EX + "None" + Style.RESET_ALL)

    def test_deterministic(self, plain):
        value = {"a": [1, 2, {3: (4, 5)}], "b": frozenset({1, 2})}
        assert fmt_any(value, options=plain) == fmt_any(value, options=plain)


class TestFmtString:
    @pytest.mark.parametrize("value, expected", [
        pytest.param("", '""', id="empty"),
        pytest.param("abc", '"abc"', id="plain"),
        pytest.param('a"b', '"a\\"b"', id="quote"),
        pytest.param("a\\b", '"a\\\\b"', id="backslash"),
        pytest.param("tab\there", '"tab\\there"', id="tab"),
        pytest.param("two\nlines", '"two\\nlines"', id="newline"),
        pytest.param("\x7f", '"\\x7F"', id="del"),
        pytest.param("é", '"é"', id="latin1_printable"),
        pytest.param("\u200b", '"\\u200B"', id="zero_width_space"),
        pytest.param("\U000E0001", '"\\U000E0001"', id="language_tag"),
        pytest.param("日本", '"日本"', id="wide"),
    ])
    def test_escapes(self, value, expected, es):
        assert fmt_string(value, es) == expected

    def test_never_multiline(self):
        assert fmt_any("a\nb", fail_on_newline=True) == Rendered('"a\\nb"')

    def test_colored_segments(self):
        es = EscapeSequence(enabled=True)
        expected = (Fore.LIGHTYELLOW_EX + '"' + Style.RESET_ALL
                    + Fore.LIGHTYELLOW_EX + "a" + Style.RESET_ALL
                    + Fore.LIGHTMAGENTA_EX + "\\n" + Style.RESET_ALL
                    + Fore.LIGHTYELLOW_EX + '"' + Style.RESET_ALL)
        assert fmt_string("a\n", es) == expected


class TestFmtOther:
    def test_single_line(self):
        assert fmt_other(Decimal("2")) == Rendered("Decimal('2')")

    def test_multiline_repr_fails_on_newline(self):
        assert fmt_other(MultilineRepr(), fail_on_newline=True) is REQUIRES_MULTILINE

    def test_multiline_repr_indented(self):
        assert fmt_other(MultilineRepr(), indent="  ") == Rendered("first\n  second")

    def test_broken_repr(self):
        assert fmt_other(BrokenRepr()) == Rendered("<BrokenRepr object (repr failed: RuntimeError)>")

    def test_multiline_repr_in_container(self, plain):
        text = text_of(fmt_any([MultilineRepr()], options=plain))
        assert text == "[\n  first\n  second\n]"


class TestResult:
    def test_render_or_fail(self):
        assert render_or_fail("a\nb", False) == Rendered("a\nb")
        assert render_or_fail("a\nb", True) is REQUIRES_MULTILINE
        assert render_or_fail("ab", True) == Rendered("ab")

    def test_text_of(self):
        assert text_of(Rendered("x")) == "x"
        assert str(Rendered("x")) == "x"
        with pytest.raises(ValueError, match="multi-line"):
            text_of(REQUIRES_MULTILINE)
