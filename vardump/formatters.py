"""
Value dispatcher and formatters of atomic non-numeric values.

fmt_any() classifies a value by its type and routes it to the numeric, container,
string or fallback formatter. Every route honors the fail-on-newline contract:
with fail_on_newline set the result is either single-line text or REQUIRES_MULTILINE.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .command import ExportCommand
from .containers import fmt_container, fmt_mapping, fmt_object, fmt_set, fmt_tuple
from .display import DumpOptions
from .escape import EscapeSequence
from .kinds import ValueKind, kind_of
from .numeric import escape_non_printable_char, fmt_bool, fmt_char, fmt_float, fmt_int
from .result import Rendered, Result, render_or_fail
from .utils import safe_repr

_PRIMITIVE_FORMATTERS = {
    ValueKind.BOOL: fmt_bool,
    ValueKind.CHAR: fmt_char,
    ValueKind.INTEGER: fmt_int,
    ValueKind.FLOAT: fmt_float,
}

_CONTAINER_FORMATTERS = {
    ValueKind.CONTAINER: fmt_container,
    ValueKind.MAP: fmt_mapping,
    ValueKind.SET: fmt_set,
    ValueKind.TUPLE: fmt_tuple,
    ValueKind.OBJECT: fmt_object,
}


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_any(value: Any,
            indent: str = "",
            last_line_length: int = 0,
            current_depth: int = 0,
            fail_on_newline: bool = False,
            command: ExportCommand | None = None,
            options: DumpOptions | None = None,
            ) -> Result:
    """
    Render any value at the given position.

    Args:
        value: Value to render.
        indent: Indentation of the current line; continuation lines start with it.
        last_line_length: Columns already used on the current line.
        current_depth: Nesting depth, 0 for a top-level value.
        fail_on_newline: Answer REQUIRES_MULTILINE instead of producing a line break.
        command: Styles and elision rules of the current depth.
        options: Layout and color options.

    Returns:
        Rendered text, or REQUIRES_MULTILINE (only when fail_on_newline is set).

    Examples:
        >>> fmt_any([1, 2, 3])
        Rendered(text='[ 1, 2, 3 ]')
        >>> fmt_any({"a": [1, 2]}, fail_on_newline=True)
        <REQUIRES_MULTILINE>
    """
    command = ExportCommand() if command is None else command
    options = DumpOptions() if options is None else options
    es = options.escape

    kind = kind_of(value)
    if kind is ValueKind.NONE:
        return Rendered(es.reserved("None"))
    if kind.is_primitive:
        return Rendered(_PRIMITIVE_FORMATTERS[kind](value, command, es))
    if kind is ValueKind.STRING:
        return Rendered(fmt_string(value, es))
    if kind in _CONTAINER_FORMATTERS:
        return _CONTAINER_FORMATTERS[kind](value, indent, last_line_length, current_depth, fail_on_newline,
                                           command, options, fmt_any)
    return fmt_other(value, indent, fail_on_newline)


def fmt_string(value: str, es: EscapeSequence) -> str:
    r"""
    Render a string double-quoted, with quotes, backslashes and non-printable characters escaped.

    Examples:
        >>> print(fmt_string('say "hi"\n', EscapeSequence()))
        "say \"hi\"\n"
    """
    parts = [es.string('"')]
    run = []
    for ch in value:
        escaped = _escape_str_char(ch)
        if escaped is None:
            run.append(ch)
            continue
        if run:
            parts.append(es.string("".join(run)))
            run = []
        parts.append(es.escaped_char(escaped))
    if run:
        parts.append(es.string("".join(run)))
    parts.append(es.string('"'))
    return "".join(parts)


def fmt_other(value: Any, indent: str = "", fail_on_newline: bool = False) -> Result:
    """
    Render a value without a dedicated formatter via its repr().

    A failing __repr__ is rendered as a placeholder. Continuation lines of a
    multi-line repr are indented to the current indentation.
    """
    text = safe_repr(value)
    if indent:
        text = text.replace("\n", "\n" + indent)
    return render_or_fail(text, fail_on_newline)


# Private Methods ------------------------------------------------------------------------------------------------------

def _escape_str_char(ch: str) -> str | None:
    """Escape sequence of a string character, None if it is shown as is."""
    if ch in ('"', "\\"):
        return "\\" + ch
    if ch.isprintable():
        return None
    code = ord(ch)
    if code <= 0xFF:
        return escape_non_printable_char(code)
    if code <= 0xFFFF:
        return f"\\u{code:04X}"
    return f"\\U{code:08X}"
