"""
Top-level API: render values to strings, or print labelled dumps to a stream.

    >>> from vardump.dump import dump, dumps
    >>> dumps({"id": 7, "name": "sensor"})
    '{ "id": 7, "name": "sensor" }'
    >>> dump(answer=42, primes=[2, 3, 5])           # doctest: +SKIP
    [dump] answer => 42, primes => [ 2, 3, 5 ]
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import os
import sys
from typing import Any, TextIO

# Local ----------------------------------------------------------------------------------------------------------------
from .command import ExportCommand
from .display import ColorMode, DumpOptions
from .escape import visible_len
from .formatters import fmt_any
from .result import text_of
from .sentinels import REQUIRES_MULTILINE

logger = logging.getLogger(__name__)


# Methods --------------------------------------------------------------------------------------------------------------

def dumps(value: Any,
          *,
          command: ExportCommand | None = None,
          options: DumpOptions | None = None,
          indent: str = "",
          last_line_length: int = 0,
          ) -> str:
    """
    Render a value as text, on one line if it fits, otherwise across indented lines.

    Args:
        value: Value to render.
        command: Value styles and elision rules; ExportCommand() if None.
        options: Layout and color options; DumpOptions() if None. ColorMode.AUTO
            is not resolved here and renders without escape codes.
        indent: Indentation of continuation lines.
        last_line_length: Columns already used on the line the text starts on.

    Returns:
        The rendered text, without a trailing newline.

    Examples:
        >>> dumps([1, 2, 3, 4, 5], command=ExportCommand.both(3))
        '[ 1, 2, ..., 5 ]'
        >>> print(dumps([[1, 2], [3]]))
        [
          [ 1, 2 ],
          [ 3 ]
        ]
    """
    command = ExportCommand() if command is None else command
    options = DumpOptions() if options is None else options
    return text_of(fmt_any(value, indent, last_line_length, 0, False, command, options))


def dump(*values: Any,
         file: TextIO | None = None,
         command: ExportCommand | None = None,
         options: DumpOptions | None = None,
         **named: Any,
         ) -> None:
    """
    Write values to a stream, prefixed with options.log_label.

    Positional values are written bare, keyword values as `name => value`. All of
    them go on one line when it fits within options.max_line_width; otherwise each
    one starts its own line, with continuation lines indented past its label.

    Args:
        *values: Values written bare.
        file: Output stream; sys.stderr if None.
        command: Value styles and elision rules; ExportCommand() if None.
        options: Layout and color options; DumpOptions() if None. ColorMode.AUTO
            is resolved against the environment and the stream.
        **named: Values written with their names as labels.

    Raises:
        OSError: Propagated from the stream when writing fails.
    """
    file = sys.stderr if file is None else file
    command = ExportCommand() if command is None else command
    options = DumpOptions() if options is None else options
    if options.color is ColorMode.AUTO:
        enabled = resolve_color_mode(ColorMode.AUTO, file)
        logger.debug("color mode auto resolved to %s", "always" if enabled else "never")
        options = options.merge(color=ColorMode.ALWAYS if enabled else ColorMode.NEVER)

    es = options.escape
    entries = [("", value) for value in values]
    entries += [(es.member(name) + es.op(" => "), value) for name, value in named.items()]
    if not entries:
        return

    # Single line
    output = options.log_label
    for position, (label, value) in enumerate(entries):
        if position:
            output += es.op(", ")
        output += label
        result = fmt_any(value, "", visible_len(output), 0, True, command, options)
        if result is REQUIRES_MULTILINE:
            break
        output += result.text
        if visible_len(output) > options.max_line_width:
            break
    else:
        file.write(output + "\n")
        return

    # One value per line
    lines = []
    for position, (label, value) in enumerate(entries):
        head = (options.log_label if position == 0 else " " * visible_len(options.log_label)) + label
        width = visible_len(head)
        lines.append(head + text_of(fmt_any(value, " " * width, width, 0, False, command, options)))
    file.write("\n".join(lines) + "\n")


def resolve_color_mode(mode: ColorMode | str = ColorMode.AUTO, file: TextIO | None = None) -> bool:
    """
    Decide whether escape codes are emitted.

    Decision precedence:
        1. ALWAYS -> True, NEVER -> False
        2. `FORCE_COLOR` (set and not equal to "0") -> True
        3. `NO_COLOR` (set to any value) -> False
        4. Whether file (sys.stderr if None) is a TTY

    Examples:
        >>> resolve_color_mode(ColorMode.NEVER)
        False
    """
    mode = ColorMode(mode)
    if mode is ColorMode.ALWAYS:
        return True
    if mode is ColorMode.NEVER:
        return False

    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False

    file = sys.stderr if file is None else file
    try:
        return bool(file.isatty())
    except (AttributeError, OSError, ValueError):
        return False
