"""
Render results exchanged between the dispatcher and the formatters.

A formatter asked to fail on newline either renders the value on the current line
(Rendered) or answers REQUIRES_MULTILINE, which tells the calling container to abandon
its own single-line attempt. Without fail_on_newline a formatter always renders.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Callable, TypeAlias

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import REQUIRES_MULTILINE, RequiresMultilineType


@dataclass(frozen=True)
class Rendered:
    """Text of a value rendered at a given position; may contain escape codes."""
    text: str

    def __str__(self) -> str:
        return self.text


Result: TypeAlias = Rendered | RequiresMultilineType

FormatFn: TypeAlias = Callable[..., Result]
"""
Signature of the dispatcher passed to container formatters:
`(value, indent, last_line_length, current_depth, fail_on_newline, command, options) -> Result`
"""


def render_or_fail(text: str, fail_on_newline: bool) -> Result:
    """Wrap text, answering REQUIRES_MULTILINE for multi-line text under fail_on_newline."""
    if fail_on_newline and "\n" in text:
        return REQUIRES_MULTILINE
    return Rendered(text)


def text_of(result: Result) -> str:
    """
    Text of a result produced without fail_on_newline.

    Raises:
        ValueError: If result is REQUIRES_MULTILINE.
    """
    if result is REQUIRES_MULTILINE:
        raise ValueError("value requires a multi-line layout but fail_on_newline was set")
    return result.text
