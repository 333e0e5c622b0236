"""
Width-aware layout of container values: sequences, sets, mappings, tuples and dataclasses.

Every bracketed kind goes through the same engine. It first tries to render all shown
elements on the current line, asking each child to fail rather than break the line.
When a child cannot stay on one line, or the line grows past max_line_width, the
attempt is abandoned and the elements are laid out one per line instead. A container
that is itself being tried on a parent's line answers REQUIRES_MULTILINE, so the
parent switches to its own multi-line layout.

Element selection (elision) is computed once per container, before either layout
attempt, so both layouts show the very same elements.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import dataclasses
from typing import Any, Callable, NamedTuple, Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .command import ExportCommand
from .display import ContIndentStyle, DisplayConf, DumpOptions
from .escape import EscapeSequence, last_line_length as _last_line_length, visible_len
from .iterable import is_empty_iterable
from .kinds import ValueKind, kind_of
from .result import FormatFn, Rendered, Result, text_of
from .sentinels import REQUIRES_MULTILINE
from .utils import class_name


# Classes --------------------------------------------------------------------------------------------------------------

class Item(NamedTuple):
    """
    One entry laid out by the engine.

    Attributes:
        is_ellipsis: True for a marker standing in for elided elements.
        key: Entry label source: the index, mapping key or field name; None when unlabelled.
        value: The element value, or None for an ellipsis marker.
    """
    is_ellipsis: bool
    key: Any
    value: Any


class Brackets(NamedTuple):
    """Opening and closing bracket of a kind, with an optional class-name prefix."""
    open: str
    close: str
    prefix: str = ""


LabelFn = Callable[[Any, str, int, bool], Result]
"""Renders the label of an entry: `(key, indent, last_line_length, fail_on_newline) -> Result`"""

SEQUENCE_BRACKETS = Brackets("[", "]")
SET_BRACKETS = Brackets("{", "}")
MAP_BRACKETS = Brackets("{", "}")
TUPLE_BRACKETS = Brackets("(", ")")


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_container(value: Any, indent: str, last_line_length: int, current_depth: int, fail_on_newline: bool,
                  command: ExportCommand, options: DumpOptions, fmt: FormatFn) -> Result:
    """
    Render a sequence-like container as `[ a, b, ... ]`.

    Elements are elided per command.skip_rule; with command.show_index each shown
    element is labelled with its position in the full container.

    Raises:
        TypeError: If value is not a re-iterable container.
    """
    es = options.escape
    if is_empty_iterable(value):
        return _empty(SEQUENCE_BRACKETS, current_depth, es)
    if current_depth >= options.max_depth:
        return _truncated(SEQUENCE_BRACKETS, current_depth, es)

    items = [Item(entry.is_ellipsis, entry.index, entry.value) for entry in command.create_skip_plan(value)]
    label = _index_label(es) if command.show_index else None
    return fmt_items(items, SEQUENCE_BRACKETS, indent, last_line_length, current_depth, fail_on_newline,
                     command, options, fmt, label=label)


def fmt_set(value: abc.Set, indent: str, last_line_length: int, current_depth: int, fail_on_newline: bool,
            command: ExportCommand, options: DumpOptions, fmt: FormatFn) -> Result:
    """Render a set as `{ a, b, ... }`, elided per command.skip_rule and never index-labelled."""
    es = options.escape
    if not value:
        return _empty(SET_BRACKETS, current_depth, es)
    if current_depth >= options.max_depth:
        return _truncated(SET_BRACKETS, current_depth, es)

    items = [Item(entry.is_ellipsis, None, entry.value) for entry in command.create_skip_plan(value)]
    return fmt_items(items, SET_BRACKETS, indent, last_line_length, current_depth, fail_on_newline,
                     command, options, fmt)


def fmt_mapping(value: abc.Mapping, indent: str, last_line_length: int, current_depth: int, fail_on_newline: bool,
                command: ExportCommand, options: DumpOptions, fmt: FormatFn) -> Result:
    """
    Render a mapping as `{ key: value, ... }`.

    Keys are rendered like any other value, one level deeper. Entries are elided
    per command.skip_rule.
    """
    es = options.escape
    if not value:
        return _empty(MAP_BRACKETS, current_depth, es)
    if current_depth >= options.max_depth:
        return _truncated(MAP_BRACKETS, current_depth, es)

    items = []
    for entry in command.create_skip_plan(value.items()):
        if entry.is_ellipsis:
            items.append(Item(True, None, None))
        else:
            key, item_value = entry.value
            items.append(Item(False, key, item_value))

    next_depth = current_depth + 1
    next_command = command.next()

    def key_label(key: Any, key_indent: str, key_last_line_length: int, key_fail_on_newline: bool) -> Result:
        result = fmt(key, key_indent, key_last_line_length, next_depth, key_fail_on_newline, next_command, options)
        if result is REQUIRES_MULTILINE:
            return result
        return Rendered(result.text + es.op(": "))

    return fmt_items(items, MAP_BRACKETS, indent, last_line_length, current_depth, fail_on_newline,
                     command, options, fmt, label=key_label)


def fmt_tuple(value: tuple, indent: str, last_line_length: int, current_depth: int, fail_on_newline: bool,
              command: ExportCommand, options: DumpOptions, fmt: FormatFn) -> Result:
    """
    Render a tuple as `( a, b )`; a named tuple as `Name( field= a, ... )`.

    Tuples are fixed-size records, so they are never elided.
    """
    es = options.escape
    fields = getattr(type(value), "_fields", None)
    if fields is not None:
        brackets = TUPLE_BRACKETS._replace(prefix=class_name(value))
        items = [Item(False, name, item) for name, item in zip(fields, value)]
        label = _field_label(es)
    else:
        brackets = TUPLE_BRACKETS
        items = [Item(False, None, item) for item in value]
        label = None

    if not items:
        return _empty(brackets, current_depth, es)
    if current_depth >= options.max_depth:
        return _truncated(brackets, current_depth, es)
    return fmt_items(items, brackets, indent, last_line_length, current_depth, fail_on_newline,
                     command, options, fmt, label=label)


def fmt_object(value: Any, indent: str, last_line_length: int, current_depth: int, fail_on_newline: bool,
               command: ExportCommand, options: DumpOptions, fmt: FormatFn) -> Result:
    """
    Render a dataclass instance as `Name{ field= value, ... }`.

    Only fields included in the dataclass repr are shown, in declaration order.

    Raises:
        TypeError: If value is not a dataclass instance.
    """
    if not dataclasses.is_dataclass(value) or isinstance(value, type):
        raise TypeError(f"expected a dataclass instance, got {class_name(value)}")

    es = options.escape
    brackets = Brackets("{", "}", prefix=class_name(value))
    fields = [f for f in dataclasses.fields(value) if f.repr]
    if not fields:
        return _empty(brackets, current_depth, es)
    if current_depth >= options.max_depth:
        return _truncated(brackets, current_depth, es)

    items = [Item(False, f.name, getattr(value, f.name)) for f in fields]
    return fmt_items(items, brackets, indent, last_line_length, current_depth, fail_on_newline,
                     command, options, fmt, label=_field_label(es))


def fmt_items(items: Sequence[Item], brackets: Brackets, indent: str, last_line_length: int, current_depth: int,
              fail_on_newline: bool, command: ExportCommand, options: DumpOptions, fmt: FormatFn,
              label: LabelFn | None = None) -> Result:
    """
    Lay out already selected entries on one line if possible, otherwise one per line.

    Args:
        items: Entries to show, ellipsis markers included, in display order.
        brackets: Brackets of the container kind.
        indent: Indentation of the line the container starts on.
        last_line_length: Columns already used on the current line.
        current_depth: Nesting depth of the container.
        fail_on_newline: Answer REQUIRES_MULTILINE instead of breaking the line.
        command: Command of the current depth; children get command.next().
        options: Layout and style options.
        fmt: Dispatcher rendering child values.
        label: Renders entry labels; entries are unlabelled if None.

    Returns:
        Rendered text, or REQUIRES_MULTILINE when fail_on_newline is set and the
        entries do not fit on the current line.
    """
    es = options.escape
    next_depth = current_depth + 1
    next_command = command.next()
    closing_width = len(" " + brackets.close)
    prefix = es.class_name(brackets.prefix)

    shift_indent = _shift_indent(options.cont_indent_style, items)

    # Single line
    if not shift_indent:
        output = prefix + es.bracket(brackets.open + " ", current_depth)
        for position, item in enumerate(items):
            if position:
                output += es.op(", ")

            if item.is_ellipsis:
                output += es.op("...")
                if last_line_length + visible_len(output) + closing_width > options.max_line_width:
                    break
                continue

            if label is not None:
                label_result = label(item.key, indent, last_line_length + visible_len(output), True)
                if label_result is REQUIRES_MULTILINE:
                    break
                output += label_result.text

            result = fmt(item.value, indent, last_line_length + visible_len(output), next_depth, True,
                         next_command, options)
            if result is REQUIRES_MULTILINE:
                break
            output += result.text

            if last_line_length + visible_len(output) + closing_width > options.max_line_width:
                break
        else:
            return Rendered(output + es.bracket(" " + brackets.close, current_depth))

    # Multiple lines
    if fail_on_newline:
        return REQUIRES_MULTILINE

    new_indent = indent + DisplayConf.INDENT
    output = prefix + es.bracket(brackets.open, current_depth)
    for position, item in enumerate(items):
        if position:
            output += es.op(",")

        output += "\n" + new_indent
        if item.is_ellipsis:
            output += es.op("...")
            continue

        if label is not None:
            output += text_of(label(item.key, new_indent, _last_line_length(output), False))

        output += text_of(fmt(item.value, new_indent, _last_line_length(output), next_depth, False,
                              next_command, options))

    output += "\n" + indent + es.bracket(brackets.close, current_depth)
    return Rendered(output)


# Private Methods ------------------------------------------------------------------------------------------------------

def _shift_indent(style: ContIndentStyle, items: Sequence[Item]) -> bool:
    """
    Whether entries go one per line regardless of width.

    Decided from the kinds of the shown values only, never from measured widths.
    """
    if style is ContIndentStyle.NEVER:
        return False
    if style is ContIndentStyle.ALWAYS:
        return True

    kinds = [kind_of(item.value) for item in items if not item.is_ellipsis]
    if style is ContIndentStyle.WHEN_NESTED:
        return any(kind.is_iterable_like for kind in kinds)
    return any(kind.is_iterable_like and kind is not ValueKind.TUPLE for kind in kinds)


def _empty(brackets: Brackets, depth: int, es: EscapeSequence) -> Rendered:
    return Rendered(es.class_name(brackets.prefix) + es.bracket(f"{brackets.open} {brackets.close}", depth))


def _truncated(brackets: Brackets, depth: int, es: EscapeSequence) -> Rendered:
    return Rendered(es.class_name(brackets.prefix)
                    + es.bracket(brackets.open + " ", depth) + es.op("...") + es.bracket(" " + brackets.close, depth))


def _index_label(es: EscapeSequence) -> LabelFn:
    def label(index: int, indent: str, last_line_length: int, fail_on_newline: bool) -> Result:
        return Rendered(es.member(str(index)) + es.op(": "))

    return label


def _field_label(es: EscapeSequence) -> LabelFn:
    def label(name: str, indent: str, last_line_length: int, fail_on_newline: bool) -> Result:
        return Rendered(es.member(name) + es.op("= "))

    return label
