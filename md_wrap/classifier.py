"""Line classification for the reflow engine."""

from __future__ import annotations

from .constants import BULLET_MARKER, FENCE_MARKER, NUMBER_SEPARATOR, QUOTE_MARKER
from .models import ListState, ListType


def is_fence(line: str) -> bool:
    """Return True when the stripped line opens or closes a code block.

    Examples:
        is_fence("  ```python")  # True
        is_fence("text ```")  # False
    """
    return line.strip().startswith(FENCE_MARKER)


def is_blank(line: str) -> bool:
    """Return True when the line holds only whitespace.

    Examples:
        is_blank("  \\t")  # True
        is_blank(" > ")  # False
    """
    return not line.strip()


def count_quote_depth(line: str) -> tuple[int, int]:
    """Count how deeply a line is block-quoted.

    Every ``>`` adds one level. The first whitespace character after a ``>`` is
    part of the prefix; whitespace beyond it only counts when another ``>``
    follows. The scan stops at the first character that is neither whitespace
    nor ``>``.

    Args:
        line: Line to inspect, without its line terminator.

    Returns:
        tuple[int, int]: Quote depth and the length of the quote prefix, so
            ``line[length:]`` is the quoted content.

    Examples:
        count_quote_depth("> > hello")  # (2, 4)
        count_quote_depth(">>  hello")  # (2, 3)
        count_quote_depth("hello")  # (0, 0)
    """
    depth = 0
    length = 0
    consumed_space_after = True
    for position, character in enumerate(line, start=1):
        if character.isspace():
            if not consumed_space_after:
                length = position
                consumed_space_after = True
        elif character == QUOTE_MARKER:
            depth += 1
            length = position
            consumed_space_after = False
        else:
            break
    return depth, length


def count_list_indent(line: str) -> ListState:
    """Classify the list marker at the start of a line.

    Expects a line with any quote prefix already removed. A single decimal
    digit followed by ``.`` and whitespace is a numbered item; a ``*`` is a
    bullet. The indent is counted even when no marker is found.

    Args:
        line: Line to inspect, without quote prefix or line terminator.

    Returns:
        ListState: Detected list type and leading whitespace count.

    Examples:
        count_list_indent("  1. item")  # ListState(ListType.NUMBERED, 2)
        count_list_indent("* item")  # ListState(ListType.BULLET, 0)
        count_list_indent("   text")  # ListState(ListType.NONE, 3)
    """
    indent = 0
    for index, character in enumerate(line):
        if character.isspace():
            indent += 1
            continue
        if character.isdecimal():
            marker = line[index + 1 : index + 3]
            if len(marker) == 2 and marker[0] == NUMBER_SEPARATOR and marker[1].isspace():
                return ListState(ListType.NUMBERED, indent)
        elif character == BULLET_MARKER:
            return ListState(ListType.BULLET, indent)
        break
    return ListState(ListType.NONE, indent)
