"""Data models for md-wrap."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import TextIO

from .constants import DEFAULT_CHARS_PER_LINE


class ListType(Enum):
    """Kinds of list items recognized by the reflow engine.

    The value of each member is the marker text written in front of the first
    line of an item.

    Attributes:
        NONE: Not inside a list.
        NUMBERED: Numbered item such as ``1.``.
        BULLET: Bulleted item starting with ``*``.
    """

    NONE = ""
    NUMBERED = "1."
    BULLET = "*"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def width(self) -> int:
        return len(self.value)


@dataclass(frozen=True)
class ListState:
    """List classification of a single line.

    Attributes:
        type: Kind of list item found on the line.
        indent: Number of leading whitespace characters before the marker.
            Also the offset at which the marker starts.
    """

    type: ListType = ListType.NONE
    indent: int = 0

    @property
    def continuation_indent(self) -> int:
        """Indent a wrapped line needs to sit under the item text."""
        return self.indent + self.type.width + 1


@dataclass
class ReflowContext:
    """Encapsulate reflow state while walking Markdown text.

    One context belongs to one processing pass and is never shared.

    Attributes:
        chars_per_line: Target width of output lines, counted in code points.
        out: Stream receiving finished lines.
        parts: Pieces of the output line currently being assembled.
        length: Number of code points held in `parts`.
        in_code: Whether the pass is inside a fenced code block.
        quote_depth: Quote depth of the last prose line seen.
        list_state: List item currently being continued, if any.
        applied_first_prefix: Whether the current item already got its marker.
        list_prefix_first: Prefix for the first output line of a list item.
        list_prefix_rest: Prefix for wrapped lines of a list item.
    """

    chars_per_line: int = DEFAULT_CHARS_PER_LINE
    out: TextIO = field(default_factory=lambda: sys.stdout)
    parts: list[str] = field(default_factory=list)
    length: int = 0
    in_code: bool = False
    quote_depth: int = 0
    list_state: ListState = field(default_factory=ListState)
    applied_first_prefix: bool = False
    list_prefix_first: str = ""
    list_prefix_rest: str = ""

    @property
    def pending(self) -> bool:
        return self.length != 0
