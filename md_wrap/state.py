"""Pending output line and list bookkeeping for the reflow engine."""

from __future__ import annotations

from .models import ListState, ListType, ReflowContext


def write_to_line(ctx: ReflowContext, text: str) -> None:
    """Append text to the pending output line.

    Args:
        ctx: Reflow context holding the pending line.
        text: Text to append; its length is counted in code points.

    Examples:
        write_to_line(ctx, "héllo")
        ctx.length  # 5
    """
    ctx.parts.append(text)
    ctx.length += len(text)


def flush_line(ctx: ReflowContext) -> None:
    """Write the pending line without trailing whitespace and reset it.

    An empty pending line produces an empty output line.
    """
    ctx.out.write("".join(ctx.parts).rstrip() + "\n")
    ctx.parts.clear()
    ctx.length = 0


def flush_if_pending(ctx: ReflowContext) -> None:
    """Flush the pending line only when it holds text.

    Args:
        ctx: Reflow context holding the pending line.

    Examples:
        flush_if_pending(ctx)  # writes nothing when the buffer is empty
    """
    if ctx.pending:
        flush_line(ctx)


def emit_line(ctx: ReflowContext, line: str) -> None:
    """Write a standalone line that bypasses reflow."""
    write_to_line(ctx, line)
    flush_line(ctx)


def set_list_state(ctx: ReflowContext, list_state: ListState) -> None:
    """Adopt a new list item, or leave the list when `list_state` has no type.

    Starting an item recomputes both prefixes and arms the first-line marker.

    Examples:
        set_list_state(ctx, ListState(ListType.NUMBERED, 2))
        ctx.list_prefix_first  # "  1. "
        ctx.list_prefix_rest  # "     "
    """
    ctx.list_state = list_state
    if list_state.type is ListType.NONE:
        ctx.list_prefix_first = ""
        ctx.list_prefix_rest = ""
        return

    ctx.applied_first_prefix = False
    ctx.list_prefix_first = " " * list_state.indent + list_state.type.symbol + " "
    ctx.list_prefix_rest = " " * list_state.continuation_indent


def reset_list_state(ctx: ReflowContext) -> None:
    set_list_state(ctx, ListState())
