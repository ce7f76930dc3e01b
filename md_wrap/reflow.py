"""Markdown reflow engine."""

from __future__ import annotations

import io
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from .classifier import count_list_indent, count_quote_depth, is_blank, is_fence
from .config import WrapConfig
from .constants import DEFAULT_CHARS_PER_LINE, QUOTE_PREFIX
from .emitter import emit_words
from .filesystem import safe_read
from .log import get_logger
from .models import ListState, ListType, ReflowContext
from .state import emit_line, flush_if_pending, reset_list_state, set_list_state

logger = get_logger(__name__)


def _try_toggle_fence(ctx: ReflowContext, line: str) -> bool:
    """Handle a code fence line.

    Opening a block flushes pending prose and leaves any list. The fence line
    is always written on its own.

    Returns:
        bool: True when the line was a fence and has been written.
    """
    if not is_fence(line):
        return False

    if not ctx.in_code:
        flush_if_pending(ctx)
        reset_list_state(ctx)
        logger.debug("Entering code block: %s", line.strip())
    else:
        logger.debug("Leaving code block")
    ctx.in_code = not ctx.in_code
    emit_line(ctx, line)
    return True


def _try_blank_line(ctx: ReflowContext, line: str) -> bool:
    if not is_blank(line):
        return False

    flush_if_pending(ctx)
    reset_list_state(ctx)
    ctx.quote_depth = 0
    emit_line(ctx, "")
    return True


def _update_list_state(ctx: ReflowContext, new_list: ListState) -> None:
    """Start, continue, or end a list item based on the current line.

    A line without a marker continues the active item only when its indent
    lines up under the item text; otherwise the list ends.
    """
    if new_list.type is not ListType.NONE:
        flush_if_pending(ctx)
        set_list_state(ctx, new_list)
        logger.debug("List item %r at indent %d", new_list.type.symbol, new_list.indent)
    elif (
        ctx.list_state.type is not ListType.NONE
        and new_list.indent != ctx.list_state.continuation_indent
    ):
        flush_if_pending(ctx)
        reset_list_state(ctx)
        logger.debug("List ended")


def process_line(ctx: ReflowContext, line: str) -> None:
    """Feed one input line, without its terminator, to the engine.

    Examples:
        ctx = ReflowContext(chars_per_line=40, out=io.StringIO())
        process_line(ctx, "> quoted text")
        finish(ctx)
    """
    if _try_toggle_fence(ctx, line):
        return
    if _try_blank_line(ctx, line):
        return
    if ctx.in_code:
        emit_line(ctx, line)
        return

    quote_depth, quote_length = count_quote_depth(line)
    if quote_depth != ctx.quote_depth:
        flush_if_pending(ctx)
        ctx.quote_depth = quote_depth
    quote_prefix = QUOTE_PREFIX * quote_depth
    content = line[quote_length:]

    # Bare quote markers separate paragraphs inside a block quote
    if is_blank(content):
        flush_if_pending(ctx)
        reset_list_state(ctx)
        emit_line(ctx, quote_prefix)
        return

    _update_list_state(ctx, count_list_indent(content))
    content = content[ctx.list_state.indent + ctx.list_state.type.width :]
    emit_words(ctx, content, quote_prefix)


def finish(ctx: ReflowContext) -> None:
    """Flush whatever is still pending once the input is exhausted.

    Args:
        ctx: Reflow context that has consumed every input line.

    Examples:
        finish(ctx)
    """
    flush_if_pending(ctx)


def reflow_stream(
    source: Iterable[str], out: TextIO, chars_per_line: int = DEFAULT_CHARS_PER_LINE
) -> None:
    """Reflow Markdown lines from `source` into `out`.

    Lines may carry ``\\n`` or ``\\r\\n`` terminators; output lines always end
    with ``\\n``. Errors raised by either stream propagate unchanged.

    Args:
        source: Iterable of input lines, such as an open text file.
        out: Stream receiving reflowed lines.
        chars_per_line: Target width, counted in code points.

    Examples:
        reflow_stream(sys.stdin, sys.stdout, chars_per_line=72)
    """
    ctx = ReflowContext(chars_per_line=chars_per_line, out=out)
    for line in source:
        process_line(ctx, line.rstrip("\r\n"))
    finish(ctx)


def reflow_markdown(content: str, chars_per_line: int = DEFAULT_CHARS_PER_LINE) -> str:
    """Reflow a Markdown document held in memory.

    Examples:
        reflow_markdown("This is one. This is two.\\n")  # "This is one.\\nThis is two.\\n"
    """
    buffer = io.StringIO()
    reflow_stream(io.StringIO(content), buffer, chars_per_line)
    return buffer.getvalue()


class ReflowFileError(Exception):
    """Raised when reflowing a Markdown file fails."""


def reflow_file(filepath: Path, config: WrapConfig | None = None) -> str:
    """Read a Markdown file and return its reflowed content.

    Args:
        filepath: Path to the Markdown file.
        config: Configuration providing the target width; defaults to a new
            `WrapConfig` when omitted.

    Returns:
        str: Reflowed document.

    Raises:
        ReflowFileError: If the file cannot be read or is not valid UTF-8.

    Examples:
        reflowed = reflow_file(Path("README.md"), WrapConfig(chars_per_line=72))
    """
    config = config or WrapConfig()
    buffer = io.StringIO()
    try:
        with safe_read(filepath) as file:
            reflow_stream(file, buffer, config.chars_per_line)
    except UnicodeDecodeError as error:
        raise ReflowFileError(f"Invalid UTF-8 sequence in {filepath}: {error}") from error
    except IOError as error:
        raise ReflowFileError(str(error)) from error
    return buffer.getvalue()
