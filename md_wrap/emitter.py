"""Word emission and sentence-boundary detection."""

from __future__ import annotations

from .constants import ABBREVIATIONS, SENTENCE_ENDINGS
from .models import ReflowContext
from .state import flush_line, write_to_line


def ends_sentence(word: str) -> bool:
    """Determine whether a word closes a sentence.

    A word ending in ``.``, ``."`` or ``.'`` ends a sentence unless it ends with
    one of the abbreviations ``e.g.``, ``vs.`` or ``i.e.`` (case-sensitive).

    Examples:
        ends_sentence("done.")  # True
        ends_sentence('said."')  # True
        ends_sentence("(e.g.")  # False
        ends_sentence("E.G.")  # True
    """
    return word.endswith(SENTENCE_ENDINGS) and not word.endswith(ABBREVIATIONS)


def _start_line(ctx: ReflowContext, quote_prefix: str) -> None:
    write_to_line(ctx, quote_prefix)
    if ctx.applied_first_prefix:
        write_to_line(ctx, ctx.list_prefix_rest)
    else:
        write_to_line(ctx, ctx.list_prefix_first)
        ctx.applied_first_prefix = True


def emit_words(ctx: ReflowContext, content: str, quote_prefix: str = "") -> None:
    """Append the words of `content` to the pending output line.

    The pending line is flushed before a word that would push it past
    ``ctx.chars_per_line`` and right after a word that ends a sentence. A word
    longer than the width is never split and ends up alone on its line.

    Args:
        ctx: Reflow context receiving the words.
        content: Line content with quote and list markers removed.
        quote_prefix: Quote markers written at the start of each new line.
    """
    for word in content.split():
        if ctx.pending and ctx.length + len(word) > ctx.chars_per_line:
            flush_line(ctx)
        if not ctx.pending:
            _start_line(ctx, quote_prefix)
        write_to_line(ctx, word)
        if ends_sentence(word):
            flush_line(ctx)
        else:
            write_to_line(ctx, " ")
