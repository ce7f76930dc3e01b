import io

from md_wrap.models import ListState, ListType, ReflowContext


def test_list_type_members():
    assert list(ListType) == [ListType.NONE, ListType.NUMBERED, ListType.BULLET]


def test_list_type_markers():
    assert ListType.NONE.symbol == ""
    assert ListType.NONE.width == 0
    assert ListType.NUMBERED.symbol == "1."
    assert ListType.NUMBERED.width == 2
    assert ListType.BULLET.symbol == "*"
    assert ListType.BULLET.width == 1


def test_list_state_continuation_indent():
    assert ListState(ListType.NUMBERED, 0).continuation_indent == 3
    assert ListState(ListType.BULLET, 4).continuation_indent == 6


def test_reflow_context_defaults():
    ctx = ReflowContext(out=io.StringIO())

    assert ctx.chars_per_line == 80
    assert ctx.parts == []
    assert ctx.length == 0
    assert ctx.pending is False
    assert ctx.in_code is False
    assert ctx.quote_depth == 0
    assert ctx.list_state == ListState()
    assert ctx.list_prefix_first == ""
    assert ctx.list_prefix_rest == ""


def test_reflow_contexts_do_not_share_buffers():
    first = ReflowContext(out=io.StringIO())
    second = ReflowContext(out=io.StringIO())

    first.parts.append("word")

    assert second.parts == []
