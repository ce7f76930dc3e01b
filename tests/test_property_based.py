from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st

from md_wrap.emitter import ends_sentence
from md_wrap.reflow import reflow_markdown

word_strategy = st.text(alphabet=string.ascii_letters, min_size=1, max_size=15)
sentence_strategy = (
    st.lists(word_strategy, min_size=1, max_size=12)
    .filter(lambda words: not words[-1].endswith("vs"))
    .map(lambda words: " ".join(words) + ".")
)


@given(st.lists(word_strategy, min_size=1, max_size=60), st.integers(min_value=10, max_value=100))
def test_lines_never_exceed_width_unless_single_word(words: list[str], width: int):
    output = reflow_markdown(" ".join(words) + "\n", chars_per_line=width)

    for line in output.splitlines():
        assert len(line) <= width or " " not in line


@given(st.lists(word_strategy, min_size=1, max_size=60), st.integers(min_value=10, max_value=100))
def test_words_are_preserved_in_order(words: list[str], width: int):
    output = reflow_markdown(" ".join(words) + "\n", chars_per_line=width)

    assert output.split() == words


@given(st.lists(sentence_strategy, min_size=1, max_size=8))
def test_each_sentence_gets_its_own_line(sentences: list[str]):
    output = reflow_markdown(" ".join(sentences) + "\n", chars_per_line=10_000)

    assert output.splitlines() == sentences


code_line_strategy = st.text(alphabet=string.ascii_letters + string.digits + " .>*#-", max_size=120).map(
    str.rstrip
)


@given(st.lists(code_line_strategy, max_size=10), st.integers(min_value=1, max_value=40))
def test_code_blocks_pass_through(lines: list[str], width: int):
    document = "".join(f"{line}\n" for line in ["```", *lines, "```"])

    assert reflow_markdown(document, chars_per_line=width) == document


@given(st.lists(sentence_strategy, min_size=1, max_size=6), st.integers(min_value=15, max_value=80))
def test_rewrapping_prose_is_idempotent(sentences: list[str], width: int):
    once = reflow_markdown(" ".join(sentences) + "\n", chars_per_line=width)

    assert reflow_markdown(once, chars_per_line=width) == once


@given(
    st.integers(min_value=1, max_value=3),
    st.lists(word_strategy, min_size=1, max_size=30),
    st.integers(min_value=20, max_value=60),
)
def test_quote_prefix_on_every_line(depth: int, words: list[str], width: int):
    prefix = "> " * depth
    output = reflow_markdown(prefix + " ".join(words) + "\n", chars_per_line=width)

    assert all(line.startswith(prefix) for line in output.splitlines())


@given(st.lists(word_strategy, min_size=1, max_size=10), st.lists(word_strategy, min_size=1, max_size=10))
def test_blank_line_resets_list(item: list[str], paragraph: list[str]):
    document = f"* {' '.join(item)}\n\n  {' '.join(paragraph)}\n"

    tail = reflow_markdown(document).split("\n\n", 1)[1]

    assert tail.split() == paragraph
    assert not any(line.startswith(" ") for line in tail.splitlines())


@given(st.text(alphabet=string.ascii_letters, max_size=10))
def test_abbreviations_never_end_sentences(prefix: str):
    for abbreviation in ("e.g.", "vs.", "i.e."):
        assert not ends_sentence(prefix + abbreviation)
