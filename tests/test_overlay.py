import html
import re

from hypothesis import given, strategies as st

from conftest import ext
from core.colors import DEFAULT_HIGHLIGHT_COLOR, VISUALIZATION_PALETTE, assign_colors
from core.overlay import (
    CLOSE_TAG,
    CURRENT_HIGHLIGHT_CLASS,
    build_boundaries,
    escape_html,
    open_tag,
    render_highlighted_text,
)

TAG = re.compile(r"<[^>]+>")


def strip_markup(markup: str) -> str:
    return html.unescape(TAG.sub("", markup))


def test_no_extractions_returns_escaped_text():
    assert render_highlighted_text("a < b & c", [], {}) == "a &lt; b &amp; c"


def test_apple_scenario_marks_current_by_display_order(apple_doc):
    items = apple_doc.extractions  # 人物 listed first, 公司 starts first
    colors = assign_colors(items)
    out = render_highlighted_text(apple_doc.text, items, colors, current_index=0)

    company = VISUALIZATION_PALETTE[1]
    person = VISUALIZATION_PALETTE[0]
    assert out == (
        open_tag(0, company, True)
        + "Apple"
        + CLOSE_TAG
        + " CEO "
        + open_tag(1, person, False)
        + "Tim Cook"
        + CLOSE_TAG
    )
    assert out.count(CURRENT_HIGHLIGHT_CLASS) == 1


def test_shared_start_longer_span_is_outer():
    text = "abcdefghij"
    short = ext("x", 0, 3)
    long = ext("y", 0, 8)
    colors = {"x": "#111111", "y": "#222222"}
    out = render_highlighted_text(text, [short, long], colors)
    assert out == (
        open_tag(0, "#222222", False)
        + open_tag(1, "#111111", False)
        + "abc"
        + CLOSE_TAG
        + "defgh"
        + CLOSE_TAG
        + "ij"
    )


def test_close_emitted_before_open_at_same_offset():
    text = "aaaabbbbcc"
    events = build_boundaries([ext("x", 4, 8), ext("x", 0, 4)], {})
    assert [(ev.pos, ev.kind) for ev in events] == [
        (0, "open"),
        (4, "close"),
        (4, "open"),
        (8, "close"),
    ]
    out = render_highlighted_text(text, [ext("x", 4, 8), ext("x", 0, 4)], {})
    assert CLOSE_TAG + open_tag(1, DEFAULT_HIGHLIGHT_COLOR, False) in out
    assert strip_markup(out) == text


def test_zero_width_interval_emits_adjacent_tags():
    text = "hello world"
    out = render_highlighted_text(text, [ext("x", 5, 5)], {"x": "#abcdef"})
    assert out == "hello" + CLOSE_TAG + open_tag(0, "#abcdef", False) + " world"


def test_inverted_interval_does_not_crash():
    # Current behaviour: the close sorts before the open, leaving an unbalanced pair.
    text = "0123456789"
    out = render_highlighted_text(text, [ext("x", 7, 3)], {"x": "#abcdef"})
    assert out == "012" + CLOSE_TAG + "3456" + open_tag(0, "#abcdef", False) + "789"


def test_interval_past_end_takes_remainder():
    out = render_highlighted_text("hello", [ext("x", 2, 100)], {"x": "#abcdef"})
    assert out == "he" + open_tag(0, "#abcdef", False) + "llo" + CLOSE_TAG


def test_literal_text_is_escaped_but_markup_is_not():
    text = "<b>&</b>"
    out = render_highlighted_text(text, [ext("x", 0, 3)], {"x": "#abcdef"})
    assert out.startswith('<span class="highlight"')
    assert "&lt;b&gt;" in out
    assert "&amp;&lt;/b&gt;" in out
    assert strip_markup(out) == text


def test_missing_color_uses_default():
    out = render_highlighted_text("abc", [ext("unknown", 0, 1)], {})
    assert f"background-color: {DEFAULT_HIGHLIGHT_COLOR};" in out


def test_render_does_not_reorder_input():
    items = [ext("b", 5, 6), ext("a", 0, 1)]
    before = list(items)
    render_highlighted_text("abcdefg", items, {}, current_index=1)
    assert items == before


def test_escape_html_leaves_quotes():
    assert escape_html('"x" & \'y\'') == '"x" &amp; \'y\''


@st.composite
def text_with_disjoint_spans(draw):
    text = draw(st.text(max_size=40))
    cuts = sorted(
        draw(st.sets(st.integers(min_value=0, max_value=len(text)), max_size=10))
    )
    if len(cuts) % 2:
        cuts = cuts[:-1]
    spans = [(cuts[i], cuts[i + 1]) for i in range(0, len(cuts), 2)]
    items = [ext(draw(st.sampled_from(["p", "q", "r"])), s, e) for s, e in spans]
    return text, draw(st.permutations(items))


@given(text_with_disjoint_spans())
def test_stripping_markup_reconstructs_text(case):
    text, items = case
    out = render_highlighted_text(text, items, assign_colors(items), current_index=0)
    assert strip_markup(out) == text
    assert out.count("<span ") == len(items)
    assert out.count(CLOSE_TAG) == len(items)


@given(st.integers(min_value=0, max_value=20), st.integers(1, 10), st.integers(1, 10))
def test_shared_start_longer_open_always_first(start, a, b):
    first, second = ext("s", start, start + a), ext("t", start, start + b)
    events = build_boundaries([first, second], {"s": "#000001", "t": "#000002"})
    opens = [ev.tag for ev in events if ev.kind == "open"]
    longer = "#000001" if a > b else "#000002"
    if a != b:
        assert longer in opens[0]
