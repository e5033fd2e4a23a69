from hypothesis import given, strategies as st

from conftest import ext
from core.colors import VISUALIZATION_PALETTE, assign_colors


def test_classes_sorted_by_code_point_not_first_appearance():
    items = [ext("公司", 0, 5), ext("人物", 10, 18)]
    assert "人物" < "公司"
    assert assign_colors(items) == {
        "人物": VISUALIZATION_PALETTE[0],
        "公司": VISUALIZATION_PALETTE[1],
    }


def test_unpositioned_classes_get_no_color():
    items = [ext("b", 0, 1), ext("a", None, None), ext("c", 0, 0, with_interval=False)]
    assert assign_colors(items) == {"b": VISUALIZATION_PALETTE[0]}


def test_palette_wraps_around():
    classes = [f"class_{i:02d}" for i in range(len(VISUALIZATION_PALETTE) + 2)]
    colors = assign_colors([ext(c, 0, 1) for c in classes])
    assert colors[classes[len(VISUALIZATION_PALETTE)]] == VISUALIZATION_PALETTE[0]
    assert colors[classes[-1]] == VISUALIZATION_PALETTE[1]


def test_palette_has_at_least_eight_distinct_colors():
    assert len(set(VISUALIZATION_PALETTE)) >= 8


def test_empty_input_gives_empty_map():
    assert assign_colors([]) == {}


@given(
    st.lists(st.text(min_size=1, max_size=4), min_size=1, max_size=10),
    st.randoms(use_true_random=False),
)
def test_mapping_independent_of_input_order(classes, rnd):
    items = [ext(c, i, i + 1) for i, c in enumerate(classes)]
    shuffled = list(items)
    rnd.shuffle(shuffled)
    assert assign_colors(items) == assign_colors(shuffled)
