from core.pattern_extractor import (
    AMOUNT,
    DATE,
    ORGANIZATION,
    PERSON,
    example_classes,
    generate_pattern_extractions,
)
from model.extraction import AlignmentStatus, ExampleData, Extraction


def spans(items):
    return [
        (e.extraction_class, e.char_interval.start_pos, e.char_interval.end_pos)
        for e in items
    ]


def test_person_swallows_following_word():
    items = generate_pattern_extractions("Apple CEO Tim Cook")
    assert spans(items) == [(PERSON, 0, 9), (PERSON, 10, 18)]
    assert [e.extraction_text for e in items] == ["Apple CEO", "Tim Cook"]


def test_organization_date_and_amount():
    text = "阿里巴巴集团 2023年 投资 100亿"
    items = generate_pattern_extractions(text)
    assert spans(items) == [(ORGANIZATION, 0, 6), (DATE, 7, 12), (AMOUNT, 16, 20)]
    assert items[2].attributes == {"单位": "亿元"}
    assert [e.extraction_index for e in items] == [0, 1, 2]


def test_offsets_match_text_and_alignment_is_exact():
    text = "  腾讯科技 昨天 发布  50万  Inc  "
    for e in generate_pattern_extractions(text):
        ci = e.char_interval
        assert text[ci.start_pos : ci.end_pos] == e.extraction_text
        assert e.alignment_status is AlignmentStatus.match_exact


def test_amount_units():
    items = generate_pattern_extractions("5美元 20万 7")
    assert [e.attributes["单位"] for e in items if e.extraction_class == AMOUNT] == [
        "美元",
        "万元",
        "元",
    ]


def test_empty_text():
    assert generate_pattern_extractions("") == []


def test_example_classes_first_seen_order():
    examples = [
        ExampleData(
            text="x",
            extractions=[
                Extraction(extraction_class="b", extraction_text="x"),
                Extraction(extraction_class="a", extraction_text="x"),
            ],
        ),
        ExampleData(text="y", extractions=[Extraction(extraction_class="b", extraction_text="y")]),
    ]
    assert example_classes(examples) == ["b", "a"]
