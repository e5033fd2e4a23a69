# core/pattern_extractor.py
import logging
import re
from typing import Dict, Final, List, Optional, Sequence, Tuple
from model.extraction import (
    AlignmentStatus,
    CharInterval,
    ExampleData,
    Extraction,
)

logger = logging.getLogger(__name__)

PERSON: Final[str] = "人物"
ORGANIZATION: Final[str] = "机构"
AMOUNT: Final[str] = "金额"
DATE: Final[str] = "时间"

_NAME_INDICATORS: Final[Tuple[str, ...]] = ("先生", "女士", "CEO", "CTO", "总经理", "总裁")
_ORG_SUFFIXES: Final[Tuple[str, ...]] = ("公司", "集团", "科技", "有限公司", "Inc", "Corp", "LLC")

_ENGLISH_NAME = re.compile(r"^[A-Z][a-z]+$")
_AMOUNT = re.compile(r"\d+(\.\d+)?(万|亿|元|美元|USD|$)")
_DATE = re.compile(r"\d{4}年|\d+月|\d+日|今天|明天|昨天")


def _is_person_name(word: str, next_word: Optional[str]) -> bool:
    if any(ind in word or (next_word is not None and ind in next_word) for ind in _NAME_INDICATORS):
        return True
    return bool(_ENGLISH_NAME.match(word))


def _is_organization(word: str) -> bool:
    return any(suffix in word for suffix in _ORG_SUFFIXES)


def _is_amount(word: str) -> bool:
    return bool(_AMOUNT.search(word))


def _amount_unit(word: str) -> str:
    if "万" in word:
        return "万元"
    if "亿" in word:
        return "亿元"
    if "美元" in word or "USD" in word:
        return "美元"
    return "元"


def _is_date(word: str) -> bool:
    return bool(_DATE.search(word))


def _locate_words(text: str) -> List[Tuple[str, int, int]]:
    """[(word, start, end)] for every whitespace-separated word, left to right."""
    return [(m.group(0), m.start(), m.end()) for m in re.finditer(r"\S+", text)]


def _make(
    cls: str, text: str, start: int, end: int, index: int, attributes: Dict[str, str]
) -> Extraction:
    return Extraction(
        extraction_class=cls,
        extraction_text=text[start:end],
        char_interval=CharInterval(start_pos=start, end_pos=end),
        alignment_status=AlignmentStatus.match_exact,
        extraction_index=index,
        attributes=attributes,
    )


def example_classes(examples: Sequence[ExampleData]) -> List[str]:
    seen: Dict[str, None] = {}
    for ex in examples:
        for e in ex.extractions:
            seen.setdefault(e.extraction_class, None)
    return list(seen)


def generate_pattern_extractions(
    text: str, examples: Sequence[ExampleData] = (), passes: int = 1
) -> List[Extraction]:
    """
    Rule-based stand-in for a model call.

    Walks the words of `text` and emits person / organisation / amount / date
    extractions with exact offsets. A person match swallows the following word
    (e.g. "Tim Cook"); the current word is still checked against the other rules.
    """
    words = _locate_words(text)
    logger.debug(
        "pattern.extract.start chars=%d words=%d classes=%d passes=%d",
        len(text),
        len(words),
        len(example_classes(examples)),
        passes,
    )

    out: List[Extraction] = []
    i = 0
    while i < len(words):
        word, start, end = words[i]
        nxt = words[i + 1] if i + 1 < len(words) else None
        step = 1

        if _is_person_name(word, nxt[0] if nxt else None):
            entity_end = nxt[2] if nxt else end
            out.append(_make(PERSON, text, start, entity_end, len(out), {"类型": "人名"}))
            if nxt:
                step = 2

        if _is_organization(word):
            out.append(_make(ORGANIZATION, text, start, end, len(out), {"类型": "公司"}))

        if _is_amount(word):
            out.append(_make(AMOUNT, text, start, end, len(out), {"单位": _amount_unit(word)}))

        if _is_date(word):
            out.append(_make(DATE, text, start, end, len(out), {"类型": "日期"}))

        i += step

    logger.debug("pattern.extract.done count=%d", len(out))
    return out
