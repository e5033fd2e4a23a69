# core/intervals.py
from typing import List, Sequence
from core.entities import ExtractionContext
from model.extraction import Extraction


def has_resolved_interval(extraction: Extraction) -> bool:
    ci = extraction.char_interval
    return ci is not None and ci.start_pos is not None and ci.end_pos is not None


def filter_valid_extractions(extractions: Sequence[Extraction]) -> List[Extraction]:
    """
    Keep extractions whose char interval is present with both bounds set.
    Order-preserving; bounds are not validated against each other or the text.
    """
    return [e for e in extractions if has_resolved_interval(e)]


def _span_length(extraction: Extraction) -> int:
    ci = extraction.char_interval
    return ci.end_pos - ci.start_pos  # type: ignore[union-attr,operator]


def order_for_display(extractions: Sequence[Extraction]) -> List[Extraction]:
    """
    Start ascending, then longer span first. Stable, so equal keys keep input order.
    Expects an already filtered sequence.
    """
    return sorted(
        extractions,
        key=lambda e: (e.char_interval.start_pos, -_span_length(e)),  # type: ignore[union-attr]
    )


def get_extraction_context(
    text: str, extraction: Extraction, context_chars: int = 150
) -> ExtractionContext:
    if not has_resolved_interval(extraction):
        return ExtractionContext(before="", after="")

    start = extraction.char_interval.start_pos  # type: ignore[union-attr]
    end = extraction.char_interval.end_pos  # type: ignore[union-attr]

    context_start = max(0, start - context_chars)
    context_end = min(len(text), end + context_chars)
    return ExtractionContext(
        before=text[context_start:start] if start > 0 else "",
        after=text[end:context_end] if 0 <= end < context_end else "",
    )
