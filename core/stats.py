# core/stats.py
from collections import Counter
from typing import Sequence
from core.entities import ClassCount, ExtractionStats
from core.intervals import filter_valid_extractions
from model.extraction import Extraction


def calculate_stats(extractions: Sequence[Extraction]) -> ExtractionStats:
    """
    Totals and class distribution over the positioned subset only, i.e. what is
    actually rendered. Distribution is count-descending; ties keep first-seen order.
    """
    valid = filter_valid_extractions(extractions)
    counts = Counter(e.extraction_class for e in valid)
    distribution = [
        ClassCount(extraction_class=cls, count=n)
        for cls, n in sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    ]
    return ExtractionStats(
        total=len(valid),
        unique_classes=len(distribution),
        distribution=distribution,
    )


def extraction_density(total: int, text_length: int) -> int:
    """Extractions per thousand characters, rounded half-up."""
    if text_length <= 0:
        return 0
    return int(total * 1000 / text_length + 0.5)
