# core/entities.py
from dataclasses import dataclass, field
from typing import List, Literal


@dataclass(frozen=True)
class SpanBoundary:
    """
    One open/close wrapper event of the overlay stream at a text offset.
    """

    pos: int
    kind: Literal["open", "close"]
    tag: str


@dataclass(frozen=True)
class ClassCount:
    extraction_class: str
    count: int


@dataclass(frozen=True)
class ExtractionStats:
    total: int
    unique_classes: int
    distribution: List[ClassCount] = field(default_factory=list)


@dataclass(frozen=True)
class ExtractionContext:
    before: str
    after: str
