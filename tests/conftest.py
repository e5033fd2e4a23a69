from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import pytest
from hypothesis import HealthCheck, settings

from model.extraction import AnnotatedDocument, CharInterval, Extraction

settings.register_profile(
    "ci",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("ci")


def ext(
    cls: str,
    start: Optional[int],
    end: Optional[int],
    text: str = "",
    with_interval: bool = True,
) -> Extraction:
    return Extraction(
        extraction_class=cls,
        extraction_text=text,
        char_interval=CharInterval(start_pos=start, end_pos=end) if with_interval else None,
    )


class FakeTimerHandle:
    def __init__(self, when: float, callback: Callable[..., Any], args: tuple) -> None:
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual clock with asyncio's call_later shape."""

    def __init__(self, honour_cancel: bool = True) -> None:
        self.now = 0.0
        self.honour_cancel = honour_cancel
        self.handles: List[FakeTimerHandle] = []
        self.delays: List[float] = []

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> FakeTimerHandle:
        handle = FakeTimerHandle(self.now + delay, callback, args)
        self.handles.append(handle)
        self.delays.append(delay)
        return handle

    @property
    def pending(self) -> List[FakeTimerHandle]:
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [
                h
                for h in self.handles
                if h.when <= target + 1e-9 and (not h.cancelled or not self.honour_cancel)
            ]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self.handles.remove(handle)
            self.now = handle.when
            handle.callback(*handle.args)
        self.now = target


class InMemoryDocumentRepository:
    def __init__(self) -> None:
        self.docs: Dict[str, AnnotatedDocument] = {}

    async def put(self, document: AnnotatedDocument) -> None:
        self.docs[document.document_id] = document

    async def get(self, document_id: str) -> Optional[AnnotatedDocument]:
        return self.docs.get(document_id)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def documents() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture
def apple_doc() -> AnnotatedDocument:
    return AnnotatedDocument(
        document_id="doc_apple",
        text="Apple CEO Tim Cook",
        extractions=[
            ext("人物", 10, 18, "Tim Cook"),
            ext("公司", 0, 5, "Apple"),
        ],
    )
