# core/overlay.py
import html
from typing import Final, List, Mapping, Optional, Sequence
from core.colors import DEFAULT_HIGHLIGHT_COLOR
from core.entities import SpanBoundary
from core.intervals import order_for_display
from model.extraction import Extraction

HIGHLIGHT_CLASS: Final[str] = "highlight"
CURRENT_HIGHLIGHT_CLASS: Final[str] = "current-highlight"
CLOSE_TAG: Final[str] = "</span>"

# close before open at the same offset
_KIND_RANK: Final[dict] = {"close": 0, "open": 1}


def escape_html(text: str) -> str:
    """Escape &, < and > the way a DOM text node serializes."""
    return html.escape(text, quote=False)


def open_tag(index: int, color: str, is_current: bool) -> str:
    css = f"{HIGHLIGHT_CLASS} {CURRENT_HIGHLIGHT_CLASS}" if is_current else HIGHLIGHT_CLASS
    return (
        f'<span class="{css}" data-idx="{index}" '
        f'style="background-color: {color}; position: relative; '
        f'border-radius: 3px; padding: 1px 2px;">'
    )


def build_boundaries(
    extractions: Sequence[Extraction],
    color_map: Mapping[str, str],
    current_index: Optional[int] = None,
) -> List[SpanBoundary]:
    """
    Open/close events for every extraction, in emission order.

    `extractions` must already be filtered. Index i in `data-idx` refers to the
    i-th extraction after display ordering.
    """
    events: List[SpanBoundary] = []
    for index, extraction in enumerate(order_for_display(extractions)):
        start = extraction.char_interval.start_pos  # type: ignore[union-attr]
        end = extraction.char_interval.end_pos  # type: ignore[union-attr]
        color = color_map.get(extraction.extraction_class, DEFAULT_HIGHLIGHT_COLOR)
        events.append(
            SpanBoundary(pos=start, kind="open", tag=open_tag(index, color, index == current_index))
        )
        events.append(SpanBoundary(pos=end, kind="close", tag=CLOSE_TAG))

    # stable: opens sharing an offset keep the longer-first order from above
    events.sort(key=lambda ev: (ev.pos, _KIND_RANK[ev.kind]))
    return events


def render_highlighted_text(
    text: str,
    extractions: Sequence[Extraction],
    color_map: Mapping[str, str],
    current_index: Optional[int] = None,
) -> str:
    """
    Return `text` as escaped markup with a highlight wrapper around each span.

    Literal text is escaped, wrapper markup is not. Inverted intervals are not
    special-cased: their close event simply sorts before their open event.
    Offsets past the end of `text` take whatever remains of it.
    """
    if not extractions:
        return escape_html(text)

    parts: List[str] = []
    cursor = 0
    for ev in build_boundaries(extractions, color_map, current_index):
        if ev.pos > cursor:
            parts.append(escape_html(text[cursor : ev.pos]))
            cursor = ev.pos
        parts.append(ev.tag)

    if cursor < len(text):
        parts.append(escape_html(text[cursor:]))
    return "".join(parts)
