# service/visualization_service.py
import asyncio
import json
import logging
from typing import Any, Dict, Optional
from core.colors import assign_colors
from core.intervals import filter_valid_extractions, get_extraction_context, order_for_display
from core.overlay import render_highlighted_text
from core.playback import PlaybackController, Scheduler
from core.stats import calculate_stats, extraction_density
from model.api import PlaybackFrame
from model.extraction import AnnotatedDocument
from model.visualization import (
    ClassCountModel,
    ContextModel,
    LegendEntry,
    PlaybackState,
    StatsModel,
    VisualizationConfig,
    VisualizationResponse,
)
from util.enums import PlaybackStatus
from util.errors import PlaybackError, PlaybackIndexError
from util.functions import format_position_readout
from util.types import PlaybackCommand

logger = logging.getLogger(__name__)


def build_visualization(
    document: AnnotatedDocument,
    config: VisualizationConfig,
    current_index: int = 0,
    playback: Optional[PlaybackState] = None,
) -> VisualizationResponse:
    """
    Everything the presentation layer needs for one frame: markup, legend, stats
    and the current extraction readout. Indexes refer to display order.
    Raises PlaybackIndexError when `current_index` is outside a non-empty set.
    """
    ordered = order_for_display(filter_valid_extractions(document.extractions))
    color_map = assign_colors(ordered)
    stats = calculate_stats(document.extractions)
    density = extraction_density(stats.total, len(document.text))
    stats_model = StatsModel(
        total=stats.total,
        uniqueClasses=stats.unique_classes,
        distribution=[
            ClassCountModel(extraction_class=c.extraction_class, count=c.count)
            for c in stats.distribution
        ],
        densityPerMille=density,
    )
    legend = (
        [LegendEntry(extraction_class=cls, color=color) for cls, color in color_map.items()]
        if config.show_legend
        else []
    )

    if not ordered:
        return VisualizationResponse(
            document_id=document.document_id,
            markup=render_highlighted_text(document.text, ordered, color_map),
            colorMap=color_map,
            legend=legend,
            stats=stats_model,
            playback=playback
            or PlaybackState(
                status=PlaybackStatus.IDLE, currentIndex=0, isPlaying=False, total=0
            ),
            extractions=[],
        )

    if not 0 <= current_index < len(ordered):
        raise PlaybackIndexError(current_index, len(ordered))

    current = ordered[current_index]
    context = get_extraction_context(document.text, current, config.context_chars)
    return VisualizationResponse(
        document_id=document.document_id,
        markup=render_highlighted_text(document.text, ordered, color_map, current_index),
        colorMap=color_map,
        legend=legend,
        stats=stats_model,
        playback=playback
        or PlaybackState(
            status=PlaybackStatus.PAUSED,
            currentIndex=current_index,
            isPlaying=False,
            total=len(ordered),
        ),
        extractions=ordered,
        current=current,
        context=ContextModel(before=context.before, after=context.after),
        readout=format_position_readout(
            current_index,
            len(ordered),
            current.char_interval.start_pos,  # type: ignore[union-attr]
            current.char_interval.end_pos,  # type: ignore[union-attr]
        ),
    )


def error_frame(message: str) -> Dict[str, Any]:
    return PlaybackFrame(type="error", payload={"message": message}).model_dump()


class PlaybackSession:
    """
    One visualized document bound to its own PlaybackController.

    Every transition (manual or timer) queues a state frame; rejected commands
    queue an error frame. A single consumer drains the queue.
    """

    def __init__(
        self,
        document: AnnotatedDocument,
        config: VisualizationConfig,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self._document = document
        self._config = config
        self._frames: asyncio.Queue[Dict[str, Any]] = asyncio.Queue()
        self.controller = PlaybackController(
            order_for_display(filter_valid_extractions(document.extractions)),
            interval_seconds=config.animation_speed,
            scheduler=scheduler,
            on_change=self._on_change,
        )

    def _on_change(self, controller: PlaybackController) -> None:
        self._frames.put_nowait(self.state_frame())

    def state_frame(self) -> Dict[str, Any]:
        c = self.controller
        view = build_visualization(
            self._document, self._config, c.current_index, c.snapshot()
        )
        return PlaybackFrame(type="state", payload=view.model_dump(mode="json")).model_dump()

    def handle(self, raw: str) -> None:
        try:
            command: PlaybackCommand = json.loads(raw)
        except ValueError:
            self._frames.put_nowait(error_frame("Command must be JSON"))
            return
        if not isinstance(command, dict):
            self._frames.put_nowait(error_frame("Command must be a JSON object"))
            return

        action = command.get("action")
        c = self.controller
        handlers = {
            "play": c.play,
            "pause": c.pause,
            "toggle": c.toggle,
            "next": c.next,
            "prev": c.prev,
        }
        try:
            if action == "jump":
                c.jump(command.get("index"))  # type: ignore[arg-type]
            elif action in handlers:
                handlers[action]()
            else:
                self._frames.put_nowait(error_frame(f"Unknown action: {action}"))
        except PlaybackError as e:
            logger.info("playback.rejected doc=%s action=%s", self._document.document_id, action)
            self._frames.put_nowait(error_frame(str(e)))

    async def next_frame(self) -> Dict[str, Any]:
        return await self._frames.get()

    def close(self) -> None:
        self.controller.close()
