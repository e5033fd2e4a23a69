# core/playback.py
import asyncio
import logging
from typing import Any, Callable, List, Optional, Protocol, Sequence
from model.extraction import Extraction
from model.visualization import PlaybackState
from util.enums import PlaybackStatus
from util.errors import PlaybackIndexError, PlaybackUnavailableError

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """
    Anything with asyncio's `call_later` shape. The running event loop is the
    default; tests pass a manual clock.
    """

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandle: ...


ChangeListener = Callable[["PlaybackController"], None]


class PlaybackController:
    """
    Playback state machine over an ordered, positioned extraction sequence.

    States: IDLE (no extractions), PAUSED{i}, PLAYING{i}. While playing, one timer
    handle is outstanding at a time; every tick advances the index cyclically and
    re-arms. Manual steps never touch the timer. Leaving PLAYING by any route
    (pause, load, close) cancels the handle, and a stale callback that still
    fires is ignored via its token.
    """

    def __init__(
        self,
        extractions: Sequence[Extraction] = (),
        *,
        interval_seconds: float = 1.5,
        scheduler: Optional[Scheduler] = None,
        on_change: Optional[ChangeListener] = None,
    ) -> None:
        self._validate_interval(interval_seconds)
        self._extractions: List[Extraction] = list(extractions)
        self._interval = float(interval_seconds)
        self._scheduler = scheduler
        self._on_change: Optional[ChangeListener] = on_change
        self._index = 0
        self._playing = False
        self._handle: Optional[TimerHandle] = None
        self._token: Optional[object] = None
        self._period = self._interval

    # ---------------- Read-only view ----------------

    @property
    def status(self) -> PlaybackStatus:
        if not self._extractions:
            return PlaybackStatus.IDLE
        return PlaybackStatus.PLAYING if self._playing else PlaybackStatus.PAUSED

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def count(self) -> int:
        return len(self._extractions)

    @property
    def extractions(self) -> List[Extraction]:
        return list(self._extractions)

    @property
    def current(self) -> Optional[Extraction]:
        if not self._extractions:
            return None
        return self._extractions[self._index]

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def has_pending_timer(self) -> bool:
        return self._handle is not None

    def snapshot(self) -> PlaybackState:
        return PlaybackState(
            status=self.status,
            currentIndex=self._index,
            isPlaying=self._playing,
            total=self.count,
        )

    # ---------------- Transitions ----------------

    def play(self) -> None:
        self._require_extractions()
        if self._playing:
            return
        self._period = self._interval
        self._arm()
        self._playing = True
        logger.debug("playback.play index=%d interval=%.2f", self._index, self._interval)
        self._notify()

    def pause(self) -> None:
        self._require_extractions()
        if not self._playing:
            return
        self._cancel_timer()
        self._playing = False
        logger.debug("playback.pause index=%d", self._index)
        self._notify()

    def toggle(self) -> None:
        if self._playing:
            self.pause()
        else:
            self.play()

    def next(self) -> None:
        self._require_extractions()
        self._index = (self._index + 1) % len(self._extractions)
        self._notify()

    def prev(self) -> None:
        self._require_extractions()
        n = len(self._extractions)
        self._index = (self._index - 1 + n) % n
        self._notify()

    def jump(self, index: int) -> None:
        self._require_extractions()
        n = len(self._extractions)
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < n:
            raise PlaybackIndexError(index, n)
        self._index = index
        self._notify()

    def set_interval(self, seconds: float) -> None:
        # Picked up by the next play(); an in-flight timer keeps its period.
        self._validate_interval(seconds)
        self._interval = float(seconds)

    def load(self, extractions: Sequence[Extraction]) -> None:
        """Swap in a new sequence: cancels any timer and resets to index 0, paused."""
        self._cancel_timer()
        self._extractions = list(extractions)
        self._index = 0
        self._playing = False
        logger.debug("playback.load count=%d", len(self._extractions))
        self._notify()

    def close(self) -> None:
        self._cancel_timer()
        self._extractions = []
        self._index = 0
        self._playing = False
        self._on_change = None

    # ---------------- Timer plumbing ----------------

    def _arm(self) -> None:
        if self._scheduler is None:
            self._scheduler = asyncio.get_running_loop()
        token = object()
        self._token = token
        self._handle = self._scheduler.call_later(
            self._period, self._on_tick, token
        )

    def _on_tick(self, token: object) -> None:
        if token is not self._token or not self._playing or not self._extractions:
            return
        self._index = (self._index + 1) % len(self._extractions)
        self._arm()
        self._notify()

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._token = None

    def _require_extractions(self) -> None:
        if not self._extractions:
            raise PlaybackUnavailableError()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self)

    @staticmethod
    def _validate_interval(seconds: float) -> None:
        if not seconds > 0:
            raise ValueError(f"interval must be positive, got {seconds!r}")
