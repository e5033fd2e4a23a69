# util/timing.py
import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator, Optional


class Stopwatch:
    __slots__ = ("_t0", "_t1")

    def __init__(self) -> None:
        self._t0 = time.perf_counter()
        self._t1: Optional[float] = None

    def stop(self) -> None:
        if self._t1 is None:
            self._t1 = time.perf_counter()

    @property
    def elapsed_ms(self) -> int:
        end = self._t1 if self._t1 is not None else time.perf_counter()
        return int((end - self._t0) * 1000)


@contextmanager
def timed(
    logger: logging.Logger,
    name: str,
    slow_ms: Optional[int] = None,
    **fields: Any,
) -> Iterator[Stopwatch]:
    """
    Log "<name>.done ms=<int> k=v ..." when the block exits, raised or not.
    Past `slow_ms` the record is a WARNING tagged slow=true.

      with timed(logger, "provider.extract", provider="gemini") as sw:
          ...
    """
    sw = Stopwatch()
    try:
        yield sw
    finally:
        sw.stop()
        ms = sw.elapsed_ms
        tail = "".join(f" {k}={v}" for k, v in fields.items())
        if slow_ms is not None and ms > slow_ms:
            logger.warning("%s.done ms=%d%s slow=true", name, ms, tail)
        else:
            logger.info("%s.done ms=%d%s", name, ms, tail)
