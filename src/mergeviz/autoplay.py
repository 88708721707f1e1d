"""Timer-driven auto-play for a :class:`~mergeviz.engine.MergeEngine`."""

import logging
import threading
from typing import Callable, Self, TYPE_CHECKING

from .config import DEFAULT_INTERVAL_MS, check_interval_ms

if TYPE_CHECKING:
    from .engine import EngineState, MergeEngine, StepOutcome

log = logging.getLogger(__name__)

type StepCallback = Callable[["StepOutcome", "EngineState"], None]


class AutoPlayer:
    """
    Repeatedly call ``engine.step()`` on a background timer.

    A single worker thread owns the timer, so at most one step is in flight.
    Playback ends by itself on the first step that changes nothing (step limit
    reached or no pairs left), or when :meth:`stop` is called. Stopping never
    interrupts a step halfway because the engine applies each step atomically.

    Example:
       >>> engine = MergeEngine("the cat sat on the mat")
       >>> with AutoPlayer(engine, interval_ms=100) as player:
       ...     player.join()
       >>> engine.exhausted
       True
    """

    def __init__(
        self,
        engine: "MergeEngine",
        interval_ms: int = DEFAULT_INTERVAL_MS,
        on_step: StepCallback | None = None,
    ) -> None:
        """
        :param engine: Engine to drive.
        :param interval_ms: Delay between ticks, 100 to 2000 ms.
        :param on_step: Called after every tick with the outcome and new snapshot.
        :raises ConfigError: If ``interval_ms`` is out of range.
        """
        self.engine = engine
        self._interval_ms: int = check_interval_ms(interval_ms)
        self.on_step = on_step
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @interval_ms.setter
    def interval_ms(self, value: int) -> None:
        """Change the tick interval; applies from the next tick on."""
        self._interval_ms = check_interval_ms(value)

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start playback; does nothing if already running."""
        thread = self._thread
        if thread is not None and thread.is_alive():
            if not self._stop.is_set():
                return
            # a stopped worker that outlived its join timeout must exit first
            thread.join()
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop, name="mergeviz-autoplay", daemon=True
        )
        self._thread.start()
        log.debug(f"auto-play started ({self._interval_ms} ms interval)")

    def stop(self, timeout: float | None = None) -> None:
        """Cancel playback and wait for the worker to finish its current tick."""
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        log.debug("auto-play stopped")

    def join(self, timeout: float | None = None) -> None:
        """Block until playback ends on its own or is stopped."""
        if self._thread is not None:
            self._thread.join(timeout)

    def _loop(self) -> None:
        # wait() returns True as soon as stop() is called
        while not self._stop.wait(self._interval_ms / 1000):
            outcome = self.engine.step()
            if self.on_step is not None:
                self.on_step(outcome, self.engine.state)
            if not outcome.applied:
                log.debug(f"auto-play finished: {outcome.reason.value}")
                break

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


__all__ = ["AutoPlayer", "StepCallback"]
