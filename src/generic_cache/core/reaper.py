"""
Reaper.

Background daemon thread that runs a purge callback on a fixed interval,
so expired entries are reclaimed even when nobody calls the cache.

The callback may be a weakref.WeakMethod: the loop then ends on its own
once the object owning the method has been garbage collected.
"""

from __future__ import annotations

import logging
import threading
import weakref
from typing import Callable, Optional, Union

logger = logging.getLogger(__name__)

PurgeFn = Callable[[], int]


class Reaper:
    def __init__(
        self,
        purge: Union[PurgeFn, "weakref.WeakMethod[PurgeFn]"],
        *,
        interval_seconds: float,
        name: str = "generic-cache-reaper",
    ) -> None:
        if isinstance(purge, weakref.WeakMethod):
            self._resolve: Callable[[], Optional[PurgeFn]] = purge
        else:
            self._resolve = lambda: purge
        self._interval = float(interval_seconds)
        self._name = name

        self._thread: Optional[threading.Thread] = None
        # Each thread gets its own event so a restart can't revive a stopping loop.
        self._stop_event: Optional[threading.Event] = None

        # Guards start/stop so concurrent callers can't spawn two threads.
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self) -> None:
        """Start the sweep loop. No-op when already running."""
        with self._lock:
            if self.is_running:
                logger.warning("Reaper already running")
                return

            stop_event = threading.Event()
            self._stop_event = stop_event
            self._thread = threading.Thread(
                target=self._run_loop,
                args=(stop_event,),
                name=self._name,
                daemon=True,
            )
            self._thread.start()
        logger.info(f"Reaper started (interval: {self._interval}s)")

    def stop(self) -> None:
        """Stop the sweep loop; no sweep fires once this returns."""
        with self._lock:
            thread, stop_event = self._thread, self._stop_event
            if thread is None or stop_event is None:
                return

            stop_event.set()
            self._thread = None
            self._stop_event = None

        # A purge callback that shuts its own cache down must not join itself.
        if thread is not threading.current_thread():
            thread.join()
        logger.info("Reaper stopped")

    def _run_loop(self, stop_event: threading.Event) -> None:
        logger.debug("Reaper loop started")

        # wait() returns True once stop() has been called.
        while not stop_event.wait(timeout=self._interval):
            if not self._tick():
                logger.debug("Reaper owner collected, exiting")
                break

        logger.debug("Reaper loop exited")

    def _tick(self) -> bool:
        # Kept out of _run_loop so no strong reference outlives the sweep.
        purge = self._resolve()
        if purge is None:
            return False
        try:
            removed = purge()
            logger.debug(f"Cache Clean Up Completed ({removed} expired)")
        except Exception:
            # One bad tick must not end the schedule.
            logger.exception("Reaper sweep failed")
        return True
