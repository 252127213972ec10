"""Background timer driving the store's real-time updates."""

from __future__ import annotations

import logging
import threading

from chartgallery.store import DataStore

logger = logging.getLogger(__name__)


class RefreshTimer:
    """Calls ``store.tick()`` every *interval* seconds on a daemon thread.

    The store decides whether a tick applies (auto-refresh flag), so the
    timer can keep running while auto-refresh is toggled off and on.

    Usage::

        with RefreshTimer(store, interval=5.0):
            ...
    """

    def __init__(self, store: DataStore, interval: float | None = None) -> None:
        interval = store.settings.refresh_interval if interval is None else interval
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.store = store
        self.interval = interval
        self.ticks = 0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the timer thread.  Calling it while running is a no-op."""
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="chartgallery-refresh", daemon=True,
        )
        self._thread.start()
        logger.info("Auto-refresh timer started (every %.1fs)", self.interval)

    def stop(self, timeout: float | None = None) -> None:
        """Signal the thread to exit and wait for it."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
            logger.info("Auto-refresh timer stopped after %d ticks", self.ticks)

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                if self.store.tick():
                    self.ticks += 1
            except Exception:  # noqa: BLE001
                logger.exception("Auto-refresh tick failed")

    def __enter__(self) -> RefreshTimer:
        self.start()
        return self

    def __exit__(self, *exc: object) -> None:
        self.stop()
