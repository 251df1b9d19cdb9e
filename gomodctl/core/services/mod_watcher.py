"""
Manifest watcher — format go.mod whenever it is saved.

Stands in for an editor's after-save hook: polls the manifest's mtime
and calls ``on_save`` once per change.  The rewrite that ``go mod edit
-fmt`` itself performs is absorbed by re-reading the mtime after the
callback, so formatting never triggers itself.

Design decisions
────────────────
1. **Mtime polling** (not inotify/watchdog): one stat() per cycle.
2. **Daemon thread** with a stop Event: ends with the process or on demand.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)


def _mtime(path: Path) -> float:
    try:
        return path.stat().st_mtime
    except OSError:
        return 0.0


class ManifestWatcher:
    """Polls one manifest file and reports saves."""

    def __init__(
        self,
        path: Path,
        on_save: Callable[[Path], object],
        interval: float = 1.0,
    ):
        self.path = path
        self.on_save = on_save
        self.interval = interval
        self._last_mtime = _mtime(path)
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def poll_once(self) -> bool:
        """Check for a save; fire ``on_save`` if there was one. Returns whether it fired."""
        current = _mtime(self.path)
        if current == 0.0 or current == self._last_mtime:
            return False

        logger.info("%s changed", self.path.name)
        try:
            self.on_save(self.path)
        finally:
            # Absorb our own rewrite
            self._last_mtime = _mtime(self.path)
        return True

    def run(self) -> None:
        """Poll until ``stop()`` is called."""
        while not self._stop.wait(self.interval):
            self.poll_once()

    def start(self) -> threading.Thread:
        """Start polling on a daemon thread."""
        self._thread = threading.Thread(
            target=self.run,
            daemon=True,
            name="manifest-watcher",
        )
        self._thread.start()
        logger.info("Watching %s (poll every %.1fs)", self.path, self.interval)
        return self._thread

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
