"""Polling follower for a growing event log.

The producer appends lines in bursts and may truncate or recreate the file
between sessions, so the size is polled instead of relying on fs events.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.6  # seconds, one game tick


class EventLogWatcher:
    """Follows an event log, handing each new non-empty line to a callback.

    Usage:
        watcher = EventLogWatcher(Path("events.log"), replayer.feed_line)
        watcher.start()
        # ... later ...
        watcher.stop()
    """

    def __init__(
        self,
        file_path: Path,
        on_new_line: Callable[[str], None],
        poll_interval: float = POLL_INTERVAL,
    ) -> None:
        self._file_path = file_path.resolve()
        self._on_new_line = on_new_line
        self._poll_interval = poll_interval
        self._position: int = 0
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def position(self) -> int:
        return self._position

    def start(self, from_start: bool = False) -> None:
        """Start polling. Existing content is skipped unless ``from_start``."""
        if from_start:
            self._position = 0
        else:
            self._seek_to_end()
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._poll_loop, daemon=True)
        self._thread.start()
        logger.info("Following %s", self._file_path)

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=5)
        logger.info("Stopped following")

    def wait(self, timeout: float | None = None) -> bool:
        """Block until stopped. Returns True if the watcher has stopped."""
        return self._stop_event.wait(timeout)

    def _seek_to_end(self) -> None:
        try:
            self._position = self._file_path.stat().st_size
        except FileNotFoundError:
            self._position = 0

    def _poll_loop(self) -> None:
        while not self._stop_event.is_set():
            self.poll()
            self._stop_event.wait(self._poll_interval)

    def poll(self) -> int:
        """Read lines appended since the last poll. Returns how many were handed off."""
        with self._lock:
            lines = self._read_new_lines()
        for line in lines:
            self._on_new_line(line)
        return len(lines)

    def _read_new_lines(self) -> list[str]:
        try:
            size = self._file_path.stat().st_size
        except FileNotFoundError:
            return []

        # Truncated or recreated
        if size < self._position:
            logger.info("Event log truncated or recreated, resetting position")
            self._position = 0

        if size == self._position:
            return []

        try:
            with open(self._file_path, "rb") as f:
                f.seek(self._position)
                data = f.read()
        except OSError as e:
            logger.warning("Cannot read event log: %s", e)
            return []

        # Hold back a trailing partial line until it is terminated
        end = data.rfind(b"\n")
        if end < 0:
            return []
        self._position += end + 1
        text = data[: end + 1].decode("utf-8", errors="replace")
        return [s for s in (line.strip() for line in text.splitlines()) if s]
