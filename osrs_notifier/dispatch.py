"""Destinations for assembled notifications."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Protocol

from osrs_notifier.message import Notification

logger = logging.getLogger(__name__)


class Dispatcher(Protocol):
    def send(self, notification: Notification, screenshot: bool, webhook_url: str) -> None: ...


class LoggingDispatcher:
    """Writes each notification to the log. Useful for dry runs."""

    def send(self, notification: Notification, screenshot: bool, webhook_url: str) -> None:
        logger.info(
            "[%s] %s (screenshot=%s, webhook=%s)",
            notification.type.value, notification.text, screenshot, webhook_url or "-",
        )


class JsonLinesDispatcher:
    """Appends notifications to a JSON-lines file, one object per line.

    Usage:
        dispatcher = JsonLinesDispatcher(Path("notifications.jsonl"))
        plugin = NotifierPlugin(config, client, items, dispatcher)
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = threading.Lock()

    def send(self, notification: Notification, screenshot: bool, webhook_url: str) -> None:
        record = {
            "webhook": webhook_url,
            "screenshot": screenshot,
            "notification": notification.to_dict(),
        }
        line = json.dumps(record, ensure_ascii=False)
        try:
            with self._lock, open(self._path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            logger.warning("Cannot write notification to %s: %s", self._path, e)
