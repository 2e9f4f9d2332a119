"""Shared notifier plumbing: the capability contract, enable policy and emission."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from osrs_notifier.client import GameClient, ItemManager, get_player_name
from osrs_notifier.config import NotifierConfig
from osrs_notifier.dispatch import Dispatcher
from osrs_notifier.message import Notification

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def enabled(self) -> bool: ...

    def reset(self) -> None: ...


class DeferredQueue:
    """Callbacks to run at the start of the next tick, before tick evaluation."""

    def __init__(self) -> None:
        self._pending: deque[Callable[[], None]] = deque()

    def invoke_later(self, fn: Callable[[], None]) -> None:
        self._pending.append(fn)

    def drain(self) -> int:
        """Run everything queued so far. Returns the number of callbacks run."""
        n = len(self._pending)
        for _ in range(n):
            self._pending.popleft()()
        return n

    def clear(self) -> None:
        self._pending.clear()

    def __len__(self) -> int:
        return len(self._pending)


def is_enabled(config: NotifierConfig, webhook: str, player_name: str) -> bool:
    """Checks shared by every notifier, independent of its own toggle."""
    if not config.notifications_enabled:
        return False
    if not webhook and not config.primary_webhook:
        return False
    return player_name.lower() not in config.ignored_player_names()


@dataclass
class NotifierContext:
    config: NotifierConfig
    client: GameClient
    items: ItemManager
    dispatcher: Dispatcher
    deferred: DeferredQueue = field(default_factory=DeferredQueue)

    def player_name(self) -> str:
        return get_player_name(self.client)

    def base_enabled(self, webhook: str) -> bool:
        return is_enabled(self.config, webhook, self.player_name())

    def create_message(self, webhook: str, screenshot: bool, notification: Notification) -> None:
        url = webhook or self.config.primary_webhook
        logger.debug("Emitting %s notification: %s", notification.type.value, notification.text)
        self.dispatcher.send(notification, screenshot, url)
