"""Collection log notifier.

The "completed entries" varp lags the chat message by a few ticks, so the
count is kept locally: seeded once per login from the varp, then incremented
on every chat match. Several matches in one tick still yield distinct counts.
"""

from __future__ import annotations

import logging

from osrs_notifier.atomics import AtomicInteger
from osrs_notifier.client import is_logged_in
from osrs_notifier.events import GameState
from osrs_notifier.message import (
    CollectionNotificationData,
    NotificationType,
    build_notification,
    item_image_url,
)
from osrs_notifier.notifiers.base import NotifierContext
from osrs_notifier.parser import parse_collection_item

logger = logging.getLogger(__name__)

COMPLETED_VARP = 2943
TOTAL_VARP = 2944

_STALE = -1


class CollectionNotifier:
    def __init__(self, ctx: NotifierContext) -> None:
        self._ctx = ctx
        self._completed = AtomicInteger(_STALE)

    @property
    def webhook(self) -> str:
        return self._ctx.config.collection_webhook

    @property
    def completed(self) -> int:
        return self._completed.get()

    def enabled(self) -> bool:
        return self._ctx.config.notify_collection_log and self._ctx.base_enabled(self.webhook)

    def reset(self) -> None:
        # Only marks the count stale; it must survive between messages
        self._completed.set(_STALE)

    def on_game_state(self, state: GameState) -> None:
        if state != GameState.LOGGED_IN:
            self.reset()

    def on_tick(self) -> None:
        if not is_logged_in(self._ctx.client):
            self._completed.set(_STALE)
        elif self._completed.get() < 0:
            self._completed.set(self._ctx.client.get_varp_value(COMPLETED_VARP))

    def on_varp_changed(self, varp_id: int, value: int) -> None:
        if varp_id != COMPLETED_VARP:
            return
        # Only used for initialization; after a completion this varp trails
        # the chat message, so it must not overwrite the local count.
        old = self._completed.get()
        if old <= 0:
            self._completed.compare_and_set(old, value)

    def on_chat_message(self, message: str) -> None:
        if not self.enabled():
            return
        item = parse_collection_item(message)
        if item is not None:
            self._ctx.deferred.invoke_later(lambda: self._handle_notify(item))

    def _handle_notify(self, item_name: str) -> None:
        completed = self._completed.increment_and_get()
        total = self._ctx.client.get_varp_value(TOTAL_VARP)
        valid = total > 0 and completed > 0
        if not valid:
            # Happens when the character summary tab is not selected
            logger.debug("Collection log progress varps were invalid (%d / %d)", completed, total)

        items = self._ctx.items
        item_id = items.find_item_id(item_name)
        price = items.get_price(item_id) if item_id is not None else None
        player = self._ctx.player_name()

        notification = build_notification(
            NotificationType.COLLECTION,
            self._ctx.config.collection_notify_message,
            {"%USERNAME%": player, "%ITEM%": item_name},
            extra=CollectionNotificationData(
                item_name=item_name,
                item_id=item_id,
                price=price,
                completed_entries=completed if valid else None,
                total_entries=total if valid else None,
            ),
            player_name=player,
            thumbnail_url=item_image_url(item_id) if item_id is not None else None,
        )
        self._ctx.create_message(self.webhook, self._ctx.config.collection_send_image, notification)
