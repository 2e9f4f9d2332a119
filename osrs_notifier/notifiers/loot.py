"""Loot notifier for NPC drops, PvP loot, pickpockets and reward events."""

from __future__ import annotations

import logging
from collections import OrderedDict

from osrs_notifier.events import ItemStack, LootCategory, LootReceived
from osrs_notifier.message import (
    LootNotificationData,
    NotificationType,
    SerializedItemStack,
    build_notification,
    item_image_url,
)
from osrs_notifier.notifiers.base import NotifierContext
from osrs_notifier.text_utils import format_quantity

logger = logging.getLogger(__name__)

_CLUE_SCROLL = "clue scroll"

# NPC and PLAYER loot arrive through their own events
_GENERIC_CATEGORIES = frozenset({LootCategory.EVENT, LootCategory.PICKPOCKET})


class LootNotifier:
    def __init__(self, ctx: NotifierContext) -> None:
        self._ctx = ctx

    @property
    def webhook(self) -> str:
        return self._ctx.config.loot_webhook

    def enabled(self) -> bool:
        return self._ctx.config.notify_loot and self._ctx.base_enabled(self.webhook)

    def reset(self) -> None:
        pass

    def on_npc_loot(self, npc_name: str, items: tuple[ItemStack, ...]) -> None:
        if self.enabled():
            self._handle_notify(items, npc_name, LootCategory.NPC)

    def on_player_loot(self, player_name: str, items: tuple[ItemStack, ...]) -> None:
        if self.enabled() and self._ctx.config.include_player_loot:
            self._handle_notify(items, player_name, LootCategory.PLAYER)

    def on_loot_received(self, event: LootReceived) -> None:
        if not self.enabled() or event.category not in _GENERIC_CATEGORIES:
            return
        if _CLUE_SCROLL in event.source.lower() and not self._ctx.config.loot_include_clue_scrolls:
            return
        self._handle_notify(event.items, event.source, event.category)

    def _reduce(self, items: tuple[ItemStack, ...]) -> list[SerializedItemStack]:
        """Combine stacks of the same item, keeping first-seen order."""
        quantities: OrderedDict[int, int] = OrderedDict()
        for item in items:
            quantities[item.id] = quantities.get(item.id, 0) + item.quantity
        manager = self._ctx.items
        return [
            SerializedItemStack(
                id=item_id,
                quantity=quantity,
                price_each=manager.get_price(item_id),
                name=manager.get_name(item_id),
            )
            for item_id, quantity in quantities.items()
        ]

    def _handle_notify(self, items: tuple[ItemStack, ...], source: str, category: LootCategory) -> None:
        config = self._ctx.config
        stacks = self._reduce(items)
        valuable = [s for s in stacks if s.total_price >= config.min_loot_value]
        if not valuable:
            logger.debug("Skipping loot from %s below %d gp", source, config.min_loot_value)
            return

        total = sum(s.total_price for s in stacks)
        lines = "\n".join(
            f"{s.quantity} x {s.name} ({format_quantity(s.total_price)})" for s in valuable
        )

        screenshot = config.loot_send_image
        embeds: tuple[str, ...] = ()
        if config.loot_icons and not screenshot:
            embeds = tuple(item_image_url(s.id) for s in valuable)

        player = self._ctx.player_name()
        notification = build_notification(
            NotificationType.LOOT,
            config.loot_notify_message,
            {
                "%USERNAME%": player,
                "%LOOT%": lines,
                "%SOURCE%": source,
                "%TOTAL_VALUE%": format_quantity(total),
            },
            extra=LootNotificationData(items=tuple(stacks), source=source, category=category),
            player_name=player,
            embeds=embeds,
        )
        self._ctx.create_message(self.webhook, screenshot, notification)
