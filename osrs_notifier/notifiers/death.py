"""Death notifier: kept/lost split and killer attribution for the local player."""

from __future__ import annotations

import logging

from osrs_notifier.atomics import AtomicReference
from osrs_notifier.client import (
    NPC,
    Actor,
    InventoryID,
    Player,
    Prayer,
    get_player_location,
    is_in_wilderness,
)
from osrs_notifier.message import (
    DeathNotificationData,
    NotificationType,
    SerializedItemStack,
    build_notification,
    item_image_url,
)
from osrs_notifier.notifiers.base import NotifierContext
from osrs_notifier.text_utils import format_quantity

logger = logging.getLogger(__name__)

# Minigames and arenas where dying costs nothing, keyed by map region id
SAFE_REGIONS: dict[int, str] = {
    9520: "Castle Wars",
    9620: "Castle Wars",
    9776: "Castle Wars",
    8493: "Soul Wars",
    8748: "Soul Wars",
    8749: "Soul Wars",
    8237: "Soul Wars",
    13658: "Last Man Standing",
    13659: "Last Man Standing",
    13660: "Last Man Standing",
    13914: "Last Man Standing",
    13915: "Last Man Standing",
    13916: "Last Man Standing",
    10536: "Pest Control",
    9033: "Nightmare Zone",
    9551: "Fight Caves",
    9043: "Inferno",
    9552: "Fight Pits",
    7508: "Barbarian Assault",
    7509: "Barbarian Assault",
    13130: "Clan Wars",
    13131: "Clan Wars",
    13133: "Clan Wars",
    13134: "Clan Wars",
}

DEFAULT_KEPT_ITEMS = 3


def is_safe_region(region_id: int) -> bool:
    return region_id in SAFE_REGIONS


def split_kept_lost(
    stacks: list[SerializedItemStack], keep_count: int
) -> tuple[list[SerializedItemStack], list[SerializedItemStack]]:
    """Most valuable ``keep_count`` stacks are kept, the rest are lost."""
    ordered = sorted(stacks, key=lambda s: s.total_price, reverse=True)
    keep = max(keep_count, 0)
    return ordered[:keep], ordered[keep:]


class DeathNotifier:
    def __init__(self, ctx: NotifierContext) -> None:
        self._ctx = ctx
        self._last_target: AtomicReference[Player | None] = AtomicReference(None)

    @property
    def webhook(self) -> str:
        return self._ctx.config.death_webhook

    def enabled(self) -> bool:
        return self._ctx.config.notify_death and self._ctx.base_enabled(self.webhook)

    def reset(self) -> None:
        self._last_target.set(None)

    def on_interacting_changed(self, source: Actor, target: Actor | None) -> None:
        local = self._ctx.client.get_local_player()
        if local is None:
            return
        if source is local and isinstance(target, Player):
            self._last_target.set(target)
        elif target is local and isinstance(source, Player) and source is not local:
            self._last_target.set(source)

    def on_actor_death(self, actor: Actor) -> None:
        local = self._ctx.client.get_local_player()
        if local is None or actor is not local:
            return
        try:
            if self.enabled():
                self._handle_notify(local)
        finally:
            self._last_target.set(None)

    def _handle_notify(self, local: Player) -> None:
        config = self._ctx.config
        location = get_player_location(self._ctx.client)
        safe = location is not None and is_safe_region(location.region_id)
        if safe and config.death_ignore_safe:
            logger.debug("Ignoring death in safe area: %s", SAFE_REGIONS[location.region_id])
            return

        stacks = self._collect_items()
        if safe:
            kept, lost = sorted(stacks, key=lambda s: s.total_price, reverse=True), []
        else:
            kept, lost = split_kept_lost(stacks, self._keep_count(local))
        value_lost = sum(s.total_price for s in lost)

        if not safe and value_lost < config.death_min_value:
            logger.debug("Ignoring death losing %d gp (minimum %d)", value_lost, config.death_min_value)
            return

        pker = self._find_pker(local)
        killer_npc = None if pker is not None else self._find_npc_killer(local)
        killer_name = pker.name if pker is not None else (killer_npc.name if killer_npc else None)

        player = self._ctx.player_name()
        template = config.death_notif_pvp_message if pker is not None else config.death_notify_message
        screenshot = config.death_send_image
        embeds: tuple[str, ...] = ()
        if config.death_embed_kept_items and not screenshot:
            embeds = tuple(item_image_url(s.id) for s in kept)

        notification = build_notification(
            NotificationType.DEATH,
            template,
            {
                "%USERNAME%": player,
                "%VALUELOST%": format_quantity(value_lost),
                "%PKER%": (pker.name or "") if pker is not None else "",
            },
            extra=DeathNotificationData(
                value_lost=value_lost,
                is_pvp=pker is not None,
                pker=pker.name if pker is not None else None,
                killer_name=killer_name,
                killer_npc_id=killer_npc.id if killer_npc is not None else None,
                kept_items=tuple(kept),
                lost_items=tuple(lost),
            ),
            player_name=player,
            embeds=embeds,
        )
        self._ctx.create_message(self.webhook, screenshot, notification)

    def _keep_count(self, local: Player) -> int:
        keep = 0 if local.skulled else DEFAULT_KEPT_ITEMS
        if self._ctx.client.is_prayer_active(Prayer.PROTECT_ITEM):
            keep += 1
        return keep

    def _collect_items(self) -> list[SerializedItemStack]:
        client = self._ctx.client
        items = self._ctx.items
        stacks = []
        for container in (InventoryID.INVENTORY, InventoryID.EQUIPMENT):
            for item in client.get_items(container):
                if item.id < 0 or item.quantity <= 0:
                    continue
                stacks.append(SerializedItemStack(
                    id=item.id,
                    quantity=item.quantity,
                    price_each=items.get_price(item.id),
                    name=items.get_name(item.id),
                ))
        return stacks

    def _find_pker(self, local: Player) -> Player | None:
        client = self._ctx.client
        if not self._ctx.config.death_notif_pvp_enabled:
            return None
        if not (is_in_wilderness(client) or client.is_pvp_world()):
            return None

        last = self._last_target.get()
        if last is not None and last is not local:
            return last
        return next(
            (p for p in client.get_cached_players() if p is not local and p.interacting is local),
            None,
        )

    def _find_npc_killer(self, local: Player) -> NPC | None:
        return next(
            (
                npc for npc in self._ctx.client.get_cached_npcs()
                if npc.interacting is local and not npc.dead and not npc.follower and npc.attackable
            ),
            None,
        )
