"""Notification records, per-type payloads and the template assembler."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, is_dataclass
from datetime import timedelta
from enum import Enum
from typing import Any

from osrs_notifier.diaries import Difficulty
from osrs_notifier.events import LootCategory

_ITEM_IMAGE_URL = "https://static.runelite.net/cache/item/icon/{}.png"
_NPC_IMAGE_URL = "https://chisel.weirdgloop.org/static/img/osrs-npc/{}_288.png"


class NotificationType(Enum):
    DEATH = "DEATH"
    LOOT = "LOOT"
    COLLECTION = "COLLECTION"
    QUEST = "QUEST"
    KILL_COUNT = "KILL_COUNT"
    SLAYER = "SLAYER"
    ACHIEVEMENT_DIARY = "ACHIEVEMENT_DIARY"


@dataclass(frozen=True, slots=True)
class SerializedItemStack:
    id: int
    quantity: int
    price_each: int
    name: str

    @property
    def total_price(self) -> int:
        return self.price_each * self.quantity


@dataclass(frozen=True, slots=True)
class BossNotificationData:
    boss: str | None = None
    count: int | None = None
    game_message: str | None = None
    time: timedelta | None = None
    personal_best: bool | None = None

    def merge(self, update: BossNotificationData) -> BossNotificationData:
        """Null-coalescing merge: keep known fields, fill unknown ones from ``update``."""
        return BossNotificationData(
            boss=_coalesce(self.boss, update.boss),
            count=_coalesce(self.count, update.count),
            game_message=_coalesce(self.game_message, update.game_message),
            time=_coalesce(self.time, update.time),
            personal_best=_coalesce(self.personal_best, update.personal_best),
        )


@dataclass(frozen=True, slots=True)
class DiaryNotificationData:
    area: str
    difficulty: Difficulty
    total: int


@dataclass(frozen=True, slots=True)
class CollectionNotificationData:
    item_name: str
    item_id: int | None
    price: int | None
    completed_entries: int | None
    total_entries: int | None


@dataclass(frozen=True, slots=True)
class SlayerNotificationData:
    slayer_task: str
    slayer_completed: str
    slayer_points: str


@dataclass(frozen=True, slots=True)
class DeathNotificationData:
    value_lost: int
    is_pvp: bool
    pker: str | None
    killer_name: str | None
    killer_npc_id: int | None
    kept_items: tuple[SerializedItemStack, ...] = ()
    lost_items: tuple[SerializedItemStack, ...] = ()


@dataclass(frozen=True, slots=True)
class QuestNotificationData:
    quest_name: str
    completed_quests: int | None
    total_quests: int | None
    quest_points: int | None
    total_quest_points: int | None


@dataclass(frozen=True, slots=True)
class LootNotificationData:
    items: tuple[SerializedItemStack, ...]
    source: str
    category: LootCategory


@dataclass(frozen=True)
class Notification:
    type: NotificationType
    text: str
    extra: Any = None
    player_name: str | None = None
    thumbnail_url: str | None = None
    embeds: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation (enums by name, durations in seconds)."""
        return {
            "type": self.type.value,
            "text": self.text,
            "playerName": self.player_name,
            "thumbnailUrl": self.thumbnail_url,
            "embeds": list(self.embeds),
            "extra": _jsonable(asdict(self.extra)) if is_dataclass(self.extra) else self.extra,
        }


def _coalesce(known: Any, update: Any) -> Any:
    return known if known is not None else update


def _jsonable(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {_camel(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, Enum):
        return str(value) if isinstance(value, Difficulty) else value.value
    if isinstance(value, timedelta):
        return value.total_seconds()
    return value


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.capitalize() for part in rest)


# --- Assembler ----------------------------------------------------------------

def replace_placeholders(template: str, values: Mapping[str, str]) -> str:
    """Substitute ``%KEY%`` tokens in a single pass.

    Replacements are not re-scanned, so a player called ``%BOSS%`` stays literal.
    """
    if not values:
        return template
    pattern = re.compile("|".join(re.escape(k) for k in sorted(values, key=len, reverse=True)))
    return pattern.sub(lambda m: values[m.group(0)], template)


def build_notification(
    type: NotificationType,
    template: str,
    values: Mapping[str, str],
    extra: Any = None,
    player_name: str | None = None,
    thumbnail_url: str | None = None,
    embeds: tuple[str, ...] = (),
) -> Notification:
    return Notification(
        type=type,
        text=replace_placeholders(template, values),
        extra=extra,
        player_name=player_name,
        thumbnail_url=thumbnail_url,
        embeds=embeds,
    )


def item_image_url(item_id: int) -> str:
    return _ITEM_IMAGE_URL.format(item_id)


def npc_image_url(npc_id: int) -> str:
    return _NPC_IMAGE_URL.format(npc_id)
