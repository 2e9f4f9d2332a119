"""Event types delivered by the game client to the notifiers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from osrs_notifier.client import Actor


class ChatCategory(Enum):
    GAME_MESSAGE = "GAMEMESSAGE"
    MESSAGE_BOX = "MESBOX"
    FRIENDS_CHAT_NOTIFICATION = "FRIENDSCHATNOTIFICATION"
    CLAN_MESSAGE = "CLAN_MESSAGE"
    CLAN_GUEST_MESSAGE = "CLAN_GUEST_MESSAGE"
    CLAN_GIM_MESSAGE = "CLAN_GIM_MESSAGE"
    PUBLIC_CHAT = "PUBLICCHAT"
    PRIVATE_CHAT = "PRIVATECHAT"


# Categories that carry clan-style broadcast notifications
CLAN_CATEGORIES = frozenset({
    ChatCategory.FRIENDS_CHAT_NOTIFICATION,
    ChatCategory.CLAN_MESSAGE,
    ChatCategory.CLAN_GUEST_MESSAGE,
    ChatCategory.CLAN_GIM_MESSAGE,
})


class VarKind(Enum):
    VARBIT = "VARBIT"
    VARP = "VARP"


class GameState(Enum):
    UNKNOWN = "UNKNOWN"
    STARTING = "STARTING"
    LOGIN_SCREEN = "LOGIN_SCREEN"
    LOGGING_IN = "LOGGING_IN"
    LOADING = "LOADING"
    LOGGED_IN = "LOGGED_IN"
    CONNECTION_LOST = "CONNECTION_LOST"
    HOPPING = "HOPPING"


class LootCategory(Enum):
    NPC = "NPC"
    PLAYER = "PLAYER"
    EVENT = "EVENT"
    PICKPOCKET = "PICKPOCKET"


@dataclass(frozen=True, slots=True)
class Tick:
    """Fixed-cadence pulse (one game tick, ~0.6s)."""


@dataclass(frozen=True, slots=True)
class TextEvent:
    """A classified, pre-normalized line of game text."""

    category: ChatCategory
    text: str


@dataclass(frozen=True, slots=True)
class VarChange:
    kind: VarKind
    id: int
    value: int


@dataclass(frozen=True, slots=True)
class GameStateChanged:
    state: GameState


@dataclass(frozen=True, slots=True)
class ItemStack:
    id: int
    quantity: int


@dataclass(frozen=True, slots=True)
class LootReceived:
    """Loot attributed to a named source (NPC, player, minigame, pickpocket...)."""

    source: str
    category: LootCategory
    items: tuple[ItemStack, ...] = ()


@dataclass(frozen=True, slots=True)
class UsernameChanged:
    """The logged-in account changed; all pending state is stale."""


@dataclass(frozen=True, slots=True)
class WidgetLoaded:
    group_id: int
    text: str | None = None


@dataclass(frozen=True, slots=True)
class ActorDeath:
    actor: Actor


@dataclass(frozen=True, slots=True)
class InteractingChanged:
    source: Actor
    target: Actor | None
