"""Read-only view of the game client: identity, session, world and item data.

The notifiers never talk to a concrete client. Anything that satisfies
:class:`GameClient` (a live bridge, the replay client, a test fake) will do.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from osrs_notifier.events import GameState, ItemStack

# Varbits / varps read outside of a single notifier
IN_WILDERNESS_VARBIT = 5963
PRECISE_TIMING_VARBIT = 11866


class Prayer(Enum):
    PROTECT_ITEM = "PROTECT_ITEM"


class InventoryID(Enum):
    INVENTORY = "INVENTORY"
    EQUIPMENT = "EQUIPMENT"


@dataclass(frozen=True, slots=True)
class WorldPoint:
    x: int
    y: int
    plane: int = 0

    @property
    def region_id(self) -> int:
        return ((self.x >> 6) << 8) | (self.y >> 6)


@dataclass(eq=False)
class Actor:
    """Something standing in the world. Compared by identity."""

    name: str | None
    combat_level: int = 0
    location: WorldPoint = field(default_factory=lambda: WorldPoint(0, 0))
    interacting: Actor | None = field(default=None, repr=False)


@dataclass(eq=False)
class Player(Actor):
    skulled: bool = False


@dataclass(eq=False)
class NPC(Actor):
    id: int = -1
    dead: bool = False
    follower: bool = False
    actions: tuple[str, ...] = ()

    @property
    def attackable(self) -> bool:
        return "Attack" in self.actions


class GameClient(Protocol):
    def get_game_state(self) -> GameState: ...

    def get_local_player(self) -> Player | None: ...

    def get_varbit_value(self, varbit_id: int) -> int: ...

    def get_varp_value(self, varp_id: int) -> int: ...

    def get_cached_players(self) -> list[Player]: ...

    def get_cached_npcs(self) -> list[NPC]: ...

    def get_items(self, container: InventoryID) -> list[ItemStack]: ...

    def is_prayer_active(self, prayer: Prayer) -> bool: ...

    def is_pvp_world(self) -> bool: ...


class ItemManager(Protocol):
    def get_price(self, item_id: int) -> int: ...

    def get_name(self, item_id: int) -> str: ...

    def find_item_id(self, name: str) -> int | None: ...


def get_player_name(client: GameClient) -> str:
    player = client.get_local_player()
    if player is None or player.name is None:
        return ""
    return player.name


def get_player_location(client: GameClient) -> WorldPoint | None:
    player = client.get_local_player()
    return player.location if player else None


def is_in_wilderness(client: GameClient) -> bool:
    return client.get_varbit_value(IN_WILDERNESS_VARBIT) > 0


def is_precise_timing(client: GameClient) -> bool:
    return client.get_varbit_value(PRECISE_TIMING_VARBIT) > 0


def is_logged_in(client: GameClient) -> bool:
    return client.get_game_state() == GameState.LOGGED_IN
