"""Shared fakes for notifier tests: client, item manager, dispatcher."""

from __future__ import annotations

import pytest

from osrs_notifier.client import NPC, InventoryID, Player, Prayer, WorldPoint
from osrs_notifier.config import NotifierConfig
from osrs_notifier.events import GameState, ItemStack
from osrs_notifier.message import Notification
from osrs_notifier.notifiers.base import NotifierContext
from osrs_notifier.plugin import NotifierPlugin

PLAYER_NAME = "Zanik"
PRIMARY_WEBHOOK = "https://discord.example/api/webhooks/primary"


class FakeClient:
    def __init__(self) -> None:
        self.state = GameState.LOGGED_IN
        self.local_player: Player | None = Player(name=PLAYER_NAME, location=WorldPoint(3222, 3218))
        self.varbits: dict[int, int] = {}
        self.varps: dict[int, int] = {}
        self.players: list[Player] = []
        self.npcs: list[NPC] = []
        self.containers: dict[InventoryID, list[ItemStack]] = {}
        self.prayers: set[Prayer] = set()
        self.pvp_world = False

    def get_game_state(self) -> GameState:
        return self.state

    def get_local_player(self) -> Player | None:
        return self.local_player

    def get_varbit_value(self, varbit_id: int) -> int:
        return self.varbits.get(varbit_id, 0)

    def get_varp_value(self, varp_id: int) -> int:
        return self.varps.get(varp_id, 0)

    def get_cached_players(self) -> list[Player]:
        return self.players

    def get_cached_npcs(self) -> list[NPC]:
        return self.npcs

    def get_items(self, container: InventoryID) -> list[ItemStack]:
        return self.containers.get(container, [])

    def is_prayer_active(self, prayer: Prayer) -> bool:
        return prayer in self.prayers

    def is_pvp_world(self) -> bool:
        return self.pvp_world


class FakeItemManager:
    def __init__(self) -> None:
        self.prices: dict[int, int] = {}
        self.names: dict[int, str] = {}

    def add(self, item_id: int, name: str, price: int) -> None:
        self.names[item_id] = name
        self.prices[item_id] = price

    def get_price(self, item_id: int) -> int:
        return self.prices.get(item_id, 0)

    def get_name(self, item_id: int) -> str:
        return self.names.get(item_id, f"Item {item_id}")

    def find_item_id(self, name: str) -> int | None:
        return next((i for i, n in self.names.items() if n.lower() == name.lower()), None)


class RecordingDispatcher:
    def __init__(self) -> None:
        self.sent: list[tuple[Notification, bool, str]] = []

    def send(self, notification: Notification, screenshot: bool, webhook_url: str) -> None:
        self.sent.append((notification, screenshot, webhook_url))

    @property
    def notifications(self) -> list[Notification]:
        return [n for n, _, _ in self.sent]

    @property
    def texts(self) -> list[str]:
        return [n.text for n in self.notifications]


@pytest.fixture
def config():
    return NotifierConfig(primary_webhook=PRIMARY_WEBHOOK)


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def items():
    return FakeItemManager()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def ctx(config, client, items, dispatcher):
    return NotifierContext(config=config, client=client, items=items, dispatcher=dispatcher)


@pytest.fixture
def plugin(config, client, items, dispatcher):
    p = NotifierPlugin(config, client, items, dispatcher)
    p.start_up()
    yield p
    p.shut_down()
