"""Event-log replay: a line parser plus a client that mirrors the replayed state.

Log format, one event per line (blank lines and ``#`` comments ignored)::

    STATE|LOGGED_IN
    NAME|Zezima
    VARBIT|4458|1
    VARP|2943|120
    CHAT|GAMEMESSAGE|Your Zulrah kill count is: 12.
    WIDGET|153|You have completed Cook's Assistant!
    TICK
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from osrs_notifier.client import NPC, InventoryID, Player, Prayer, WorldPoint
from osrs_notifier.events import (
    ChatCategory,
    GameState,
    GameStateChanged,
    ItemStack,
    TextEvent,
    Tick,
    VarChange,
    VarKind,
    WidgetLoaded,
)
from osrs_notifier.plugin import NotifierPlugin

logger = logging.getLogger(__name__)

_SEPARATOR = "|"


@dataclass(frozen=True, slots=True)
class NameChange:
    """Replay-only event: the local player is now called ``name``."""

    name: str


ReplayEvent = Tick | TextEvent | VarChange | GameStateChanged | WidgetLoaded | NameChange


_CHAT_CATEGORIES = frozenset(c.value for c in ChatCategory)


def _parse_chat(fields: list[str]) -> TextEvent | None:
    if len(fields) < 3:
        return None
    # The text itself may contain the separator
    return TextEvent(category=ChatCategory(fields[1]), text=_SEPARATOR.join(fields[2:]))


def _parse_var(kind: VarKind, fields: list[str]) -> VarChange | None:
    if len(fields) != 3:
        return None
    try:
        return VarChange(kind=kind, id=int(fields[1]), value=int(fields[2]))
    except ValueError:
        return None


def _parse_state(fields: list[str]) -> GameStateChanged | None:
    if len(fields) != 2:
        return None
    try:
        return GameStateChanged(GameState(fields[1].upper()))
    except ValueError:
        return None


def _parse_widget(fields: list[str]) -> WidgetLoaded | None:
    if len(fields) < 2:
        return None
    try:
        group_id = int(fields[1])
    except ValueError:
        return None
    text = _SEPARATOR.join(fields[2:]) if len(fields) > 2 else None
    return WidgetLoaded(group_id=group_id, text=text)


def parse_event_line(line: str) -> ReplayEvent | None:
    """Parse one log line. Returns None for blanks, comments and bad lines."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    fields = stripped.split(_SEPARATOR)
    tag = fields[0].upper()
    event: ReplayEvent | None = None

    if tag == "TICK":
        event = Tick()
    elif tag == "CHAT":
        if len(fields) >= 3 and fields[1] not in _CHAT_CATEGORIES:
            logger.debug("Ignoring chat line with unknown category: %s", fields[1])
            return None
        event = _parse_chat(fields)
    elif tag in ("VARBIT", "VARP"):
        event = _parse_var(VarKind(tag), fields)
    elif tag == "STATE":
        event = _parse_state(fields)
    elif tag == "NAME":
        if len(fields) == 2 and fields[1]:
            event = NameChange(fields[1])
    elif tag == "WIDGET":
        event = _parse_widget(fields)
    else:
        logger.warning("Skipping unknown event type %r: %s", fields[0], stripped[:120])
        return None

    if event is None:
        logger.warning("Skipping malformed event line: %s", stripped[:120])
    return event


class ReplayClient:
    """Game client whose state is whatever the replayed log says it is."""

    def __init__(self, player_name: str = "", state: GameState = GameState.LOGIN_SCREEN) -> None:
        self._state = state
        self._player = Player(name=player_name, location=WorldPoint(3222, 3218))
        self._varbits: dict[int, int] = {}
        self._varps: dict[int, int] = {}

    def observe(self, event: ReplayEvent) -> None:
        """Update mirrored state before the event reaches the notifiers."""
        if isinstance(event, VarChange):
            target = self._varbits if event.kind == VarKind.VARBIT else self._varps
            target[event.id] = event.value
        elif isinstance(event, GameStateChanged):
            self._state = event.state
        elif isinstance(event, NameChange):
            self._player.name = event.name

    def get_game_state(self) -> GameState:
        return self._state

    def get_local_player(self) -> Player | None:
        return self._player

    def get_varbit_value(self, varbit_id: int) -> int:
        return self._varbits.get(varbit_id, 0)

    def get_varp_value(self, varp_id: int) -> int:
        return self._varps.get(varp_id, 0)

    def get_cached_players(self) -> list[Player]:
        return [self._player]

    def get_cached_npcs(self) -> list[NPC]:
        return []

    def get_items(self, container: InventoryID) -> list[ItemStack]:
        return []

    def is_prayer_active(self, prayer: Prayer) -> bool:
        return False

    def is_pvp_world(self) -> bool:
        return False


class UnpricedItemManager:
    """Item lookups for replays: no price data, ids are unknown by name."""

    def get_price(self, item_id: int) -> int:
        return 0

    def get_name(self, item_id: int) -> str:
        return f"Item {item_id}"

    def find_item_id(self, name: str) -> int | None:
        return None


class EventReplayer:
    """Feeds parsed log lines through a :class:`ReplayClient` into the plugin."""

    def __init__(self, plugin: NotifierPlugin, client: ReplayClient) -> None:
        self._plugin = plugin
        self._client = client
        self.events = 0

    def feed_line(self, line: str) -> None:
        event = parse_event_line(line)
        if event is None:
            return
        self._client.observe(event)
        self.events += 1
        if isinstance(event, NameChange):
            self._plugin.on_username_changed()
        else:
            self._plugin.handle(event)

    def feed(self, lines: Iterable[str]) -> int:
        """Replay every line. Returns the number of events delivered."""
        for line in lines:
            self.feed_line(line)
        return self.events
