"""Notifier hub: event feed -> text normalization -> notifiers -> dispatcher."""

from __future__ import annotations

import logging
import threading

from osrs_notifier.client import Actor, GameClient, ItemManager
from osrs_notifier.config import NotifierConfig
from osrs_notifier.dispatch import Dispatcher
from osrs_notifier.events import (
    ActorDeath,
    ChatCategory,
    GameState,
    GameStateChanged,
    InteractingChanged,
    ItemStack,
    LootCategory,
    LootReceived,
    TextEvent,
    Tick,
    UsernameChanged,
    VarChange,
    VarKind,
    WidgetLoaded,
)
from osrs_notifier.notifiers.base import DeferredQueue, Notifier, NotifierContext
from osrs_notifier.notifiers.collection import CollectionNotifier
from osrs_notifier.notifiers.death import DeathNotifier
from osrs_notifier.notifiers.diary import DiaryNotifier
from osrs_notifier.notifiers.kill_count import KillCountNotifier
from osrs_notifier.notifiers.loot import LootNotifier
from osrs_notifier.notifiers.quest import QuestNotifier
from osrs_notifier.notifiers.slayer import SlayerNotifier
from osrs_notifier.text_utils import clean_message_text, is_empty_or_whitespace

logger = logging.getLogger(__name__)


class NotifierPlugin:
    """Fans game events out to every notifier.

    Flow: event -> (chat) text normalization -> per-category notifiers
    -> dispatcher. Deferred callbacks queued during a tick run at the start
    of the next one, before any notifier evaluates that tick.
    """

    def __init__(
        self,
        config: NotifierConfig,
        client: GameClient,
        items: ItemManager,
        dispatcher: Dispatcher,
    ) -> None:
        self._ctx = NotifierContext(config=config, client=client, items=items, dispatcher=dispatcher)
        self._lock = threading.Lock()
        self._started = False

        self.kill_count = KillCountNotifier(self._ctx)
        self.diary = DiaryNotifier(self._ctx)
        self.collection = CollectionNotifier(self._ctx)
        self.slayer = SlayerNotifier(self._ctx)
        self.death = DeathNotifier(self._ctx)
        self.quest = QuestNotifier(self._ctx)
        self.loot = LootNotifier(self._ctx)

    @property
    def config(self) -> NotifierConfig:
        return self._ctx.config

    @property
    def deferred(self) -> DeferredQueue:
        return self._ctx.deferred

    @property
    def notifiers(self) -> tuple[Notifier, ...]:
        return (
            self.kill_count,
            self.diary,
            self.collection,
            self.slayer,
            self.death,
            self.quest,
            self.loot,
        )

    def update_config(self, config: NotifierConfig) -> None:
        """Hot-swap settings; notifiers read them on their next event."""
        self._ctx.config = config
        logger.info("Config updated")

    def start_up(self) -> None:
        with self._lock:
            self._started = True
        logger.info("Notifier plugin started")

    def shut_down(self) -> None:
        with self._lock:
            self._started = False
        self.reset_notifiers()
        self._ctx.deferred.clear()
        logger.info("Notifier plugin stopped")

    def reset_notifiers(self) -> None:
        for notifier in self.notifiers:
            notifier.reset()

    # ── Event handlers ──

    def on_username_changed(self) -> None:
        logger.debug("Username changed, resetting notifiers")
        self.reset_notifiers()

    def on_game_state(self, state: GameState) -> None:
        self.collection.on_game_state(state)
        self.diary.on_game_state(state)
        # LOADING happens mid-session (teleports), only a logout drops partial records
        if state == GameState.LOGIN_SCREEN:
            self.kill_count.reset()
            self.slayer.reset()

    def on_tick(self) -> None:
        ran = self._ctx.deferred.drain()
        if ran:
            logger.debug("Ran %d deferred callbacks", ran)
        self.collection.on_tick()
        self.slayer.on_tick()
        self.diary.on_tick()
        self.kill_count.on_tick()

    def on_chat_message(self, category: ChatCategory, raw: str) -> None:
        message = clean_message_text(raw)
        if is_empty_or_whitespace(message):
            return

        if category == ChatCategory.GAME_MESSAGE:
            self.collection.on_chat_message(message)
            self.slayer.on_chat_message(message)
            self.kill_count.on_game_message(message)
        elif category == ChatCategory.FRIENDS_CHAT_NOTIFICATION:
            self.kill_count.on_friends_chat_notification(message)
        elif category == ChatCategory.MESSAGE_BOX:
            self.diary.on_message_box(message)

    def on_var_change(self, kind: VarKind, var_id: int, value: int) -> None:
        if kind == VarKind.VARBIT:
            self.diary.on_varbit_changed(var_id, value)
        else:
            self.collection.on_varp_changed(var_id, value)

    def on_actor_death(self, actor: Actor) -> None:
        self.death.on_actor_death(actor)

    def on_interacting_changed(self, source: Actor, target: Actor | None) -> None:
        self.death.on_interacting_changed(source, target)

    def on_widget_loaded(self, group_id: int, text: str | None = None) -> None:
        self.quest.on_widget_loaded(group_id, text)

    def on_npc_loot(self, npc_name: str, items: tuple[ItemStack, ...]) -> None:
        self.loot.on_npc_loot(npc_name, items)

    def on_player_loot(self, player_name: str, items: tuple[ItemStack, ...]) -> None:
        self.loot.on_player_loot(player_name, items)

    def on_loot_received(self, event: LootReceived) -> None:
        if event.category == LootCategory.NPC:
            self.on_npc_loot(event.source, event.items)
        elif event.category == LootCategory.PLAYER:
            self.on_player_loot(event.source, event.items)
        else:
            self.loot.on_loot_received(event)

    def handle(self, event: object) -> None:
        """Route one event object from the feed."""
        if isinstance(event, Tick):
            self.on_tick()
        elif isinstance(event, TextEvent):
            self.on_chat_message(event.category, event.text)
        elif isinstance(event, VarChange):
            self.on_var_change(event.kind, event.id, event.value)
        elif isinstance(event, GameStateChanged):
            self.on_game_state(event.state)
        elif isinstance(event, UsernameChanged):
            self.on_username_changed()
        elif isinstance(event, WidgetLoaded):
            self.on_widget_loaded(event.group_id, event.text)
        elif isinstance(event, ActorDeath):
            self.on_actor_death(event.actor)
        elif isinstance(event, InteractingChanged):
            self.on_interacting_changed(event.source, event.target)
        elif isinstance(event, LootReceived):
            self.on_loot_received(event)
        else:
            logger.warning("Unhandled event type: %s", type(event).__name__)
