"""Kill count notifier: joins a "boss + count" line with a "duration" line.

The two lines arrive in either order, sometimes on different ticks. Partial
records are merged without ever losing a known field; once a boss name is
known the notification goes out at tick end, with or without a duration.
"""

from __future__ import annotations

import logging

from osrs_notifier.atomics import AtomicInteger, AtomicReference
from osrs_notifier.client import is_precise_timing
from osrs_notifier.message import (
    BossNotificationData,
    NotificationType,
    build_notification,
    npc_image_url,
)
from osrs_notifier.notifiers.base import NotifierContext
from osrs_notifier.parser import RAID_COMPLETE_PREFIX, parse_boss, parse_fight_time
from osrs_notifier.time_utils import format_duration

logger = logging.getLogger(__name__)

# Ticks to hold a duration while waiting for the boss name. Not applied the
# other way round: a boss name alone is emitted at the end of its tick.
MAX_BAD_TICKS = 10


def parse(message: str) -> BossNotificationData | None:
    kill = parse_boss(message)
    if kill is not None:
        return BossNotificationData(boss=kill.boss, count=kill.count, game_message=message)
    fight = parse_fight_time(message)
    if fight is not None:
        return BossNotificationData(time=fight.duration, personal_best=fight.personal_best)
    return None


class KillCountNotifier:
    def __init__(self, ctx: NotifierContext) -> None:
        self._ctx = ctx
        self._data: AtomicReference[BossNotificationData | None] = AtomicReference(None)
        self._bad_ticks = AtomicInteger()

    @property
    def webhook(self) -> str:
        return self._ctx.config.kill_count_webhook

    def enabled(self) -> bool:
        return self._ctx.config.notify_kill_count and self._ctx.base_enabled(self.webhook)

    def reset(self) -> None:
        self._data.set(None)
        self._bad_ticks.set(0)

    @property
    def pending(self) -> BossNotificationData | None:
        return self._data.get()

    def on_game_message(self, message: str) -> None:
        if not self.enabled():
            return
        update = parse(message)
        if update is not None:
            self._update(update)

    def on_friends_chat_notification(self, message: str) -> None:
        # Chambers of Xeric reports its duration through the friends chat channel
        if message.startswith(RAID_COMPLETE_PREFIX):
            self.on_game_message(message)

    def on_tick(self) -> None:
        data = self._data.get()
        if data is None:
            return
        if data.boss is not None:
            self._handle_kill(data)
            self.reset()
        elif self._bad_ticks.increment_and_get() > MAX_BAD_TICKS:
            logger.debug("Dropping fight duration without a boss name: %s", data.time)
            self.reset()

    def _update(self, update: BossNotificationData) -> None:
        self._data.update_and_get(lambda old: update if old is None else old.merge(update))

    def _check_interval(self, count: int, personal_best: bool | None) -> bool:
        config = self._ctx.config
        if personal_best and config.kill_count_notify_best_time:
            return True
        if count == 1 and config.kill_count_notify_initial:
            return True
        interval = config.kill_count_interval
        return interval <= 1 or count % interval == 0

    def _handle_kill(self, data: BossNotificationData) -> None:
        if data.boss is None or data.count is None:
            return
        if not self._check_interval(data.count, data.personal_best):
            logger.debug("Skipping %s kill %d outside of interval", data.boss, data.count)
            return

        config = self._ctx.config
        client = self._ctx.client
        is_pb = data.personal_best is True
        player = self._ctx.player_name()
        template = config.kill_count_best_time_message if is_pb else config.kill_count_message

        screenshot = config.kill_count_send_image
        embeds: tuple[str, ...] = ()
        if not screenshot:
            boss = data.boss.lower()
            npc = next(
                (n for n in client.get_cached_npcs() if n.name and n.name.lower() == boss),
                None,
            )
            if npc is not None:
                embeds = (npc_image_url(npc.id),)

        notification = build_notification(
            NotificationType.KILL_COUNT,
            template,
            {
                "%USERNAME%": player,
                "%BOSS%": data.boss,
                "%COUNT%": str(data.count),
                "%TIME%": format_duration(data.time, is_precise_timing(client)),
            },
            extra=data,
            player_name=player,
            embeds=embeds,
        )
        self._ctx.create_message(self.webhook, screenshot, notification)
