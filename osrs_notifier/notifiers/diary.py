"""Achievement diary notifier.

Completions are reported twice: by a varbit increasing and by a message box.
Either source may come first; a short cooldown after each emission swallows
the second one. Progress is seeded a few ticks after login, once the client
has populated the diary varbits. Any decrease in a tracked value means the
map is out of sync, and the whole map is thrown away.
"""

from __future__ import annotations

import logging
import threading

from osrs_notifier.atomics import AtomicInteger
from osrs_notifier.client import is_logged_in
from osrs_notifier.diaries import DIARIES, Difficulty, completed_value, is_complete
from osrs_notifier.events import GameState
from osrs_notifier.message import DiaryNotificationData, NotificationType, build_notification
from osrs_notifier.notifiers.base import NotifierContext
from osrs_notifier.parser import parse_diary_completion
from osrs_notifier.text_utils import contains_either

logger = logging.getLogger(__name__)

INIT_DELAY_TICKS = 4
COOLDOWN_TICKS = 2


class DiaryNotifier:
    def __init__(self, ctx: NotifierContext) -> None:
        self._ctx = ctx
        self._progress: dict[int, int] = {}
        self._lock = threading.Lock()
        self._init_delay_ticks = AtomicInteger()
        self._cooldown_ticks = AtomicInteger()

    @property
    def webhook(self) -> str:
        return self._ctx.config.diary_webhook

    def enabled(self) -> bool:
        return self._ctx.config.notify_achievement_diary and self._ctx.base_enabled(self.webhook)

    def reset(self) -> None:
        with self._lock:
            self._progress.clear()
        self._init_delay_ticks.set(0)
        self._cooldown_ticks.set(0)

    def progress(self) -> dict[int, int]:
        with self._lock:
            return dict(self._progress)

    def on_game_state(self, state: GameState) -> None:
        if state != GameState.LOGGED_IN:
            self.reset()

    def on_tick(self) -> None:
        if not is_logged_in(self._ctx.client):
            return

        self._cooldown_ticks.decrement_floor()
        ticks = self._init_delay_ticks.decrement_floor()
        if ticks > 0:
            if ticks == 1:
                self._init_completed()
        elif len(self.progress()) < len(DIARIES) and self._ctx.base_enabled(self.webhook):
            self._init_delay_ticks.set(INIT_DELAY_TICKS)

    def on_message_box(self, message: str) -> None:
        if not self.enabled():
            return

        completion = parse_diary_completion(message)
        if completion is None:
            return

        difficulty = Difficulty.parse(completion.difficulty)
        if difficulty is None:
            logger.warning("Failed to match diary difficulty: %s", completion.difficulty)
            return

        found = next(
            (
                (varbit_id, area)
                for varbit_id, (area, diff) in DIARIES.items()
                if diff is difficulty and contains_either(area, completion.area)
            ),
            None,
        )
        if found is None:
            logger.warning("Failed to match diary area: %s", completion.area)
            return

        varbit_id, area = found
        with self._lock:
            self._progress[varbit_id] = completed_value(varbit_id)
        self._handle(area, difficulty)

    def on_varbit_changed(self, varbit_id: int, value: int) -> None:
        if varbit_id < 0:
            return
        diary = DIARIES.get(varbit_id)
        if diary is None:
            return
        if not self._ctx.base_enabled(self.webhook):
            return
        area, difficulty = diary

        with self._lock:
            if not self._progress:
                seeded = False
                previous = None
            else:
                seeded = True
                previous = self._progress.get(varbit_id)
                if previous is not None and value > previous:
                    self._progress[varbit_id] = value

        if not seeded:
            if is_logged_in(self._ctx.client) and is_complete(varbit_id, value):
                logger.info(
                    "Skipping %s %s diary completion that occurred before map initialization",
                    difficulty, area,
                )
            return

        if previous is None:
            logger.warning(
                "Resetting since %s %s diary was not initialized with a valid value; "
                "received new value of %d", difficulty, area, value,
            )
            self.reset()
        elif value < previous:
            logger.info(
                "Resetting since it appears %s %s diary has lost progress from %d; "
                "received new value of %d", difficulty, area, previous, value,
            )
            self.reset()
        elif value > previous:
            if not is_complete(varbit_id, value):
                # Karamja tiers pass through 1 (started) before 2 (completed)
                logger.info(
                    "Skipping %s %s diary start (not a completion with value %d)",
                    difficulty, area, value,
                )
            elif self._check_difficulty(difficulty):
                self._handle(area, difficulty)
            else:
                logger.debug("Skipping %s %s diary due to low difficulty", difficulty, area)

    def _check_difficulty(self, difficulty: Difficulty) -> bool:
        config = self._ctx.config
        return config.notify_achievement_diary and difficulty.value >= config.min_diary.value

    def _total_completed(self) -> int:
        return sum(1 for varbit_id, value in self.progress().items() if is_complete(varbit_id, value))

    def _init_completed(self) -> None:
        if not self._ctx.base_enabled(self.webhook):
            return
        client = self._ctx.client
        values = {varbit_id: client.get_varbit_value(varbit_id) for varbit_id in DIARIES}
        with self._lock:
            self._progress.update({k: v for k, v in values.items() if v >= 0})
            size = len(self._progress)
        logger.debug(
            "Finished initializing current diary completions: %d out of %d",
            self._total_completed(), size,
        )

    def _handle(self, area: str, difficulty: Difficulty) -> None:
        if self._cooldown_ticks.get_and_set(COOLDOWN_TICKS) > 0:
            logger.debug("Skipping diary completion during cooldown: %s %s", difficulty, area)
            return

        total = self._total_completed()
        player = self._ctx.player_name()
        notification = build_notification(
            NotificationType.ACHIEVEMENT_DIARY,
            self._ctx.config.diary_notify_message,
            {
                "%USERNAME%": player,
                "%DIFFICULTY%": str(difficulty),
                "%AREA%": area,
                "%TOTAL%": str(total),
            },
            extra=DiaryNotificationData(area=area, difficulty=difficulty, total=total),
            player_name=player,
        )
        self._ctx.create_message(self.webhook, self._ctx.config.diary_send_image, notification)
