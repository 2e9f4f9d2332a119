"""Slayer task notifier.

A task completion is spread over up to three game messages: an optional
boss-task XP line, the "You have completed your task!" line and the points
line. The task label accretes until the points line finalizes it; if the
points never arrive the partial task is dropped after a couple of ticks.
"""

from __future__ import annotations

import logging

from osrs_notifier.atomics import AtomicInteger, AtomicReference
from osrs_notifier.message import NotificationType, SlayerNotificationData, build_notification
from osrs_notifier.notifiers.base import NotifierContext
from osrs_notifier.parser import (
    parse_number,
    parse_slayer_boss,
    parse_slayer_completion,
    parse_slayer_task,
)

logger = logging.getLogger(__name__)

# A partial task is dropped on the second tick it is still pending
BAD_TICK_LIMIT = 2


def _splice_task(pending: str, task: str) -> str:
    """``"5 bosses"`` + pending ``"Kraken"`` -> ``"5 Kraken"``."""
    if not pending:
        return task
    return f"{task.split(' ', 1)[0]} {pending}"


class SlayerNotifier:
    def __init__(self, ctx: NotifierContext) -> None:
        self._ctx = ctx
        self._task: AtomicReference[str] = AtomicReference("")
        self._bad_ticks = AtomicInteger()

    @property
    def webhook(self) -> str:
        return self._ctx.config.slayer_webhook

    @property
    def pending_task(self) -> str:
        return self._task.get()

    def enabled(self) -> bool:
        return self._ctx.config.notify_slayer and self._ctx.base_enabled(self.webhook)

    def reset(self) -> None:
        self._task.set("")
        self._bad_ticks.set(0)

    def on_chat_message(self, message: str) -> None:
        if not self.enabled():
            return

        if not self._task.get():
            boss = parse_slayer_boss(message)
            if boss is not None:
                self._task.compare_and_set("", boss)
                return

        task = parse_slayer_task(message)
        if task is not None:
            self._task.update_and_get(lambda old: _splice_task(old, task))
            return

        if not self._task.get():
            return

        completion = parse_slayer_completion(message)
        if completion is not None:
            self._handle_notify(completion.points, completion.task_count)

    def on_tick(self) -> None:
        # Count ticks spent holding only part of a task
        if self._task.get():
            self._bad_ticks.increment_and_get()
        if self._bad_ticks.get() >= BAD_TICK_LIMIT:
            logger.debug("Dropping incomplete slayer task: %r", self._task.get())
            self.reset()

    def _handle_notify(self, points: str, task_count: str) -> None:
        task = self._task.get()
        if not task or not points or not task_count:
            return

        threshold = self._ctx.config.slayer_point_threshold
        point_value = parse_number(points)
        if point_value is None:
            self.reset()
            return

        if threshold <= 0 or point_value >= threshold:
            player = self._ctx.player_name()
            notification = build_notification(
                NotificationType.SLAYER,
                self._ctx.config.slayer_notify_message,
                {
                    "%USERNAME%": player,
                    "%TASK%": task,
                    "%TASKCOUNT%": task_count,
                    "%POINTS%": points,
                },
                extra=SlayerNotificationData(
                    slayer_task=task,
                    slayer_completed=task_count,
                    slayer_points=points,
                ),
                player_name=player,
            )
            self._ctx.create_message(self.webhook, self._ctx.config.slayer_send_image, notification)
        else:
            logger.debug("Skipping slayer task worth %d points (threshold %d)", point_value, threshold)

        self.reset()
