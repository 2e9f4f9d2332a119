"""Quest completion notifier."""

from __future__ import annotations

import logging

from osrs_notifier.message import NotificationType, QuestNotificationData, build_notification
from osrs_notifier.notifiers.base import NotifierContext
from osrs_notifier.parser import parse_quest_widget

logger = logging.getLogger(__name__)

QUEST_COMPLETED_GROUP_ID = 153

COMPLETED_QUESTS_VARBIT = 6347
TOTAL_QUESTS_VARBIT = 11877
QUEST_POINTS_VARP = 101
TOTAL_QUEST_POINTS_VARBIT = 1782


def _valid_pair(current: int, total: int) -> tuple[int | None, int | None]:
    if current > 0 and total > 0:
        return current, total
    return None, None


class QuestNotifier:
    def __init__(self, ctx: NotifierContext) -> None:
        self._ctx = ctx

    @property
    def webhook(self) -> str:
        return self._ctx.config.quest_webhook

    def enabled(self) -> bool:
        return self._ctx.config.notify_quest and self._ctx.base_enabled(self.webhook)

    def reset(self) -> None:
        pass

    def on_widget_loaded(self, group_id: int, text: str | None) -> None:
        if group_id != QUEST_COMPLETED_GROUP_ID or not self.enabled():
            return
        if text is None:
            return
        # Quest varbits are only updated once the widget has been processed
        self._ctx.deferred.invoke_later(lambda: self._handle_notify(text))

    def _handle_notify(self, quest_text: str) -> None:
        quest = parse_quest_widget(quest_text)
        if quest is None:
            logger.warning("Failed to parse quest completion: %s", quest_text)
            return

        client = self._ctx.client
        completed, total = _valid_pair(
            client.get_varbit_value(COMPLETED_QUESTS_VARBIT),
            client.get_varbit_value(TOTAL_QUESTS_VARBIT),
        )
        points, total_points = _valid_pair(
            client.get_varp_value(QUEST_POINTS_VARP),
            client.get_varbit_value(TOTAL_QUEST_POINTS_VARBIT),
        )

        player = self._ctx.player_name()
        notification = build_notification(
            NotificationType.QUEST,
            self._ctx.config.quest_notify_message,
            {"%USERNAME%": player, "%QUEST%": quest},
            extra=QuestNotificationData(
                quest_name=quest,
                completed_quests=completed,
                total_quests=total,
                quest_points=points,
                total_quest_points=total_points,
            ),
            player_name=player,
        )
        self._ctx.create_message(self.webhook, self._ctx.config.quest_send_image, notification)
