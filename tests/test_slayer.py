"""Tests for the slayer task notifier."""

import pytest

from osrs_notifier.notifiers.slayer import SlayerNotifier

TASK_LINE = "You have completed your task! You killed 130 Hillfiends. You gained 4,550 xp."
POINTS_LINE = "You've completed 50 tasks and received 15 points, giving you a total of 215"
BOSS_LINE = "You are granted 5,000 Slayer XP for completing your boss task against the Kraken boss."


@pytest.fixture
def notifier(ctx):
    return SlayerNotifier(ctx)


class TestSlayerTask:
    def test_task_and_points(self, notifier, config, dispatcher):
        config.slayer_point_threshold = 10
        notifier.on_chat_message(TASK_LINE)
        notifier.on_chat_message(POINTS_LINE)

        assert dispatcher.texts == [
            "Zanik has completed a slayer task: 130 Hillfiends, getting 15 points "
            "and making that 50 tasks completed"
        ]
        extra = dispatcher.notifications[0].extra
        assert extra.slayer_task == "130 Hillfiends"
        assert extra.slayer_completed == "50"
        assert extra.slayer_points == "15"
        assert notifier.pending_task == ""

    def test_points_on_next_tick(self, notifier, dispatcher):
        notifier.on_chat_message(TASK_LINE)
        notifier.on_tick()
        notifier.on_chat_message(POINTS_LINE)
        assert len(dispatcher.sent) == 1

    def test_boss_task_spliced(self, notifier, dispatcher):
        notifier.on_chat_message(BOSS_LINE)
        assert notifier.pending_task == "Kraken"
        notifier.on_chat_message("You have completed your task! You killed 5 bosses. You gained 1,200 xp.")
        assert notifier.pending_task == "5 Kraken"
        notifier.on_chat_message(POINTS_LINE)
        assert dispatcher.notifications[0].extra.slayer_task == "5 Kraken"

    def test_below_threshold(self, notifier, config, dispatcher):
        config.slayer_point_threshold = 20
        notifier.on_chat_message(TASK_LINE)
        notifier.on_chat_message(POINTS_LINE)
        assert dispatcher.sent == []
        assert notifier.pending_task == ""

    def test_no_points_master(self, notifier, dispatcher):
        notifier.on_chat_message(TASK_LINE)
        notifier.on_chat_message(
            "You've completed 3 tasks.You'll be eligible to earn reward points if you "
            "complete tasks from a more advanced Slayer Master."
        )
        assert dispatcher.notifications[0].extra.slayer_points == "0"

    def test_points_without_task_ignored(self, notifier, dispatcher):
        notifier.on_chat_message(POINTS_LINE)
        assert dispatcher.sent == []

    def test_partial_task_dropped(self, notifier, dispatcher):
        notifier.on_chat_message(TASK_LINE)
        notifier.on_tick()
        assert notifier.pending_task == "130 Hillfiends"
        notifier.on_tick()
        assert notifier.pending_task == ""

        notifier.on_chat_message(POINTS_LINE)
        assert dispatcher.sent == []

    def test_disabled(self, notifier, config):
        config.notify_slayer = False
        notifier.on_chat_message(TASK_LINE)
        assert notifier.pending_task == ""
