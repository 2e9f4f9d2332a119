"""Tests for notification dispatchers."""

import json
import logging

from osrs_notifier.dispatch import JsonLinesDispatcher, LoggingDispatcher
from osrs_notifier.message import CollectionNotificationData, NotificationType, build_notification


def _notification(text="Zanik has added Dragon warhammer to their collection"):
    return build_notification(
        NotificationType.COLLECTION,
        text,
        {},
        extra=CollectionNotificationData(
            item_name="Dragon warhammer", item_id=13576, price=40_000_000,
            completed_entries=42, total_entries=120,
        ),
        player_name="Zanik",
    )


class TestJsonLinesDispatcher:
    def test_appends_one_line_per_notification(self, tmp_path):
        path = tmp_path / "out.jsonl"
        dispatcher = JsonLinesDispatcher(path)
        dispatcher.send(_notification(), False, "https://hook")
        dispatcher.send(_notification("second"), True, "https://other")

        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        first = json.loads(lines[0])
        assert first["webhook"] == "https://hook"
        assert first["screenshot"] is False
        assert first["notification"]["type"] == "COLLECTION"
        assert first["notification"]["extra"]["completedEntries"] == 42
        assert json.loads(lines[1])["notification"]["text"] == "second"

    def test_write_error_is_logged(self, tmp_path, caplog):
        dispatcher = JsonLinesDispatcher(tmp_path / "missing-dir" / "out.jsonl")
        with caplog.at_level(logging.WARNING):
            dispatcher.send(_notification(), False, "https://hook")
        assert "Cannot write notification" in caplog.text


class TestLoggingDispatcher:
    def test_logs_text(self, caplog):
        with caplog.at_level(logging.INFO):
            LoggingDispatcher().send(_notification(), False, "https://hook")
        assert "Dragon warhammer" in caplog.text
