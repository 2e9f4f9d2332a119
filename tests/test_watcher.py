"""Tests for the polling event-log follower."""

import pytest

from osrs_notifier.watcher import EventLogWatcher


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "events.log"


class TestPoll:
    def test_reads_new_lines(self, log_path):
        log_path.write_text("TICK\n\nVARBIT|4458|1\n", encoding="utf-8")
        lines = []
        watcher = EventLogWatcher(log_path, lines.append)
        assert watcher.poll() == 2
        assert lines == ["TICK", "VARBIT|4458|1"]

    def test_only_new_content(self, log_path):
        log_path.write_text("TICK\n", encoding="utf-8")
        lines = []
        watcher = EventLogWatcher(log_path, lines.append)
        watcher.poll()
        with open(log_path, "a", encoding="utf-8") as f:
            f.write("VARP|2943|41\n")
        watcher.poll()
        assert lines == ["TICK", "VARP|2943|41"]

    def test_partial_line_held_back(self, log_path):
        log_path.write_text("TICK\nCHAT|GAMEMESSAGE|Your Zul", encoding="utf-8")
        lines = []
        watcher = EventLogWatcher(log_path, lines.append)
        watcher.poll()
        assert lines == ["TICK"]

        with open(log_path, "a", encoding="utf-8") as f:
            f.write("rah kill count is: 5.\n")
        watcher.poll()
        assert lines == ["TICK", "CHAT|GAMEMESSAGE|Your Zulrah kill count is: 5."]

    def test_truncation_resets_position(self, log_path):
        log_path.write_text("TICK\nTICK\nTICK\n", encoding="utf-8")
        lines = []
        watcher = EventLogWatcher(log_path, lines.append)
        watcher.poll()
        log_path.write_text("NAME|Zezima\n", encoding="utf-8")
        watcher.poll()
        assert lines[-1] == "NAME|Zezima"

    def test_missing_file(self, log_path):
        watcher = EventLogWatcher(log_path, lambda line: None)
        assert watcher.poll() == 0

    def test_non_ascii(self, log_path):
        log_path.write_text("NAME|Ünïcode\nTICK\n", encoding="utf-8")
        lines = []
        watcher = EventLogWatcher(log_path, lines.append)
        watcher.poll()
        assert lines == ["NAME|Ünïcode", "TICK"]
        assert watcher.position == log_path.stat().st_size


class TestThread:
    def test_start_skips_existing_content(self, log_path):
        log_path.write_text("TICK\n", encoding="utf-8")
        watcher = EventLogWatcher(log_path, lambda line: None, poll_interval=0.01)
        watcher.start()
        try:
            assert watcher.position == log_path.stat().st_size
        finally:
            watcher.stop()
        assert watcher.wait(0)
