"""osrs-notifier: replay or follow a game event log and emit notifications.

Usage:
    osrs-notifier events.log
    osrs-notifier events.log --output notifications.jsonl
    osrs-notifier events.log --follow --debug
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from osrs_notifier.config import CONFIG_FILE, NotifierConfig
from osrs_notifier.dispatch import Dispatcher, JsonLinesDispatcher, LoggingDispatcher
from osrs_notifier.plugin import NotifierPlugin
from osrs_notifier.replay import EventReplayer, ReplayClient, UnpricedItemManager
from osrs_notifier.watcher import EventLogWatcher

_LOG_FMT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
logger = logging.getLogger(__name__)


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=_LOG_FMT,
        stream=sys.stderr,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="osrs-notifier",
        description="Replay a game event log through the notifiers",
    )
    parser.add_argument("events", type=Path, help="Event log to replay")
    parser.add_argument(
        "--config", default=CONFIG_FILE,
        help=f"Notifier config JSON (default: {CONFIG_FILE})",
    )
    parser.add_argument(
        "--output", type=Path, default=None,
        help="Append notifications to this JSON-lines file instead of logging them",
    )
    parser.add_argument("--player", default="", help="Local player name (overrides config)")
    parser.add_argument(
        "--follow", action="store_true",
        help="Keep following the log as it grows (Ctrl+C to stop)",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser


def _build_dispatcher(output: Path | None) -> Dispatcher:
    if output is None:
        return LoggingDispatcher()
    return JsonLinesDispatcher(output)


def _replay_file(replayer: EventReplayer, path: Path) -> int:
    with open(path, encoding="utf-8", errors="replace") as f:
        return replayer.feed(f)


def _follow(replayer: EventReplayer, path: Path) -> None:
    watcher = EventLogWatcher(path, replayer.feed_line)
    watcher.start(from_start=True)
    try:
        while not watcher.wait(1.0):
            pass
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        watcher.stop()


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _build_parser().parse_args(argv)
    _setup_logging(args.debug)

    config = NotifierConfig.load(args.config).apply_env()
    if args.player:
        config.player_name = args.player

    if not args.follow and not args.events.exists():
        logger.error("Event log not found: %s", args.events)
        return 1

    client = ReplayClient(player_name=config.player_name)
    plugin = NotifierPlugin(config, client, UnpricedItemManager(), _build_dispatcher(args.output))
    replayer = EventReplayer(plugin, client)

    plugin.start_up()
    try:
        if args.follow:
            _follow(replayer, args.events)
        else:
            _replay_file(replayer, args.events)
    except OSError as e:
        logger.error("Cannot read event log %s: %s", args.events, e)
        return 1
    finally:
        plugin.shut_down()

    logger.info("Replayed %d events", replayer.events)
    return 0


if __name__ == "__main__":
    sys.exit(main())
