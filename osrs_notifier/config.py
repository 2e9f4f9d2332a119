"""Notifier configuration management."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from osrs_notifier.diaries import Difficulty

logger = logging.getLogger(__name__)

CONFIG_FILE = "notifier_config.json"

# Environment overrides (a .env file is honoured by the CLI via python-dotenv)
ENV_WEBHOOK = "OSRS_NOTIFIER_WEBHOOK"
ENV_PLAYER = "OSRS_NOTIFIER_PLAYER"


@dataclass
class NotifierConfig:
    """Notifier settings. Values come from outside; the notifiers only read them."""

    # General
    notifications_enabled: bool = True
    primary_webhook: str = ""
    ignored_names: str = ""  # comma or newline separated
    player_name: str = ""  # used by the replay client

    # Kill count
    notify_kill_count: bool = True
    kill_count_webhook: str = ""
    kill_count_send_image: bool = False
    kill_count_interval: int = 1
    kill_count_notify_initial: bool = True
    kill_count_notify_best_time: bool = True
    kill_count_message: str = "%USERNAME% has defeated %BOSS% with a completion count of %COUNT%"
    kill_count_best_time_message: str = (
        "%USERNAME% has defeated %BOSS% with a new personal best time of %TIME% "
        "and a completion count of %COUNT%"
    )

    # Achievement diary
    notify_achievement_diary: bool = True
    diary_webhook: str = ""
    diary_send_image: bool = False
    min_diary_difficulty: str = "EASY"
    diary_notify_message: str = (
        "%USERNAME% has completed the %DIFFICULTY% %AREA% Achievement Diary, "
        "for a total of %TOTAL% diaries completed"
    )

    # Collection log
    notify_collection_log: bool = True
    collection_webhook: str = ""
    collection_send_image: bool = False
    collection_notify_message: str = "%USERNAME% has added %ITEM% to their collection"

    # Slayer
    notify_slayer: bool = True
    slayer_webhook: str = ""
    slayer_send_image: bool = False
    slayer_point_threshold: int = 0
    slayer_notify_message: str = (
        "%USERNAME% has completed a slayer task: %TASK%, getting %POINTS% points "
        "and making that %TASKCOUNT% tasks completed"
    )

    # Death
    notify_death: bool = True
    death_webhook: str = ""
    death_send_image: bool = False
    death_embed_kept_items: bool = True
    death_ignore_safe: bool = True
    death_min_value: int = 0
    death_notif_pvp_enabled: bool = True
    death_notify_message: str = "%USERNAME% has died..."
    death_notif_pvp_message: str = "%USERNAME% has just been PKed by %PKER% for %VALUELOST% gp..."

    # Quest
    notify_quest: bool = True
    quest_webhook: str = ""
    quest_send_image: bool = False
    quest_notify_message: str = "%USERNAME% has completed a quest: %QUEST%"

    # Loot
    notify_loot: bool = True
    loot_webhook: str = ""
    loot_send_image: bool = False
    loot_icons: bool = False
    min_loot_value: int = 0
    include_player_loot: bool = True
    loot_include_clue_scrolls: bool = True
    loot_notify_message: str = "%USERNAME% has looted: \n\n%LOOT%\nFrom: %SOURCE%"

    @property
    def min_diary(self) -> Difficulty:
        return Difficulty.parse(self.min_diary_difficulty) or Difficulty.EASY

    def ignored_player_names(self) -> set[str]:
        names = self.ignored_names.replace("\n", ",").split(",")
        return {n.strip().lower() for n in names if n.strip()}

    def save(self, path: str = CONFIG_FILE) -> None:
        """Save config to JSON file."""
        Path(path).write_text(
            json.dumps(asdict(self), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    @classmethod
    def load(cls, path: str = CONFIG_FILE) -> NotifierConfig:
        """Load config from JSON file, using defaults for missing fields."""
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (FileNotFoundError, json.JSONDecodeError) as e:
            logger.info("Using default config (%s)", e.__class__.__name__)
            return cls()

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
        defaults = asdict(cls())
        defaults.update({k: v for k, v in data.items() if k in known})
        return cls(**defaults)

    def apply_env(self) -> NotifierConfig:
        """Override selected fields from the environment."""
        webhook = os.getenv(ENV_WEBHOOK)
        if webhook:
            self.primary_webhook = webhook
        player = os.getenv(ENV_PLAYER)
        if player:
            self.player_name = player
        return self
