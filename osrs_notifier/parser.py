"""Regex classifiers for game messages.

Every function here is pure: ``text -> parsed value | None``. A ``None`` result
means the line is not of that kind and must not change any notifier state.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import timedelta

from osrs_notifier.time_utils import parse_time

logger = logging.getLogger(__name__)


# --- Kill count --------------------------------------------------------------

# Your Zulrah kill count is: 5
# Your Barrows chest count is: 120
# Your Gauntlet completion count is: 7
_RE_KC_PRIMARY = re.compile(
    r"Your (?P<key>.+)\s(?P<type>kill|chest|completion)\s?count is: (?P<value>\d+)\b"
)

# Your completed Theatre of Blood: Hard Mode count is: 3
# Your subdued Wintertodt count is: 500
_RE_KC_SECONDARY = re.compile(
    r"Your (?:completed|subdued) (?P<key>.+) count is: (?P<value>\d+)\b"
)

# Fight duration: 1:23.40 (new personal best)
# Congratulations - your raid is complete! ... Duration: 28:31
# You have subdued the Wintertodt! Subdued in 3:05.
_RE_KC_TIME = re.compile(
    r"(?:Duration|time|Subdued in):? (?P<time>[\d:]+(?:\.\d+)?)\.?",
    re.IGNORECASE,
)

_PERSONAL_BEST = "(new personal best)"

_SECONDARY_RAIDS = frozenset({
    "theatre of blood",
    "tombs of amascut",
    "chambers of xeric",
    "chambers of xeric challenge mode",
})

RAID_COMPLETE_PREFIX = "Congratulations - your raid is complete!"


@dataclass(frozen=True, slots=True)
class BossKill:
    boss: str
    count: int


@dataclass(frozen=True, slots=True)
class FightTime:
    duration: timedelta
    personal_best: bool


def _normalize_primary_boss(boss: str, kind: str) -> str | None:
    if kind == "chest":
        return boss if boss.lower() == "barrows" else None
    if kind == "completion":
        if boss.lower() == "gauntlet":
            return "Crystalline Hunllef"
        if boss.lower() == "corrupted gauntlet":
            return "Corrupted Hunllef"
        return None
    if kind == "kill":
        return boss
    return None


def _normalize_secondary_boss(boss: str) -> str | None:
    if boss.lower() == "wintertodt":
        return boss
    # "Theatre of Blood: Hard Mode" -> check "Theatre of Blood", keep full name
    separator = boss.rfind(":")
    raid = boss[:separator] if separator > 0 else boss
    if raid.lower() in _SECONDARY_RAIDS:
        return boss
    return None


def _to_kill(boss: str | None, count: str) -> BossKill | None:
    if boss is None:
        return None
    try:
        return BossKill(boss=boss, count=int(count))
    except ValueError:
        logger.debug("Failed to parse kill count [%s] for boss [%s]", count, boss)
        return None


def parse_boss(message: str) -> BossKill | None:
    """Extract boss name and count from a kill/chest/completion count line."""
    m = _RE_KC_PRIMARY.search(message)
    if m:
        boss = _normalize_primary_boss(m.group("key"), m.group("type"))
        return _to_kill(boss, m.group("value"))

    m = _RE_KC_SECONDARY.search(message)
    if m:
        return _to_kill(_normalize_secondary_boss(m.group("key")), m.group("value"))

    return None


def parse_fight_time(message: str) -> FightTime | None:
    """Extract a fight/raid duration and the personal-best marker."""
    m = _RE_KC_TIME.search(message)
    if not m:
        return None
    duration = parse_time(m.group("time"))
    if duration is None:
        return None
    return FightTime(
        duration=duration,
        personal_best=_PERSONAL_BEST in message.lower(),
    )


# --- Achievement diary --------------------------------------------------------

_RE_DIARY_COMPLETION = re.compile(
    r"Congratulations! You have completed all of the (?P<difficulty>.+) tasks "
    r"in the (?P<area>.+) area"
)


@dataclass(frozen=True, slots=True)
class DiaryCompletion:
    difficulty: str
    area: str


def parse_diary_completion(message: str) -> DiaryCompletion | None:
    m = _RE_DIARY_COMPLETION.search(message)
    if not m:
        return None
    return DiaryCompletion(difficulty=m.group("difficulty"), area=m.group("area").strip())


# --- Collection log -----------------------------------------------------------

_RE_COLLECTION_LOG = re.compile(r"New item added to your collection log: (?P<item>.*)")


def parse_collection_item(message: str) -> str | None:
    m = _RE_COLLECTION_LOG.search(message)
    return m.group("item") if m else None


# --- Slayer -------------------------------------------------------------------

_RE_SLAYER_BOSS = re.compile(
    r"You are granted .+ Slayer XP for completing your boss task against"
    r"(?: the)? (?P<name>.+)\.$"
)

_RE_SLAYER_TASK = re.compile(
    r"You have completed your task! You killed (?P<task>[\d,]+ [^.]+)\..*"
)

# Three mutually exclusive endings: points received, no points from this
# master, or points capped at the maximum.
_RE_SLAYER_COMPLETE = re.compile(
    r"You've completed (?:at least )?(?P<task_count>[\d,]+) (?:Wilderness )?tasks?"
    r"(?: and received (?P<points>[\d,]+) points, giving you a total of [\d,]+"
    r"|\.You'll be eligible to earn reward points if you complete tasks"
    r" from a more advanced Slayer Master\."
    r"| and reached the maximum amount of Slayer points \((?P<points_max>[\d,]+)\))?"
)

_BOSS_SUFFIX = " boss"


@dataclass(frozen=True, slots=True)
class SlayerCompletion:
    task_count: str
    points: str


def parse_slayer_boss(message: str) -> str | None:
    """Name of the boss from a boss-task XP line, without a trailing " boss"."""
    m = _RE_SLAYER_BOSS.search(message)
    if not m:
        return None
    name = m.group("name")
    if name.endswith(_BOSS_SUFFIX):
        name = name[: -len(_BOSS_SUFFIX)]
    return name


def parse_slayer_task(message: str) -> str | None:
    m = _RE_SLAYER_TASK.search(message)
    return m.group("task") if m else None


def parse_slayer_completion(message: str) -> SlayerCompletion | None:
    m = _RE_SLAYER_COMPLETE.search(message)
    if not m:
        return None
    points = m.group("points") or m.group("points_max") or "0"
    return SlayerCompletion(task_count=m.group("task_count"), points=points)


def parse_number(text: str) -> int | None:
    """Parse a game-formatted integer such as ``1,234``."""
    try:
        return int(text.replace(",", ""))
    except ValueError:
        logger.debug("Failed to parse number: %r", text)
        return None


# --- Quest --------------------------------------------------------------------

# You have completed Cook's Assistant!
# You have completed the Restless Ghost Quest!
# You have successfully completed the 'Fairytale I - Growing Pains' quest!
_RE_QUEST = re.compile(
    r"^You(?: have|'ve) (?:successfully )?(?:completed|helped|rebuilt|been)\s+"
    r"(?:the )?'?(?P<quest>.+?)'?(?: [Qq]uest)?[!.]?$"
)


def parse_quest_widget(text: str) -> str | None:
    """Quest name from the quest-completed widget title."""
    m = _RE_QUEST.match(text.strip())
    if not m:
        return None
    quest = m.group("quest").strip()
    return quest or None
