"""Parsing and formatting of in-game fight durations."""

from __future__ import annotations

import logging
from datetime import timedelta

logger = logging.getLogger(__name__)


def parse_time(text: str) -> timedelta | None:
    """Parse ``[h:]m:ss[.SS]`` (or bare seconds) into a timedelta.

    Returns None if any component is not numeric.
    """
    parts = text.strip().rstrip(".").split(":")
    try:
        seconds = float(parts[-1])
        minutes = int(parts[-2]) if len(parts) > 1 else 0
        hours = int(parts[-3]) if len(parts) > 2 else 0
    except ValueError:
        logger.debug("Failed to parse duration: %r", text)
        return None
    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def format_duration(duration: timedelta | None, precise: bool = False) -> str:
    """Format like the game does: ``1:23`` or ``1:23.40`` (precise), hours when needed."""
    if duration is None:
        return "N/A"

    centis = round(duration.total_seconds() * 100)
    hours, rem = divmod(centis, 360_000)
    minutes, rem = divmod(rem, 6_000)
    seconds, centis = divmod(rem, 100)

    if hours:
        result = f"{hours}:{minutes:02d}:{seconds:02d}"
    else:
        result = f"{minutes}:{seconds:02d}"
    if precise:
        result += f".{centis:02d}"
    return result
