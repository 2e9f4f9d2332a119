"""Text utilities for handling game chat edge cases."""

from __future__ import annotations

import re

# Client markup: <col=ff0000>, </col>, <img=2>, <lt>/<gt> escapes, etc.
_RE_TAGS = re.compile(r"<[^>]*>")

_RE_LINE_BREAK = re.compile(r"<br\s*/?>", re.IGNORECASE)

_NBSP = "\u00a0"


def remove_tags(text: str) -> str:
    """Strip client markup tags, keeping the visible text."""
    return _RE_TAGS.sub("", text)


def clean_message_text(text: str) -> str:
    """Normalize a raw chat line: line breaks, tags, non-breaking spaces, padding."""
    cleaned = _RE_LINE_BREAK.sub("\n", text)
    cleaned = remove_tags(cleaned)
    return cleaned.replace(_NBSP, " ").strip()


def is_empty_or_whitespace(text: str | None) -> bool:
    """Check if text is empty or whitespace-only."""
    return not text or not text.strip()


def contains_either(a: str, b: str) -> bool:
    """Case-insensitive containment in either direction."""
    left, right = a.lower(), b.lower()
    return left in right or right in left


def format_quantity(value: int) -> str:
    """Format a coin value the way stack sizes are shown: 999, 1.5K, 12M, 2.1B."""
    sign = "-" if value < 0 else ""
    n = abs(value)
    if n < 1_000:
        return f"{sign}{n}"
    for divisor, suffix in ((1_000_000_000, "B"), (1_000_000, "M"), (1_000, "K")):
        if n >= divisor:
            scaled = n / divisor
            text = f"{scaled:.1f}" if scaled < 100 else f"{scaled:.0f}"
            if text.endswith(".0"):
                text = text[:-2]
            return f"{sign}{text}{suffix}"
    return f"{sign}{n}"
