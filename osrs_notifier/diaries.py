"""Achievement diary varbits: one per (area, difficulty) tier."""

from __future__ import annotations

from enum import Enum


class Difficulty(Enum):
    EASY = 0
    MEDIUM = 1
    HARD = 2
    ELITE = 3

    def __str__(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, text: str) -> Difficulty | None:
        try:
            return cls[text.strip().upper()]
        except KeyError:
            return None


_E, _M, _H, _X = Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD, Difficulty.ELITE

# varbit id -> (area, difficulty)
DIARIES: dict[int, tuple[str, Difficulty]] = {
    4458: ("Ardougne", _E), 4459: ("Ardougne", _M), 4460: ("Ardougne", _H), 4461: ("Ardougne", _X),
    4483: ("Desert", _E), 4484: ("Desert", _M), 4485: ("Desert", _H), 4486: ("Desert", _X),
    4462: ("Falador", _E), 4463: ("Falador", _M), 4464: ("Falador", _H), 4465: ("Falador", _X),
    4491: ("Fremennik", _E), 4492: ("Fremennik", _M), 4493: ("Fremennik", _H), 4494: ("Fremennik", _X),
    4475: ("Kandarin", _E), 4476: ("Kandarin", _M), 4477: ("Kandarin", _H), 4478: ("Kandarin", _X),
    3578: ("Karamja", _E), 3599: ("Karamja", _M), 3611: ("Karamja", _H), 4566: ("Karamja", _X),
    7925: ("Kourend & Kebos", _E), 7926: ("Kourend & Kebos", _M),
    7927: ("Kourend & Kebos", _H), 7928: ("Kourend & Kebos", _X),
    4495: ("Lumbridge & Draynor", _E), 4496: ("Lumbridge & Draynor", _M),
    4497: ("Lumbridge & Draynor", _H), 4498: ("Lumbridge & Draynor", _X),
    4487: ("Morytania", _E), 4488: ("Morytania", _M), 4489: ("Morytania", _H), 4490: ("Morytania", _X),
    4479: ("Varrock", _E), 4480: ("Varrock", _M), 4481: ("Varrock", _H), 4482: ("Varrock", _X),
    4471: ("Western Provinces", _E), 4472: ("Western Provinces", _M),
    4473: ("Western Provinces", _H), 4474: ("Western Provinces", _X),
    4466: ("Wilderness", _E), 4467: ("Wilderness", _M), 4468: ("Wilderness", _H), 4469: ("Wilderness", _X),
}

# Karamja easy/medium/hard: 0 = not started, 1 = started, 2 = completed.
# Every other tier: 0 = not started, 1 = completed.
KARAMJA_THREE_STATE_IDS = frozenset({3578, 3599, 3611})


def is_complete(varbit_id: int, value: int) -> bool:
    if varbit_id in KARAMJA_THREE_STATE_IDS:
        return value > 1
    return value > 0


def completed_value(varbit_id: int) -> int:
    """The smallest value for which :func:`is_complete` holds."""
    return 2 if varbit_id in KARAMJA_THREE_STATE_IDS else 1
