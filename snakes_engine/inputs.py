"""Input events and decoding of the original button / serial controls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from snakes_engine.config import Difficulty


@dataclass(frozen=True)
class MoveOne:
    """Button 0: step the active player forward one cell."""


@dataclass(frozen=True)
class MoveTwo:
    """Button 1: step the active player forward two cells."""


@dataclass(frozen=True)
class ToggleRoll:
    """Button 2 / 'r': start the dice, or stop it and move."""


@dataclass(frozen=True)
class Pause:
    """'p': pause or resume every clock."""


@dataclass(frozen=True)
class DirectionNudge:
    dx: int
    dy: int


@dataclass(frozen=True)
class SessionSelect:
    """Choices made on the selection screen before a session starts."""

    board: int = 1
    difficulty: Difficulty = Difficulty.EASY
    two_player: bool = False


InputEvent = Union[MoveOne, MoveTwo, ToggleRoll, Pause, DirectionNudge, SessionSelect]


# ── Decoding ─────────────────────────────────────────────────────────

KEY_EVENTS: dict[str, InputEvent] = {
    "w": DirectionNudge(0, 1),
    "a": DirectionNudge(-1, 0),
    "s": DirectionNudge(0, -1),
    "d": DirectionNudge(1, 0),
    "r": ToggleRoll(),
    "p": Pause(),
    "1": MoveOne(),
    "2": MoveTwo(),
}

BUTTON_EVENTS: dict[int, InputEvent] = {
    0: MoveOne(),
    1: MoveTwo(),
    2: ToggleRoll(),
}


def decode_key(char: str) -> InputEvent | None:
    """Serial character → event, ignoring case. Unknown keys give None."""
    return KEY_EVENTS.get(char.lower()) if char else None


def decode_button(button: int) -> InputEvent | None:
    return BUTTON_EVENTS.get(button)
