"""Grid constants, cadences and difficulty presets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

WIDTH = 8
HEIGHT = 16

# ── Cadences (ms) ────────────────────────────────────────────────────

DICE_SAMPLE_MS = 100
TIMER_TICK_MS = 100
FLASH_PERIOD_MS = 500
TIMEOUT_THRESHOLD_MS = 100


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def budget_ms(self) -> int | None:
        """Starting turn-clock budget; ``None`` means the clock never runs out."""
        return DIFFICULTY_BUDGETS[self]


DIFFICULTY_BUDGETS: dict[Difficulty, int | None] = {
    Difficulty.EASY: None,
    Difficulty.MEDIUM: 90_000,
    Difficulty.HARD: 45_000,
}


@dataclass(frozen=True)
class SessionConfig:
    """Everything picked on the pre-game selection screen."""

    board: int = 1
    difficulty: Difficulty = Difficulty.EASY
    two_player: bool = False
    seed: int | None = None

    @property
    def player_count(self) -> int:
        return 2 if self.two_player else 1
