"""Clock-driven behaviours: dice sampling, turn clocks and cursor flashing.

Nothing here sleeps. Each behaviour keeps its own baseline timestamp and
fires when ``now_ms - baseline`` reaches its period, so several cadences
can share one loop tick. After a pause every baseline is re-anchored to
the resume time.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Iterable, Protocol

from snakes_engine.config import (
    DICE_SAMPLE_MS,
    FLASH_PERIOD_MS,
    TIMEOUT_THRESHOLD_MS,
    TIMER_TICK_MS,
)
from snakes_engine.movement import PlayerState

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


# ── Dice ─────────────────────────────────────────────────────────────

@dataclass
class DiceRoll:
    """Idle/Rolling dice.

    While rolling a fresh candidate is drawn every ``DICE_SAMPLE_MS``; the
    second toggle commits whichever candidate is showing.
    """

    rng: RandomSource = field(default_factory=random.Random, repr=False)
    value: int = 0
    candidate: int = 0
    rolling: bool = False
    last_sample_ms: int = 0

    def start(self, now_ms: int) -> None:
        self.rolling = True
        self._sample(now_ms)
        logger.debug("dice rolling at %d ms", now_ms)

    def stop(self) -> int:
        self.rolling = False
        self.value = self.candidate
        logger.debug("dice stopped on %d", self.value)
        return self.value

    def poll(self, now_ms: int) -> bool:
        """Draw a new candidate if the sample period has elapsed."""
        if not self.rolling or now_ms - self.last_sample_ms < DICE_SAMPLE_MS:
            return False
        self._sample(now_ms)
        return True

    def reanchor(self, now_ms: int) -> None:
        self.last_sample_ms = now_ms

    def _sample(self, now_ms: int) -> None:
        self.candidate = self.rng.randint(1, 6)
        self.last_sample_ms = now_ms


# ── Turn clock ───────────────────────────────────────────────────────

@dataclass
class TurnClock:
    """Countdown budgets, one per player in two-player mode.

    A ``None`` budget is unlimited. Only the active player's budget runs.
    """

    budgets: list[int | None] = field(default_factory=lambda: [None])
    last_tick_ms: int = 0

    @classmethod
    def for_players(cls, budget_ms: int | None, players: int, now_ms: int = 0) -> TurnClock:
        return cls(budgets=[budget_ms] * players, last_tick_ms=now_ms)

    def remaining(self, player_id: int) -> int | None:
        return self.budgets[self._slot(player_id)]

    def expired(self, player_id: int) -> bool:
        left = self.remaining(player_id)
        return left is not None and left < TIMEOUT_THRESHOLD_MS

    def poll(self, now_ms: int, active_id: int) -> bool:
        """Charge elapsed ticks to *active_id*; True once its budget has run out.

        Whole ticks are charged even when the loop polls late, and the
        baseline only moves by whole ticks.
        """
        ticks = (now_ms - self.last_tick_ms) // TIMER_TICK_MS
        if ticks <= 0:
            return self.expired(active_id)
        self.last_tick_ms += ticks * TIMER_TICK_MS
        slot = self._slot(active_id)
        left = self.budgets[slot]
        if left is not None:
            self.budgets[slot] = max(0, left - ticks * TIMER_TICK_MS)
        return self.expired(active_id)

    def reanchor(self, now_ms: int) -> None:
        self.last_tick_ms = now_ms

    def _slot(self, player_id: int) -> int:
        # a single shared budget serves whichever player is asking
        return min(player_id, len(self.budgets)) - 1


# ── Cursor flash ─────────────────────────────────────────────────────

@dataclass
class FlashScheduler:
    """Blinks each player's marker with its own ``FLASH_PERIOD_MS`` phase."""

    baselines: dict[int, int] = field(default_factory=dict)

    def reset(self, player: PlayerState, now_ms: int) -> None:
        """Show *player* solid and restart its cycle from *now_ms*."""
        player.visible = True
        self.baselines[player.id] = now_ms

    def poll(self, now_ms: int, players: Iterable[PlayerState]) -> list[PlayerState]:
        """Toggle every player whose period has elapsed; return the toggled ones."""
        toggled = []
        for player in players:
            baseline = self.baselines.setdefault(player.id, now_ms)
            if now_ms - baseline >= FLASH_PERIOD_MS:
                player.visible = not player.visible
                self.baselines[player.id] = now_ms
                toggled.append(player)
        return toggled

    def reanchor(self, now_ms: int) -> None:
        for player_id in self.baselines:
            self.baselines[player_id] = now_ms
