"""Scripted play: drives sessions through the tick function on a simulated clock."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from snakes_engine.config import SessionConfig
from snakes_engine.game import GameResult, Session
from snakes_engine.inputs import ToggleRoll

TICK_MS = 50
MAX_SESSION_MS = 2 * 60 * 60 * 1000  # safety valve for unlimited clocks


@dataclass
class RollerScript:
    """Press-and-release timing for a simulated player, in ms."""

    hold_ms: tuple[int, int] = (150, 1200)
    think_ms: tuple[int, int] = (200, 2500)


def autoplay(
    config: SessionConfig,
    script: RollerScript | None = None,
    driver_seed: int | None = None,
    tick_ms: int = TICK_MS,
    max_ms: int = MAX_SESSION_MS,
) -> Session:
    """Play one session to the end by rolling the dice over and over.

    Returns the finished session; ``session.result`` is None only when
    *max_ms* ran out first.
    """
    script = script or RollerScript()
    driver = random.Random(driver_seed)
    session = Session.start(config)
    now = 0
    next_press = driver.randint(*script.think_ms)

    while not session.over and now < max_ms:
        event = None
        if now >= next_press:
            event = ToggleRoll()
            if session.dice.rolling:
                next_press = now + driver.randint(*script.think_ms)
            else:
                next_press = now + driver.randint(*script.hold_ms)
        session.tick(now, event)
        now += tick_ms
    return session


@dataclass
class SimulationSummary:
    config: SessionConfig
    results: list[GameResult] = field(default_factory=list)
    unfinished: int = 0

    def count(self, reason: str) -> int:
        return sum(1 for r in self.results if r.reason == reason)

    def wins_for(self, player_id: int) -> int:
        return sum(1 for r in self.results if r.winner == player_id)

    @property
    def mean_moves(self) -> float:
        finished = [r.moves for r in self.results if r.reason == "win"]
        return sum(finished) / len(finished) if finished else 0.0


def simulate(
    config: SessionConfig,
    sessions: int,
    seed: int | None = None,
    script: RollerScript | None = None,
) -> SimulationSummary:
    """Autoplay *sessions* games; seeds are derived from *seed* when it is given."""
    summary = SimulationSummary(config=config)
    for i in range(sessions):
        run_seed = None if seed is None else seed + i
        run_config = SessionConfig(
            board=config.board,
            difficulty=config.difficulty,
            two_player=config.two_player,
            seed=run_seed,
        )
        session = autoplay(run_config, script=script, driver_seed=run_seed)
        if session.result is None:
            summary.unfinished += 1
        else:
            summary.results.append(session.result)
    return summary
