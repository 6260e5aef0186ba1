"""Game session. Owns every piece of mutable state and advances it one tick at a time."""

from __future__ import annotations

import copy
import logging
import random
from dataclasses import dataclass, field
from typing import Protocol

from snakes_engine.board import GameBoard
from snakes_engine.config import SessionConfig
from snakes_engine.inputs import (
    DirectionNudge,
    InputEvent,
    MoveOne,
    MoveTwo,
    Pause,
    SessionSelect,
    ToggleRoll,
)
from snakes_engine.layout import PLAYER_MARKERS, Cell, get_layout
from snakes_engine.movement import (
    MoveResult,
    PlayerState,
    advance,
    nudge,
    resolve_tunnel,
)
from snakes_engine.render import RenderRequest
from snakes_engine.timing import DiceRoll, FlashScheduler, RandomSource, TurnClock

logger = logging.getLogger(__name__)


# ── Structured types ────────────────────────────────────────────────

@dataclass
class LogEntry:
    """Record of one command that moved (or tried to move) a player."""

    time_ms: int
    player: int
    action: str  # "move_one" | "move_two" | "roll" | "nudge" | "timeout"
    position_before: tuple[int, int]
    position_after: tuple[int, int]
    dice_value: int | None = None
    teleported: bool = False
    is_winning_move: bool = False


@dataclass
class GameResult:
    winner: int | None  # player id, or None for a single-player timeout
    reason: str  # "win" | "timeout" | "forfeit"
    ended_ms: int = 0
    moves: int = 0


# ── Observer ────────────────────────────────────────────────────────

class SessionObserver(Protocol):
    """Receives structured events as a session is played."""

    def on_action(self, entry: LogEntry) -> None: ...


@dataclass
class ListObserver:
    """Default observer, collects entries into a list."""

    entries: list[LogEntry] = field(default_factory=list)

    def on_action(self, entry: LogEntry) -> None:
        self.entries.append(entry)


# ── Win detection ────────────────────────────────────────────────────

def check_win(board: GameBoard, player: PlayerState) -> bool:
    return board.type_at(player.x, player.y) == Cell.FINISH


def find_winner(board: GameBoard, players: list[PlayerState], acting: int) -> int | None:
    """First player on the finish, checking the acting player before the rest."""
    ordered = sorted(players, key=lambda p: p.id != acting)
    for player in ordered:
        if check_win(board, player):
            return player.id
    return None


# ── Session ──────────────────────────────────────────────────────────

@dataclass
class Session:
    """One game from selection to game over.

    Drive it by calling :meth:`tick` with a clock sample and at most one
    input event; each call returns the cells that need redrawing.
    """

    config: SessionConfig
    board: GameBoard
    players: list[PlayerState]
    dice: DiceRoll
    clock: TurnClock
    flash: FlashScheduler = field(default_factory=FlashScheduler)
    active: int = 1
    paused: bool = False
    result: GameResult | None = None
    observer: SessionObserver = field(default_factory=ListObserver, repr=False)

    @classmethod
    def start(
        cls,
        config: SessionConfig,
        now_ms: int = 0,
        rng: RandomSource | None = None,
        observer: SessionObserver | None = None,
    ) -> Session:
        """Fresh session: everyone on the start cell, clocks at the difficulty preset."""
        players = [PlayerState(id=i) for i in range(1, config.player_count + 1)]
        session = cls(
            config=config,
            board=GameBoard(get_layout(config.board)),
            players=players,
            dice=DiceRoll(rng=rng or random.Random(config.seed)),
            clock=TurnClock.for_players(
                config.difficulty.budget_ms, config.player_count, now_ms,
            ),
            observer=observer or ListObserver(),
        )
        for player in players:
            session.flash.reset(player, now_ms)
        logger.info(
            "session started: board %d, %s, %d player(s)",
            config.board, config.difficulty.value, config.player_count,
        )
        return session

    @classmethod
    def from_selection(
        cls,
        select: SessionSelect,
        now_ms: int = 0,
        seed: int | None = None,
        rng: RandomSource | None = None,
    ) -> Session:
        config = SessionConfig(
            board=select.board,
            difficulty=select.difficulty,
            two_player=select.two_player,
            seed=seed,
        )
        return cls.start(config, now_ms=now_ms, rng=rng)

    @property
    def over(self) -> bool:
        return self.result is not None

    def player(self, player_id: int) -> PlayerState:
        return self.players[player_id - 1]

    def moves(self) -> int:
        return sum(p.moves for p in self.players)

    # ── rendering ────────────────────────────────────────────────────

    def render_all(self) -> list[RenderRequest]:
        """Every board cell followed by every player marker."""
        effects = [
            RenderRequest(x, y, self.board.get(x, y))
            for x, column in enumerate(self.board.cells)
            for y in range(len(column))
        ]
        effects.extend(
            RenderRequest(p.x, p.y, PLAYER_MARKERS[p.id]) for p in self.players
        )
        return effects

    def _cell_view(self, x: int, y: int, hidden: int) -> int:
        """What (x, y) shows with player *hidden* taken off it."""
        for other in self.players:
            if other.id != hidden and other.position == (x, y) and other.visible:
                return PLAYER_MARKERS[other.id]
        return self.board.get(x, y)

    # ── tick ─────────────────────────────────────────────────────────

    def tick(self, now_ms: int, event: InputEvent | None = None) -> list[RenderRequest]:
        """Advance the session to *now_ms*, applying *event* if there is one."""
        effects: list[RenderRequest] = []
        if self.over:
            return effects

        if not self.paused and self.clock.poll(now_ms, self.active):
            self._time_out(now_ms)
            return effects

        if event is not None:
            self._handle(event, now_ms, effects)
            if self.over:
                return effects

        if self.paused:
            return effects

        self.dice.poll(now_ms)
        for player in self.flash.poll(now_ms, self.players):
            value = PLAYER_MARKERS[player.id] if player.visible else self._cell_view(
                player.x, player.y, player.id,
            )
            effects.append(RenderRequest(player.x, player.y, value))
        return effects

    def _handle(self, event: InputEvent, now_ms: int, effects: list[RenderRequest]) -> None:
        if isinstance(event, Pause):
            self.paused = not self.paused
            if not self.paused:
                self.dice.reanchor(now_ms)
                self.clock.reanchor(now_ms)
                self.flash.reanchor(now_ms)
            logger.info("%s at %d ms", "paused" if self.paused else "resumed", now_ms)
            return
        if self.paused:
            return

        if self.dice.rolling:
            if isinstance(event, ToggleRoll):
                value = self.dice.stop()
                self._step(value, "roll", now_ms, effects, dice_value=value)
            return

        if isinstance(event, ToggleRoll):
            self.dice.start(now_ms)
        elif isinstance(event, MoveOne):
            self._step(1, "move_one", now_ms, effects)
        elif isinstance(event, MoveTwo):
            self._step(2, "move_two", now_ms, effects)
        elif isinstance(event, DirectionNudge):
            player = self.player(self.active)
            result = nudge(event.dx, event.dy, player)
            self._settle(player, result, "nudge", now_ms, effects)
        # a SessionSelect belongs to the selection screen, not a running game

    def _step(
        self,
        steps: int,
        action: str,
        now_ms: int,
        effects: list[RenderRequest],
        dice_value: int | None = None,
    ) -> None:
        player = self.player(self.active)
        result = advance(steps, player)
        self._settle(player, result, action, now_ms, effects, dice_value)
        if not self.over and self.config.two_player:
            self.active = 3 - self.active

    def _settle(
        self,
        player: PlayerState,
        result: MoveResult,
        action: str,
        now_ms: int,
        effects: list[RenderRequest],
        dice_value: int | None = None,
    ) -> None:
        resolve_tunnel(self.board, player, result)
        if result.teleported_from is not None:
            logger.info(
                "player %d took the tunnel at %s to %s",
                player.id, result.teleported_from, result.landed,
            )

        self.flash.reset(player, now_ms)
        effects.append(RenderRequest(*result.vacated, self._cell_view(*result.vacated, player.id)))
        effects.append(RenderRequest(player.x, player.y, PLAYER_MARKERS[player.id]))

        winner = find_winner(self.board, self.players, acting=player.id)
        self.observer.on_action(LogEntry(
            time_ms=now_ms,
            player=player.id,
            action=action,
            position_before=result.vacated,
            position_after=result.landed,
            dice_value=dice_value,
            teleported=result.teleported_from is not None,
            is_winning_move=winner == player.id,
        ))
        if winner is not None:
            self.result = GameResult(
                winner=winner, reason="win", ended_ms=now_ms, moves=self.moves(),
            )
            logger.info("player %d wins at %d ms", winner, now_ms)

    def _time_out(self, now_ms: int) -> None:
        loser = self.player(self.active)
        self.observer.on_action(LogEntry(
            time_ms=now_ms,
            player=loser.id,
            action="timeout",
            position_before=loser.position,
            position_after=loser.position,
        ))
        if self.config.two_player:
            self.result = GameResult(
                winner=3 - loser.id, reason="forfeit", ended_ms=now_ms, moves=self.moves(),
            )
            logger.info("player %d ran out of time; player %d wins", loser.id, 3 - loser.id)
        else:
            self.result = GameResult(
                winner=None, reason="timeout", ended_ms=now_ms, moves=self.moves(),
            )
            logger.info("time up at %d ms", now_ms)


def step(
    session: Session, now_ms: int, event: InputEvent | None = None,
) -> tuple[Session, list[RenderRequest]]:
    """Pure form of :meth:`Session.tick`: *session* itself is left untouched."""
    new = copy.deepcopy(session)
    return new, new.tick(now_ms, event)
