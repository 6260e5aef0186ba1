"""Player movement along the serpentine track, free nudges and tunnels.

The board is one continuous track: even rows run left to right, odd rows
right to left, so stepping forward is plain arithmetic on a linear index.
The last index is column 0 of the top row, which holds the finish.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from snakes_engine.board import GameBoard
from snakes_engine.config import HEIGHT, WIDTH

logger = logging.getLogger(__name__)

LAST_POSITION = WIDTH * HEIGHT - 1


@dataclass
class PlayerState:
    """One player's token. Position is in runtime (bottom-left origin) coordinates."""

    id: int
    x: int = 0
    y: int = 0
    visible: bool = True
    ascended: bool = False  # changed row during the current command
    moves: int = 0

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y


@dataclass
class MoveResult:
    """Where a move started and where it left the player."""

    vacated: tuple[int, int]
    landed: tuple[int, int]
    teleported_from: tuple[int, int] | None = None

    @property
    def moved(self) -> bool:
        return self.vacated != self.landed


# ── Linear track ─────────────────────────────────────────────────────

def to_linear(x: int, y: int) -> int:
    col = x if y % 2 == 0 else WIDTH - 1 - x
    return y * WIDTH + col


def from_linear(n: int) -> tuple[int, int]:
    y, col = divmod(n, WIDTH)
    x = col if y % 2 == 0 else WIDTH - 1 - col
    return x, y


# ── Moves ────────────────────────────────────────────────────────────

def advance(steps: int, player: PlayerState) -> MoveResult:
    """Move *player* forward *steps* cells along the track.

    Stops on the finish if the roll would overshoot it.
    """
    vacated = player.position
    target = min(max(to_linear(*vacated) + steps, 0), LAST_POSITION)
    player.x, player.y = from_linear(target)
    player.ascended = player.y != vacated[1]
    player.moves += 1
    return MoveResult(vacated=vacated, landed=player.position)


def nudge(dx: int, dy: int, player: PlayerState) -> MoveResult:
    """Shift *player* by (dx, dy), wrapping around each edge independently."""
    vacated = player.position
    player.x = (player.x + dx) % WIDTH
    player.y = (player.y + dy) % HEIGHT
    return MoveResult(vacated=vacated, landed=player.position)


def resolve_tunnel(board: GameBoard, player: PlayerState, result: MoveResult) -> MoveResult:
    """Send a player standing on a snake or ladder start to its end.

    The jump ignores the track: it is a single direct relocation.
    """
    end = board.tunnel_end(player.x, player.y)
    if end is None:
        return result
    logger.debug("player %d: tunnel %s -> %s", player.id, player.position, end)
    result.teleported_from = player.position
    player.x, player.y = end
    result.landed = end
    return result
