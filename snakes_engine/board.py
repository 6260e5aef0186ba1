"""Per-session game board: the static cells of the chosen layout.

Players are not stored on the board, so moving a marker never overwrites
the snake, ladder or finish underneath it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from snakes_engine.config import HEIGHT, WIDTH
from snakes_engine.layout import Cell, BoardLayout, get_layout, id_of, type_of

__all__ = ["GameBoard", "type_of", "id_of"]


@dataclass
class GameBoard:
    """Mutable per-session copy of a layout, indexed ``cells[x][y]``."""

    layout: BoardLayout = field(default_factory=lambda: get_layout(1))
    cells: list[list[int]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.reset(self.layout)

    def reset(self, layout: BoardLayout) -> None:
        """Reinitialise every cell from *layout*."""
        self.layout = layout
        self.cells = [[int(Cell.EMPTY)] * HEIGHT for _ in range(WIDTH)]
        for x, y, value in layout.cells():
            self.cells[x][y] = int(value)

    def get(self, x: int, y: int) -> int:
        """Descriptor at (x, y); anything off the board is empty."""
        if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
            return Cell.EMPTY
        return self.cells[x][y]

    def type_at(self, x: int, y: int) -> int:
        return type_of(self.get(x, y))

    def tunnel_end(self, x: int, y: int) -> tuple[int, int] | None:
        return self.layout.tunnel_end(self.get(x, y))
