"""Render requests and the sinks that consume them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Protocol

from snakes_engine.config import HEIGHT, WIDTH
from snakes_engine.layout import Cell, type_of


@dataclass(frozen=True)
class RenderRequest:
    """Show *value* (a cell descriptor or player marker) at (x, y)."""

    x: int
    y: int
    value: int


class RenderSink(Protocol):
    def set_cell_display(self, x: int, y: int, value: int) -> None: ...


def apply_effects(sink: RenderSink, effects: Iterable[RenderRequest]) -> None:
    for req in effects:
        sink.set_cell_display(req.x, req.y, req.value)


# ── Text display ─────────────────────────────────────────────────────

GLYPHS: dict[int, str] = {
    Cell.EMPTY: ".",
    Cell.START: "S",
    Cell.FINISH: "F",
    Cell.PLAYER_1: "1",
    Cell.PLAYER_2: "2",
    Cell.SNAKE_START: "v",
    Cell.SNAKE_END: "_",
    Cell.SNAKE_MIDDLE: "~",
    Cell.LADDER_START: "^",
    Cell.LADDER_END: "=",
    Cell.LADDER_MIDDLE: "|",
}


def glyph(value: int) -> str:
    return GLYPHS.get(type_of(value), "?")


@dataclass
class TextDisplay:
    """Render sink that keeps the board as characters, top row first when shown."""

    grid: list[list[str]] = field(
        default_factory=lambda: [["." for _ in range(WIDTH)] for _ in range(HEIGHT)]
    )

    def set_cell_display(self, x: int, y: int, value: int) -> None:
        if 0 <= x < WIDTH and 0 <= y < HEIGHT:
            self.grid[y][x] = glyph(value)

    def render(self) -> str:
        return "\n".join(" ".join(self.grid[y]) for y in reversed(range(HEIGHT)))
