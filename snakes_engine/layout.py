"""Cell descriptors and the two canonical board layouts.

A descriptor is one byte: the upper nibble is the cell type, the lower
nibble the tunnel identifier that links a snake or ladder start to its end.

Layout tables are declared top row first so they read like the board.
Runtime coordinates put (0, 0) at the bottom left, so declared row ``r``,
column ``c`` lives at runtime ``(c, HEIGHT - 1 - r)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, Sequence

from snakes_engine.config import HEIGHT, WIDTH

logger = logging.getLogger(__name__)


class Cell(IntEnum):
    EMPTY = 0x00
    START = 0x10
    FINISH = 0x20
    PLAYER_1 = 0x40
    PLAYER_2 = 0x50
    SNAKE_START = 0x80
    SNAKE_END = 0x90
    SNAKE_MIDDLE = 0xA0
    LADDER_START = 0xC0
    LADDER_END = 0xD0
    LADDER_MIDDLE = 0xE0


PLAYER_MARKERS: dict[int, int] = {1: Cell.PLAYER_1, 2: Cell.PLAYER_2}

# Tunnel start type → the end type it links to.
TUNNEL_ENDS: dict[int, int] = {
    Cell.SNAKE_START: Cell.SNAKE_END,
    Cell.LADDER_START: Cell.LADDER_END,
}

_BOARD_TYPES = frozenset(Cell) - {Cell.PLAYER_1, Cell.PLAYER_2}


def type_of(descriptor: int) -> int:
    return descriptor & 0xF0


def id_of(descriptor: int) -> int:
    return descriptor & 0x0F


# ── Coordinate mapping ───────────────────────────────────────────────

def to_runtime(row: int, col: int) -> tuple[int, int]:
    """Declared (row, col) → runtime (x, y) with a bottom-left origin."""
    return col, HEIGHT - 1 - row


def to_declared(x: int, y: int) -> tuple[int, int]:
    """Runtime (x, y) → declared (row, col)."""
    return HEIGHT - 1 - y, x


# ── Layout ───────────────────────────────────────────────────────────

class LayoutError(ValueError):
    """A layout table that cannot be played: wrong shape or broken tunnels."""


@dataclass(frozen=True)
class BoardLayout:
    """Immutable, validated layout table plus its tunnel-end index."""

    name: str
    rows: tuple[tuple[int, ...], ...]
    _ends: dict[tuple[int, int], tuple[int, int]] = field(
        default_factory=dict, init=False, repr=False, compare=False,
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", tuple(tuple(r) for r in self.rows))
        self._check_shape()
        object.__setattr__(self, "_ends", self._index_tunnels())

    @classmethod
    def from_rows(cls, name: str, rows: Sequence[Sequence[int]]) -> BoardLayout:
        return cls(name=name, rows=tuple(tuple(r) for r in rows))

    def descriptor_at(self, x: int, y: int) -> int:
        row, col = to_declared(x, y)
        return self.rows[row][col]

    def cells(self) -> Iterator[tuple[int, int, int]]:
        """Yield ``(x, y, descriptor)`` for every cell in runtime coordinates."""
        for row, values in enumerate(self.rows):
            for col, value in enumerate(values):
                x, y = to_runtime(row, col)
                yield x, y, value

    def tunnel_end(self, descriptor: int) -> tuple[int, int] | None:
        """Runtime position of the end linked to a tunnel-start descriptor.

        Returns None for anything that is not a snake or ladder start.
        """
        end_type = TUNNEL_ENDS.get(type_of(descriptor))
        if end_type is None:
            return None
        return self._ends[(end_type, id_of(descriptor))]

    def find(self, cell_type: int) -> tuple[int, int] | None:
        for x, y, value in self.cells():
            if type_of(value) == cell_type:
                return x, y
        return None

    # ── validation ───────────────────────────────────────────────────

    def _check_shape(self) -> None:
        if len(self.rows) != HEIGHT:
            raise LayoutError(f"{self.name}: expected {HEIGHT} rows, got {len(self.rows)}")
        for r, values in enumerate(self.rows):
            if len(values) != WIDTH:
                raise LayoutError(
                    f"{self.name}: row {r} has {len(values)} cells, expected {WIDTH}"
                )
            for c, value in enumerate(values):
                if not 0 <= value <= 0xFF or type_of(value) not in _BOARD_TYPES:
                    raise LayoutError(f"{self.name}: bad descriptor {value:#04x} at row {r}, col {c}")

        counts = {Cell.START: 0, Cell.FINISH: 0}
        for _, _, value in self.cells():
            if type_of(value) in counts:
                counts[type_of(value)] += 1
        for cell_type, n in counts.items():
            if n != 1:
                raise LayoutError(f"{self.name}: expected one {cell_type.name}, found {n}")

    def _index_tunnels(self) -> dict[tuple[int, int], tuple[int, int]]:
        starts: dict[tuple[int, int], list[tuple[int, int]]] = {}
        ends: dict[tuple[int, int], list[tuple[int, int]]] = {}
        for x, y, value in self.cells():
            kind = type_of(value)
            if kind in TUNNEL_ENDS:
                starts.setdefault((kind, id_of(value)), []).append((x, y))
            elif kind in TUNNEL_ENDS.values():
                ends.setdefault((kind, id_of(value)), []).append((x, y))

        index: dict[tuple[int, int], tuple[int, int]] = {}
        for (start_type, ident), where in starts.items():
            label = f"{Cell(start_type).name} {ident}"
            if len(where) > 1:
                raise LayoutError(f"{self.name}: {label} appears {len(where)} times")
            key = (TUNNEL_ENDS[start_type], ident)
            matches = ends.get(key, [])
            if len(matches) != 1:
                raise LayoutError(
                    f"{self.name}: {label} needs exactly one matching end, found {len(matches)}"
                )
            index[key] = matches[0]

        orphans = sorted(set(ends) - set(index))
        if orphans:
            end_type, ident = orphans[0]
            raise LayoutError(f"{self.name}: {Cell(end_type).name} {ident} has no start")

        logger.debug("%s: indexed %d tunnels", self.name, len(index))
        return index


# ── Canonical layouts ────────────────────────────────────────────────

_ = Cell.EMPTY
F = Cell.FINISH
S = Cell.START
SS, SE, SM = Cell.SNAKE_START, Cell.SNAKE_END, Cell.SNAKE_MIDDLE
LS, LE, LM = Cell.LADDER_START, Cell.LADDER_END, Cell.LADDER_MIDDLE

# fmt: off
_LAYOUT_1 = [
    [F,      _,      _,      _,      _,      _,      _,      _],
    [_,      SS | 4, _,      _,      LE | 4, _,      _,      _],
    [_,      SM,     _,      LM,     _,      _,      _,      _],
    [_,      SM,     LS | 4, _,      _,      _,      _,      _],
    [_,      SE | 4, _,      _,      _,      _,      SS | 3, _],
    [_,      _,      _,      _,      LE | 3, _,      SM,     _],
    [SS | 2, _,      _,      _,      LM,     _,      SM,     _],
    [_,      SM,     _,      _,      LS | 3, _,      SE | 3, _],
    [_,      _,      SE | 2, _,      _,      _,      _,      _],
    [_,      _,      _,      _,      _,      _,      _,      _],
    [_,      _,      _,      _,      _,      _,      _,      _],
    [_,      _,      _,      SS | 1, _,      _,      _,      LE | 1],
    [_,      LE | 2, _,      SM,     _,      _,      LM,     _],
    [_,      LM,     _,      SM,     _,      LS | 1, _,      _],
    [_,      LS | 2, _,      SM,     _,      _,      _,      _],
    [S,      _,      _,      SE | 1, _,      _,      _,      _],
]

_LAYOUT_2 = [
    [F,      SS | 5, _,      _,      _,      LE | 4, _,      _],
    [_,      SM,     _,      _,      LM,     _,      _,      _],
    [_,      SM,     _,      LM,     _,      _,      _,      _],
    [_,      SM,     LS | 4, SS | 4, _,      _,      _,      _],
    [_,      SE | 5, _,      SM,     LE | 3, _,      _,      _],
    [_,      _,      _,      SE | 4, _,      LM,     _,      _],
    [_,      _,      _,      _,      _,      _,      LS | 3, _],
    [_,      _,      _,      _,      SS | 3, _,      _,      _],
    [_,      SS | 2, _,      _,      _,      SM,     _,      _],
    [_,      SE | 2, _,      _,      _,      _,      SE | 3, LE | 2],
    [_,      _,      _,      _,      _,      _,      _,      LM],
    [_,      SS | 1, _,      _,      _,      _,      _,      LS | 2],
    [_,      LE | 1, SM,     _,      _,      _,      _,      _],
    [_,      LM,     _,      SM,     _,      _,      _,      _],
    [_,      LM,     _,      _,      SM,     _,      _,      _],
    [S,      LS | 1, _,      _,      _,      SE | 1, _,      _],
]
# fmt: on

LAYOUTS: dict[int, BoardLayout] = {
    1: BoardLayout.from_rows("layout 1", _LAYOUT_1),
    2: BoardLayout.from_rows("layout 2", _LAYOUT_2),
}


def get_layout(number: int) -> BoardLayout:
    try:
        return LAYOUTS[number]
    except KeyError:
        raise LayoutError(f"no layout {number}; choose one of {sorted(LAYOUTS)}") from None
