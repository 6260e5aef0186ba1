"""Tests for snakes_engine.layout: descriptors, coordinate mapping and validation."""

import pytest

from snakes_engine.config import HEIGHT, WIDTH
from snakes_engine.layout import (
    LAYOUTS,
    BoardLayout,
    Cell,
    LayoutError,
    get_layout,
    id_of,
    to_declared,
    to_runtime,
    type_of,
)


def _rows(number: int) -> list[list[int]]:
    return [list(r) for r in LAYOUTS[number].rows]


# ── descriptors ──────────────────────────────────────────────────────

def test_type_and_id_nibbles():
    d = Cell.SNAKE_START | 3
    assert type_of(d) == Cell.SNAKE_START
    assert id_of(d) == 3
    assert id_of(Cell.FINISH) == 0


# ── coordinate mapping ───────────────────────────────────────────────

def test_top_declared_row_is_top_of_board():
    assert to_runtime(0, 0) == (0, HEIGHT - 1)
    assert to_runtime(HEIGHT - 1, 0) == (0, 0)
    assert to_runtime(3, 5) == (5, 12)


def test_to_declared_inverts_to_runtime():
    for row in range(HEIGHT):
        for col in range(WIDTH):
            assert to_declared(*to_runtime(row, col)) == (row, col)


# ── canonical layouts ────────────────────────────────────────────────

@pytest.mark.parametrize("number", [1, 2])
def test_start_bottom_left_finish_top_left(number):
    layout = get_layout(number)
    assert layout.find(Cell.START) == (0, 0)
    assert layout.find(Cell.FINISH) == (0, HEIGHT - 1)


def test_layout_1_tunnels():
    layout = get_layout(1)
    assert layout.tunnel_end(Cell.SNAKE_START | 1) == (3, 0)
    assert layout.tunnel_end(Cell.SNAKE_START | 2) == (2, 7)
    assert layout.tunnel_end(Cell.SNAKE_START | 4) == (1, 11)
    assert layout.tunnel_end(Cell.LADDER_START | 1) == (7, 4)
    assert layout.tunnel_end(Cell.LADDER_START | 4) == (4, 14)


def test_identifier_scope_is_per_type():
    """Snake 2 and ladder 2 share an identifier but not an end."""
    layout = get_layout(1)
    assert layout.tunnel_end(Cell.SNAKE_START | 2) == (2, 7)
    assert layout.tunnel_end(Cell.LADDER_START | 2) == (1, 3)


def test_tunnel_end_of_non_start_is_none():
    layout = get_layout(2)
    assert layout.tunnel_end(Cell.SNAKE_END | 1) is None
    assert layout.tunnel_end(Cell.EMPTY) is None


def test_layout_2_has_five_snakes_and_four_ladders():
    layout = get_layout(2)
    kinds = [type_of(v) for _, _, v in layout.cells()]
    assert kinds.count(Cell.SNAKE_START) == 5
    assert kinds.count(Cell.LADDER_START) == 4


def test_unknown_layout_number():
    with pytest.raises(LayoutError):
        get_layout(3)


# ── validation ───────────────────────────────────────────────────────

def test_start_without_end_is_rejected():
    rows = _rows(1)
    rows[15][3] = Cell.EMPTY  # snake 1's end
    with pytest.raises(LayoutError, match="SNAKE_START 1"):
        BoardLayout.from_rows("broken", rows)


def test_duplicate_end_is_rejected():
    rows = _rows(1)
    rows[9][0] = Cell.LADDER_END | 3
    with pytest.raises(LayoutError, match="exactly one"):
        BoardLayout.from_rows("broken", rows)


def test_duplicate_start_is_rejected():
    rows = _rows(1)
    rows[9][0] = Cell.SNAKE_START | 1
    with pytest.raises(LayoutError, match="appears 2 times"):
        BoardLayout.from_rows("broken", rows)


def test_end_without_start_is_rejected():
    rows = _rows(1)
    rows[9][0] = Cell.SNAKE_END | 9
    with pytest.raises(LayoutError, match="has no start"):
        BoardLayout.from_rows("broken", rows)


def test_wrong_shape_is_rejected():
    rows = _rows(1)[:-1]
    with pytest.raises(LayoutError, match="rows"):
        BoardLayout.from_rows("short", rows)


def test_player_marker_is_not_a_board_cell():
    rows = _rows(1)
    rows[9][0] = Cell.PLAYER_1
    with pytest.raises(LayoutError, match="bad descriptor"):
        BoardLayout.from_rows("broken", rows)


def test_missing_finish_is_rejected():
    rows = _rows(2)
    rows[0][0] = Cell.EMPTY
    with pytest.raises(LayoutError, match="FINISH"):
        BoardLayout.from_rows("broken", rows)


def test_layout_error_is_a_value_error():
    assert issubclass(LayoutError, ValueError)
