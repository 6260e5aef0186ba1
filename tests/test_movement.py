"""Tests for the serpentine track, stepwise advances, nudges and tunnels."""

from snakes_engine.board import GameBoard
from snakes_engine.config import HEIGHT, WIDTH
from snakes_engine.layout import get_layout
from snakes_engine.movement import (
    LAST_POSITION,
    PlayerState,
    advance,
    from_linear,
    nudge,
    resolve_tunnel,
    to_linear,
)


# ── linear track ─────────────────────────────────────────────────────

def test_even_rows_run_left_to_right():
    assert to_linear(0, 0) == 0
    assert to_linear(7, 0) == 7
    assert to_linear(0, 2) == 16


def test_odd_rows_run_right_to_left():
    assert to_linear(7, 1) == 8
    assert to_linear(0, 1) == 15


def test_last_position_is_top_left():
    assert from_linear(LAST_POSITION) == (0, HEIGHT - 1)


def test_linear_mapping_covers_every_cell_once():
    seen = {from_linear(n) for n in range(WIDTH * HEIGHT)}
    assert len(seen) == WIDTH * HEIGHT
    for n in range(WIDTH * HEIGHT):
        assert to_linear(*from_linear(n)) == n


# ── advance ──────────────────────────────────────────────────────────

def test_advance_within_row():
    p = PlayerState(id=1)
    result = advance(4, p)
    assert p.position == (4, 0)
    assert result.vacated == (0, 0)
    assert result.landed == (4, 0)
    assert not p.ascended
    assert p.moves == 1


def test_advance_over_right_edge_turns_up():
    p = PlayerState(id=1, x=6, y=0)
    advance(3, p)
    assert p.position == (6, 1)
    assert p.ascended


def test_advance_over_left_edge_turns_up():
    p = PlayerState(id=1, x=1, y=1)
    advance(3, p)
    assert p.position == (1, 2)
    assert p.ascended


def test_ascended_clears_on_next_in_row_move():
    p = PlayerState(id=1, x=7, y=0)
    advance(1, p)
    assert p.position == (7, 1)
    assert p.ascended
    advance(1, p)
    assert p.position == (6, 1)
    assert not p.ascended


def test_advance_stops_on_finish():
    p = PlayerState(id=1, x=2, y=HEIGHT - 1)
    advance(6, p)
    assert p.position == (0, HEIGHT - 1)


def test_finished_player_stays_put():
    p = PlayerState(id=1, x=0, y=HEIGHT - 1)
    result = advance(3, p)
    assert p.position == (0, HEIGHT - 1)
    assert not result.moved


def test_single_steps_compose_to_one_advance():
    """Without tunnels, n advances of 1 land where one advance of n does."""
    for start in range(WIDTH * HEIGHT):
        for steps in range(1, 7):
            a = PlayerState(1, *from_linear(start))
            b = PlayerState(2, *from_linear(start))
            advance(steps, a)
            for _ in range(steps):
                advance(1, b)
            assert a.position == b.position, (start, steps)


# ── nudge ────────────────────────────────────────────────────────────

def test_nudge_right_width_times_returns_home():
    p = PlayerState(id=1, x=3, y=5)
    for _ in range(WIDTH):
        nudge(1, 0, p)
    assert p.position == (3, 5)


def test_nudge_up_height_times_returns_home():
    p = PlayerState(id=1, x=3, y=5)
    for _ in range(HEIGHT):
        nudge(0, 1, p)
    assert p.position == (3, 5)


def test_nudge_wraps_each_edge():
    p = PlayerState(id=1)
    nudge(-1, 0, p)
    assert p.position == (WIDTH - 1, 0)
    nudge(1, 0, p)
    assert p.position == (0, 0)
    nudge(0, -1, p)
    assert p.position == (0, HEIGHT - 1)
    nudge(0, 1, p)
    assert p.position == (0, 0)


def test_nudge_does_not_count_as_a_move():
    p = PlayerState(id=1)
    nudge(1, 0, p)
    assert p.moves == 0


# ── tunnels ──────────────────────────────────────────────────────────

def test_snake_start_slides_to_its_end():
    board = GameBoard(get_layout(1))
    p = PlayerState(id=1, x=1, y=9)
    result = resolve_tunnel(board, p, advance(1, p))
    assert result.teleported_from == (0, 9)
    assert p.position == (2, 7)
    assert result.landed == (2, 7)
    assert result.vacated == (1, 9)


def test_ladder_start_climbs_to_its_end():
    board = GameBoard(get_layout(1))
    p = PlayerState(id=1, x=3, y=2)
    resolve_tunnel(board, p, advance(2, p))  # lands on (5, 2), ladder 1
    assert p.position == (7, 4)


def test_tunnel_end_is_not_a_jump():
    board = GameBoard(get_layout(1))
    p = PlayerState(id=1, x=2, y=0)
    result = resolve_tunnel(board, p, advance(1, p))  # snake 1's end at (3, 0)
    assert result.teleported_from is None
    assert p.position == (3, 0)


def test_same_move_same_destination():
    board = GameBoard(get_layout(1))
    landings = set()
    for _ in range(5):
        p = PlayerState(id=1, x=1, y=9)
        resolve_tunnel(board, p, advance(1, p))
        landings.add(p.position)
    assert landings == {(2, 7)}
