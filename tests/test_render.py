"""Tests for render requests and the text display sink."""

from dataclasses import dataclass, field

from snakes_engine.config import SessionConfig
from snakes_engine.game import Session
from snakes_engine.inputs import MoveTwo
from snakes_engine.layout import Cell
from snakes_engine.render import RenderRequest, TextDisplay, apply_effects, glyph


@dataclass
class RecordingSink:
    calls: list[tuple[int, int, int]] = field(default_factory=list)

    def set_cell_display(self, x: int, y: int, value: int) -> None:
        self.calls.append((x, y, value))


def test_apply_effects_forwards_in_order():
    sink = RecordingSink()
    apply_effects(sink, [RenderRequest(1, 2, Cell.START), RenderRequest(3, 4, Cell.PLAYER_2)])
    assert sink.calls == [(1, 2, Cell.START), (3, 4, Cell.PLAYER_2)]


def test_glyph_ignores_identifier():
    assert glyph(Cell.SNAKE_START | 3) == glyph(Cell.SNAKE_START)
    assert glyph(0x30) == "?"


def test_text_display_shows_finish_top_left():
    s = Session.start(SessionConfig(board=1))
    display = TextDisplay()
    apply_effects(display, s.render_all())
    lines = display.render().splitlines()
    assert len(lines) == 16
    assert lines[0].split()[0] == "F"
    assert lines[-1].split()[:4] == ["1", ".", ".", "_"]


def test_text_display_follows_moves():
    s = Session.start(SessionConfig(board=1))
    display = TextDisplay()
    apply_effects(display, s.render_all())
    apply_effects(display, s.tick(0, MoveTwo()))
    assert display.render().splitlines()[-1].split()[:3] == ["S", ".", "1"]


def test_text_display_ignores_off_board():
    display = TextDisplay()
    display.set_cell_display(-1, 0, Cell.PLAYER_1)
    display.set_cell_display(0, 99, Cell.PLAYER_1)
    assert "1" not in display.render()
