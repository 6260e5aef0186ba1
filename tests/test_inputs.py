"""Tests for key and button decoding."""

import pytest

from snakes_engine.inputs import (
    DirectionNudge,
    MoveOne,
    MoveTwo,
    Pause,
    ToggleRoll,
    decode_button,
    decode_key,
)


@pytest.mark.parametrize("key,event", [
    ("w", DirectionNudge(0, 1)),
    ("A", DirectionNudge(-1, 0)),
    ("s", DirectionNudge(0, -1)),
    ("D", DirectionNudge(1, 0)),
    ("r", ToggleRoll()),
    ("R", ToggleRoll()),
    ("p", Pause()),
    ("1", MoveOne()),
    ("2", MoveTwo()),
])
def test_decode_key(key, event):
    assert decode_key(key) == event


def test_unknown_key_is_ignored():
    assert decode_key("x") is None
    assert decode_key("") is None


def test_decode_button():
    assert decode_button(0) == MoveOne()
    assert decode_button(1) == MoveTwo()
    assert decode_button(2) == ToggleRoll()
    assert decode_button(3) is None
