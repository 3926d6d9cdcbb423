"""
Tests for controls.py - keyboard bindings and virtual joystick geometry.
"""

import pytest

from controls import (
    DIRECTION_BUTTONS,
    JOYSTICK_DEADZONE,
    JOYSTICK_RADIUS,
    Joystick,
    direction_for_angle,
    direction_for_key,
    direction_for_vector,
)
from game_logic import DOWN, LEFT, RIGHT, UP, SnakeGame


class TestKeyBindings:
    @pytest.mark.parametrize(
        "keysym, expected",
        [("w", UP), ("a", LEFT), ("s", DOWN), ("d", RIGHT), ("W", UP), ("D", RIGHT)],
    )
    def test_wasd_maps_case_insensitively(self, keysym, expected):
        assert direction_for_key(keysym) == expected

    @pytest.mark.parametrize("keysym, expected", [("Up", UP), ("Down", DOWN), ("Left", LEFT), ("Right", RIGHT)])
    def test_arrow_keys(self, keysym, expected):
        assert direction_for_key(keysym) == expected

    def test_unbound_key_is_none(self):
        """Keys outside the bindings produce no intent."""
        assert direction_for_key("space") is None
        assert direction_for_key("q") is None


class TestAngleBuckets:
    @pytest.mark.parametrize(
        "degrees, expected",
        [
            (0, RIGHT),
            (44.9, RIGHT),
            (315, RIGHT),
            (45, DOWN),
            (90, DOWN),
            (134.9, DOWN),
            (135, LEFT),
            (180, LEFT),
            (224.9, LEFT),
            (225, UP),
            (270, UP),
            (314.9, UP),
            (-90, UP),
            (-180, LEFT),
        ],
    )
    def test_quadrant_boundaries(self, degrees, expected):
        """Quadrants are 90 degrees wide, centred on the axes."""
        assert direction_for_angle(degrees) == expected


class TestVectors:
    def test_inside_deadzone_is_none(self):
        """Small drags do not register a direction."""
        assert direction_for_vector(10, 0) is None
        assert direction_for_vector(JOYSTICK_DEADZONE, 0) is None

    def test_beyond_deadzone_registers(self):
        """Screen y grows downward: positive dy is DOWN."""
        assert direction_for_vector(25, 0) == RIGHT
        assert direction_for_vector(0, 25) == DOWN
        assert direction_for_vector(-25, 0) == LEFT
        assert direction_for_vector(0, -25) == UP

    def test_long_drags_are_clamped_but_register(self):
        assert direction_for_vector(500, 10) == RIGHT

    def test_deadzone_larger_than_radius_never_registers(self):
        """Distance is clamped to the radius before the deadzone check."""
        assert direction_for_vector(500, 0, deadzone=50, radius=40) is None


class TestJoystick:
    def test_move_without_press_is_ignored(self):
        stick = Joystick()
        assert stick.move(100, 100) is None
        assert stick.knob_offset == (0.0, 0.0)

    def test_drag_sets_knob_and_direction(self):
        """Knob follows the pointer up to the radius."""
        stick = Joystick()
        stick.press((48, 48))
        assert stick.move(48, 148) == DOWN
        knob_x, knob_y = stick.knob_offset
        assert knob_x == pytest.approx(0.0, abs=1e-9)
        assert knob_y == pytest.approx(JOYSTICK_RADIUS)

    def test_release_recentres(self):
        stick = Joystick()
        stick.press((48, 48))
        stick.move(10, 48)
        stick.release()
        assert not stick.dragging
        assert stick.knob_offset == (0.0, 0.0)
        assert stick.move(0, 48) is None


class TestInputSourcesShareGuard:
    def test_all_sources_feed_the_same_setter(self):
        """Keyboard, joystick and buttons produce interchangeable intents."""
        game = SnakeGame(seed=5)
        game.start()

        stick = Joystick()
        stick.press((0, 0))
        assert game.change_direction(stick.move(0, -30))  # UP
        assert not game.change_direction(direction_for_key("s"))  # reversal
        button_left = next(d for _, d, _, _ in DIRECTION_BUTTONS if d == LEFT)
        assert game.change_direction(button_left)
        assert game.pending_direction == LEFT

    def test_buttons_cover_all_directions(self):
        assert sorted(d for _, d, _, _ in DIRECTION_BUTTONS) == sorted([UP, DOWN, LEFT, RIGHT])
