# Input layer: keyboard bindings, virtual joystick geometry, and the cross pad.
from __future__ import annotations

from dataclasses import dataclass
import math

try:
    from .game_logic import DOWN, LEFT, RIGHT, UP
except ImportError:
    from game_logic import DOWN, LEFT, RIGHT, UP


JOYSTICK_RADIUS = 40.0    # knob travel clamp, pixels
JOYSTICK_DEADZONE = 20.0  # clamped distance must exceed this to register

KEY_BINDINGS = {
    "w": UP,
    "s": DOWN,
    "a": LEFT,
    "d": RIGHT,
    "up": UP,
    "down": DOWN,
    "left": LEFT,
    "right": RIGHT,
}

# (label, direction, row, column) on a 3x3 pad.
DIRECTION_BUTTONS = (
    ("↑", UP, 0, 1),
    ("←", LEFT, 1, 0),
    ("→", RIGHT, 1, 2),
    ("↓", DOWN, 2, 1),
)


def direction_for_key(keysym: str) -> str | None:
    """Map a Tk keysym ("w", "W", "Up", ...) to a direction."""
    return KEY_BINDINGS.get(keysym.lower())


def direction_for_angle(degrees: float) -> str:
    """Bucket an angle into four 90-degree quadrants centred on the axes.

    Screen coordinates: y grows downward, so 90 degrees points DOWN.
    """
    normalized = degrees % 360
    if normalized >= 315 or normalized < 45:
        return RIGHT
    if normalized < 135:
        return DOWN
    if normalized < 225:
        return LEFT
    return UP


def clamp_vector(dx: float, dy: float, radius: float = JOYSTICK_RADIUS) -> tuple[float, float, float]:
    """Return (knob_x, knob_y, clamped_distance) for a drag vector."""
    distance = min(math.hypot(dx, dy), radius)
    angle = math.atan2(dy, dx)
    return math.cos(angle) * distance, math.sin(angle) * distance, distance


def direction_for_vector(
    dx: float,
    dy: float,
    deadzone: float = JOYSTICK_DEADZONE,
    radius: float = JOYSTICK_RADIUS,
) -> str | None:
    """Direction for a drag vector, or None while inside the deadzone."""
    _, _, distance = clamp_vector(dx, dy, radius)
    if distance <= deadzone:
        return None
    return direction_for_angle(math.degrees(math.atan2(dy, dx)))


@dataclass
class Joystick:
    """Press/move/release state of the on-screen joystick."""
    radius: float = JOYSTICK_RADIUS
    deadzone: float = JOYSTICK_DEADZONE
    dragging: bool = False
    center: tuple[float, float] | None = None
    knob_offset: tuple[float, float] = (0.0, 0.0)

    def press(self, center: tuple[float, float]) -> None:
        self.dragging = True
        self.center = center

    def move(self, x: float, y: float) -> str | None:
        """Update the knob for a pointer position; return a direction intent."""
        if not self.dragging or self.center is None:
            return None
        dx = x - self.center[0]
        dy = y - self.center[1]
        knob_x, knob_y, _ = clamp_vector(dx, dy, self.radius)
        self.knob_offset = (knob_x, knob_y)
        return direction_for_vector(dx, dy, self.deadzone, self.radius)

    def release(self) -> None:
        self.dragging = False
        self.knob_offset = (0.0, 0.0)
