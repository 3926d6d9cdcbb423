# Stats overlay and control legend helpers for the GUI.
from __future__ import annotations

try:
    from .game_logic import Position
except ImportError:
    from game_logic import Position


COMPACT_BREAKPOINT = 768         # window width in pixels
CONTROL_LEGEND_TIMEOUT_MS = 5000

CONTROL_LEGEND = (
    ("W", "Move Up"),
    ("A", "Move Left"),
    ("S", "Move Down"),
    ("D", "Move Right"),
)


class FpsMeter:
    """Ticks per second derived from the gap between the last two ticks."""
    def __init__(self) -> None:
        self.fps = 0
        self._last: float | None = None

    def tick(self, now: float) -> int:
        """Feed a monotonic timestamp in seconds (time.perf_counter())."""
        if self._last is not None:
            delta_ms = (now - self._last) * 1000.0
            if delta_ms > 0:
                self.fps = round(1000.0 / delta_ms)
        self._last = now
        return self.fps

    def reset(self) -> None:
        self.fps = 0
        self._last = None


def is_compact_layout(width: int, breakpoint: int = COMPACT_BREAKPOINT) -> bool:
    return width < breakpoint


def stats_lines(fps: int, compact: bool, score: int, head: Position) -> list[str]:
    return [
        f"FPS: {fps}",
        f"Layout: {'Compact' if compact else 'Desktop'}",
        f"Score: {score}",
        f"Pos: ({head[0]}, {head[1]})",
    ]


def legend_lines(compact: bool) -> list[str]:
    lines = [f"{key}  {action}" for key, action in CONTROL_LEGEND]
    if compact:
        lines.append("Touch controls available below")
    return lines
