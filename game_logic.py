# Core Snake Evolution state and rules, independent from GUI code.
from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from typing import Callable, Protocol, Sequence

import numpy as np


logger = logging.getLogger(__name__)

Position = tuple[int, int]

UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)
OPPOSITES = {UP: DOWN, DOWN: UP, LEFT: RIGHT, RIGHT: LEFT}
DIRECTION_DELTAS = {UP: (0, -1), DOWN: (0, 1), LEFT: (-1, 0), RIGHT: (1, 0)}

STATUS_NOT_STARTED = "not_started"
STATUS_RUNNING = "running"
STATUS_GAME_OVER = "game_over"

OUTCOME_WALL = "wall"
OUTCOME_SELF = "self"
OUTCOME_COMPLETE = "complete"

# Cell codes used by board_array().
EMPTY = 0
APPLE = 1
BODY = 2
HEAD = 3

# Bounds used when validating user overrides.
MIN_GRID_SIZE = 8
MAX_GRID_SIZE = 60
MIN_SPEED_MS = 40
MAX_SPEED_MS = 500
MIN_APPLES = 1
MAX_APPLES = 100

GRID_SIZE = 20
GAME_SPEED_MS = 150
MAX_APPLES_PER_SESSION = 10
POINTS_PER_APPLE = 10


class RandomSource(Protocol):
    def integers(self, low: int, high: int, size: int) -> Sequence[int]: ...


@dataclass
class SnakeConfig:
    """Runtime settings shared between the logic layer and GUI."""
    grid_size: int = GRID_SIZE
    speed_ms: int = GAME_SPEED_MS
    max_apples: int = MAX_APPLES_PER_SESSION
    points_per_apple: int = POINTS_PER_APPLE
    initial_direction: str = RIGHT
    show_grid: bool = True

    def initial_snake(self) -> tuple[Position, ...]:
        """Single segment at the board center."""
        center = self.grid_size // 2
        return ((center, center),)

    def initial_apple(self) -> Position:
        """Apple shown on the board before the first start."""
        return (self.grid_size * 3 // 4, self.grid_size // 2)

    def validate(self) -> None:
        """Raise ValueError with a readable message for out-of-range settings."""
        if not (MIN_GRID_SIZE <= self.grid_size <= MAX_GRID_SIZE):
            raise ValueError(f"Grid size must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}.")
        if not (MIN_SPEED_MS <= self.speed_ms <= MAX_SPEED_MS):
            raise ValueError(f"Speed must be between {MIN_SPEED_MS} and {MAX_SPEED_MS}.")
        if not (MIN_APPLES <= self.max_apples <= MAX_APPLES):
            raise ValueError(f"Apples per session must be between {MIN_APPLES} and {MAX_APPLES}.")
        # Apple placement needs at least one free cell after the final apple.
        if self.max_apples + len(self.initial_snake()) >= self.grid_size * self.grid_size:
            raise ValueError("Apples per session must leave free cells on the board.")
        if self.points_per_apple <= 0:
            raise ValueError("Points per apple must be positive.")
        if self.initial_direction not in OPPOSITES:
            raise ValueError(f"Unknown direction: {self.initial_direction!r}")


@dataclass(frozen=True)
class GameState:
    """One immutable snapshot of the board; the tick engine returns a new one."""
    snake: tuple[Position, ...]  # head first
    apple: Position
    direction: str
    score: int = 0
    game_over: bool = False
    game_started: bool = False
    apples_eaten: int = 0
    outcome: str | None = None

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def status(self) -> str:
        if not self.game_started:
            return STATUS_NOT_STARTED
        if self.game_over:
            return STATUS_GAME_OVER
        return STATUS_RUNNING

    @property
    def running(self) -> bool:
        return self.status == STATUS_RUNNING

    @property
    def session_complete(self) -> bool:
        return self.outcome == OUTCOME_COMPLETE


def step(position: Position, direction: str) -> Position:
    """Translate a position by one tile in the given direction."""
    try:
        dx, dy = DIRECTION_DELTAS[direction]
    except KeyError:
        raise ValueError(f"Unknown direction: {direction!r}") from None
    x, y = position
    return x + dx, y + dy


def in_bounds(position: Position, grid_size: int = GRID_SIZE) -> bool:
    """True when both coordinates lie in [0, grid_size)."""
    x, y = position
    return 0 <= x < grid_size and 0 <= y < grid_size


def collision_kind(head: Position, body: Sequence[Position], grid_size: int = GRID_SIZE) -> str | None:
    """Return OUTCOME_WALL / OUTCOME_SELF for a colliding head, else None."""
    if not in_bounds(head, grid_size):
        return OUTCOME_WALL
    # Checked against the pre-move body: the tail cell counts even though
    # it would be vacated this tick.
    if head in body:
        return OUTCOME_SELF
    return None


def is_collision(head: Position, body: Sequence[Position], grid_size: int = GRID_SIZE) -> bool:
    """Wall or self collision for a candidate head against the pre-move body."""
    return collision_kind(head, body, grid_size) is not None


def generate_apple(snake: Sequence[Position], grid_size: int, rng: RandomSource) -> Position:
    """Pick a uniformly random cell that the snake does not occupy.

    Rejection sampling over the whole grid. It never terminates on a full
    board; the per-session apple cap keeps the snake far shorter than that
    (SnakeConfig.validate enforces the margin).
    """
    occupied = set(snake)
    while True:
        x, y = (int(v) for v in rng.integers(0, grid_size, size=2))
        if (x, y) not in occupied:
            return x, y


def initial_state(config: SnakeConfig) -> GameState:
    """Board shown before the first start (NotStarted)."""
    return GameState(
        snake=config.initial_snake(),
        apple=config.initial_apple(),
        direction=config.initial_direction,
    )


def new_game(config: SnakeConfig, rng: RandomSource) -> GameState:
    """Fresh Running state: single segment, zero score, new apple."""
    snake = config.initial_snake()
    return GameState(
        snake=snake,
        apple=generate_apple(snake, config.grid_size, rng),
        direction=config.initial_direction,
        game_started=True,
    )


def advance(state: GameState, direction: str, rng: RandomSource, config: SnakeConfig) -> GameState:
    """Run one tick and return the next state.

    States that are not running are returned unchanged. A collision freezes
    the snake, apple and score as they were and only flips game_over. The
    apple check uses the new head before the tail is dropped, so eating
    grows the snake by exactly one segment. Reaching config.max_apples ends
    the session within the same tick.
    """
    if not state.running:
        return state

    new_head = step(state.head, direction)
    kind = collision_kind(new_head, state.snake, config.grid_size)
    if kind is not None:
        return replace(state, game_over=True, outcome=kind)

    snake = (new_head,) + state.snake
    score = state.score
    apples_eaten = state.apples_eaten
    apple = state.apple

    if new_head == state.apple:
        score += config.points_per_apple
        apples_eaten += 1
        apple = generate_apple(snake, config.grid_size, rng)
    else:
        snake = snake[:-1]

    complete = apples_eaten >= config.max_apples
    return replace(
        state,
        snake=snake,
        apple=apple,
        direction=direction,
        score=score,
        apples_eaten=apples_eaten,
        game_over=complete,
        outcome=OUTCOME_COMPLETE if complete else None,
    )


def board_array(state: GameState, grid_size: int = GRID_SIZE) -> np.ndarray:
    """Encode the board as a (grid, grid) int8 array indexed [y, x]."""
    board = np.full((grid_size, grid_size), EMPTY, dtype=np.int8)
    if in_bounds(state.apple, grid_size):
        board[state.apple[1], state.apple[0]] = APPLE
    for idx, (x, y) in enumerate(state.snake):
        board[y, x] = HEAD if idx == 0 else BODY
    return board


class SnakeGame:
    """Single-threaded game actor: current state, pending input, and the rng.

    Input handlers call change_direction() at any time; only tick() moves
    the snake, consuming the latest accepted direction once.
    """
    def __init__(
        self,
        config: SnakeConfig | None = None,
        rng: RandomSource | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config if config is not None else SnakeConfig()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.state = initial_state(self.config)
        self.pending_direction = self.config.initial_direction  # last accepted input
        self._game_over_listeners: list[Callable[[GameState], None]] = []
        self._start_listeners: list[Callable[[GameState], None]] = []

    def add_game_over_listener(self, listener: Callable[[GameState], None]) -> None:
        self._game_over_listeners.append(listener)

    def add_start_listener(self, listener: Callable[[GameState], None]) -> None:
        self._start_listeners.append(listener)

    @property
    def status(self) -> str:
        return self.state.status

    def start(self) -> GameState:
        """Enter Running from any state with a freshly reset board."""
        self.state = new_game(self.config, self.rng)
        self.pending_direction = self.config.initial_direction
        logger.info("Session started; apple at %s", self.state.apple)
        for listener in self._start_listeners:
            listener(self.state)
        return self.state

    restart = start

    def change_direction(self, direction: str) -> bool:
        """Queue a direction; reject reversals and input outside Running."""
        if not self.state.running:
            return False
        if direction not in OPPOSITES:
            return False
        if OPPOSITES[self.pending_direction] == direction:
            return False
        self.pending_direction = direction
        return True

    def tick(self) -> bool:
        """Advance one step. Returns False once the session is over."""
        if not self.state.running:
            return False

        self.state = advance(self.state, self.pending_direction, self.rng, self.config)
        logger.debug("Tick: head=%s score=%d", self.state.head, self.state.score)
        if self.state.game_over:
            logger.info(
                "Session over (%s): score=%d apples=%d",
                self.state.outcome,
                self.state.score,
                self.state.apples_eaten,
            )
            for listener in self._game_over_listeners:
                listener(self.state)
            return False
        return True
