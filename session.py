# Session scoring and persisted high score.
from __future__ import annotations

import json
import logging
import os
from typing import Protocol

try:
    from .game_logic import GameState, SnakeGame
except ImportError:
    from game_logic import GameState, SnakeGame


logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "snakeHighScore"
HIGH_SCORE_ENV = "SNAKE_HIGH_SCORE_FILE"
DEFAULT_HIGH_SCORE_PATH = os.path.join("~", ".snake_evolution", "high_score.json")

TITLE_COMPLETE = "EVOLUTION COMPLETE!"
TITLE_GAME_OVER = "GAME OVER"


class HighScoreStore(Protocol):
    def get(self) -> int: ...

    def set(self, value: int) -> None: ...


class MemoryHighScoreStore:
    """In-process store; nothing survives the interpreter."""
    def __init__(self, value: int = 0) -> None:
        self.value = value
        self.writes = 0

    def get(self) -> int:
        return self.value

    def set(self, value: int) -> None:
        self.value = value
        self.writes += 1


def default_high_score_path() -> str:
    return os.path.expanduser(os.environ.get(HIGH_SCORE_ENV) or DEFAULT_HIGH_SCORE_PATH)


def parse_high_score(raw: object) -> int | None:
    """Decimal string (or int) -> non-negative int; None when malformed."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 0 else None
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not (text.isascii() and text.isdigit()):
        return None
    return int(text)


class JsonHighScoreStore:
    """Key-value JSON file holding {"snakeHighScore": "<decimal>"}."""
    def __init__(self, path: str | None = None, key: str = HIGH_SCORE_KEY) -> None:
        self.path = path if path is not None else default_high_score_path()
        self.key = key

    def _read(self) -> dict:
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable high score file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring high score file %s: expected a JSON object", self.path)
            return {}
        return data

    def get(self) -> int:
        data = self._read()
        if self.key not in data:
            return 0
        value = parse_high_score(data[self.key])
        if value is None:
            logger.warning("Ignoring malformed high score %r in %s", data[self.key], self.path)
            return 0
        return value

    def set(self, value: int) -> None:
        data = self._read()
        data[self.key] = str(int(value))
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
        except OSError:
            logger.exception("Could not write high score to %s", self.path)
            raise

    def clear(self) -> None:
        """Drop the stored key (used by --reset-high-score)."""
        data = self._read()
        if self.key not in data:
            return
        del data[self.key]
        try:
            with open(self.path, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
        except OSError:
            logger.exception("Could not clear high score in %s", self.path)
            raise


class SessionTracker:
    """Running high score; persists a new record at most once per session."""
    def __init__(self, store: HighScoreStore) -> None:
        self.store = store
        self.high_score = store.get()
        self._recorded = False

    def attach(self, game: SnakeGame) -> None:
        """Begin on every start and record on every game over of this game."""
        game.add_start_listener(lambda _state: self.begin())
        game.add_game_over_listener(self.finish)

    def begin(self) -> None:
        self._recorded = False

    def finish(self, state: GameState) -> bool:
        """Record a finished session. Returns True for a new high score."""
        if self._recorded or not state.game_over:
            return False
        self._recorded = True
        if state.score <= self.high_score:
            return False
        logger.info("New high score %d (previous %d)", state.score, self.high_score)
        self.high_score = state.score
        try:
            self.store.set(state.score)
        except OSError:
            # The session still ends normally; the record lives on in memory.
            logger.warning("High score %d kept in memory only", state.score)
        return True


def outcome_title(state: GameState) -> str:
    return TITLE_COMPLETE if state.session_complete else TITLE_GAME_OVER


def outcome_lines(state: GameState) -> list[str]:
    lines = [
        f"Final Score: {state.score}",
        f"Apples Collected: {state.apples_eaten}",
    ]
    if state.session_complete:
        lines.append("SESSION COMPLETED!")
    return lines
