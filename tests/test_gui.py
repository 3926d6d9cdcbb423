"""
Tests for gui.py - launcher argument handling (no window is opened).
"""

from dataclasses import replace

import pytest

pytest.importorskip("tkinter")

import gui  # noqa: E402
import session  # noqa: E402
from game_logic import GAME_SPEED_MS, UP  # noqa: E402
from session import HIGH_SCORE_ENV, JsonHighScoreStore  # noqa: E402


class TestLauncherArgs:
    def test_defaults(self):
        args = gui.build_parser().parse_args([])
        assert args.speed_ms == GAME_SPEED_MS
        assert args.seed is None
        assert args.high_score_file is None
        assert not args.reset_high_score
        assert gui.config_from_args(args).speed_ms == 150

    def test_out_of_range_speed_is_rejected(self):
        args = gui.build_parser().parse_args(["--speed-ms", "5"])
        with pytest.raises(ValueError):
            gui.config_from_args(args)

    def test_main_reports_bad_config_as_usage_error(self, monkeypatch):
        """Invalid settings exit through argparse before any window opens."""
        monkeypatch.setattr(gui, "run_player_gui", lambda *_a: pytest.fail("window opened"))
        with pytest.raises(SystemExit):
            gui.main(["--speed-ms", "9999"])

    def test_main_wires_store_and_game(self, monkeypatch, tmp_path):
        seen = {}

        def fake_run(game, tracker):
            seen["game"] = game
            seen["tracker"] = tracker

        monkeypatch.setattr(gui, "run_player_gui", fake_run)
        path = tmp_path / "hs.json"
        path.write_text('{"snakeHighScore": "80"}', encoding="utf-8")
        gui.main(["--high-score-file", str(path), "--seed", "3"])
        assert seen["tracker"].high_score == 80
        assert seen["game"].config.speed_ms == 150

    def test_reset_high_score(self, monkeypatch, tmp_path):
        seen = {}
        monkeypatch.setattr(gui, "run_player_gui", lambda game, tracker: seen.setdefault("tracker", tracker))
        path = tmp_path / "hs.json"
        path.write_text('{"snakeHighScore": "80"}', encoding="utf-8")
        gui.main(["--high-score-file", str(path), "--reset-high-score"])
        assert seen["tracker"].high_score == 0

    def test_reset_failure_is_a_usage_error(self, monkeypatch, tmp_path):
        """An unwritable store on --reset-high-score exits through argparse."""
        monkeypatch.setattr(gui, "run_player_gui", lambda *_a: pytest.fail("window opened"))
        path = tmp_path / "hs.json"
        path.write_text('{"snakeHighScore": "80"}', encoding="utf-8")

        def failing_dump(*_args, **_kwargs):
            raise OSError("read-only file system")

        monkeypatch.setattr(session.json, "dump", failing_dump)
        with pytest.raises(SystemExit):
            gui.main(["--high-score-file", str(path), "--reset-high-score"])

    def test_store_path_defaults_to_environment(self, monkeypatch, tmp_path):
        seen = {}
        target = str(tmp_path / "env.json")
        monkeypatch.setenv(HIGH_SCORE_ENV, target)
        monkeypatch.setattr(gui, "run_player_gui", lambda game, tracker: seen.setdefault("tracker", tracker))
        gui.main([])
        assert seen["tracker"].store.path == target

    def test_game_over_reaches_the_store(self, monkeypatch, tmp_path):
        """main() wires the tracker so a finished session is persisted."""
        seen = {}
        monkeypatch.setattr(gui, "run_player_gui", lambda game, tracker: seen.update(game=game, tracker=tracker))
        path = tmp_path / "hs.json"
        gui.main(["--high-score-file", str(path), "--seed", "1"])

        game = seen["game"]
        game.start()
        game.state = replace(game.state, score=40, apple=(0, 19))
        game.change_direction(UP)
        while game.tick():
            pass

        assert JsonHighScoreStore(str(path)).get() == 40
