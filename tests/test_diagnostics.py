"""
Tests for diagnostics.py - FPS meter and overlay text.
"""

from diagnostics import FpsMeter, is_compact_layout, legend_lines, stats_lines


class TestFpsMeter:
    def test_zero_until_second_tick(self):
        meter = FpsMeter()
        assert meter.tick(10.0) == 0

    def test_reports_rounded_rate(self):
        """150 ms between ticks is about 7 ticks per second."""
        meter = FpsMeter()
        meter.tick(1.0)
        assert meter.tick(1.150) == 7

    def test_non_increasing_timestamp_keeps_last_value(self):
        meter = FpsMeter()
        meter.tick(1.0)
        meter.tick(1.1)
        assert meter.tick(1.1) == 10

    def test_reset(self):
        meter = FpsMeter()
        meter.tick(1.0)
        meter.tick(1.5)
        meter.reset()
        assert meter.fps == 0
        assert meter.tick(2.0) == 0


class TestLayout:
    def test_compact_below_breakpoint(self):
        assert is_compact_layout(767)
        assert not is_compact_layout(768)
        assert not is_compact_layout(1280)

    def test_custom_breakpoint(self):
        assert is_compact_layout(500, breakpoint=600)


class TestOverlayText:
    def test_stats_lines(self):
        assert stats_lines(7, False, 30, (4, 9)) == [
            "FPS: 7",
            "Layout: Desktop",
            "Score: 30",
            "Pos: (4, 9)",
        ]

    def test_legend_adds_touch_hint_when_compact(self):
        assert legend_lines(False)[0] == "W  Move Up"
        assert len(legend_lines(False)) == 4
        assert legend_lines(True)[-1] == "Touch controls available below"
