# Tkinter player window for Snake Evolution.
from __future__ import annotations

import logging
import time
import tkinter as tk

import numpy as np

# Support both package imports and running this file directly.
try:
    from .controls import DIRECTION_BUTTONS, Joystick, direction_for_key
    from .diagnostics import (
        CONTROL_LEGEND_TIMEOUT_MS,
        FpsMeter,
        is_compact_layout,
        legend_lines,
        stats_lines,
    )
    from .game_logic import APPLE, EMPTY, HEAD, GameState, SnakeConfig, SnakeGame, board_array
    from .session import SessionTracker, outcome_lines, outcome_title
except ImportError:
    from controls import DIRECTION_BUTTONS, Joystick, direction_for_key
    from diagnostics import (
        CONTROL_LEGEND_TIMEOUT_MS,
        FpsMeter,
        is_compact_layout,
        legend_lines,
        stats_lines,
    )
    from game_logic import APPLE, EMPTY, HEAD, GameState, SnakeConfig, SnakeGame, board_array
    from session import SessionTracker, outcome_lines, outcome_title


logger = logging.getLogger(__name__)


class SnakeApp:
    """Tkinter presentation layer for SnakeGame."""
    BG = "#000000"
    BOARD_BG = "#030712"
    PANEL_BG = "#1f2937"
    GRID_COLOR = "#1f2937"
    SNAKE_HEAD = "#4ade80"
    SNAKE_BODY = "#16a34a"
    APPLE_COLOR = "#ef4444"
    TEXT_PRIMARY = "#4ade80"
    TEXT_MUTED = "#86efac"
    TEXT_ALERT = "#f87171"
    BUTTON_BG = "#16a34a"
    BUTTON_ACTIVE = "#15803d"
    PAD_BG = "#dc2626"
    BORDER_COLOR = "#4ade80"

    BOARD_PX = 400
    COMPACT_BOARD_PX = 320
    JOYSTICK_PX = 96
    KNOB_PX = 32

    def __init__(self, root: tk.Tk, game: SnakeGame, tracker: SessionTracker) -> None:
        self.root = root
        self.root.title("Snake Evolution")
        self.root.configure(bg=self.BG)
        self.root.minsize(360, 560)

        self.game = game
        self.config: SnakeConfig = game.config
        self.tracker = tracker
        self.game.add_game_over_listener(self._on_game_over)

        self.after_id: str | None = None  # Tkinter timer id for the game loop
        self.legend_after_id: str | None = None
        self.fps_meter = FpsMeter()
        self.joystick = Joystick()
        self.compact = False
        self.legend_minimized = False
        self.touch_pad_visible = False

        self._build_layout()
        self._bind_keys()
        self.root.bind("<Configure>", self._on_resize)
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)
        self.legend_after_id = self.root.after(CONTROL_LEGEND_TIMEOUT_MS, self._hide_legend)
        self._apply_canvas_size()
        self.draw()

    # Layout

    def _build_layout(self) -> None:
        """Title, HUD, board and touch pad on the left; stats and legend on the right."""
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)

        container = tk.Frame(self.root, bg=self.BG)
        container.grid(row=0, column=0, sticky="nsew", padx=16, pady=16)
        container.columnconfigure(0, weight=1)

        self.main = tk.Frame(container, bg=self.BG)
        self.main.grid(row=0, column=0, sticky="n")

        tk.Label(
            self.main,
            text="SNAKE EVOLUTION",
            fg=self.TEXT_PRIMARY,
            bg=self.BG,
            font=("Courier", 28, "bold"),
        ).pack(pady=(0, 4))
        tk.Label(
            self.main,
            text=f"Collect {self.config.max_apples} apples to complete your evolution!",
            fg=self.TEXT_MUTED,
            bg=self.BG,
            font=("Courier", 11),
        ).pack(pady=(0, 12))

        self._build_hud()

        self.canvas = tk.Canvas(
            self.main,
            bg=self.BOARD_BG,
            highlightthickness=4,
            highlightbackground=self.BORDER_COLOR,
            bd=0,
        )
        self.canvas.pack()
        # Overlay buttons are embedded in the canvas with create_window.
        self.start_btn = self._button(self.canvas, "START GAME", self.start_game)
        self.again_btn = self._button(self.canvas, "PLAY AGAIN", self.start_game)

        self._build_touch_pad()

        self.sidebar = tk.Frame(container, bg=self.BG)
        self.sidebar.grid(row=0, column=1, sticky="n", padx=(16, 0))
        self._build_stats()
        self._build_legend()

    def _build_hud(self) -> None:
        hud = tk.Frame(self.main, bg=self.BG)
        hud.pack(pady=(0, 12))

        self.score_var = tk.StringVar()
        self.high_var = tk.StringVar()
        self.apples_var = tk.StringVar()
        for var in (self.score_var, self.high_var, self.apples_var):
            tk.Label(
                hud,
                textvariable=var,
                fg=self.TEXT_PRIMARY,
                bg=self.PANEL_BG,
                font=("Courier", 13, "bold"),
                padx=10,
                pady=6,
                highlightthickness=1,
                highlightbackground=self.BORDER_COLOR,
            ).pack(side="left", padx=6)

    def _build_stats(self) -> None:
        frame = tk.LabelFrame(
            self.sidebar,
            text="Stats",
            fg=self.TEXT_PRIMARY,
            bg=self.PANEL_BG,
            bd=1,
            font=("Courier", 10, "bold"),
            labelanchor="n",
        )
        frame.pack(fill="x", pady=(0, 12))
        self.stats_var = tk.StringVar()
        tk.Label(
            frame,
            textvariable=self.stats_var,
            fg="#ffffff",
            bg=self.PANEL_BG,
            justify="left",
            font=("Courier", 10),
        ).pack(anchor="w", padx=8, pady=6)

    def _build_legend(self) -> None:
        self.legend = tk.LabelFrame(
            self.sidebar,
            text="Controls",
            fg=self.TEXT_PRIMARY,
            bg=self.PANEL_BG,
            bd=1,
            font=("Courier", 10, "bold"),
            labelanchor="n",
        )
        self.legend_var = tk.StringVar()
        self.legend_body = tk.Label(
            self.legend,
            textvariable=self.legend_var,
            fg="#ffffff",
            bg=self.PANEL_BG,
            justify="left",
            font=("Courier", 10),
        )
        self.legend_body.pack(anchor="w", padx=8, pady=6)
        self.legend_toggle = self._button(self.legend, "▼", self._toggle_legend, small=True)
        self.legend_toggle.pack(anchor="e", padx=4, pady=(0, 4))
        self.legend.pack(fill="x")

        # Shown in place of the legend once it auto-hides.
        self.legend_reopen = self._button(self.sidebar, "?", self._show_legend, small=True)

    def _build_touch_pad(self) -> None:
        """Joystick + cross pad; only visible in compact layout while running."""
        self.touch_pad = tk.Frame(self.main, bg=self.BG)

        stick = tk.Frame(self.touch_pad, bg=self.BG)
        stick.pack(side="left", padx=(0, 24))
        size = self.JOYSTICK_PX
        self.joystick_canvas = tk.Canvas(
            stick, width=size, height=size, bg=self.BG, highlightthickness=0, bd=0
        )
        self.joystick_canvas.pack()
        self.joystick_canvas.create_oval(
            2, 2, size - 2, size - 2, fill=self.PANEL_BG, outline=self.BORDER_COLOR, width=2
        )
        half = self.KNOB_PX // 2
        self.knob = self.joystick_canvas.create_oval(
            size // 2 - half,
            size // 2 - half,
            size // 2 + half,
            size // 2 + half,
            fill=self.SNAKE_HEAD,
            outline="",
        )
        tk.Label(stick, text="MOVE", fg=self.TEXT_PRIMARY, bg=self.BG, font=("Courier", 9)).pack()

        self.joystick_canvas.bind("<ButtonPress-1>", self._on_joystick_press)
        self.joystick_canvas.bind("<B1-Motion>", self._on_joystick_move)
        self.joystick_canvas.bind("<ButtonRelease-1>", self._on_joystick_release)

        pad = tk.Frame(self.touch_pad, bg=self.BG)
        pad.pack(side="left")
        for label, direction, row, column in DIRECTION_BUTTONS:
            btn = tk.Button(
                pad,
                text=label,
                width=3,
                fg="#ffffff",
                bg=self.PAD_BG,
                activebackground="#b91c1c",
                bd=0,
                relief="flat",
                font=("Courier", 14, "bold"),
            )
            # Fire on press like a touch button, not on release.
            btn.bind("<ButtonPress-1>", lambda _e, d=direction: self._request_direction(d))
            btn.grid(row=row, column=column, padx=2, pady=2)

    def _button(self, parent: tk.Widget, text: str, command, small: bool = False) -> tk.Button:
        return tk.Button(
            parent,
            text=text,
            command=command,
            fg="#ffffff",
            bg=self.BUTTON_BG,
            activebackground=self.BUTTON_ACTIVE,
            activeforeground="#ffffff",
            bd=0,
            relief="flat",
            font=("Courier", 10 if small else 16, "bold"),
            padx=6 if small else 16,
            pady=2 if small else 10,
            cursor="hand2",
        )

    # Input

    def _bind_keys(self) -> None:
        self.root.bind("<KeyPress>", self._on_key)

    def _on_key(self, event: tk.Event) -> None:
        direction = direction_for_key(event.keysym)
        if direction is not None:
            self._request_direction(direction)

    def _request_direction(self, direction: str) -> None:
        # Applied at the next tick boundary.
        self.game.change_direction(direction)

    def _joystick_center(self) -> tuple[float, float]:
        return self.JOYSTICK_PX / 2, self.JOYSTICK_PX / 2

    def _on_joystick_press(self, _event: tk.Event) -> None:
        self.joystick.press(self._joystick_center())

    def _on_joystick_move(self, event: tk.Event) -> None:
        direction = self.joystick.move(event.x, event.y)
        self._place_knob()
        if direction is not None:
            self._request_direction(direction)

    def _on_joystick_release(self, _event: tk.Event) -> None:
        self.joystick.release()
        self._place_knob()

    def _place_knob(self) -> None:
        cx, cy = self._joystick_center()
        ox, oy = self.joystick.knob_offset
        half = self.KNOB_PX / 2
        self.joystick_canvas.coords(
            self.knob, cx + ox - half, cy + oy - half, cx + ox + half, cy + oy + half
        )

    # Layout state

    def _on_resize(self, event: tk.Event) -> None:
        if event.widget is not self.root:
            return
        compact = is_compact_layout(event.width)
        if compact == self.compact:
            return
        self.compact = compact
        logger.debug("Compact layout: %s", compact)
        self._apply_canvas_size()
        self.draw()

    def _board_px(self) -> int:
        return self.COMPACT_BOARD_PX if self.compact else self.BOARD_PX

    def _apply_canvas_size(self) -> None:
        side = self._board_px()
        self.canvas.configure(width=side, height=side)

    def _sync_touch_pad(self) -> None:
        visible = self.compact and self.game.state.running
        if visible == self.touch_pad_visible:
            return
        self.touch_pad_visible = visible
        if visible:
            self.touch_pad.pack(pady=(16, 0))
        else:
            self.joystick.release()
            self._place_knob()
            self.touch_pad.pack_forget()

    def _hide_legend(self) -> None:
        self.legend_after_id = None
        if self.legend_minimized:
            return
        self.legend.pack_forget()
        self.legend_reopen.pack(anchor="w")

    def _show_legend(self) -> None:
        self.legend_reopen.pack_forget()
        self.legend.pack(fill="x")

    def _toggle_legend(self) -> None:
        self.legend_minimized = not self.legend_minimized
        self.legend_toggle.configure(text="▲" if self.legend_minimized else "▼")
        self._show_legend()
        self.draw()

    # Game loop

    def _cancel_loop(self) -> None:
        """Cancel scheduled tick callback if one exists."""
        if self.after_id is not None:
            self.root.after_cancel(self.after_id)
            self.after_id = None

    def start_game(self) -> None:
        """Start (or restart) a session and schedule the first tick."""
        self._cancel_loop()
        self.game.start()
        self.fps_meter.reset()
        self.draw()
        self.after_id = self.root.after(self.config.speed_ms, self.tick)

    def tick(self) -> None:
        """Single step of the game loop; reschedules itself while running."""
        self.after_id = None
        if not self.game.state.running:
            return

        self.fps_meter.tick(time.perf_counter())
        alive = self.game.tick()
        self.draw()
        if alive:
            self.after_id = self.root.after(self.config.speed_ms, self.tick)

    def _on_game_over(self, _state: GameState) -> None:
        self._cancel_loop()

    def _on_close(self) -> None:
        self._cancel_loop()
        if self.legend_after_id is not None:
            self.root.after_cancel(self.legend_after_id)
            self.legend_after_id = None
        self.root.destroy()

    # Rendering

    def draw(self) -> None:
        """Render board, HUD, stats, and the start or game-over overlay."""
        state = self.game.state
        self.canvas.delete("all")
        size = self.config.grid_size
        side = self._board_px()
        cell = side / size

        self.score_var.set(f"Score: {state.score}")
        self.high_var.set(f"High: {self.tracker.high_score}")
        self.apples_var.set(f"Apples: {state.apples_eaten}/{self.config.max_apples}")
        self.stats_var.set("\n".join(stats_lines(self.fps_meter.fps, self.compact, state.score, state.head)))
        self.legend_var.set("" if self.legend_minimized else "\n".join(legend_lines(self.compact)))
        self._sync_touch_pad()

        if not state.game_started:
            self._draw_start_screen(side)
            return

        if self.config.show_grid:
            for i in range(size + 1):
                pos = i * cell
                self.canvas.create_line(0, pos, side, pos, fill=self.GRID_COLOR)
                self.canvas.create_line(pos, 0, pos, side, fill=self.GRID_COLOR)

        board = board_array(state, size)
        for y, x in np.argwhere(board != EMPTY):
            x1, y1 = x * cell, y * cell
            if board[y, x] == APPLE:
                self.canvas.create_oval(
                    x1 + 2, y1 + 2, x1 + cell - 2, y1 + cell - 2, fill=self.APPLE_COLOR, outline=""
                )
                continue
            color = self.SNAKE_HEAD if board[y, x] == HEAD else self.SNAKE_BODY
            self.canvas.create_rectangle(x1 + 1, y1 + 1, x1 + cell - 1, y1 + cell - 1, fill=color, outline="")

        if state.game_over:
            self._draw_game_over(state, side)

    def _draw_start_screen(self, side: int) -> None:
        mid = side // 2
        self.canvas.create_text(
            mid, mid - 60, text="Ready to Evolve?", fill=self.TEXT_PRIMARY, font=("Courier", 20, "bold")
        )
        self.canvas.create_text(
            mid,
            mid - 20,
            text="Use WASD keys to guide your snake\nand collect apples to grow!",
            fill=self.TEXT_MUTED,
            justify="center",
            font=("Courier", 10),
        )
        self.canvas.create_window(mid, mid + 40, window=self.start_btn)

    def _draw_game_over(self, state: GameState, side: int) -> None:
        mid = side // 2
        self.canvas.create_rectangle(0, 0, side, side, fill="#000000", stipple="gray75", outline="")
        self.canvas.create_text(
            mid, mid - 70, text=outcome_title(state), fill=self.TEXT_ALERT, font=("Courier", 22, "bold")
        )
        for offset, line in enumerate(outcome_lines(state)):
            self.canvas.create_text(
                mid, mid - 30 + offset * 22, text=line, fill=self.TEXT_PRIMARY, font=("Courier", 12)
            )
        self.canvas.create_window(mid, mid + 60, window=self.again_btn)


def run_player_gui(game: SnakeGame, tracker: SessionTracker) -> None:
    """Launch the Snake Evolution window."""
    root = tk.Tk()
    SnakeApp(root, game, tracker)
    root.mainloop()
