# Snake player GUI: draws controller state and forwards input intents.
from __future__ import annotations

import tkinter as tk

# Support both package imports and running this file directly.
try:
    from .game_controller import GameController
    from .game_logic import SnakeConfig
    from .utils import PAUSE_KEYS, direction_for_key, swipe_direction
except ImportError:
    from game_controller import GameController
    from game_logic import SnakeConfig
    from utils import PAUSE_KEYS, direction_for_key, swipe_direction


class SnakeApp:
    """Tkinter presentation layer for GameController."""
    UI_SCALE = 1.35
    BG = "#101418"
    BOARD_BG = "#1c2229"
    SIDEBAR_BG = "#0f1720"
    SNAKE_BODY = "#1fb86b"
    SNAKE_HEAD = "#45d483"
    FOOD_COLOR = "#ff5c74"
    TEXT_PRIMARY = "#e6eef7"
    TEXT_MUTED = "#95a4b8"
    ACCENT = "#42c4ff"

    STATE_LABELS = {"paused": "Paused", "running": "Running", "over": "Game Over"}

    def __init__(self, root: tk.Tk, config: SnakeConfig | None = None) -> None:
        self.root = root
        self.root.title("Snake")
        self.root.configure(bg=self.BG)
        self.root.tk.call("tk", "scaling", self.UI_SCALE)

        self.config = config or SnakeConfig()
        # The Tk root doubles as the controller's tick scheduler.
        self.game = GameController(root, self.config, on_change=self.draw)
        self.touch_start: tuple[int, int] | None = None

        self._build_layout()
        self._bind_input()
        self.draw()

    def _s(self, value: int) -> int:
        """Scale pixel/font values for better readability."""
        return int(round(value * self.UI_SCALE))

    def _build_layout(self) -> None:
        """Create game canvas + right sidebar panels."""
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)

        container = tk.Frame(self.root, bg=self.BG)
        container.grid(row=0, column=0, sticky="nsew", padx=self._s(16), pady=self._s(16))

        side = self.config.cell_size
        self.canvas = tk.Canvas(
            container,
            width=self.config.width * side,
            height=self.config.height * side,
            bg=self.BOARD_BG,
            highlightthickness=0,
            bd=0,
            takefocus=1,
        )
        self.canvas.grid(row=0, column=0, sticky="nsew", padx=(0, self._s(16)))

        self.sidebar = tk.Frame(container, bg=self.SIDEBAR_BG, width=self._s(260))
        self.sidebar.grid(row=0, column=1, sticky="ns")
        self.sidebar.grid_propagate(False)

        tk.Label(
            self.sidebar,
            text="Snake",
            fg=self.TEXT_PRIMARY,
            bg=self.SIDEBAR_BG,
            font=("Helvetica", self._s(16), "bold"),
        ).pack(anchor="w", padx=self._s(16), pady=(self._s(16), self._s(6)))

        self._build_status()
        self._build_buttons()

    def _build_status(self) -> None:
        """Top sidebar section with live score/run-state labels."""
        frame = tk.LabelFrame(
            self.sidebar,
            text="Status",
            fg=self.TEXT_PRIMARY,
            bg=self.SIDEBAR_BG,
            bd=1,
            font=("Helvetica", self._s(10), "bold"),
            labelanchor="n",
        )
        frame.pack(fill="x", padx=self._s(16), pady=(0, self._s(14)))

        self.score_var = tk.StringVar(value="Score: 0")
        self.state_var = tk.StringVar(value="State: Paused")

        for var in (self.score_var, self.state_var):
            tk.Label(
                frame,
                textvariable=var,
                fg=self.TEXT_PRIMARY,
                bg=self.SIDEBAR_BG,
                font=("Helvetica", self._s(11)),
                anchor="w",
            ).pack(fill="x", padx=self._s(10), pady=self._s(4))

    def _build_buttons(self) -> None:
        """Action buttons for resume/pause/restart."""
        frame = tk.Frame(self.sidebar, bg=self.SIDEBAR_BG)
        frame.pack(fill="x", padx=self._s(16), pady=(0, self._s(10)))

        for text, command in (
            ("Resume", self.resume_game),
            ("Pause", self.game.pause),
            ("Restart", self.restart_game),
        ):
            self._button(frame, text, command).pack(fill="x", pady=self._s(4))

        tk.Label(
            self.sidebar,
            text="Move: Arrow keys / WASD / drag\nPause/resume: P",
            fg=self.TEXT_MUTED,
            bg=self.SIDEBAR_BG,
            justify="left",
            font=("Helvetica", self._s(10)),
        ).pack(anchor="w", padx=self._s(16), pady=(self._s(4), self._s(10)))

    def _button(self, parent: tk.Widget, text: str, command) -> tk.Button:
        return tk.Button(
            parent,
            text=text,
            command=command,
            fg="#09141f",
            bg=self.ACCENT,
            activebackground="#74d8ff",
            activeforeground="#09141f",
            bd=0,
            relief="flat",
            font=("Helvetica", self._s(11), "bold"),
            padx=self._s(12),
            pady=self._s(9),
            cursor="hand2",
        )

    def _bind_input(self) -> None:
        """Keys and focus drive the game; a press/release pair acts as a swipe."""
        self.canvas.bind("<KeyPress>", self._on_key)
        self.canvas.bind("<FocusIn>", lambda _e: self.game.resume())
        self.canvas.bind("<FocusOut>", lambda _e: self.game.pause())
        self.canvas.bind("<ButtonPress-1>", self._on_press)
        self.canvas.bind("<ButtonRelease-1>", self._on_release)

    def _on_key(self, event: tk.Event) -> None:
        if event.keysym in PAUSE_KEYS:
            self.game.toggle_pause()
            return
        direction = direction_for_key(event.keysym)
        if direction is not None:
            self.game.queue_direction(direction)

    def _on_press(self, event: tk.Event) -> None:
        self.touch_start = (event.x_root, event.y_root)

    def _on_release(self, event: tk.Event) -> None:
        start, self.touch_start = self.touch_start, None
        if self.game.status == "over":
            self.restart_game()
            return
        if self.game.status == "paused":
            self.resume_game()
            return
        if start is None:
            return
        direction = swipe_direction(start, (event.x_root, event.y_root))
        if direction is not None:
            self.game.queue_direction(direction)

    def resume_game(self) -> None:
        self.canvas.focus_set()
        self.game.resume()

    def restart_game(self) -> None:
        self.canvas.focus_set()
        self.game.restart()

    def _draw_connector(self, x1: int, y1: int, x2: int, y2: int, side: str | None, pad: int) -> None:
        """Fill the gap between a segment and the neighbour on the given side."""
        if side is None:
            return
        if side == "up":
            y1 -= pad
        elif side == "down":
            y2 += pad
        elif side == "left":
            x1 -= pad
        else:
            x2 += pad
        self.canvas.create_rectangle(x1, y1, x2, y2, fill=self.SNAKE_BODY, outline="")

    def draw(self) -> None:
        """Render food, snake, status labels, and the paused/game-over overlay."""
        self.canvas.delete("all")
        width = self.config.width
        cell = self.config.cell_size
        pad = 3

        for pos, view in enumerate(self.game.cell_views()):
            if not (view.is_snake or view.is_food):
                continue
            x, y = (pos % width) * cell, (pos // width) * cell
            if view.is_food:
                self.canvas.create_oval(x + 4, y + 4, x + cell - 4, y + cell - 4, fill=self.FOOD_COLOR, outline="")
                continue
            x1, y1, x2, y2 = x + pad, y + pad, x + cell - pad, y + cell - pad
            color = self.SNAKE_HEAD if pos == self.game.head else self.SNAKE_BODY
            self.canvas.create_rectangle(x1, y1, x2, y2, fill=color, outline="")
            self._draw_connector(x1, y1, x2, y2, view.adjacency_to_head, pad)
            self._draw_connector(x1, y1, x2, y2, view.adjacency_to_tail, pad)

        self.score_var.set(f"Score: {self.game.score}")
        self.state_var.set(f"State: {self.STATE_LABELS[self.game.status]}")

        if self.game.status == "running":
            return
        if self.game.status == "over":
            title, hint = "Game over", "Click here to restart"
        else:
            title, hint = "Game paused", "Click here to resume"
        side_w, side_h = width * cell, self.config.height * cell
        self.canvas.create_rectangle(0, 0, side_w, side_h, fill="#000000", stipple="gray50", outline="")
        self.canvas.create_text(
            side_w // 2,
            side_h // 2 - 12,
            text=title,
            fill=self.TEXT_PRIMARY,
            font=("Helvetica", 22, "bold"),
        )
        self.canvas.create_text(
            side_w // 2,
            side_h // 2 + 20,
            text=hint,
            fill=self.TEXT_MUTED,
            font=("Helvetica", 12),
        )


def run_player_gui() -> None:
    """Launch the Snake player interface."""
    root = tk.Tk()
    SnakeApp(root)
    root.mainloop()


if __name__ == "__main__":
    run_player_gui()
