# Shared helpers: input mapping, a manual clock, autoplay and score statistics.
from __future__ import annotations

import heapq
import itertools
import random
from typing import Any, Callable

import numpy as np

try:
    from .game_controller import GameController
    from .game_logic import ACTIONS, Direction, SnakeConfig, is_valid_turn, step
except ImportError:
    from game_controller import GameController
    from game_logic import ACTIONS, Direction, SnakeConfig, is_valid_turn, step


# Tk keysyms; letters are matched case-insensitively by direction_for_key.
KEY_TO_DIRECTION: dict[str, Direction] = {
    "Up": "up",
    "Down": "down",
    "Left": "left",
    "Right": "right",
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
}
PAUSE_KEYS = ("p", "P")


def direction_for_key(keysym: str) -> Direction | None:
    """Map a raw key to a direction intent; unknown keys give None."""
    if keysym in KEY_TO_DIRECTION:
        return KEY_TO_DIRECTION[keysym]
    return KEY_TO_DIRECTION.get(keysym.lower()) if len(keysym) == 1 else None


def swipe_direction(start: tuple[float, float], end: tuple[float, float]) -> Direction | None:
    """Direction of a drag gesture from its dominant axis of displacement."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if dx == 0 and dy == 0:
        return None
    if abs(dx) > abs(dy):
        return "right" if dx > 0 else "left"
    return "down" if dy > 0 else "up"


class ManualScheduler:
    """Deterministic stand-in for Tk's after/after_cancel, advanced by hand."""

    def __init__(self) -> None:
        self.now = 0
        self._queue: list[tuple[int, int, Callable[[], Any]]] = []
        self._cancelled: set[int] = set()
        self._ids = itertools.count(1)

    def after(self, ms: int, func: Callable[[], Any]) -> int:
        timer_id = next(self._ids)
        heapq.heappush(self._queue, (self.now + int(ms), timer_id, func))
        return timer_id

    def after_cancel(self, id: int) -> None:
        self._cancelled.add(id)

    @property
    def pending(self) -> int:
        return sum(1 for _, timer_id, _ in self._queue if timer_id not in self._cancelled)

    def run_next(self) -> bool:
        """Fire the earliest live timer. Returns False when nothing is pending."""
        while self._queue:
            due, timer_id, func = heapq.heappop(self._queue)
            if timer_id in self._cancelled:
                self._cancelled.discard(timer_id)
                continue
            self.now = max(self.now, due)
            func()
            return True
        return False

    def advance(self, ms: int) -> int:
        """Fire every live timer due within the next ms; returns how many fired."""
        deadline = self.now + ms
        fired = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, timer_id, func = heapq.heappop(self._queue)
            if timer_id in self._cancelled:
                self._cancelled.discard(timer_id)
                continue
            self.now = due
            func()
            fired += 1
        self.now = deadline
        return fired


def _wrapped_delta(source: int, target: int, size: int) -> int:
    """Signed shortest move from source to target on a ring of the given size."""
    delta = (target - source) % size
    return delta - size if delta > size // 2 else delta


def autopilot_direction(game: GameController, rng: random.Random | None = None) -> Direction:
    """
    Pick a turn that heads for the food along the shorter wrapped distance,
    preferring moves that do not bite the body this tick.
    """
    cfg = game.config
    head, food = game.head, game.food
    dx = _wrapped_delta(head % cfg.width, food % cfg.width, cfg.width)
    dy = _wrapped_delta(head // cfg.width, food // cfg.width, cfg.height)

    preferred: list[Direction] = []
    if dx:
        preferred.append("right" if dx > 0 else "left")
    if dy:
        preferred.append("down" if dy > 0 else "up")
    others = [d for d in ACTIONS if d not in preferred]
    (rng or random).shuffle(others)

    body = set(game.snake[1:])  # the tail cell frees up during the move
    candidates = [d for d in preferred + others if is_valid_turn(game.snake, d, cfg)]
    for direction in candidates:
        if step(head, direction, cfg) not in body:
            return direction
    return candidates[0] if candidates else game.direction


def run_autoplay_game(
    game: GameController,
    scheduler: ManualScheduler,
    max_ticks: int,
    rng: random.Random | None = None,
) -> tuple[int, int]:
    """Play one game from a fresh restart. Returns (final length, ticks played)."""
    game.restart()
    ticks = 0
    while game.status == "running" and ticks < max_ticks:
        game.queue_direction(autopilot_direction(game, rng))
        if not scheduler.run_next():
            break
        ticks += 1
    game.pause()
    return len(game.snake), ticks


def chunked_mean(values: list[float], chunk_size: int) -> tuple[np.ndarray, np.ndarray]:
    """Compute mean value per fixed-size chunk."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")

    arr = np.asarray(values, dtype=np.float32)
    if arr.size == 0:
        empty = np.array([], dtype=np.float32)
        return empty, empty

    x_end: list[float] = []
    means: list[float] = []
    for start in range(0, arr.size, chunk_size):
        chunk = arr[start : start + chunk_size]
        x_end.append(float(start + chunk.size))
        means.append(float(np.mean(chunk)))

    return np.asarray(x_end, dtype=np.float32), np.asarray(means, dtype=np.float32)


def summarize_scores(scores: list[float]) -> dict[str, float]:
    """Summary statistics printed by the simulator."""
    if not scores:
        raise ValueError("scores cannot be empty")
    arr = np.asarray(scores, dtype=np.float32)
    return {
        "Mean score": float(arr.mean()),
        "Median score": float(np.median(arr)),
        "Max score": float(arr.max()),
        "Min score": float(arr.min()),
        "Std dev": float(arr.std()),
        "25th percentile": float(np.percentile(arr, 25)),
        "75th percentile": float(np.percentile(arr, 75)),
    }


def make_game(scheduler: ManualScheduler, config: SnakeConfig | None = None, seed: int | None = None) -> GameController:
    return GameController(scheduler, config, rng=random.Random(seed))
