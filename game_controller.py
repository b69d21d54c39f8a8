# Game state machine: pause/run/over transitions and the self-rescheduling tick.
from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Any, Callable, Literal, Protocol

try:
    from .game_logic import (
        Direction,
        SnakeConfig,
        adjacency,
        advance,
        initial_snake,
        is_valid_turn,
        place_food,
        score_for,
        speed_interval,
    )
except ImportError:
    from game_logic import (
        Direction,
        SnakeConfig,
        adjacency,
        advance,
        initial_snake,
        is_valid_turn,
        place_food,
        score_for,
        speed_interval,
    )

GameStatus = Literal["paused", "running", "over"]


class Scheduler(Protocol):
    """Anything with Tk's single-shot timer API (a tk.Tk root works as-is)."""

    def after(self, ms: int, func: Callable[[], Any]) -> Any: ...

    def after_cancel(self, id: Any) -> None: ...


@dataclass(frozen=True)
class CellView:
    """Everything the renderer needs to draw one grid cell."""
    is_snake: bool
    is_food: bool
    adjacency_to_head: Direction | None
    adjacency_to_tail: Direction | None


class GameController:
    """Owns snake, food, pending direction and status; all mutation goes through here."""

    def __init__(
        self,
        scheduler: Scheduler,
        config: SnakeConfig | None = None,
        rng: random.Random | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.scheduler = scheduler
        self.config = config or SnakeConfig()
        self.rng = rng or random.Random()
        self.on_change = on_change
        self.after_id: Any = None  # scheduler handle for the pending tick
        self._generation = 0       # bumped on every arm/cancel; stale callbacks compare against it
        self.status: GameStatus = "paused"
        self._reset_board()

    def _reset_board(self) -> None:
        self.snake = initial_snake(self.config)
        self.direction: Direction = "right"
        self.food = place_food(self.snake, self.config, self.rng)

    @property
    def head(self) -> int:
        return self.snake[-1]

    @property
    def score(self) -> int:
        return score_for(self.snake, self.config)

    @property
    def speed_ms(self) -> int:
        return speed_interval(len(self.snake), self.config)

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def _cancel_loop(self) -> None:
        """Cancel the scheduled tick callback if one exists."""
        self._generation += 1
        if self.after_id is not None:
            self.scheduler.after_cancel(self.after_id)
            self.after_id = None

    def _arm(self) -> None:
        """Schedule exactly one tick after the current speed interval."""
        self._cancel_loop()
        generation = self._generation
        self.after_id = self.scheduler.after(self.speed_ms, lambda: self._on_timer(generation))

    def _on_timer(self, generation: int) -> None:
        if generation != self._generation:
            return
        self.after_id = None
        self.tick()

    def resume(self) -> None:
        """Start or resume live ticking; ignored unless paused."""
        if self.status != "paused":
            return
        self.status = "running"
        self._arm()
        self._notify()

    def pause(self) -> None:
        """Pause without losing board state; ignored unless running."""
        if self.status != "running":
            return
        self.status = "paused"
        self._cancel_loop()
        self._notify()

    def toggle_pause(self) -> None:
        if self.status == "running":
            self.pause()
        else:
            self.resume()

    def restart(self) -> None:
        """Fresh snake and food, running immediately."""
        self._cancel_loop()
        self._reset_board()
        self.status = "running"
        self._arm()
        self._notify()

    def queue_direction(self, direction: str) -> bool:
        """Store a turn for the next tick if it does not reverse into the neck."""
        if self.status == "over":
            return False
        if not is_valid_turn(self.snake, direction, self.config):
            return False
        self.direction = direction  # type: ignore[assignment]
        return True

    def tick(self) -> None:
        """Single frame of the game loop; reschedules itself while running."""
        if self.status != "running":
            return

        result = advance(self.snake, self.direction, self.food, self.config)
        if result.collided:
            self.status = "over"
            self._cancel_loop()
            self._notify()
            return

        self.snake = result.snake
        if result.ate_food:
            self.food = place_food(self.snake, self.config, self.rng)

        self._arm()
        self._notify()

    def cell_views(self) -> list[CellView]:
        """Render input for every cell index, in board order."""
        body = set(self.snake)
        views = []
        for pos in range(self.config.cell_count):
            if pos in body:
                views.append(
                    CellView(
                        is_snake=True,
                        is_food=pos == self.food,
                        adjacency_to_head=adjacency(pos, self.snake, True, self.config),
                        adjacency_to_tail=adjacency(pos, self.snake, False, self.config),
                    )
                )
            else:
                views.append(CellView(False, pos == self.food, None, None))
        return views
