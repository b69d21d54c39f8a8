# Core Snake rules on a wrap-around grid, independent from GUI/controller code.
from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Literal, Sequence


# Fixed game constants; the GUI does not expose these as settings.
GRID_WIDTH = 30
GRID_HEIGHT = 30
CELL_SIZE = 20
INITIAL_LENGTH = 5
BASE_SPEED_MS = 100
SPEED_FLOOR_LENGTH = 90
MIN_SPEED_MS = BASE_SPEED_MS - SPEED_FLOOR_LENGTH

Direction = Literal["up", "down", "left", "right"]
ACTIONS: tuple[Direction, ...] = ("up", "down", "left", "right")


@dataclass(frozen=True)
class SnakeConfig:
    """Board and pacing constants shared between the logic layer and GUI."""
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    cell_size: int = CELL_SIZE
    initial_length: int = INITIAL_LENGTH
    base_speed_ms: int = BASE_SPEED_MS
    speed_floor_length: int = SPEED_FLOOR_LENGTH

    @property
    def cell_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class AdvanceResult:
    """Outcome of one tick. On collision the body is returned untouched."""
    snake: tuple[int, ...]
    ate_food: bool = False
    collided: bool = False


def step(position: int, direction: str, config: SnakeConfig) -> int:
    """Translate a linear cell index by one tile, wrapping at every edge."""
    width = config.width
    col = position % width
    row = position // width

    if direction == "left":
        return position + width - 1 if col == 0 else position - 1
    if direction == "right":
        return position - width + 1 if col == width - 1 else position + 1
    if direction == "up":
        return position + config.cell_count - width if row == 0 else position - width
    if direction == "down":
        return position - config.cell_count + width if row == config.height - 1 else position + width
    raise ValueError(f"Unknown direction: {direction!r}")


def initial_snake(config: SnakeConfig) -> tuple[int, ...]:
    """Body for a fresh game: head at the board center, tail extending left."""
    head = (config.height // 2) * config.width + config.width // 2
    body = [head]
    for _ in range(config.initial_length - 1):
        body.append(step(body[-1], "left", config))
    body.reverse()
    return tuple(body)


def place_food(snake: Sequence[int], config: SnakeConfig, rng: random.Random | None = None) -> int:
    """Pick a uniformly random cell that the snake does not occupy."""
    occupied = set(snake)
    free_cells = [pos for pos in range(config.cell_count) if pos not in occupied]
    if not free_cells:
        # A snake filling the whole board is not a supported game state.
        raise RuntimeError("No free cell left for food.")
    return (rng or random).choice(free_cells)


def advance(snake: Sequence[int], direction: str, food: int, config: SnakeConfig) -> AdvanceResult:
    """Advance one tick: collide, grow onto food, or slide forward."""
    body = tuple(snake)
    new_head = step(body[-1], direction, config)

    if new_head in body:
        return AdvanceResult(snake=body, collided=True)
    if new_head == food:
        return AdvanceResult(snake=body + (new_head,), ate_food=True)
    return AdvanceResult(snake=body[1:] + (new_head,))


def is_valid_turn(snake: Sequence[int], direction: str, config: SnakeConfig) -> bool:
    """Reject unknown directions and instant reversals into the neck."""
    if direction not in ACTIONS:
        return False
    if len(snake) > 1 and step(snake[-1], direction, config) == snake[-2]:
        return False
    return True


def speed_interval(length: int, config: SnakeConfig) -> int:
    """Tick delay in ms; shrinks with length until the floor length is reached."""
    return config.base_speed_ms - min(length, config.speed_floor_length)


def score_for(snake: Sequence[int], config: SnakeConfig) -> int:
    return len(snake) - config.initial_length


def adjacency(position: int, snake: Sequence[int], toward_head: bool, config: SnakeConfig) -> Direction | None:
    """
    Side of a body cell that joins its neighbour segment, for drawing.

    toward_head=True looks at the next segment towards the head, False at the
    one towards the tail. Offsets across the wrap seam map to the same sides
    as the ordinary ones, so a body split by an edge still reads as joined.
    """
    try:
        idx = list(snake).index(position)
    except ValueError:
        return None
    neighbour_idx = idx + 1 if toward_head else idx - 1
    if neighbour_idx < 0 or neighbour_idx >= len(snake):
        return None

    offset = position - snake[neighbour_idx]
    width = config.width
    seam = config.cell_count - width
    if offset in (-1, width - 1):
        return "right"
    if offset in (1, -(width - 1)):
        return "left"
    if offset in (-width, seam):
        return "down"
    if offset in (width, -seam):
        return "up"
    return None
