import random

import pytest

from game_logic import (
    ACTIONS,
    MIN_SPEED_MS,
    SnakeConfig,
    adjacency,
    advance,
    initial_snake,
    is_valid_turn,
    place_food,
    score_for,
    speed_interval,
    step,
)

SMALL = SnakeConfig(width=10, height=8)


def test_wrap_up_from_top_left_on_default_board():
    assert step(0, "up", SnakeConfig()) == 870


@pytest.mark.parametrize(
    "position,direction,expected",
    [
        (0, "left", 9),
        (9, "right", 0),
        (13, "left", 12),
        (19, "right", 10),
        (74, "down", 4),
        (4, "up", 74),
        (25, "down", 35),
        (25, "up", 15),
    ],
)
def test_step_moves_and_wraps(position, direction, expected):
    assert step(position, direction, SMALL) == expected


def test_step_stays_in_range_and_cycles_back():
    for pos in range(SMALL.cell_count):
        for direction in ACTIONS:
            assert 0 <= step(pos, direction, SMALL) < SMALL.cell_count

        current = pos
        for _ in range(SMALL.width):
            current = step(current, "left", SMALL)
        assert current == pos

        current = pos
        for _ in range(SMALL.height):
            current = step(current, "down", SMALL)
        assert current == pos


def test_step_rejects_unknown_direction():
    with pytest.raises(ValueError):
        step(0, "north", SMALL)


def test_initial_snake_is_centered_and_heads_right():
    snake = initial_snake(SnakeConfig())
    assert snake == (461, 462, 463, 464, 465)


def test_initial_snake_wraps_on_narrow_board():
    cfg = SnakeConfig(width=6, height=4)
    snake = initial_snake(cfg)
    assert snake == (17, 12, 13, 14, 15)
    assert all(step(a, "right", cfg) == b for a, b in zip(snake, snake[1:]))


def test_advance_without_food_drops_tail():
    result = advance((1, 2, 3), "right", 50, SMALL)
    assert not result.collided and not result.ate_food
    assert result.snake == (2, 3, 4)


def test_advance_onto_food_grows_by_one():
    old = (1, 2, 3)
    result = advance(old, "right", 4, SMALL)
    assert result.ate_food
    assert result.snake == old + (4,)


def test_advance_reports_collision_and_keeps_body():
    snake = (5, 6, 7, 16, 15)
    result = advance(snake, "up", 50, SMALL)
    assert result.collided
    assert result.snake == snake


def test_advance_across_the_seam():
    result = advance((7, 8, 9), "right", 50, SMALL)
    assert result.snake == (8, 9, 0)


def test_place_food_avoids_snake():
    rng = random.Random(3)
    snake = tuple(range(0, SMALL.cell_count - 3))
    for _ in range(50):
        assert place_food(snake, SMALL, rng) not in snake


def test_place_food_on_full_board_raises():
    cfg = SnakeConfig(width=2, height=2)
    with pytest.raises(RuntimeError):
        place_food((0, 1, 2, 3), cfg)


def test_turn_back_into_neck_is_rejected():
    snake = (1, 2, 3)
    assert not is_valid_turn(snake, "left", SMALL)
    assert is_valid_turn(snake, "up", SMALL)
    assert is_valid_turn(snake, "down", SMALL)
    assert is_valid_turn(snake, "right", SMALL)


def test_single_segment_turns_freely():
    for direction in ACTIONS:
        assert is_valid_turn((44,), direction, SMALL)


def test_unknown_turn_is_rejected():
    assert not is_valid_turn((1, 2, 3), "sideways", SMALL)


def test_speed_curve_and_floor():
    cfg = SnakeConfig()
    assert speed_interval(50, cfg) == 50
    assert speed_interval(120, cfg) == MIN_SPEED_MS == 10
    assert speed_interval(5, cfg) == 95


def test_score_is_length_over_initial():
    assert score_for(initial_snake(SMALL), SMALL) == 0
    assert score_for(tuple(range(8)), SMALL) == 3


def test_adjacency_in_straight_body():
    snake = (1, 2, 3)
    assert adjacency(2, snake, True, SMALL) == "right"
    assert adjacency(2, snake, False, SMALL) == "left"
    assert adjacency(3, snake, True, SMALL) is None
    assert adjacency(1, snake, False, SMALL) is None
    assert adjacency(40, snake, True, SMALL) is None


def test_adjacency_vertical_and_across_seams():
    vertical = (14, 4, 74)
    assert adjacency(14, vertical, True, SMALL) == "up"
    assert adjacency(4, vertical, False, SMALL) == "down"
    assert adjacency(4, vertical, True, SMALL) == "up"
    assert adjacency(74, vertical, False, SMALL) == "down"

    horizontal = (8, 9, 0)
    assert adjacency(9, horizontal, True, SMALL) == "right"
    assert adjacency(0, horizontal, False, SMALL) == "left"
