import random

import numpy as np
import pytest

from game_logic import SnakeConfig
from simulate import simulate
from utils import (
    ManualScheduler,
    autopilot_direction,
    chunked_mean,
    direction_for_key,
    make_game,
    run_autoplay_game,
    summarize_scores,
    swipe_direction,
)

SMALL = SnakeConfig(width=10, height=8)


@pytest.mark.parametrize(
    "keysym,expected",
    [
        ("Up", "up"),
        ("Left", "left"),
        ("w", "up"),
        ("W", "up"),
        ("d", "right"),
        ("S", "down"),
        ("Escape", None),
        ("x", None),
        ("space", None),
    ],
)
def test_direction_for_key(keysym, expected):
    assert direction_for_key(keysym) == expected


@pytest.mark.parametrize(
    "end,expected",
    [
        ((40, 5), "right"),
        ((-40, 5), "left"),
        ((5, 40), "down"),
        ((5, -40), "up"),
        ((20, 20), "down"),
        ((0, 0), None),
    ],
)
def test_swipe_direction_uses_dominant_axis(end, expected):
    assert swipe_direction((0, 0), end) == expected


def test_manual_scheduler_fires_in_due_order_and_skips_cancelled():
    scheduler = ManualScheduler()
    fired = []
    scheduler.after(30, lambda: fired.append("late"))
    first = scheduler.after(10, lambda: fired.append("cancelled"))
    scheduler.after(20, lambda: fired.append("early"))
    scheduler.after_cancel(first)

    assert scheduler.pending == 2
    assert scheduler.advance(25) == 1
    assert fired == ["early"]
    assert scheduler.now == 25
    assert scheduler.run_next()
    assert fired == ["early", "late"]
    assert not scheduler.run_next()


def test_autopilot_heads_for_food_along_wrapped_distance():
    game = make_game(ManualScheduler(), SMALL, seed=1)
    game.food = 15
    assert autopilot_direction(game) == "up"
    game.food = 48
    assert autopilot_direction(game) == "right"


def test_autopilot_never_reverses():
    game = make_game(ManualScheduler(), SMALL, seed=1)
    game.food = 2
    assert autopilot_direction(game, random.Random(0)) == "down"


def test_run_autoplay_game_stops_and_leaves_game_idle():
    scheduler = ManualScheduler()
    game = make_game(scheduler, SMALL, seed=4)
    length, ticks = run_autoplay_game(game, scheduler, max_ticks=150, rng=random.Random(4))

    assert length >= SMALL.initial_length
    assert 0 < ticks <= 150
    assert game.status in ("paused", "over")
    assert scheduler.pending == 0


def test_simulate_is_deterministic_for_a_seed():
    first = simulate(num_games=3, max_ticks=200, seed=9, config=SMALL, verbose=False)
    second = simulate(num_games=3, max_ticks=200, seed=9, config=SMALL, verbose=False)
    assert first == second
    assert len(first) == 3
    assert all(score >= 0 for score in first)


def test_simulate_rejects_bad_counts():
    with pytest.raises(ValueError):
        simulate(num_games=0, verbose=False)
    with pytest.raises(ValueError):
        simulate(max_ticks=0, verbose=False)


def test_chunked_mean():
    x_end, means = chunked_mean([1, 2, 3, 4, 5], chunk_size=2)
    np.testing.assert_allclose(x_end, [2, 4, 5])
    np.testing.assert_allclose(means, [1.5, 3.5, 5.0])
    with pytest.raises(ValueError):
        chunked_mean([1.0], chunk_size=0)


def test_summarize_scores():
    stats = summarize_scores([1, 2, 3, 4])
    assert stats["Mean score"] == pytest.approx(2.5)
    assert stats["Median score"] == pytest.approx(2.5)
    assert stats["Max score"] == 4
    assert stats["Min score"] == 1
    with pytest.raises(ValueError):
        summarize_scores([])
