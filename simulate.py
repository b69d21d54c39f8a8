"""Play Snake headlessly with a simple autopilot and report score statistics."""
from __future__ import annotations

import argparse
import os
import random

# Keep matplotlib cache local for environments without writable home config.
LOCAL_MPLCONFIG = os.path.join(os.path.dirname(os.path.abspath(__file__)), ".mplconfig")
os.makedirs(LOCAL_MPLCONFIG, exist_ok=True)
os.environ.setdefault("MPLCONFIGDIR", LOCAL_MPLCONFIG)

import numpy as np

try:
    from .game_logic import SnakeConfig
    from .utils import ManualScheduler, chunked_mean, make_game, run_autoplay_game, summarize_scores
except ImportError:
    from game_logic import SnakeConfig
    from utils import ManualScheduler, chunked_mean, make_game, run_autoplay_game, summarize_scores


def _print_progress_bar(game_index: int, total: int, bar_length: int = 50) -> None:
    """Print a compact progress bar in the terminal."""
    total_safe = max(1, int(total))
    percent = min(1.0, max(0.0, game_index / total_safe))
    filled = int(bar_length * percent)
    bar = "#" * filled + "-" * (bar_length - filled)
    print(f"\rProgress: |{bar}| {game_index}/{total_safe} ({percent * 100:.1f}%)", end="", flush=True)


def simulate(
    num_games: int = 100,
    max_ticks: int = 5000,
    seed: int | None = None,
    config: SnakeConfig | None = None,
    verbose: bool = True,
) -> list[float]:
    """Run autopilot games and return each game's score."""
    if num_games <= 0:
        raise ValueError("num_games must be > 0")
    if max_ticks <= 0:
        raise ValueError("max_ticks must be > 0")

    cfg = config or SnakeConfig()
    scheduler = ManualScheduler()
    game = make_game(scheduler, cfg, seed=seed)
    policy_rng = random.Random(seed)

    scores: list[float] = []
    for index in range(1, num_games + 1):
        length, _ = run_autoplay_game(game, scheduler, max_ticks, policy_rng)
        scores.append(float(length - cfg.initial_length))
        if verbose:
            _print_progress_bar(index, num_games)
    if verbose:
        print()
    return scores


def print_summary(scores: list[float]) -> None:
    print("=" * 40)
    print("AUTOPLAY RESULTS")
    print("=" * 40)
    for name, value in summarize_scores(scores).items():
        print(f"{name:<20} {value:>15.2f}")
    print("=" * 40)


def plot_scores(scores: list[float], chunk_size: int = 10) -> None:
    import matplotlib.pyplot as plt

    fig, (ax_trend, ax_hist) = plt.subplots(2, 1, figsize=(10, 8))
    fig.subplots_adjust(hspace=0.35)

    ax_trend.set_title(f"Score Trend (Average per {chunk_size} Games)")
    ax_trend.set_xlabel("Game")
    ax_trend.set_ylabel("Score")
    ax_trend.grid(alpha=0.25)
    x_end, means = chunked_mean(scores, chunk_size=chunk_size)
    if x_end.size > 0:
        ax_trend.plot(x_end, means, color="#1f77b4", linewidth=2.2, marker="o", markersize=3)

    ax_hist.set_title("Score Distribution")
    ax_hist.set_xlabel("Score")
    ax_hist.set_ylabel("Count")
    ax_hist.grid(alpha=0.2)
    bins = np.arange(-0.5, int(max(scores)) + 1.5, 1.0)
    ax_hist.hist(scores, bins=bins, color="#44b5a4", alpha=0.85, edgecolor="#17323a")
    mean_all = float(np.mean(scores))
    ax_hist.axvline(mean_all, color="#1f77b4", linestyle="--", linewidth=1.6, label=f"Mean: {mean_all:.2f}")
    ax_hist.legend(loc="upper right")

    plt.show()


def main() -> None:
    parser = argparse.ArgumentParser(description="Run Snake with a headless autopilot")
    parser.add_argument("--games", type=int, default=100, help="Number of games to play")
    parser.add_argument("--max-ticks", type=int, default=5000, help="Tick limit per game")
    parser.add_argument("--seed", type=int, default=None, help="Seed for food placement and autopilot")
    parser.add_argument("--plot", action="store_true", help="Show a matplotlib chart of the scores")
    args = parser.parse_args()

    print(f"Running {args.games} games, up to {args.max_ticks} ticks each...")
    scores = simulate(args.games, args.max_ticks, args.seed)
    print_summary(scores)
    if args.plot:
        plot_scores(scores)


if __name__ == "__main__":
    main()
