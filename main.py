"""Command-line interface for estimating league tier probabilities."""

# pylint: disable=wrong-import-position

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

import argparse

import numpy as np
from loguru import logger

try:  # Optional dependency for progress bars
    from tqdm import tqdm  # type: ignore
except Exception:  # pragma: no cover - tqdm is optional in tests
    tqdm = None

from leagueodds import (
    LeagueOddsError,
    SimulationConfig,
    load_matches,
    simulate_league,
    summary_table,
)
from leagueodds.config import (
    DEFAULT_JOBS,
    DEFAULT_K_FACTOR,
    DEFAULT_STABILITY,
    DEFAULT_TRIAL_COUNT,
)
from leagueodds.log import setup_logging


def _progress_bar(total: int):
    """Return ``(callback, close)`` driving a tqdm bar from completed fractions."""
    if tqdm is None:
        return None, lambda: None
    bar = tqdm(total=total, desc="Trials", unit="sim")

    def update(fraction: float) -> None:
        bar.update(int(round(fraction * total)) - bar.n)

    return update, bar.close


def main() -> int:
    parser = argparse.ArgumentParser(description="Simulate league tier odds")
    parser.add_argument(
        "--file", default="data/fixtures.txt", help="fixture file path (.txt or .csv)"
    )
    parser.add_argument(
        "--simulations",
        type=int,
        default=DEFAULT_TRIAL_COUNT,
        help="number of simulation runs",
    )
    parser.add_argument(
        "--stability",
        type=int,
        default=DEFAULT_STABILITY,
        help="noise samples averaged per simulated match",
    )
    parser.add_argument(
        "--k-factor",
        type=float,
        default=DEFAULT_K_FACTOR,
        help="rating update magnitude",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="random seed for repeatable simulations",
    )
    parser.add_argument(
        "--no-progress",
        action="store_false",
        dest="progress",
        default=True,
        help="disable the progress bar during simulations",
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=DEFAULT_JOBS,
        help="number of parallel workers",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="fail on played matches whose away team never plays at home",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LEAGUEODDS_LOG_LEVEL", "INFO"),
        help="log level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--html-output",
        default=os.path.join(os.path.dirname(__file__), "league_odds.html"),
        help="path to save summary table as HTML",
    )
    args = parser.parse_args()
    setup_logging(args.log_level)

    config = SimulationConfig(
        trial_count=args.simulations,
        stability=args.stability,
        rating_k_factor=args.k_factor,
    )
    rng = np.random.default_rng(args.seed) if args.seed is not None else None

    callback, close = (
        _progress_bar(args.simulations) if args.progress else (None, lambda: None)
    )
    try:
        matches = load_matches(args.file)
        league = simulate_league(
            matches,
            config,
            rng=rng,
            progress=callback,
            n_jobs=args.jobs,
            strict=args.strict,
        )
    except (LeagueOddsError, OSError, ValueError) as exc:
        logger.error("{}", exc)
        return 1
    finally:
        close()

    summary = summary_table(league)
    if args.html_output:
        summary.to_html(args.html_output, index=False)

    COLS = [
        ("Champion", "champion"),
        ("Continental", "continental"),
        ("Qualify", "qualify_continental"),
        ("Sub-cont.", "sub_continental"),
        ("Relegation", "relegation"),
    ]
    header = "".join(f"{title:^12}" for title, _ in COLS)
    print(f"{'Pos':>3}  {'Team':20s} {'Pts':>4} {'Rating':>8} {header}")
    for _, row in summary.iterrows():
        probs = "".join(f"{row[col]:^12.2%}" for _, col in COLS)
        print(
            f"{row['position']:>3d}  {row['team']:20s} {row['points']:>4d} {row['rating']:>8.1f} {probs}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
