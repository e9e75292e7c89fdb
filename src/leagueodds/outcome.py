"""Stochastic result model for a single unplayed match.

The home side's expected score from the rating gap is perturbed by a noise
term, the mean of ``stability`` uniform draws in ``[-1, 1]``, and the sum is
compared against two asymmetric thresholds. Ratings are never updated here;
only points move.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from .config import (
    DEFAULT_AWAY_WIN_THRESHOLD,
    DEFAULT_HOME_WIN_THRESHOLD,
    DEFAULT_RATING_SCALE,
)
from .models import TrialTeam
from .ratings import expected_score


class MatchOutcome(str, Enum):
    HOME_WIN = "home"
    DRAW = "draw"
    AWAY_WIN = "away"


def sample_noise(
    rng: np.random.Generator, stability: int, size: int | None = None
) -> float | np.ndarray:
    """Average ``stability`` uniform samples in ``[-1, 1]``.

    With ``size`` set an array of ``size`` independent noise values is
    returned instead of a scalar.
    """
    if stability <= 0:
        raise ValueError("stability must be greater than 0")
    if size is None:
        return float(rng.uniform(-1.0, 1.0, size=stability).mean())
    return rng.uniform(-1.0, 1.0, size=(size, stability)).mean(axis=1)


def decide(
    score: float,
    home_threshold: float = DEFAULT_HOME_WIN_THRESHOLD,
    away_threshold: float = DEFAULT_AWAY_WIN_THRESHOLD,
) -> MatchOutcome:
    if score > home_threshold:
        return MatchOutcome.HOME_WIN
    if score < away_threshold:
        return MatchOutcome.AWAY_WIN
    return MatchOutcome.DRAW


def simulate_match(
    home: TrialTeam,
    away: TrialTeam,
    stability: int,
    rng: np.random.Generator,
    *,
    noise: float | None = None,
    scale: float = DEFAULT_RATING_SCALE,
    home_threshold: float = DEFAULT_HOME_WIN_THRESHOLD,
    away_threshold: float = DEFAULT_AWAY_WIN_THRESHOLD,
) -> MatchOutcome:
    """Play ``home`` against ``away`` and award the points.

    ``noise`` may be supplied by callers that draw a whole trial's noise in
    one call; otherwise it is sampled from ``rng``.
    """
    if noise is None:
        noise = sample_noise(rng, stability)
    score = expected_score(home.rating, away.rating, scale) + noise
    outcome = decide(score, home_threshold, away_threshold)

    if outcome is MatchOutcome.HOME_WIN:
        home.points += 3
    elif outcome is MatchOutcome.AWAY_WIN:
        away.points += 3
    else:
        home.points += 1
        away.points += 1
    return outcome
