"""Default model parameters and the validated simulation configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import InvalidConfigurationError
from .models import MIN_LEAGUE_SIZE

# ---------------------------------------------------------------------------
# Default simulation parameters
# ---------------------------------------------------------------------------

# Number of Monte Carlo completions of the remaining schedule.
DEFAULT_TRIAL_COUNT = 200_000

# Uniform samples averaged per simulated match. Higher values shrink the
# noise and make results follow the ratings more closely.
DEFAULT_STABILITY = 3

# Rating update magnitude applied after every played match.
DEFAULT_K_FACTOR = 160.0

# Rating given to every team before the first match is replayed.
DEFAULT_INITIAL_RATING = 1500.0

# Rating difference scale of the logistic expected score.
DEFAULT_RATING_SCALE = 200.0

# Goal weights of the actual-result proxy. Away goals weigh more, which
# builds a home bias into the rating signal.
DEFAULT_HOME_GOAL_WEIGHT = 0.9
DEFAULT_AWAY_GOAL_WEIGHT = 1.1

# Score thresholds of a simulated match. Anything in between is a draw.
DEFAULT_HOME_WIN_THRESHOLD = 0.70
DEFAULT_AWAY_WIN_THRESHOLD = -0.80

# Number of clubs the tier bands are laid out for.
DEFAULT_LEAGUE_SIZE = 20

# Default number of parallel jobs. Use all available cores.
DEFAULT_JOBS = os.cpu_count() or 1


@dataclass(frozen=True)
class SimulationConfig:
    """Options shared by the rating phase and the Monte Carlo phase."""

    trial_count: int = DEFAULT_TRIAL_COUNT
    stability: int = DEFAULT_STABILITY
    rating_k_factor: float = DEFAULT_K_FACTOR
    league_size: int = DEFAULT_LEAGUE_SIZE
    initial_rating: float = DEFAULT_INITIAL_RATING
    rating_scale: float = DEFAULT_RATING_SCALE
    home_goal_weight: float = DEFAULT_HOME_GOAL_WEIGHT
    away_goal_weight: float = DEFAULT_AWAY_GOAL_WEIGHT
    home_win_threshold: float = DEFAULT_HOME_WIN_THRESHOLD
    away_win_threshold: float = DEFAULT_AWAY_WIN_THRESHOLD

    def validate(self) -> "SimulationConfig":
        """Raise :class:`InvalidConfigurationError` for out-of-range values."""
        if self.trial_count <= 0:
            raise InvalidConfigurationError("trial_count must be greater than 0")
        if self.stability <= 0:
            raise InvalidConfigurationError("stability must be greater than 0")
        if self.rating_k_factor <= 0:
            raise InvalidConfigurationError("rating_k_factor must be greater than 0")
        if self.rating_scale <= 0:
            raise InvalidConfigurationError("rating_scale must be greater than 0")
        if self.league_size < MIN_LEAGUE_SIZE:
            raise InvalidConfigurationError(
                f"league_size must be at least {MIN_LEAGUE_SIZE}"
            )
        if self.away_win_threshold >= self.home_win_threshold:
            raise InvalidConfigurationError(
                "away_win_threshold must be lower than home_win_threshold"
            )
        return self
