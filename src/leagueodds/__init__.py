"""Convenience exports for the league odds package."""

from .aggregate import TierCounts
from .config import (
    DEFAULT_JOBS,
    DEFAULT_K_FACTOR,
    DEFAULT_LEAGUE_SIZE,
    DEFAULT_STABILITY,
    DEFAULT_TRIAL_COUNT,
    SimulationConfig,
)
from .errors import (
    DataIntegrityError,
    InvalidConfigurationError,
    LeagueOddsError,
    RosterSizeError,
    SimulationCancelled,
)
from .fixtures import load_matches, matches_from_frame, parse_matches, reset_results_from
from .models import League, LinkedMatch, Match, Team, Tier, TrialTeam
from .outcome import MatchOutcome, simulate_match
from .ratings import compute_ratings
from .report import standings_table, summary_table
from .runner import simulate_league
from .simulator import assign_tiers, run_trial

__all__ = [
    "Match",
    "Team",
    "TrialTeam",
    "LinkedMatch",
    "League",
    "Tier",
    "MatchOutcome",
    "TierCounts",
    "SimulationConfig",
    "parse_matches",
    "matches_from_frame",
    "load_matches",
    "reset_results_from",
    "compute_ratings",
    "simulate_match",
    "run_trial",
    "assign_tiers",
    "simulate_league",
    "standings_table",
    "summary_table",
    "LeagueOddsError",
    "DataIntegrityError",
    "RosterSizeError",
    "InvalidConfigurationError",
    "SimulationCancelled",
    "DEFAULT_TRIAL_COUNT",
    "DEFAULT_STABILITY",
    "DEFAULT_K_FACTOR",
    "DEFAULT_LEAGUE_SIZE",
    "DEFAULT_JOBS",
]
