"""Single season-completion trial.

A trial copies the canonical standings, plays every unplayed fixture through
:func:`leagueodds.outcome.simulate_match`, ranks the final table and maps it
back onto the canonical teams. Tier placement of a ranked table is provided
by :func:`assign_tiers`.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Sequence, Tuple

import numpy as np

from .config import DEFAULT_LEAGUE_SIZE, SimulationConfig
from .errors import RosterSizeError
from .models import LinkedMatch, Team, Tier, TrialTeam, tier_bands
from .outcome import sample_noise, simulate_match


def check_roster(teams: Mapping[str, Team], league_size: int) -> None:
    if len(teams) != league_size:
        raise RosterSizeError(len(teams), league_size)


def pending_fixtures(fixtures: Sequence[LinkedMatch]) -> List[LinkedMatch]:
    """Unplayed fixtures with both sides resolved, in ascending round order."""
    pending = [f for f in fixtures if not f.match.is_complete and f.resolved]
    return sorted(pending, key=lambda f: f.match.round)


def rank_table(snapshots: Sequence[TrialTeam]) -> List[TrialTeam]:
    """Order by points, then post-history rating, then name."""
    return sorted(snapshots, key=lambda t: (-t.points, -t.rating, t.name))


def run_trial(
    teams: Mapping[str, Team],
    fixtures: Sequence[LinkedMatch],
    stability: int,
    rng: np.random.Generator,
    *,
    config: SimulationConfig | None = None,
) -> List[Team]:
    """Complete the season once and return the canonical teams ranked.

    Canonical teams are only read: points are accumulated on per-trial
    :class:`TrialTeam` snapshots which are discarded afterwards.
    """
    if config is None:
        config = SimulationConfig()
    check_roster(teams, config.league_size)
    return play_remaining(teams, pending_fixtures(fixtures), stability, rng, config)


def play_remaining(
    teams: Mapping[str, Team],
    remaining: Sequence[LinkedMatch],
    stability: int,
    rng: np.random.Generator,
    config: SimulationConfig,
) -> List[Team]:
    """Trial body for callers that already checked the roster.

    ``remaining`` must come from :func:`pending_fixtures`.
    """
    snapshots: Dict[str, TrialTeam] = {
        name: team.snapshot() for name, team in teams.items()
    }
    if remaining:
        noise = sample_noise(rng, stability, size=len(remaining))
        for fixture, n in zip(remaining, noise):
            simulate_match(
                snapshots[fixture.match.home_team_name],
                snapshots[fixture.match.away_team_name],
                stability,
                rng,
                noise=float(n),
                scale=config.rating_scale,
                home_threshold=config.home_win_threshold,
                away_threshold=config.away_win_threshold,
            )

    return [teams[t.name] for t in rank_table(list(snapshots.values()))]


def assign_tiers(
    ranked: Sequence[Team], league_size: int = DEFAULT_LEAGUE_SIZE
) -> Iterator[Tuple[Team, Tier]]:
    """Yield ``(team, tier)`` for every tier placement of a ranked table.

    The leader is yielded twice, once as champion and once as continental.
    """
    if len(ranked) != league_size:
        raise RosterSizeError(len(ranked), league_size)
    for tier, start, stop in tier_bands(league_size):
        for team in ranked[start:stop]:
            yield team, tier
