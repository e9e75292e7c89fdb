"""Team registry construction and Elo-style replay of played matches."""

from __future__ import annotations

import math
import numbers
from typing import Dict, Iterable, List, Optional

from loguru import logger

from .config import SimulationConfig
from .errors import DataIntegrityError
from .models import League, LinkedMatch, Match, Team


def expected_score(
    home_rating: float, away_rating: float, scale: float = 200.0
) -> float:
    """Logistic win expectation of the home side."""
    return 1.0 / (1.0 + math.exp(-(home_rating - away_rating) / scale))


def result_score(
    home_goals: int,
    away_goals: int,
    home_weight: float = 0.9,
    away_weight: float = 1.1,
) -> float:
    """Squash a scoreline into (0, 1).

    Away goals are weighted more heavily than home goals, so a draw scores
    below 0.5 for the home side once any goal is scored.
    """
    return 1.0 / (1.0 + math.exp(-(home_weight * home_goals - away_weight * away_goals)))


def _goals(match: Match) -> tuple[int, int]:
    values = []
    for side, goals in (("home", match.home_goals), ("away", match.away_goals)):
        if isinstance(goals, bool) or not isinstance(goals, numbers.Real):
            raise DataIntegrityError(f"{match}: {side} goals missing or not numeric")
        if isinstance(goals, float) and not goals.is_integer():
            raise DataIntegrityError(f"{match}: {side} goals is not a whole number")
        if goals < 0:
            raise DataIntegrityError(f"{match}: {side} goals is negative")
        values.append(int(goals))
    return values[0], values[1]


def build_registry(
    matches: Iterable[Match], initial_rating: float = 1500.0
) -> Dict[str, Team]:
    """Create one team per distinct home-side name, in order of appearance."""
    teams: Dict[str, Team] = {}
    for match in matches:
        if match.home_team_name not in teams:
            teams[match.home_team_name] = Team(
                name=match.home_team_name, points=0, rating=initial_rating
            )
    return teams


def link_matches(matches: Iterable[Match], teams: Dict[str, Team]) -> List[LinkedMatch]:
    """Resolve both sides of every match against ``teams``.

    Away names that never appear as a home side stay unresolved; no team is
    created for them.
    """
    linked = []
    for match in matches:
        home = teams.get(match.home_team_name)
        if home is None:
            raise DataIntegrityError(f"{match}: home team missing from registry")
        away: Optional[Team] = teams.get(match.away_team_name)
        linked.append(LinkedMatch(match=match, home=home, away=away))
    return linked


def apply_result(
    fixture: LinkedMatch,
    config: SimulationConfig,
) -> None:
    """Award points and move ratings for one played match."""
    home, away = fixture.home, fixture.away
    if away is None:
        raise DataIntegrityError(f"{fixture.match}: away team is unresolved")
    hg, ag = _goals(fixture.match)

    if hg == ag:
        home.points += 1
        away.points += 1
    elif hg > ag:
        home.points += 3
    else:
        away.points += 3

    result = result_score(hg, ag, config.home_goal_weight, config.away_goal_weight)
    expected = expected_score(home.rating, away.rating, config.rating_scale)
    diff = result - expected
    home.rating += config.rating_k_factor * diff
    away.rating -= config.rating_k_factor * diff


def compute_ratings(
    matches: Iterable[Match],
    config: SimulationConfig | None = None,
    *,
    strict: bool = False,
) -> League:
    """Build the team registry and replay every played match.

    Played matches are replayed in ascending round order; matches sharing a
    round keep their input order. A played match whose away side never hosts
    a game is skipped and counted in ``League.skipped`` unless ``strict`` is
    set, in which case :class:`DataIntegrityError` is raised.
    """
    if config is None:
        config = SimulationConfig()
    matches = list(matches)

    teams = build_registry(matches, config.initial_rating)
    fixtures = link_matches(matches, teams)

    skipped = 0
    for fixture in sorted(fixtures, key=lambda f: f.match.round):
        if not fixture.match.is_complete:
            continue
        if not fixture.resolved:
            if strict:
                raise DataIntegrityError(
                    f"{fixture.match}: away team {fixture.match.away_team_name!r} "
                    "never plays at home"
                )
            skipped += 1
            continue
        apply_result(fixture, config)

    unresolved = sum(1 for f in fixtures if not f.resolved)
    if skipped:
        logger.warning(
            "Skipped {} played matches with an unresolved away team", skipped
        )
    if unresolved > skipped:
        logger.warning(
            "{} unplayed matches have an unresolved away team and will not be simulated",
            unresolved - skipped,
        )
    logger.debug(
        "Rated {} teams from {} matches ({} played)",
        len(teams),
        len(matches),
        sum(1 for m in matches if m.is_complete),
    )
    return League(teams=teams, fixtures=fixtures, skipped=skipped)
