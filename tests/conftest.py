import sys, os; sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

import numpy as np
import pytest

from leagueodds import Match


def team_names(n: int = 20) -> list[str]:
    return [f"Club {i:02d}" for i in range(n)]


def double_round_robin(names: list[str]) -> list[list[tuple[str, str]]]:
    """Circle-method schedule: every pair meets once at each ground."""
    teams = list(names)
    n = len(teams)
    first = []
    for r in range(n - 1):
        pairs = []
        for i in range(n // 2):
            a, b = teams[i], teams[n - 1 - i]
            pairs.append((a, b) if r % 2 == 0 else (b, a))
        first.append(pairs)
        teams = [teams[0], teams[-1]] + teams[1:-1]
    second = [[(b, a) for a, b in pairs] for pairs in first]
    return first + second


def league_matches(
    n_teams: int = 20, played_rounds: int = 19, seed: int = 7
) -> list[Match]:
    """A full schedule with the first ``played_rounds`` rounds already played."""
    rng = np.random.default_rng(seed)
    matches = []
    for rnd, pairs in enumerate(double_round_robin(team_names(n_teams)), start=1):
        for home, away in pairs:
            if rnd <= played_rounds:
                matches.append(
                    Match(
                        round=rnd,
                        is_complete=True,
                        home_team_name=home,
                        away_team_name=away,
                        home_goals=int(rng.poisson(1.4)),
                        away_goals=int(rng.poisson(1.0)),
                    )
                )
            else:
                matches.append(Match(rnd, False, home, away))
    return matches


@pytest.fixture
def matches() -> list[Match]:
    return league_matches()
