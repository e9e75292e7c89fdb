import sys, os; sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))
from collections import Counter

import numpy as np
import pytest

from leagueodds import (
    Match,
    RosterSizeError,
    SimulationConfig,
    Team,
    Tier,
    assign_tiers,
    compute_ratings,
    run_trial,
)
from leagueodds import simulator
from conftest import league_matches, team_names


def test_run_trial_returns_every_canonical_team_once(matches):
    league = compute_ratings(matches)
    ranked = run_trial(league.teams, league.fixtures, 3, np.random.default_rng(0))
    assert len(ranked) == 20
    assert {t.name for t in ranked} == set(league.teams)
    for team in ranked:
        assert team is league.teams[team.name]


def test_run_trial_leaves_canonical_standings_untouched(matches):
    league = compute_ratings(matches)
    before = {t.name: (t.points, t.rating) for t in league}
    rng = np.random.default_rng(1)
    for _ in range(20):
        run_trial(league.teams, league.fixtures, 3, rng)
    assert {t.name: (t.points, t.rating) for t in league} == before


def test_snapshot_is_independent_of_canonical_team():
    team = Team("A", points=10, rating=1600.0, champion_count=2)
    snap = team.snapshot()
    snap.points += 3
    snap.rating = 0.0
    assert (team.points, team.rating) == (10, 1600.0)
    assert not hasattr(snap, "champion_count")


def test_run_trial_is_reproducible_with_seed(matches):
    league = compute_ratings(matches)
    first = run_trial(league.teams, league.fixtures, 3, np.random.default_rng(42))
    second = run_trial(league.teams, league.fixtures, 3, np.random.default_rng(42))
    assert [t.name for t in first] == [t.name for t in second]


def test_play_remaining_matches_run_trial(matches):
    league = compute_ratings(matches)
    remaining = simulator.pending_fixtures(league.fixtures)
    config = SimulationConfig()
    expected = run_trial(league.teams, league.fixtures, 3, np.random.default_rng(11))
    played = simulator.play_remaining(
        league.teams, remaining, 3, np.random.default_rng(11), config
    )
    assert [t.name for t in played] == [t.name for t in expected]


def test_run_trial_wrong_roster_size_raises():
    league = compute_ratings(league_matches(n_teams=18, played_rounds=10))
    assert len(league) == 18
    with pytest.raises(RosterSizeError) as excinfo:
        run_trial(league.teams, league.fixtures, 3, np.random.default_rng(0))
    assert excinfo.value.found == 18
    assert excinfo.value.expected == 20


def test_finished_season_ranks_by_points_then_rating():
    league = compute_ratings(league_matches(played_rounds=38))
    ranked = run_trial(league.teams, league.fixtures, 3, np.random.default_rng(0))
    keys = [(-t.points, -t.rating, t.name) for t in ranked]
    assert keys == sorted(keys)


def test_rank_table_breaks_ties_by_rating_then_name():
    snaps = [
        Team("C", 10, 1500.0).snapshot(),
        Team("B", 10, 1500.0).snapshot(),
        Team("A", 10, 1400.0).snapshot(),
        Team("D", 12, 1300.0).snapshot(),
    ]
    assert [t.name for t in simulator.rank_table(snaps)] == ["D", "B", "C", "A"]


def test_pending_fixtures_skip_unresolved_and_sort_by_round():
    matches = league_matches(played_rounds=36)
    matches.append(Match(37, False, "Club 00", "Ghost"))
    league = compute_ratings(matches)
    pending = simulator.pending_fixtures(league.fixtures)
    assert len(pending) == 20
    assert all(f.resolved for f in pending)
    rounds = [f.match.round for f in pending]
    assert rounds == sorted(rounds)
    run_trial(league.teams, league.fixtures, 3, np.random.default_rng(0))


def test_assign_tiers_bands():
    ranked = [Team(name) for name in team_names()]
    placements = list(assign_tiers(ranked))
    by_tier = Counter(tier for _, tier in placements)
    assert by_tier == {
        Tier.CHAMPION: 1,
        Tier.CONTINENTAL: 4,
        Tier.QUALIFY_CONTINENTAL: 2,
        Tier.SUB_CONTINENTAL: 6,
        Tier.RELEGATION: 4,
    }
    leader_tiers = {tier for team, tier in placements if team is ranked[0]}
    assert leader_tiers == {Tier.CHAMPION, Tier.CONTINENTAL}
    placed = {team.name for team, _ in placements}
    assert not placed & {t.name for t in ranked[12:16]}
    assert {t.name for t, tier in placements if tier is Tier.RELEGATION} == {
        t.name for t in ranked[16:]
    }


def test_assign_tiers_wrong_size_raises():
    with pytest.raises(RosterSizeError):
        list(assign_tiers([Team(name) for name in team_names(18)]))
