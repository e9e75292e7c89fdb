"""Tabular views of a rated or simulated league."""

from __future__ import annotations

import pandas as pd

from .models import League, Tier

TIER_COLUMNS = [tier.value for tier in Tier]


def standings_table(league: League) -> pd.DataFrame:
    """Current points and ratings after the played matches."""
    df = pd.DataFrame(
        [{"team": t.name, "points": t.points, "rating": t.rating} for t in league],
        columns=["team", "points", "rating"],
    )
    df = df.sort_values(
        ["points", "rating", "team"], ascending=[False, False, True]
    ).reset_index(drop=True)
    df.insert(0, "position", range(1, len(df) + 1))
    return df


def summary_table(league: League) -> pd.DataFrame:
    """Return the standings with one probability column per tier.

    Probabilities come from :meth:`League.probability`.
    """
    if league.trials <= 0:
        raise ValueError("league has not been simulated")
    df = standings_table(league)
    for tier in Tier:
        df[tier.value] = [
            league.probability(name, tier) for name in df["team"]
        ]
    return df[["position", "team", "points", "rating"] + TIER_COLUMNS]
