"""Tier placement tallies.

:class:`TierCounts` is a plain team-by-tier matrix. Every worker fills its own
instance; instances are merged by addition and the total is applied to the
canonical teams once at the end of the run.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

import numpy as np

from .config import DEFAULT_LEAGUE_SIZE
from .models import Team, Tier
from .simulator import assign_tiers

TIERS: tuple[Tier, ...] = tuple(Tier)
_TIER_INDEX = {tier: i for i, tier in enumerate(TIERS)}


class TierCounts:
    """Counts of tier placements per team."""

    def __init__(
        self, names: Iterable[str], league_size: int = DEFAULT_LEAGUE_SIZE
    ) -> None:
        self.names: tuple[str, ...] = tuple(names)
        self.league_size = league_size
        self._index = {name: i for i, name in enumerate(self.names)}
        self.counts = np.zeros((len(self.names), len(TIERS)), dtype=np.int64)
        self.trials = 0

    def record(self, ranked: Sequence[Team]) -> None:
        """Add the placements of one ranked trial table."""
        for team, tier in assign_tiers(ranked, self.league_size):
            self.counts[self._index[team.name], _TIER_INDEX[tier]] += 1
        self.trials += 1

    def merge(self, other: "TierCounts") -> "TierCounts":
        if other.names != self.names:
            raise ValueError("cannot merge counts over different teams")
        self.counts += other.counts
        self.trials += other.trials
        return self

    def count(self, name: str, tier: Tier) -> int:
        return int(self.counts[self._index[name], _TIER_INDEX[tier]])

    def apply(self, teams: Mapping[str, Team]) -> None:
        """Increment the counters of the canonical ``teams``."""
        for name, row in zip(self.names, self.counts):
            team = teams[name]
            for tier, value in zip(TIERS, row):
                setattr(team, tier.counter, team.count(tier) + int(value))
