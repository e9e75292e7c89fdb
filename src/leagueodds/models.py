"""Match records, team registries and outcome tiers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class Match:
    """A fixture as delivered by the data source.

    ``home_goals`` and ``away_goals`` are only set when ``is_complete`` is
    ``True``.
    """

    round: int
    is_complete: bool
    home_team_name: str
    away_team_name: str
    home_goals: Optional[int] = None
    away_goals: Optional[int] = None

    def __str__(self) -> str:
        if self.is_complete:
            return (
                f"{self.home_team_name} {self.home_goals} x {self.away_goals} "
                f"{self.away_team_name} [{self.round}]"
            )
        return f"{self.home_team_name} x {self.away_team_name} [{self.round}]"


@dataclass
class TrialTeam:
    """Disposable standing of a team inside a single trial."""

    name: str
    points: int
    rating: float


@dataclass
class Team:
    """Canonical team record kept for the whole run."""

    name: str
    points: int = 0
    rating: float = 1500.0
    champion_count: int = 0
    continental_count: int = 0
    qualify_continental_count: int = 0
    sub_continental_count: int = 0
    relegation_count: int = 0

    def snapshot(self) -> TrialTeam:
        return TrialTeam(name=self.name, points=self.points, rating=self.rating)

    def count(self, tier: "Tier") -> int:
        return getattr(self, tier.counter)

    def __str__(self) -> str:
        return f"{self.name} \t {self.points} \t {self.rating:.1f}"


class Tier(str, Enum):
    """Outcome band a team can finish a trial in."""

    CHAMPION = "champion"
    CONTINENTAL = "continental"
    QUALIFY_CONTINENTAL = "qualify_continental"
    SUB_CONTINENTAL = "sub_continental"
    RELEGATION = "relegation"

    @property
    def counter(self) -> str:
        """Name of the :class:`Team` attribute counting this tier."""
        return f"{self.value}_count"


# Number of relegated clubs, always the bottom of the table.
RELEGATION_SLOTS = 4

# Rank ranges (start inclusive, stop exclusive) of the tiers measured from the
# top of the table. Champion overlaps the first continental slot.
TOP_TIER_BANDS: Tuple[Tuple[Tier, int, int], ...] = (
    (Tier.CHAMPION, 0, 1),
    (Tier.CONTINENTAL, 0, 4),
    (Tier.QUALIFY_CONTINENTAL, 4, 6),
    (Tier.SUB_CONTINENTAL, 6, 12),
)

MIN_LEAGUE_SIZE = TOP_TIER_BANDS[-1][2] + RELEGATION_SLOTS


def tier_bands(league_size: int) -> Tuple[Tuple[Tier, int, int], ...]:
    """Return the rank ranges of every tier for ``league_size`` clubs.

    For the usual 20-club league the relegation band covers ranks 16 to 19
    and ranks 12 to 15 carry no tier.
    """
    if league_size < MIN_LEAGUE_SIZE:
        raise ValueError(f"league_size must be at least {MIN_LEAGUE_SIZE}")
    return TOP_TIER_BANDS + (
        (Tier.RELEGATION, league_size - RELEGATION_SLOTS, league_size),
    )


@dataclass(frozen=True)
class LinkedMatch:
    """A match with its sides resolved against the team registry."""

    match: Match
    home: Team
    away: Optional[Team]

    @property
    def resolved(self) -> bool:
        return self.away is not None


@dataclass
class League:
    """Team registry and linked schedule produced by the rating phase."""

    teams: Dict[str, Team]
    fixtures: List[LinkedMatch] = field(default_factory=list)
    skipped: int = 0
    trials: int = 0

    def __len__(self) -> int:
        return len(self.teams)

    def __iter__(self) -> Iterator[Team]:
        return iter(self.teams.values())

    def get(self, name: str) -> Optional[Team]:
        return self.teams.get(name)

    def probability(self, name: str, tier: Tier) -> float:
        """Share of trials ``name`` finished in ``tier``."""
        team = self.teams.get(name)
        if team is None:
            raise KeyError(name)
        if self.trials == 0:
            return 0.0
        return team.count(tier) / self.trials
