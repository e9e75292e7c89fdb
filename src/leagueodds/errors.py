"""Exceptions raised by the rating and simulation engine."""

from __future__ import annotations


class LeagueOddsError(Exception):
    """Base class for every error raised by ``leagueodds``."""


class DataIntegrityError(LeagueOddsError, ValueError):
    """Match history is malformed and ratings cannot be trusted."""


class RosterSizeError(LeagueOddsError, ValueError):
    """The number of teams does not match the tier bands."""

    def __init__(self, found: int, expected: int) -> None:
        super().__init__(f"expected {expected} teams, found {found}")
        self.found = found
        self.expected = expected


class InvalidConfigurationError(LeagueOddsError, ValueError):
    """A simulation option is outside its allowed range."""


class SimulationCancelled(LeagueOddsError):
    """The run was cancelled before every trial completed."""

    def __init__(self, completed: int, total: int) -> None:
        super().__init__(f"simulation cancelled after {completed} of {total} trials")
        self.completed = completed
        self.total = total
