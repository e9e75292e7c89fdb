"""Rating phase followed by the Monte Carlo run.

Trials are grouped in chunks of :data:`REPORT_INTERVAL`. Every chunk draws
from its own generator seeded by the caller's ``rng`` and tallies into its
own :class:`TierCounts`, so serial and parallel runs started from the same
seed give identical counts.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, List, Mapping, Optional, Protocol

import numpy as np
from joblib import Parallel, delayed
from loguru import logger

from .aggregate import TierCounts
from .config import DEFAULT_JOBS, SimulationConfig
from .errors import InvalidConfigurationError, SimulationCancelled
from .models import League, LinkedMatch, Match, Team
from .ratings import compute_ratings
from .simulator import check_roster, pending_fixtures, play_remaining

# Trials per chunk and per progress update.
REPORT_INTERVAL = 100

# Chunks handed to every worker per parallel batch. Cancellation is only
# checked between batches.
_CHUNKS_PER_JOB = 4

ProgressCallback = Callable[[float], None]


class CancelToken(Protocol):
    def is_set(self) -> bool: ...


def _run_chunk(
    teams: Mapping[str, Team],
    remaining: List[LinkedMatch],
    trials: int,
    seed: int,
    config: SimulationConfig,
) -> TierCounts:
    rng = np.random.default_rng(seed)
    counts = TierCounts(teams, config.league_size)
    for _ in range(trials):
        counts.record(play_remaining(teams, remaining, config.stability, rng, config))
    return counts


def _chunk_sizes(total: int, size: int = REPORT_INTERVAL) -> List[int]:
    full, rest = divmod(total, size)
    return [size] * full + ([rest] if rest else [])


def _iterate_chunks(
    teams: Mapping[str, Team],
    remaining: List[LinkedMatch],
    rng: np.random.Generator,
    config: SimulationConfig,
    *,
    n_jobs: int,
    cancel: Optional[CancelToken],
) -> Iterator[TierCounts]:
    """Yield per-chunk counts in chunk order.

    Mirrors the serial and parallel execution paths so results do not depend
    on ``n_jobs``.
    """
    sizes = _chunk_sizes(config.trial_count)
    seeds = rng.integers(0, 2**32 - 1, size=len(sizes))
    done = 0

    def check_cancel() -> None:
        if cancel is not None and cancel.is_set():
            logger.info("Cancelled after {} of {} trials", done, config.trial_count)
            raise SimulationCancelled(done, config.trial_count)

    if n_jobs == 1:
        for size, seed in zip(sizes, seeds):
            check_cancel()
            counts = _run_chunk(teams, remaining, size, int(seed), config)
            done += size
            yield counts
        return

    batch = n_jobs * _CHUNKS_PER_JOB
    with Parallel(n_jobs=n_jobs) as parallel:
        for start in range(0, len(sizes), batch):
            check_cancel()
            results = parallel(
                delayed(_run_chunk)(teams, remaining, size, int(seed), config)
                for size, seed in zip(sizes[start : start + batch], seeds[start : start + batch])
            )
            for counts in results:
                done += counts.trials
                yield counts


def simulate_league(
    matches: Iterable[Match],
    config: SimulationConfig | None = None,
    *,
    rng: np.random.Generator | None = None,
    progress: ProgressCallback | None = None,
    cancel: CancelToken | None = None,
    n_jobs: int = DEFAULT_JOBS,
    strict: bool = False,
) -> League:
    """Rate every team and estimate its tier probabilities.

    Returns the :class:`League` whose canonical teams carry the tier counters
    of ``config.trial_count`` trials. ``progress`` receives the completed
    fraction after every :data:`REPORT_INTERVAL` trials. When ``cancel`` is
    set between chunks :class:`SimulationCancelled` is raised and no counter
    is touched.
    """
    if config is None:
        config = SimulationConfig()
    config.validate()
    if n_jobs <= 0:
        raise InvalidConfigurationError("n_jobs must be greater than 0")

    if rng is None:
        rng = np.random.default_rng()

    league = compute_ratings(matches, config, strict=strict)
    check_roster(league.teams, config.league_size)
    remaining = pending_fixtures(league.fixtures)
    logger.info(
        "Simulating {} remaining matches {} times on {} jobs",
        len(remaining),
        config.trial_count,
        n_jobs,
    )

    totals = TierCounts(league.teams, config.league_size)
    for counts in _iterate_chunks(
        league.teams, remaining, rng, config, n_jobs=n_jobs, cancel=cancel
    ):
        totals.merge(counts)
        if progress is not None:
            progress(totals.trials / config.trial_count)

    totals.apply(league.teams)
    league.trials = totals.trials
    logger.debug("Finished {} trials", totals.trials)
    return league
