"""Reading fixture lists into :class:`~leagueodds.models.Match` records.

Two sources are understood: SportsClubStats text exports and CSV files with
``round, home_team, away_team, home_score, away_score`` columns. Both pass
through a pandas DataFrame before being turned into matches.
"""

from __future__ import annotations

import re
from dataclasses import replace
from pathlib import Path
from typing import Iterable, List

import numpy as np
import pandas as pd
from loguru import logger

from .errors import DataIntegrityError
from .models import Match

# ---------------------------------------------------------------------------
# Parsing utilities
# ---------------------------------------------------------------------------
SCORE_PATTERN = re.compile(
    r"(\d+/\d+/\d+)\s+(.+?)\s+(\d+)-(\d+)\s+(.+?)\s*(?:\(ID:.*)?$"
)
NOSCORE_PATTERN = re.compile(
    r"(\d+/\d+/\d+)\s+(.+?)\s{2,}(.+?)\s*(?:\(ID:.*)?$"
)

FRAME_COLUMNS = ["home_team", "away_team", "home_score", "away_score"]


def _parse_date(date_str: str) -> pd.Timestamp:
    parts = date_str.split("/")
    year = parts[-1]
    if len(year) == 4:
        return pd.to_datetime(date_str, format="%d/%m/%Y")
    return pd.to_datetime(date_str, format="%m/%d/%y")


def parse_matches(path: str | Path) -> pd.DataFrame:
    """Return a DataFrame of fixtures and results from a SportsClubStats file."""
    rows: list[dict] = []
    in_games = False
    saw_begin = False
    saw_end = False
    with open(path, "r", encoding="utf-8-sig") as f:
        for line in f:
            stripped = line.strip()
            if stripped == "GamesBegin":
                saw_begin = True
                in_games = True
                continue
            if stripped == "GamesEnd":
                saw_end = True
                break
            if not in_games:
                continue
            line = line.rstrip("\n")
            # Skip known metadata lines that may appear within the games section
            if not line or line.startswith("TeamListedFirst:"):
                continue
            m = SCORE_PATTERN.match(line)
            if m:
                date_str, home, hs, as_, away = m.groups()
                rows.append(
                    {
                        "date": _parse_date(date_str),
                        "home_team": home.strip(),
                        "away_team": away.strip(),
                        "home_score": int(hs),
                        "away_score": int(as_),
                    }
                )
                continue
            m = NOSCORE_PATTERN.match(line)
            if m:
                date_str, home, away = m.groups()
                rows.append(
                    {
                        "date": _parse_date(date_str),
                        "home_team": home.strip(),
                        "away_team": away.strip(),
                        "home_score": np.nan,
                        "away_score": np.nan,
                    }
                )
                continue
            raise ValueError(f"Unrecognized line in matches file: {line}")
    if not (saw_begin and saw_end):
        raise ValueError("Matches file must contain 'GamesBegin' and 'GamesEnd' markers")
    return pd.DataFrame(rows, columns=["date"] + FRAME_COLUMNS)


def _whole_number(value, row: pd.Series, what: str) -> int:
    """Return ``value`` as an int, rejecting blanks, text and fractions."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = float("nan")
    if not number.is_integer():
        raise DataIntegrityError(
            f"{row['home_team']} x {row['away_team']}: bad {what} {value}"
        )
    return int(number)


def matches_from_frame(df: pd.DataFrame) -> List[Match]:
    """Convert a fixtures DataFrame into matches.

    Rounds come from the ``round`` column when present, otherwise from the
    dense rank of ``date`` so every distinct match day is its own round.
    """
    missing = [c for c in FRAME_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"fixtures are missing columns: {', '.join(missing)}")

    if "round" in df.columns:
        rounds = df["round"]
    elif "date" in df.columns:
        rounds = pd.to_datetime(df["date"]).rank(method="dense")
    else:
        raise ValueError("fixtures need either a 'round' or a 'date' column")

    matches = []
    for rnd, (_, row) in zip(rounds, df.iterrows()):
        home_na = pd.isna(row["home_score"])
        away_na = pd.isna(row["away_score"])
        if home_na != away_na:
            raise DataIntegrityError(
                f"{row['home_team']} x {row['away_team']}: only one score given"
            )
        complete = not home_na
        matches.append(
            Match(
                round=_whole_number(rnd, row, "round"),
                is_complete=complete,
                home_team_name=str(row["home_team"]).strip(),
                away_team_name=str(row["away_team"]).strip(),
                home_goals=_whole_number(row["home_score"], row, "home_score") if complete else None,
                away_goals=_whole_number(row["away_score"], row, "away_score") if complete else None,
            )
        )
    return matches


def load_matches(path: str | Path) -> List[Match]:
    """Read ``path`` (SportsClubStats text or ``.csv``) into matches."""
    path = Path(path)
    if path.suffix.lower() == ".csv":
        df = pd.read_csv(path)
    else:
        df = parse_matches(path)
    matches = matches_from_frame(df)
    logger.debug(
        "Loaded {} matches ({} played) from {}",
        len(matches),
        sum(1 for m in matches if m.is_complete),
        path,
    )
    return matches


def reset_results_from(matches: Iterable[Match], start_round: int) -> List[Match]:
    """Return copies of ``matches`` with results from ``start_round`` on cleared."""
    return [
        replace(m, is_complete=False, home_goals=None, away_goals=None)
        if m.round >= start_round
        else m
        for m in matches
    ]
