import sys, os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
import pandas as pd

import main
from conftest import league_matches


def _write_csv(path):
    rows = [
        {
            "round": m.round,
            "home_team": m.home_team_name,
            "away_team": m.away_team_name,
            "home_score": m.home_goals,
            "away_score": m.away_goals,
        }
        for m in league_matches(played_rounds=30)
    ]
    pd.DataFrame(rows).to_csv(path, index=False)


def test_main_prints_summary(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(main, "setup_logging", lambda level: None)
    fixtures = tmp_path / "fixtures.csv"
    html = tmp_path / "out.html"
    _write_csv(fixtures)
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "main.py",
            "--file", str(fixtures),
            "--simulations", "200",
            "--seed", "1",
            "--jobs", "1",
            "--no-progress",
            "--html-output", str(html),
        ],
    )
    assert main.main() == 0
    out = capsys.readouterr().out
    assert "Champion" in out
    assert "Club 00" in out
    assert html.exists()


def test_main_passes_options(tmp_path, monkeypatch):
    monkeypatch.setattr(main, "setup_logging", lambda level: None)
    captured = {}

    def fake_simulate_league(matches, config, **kwargs):
        captured["config"] = config
        captured.update(kwargs)
        raise main.LeagueOddsError("stop")

    monkeypatch.setattr(main, "load_matches", lambda path: [])
    monkeypatch.setattr(main, "simulate_league", fake_simulate_league)
    monkeypatch.setattr(
        sys,
        "argv",
        ["main.py", "--simulations", "10", "--stability", "5", "--k-factor", "80",
         "--jobs", "3", "--strict", "--no-progress", "--html-output", ""],
    )
    assert main.main() == 1
    assert captured["config"].trial_count == 10
    assert captured["config"].stability == 5
    assert captured["config"].rating_k_factor == 80.0
    assert captured["n_jobs"] == 3
    assert captured["strict"] is True
    assert captured["progress"] is None


def test_main_missing_file_returns_error(tmp_path, monkeypatch):
    monkeypatch.setattr(main, "setup_logging", lambda level: None)
    monkeypatch.setattr(
        sys,
        "argv",
        ["main.py", "--file", str(tmp_path / "nope.txt"), "--no-progress", "--html-output", ""],
    )
    assert main.main() == 1
