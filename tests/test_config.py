"""Tests for data source and predictor configuration."""

import json

import pytest

from qbhq.config import DataSourceConfig, PredictorConfig
from qbhq.data.ingestion.providers import DEFAULT_PLAYERS_URL, HttpCsvProvider, StaticCsvProvider
from qbhq.data.metric_aliases import PASS_YARDS_ALLOWED, SACKS
from qbhq.models.player import PlayerSeasonRecord
from qbhq.models.team_stats import TeamWeekStats


def test_data_source_defaults(monkeypatch):
    for name in ("QBHQ_PLAYERS_URL", "QBHQ_TEAM_STATS_URL", "QBHQ_HTTP_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)

    config = DataSourceConfig.from_env()

    assert config.players_url == DEFAULT_PLAYERS_URL
    assert config.timeout is None
    assert isinstance(config.build_provider(), HttpCsvProvider)


def test_data_source_env_overrides(monkeypatch):
    monkeypatch.setenv("QBHQ_PLAYERS_URL", "https://example.test/qb.csv")
    monkeypatch.setenv("QBHQ_HTTP_TIMEOUT", "7.5")

    config = DataSourceConfig.from_env()
    provider = config.build_provider()

    assert provider.players_url == "https://example.test/qb.csv"
    assert provider.timeout == 7.5


def test_bad_timeout_rejected(monkeypatch):
    monkeypatch.setenv("QBHQ_HTTP_TIMEOUT", "soon")

    with pytest.raises(ValueError):
        DataSourceConfig.from_env()


def test_local_files_take_precedence(tmp_path):
    players = tmp_path / "qb.csv"
    team = tmp_path / "team.csv"
    players.write_text("Name\n")
    team.write_text("team,week\n")

    config = DataSourceConfig(players_csv=str(players), team_stats_csv=str(team))

    assert isinstance(config.build_provider(), StaticCsvProvider)


def test_predictor_config_from_dict_keeps_missing_defaults():
    config = PredictorConfig.from_dict({"weights": {PASS_YARDS_ALLOWED: 1}})

    assert config.weights == {PASS_YARDS_ALLOWED: 1.0}
    assert config.metric_aliases[SACKS] == [["sack"]]


def test_predictor_config_file_round_trip(tmp_path):
    path = tmp_path / "predictor.json"
    config = PredictorConfig.from_dict({"weights": {SACKS: 0.5}, "metric_aliases": {SACKS: [["sk"]]}})

    config.save_to_file(str(path))
    loaded = PredictorConfig.load_from_file(str(path))

    assert loaded.to_dict() == config.to_dict()


def test_predictor_config_rejects_non_object(tmp_path):
    path = tmp_path / "predictor.json"
    path.write_text(json.dumps([1, 2]))

    with pytest.raises(ValueError):
        PredictorConfig.load_from_file(str(path))


def test_build_predictor_applies_aliases_and_weights():
    rows = [
        TeamWeekStats(id="KC-w1", team="KC", week=1, stats={"def_sk": 4.0, "pass_yds_allowed": 300.0}),
        TeamWeekStats(id="BUF-w1", team="BUF", week=1, stats={"def_sk": 2.0, "pass_yds_allowed": 200.0}),
    ]
    config = PredictorConfig.from_dict({"weights": {SACKS: 1.0}, "metric_aliases": {SACKS: [["sk"]]}})

    qb = PlayerSeasonRecord(id="p1", name="Sample QB", passing_yards=1000)

    prediction = config.build_predictor(rows).predict_snapshot(qb, rows[0])

    assert prediction.metrics_used == (SACKS,)
    assert prediction.final_factor == pytest.approx(0.75)


def test_predictor_config_rejects_bare_string_alias():
    with pytest.raises(ValueError):
        PredictorConfig.from_dict({"metric_aliases": {SACKS: ["sack"]}})
