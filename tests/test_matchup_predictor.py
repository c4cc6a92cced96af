"""Tests for the matchup predictor and team aggregation."""

import pytest

from qbhq.data.metric_aliases import PASS_TDS_ALLOWED, PASS_YARDS_ALLOWED, SACKS
from qbhq.models.player import PlayerSeasonRecord
from qbhq.models.team_stats import TeamWeekStats, team_week_id
from qbhq.predictors.aggregation import (
    aggregate_team_stats,
    available_weeks,
    league_average,
    select_team_rows,
)
from qbhq.predictors.matchup import NOT_ENOUGH_METRICS, MatchupPredictor


def row(team, week, **stats):
    return TeamWeekStats(id=team_week_id(team, week), team=team, week=week, stats=stats)


def league(kc_values, buf_values, metric="pass_yds_allowed"):
    rows = [row("KC", week, **{metric: v}) for week, v in enumerate(kc_values, start=1)]
    rows += [row("BUF", week, **{metric: v}) for week, v in enumerate(buf_values, start=1)]
    return rows


@pytest.fixture
def qb():
    return PlayerSeasonRecord(id="p1", name="Sample QB", team="DET", passing_yards=3000, passing_touchdowns=24)


def test_factor_one_projects_per_week_average(qb):
    predictor = MatchupPredictor(league([250, 250, 250], [250, 250, 250]))

    prediction = predictor.predict(qb, "KC")

    assert prediction.final_factor == 1.0
    assert prediction.weeks_count == 3
    assert prediction.predicted_passing_yards == 3000 / 3
    assert prediction.predicted_passing_tds == pytest.approx(8.0)
    assert "(0% vs QB per-week avg 1000)" in prediction.summary
    assert "through week All" in prediction.summary
    assert "with metrics: pass yards" in prediction.summary


def test_more_yards_allowed_means_higher_projection(qb):
    baseline = MatchupPredictor(league([250, 250, 250], [250, 250, 250])).predict(qb, "KC")
    softer = MatchupPredictor(league([300, 300, 300], [250, 250, 250])).predict(qb, "KC")

    assert softer.final_factor > baseline.final_factor
    assert softer.predicted_passing_yards > baseline.predicted_passing_yards
    assert softer.final_factor == pytest.approx(300 / 275)


def test_week_cutoff_ignores_later_weeks(qb):
    through_three = league([250, 260, 270], [240, 250, 260])
    with_week_four = through_three + [
        row("KC", 4, pass_yds_allowed=10000),
        row("BUF", 4, pass_yds_allowed=5),
    ]

    scoped = MatchupPredictor(with_week_four).predict(qb, "KC", through_week=3)
    reference = MatchupPredictor(through_three).predict(qb, "KC", through_week=3)
    unscoped = MatchupPredictor(with_week_four).predict(qb, "KC")

    assert scoped == reference
    assert scoped.weeks_count == 3
    assert "through week 3" in scoped.summary
    assert unscoped.predicted_passing_yards != scoped.predicted_passing_yards


def test_rows_without_week_count_under_a_cutoff():
    rows = league([250, 250], [250, 250]) + [row("KC", None, pass_yds_allowed=250)]

    selected = select_team_rows(rows, "KC", through_week=1)

    assert [r.week for r in selected] == [1, None]


def test_unknown_opponent_degrades_to_no_data(qb):
    prediction = MatchupPredictor(league([250], [250])).predict(qb, "NYJ", through_week=2)

    assert prediction.predicted_passing_yards is None
    assert prediction.predicted_passing_tds is None
    assert not prediction.has_projection
    assert "no data" in prediction.summary.lower()


def test_opponent_name_match_is_case_sensitive(qb):
    prediction = MatchupPredictor(league([250], [250])).predict(qb, "kc")
    assert "no data" in prediction.summary.lower()


def test_no_usable_metrics_is_not_enough_data(qb):
    rows = [row("KC", 1, season=2025), row("BUF", 1, season=2025)]

    prediction = MatchupPredictor(rows).predict(qb, "KC")

    assert prediction.predicted_passing_yards is None
    assert prediction.predicted_passing_tds is None
    assert prediction.summary == NOT_ENOUGH_METRICS


def test_sacks_are_inverted(qb):
    predictor = MatchupPredictor(league([4, 4, 4], [2, 2, 2], metric="sacks"))

    prediction = predictor.predict(qb, "KC")

    assert prediction.final_factor == pytest.approx(0.75)
    assert prediction.predicted_passing_yards == pytest.approx(750.0)
    assert prediction.metrics_used == (SACKS,)


def test_opponent_with_zero_sacks_is_excluded(qb):
    rows = [
        row("KC", 1, pass_yds_allowed=300, sacks=0),
        row("BUF", 1, pass_yds_allowed=200, sacks=2),
    ]

    prediction = MatchupPredictor(rows).predict(qb, "KC")

    assert prediction.metrics_used == (PASS_YARDS_ALLOWED,)
    assert prediction.final_factor == pytest.approx(1.2)


def test_blend_divides_by_weights_present(qb):
    rows = [
        row("KC", 1, pass_yds_allowed=300, sacks=4),
        row("BUF", 1, pass_yds_allowed=200, sacks=2),
    ]

    prediction = MatchupPredictor(rows).predict(qb, "KC")

    assert prediction.final_factor == pytest.approx((1.2 * 0.6 + 0.75 * 0.1) / 0.7)
    assert "with metrics: pass yards, sacks" in prediction.summary


def test_dedicated_touchdown_factor(qb):
    rows = [
        row("KC", 1, pass_yds_allowed=250, pass_td_allowed=2),
        row("BUF", 1, pass_yds_allowed=250, pass_td_allowed=1),
    ]

    prediction = MatchupPredictor(rows).predict(qb, "KC")

    assert prediction.final_factor == 1.0
    assert prediction.predicted_passing_tds == pytest.approx(24 * 2 / 1.5)
    assert PASS_TDS_ALLOWED in prediction.metrics_used
    assert "pass TDs" in prediction.summary


def test_unknown_season_totals_stay_unknown():
    qb = PlayerSeasonRecord(id="p2", name="Backup QB", team="DET", passing_touchdowns=3)

    prediction = MatchupPredictor(league([250], [250])).predict(qb, "KC")

    assert prediction.predicted_passing_yards is None
    assert prediction.predicted_passing_tds == pytest.approx(3.0)
    assert "Passing yards" not in prediction.summary


def test_snapshot_uses_one_row_without_averaging(qb):
    rows = league([200, 300, 250], [250, 250, 250])
    predictor = MatchupPredictor(rows)

    prediction = predictor.predict_snapshot(qb, rows[1])

    assert prediction.weeks_count == 1
    assert prediction.final_factor == pytest.approx(1.2)
    assert prediction.predicted_passing_yards == pytest.approx(3600.0)
    assert "KC week 2" in prediction.summary


def test_snapshot_with_empty_row_is_no_data(qb):
    predictor = MatchupPredictor(league([250], [250]))

    prediction = predictor.predict_snapshot(qb, row("KC", 5))

    assert prediction.predicted_passing_yards is None
    assert "no data" in prediction.summary.lower()


def test_custom_weights_must_name_known_metrics():
    with pytest.raises(ValueError):
        MatchupPredictor([], weights={"rushing_yards_allowed": 1.0})


def test_aggregation_and_league_average():
    rows = league([200, 300], [100]) + [row("NYJ", 1, sacks=3)]

    assert aggregate_team_stats(rows, "KC") == {"pass_yds_allowed": 250.0}
    assert aggregate_team_stats(rows, "KC", through_week=1) == {"pass_yds_allowed": 200.0}
    # NYJ never reports the metric and is left out of its average.
    assert league_average(rows, "pass_yds_allowed") == pytest.approx(175.0)
    assert league_average(rows, "sacks") == pytest.approx(3.0)
    assert league_average(rows, "comp_pct") is None


def test_available_weeks_sorted_and_distinct():
    rows = [row("KC", 3), row("KC", 1), row("KC", 3), row("KC", None), row("BUF", 2)]

    assert available_weeks(rows, "KC") == [1, 3]
    assert available_weeks(rows, "NYJ") == []
