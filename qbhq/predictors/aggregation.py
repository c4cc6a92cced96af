"""Team stat aggregation through a week cutoff."""

from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from ..models.team_stats import TeamWeekStats


def select_team_rows(
    team_stats: Iterable[TeamWeekStats],
    team: str,
    through_week: Optional[int] = None,
) -> List[TeamWeekStats]:
    """
    Select one team's rows up to a week cutoff.

    Args:
        team_stats: All team rows
        team: Team name (exact, case-sensitive)
        through_week: Inclusive week cutoff; None takes every row

    Returns:
        Matching rows in feed order. Rows with no week are season rows and
        are always kept.
    """
    rows = []
    for row in team_stats:
        if row.team != team:
            continue
        if through_week is not None and row.week is not None and row.week > through_week:
            continue
        rows.append(row)
    return rows


def aggregate_rows(rows: Sequence[TeamWeekStats]) -> Dict[str, float]:
    """Average each metric over the rows that carry it, keeping first-seen key order."""
    values: Dict[str, List[float]] = {}
    for row in rows:
        for key, value in row.stats.items():
            values.setdefault(key, []).append(value)
    return {key: float(np.mean(vals)) for key, vals in values.items()}


def aggregate_team_stats(
    team_stats: Iterable[TeamWeekStats],
    team: str,
    through_week: Optional[int] = None,
) -> Dict[str, float]:
    """Aggregate one team's rows through ``through_week`` into a single mapping."""
    return aggregate_rows(select_team_rows(team_stats, team, through_week))


def team_names(team_stats: Iterable[TeamWeekStats]) -> List[str]:
    """Distinct team names in first-seen order."""
    seen: Dict[str, None] = {}
    for row in team_stats:
        seen.setdefault(row.team, None)
    return list(seen)


def league_averages(
    team_stats: Sequence[TeamWeekStats],
    through_week: Optional[int] = None,
) -> Dict[str, float]:
    """
    League average per metric, across every team's own aggregate.

    Each team is first aggregated through the cutoff; a metric's average then
    covers only the teams whose aggregate contains it.

    Args:
        team_stats: All team rows
        through_week: Inclusive week cutoff applied per team

    Returns:
        Mapping of metric key to league average
    """
    per_metric: Dict[str, List[float]] = {}
    for team in team_names(team_stats):
        for key, value in aggregate_team_stats(team_stats, team, through_week).items():
            per_metric.setdefault(key, []).append(value)
    return {key: float(np.mean(vals)) for key, vals in per_metric.items()}


def league_average(
    team_stats: Sequence[TeamWeekStats],
    key: str,
    through_week: Optional[int] = None,
) -> Optional[float]:
    """League average for one metric key, or None if no team has it."""
    return league_averages(team_stats, through_week).get(key)


def available_weeks(team_stats: Iterable[TeamWeekStats], team: str) -> List[int]:
    """Distinct known weeks for a team, ascending."""
    return sorted({row.week for row in team_stats if row.team == team and row.week is not None})
