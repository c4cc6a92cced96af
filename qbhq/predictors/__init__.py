"""Matchup prediction."""

from .aggregation import aggregate_team_stats, available_weeks, league_average, league_averages
from .matchup import MatchupPredictor

__all__ = [
    "MatchupPredictor",
    "aggregate_team_stats",
    "available_weeks",
    "league_average",
    "league_averages",
]
