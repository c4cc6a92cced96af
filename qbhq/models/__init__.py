"""Record types shared by ingestion and prediction."""

from .player import PlayerSeasonRecord
from .prediction import MatchupPrediction
from .team_stats import TeamWeekStats, team_week_id

__all__ = [
    "MatchupPrediction",
    "PlayerSeasonRecord",
    "TeamWeekStats",
    "team_week_id",
]
