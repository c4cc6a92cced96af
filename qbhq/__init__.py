"""
QB HQ - quarterback season stats and opponent matchup predictions.

Example usage:
    from qbhq import HttpCsvProvider, StatsStore

    store = StatsStore(HttpCsvProvider())
    store.refresh()

    qb = store.find_player("Mahomes")
    prediction = store.predict_matchup(qb, "BUF", through_week=6)
    print(prediction.summary)
"""

__version__ = "0.1.0"

from qbhq.config import DataSourceConfig, PredictorConfig
from qbhq.data.ingestion import (
    DataSourceError,
    HttpCsvProvider,
    StaticCsvProvider,
    StatsProvider,
    parse_player_csv,
    parse_team_csv,
)
from qbhq.data.metric_aliases import MetricAliasTable
from qbhq.data.store import StatsStore
from qbhq.models import MatchupPrediction, PlayerSeasonRecord, TeamWeekStats
from qbhq.predictors import MatchupPredictor

__all__ = [
    "__version__",
    "DataSourceConfig",
    "DataSourceError",
    "HttpCsvProvider",
    "MatchupPrediction",
    "MatchupPredictor",
    "MetricAliasTable",
    "PlayerSeasonRecord",
    "PredictorConfig",
    "StaticCsvProvider",
    "StatsProvider",
    "StatsStore",
    "TeamWeekStats",
    "parse_player_csv",
    "parse_team_csv",
]
