"""Configuration for data sources and the matchup predictor."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .data.ingestion.providers import (
    DEFAULT_PLAYERS_URL,
    DEFAULT_TEAM_STATS_URL,
    HttpCsvProvider,
    StaticCsvProvider,
    StatsProvider,
)
from .data.metric_aliases import DEFAULT_METRIC_ALIASES, MetricAliasTable, normalize_patterns
from .models.team_stats import TeamWeekStats
from .predictors.matchup import MatchupPredictor


@dataclass
class DataSourceConfig:
    players_url: str = DEFAULT_PLAYERS_URL
    team_stats_url: str = DEFAULT_TEAM_STATS_URL
    # None leaves the HTTP timeout to the transport default.
    timeout: Optional[float] = None

    # Local CSV files take precedence over the URLs when both are set.
    players_csv: Optional[str] = None
    team_stats_csv: Optional[str] = None

    @classmethod
    def from_env(cls) -> "DataSourceConfig":
        """Load source settings, overriding defaults from QBHQ_* environment variables."""
        config = cls()
        config.players_url = os.getenv("QBHQ_PLAYERS_URL", config.players_url)
        config.team_stats_url = os.getenv("QBHQ_TEAM_STATS_URL", config.team_stats_url)

        timeout = os.getenv("QBHQ_HTTP_TIMEOUT")
        if timeout:
            try:
                config.timeout = float(timeout)
            except ValueError as exc:
                raise ValueError(f"QBHQ_HTTP_TIMEOUT must be a number, got {timeout!r}") from exc
        return config

    def build_provider(self) -> StatsProvider:
        if self.players_csv and self.team_stats_csv:
            return StaticCsvProvider.from_files(self.players_csv, self.team_stats_csv)
        return HttpCsvProvider(
            players_url=self.players_url,
            team_stats_url=self.team_stats_url,
            timeout=self.timeout,
        )


@dataclass
class PredictorConfig:
    weights: Dict[str, float] = field(default_factory=lambda: dict(MatchupPredictor.DEFAULT_WEIGHTS))
    metric_aliases: Dict[str, List[Sequence[str]]] = field(
        default_factory=lambda: {m: [list(p) for p in pats] for m, pats in DEFAULT_METRIC_ALIASES.items()}
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "weights": dict(self.weights),
            "metric_aliases": {m: [list(p) for p in pats] for m, pats in self.metric_aliases.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PredictorConfig":
        """Create config from dictionary; missing sections keep their defaults."""
        config = cls()
        if "weights" in data:
            config.weights = {str(k): float(v) for k, v in data["weights"].items()}
        if "metric_aliases" in data:
            config.metric_aliases.update(
                {
                    str(m): [list(p) for p in normalize_patterns(str(m), pats)]
                    for m, pats in data["metric_aliases"].items()
                }
            )
        return config

    def save_to_file(self, filepath: str) -> None:
        """Save config to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> "PredictorConfig":
        """Load config from JSON file."""
        with open(filepath, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Predictor config root must be an object, got {type(data).__name__}")
        return cls.from_dict(data)

    def build_predictor(self, team_stats: Sequence[TeamWeekStats]) -> MatchupPredictor:
        aliases = MetricAliasTable(aliases={m: [tuple(p) for p in pats] for m, pats in self.metric_aliases.items()})
        return MatchupPredictor(team_stats, weights=self.weights, aliases=aliases)
