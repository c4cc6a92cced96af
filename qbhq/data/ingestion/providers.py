"""Data providers for the player and team stats feeds."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

import requests

from ...models.player import PlayerSeasonRecord
from ...models.team_stats import TeamWeekStats
from .parsers import parse_player_csv, parse_team_csv

logger = logging.getLogger(__name__)

DEFAULT_PLAYERS_URL = (
    "https://raw.githubusercontent.com/hvpkod/NFL-Data/refs/heads/main/NFL-data-Players/2025/QB_season.csv"
)
DEFAULT_TEAM_STATS_URL = (
    "https://github.com/nflverse/nflverse-data/releases/download/stats_team/stats_team_week_2025.csv"
)


class DataSourceError(RuntimeError):
    """Raised when a feed cannot be fetched or decoded."""


class StatsProvider(ABC):
    """Source of player and team stat records."""

    @abstractmethod
    def fetch_players(self) -> List[PlayerSeasonRecord]:
        """Fetch the full QB season dataset."""

    @abstractmethod
    def fetch_team_stats(self) -> List[TeamWeekStats]:
        """Fetch the full team weekly dataset."""


class HttpCsvProvider(StatsProvider):
    """Fetches both feeds with a single best-effort GET each."""

    def __init__(
        self,
        players_url: str = DEFAULT_PLAYERS_URL,
        team_stats_url: str = DEFAULT_TEAM_STATS_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.players_url = players_url
        self.team_stats_url = team_stats_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": "qb-hq/0.1",
                "Accept": "text/csv, text/plain, */*",
            }
        )

    def fetch_players(self) -> List[PlayerSeasonRecord]:
        return parse_player_csv(self._fetch_text(self.players_url))

    def fetch_team_stats(self) -> List[TeamWeekStats]:
        return parse_team_csv(self._fetch_text(self.team_stats_url))

    def _fetch_text(self, url: str) -> str:
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DataSourceError(f"request failed for {url}: {exc}") from exc

        try:
            return response.content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise DataSourceError(f"response from {url} is not UTF-8") from exc


class StaticCsvProvider(StatsProvider):
    """Serves fixed CSV text, for fixtures and offline runs."""

    def __init__(self, players_csv: str = "", team_stats_csv: str = ""):
        self.players_csv = players_csv
        self.team_stats_csv = team_stats_csv

    @classmethod
    def from_files(cls, players_path: str, team_stats_path: str) -> "StaticCsvProvider":
        """
        Load both feeds from local files.

        Args:
            players_path: Path to the QB season CSV
            team_stats_path: Path to the team weekly CSV

        Returns:
            StaticCsvProvider over the file contents
        """
        try:
            players_csv = Path(players_path).read_text(encoding="utf-8-sig")
            team_stats_csv = Path(team_stats_path).read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise DataSourceError(f"could not read local CSV: {exc}") from exc
        return cls(players_csv=players_csv, team_stats_csv=team_stats_csv)

    def fetch_players(self) -> List[PlayerSeasonRecord]:
        return parse_player_csv(self.players_csv)

    def fetch_team_stats(self) -> List[TeamWeekStats]:
        return parse_team_csv(self.team_stats_csv)
