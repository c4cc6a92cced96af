"""In-memory owner of the player and team stat collections."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from ..models.player import PlayerSeasonRecord
from ..models.prediction import MatchupPrediction
from ..models.team_stats import TeamWeekStats
from ..predictors.aggregation import available_weeks, team_names
from ..predictors.matchup import MatchupPredictor
from .ingestion.providers import DataSourceError, StatsProvider

logger = logging.getLogger(__name__)

PLAYERS = "players"
TEAM_STATS = "team_stats"


class StatsStore:
    """
    Single writer for the loaded datasets.

    Fetches run off-thread, but their results are applied here, on the
    caller's thread, as whole immutable snapshots. Readers only ever see
    tuples. A failed fetch empties that dataset; there is no partial result
    and no retry.
    """

    def __init__(
        self,
        provider: StatsProvider,
        predictor_factory: Optional[Callable[[Tuple[TeamWeekStats, ...]], MatchupPredictor]] = None,
    ):
        self.provider = provider
        self.predictor_factory = predictor_factory or MatchupPredictor
        self._players: Tuple[PlayerSeasonRecord, ...] = ()
        self._team_stats: Tuple[TeamWeekStats, ...] = ()
        self.last_updated: Optional[datetime] = None

    @property
    def players(self) -> Tuple[PlayerSeasonRecord, ...]:
        return self._players

    @property
    def team_stats(self) -> Tuple[TeamWeekStats, ...]:
        return self._team_stats

    def refresh(self) -> None:
        """Fetch both datasets concurrently and apply each as it completes."""
        with ThreadPoolExecutor(max_workers=2) as executor:
            futures: Dict[Future, str] = {
                executor.submit(self.provider.fetch_players): PLAYERS,
                executor.submit(self.provider.fetch_team_stats): TEAM_STATS,
            }
            for future in as_completed(futures):
                self._apply(futures[future], future.result)

    def refresh_players(self) -> None:
        self._apply(PLAYERS, self.provider.fetch_players)

    def refresh_team_stats(self) -> None:
        self._apply(TEAM_STATS, self.provider.fetch_team_stats)

    def _apply(self, dataset: str, fetch: Callable[[], List]) -> None:
        try:
            snapshot = tuple(fetch())
        except DataSourceError as exc:
            logger.warning("Failed fetching %s: %s", dataset, exc)
            snapshot = None

        if dataset == PLAYERS:
            self._players = snapshot or ()
        else:
            self._team_stats = snapshot or ()

        if snapshot is not None:
            self.last_updated = datetime.now(timezone.utc)
            logger.info("Loaded %d %s rows", len(snapshot), dataset)

    def filter_players(self, query: str = "") -> List[PlayerSeasonRecord]:
        """Players in feed order whose name or team contains ``query`` (case-insensitive)."""
        return [p for p in self._players if p.matches(query)]

    def find_player(self, query: str) -> Optional[PlayerSeasonRecord]:
        """
        Look up one player by id or name.

        Args:
            query: Player id, exact name, or a name fragment

        Returns:
            The id match, else the exact (case-insensitive) name match, else
            the first fragment match, else None
        """
        needle = query.strip().lower()
        if not needle:
            return None
        for player in self._players:
            if player.id == query.strip():
                return player
        for player in self._players:
            if player.name.lower() == needle:
                return player
        for player in self._players:
            if needle in player.name.lower():
                return player
        return None

    def team_names(self) -> List[str]:
        return team_names(self._team_stats)

    def available_weeks(self, team: str) -> List[int]:
        return available_weeks(self._team_stats, team)

    def default_opponent(self, player: PlayerSeasonRecord) -> Optional[TeamWeekStats]:
        """First team row that is not the player's own team, else the first row."""
        for row in self._team_stats:
            if row.team != player.team:
                return row
        return self._team_stats[0] if self._team_stats else None

    def predict_matchup(
        self,
        player: PlayerSeasonRecord,
        opponent: str,
        through_week: Optional[int] = None,
    ) -> MatchupPrediction:
        """Predict against the current team snapshot; nothing is cached."""
        predictor = self.predictor_factory(self._team_stats)
        return predictor.predict(player, opponent, through_week)
