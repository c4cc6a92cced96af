"""Quarterback vs. defense matchup predictor.

The projection is a transparent heuristic, not a statistical model: each
defensive metric that can be found for the opponent is compared with the
league average to give a factor, the factors are blended with fixed weights,
and the blended factor scales the quarterback's per-game passing output.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..data.metric_aliases import (
    COMPLETION_PCT_ALLOWED,
    INTERCEPTIONS_FORCED,
    PASS_TDS_ALLOWED,
    PASS_YARDS_ALLOWED,
    SACKS,
    MetricAliasTable,
)
from ..models.player import PlayerSeasonRecord
from ..models.prediction import MatchupPrediction
from ..models.team_stats import TeamWeekStats
from .aggregation import aggregate_rows, league_averages, select_team_rows

logger = logging.getLogger(__name__)

NOT_ENOUGH_METRICS = "Not enough defensive metrics available to generate a matchup prediction."


class MatchupPredictor:
    """Projects per-game passing yards and TDs against one opponent."""

    # Blend weights per logical metric. They are not required to sum to 1:
    # the blend divides by the total weight of the metrics actually found.
    DEFAULT_WEIGHTS = {
        PASS_YARDS_ALLOWED: 0.6,
        COMPLETION_PCT_ALLOWED: 0.2,
        SACKS: 0.1,
        INTERCEPTIONS_FORCED: 0.1,
    }

    # More of these means a harder matchup, so the ratio is inverted.
    INVERSE_METRICS = frozenset({SACKS, INTERCEPTIONS_FORCED})

    def __init__(
        self,
        team_stats: Sequence[TeamWeekStats],
        weights: Optional[Dict[str, float]] = None,
        aliases: Optional[MetricAliasTable] = None,
    ):
        """
        Initialize matchup predictor.

        Args:
            team_stats: Every team row currently loaded (opponent and league data)
            weights: Blend weight per logical metric (default uses DEFAULT_WEIGHTS)
            aliases: Header alias table (default uses the built-in patterns)
        """
        self.team_stats = tuple(team_stats)
        self.weights = dict(weights or self.DEFAULT_WEIGHTS)
        self.aliases = aliases or MetricAliasTable()

        unknown = [m for m in self.weights if m not in self.aliases.aliases]
        if unknown:
            raise ValueError(f"No alias patterns for weighted metrics: {', '.join(unknown)}")
        negative = [m for m, w in self.weights.items() if w < 0]
        if negative:
            raise ValueError(f"Weights must be non-negative: {', '.join(negative)}")

    def predict(
        self,
        player: PlayerSeasonRecord,
        opponent: str,
        through_week: Optional[int] = None,
    ) -> MatchupPrediction:
        """
        Predict per-game passing output against an opponent's aggregated defense.

        Args:
            player: Quarterback season record
            opponent: Opponent team name (exact match)
            through_week: Inclusive week cutoff; None uses the whole season

        Returns:
            MatchupPrediction, with absent values when data is missing
        """
        rows = select_team_rows(self.team_stats, opponent, through_week)
        opponent_stats = aggregate_rows(rows)
        if not opponent_stats:
            logger.debug("No rows for opponent %r through week %s", opponent, through_week)
            return self._no_data(opponent, through_week)

        return self._project(
            player,
            opponent_stats,
            weeks_count=max(1, len(rows)),
            through_week=through_week,
            scope="Using aggregated team defense",
        )

    def predict_snapshot(
        self,
        player: PlayerSeasonRecord,
        opponent_row: TeamWeekStats,
        through_week: Optional[int] = None,
    ) -> MatchupPrediction:
        """
        Predict against one specific team row without averaging weeks.

        Args:
            player: Quarterback season record
            opponent_row: The opponent's row to compare against the league
            through_week: Cutoff for the league averages; None uses all rows

        Returns:
            MatchupPrediction, with absent values when data is missing
        """
        if not opponent_row.stats:
            return self._no_data(opponent_row.team, through_week)

        week_text = "season" if opponent_row.week is None else f"week {opponent_row.week}"
        return self._project(
            player,
            dict(opponent_row.stats),
            weeks_count=1,
            through_week=through_week,
            scope=f"Using {opponent_row.team} {week_text} team defense against the league",
        )

    def blend(
        self,
        opponent_stats: Mapping[str, float],
        league: Mapping[str, float],
    ) -> Tuple[Optional[float], List[str]]:
        """
        Blend the per-metric factors into one matchup factor.

        Args:
            opponent_stats: Opponent metric key -> value
            league: Metric key -> league average

        Returns:
            Tuple of (final_factor or None when nothing is usable, metrics used)
        """
        keys = self.aliases.resolve(opponent_stats.keys())
        weighted: List[Tuple[float, float]] = []
        used: List[str] = []

        for metric, weight in self.weights.items():
            key = keys.get(metric)
            if key is None:
                continue
            team_val = opponent_stats.get(key)
            league_val = league.get(key)
            if team_val is None or league_val is None:
                continue

            if metric in self.INVERSE_METRICS:
                if team_val <= 0:
                    continue
                factor = league_val / team_val
            else:
                if league_val <= 0:
                    continue
                factor = team_val / league_val

            weighted.append((factor, weight))
            used.append(metric)

        if not weighted:
            return None, []

        weight_sum = sum(w for _, w in weighted)
        if weight_sum <= 0:
            return 1.0, used
        return sum(f * w for f, w in weighted) / weight_sum, used

    def _touchdown_factor(
        self,
        opponent_stats: Mapping[str, float],
        league: Mapping[str, float],
    ) -> Optional[float]:
        key = self.aliases.find_key(PASS_TDS_ALLOWED, opponent_stats.keys())
        if key is None:
            return None
        team_td = opponent_stats.get(key)
        league_td = league.get(key)
        if team_td is None or league_td is None or league_td <= 0:
            return None
        return team_td / league_td

    def _project(
        self,
        player: PlayerSeasonRecord,
        opponent_stats: Mapping[str, float],
        weeks_count: int,
        through_week: Optional[int],
        scope: str,
    ) -> MatchupPrediction:
        league = league_averages(self.team_stats, through_week)
        final_factor, used = self.blend(opponent_stats, league)
        if final_factor is None:
            return MatchupPrediction(
                predicted_passing_yards=None,
                predicted_passing_tds=None,
                summary=NOT_ENOUGH_METRICS,
                weeks_count=weeks_count,
                through_week=through_week,
            )

        summary_parts: List[str] = []

        predicted_yards = None
        if player.passing_yards is not None:
            yards_per_week = player.passing_yards / weeks_count
            predicted_yards = yards_per_week * final_factor
            pct = (predicted_yards - yards_per_week) / yards_per_week * 100.0 if yards_per_week > 0 else 0.0
            summary_parts.append(
                f"Passing yards (game) ~ {predicted_yards:.0f} "
                f"({pct:.0f}% vs QB per-week avg {yards_per_week:.0f})."
            )

        predicted_tds = None
        if player.passing_touchdowns is not None:
            tds_per_week = player.passing_touchdowns / weeks_count
            td_factor = self._touchdown_factor(opponent_stats, league)
            if td_factor is not None:
                used = used + [PASS_TDS_ALLOWED]
            predicted_tds = tds_per_week * (td_factor if td_factor is not None else final_factor)
            summary_parts.append(f"Passing TDs (game) ~ {predicted_tds:.1f}.")

        week_text = "All" if through_week is None else str(through_week)
        labels = ", ".join(self.aliases.label(m) for m in used)
        summary_parts.append(f"{scope} through week {week_text} with metrics: {labels}.")

        return MatchupPrediction(
            predicted_passing_yards=predicted_yards,
            predicted_passing_tds=predicted_tds,
            summary=" ".join(summary_parts),
            final_factor=final_factor,
            metrics_used=tuple(used),
            weeks_count=weeks_count,
            through_week=through_week,
        )

    @staticmethod
    def _no_data(team: str, through_week: Optional[int]) -> MatchupPrediction:
        week_text = "All" if through_week is None else str(through_week)
        return MatchupPrediction(
            predicted_passing_yards=None,
            predicted_passing_tds=None,
            summary=f"No data available for {team} through week {week_text}: no team defensive data in that range.",
            through_week=through_week,
        )
