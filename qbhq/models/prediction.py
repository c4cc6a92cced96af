"""Matchup prediction result."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class MatchupPrediction:
    """Per-game passing projection for a quarterback against one opponent."""

    predicted_passing_yards: Optional[float]
    predicted_passing_tds: Optional[float]
    summary: str
    final_factor: Optional[float] = None
    metrics_used: Tuple[str, ...] = ()
    weeks_count: int = 1
    through_week: Optional[int] = None

    @property
    def has_projection(self) -> bool:
        return self.predicted_passing_yards is not None or self.predicted_passing_tds is not None

    def to_dict(self) -> dict:
        """Convert prediction to dictionary."""
        return {
            "predicted_passing_yards": self.predicted_passing_yards,
            "predicted_passing_tds": self.predicted_passing_tds,
            "summary": self.summary,
            "final_factor": self.final_factor,
            "metrics_used": list(self.metrics_used),
            "weeks_count": self.weeks_count,
            "through_week": self.through_week,
        }
