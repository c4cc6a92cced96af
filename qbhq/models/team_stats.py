"""Team weekly stats row."""

import uuid
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional


def team_week_id(team: str, week: Optional[int]) -> str:
    """Build the derived key for a team/week row."""
    if week is not None:
        return f"{team}-w{week}"
    return team or uuid.uuid4().hex


@dataclass(frozen=True)
class TeamWeekStats:
    """One team's numeric stats for a single week (or the season when week is None)."""

    id: str
    team: str
    week: Optional[int] = None
    stats: Mapping[str, float] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        # Freeze the mapping so shared snapshots cannot be edited in place.
        object.__setattr__(self, "stats", MappingProxyType(dict(self.stats)))

    @property
    def is_season_aggregate(self) -> bool:
        return self.week is None

    def to_dict(self) -> dict:
        """Convert row to dictionary."""
        return {
            "id": self.id,
            "team": self.team,
            "week": self.week,
            "stats": dict(self.stats),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TeamWeekStats":
        """Create row from dictionary."""
        team = data.get("team", "")
        week = data.get("week")
        return cls(
            id=data.get("id") or team_week_id(team, week),
            team=team,
            week=week,
            stats={str(k).lower(): float(v) for k, v in data.get("stats", {}).items()},
        )
