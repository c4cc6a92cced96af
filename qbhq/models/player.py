"""Quarterback season record."""

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class PlayerSeasonRecord:
    """One quarterback's season totals, as read from the player CSV.

    Every stat is optional: ``None`` means the value was missing or
    unparseable in the source row, not zero.
    """

    id: str
    name: str
    player_id: Optional[str] = None
    team: Optional[str] = None

    # Passing
    completions: Optional[int] = None
    attempts: Optional[int] = None
    passing_yards: Optional[int] = None
    passing_touchdowns: Optional[int] = None
    interceptions: Optional[int] = None
    passer_rating: Optional[float] = None

    # Rushing / receiving
    rushing_yards: Optional[int] = None
    rushing_touchdowns: Optional[int] = None
    receiving_receptions: Optional[int] = None
    receiving_yards: Optional[int] = None
    receiving_touchdowns: Optional[int] = None

    # Summary
    rank: Optional[int] = None
    total_points: Optional[float] = None

    def matches(self, query: str) -> bool:
        """
        Case-insensitive substring match on name or team.

        Args:
            query: Search text; blank text matches everything

        Returns:
            True if the record should be shown for this query
        """
        needle = (query or "").strip().lower()
        if not needle:
            return True
        if needle in self.name.lower():
            return True
        return self.team is not None and needle in self.team.lower()

    def to_dict(self) -> dict:
        """Convert record to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PlayerSeasonRecord":
        """Create record from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            player_id=data.get("player_id"),
            team=data.get("team"),
            completions=data.get("completions"),
            attempts=data.get("attempts"),
            passing_yards=data.get("passing_yards"),
            passing_touchdowns=data.get("passing_touchdowns"),
            interceptions=data.get("interceptions"),
            passer_rating=data.get("passer_rating"),
            rushing_yards=data.get("rushing_yards"),
            rushing_touchdowns=data.get("rushing_touchdowns"),
            receiving_receptions=data.get("receiving_receptions"),
            receiving_yards=data.get("receiving_yards"),
            receiving_touchdowns=data.get("receiving_touchdowns"),
            rank=data.get("rank"),
            total_points=data.get("total_points"),
        )
