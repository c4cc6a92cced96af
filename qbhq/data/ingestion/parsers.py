"""Parsers mapping reassembled CSV rows onto typed records."""

from __future__ import annotations

import logging
import uuid
from typing import Dict, List, Optional

from ...models.player import PlayerSeasonRecord
from ...models.team_stats import TeamWeekStats, team_week_id
from .records import parse_float, parse_int, parse_number, reassemble_rows

logger = logging.getLogger(__name__)

# Fixed column positions in the QB season feed. The header names in that
# feed are not reliable, so positions are used instead of header lookups.
PLAYER_COLUMNS: Dict[str, int] = {
    "name": 0,
    "player_id": 1,
    "team": 3,
    "passing_yards": 4,
    "passing_touchdowns": 5,
    "interceptions": 6,
    "rushing_yards": 7,
    "rushing_touchdowns": 8,
    "receiving_receptions": 9,
    "receiving_yards": 10,
    "receiving_touchdowns": 11,
    "rank": 26,
    "total_points": 27,
}

_INT_FIELDS = (
    "passing_yards",
    "passing_touchdowns",
    "interceptions",
    "rushing_yards",
    "rushing_touchdowns",
    "receiving_receptions",
    "receiving_yards",
    "receiving_touchdowns",
    "rank",
)


def _cell(cols: List[str], field_name: str) -> Optional[str]:
    pos = PLAYER_COLUMNS[field_name]
    return cols[pos] if len(cols) > pos else None


def parse_player_csv(payload: str) -> List[PlayerSeasonRecord]:
    """
    Parse the QB season feed into records, in file order.

    Args:
        payload: Raw CSV text

    Returns:
        List of PlayerSeasonRecord objects
    """
    _, rows = reassemble_rows(payload)

    players: List[PlayerSeasonRecord] = []
    for cols in rows:
        player_id = _cell(cols, "player_id")
        # The feed does not carry completions, attempts or passer rating.
        stats = {name: parse_int(_cell(cols, name)) for name in _INT_FIELDS}
        players.append(
            PlayerSeasonRecord(
                id=player_id if player_id else uuid.uuid4().hex,
                name=_cell(cols, "name") or "",
                player_id=player_id or None,
                team=_cell(cols, "team"),
                total_points=parse_float(_cell(cols, "total_points")),
                **stats,
            )
        )

    logger.info("Parsed %d player records", len(players))
    return players


def _find_column(header: List[str], needle: str) -> Optional[int]:
    for idx, name in enumerate(header):
        if needle in name.lower():
            return idx
    return None


def parse_team_csv(payload: str) -> List[TeamWeekStats]:
    """
    Parse the team weekly stats feed into rows, in file order.

    The team and week columns are located by header substring; every other
    column is kept generically in ``stats`` when its cell is numeric.

    Args:
        payload: Raw CSV text

    Returns:
        List of TeamWeekStats objects
    """
    header, rows = reassemble_rows(payload)
    if not header:
        return []

    team_idx = _find_column(header, "team")
    if team_idx is None:
        team_idx = 0
    week_idx = _find_column(header, "week")
    keys = [name.lower() for name in header]

    teams: List[TeamWeekStats] = []
    for cols in rows:
        team_name = cols[team_idx] if len(cols) > team_idx else ""

        week = None
        if week_idx is not None and len(cols) > week_idx:
            week = parse_int(cols[week_idx])
            if week is not None and week <= 0:
                week = None

        stats: Dict[str, float] = {}
        for idx, key in enumerate(keys):
            value = parse_number(cols[idx]) if len(cols) > idx else None
            if value is not None:
                stats[key] = value

        teams.append(
            TeamWeekStats(
                id=team_week_id(team_name, week),
                team=team_name,
                week=week,
                stats=stats,
            )
        )

    logger.info("Parsed %d team stat rows", len(teams))
    return teams
