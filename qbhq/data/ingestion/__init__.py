"""CSV ingestion for the player and team stats feeds."""

from .parsers import parse_player_csv, parse_team_csv
from .providers import DataSourceError, HttpCsvProvider, StaticCsvProvider, StatsProvider
from .records import parse_number, reassemble_rows

__all__ = [
    "DataSourceError",
    "HttpCsvProvider",
    "StaticCsvProvider",
    "StatsProvider",
    "parse_number",
    "parse_player_csv",
    "parse_team_csv",
    "reassemble_rows",
]
