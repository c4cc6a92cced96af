"""Command-line front end for QB HQ."""

import argparse
import logging
import sys
from typing import List, Sequence

import pandas as pd

from .config import DataSourceConfig, PredictorConfig
from .data.ingestion.providers import DataSourceError
from .data.store import StatsStore
from .models.player import PlayerSeasonRecord

PLAYER_TABLE_COLUMNS = {
    "rank": "Rank",
    "name": "Name",
    "team": "Team",
    "passing_yards": "YDS",
    "passing_touchdowns": "TD",
    "interceptions": "INT",
    "rushing_yards": "Rush Y",
    "total_points": "Fantasy",
}
INT_COLUMNS = ("rank", "passing_yards", "passing_touchdowns", "interceptions", "rushing_yards")


def players_frame(players: Sequence[PlayerSeasonRecord]) -> pd.DataFrame:
    """Tabulate players in feed order for display."""
    frame = pd.DataFrame([p.to_dict() for p in players], columns=list(PLAYER_TABLE_COLUMNS))
    # Nullable ints so missing stats don't turn whole columns into floats.
    for column in INT_COLUMNS:
        frame[column] = frame[column].astype("Int64")
    return frame.rename(columns=PLAYER_TABLE_COLUMNS)


def build_store(args) -> StatsStore:
    """Create a store from CLI arguments and environment overrides."""
    source = DataSourceConfig.from_env()
    source.players_csv = args.players_csv
    source.team_stats_csv = args.team_stats_csv

    predictor_config = PredictorConfig.load_from_file(args.config) if args.config else PredictorConfig()
    # Surface bad weights or aliases now instead of on the first prediction.
    predictor_config.build_predictor(())
    return StatsStore(source.build_provider(), predictor_factory=predictor_config.build_predictor)


def list_players(args, store: StatsStore) -> int:
    """Print the quarterback table."""
    store.refresh_players()
    players = store.filter_players(args.search or "")
    if not players:
        print("No quarterbacks found.")
        return 1

    print(players_frame(players).to_string(index=False, na_rep="-"))
    return 0


def list_weeks(args, store: StatsStore) -> int:
    """Print the weeks available for an opponent."""
    store.refresh_team_stats()
    if args.team not in store.team_names():
        print(f"Error: unknown team {args.team!r}")
        return 1

    weeks = store.available_weeks(args.team)
    print(f"{args.team}: " + (", ".join(str(w) for w in weeks) if weeks else "season totals only"))
    return 0


def predict_matchup(args, store: StatsStore) -> int:
    """Print a matchup prediction for one quarterback."""
    store.refresh()

    player = store.find_player(args.player)
    if player is None:
        print(f"Error: no quarterback matches {args.player!r}")
        return 1

    opponent = args.opponent
    if opponent is None:
        default = store.default_opponent(player)
        if default is None:
            print("Error: no team defensive data loaded")
            return 1
        opponent = default.team

    prediction = store.predict_matchup(player, opponent, through_week=args.week)

    week_text = "All" if args.week is None else f"Week {args.week}"
    print(f"{player.name} ({player.team or '-'}) vs {opponent}, through {week_text}")
    print(prediction.summary)
    if prediction.predicted_passing_yards is not None:
        print(f"Predicted Passing Yards (game): {int(prediction.predicted_passing_yards)}")
    if prediction.predicted_passing_tds is not None:
        print(f"Predicted Passing TDs (game): {prediction.predicted_passing_tds:.1f}")
    return 0


def positive_int(value: str) -> int:
    week = int(value)
    if week <= 0:
        raise argparse.ArgumentTypeError(f"week must be a positive integer, got {value}")
    return week


def main(argv: List[str] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="QB HQ - quarterback stats and matchup predictions"
    )
    parser.add_argument("--players-csv", default=None, help="Local QB season CSV (use with --team-stats-csv)")
    parser.add_argument("--team-stats-csv", default=None, help="Local team weekly stats CSV")
    parser.add_argument("--config", default=None, help="Predictor config JSON (weights, metric aliases)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    players_parser = subparsers.add_parser("players", help="List quarterbacks")
    players_parser.add_argument("--search", "-s", default=None, help="Filter by name or team")

    weeks_parser = subparsers.add_parser("weeks", help="List available weeks for a team")
    weeks_parser.add_argument("--team", "-t", required=True, help="Team name as it appears in the feed")

    predict_parser = subparsers.add_parser("predict", help="Predict a quarterback's next matchup")
    predict_parser.add_argument("--player", "-p", required=True, help="Player id or name")
    predict_parser.add_argument(
        "--opponent", "-o",
        default=None,
        help="Opponent team (default: first team that is not the player's own)"
    )
    predict_parser.add_argument(
        "--week", "-w",
        type=positive_int,
        default=None,
        help="Use opponent data through this week (default: all weeks)"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if bool(args.players_csv) != bool(args.team_stats_csv):
        print("Error: --players-csv and --team-stats-csv must be given together")
        return 1

    try:
        store = build_store(args)
    except (DataSourceError, ValueError, OSError) as exc:
        print(f"Error: {exc}")
        return 1

    if args.command == "players":
        return list_players(args, store)
    elif args.command == "weeks":
        return list_weeks(args, store)
    elif args.command == "predict":
        return predict_matchup(args, store)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
