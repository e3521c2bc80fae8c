"""
NPB Stats Command Line
======================
Usage:
    npbstat teams [--league central|pacific]
    npbstat roster TEAM_ID
    npbstat search [--name NAME] [--team TEAM_ID] [--position POS] [--number NO]
    npbstat player PLAYER_ID [--validate]

Add --json to print the raw tool response instead of tables, and -v for
debug logging plus cache statistics.
"""

import sys
import json
import logging
import argparse
from typing import List, Optional

import pandas as pd

from npbstat.config import get_settings
from npbstat.parsing.models import League, Position
from npbstat.pipeline.player_processor import get_player_details
from npbstat.tools import ToolError, call_tool
from npbstat.utils.url_cacher import global_cache
from npbstat.validation.stat_validator import validate_player_stats

logger = logging.getLogger(__name__)

PLAYER_DISPLAY_COLUMNS = ['team_id', 'number', 'name', 'position', 'category',
                          'pitching_hand', 'batting_hand', 'height', 'weight', 'player_id']
PITCHING_DISPLAY_COLUMNS = ['year', 'team', 'games', 'wins', 'losses', 'saves', 'holds',
                            'innings', 'strikeouts', 'walks', 'era', 'whip']
BATTING_DISPLAY_COLUMNS = ['year', 'team', 'games', 'plate_appearances', 'hits', 'home_runs',
                           'rbi', 'stolen_bases', 'average', 'on_base_percentage', 'ops']


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='npbstat', description="NPB roster and player stats")
    parser.add_argument("--json", action="store_true", help="Print the raw JSON response")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug logging and cache statistics")
    subparsers = parser.add_subparsers(dest="command", required=True)

    teams = subparsers.add_parser("teams", help="List teams")
    teams.add_argument("--league", choices=[league.value for league in League], default=None)

    roster = subparsers.add_parser("roster", help="Show a team roster")
    roster.add_argument("team_id", help="Team ID (g, t, db, c, s, d, h, f, m, e, bs, l)")

    search = subparsers.add_parser("search", help="Search players")
    search.add_argument("--name", default=None, help="Name or reading, partial match")
    search.add_argument("--team", dest="team_id", default=None, help="Team ID")
    search.add_argument("--position", choices=[position.value for position in Position], default=None)
    search.add_argument("--number", default=None, help="Uniform number")

    player = subparsers.add_parser("player", help="Show player details")
    player.add_argument("player_id", help="Eight-digit NPB player ID")
    player.add_argument("--validate", action="store_true",
                        help="Recompute rate stats and report mismatches")

    return parser.parse_args(argv)


def _payload(response: dict):
    return json.loads(response['content'][0]['text'])


def _frame(rows, columns: List[str]) -> pd.DataFrame:
    df = pd.DataFrame(rows or [])
    return df.reindex(columns=[col for col in columns if col in df.columns])


def _print_frame(title: str, df: pd.DataFrame) -> None:
    print(f"\n{title}")
    print("=" * len(title))
    if df.empty:
        print("(none)")
    else:
        print(df.to_string(index=False))


def _print_player(payload: dict) -> None:
    profile = payload['profile']
    print(f"{profile.get('name', '')} ({profile.get('team', '')})")
    for key in ['uniform_number', 'position', 'throwing_hand', 'batting_hand', 'height',
                'weight', 'birth_date', 'career', 'draft_info', 'joined_year']:
        if key in profile:
            print(f"  {key}: {profile[key]}")

    _print_frame("Pitching", _frame(payload.get('pitching_stats'), PITCHING_DISPLAY_COLUMNS))
    _print_frame("Batting", _frame(payload.get('batting_stats'), BATTING_DISPLAY_COLUMNS))
    _print_frame("Transfers", pd.DataFrame(payload.get('transfers') or []))


def _print_validation(results: dict) -> None:
    for kind, result in results.items():
        print(f"\n{kind.title()} check: {result['accuracy']:.1f}% "
              f"({result['seasons_compared']} seasons)")
        for diff in result['differences']:
            print(f"  {diff['year']} {diff['team']} {diff['stat']}: "
                  f"{diff['official']} vs {diff['computed']} (diff: {diff['diff']:+.4f})")


def run(args: argparse.Namespace) -> int:
    if args.command == "teams":
        response = call_tool("list_teams", {"league": args.league})
    elif args.command == "roster":
        response = call_tool("get_team_players", {"team_id": args.team_id})
    elif args.command == "search":
        response = call_tool("search_players", {
            "name": args.name,
            "team_id": args.team_id,
            "position": args.position,
            "number": args.number,
        })
    else:
        response = call_tool("get_player_details", {"player_id": args.player_id})

    if args.json:
        print(response['content'][0]['text'])
        return 0

    payload = _payload(response)
    if args.command == "teams":
        _print_frame("Teams", pd.DataFrame(payload))
    elif args.command == "roster":
        title = f"{payload['team']['full_name']} ({payload['player_count']} players)"
        _print_frame(title, _frame(payload['players'], PLAYER_DISPLAY_COLUMNS))
    elif args.command == "search":
        _print_frame(f"{payload['result_count']} players",
                     _frame(payload['players'], PLAYER_DISPLAY_COLUMNS))
    else:
        _print_player(payload)
        if args.validate:
            # Served from the cache filled by the call above
            _print_validation(validate_player_stats(get_player_details(args.player_id)))

    return 0


def _print_cache_stats(stats: dict) -> None:
    print(f"\nCache: {stats['entries']} entries, {stats['cache_hits']} hits, "
          f"{stats['cache_misses']} misses ({stats['hit_rate_percentage']:.1f}% hit rate)")


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    # Configure logging only once, and prevent duplicates
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level='DEBUG' if args.verbose else get_settings()['log_level'],
            format='%(asctime)s - %(levelname)s - %(message)s'
        )

    try:
        status = run(args)
    except ToolError as e:
        logger.error(str(e))
        status = 1

    if args.verbose and not args.json:
        _print_cache_stats(global_cache.get_cache_stats())
    return status


if __name__ == "__main__":
    sys.exit(main())
