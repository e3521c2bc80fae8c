"""
NPB Tool Handlers
=================
Request handlers for the four lookup tools. Each returns a text envelope
{"content": [{"type": "text", "text": <JSON>}]} ready for a tool protocol
layer; call_tool() dispatches by tool name.
"""

import re
import json
import logging
from typing import Any, Dict, List, Optional

from npbstat.parsing.models import Position
from npbstat.parsing.name_utils import matches_player_name
from npbstat.pipeline.player_processor import get_player_details as fetch_player_details
from npbstat.pipeline.roster_processor import get_all_rosters, get_team_roster
from npbstat.teams import TEAMS, get_team_by_id, get_teams_by_league

logger = logging.getLogger(__name__)

_PLAYER_ID = re.compile(r'[0-9]{8}')

TEAM_ID_HELP = ('g=ジャイアンツ, t=タイガース, db=ベイスターズ, c=カープ, s=スワローズ, '
                'd=ドラゴンズ, h=ホークス, f=ファイターズ, m=マリーンズ, e=イーグルス, '
                'bs=バファローズ, l=ライオンズ')

TOOL_DEFINITIONS: List[Dict[str, Any]] = [
    {
        'name': 'list_teams',
        'description': 'List all 12 NPB teams, optionally filtered by league.',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'league': {
                    'type': 'string',
                    'enum': ['central', 'pacific'],
                    'description': 'League to filter by (optional)',
                },
            },
        },
    },
    {
        'name': 'get_team_players',
        'description': "List the players on a team's current roster.",
        'inputSchema': {
            'type': 'object',
            'properties': {
                'team_id': {'type': 'string', 'description': f'Team ID ({TEAM_ID_HELP})'},
            },
            'required': ['team_id'],
        },
    },
    {
        'name': 'search_players',
        'description': 'Search players by name, team, position or uniform number.',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'name': {'type': 'string', 'description': 'Player name or reading (partial match)'},
                'team_id': {'type': 'string', 'description': 'Team ID to filter by'},
                'position': {
                    'type': 'string',
                    'enum': [position.value for position in Position],
                    'description': 'Position to filter by',
                },
                'number': {'type': 'string', 'description': 'Uniform number to filter by'},
            },
        },
    },
    {
        'name': 'get_player_details',
        'description': 'Get a player\'s profile, season stats, career totals and team history.',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'player_id': {'type': 'string', 'description': 'Eight-digit NPB player ID'},
            },
            'required': ['player_id'],
        },
    },
]


class ToolError(Exception):
    """A tool call failed"""


class InvalidParamsError(ToolError):
    """Missing or malformed tool arguments"""


class UnknownToolError(ToolError):
    """No tool with the requested name"""


class PlayerDetailsError(ToolError):
    """Player page could not be fetched or parsed"""

    def __init__(self, player_id: str, cause: Exception):
        self.player_id = player_id
        self.cause = cause
        super().__init__(f"Failed to fetch player details for ID {player_id}: {cause}")


def text_content(payload: Any) -> Dict[str, Any]:
    """Wrap a JSON-ready payload in a text envelope"""
    return {
        'content': [
            {
                'type': 'text',
                'text': json.dumps(payload, ensure_ascii=False, indent=2),
            }
        ]
    }


def list_teams(league: Optional[str] = None, **_) -> Dict[str, Any]:
    """All teams, or one league's teams; an unknown league is ignored"""
    teams = get_teams_by_league(league) if league else []
    if not teams:
        teams = TEAMS
    return text_content([team.to_dict() for team in teams])


def get_team_players(team_id: str, fetcher=None, cache=None, **_) -> Dict[str, Any]:
    """
    Roster of one team.

    Raises:
        InvalidParamsError: unknown team id
        FetchError: roster page could not be fetched
    """
    team = get_team_by_id(team_id)
    if not team:
        raise InvalidParamsError(f"Team not found: {team_id}")

    roster = get_team_roster(team, fetcher=fetcher, cache=cache)
    data = roster.to_dict()

    return text_content({
        'team': data['team'],
        'player_count': len(roster.players),
        'players': data['players'],
        'last_updated': data['last_updated'],
    })


def search_players(name: Optional[str] = None, team_id: Optional[str] = None,
                   position: Optional[str] = None, number: Optional[str] = None,
                   fetcher=None, cache=None, **_) -> Dict[str, Any]:
    """
    Search rosters.

    Filters are combined; each one left empty is not applied. Teams whose
    roster cannot be fetched are skipped.
    """
    target_teams = [team for team in TEAMS if team.id == team_id] if team_id else TEAMS
    rosters = get_all_rosters(target_teams, fetcher=fetcher, cache=cache)

    results = [player for roster in rosters.values() for player in roster.players]

    if name:
        results = [p for p in results if matches_player_name(name, p.name, p.name_kana)]

    if position:
        results = [p for p in results if p.position.value == position]

    if number:
        results = [p for p in results if p.number == number]

    logger.info(f"Search matched {len(results)} players in {len(rosters)} rosters")

    return text_content({
        'result_count': len(results),
        'players': [player.to_dict() for player in results],
    })


def validate_player_id(player_id) -> str:
    if not isinstance(player_id, str) or not _PLAYER_ID.fullmatch(player_id):
        raise InvalidParamsError(f"Invalid player ID format: {player_id}. Expected 8 digits.")
    return player_id


def get_player_details(player_id: str, fetcher=None, cache=None, **_) -> Dict[str, Any]:
    """
    Details of one player.

    Raises:
        InvalidParamsError: id is not exactly eight digits
        PlayerDetailsError: page could not be fetched or parsed
    """
    validate_player_id(player_id)

    try:
        details = fetch_player_details(player_id, fetcher=fetcher, cache=cache)
    except Exception as e:
        raise PlayerDetailsError(player_id, e) from e

    return text_content(details.to_dict())


TOOL_HANDLERS = {
    'list_teams': list_teams,
    'get_team_players': get_team_players,
    'search_players': search_players,
    'get_player_details': get_player_details,
}

REQUIRED_ARGUMENTS = {
    definition['name']: definition['inputSchema'].get('required', [])
    for definition in TOOL_DEFINITIONS
}


def call_tool(name: str, arguments: Optional[Dict[str, Any]] = None,
              fetcher=None, cache=None) -> Dict[str, Any]:
    """
    Run a tool by name.

    Raises:
        UnknownToolError: no such tool
        InvalidParamsError: a required argument is missing or empty
        ToolError: any other failure, wrapped
    """
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        raise UnknownToolError(f"Unknown tool: {name}")

    arguments = dict(arguments or {})
    for required in REQUIRED_ARGUMENTS[name]:
        if not arguments.get(required):
            raise InvalidParamsError(f"{required} is required")

    try:
        return handler(fetcher=fetcher, cache=cache, **arguments)
    except ToolError:
        raise
    except Exception as e:
        logger.error(f"Tool {name} failed: {e}")
        raise ToolError(f"Tool execution failed: {e}") from e
