"""
NPB Team Registry
=================

The twelve first-team clubs, six per league, in the site's listing order.
"""

from typing import List, Optional

from npbstat.config import roster_url
from npbstat.parsing.models import League, Team


def _team(team_id: str, name: str, full_name: str, league: League) -> Team:
    return Team(
        id=team_id,
        name=name,
        full_name=full_name,
        league=league,
        roster_url=roster_url(team_id),
    )


TEAMS: List[Team] = [
    # Central League
    _team('g', 'ジャイアンツ', '読売ジャイアンツ', League.CENTRAL),
    _team('t', 'タイガース', '阪神タイガース', League.CENTRAL),
    _team('db', 'ベイスターズ', '横浜DeNAベイスターズ', League.CENTRAL),
    _team('c', 'カープ', '広島東洋カープ', League.CENTRAL),
    _team('s', 'スワローズ', '東京ヤクルトスワローズ', League.CENTRAL),
    _team('d', 'ドラゴンズ', '中日ドラゴンズ', League.CENTRAL),
    # Pacific League
    _team('h', 'ホークス', '福岡ソフトバンクホークス', League.PACIFIC),
    _team('f', 'ファイターズ', '北海道日本ハムファイターズ', League.PACIFIC),
    _team('m', 'マリーンズ', '千葉ロッテマリーンズ', League.PACIFIC),
    _team('e', 'イーグルス', '東北楽天ゴールデンイーグルス', League.PACIFIC),
    _team('bs', 'バファローズ', 'オリックス・バファローズ', League.PACIFIC),
    _team('l', 'ライオンズ', '埼玉西武ライオンズ', League.PACIFIC),
]

_TEAMS_BY_ID = {team.id: team for team in TEAMS}


def get_team_by_id(team_id: str) -> Optional[Team]:
    """Look up a team by its short id ('g', 'db', 'bs', ...)"""
    return _TEAMS_BY_ID.get(team_id)


def get_teams_by_league(league) -> List[Team]:
    """
    Teams of one league.

    Args:
        league: League member or its value ('central' / 'pacific')

    Returns:
        The league's six teams, or an empty list for an unknown league
    """
    try:
        league = League(league)
    except ValueError:
        return []
    return [team for team in TEAMS if team.league == league]
