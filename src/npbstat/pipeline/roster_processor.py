"""
Roster Processor
================
Fetches and parses team roster pages, one team or many in parallel.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional
from concurrent.futures import ThreadPoolExecutor, as_completed

from bs4 import BeautifulSoup

from npbstat.config import get_settings, roster_url
from npbstat.parsing.models import Team, TeamRoster
from npbstat.parsing.roster_parser import parse_roster
from npbstat.utils.url_cacher import PageCache, PageFetcher, get_default_fetcher, global_cache

logger = logging.getLogger(__name__)


def roster_cache_key(team_id: str) -> str:
    return f"roster:{team_id}"


def scrape_roster_from_html(html: str, team: Team,
                            last_updated: Optional[datetime] = None) -> TeamRoster:
    """Build a TeamRoster from raw roster page HTML"""
    players = parse_roster(BeautifulSoup(html, 'html.parser'), team.id)
    return TeamRoster(
        team=team,
        players=players,
        last_updated=last_updated or datetime.now(),
    )


def get_team_roster(
    team: Team,
    fetcher: Optional[PageFetcher] = None,
    cache: Optional[PageCache] = None
) -> TeamRoster:
    """
    Fetch and parse one team's roster, using the cache when possible.

    Raises:
        FetchError: when the roster page cannot be fetched
    """
    fetcher = fetcher or get_default_fetcher()
    cache = cache if cache is not None else global_cache

    cache_key = roster_cache_key(team.id)
    cached = cache.get(cache_key)
    if cached is not None:
        logger.debug(f"Cache hit for roster {team.id}")
        return cached

    html = fetcher.fetch_html(roster_url(team.id))
    roster = scrape_roster_from_html(html, team)

    cache.set(cache_key, roster, get_settings()['roster_ttl'])
    logger.info(f"Parsed roster for {team.full_name}: {len(roster.players)} players")
    return roster


def get_all_rosters(
    teams: List[Team],
    fetcher: Optional[PageFetcher] = None,
    cache: Optional[PageCache] = None,
    max_workers: Optional[int] = None
) -> Dict[str, TeamRoster]:
    """
    Fetch several teams' rosters in parallel.

    Teams whose roster cannot be fetched are logged and left out.

    Args:
        teams: Teams to fetch
        fetcher: Page fetcher shared by the workers
        cache: Result cache shared by the workers
        max_workers: Worker threads, defaults to NPB_MAX_WORKERS

    Returns:
        Dict of team id -> TeamRoster, in the order of `teams`
    """
    if not teams:
        return {}

    fetcher = fetcher or get_default_fetcher()
    max_workers = max_workers or get_settings()['max_workers']

    fetched = {}
    with ThreadPoolExecutor(max_workers=min(max_workers, len(teams))) as executor:
        future_to_team = {
            executor.submit(get_team_roster, team, fetcher, cache): team
            for team in teams
        }

        for future in as_completed(future_to_team):
            team = future_to_team[future]
            try:
                fetched[team.id] = future.result()
            except Exception as e:
                logger.error(f"Error fetching players for {team.name}: {e}")

    return {team.id: fetched[team.id] for team in teams if team.id in fetched}
