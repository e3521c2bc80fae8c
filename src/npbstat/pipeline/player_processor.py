"""
Player Details Processor
========================
Single entry point for one player's page: profile, season stats, career
totals and team history, with results cached per player.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup

from npbstat.config import get_settings, player_url
from npbstat.parsing.models import PlayerDetails
from npbstat.parsing.player_bio_parser import parse_player_profile
from npbstat.parsing.stats_parser import parse_batting_stats, parse_pitching_stats
from npbstat.parsing.transfer_parser import parse_transfers
from npbstat.utils.url_cacher import PageCache, PageFetcher, get_default_fetcher, global_cache

logger = logging.getLogger(__name__)


def player_cache_key(player_id: str) -> str:
    return f"player-details:{player_id}"


def parse_player_details(soup: BeautifulSoup, player_id: str) -> PlayerDetails:
    """
    Extract everything known about a player from a parsed player page.

    Empty stat series and an empty transfer list are reported as None.
    """
    profile = parse_player_profile(soup, player_id)
    pitching = parse_pitching_stats(soup)
    batting = parse_batting_stats(soup)
    transfers = parse_transfers(pitching.stats, batting.stats)

    return PlayerDetails(
        profile=profile,
        pitching_stats=pitching.stats or None,
        batting_stats=batting.stats or None,
        career_pitching=pitching.career,
        career_batting=batting.career,
        transfers=transfers or None,
    )


def scrape_player_details_from_html(html: str, player_id: str) -> PlayerDetails:
    """Parse raw player page HTML"""
    return parse_player_details(BeautifulSoup(html, 'html.parser'), player_id)


def get_player_details(
    player_id: str,
    fetcher: Optional[PageFetcher] = None,
    cache: Optional[PageCache] = None
) -> PlayerDetails:
    """
    Fetch and parse a player's page, using the cache when possible.

    Args:
        player_id: Eight-digit NPB player ID (validated by the caller)
        fetcher: Page fetcher (process-wide default if None)
        cache: Result cache (process-wide cache if None)

    Returns:
        PlayerDetails for the player

    Raises:
        FetchError: when the page cannot be fetched
    """
    fetcher = fetcher or get_default_fetcher()
    cache = cache if cache is not None else global_cache

    cache_key = player_cache_key(player_id)
    cached = cache.get(cache_key)
    if cached is not None:
        logger.debug(f"Cache hit for player {player_id}")
        return cached

    html = fetcher.fetch_html(player_url(player_id))
    details = scrape_player_details_from_html(html, player_id)

    cache.set(cache_key, details, get_settings()['player_ttl'])
    logger.info(
        f"Parsed player {player_id}: "
        f"{len(details.pitching_stats or [])} pitching / "
        f"{len(details.batting_stats or [])} batting seasons"
    )
    return details
