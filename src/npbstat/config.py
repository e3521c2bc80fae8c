"""
Runtime Configuration
=====================
Reads fetch, cache and logging settings from environment variables.
"""

import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://npb.jp'
DEFAULT_USER_AGENT = 'npbstat/0.1.0'


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: {raw!r}; using default {default}")
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid number for {name}: {raw!r}; using default {default}")
        return default


def get_settings() -> dict:
    """
    Get fetcher/cache settings from environment variables.

    Returns:
        Dict with base_url, user_agent, request_timeout, max_retries,
        cache_ttl, roster_ttl, player_ttl, max_workers and log_level
    """
    return {
        'base_url': os.getenv('NPB_BASE_URL', DEFAULT_BASE_URL).rstrip('/'),
        'user_agent': os.getenv('NPB_USER_AGENT', DEFAULT_USER_AGENT),
        'request_timeout': _env_float('NPB_REQUEST_TIMEOUT', 30.0),
        'max_retries': max(1, _env_int('NPB_MAX_RETRIES', 3)),
        'cache_ttl': _env_float('NPB_CACHE_TTL', 3600.0),
        'roster_ttl': _env_float('NPB_ROSTER_TTL', 3600.0),
        'player_ttl': _env_float('NPB_PLAYER_TTL', 86400.0),
        'max_workers': max(1, _env_int('NPB_MAX_WORKERS', 6)),
        'log_level': os.getenv('NPB_LOG_LEVEL', 'INFO').upper(),
    }


def player_url(player_id: str) -> str:
    """Detail page URL for an eight-digit player id"""
    return f"{get_settings()['base_url']}/bis/players/{player_id}.html"


def roster_url(team_id: str) -> str:
    """Roster page URL for a short team id"""
    return f"{get_settings()['base_url']}/bis/teams/rst_{team_id}.html"
