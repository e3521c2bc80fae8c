"""
Thread-Safe NPB Page Fetcher and Cache
======================================

In-memory TTL cache for parsed results, plus an HTTP fetcher for npb.jp
pages with retries. Both are safe to share between worker threads.
"""

import time
import logging
import threading
from typing import Any, Callable, Dict, Optional

import requests

from npbstat.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_TTL = 60 * 60  # 1 hour


class FetchError(Exception):
    """A page could not be fetched (transport failure or non-2xx status)"""

    def __init__(self, url: str, message: str, status: Optional[int] = None):
        self.url = url
        self.status = status
        super().__init__(f"Failed to fetch {url}: {message}")


class PageCache:
    """Key/value cache where every entry carries its own TTL (seconds)"""

    def __init__(self, default_ttl: float = DEFAULT_TTL, clock: Callable[[], float] = time.time):
        """
        Args:
            default_ttl: TTL used by set() when none is given
            clock: Time source, replaceable in tests
        """
        self.default_ttl = default_ttl
        self._clock = clock
        self._lock = threading.RLock()
        self._store: Dict[str, Dict[str, Any]] = {}
        self._stats = {"cache_hits": 0, "cache_misses": 0}

    def _is_expired(self, entry: Dict[str, Any], now: float) -> bool:
        return now - entry["timestamp"] > entry["ttl"]

    def get(self, key: str) -> Optional[Any]:
        """Cached value, or None when missing or expired (expired entries are dropped)"""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._stats["cache_misses"] += 1
                return None

            if self._is_expired(entry, self._clock()):
                del self._store[key]
                self._stats["cache_misses"] += 1
                logger.debug(f"Cache expired: {key}")
                return None

            self._stats["cache_hits"] += 1
            return entry["data"]

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        with self._lock:
            self._store[key] = {
                "data": value,
                "timestamp": self._clock(),
                "ttl": self.default_ttl if ttl is None else ttl,
            }

    def delete(self, key: str) -> bool:
        """Remove one entry; True if it existed"""
        with self._lock:
            return self._store.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def cleanup(self) -> int:
        """
        Evict every entry older than its own TTL.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._store.items() if self._is_expired(entry, now)]
            for key in expired:
                del self._store[key]

        if expired:
            logger.debug(f"Evicted {len(expired)} expired cache entries")
        return len(expired)

    def size(self) -> int:
        with self._lock:
            return len(self._store)

    def get_cache_stats(self) -> dict:
        """Hit/miss counters and current entry count"""
        with self._lock:
            hits = self._stats["cache_hits"]
            misses = self._stats["cache_misses"]
            total = hits + misses
            return {
                "total_requests": total,
                "cache_hits": hits,
                "cache_misses": misses,
                "hit_rate_percentage": (hits / total * 100) if total > 0 else 0,
                "entries": len(self._store),
            }


class PageFetcher:
    """HTTP fetcher for npb.jp pages with retries and linear backoff"""

    HEADERS = {
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
        'Accept-Language': 'ja,en;q=0.9',
    }

    def __init__(self, session: Optional[requests.Session] = None,
                 max_retries: Optional[int] = None, timeout: Optional[float] = None,
                 backoff: float = 3.0, sleep: Callable[[float], None] = time.sleep):
        """
        Initialize fetcher

        Args:
            session: requests session to reuse (a new one is created if None)
            max_retries: Attempts per URL, defaults to NPB_MAX_RETRIES
            timeout: Per-request timeout in seconds, defaults to NPB_REQUEST_TIMEOUT
            backoff: Seconds added to the wait after each failed attempt
            sleep: Wait function, replaceable in tests
        """
        settings = get_settings()
        self.max_retries = max_retries if max_retries is not None else settings['max_retries']
        self.timeout = timeout if timeout is not None else settings['request_timeout']
        self.backoff = backoff
        self._sleep = sleep

        self.session = session or requests.Session()
        self.session.headers.update(self.HEADERS)
        self.session.headers['User-Agent'] = settings['user_agent']

    def fetch_html(self, url: str) -> str:
        """
        Fetch a page's HTML text.

        Transport errors and 5xx responses are retried; 4xx responses fail
        at once.

        Raises:
            FetchError: when the page could not be fetched
        """
        last_error = None
        for attempt in range(self.max_retries):
            try:
                logger.info(f"Fetching {url}")
                response = self.session.get(url, timeout=self.timeout)
            except requests.RequestException as e:
                last_error = FetchError(url, str(e))
            else:
                if 200 <= response.status_code < 300:
                    return response.text
                error = FetchError(url, f"HTTP error! status: {response.status_code}",
                                   status=response.status_code)
                if response.status_code < 500:
                    raise error
                last_error = error

            if attempt < self.max_retries - 1:
                wait_time = self.backoff * (attempt + 1)
                logger.warning(f"Attempt {attempt + 1} failed for {url}: {last_error}. "
                               f"Retrying in {wait_time}s")
                self._sleep(wait_time)

        logger.error(f"Giving up on {url} after {self.max_retries} attempts")
        raise last_error


global_cache = PageCache(default_ttl=get_settings()['cache_ttl'])

_default_fetcher = None
_fetcher_lock = threading.Lock()


def get_default_fetcher() -> PageFetcher:
    """Process-wide fetcher, created on first use"""
    global _default_fetcher
    with _fetcher_lock:
        if _default_fetcher is None:
            _default_fetcher = PageFetcher()
        return _default_fetcher
