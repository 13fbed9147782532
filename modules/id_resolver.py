"""
Capitol Trades Query Service - Identifier Resolver

Resolves free-text issuer and politician names to the site's internal ids
(e.g. "apple" -> "435544", "nancy pelosi" -> "P000197") by searching the
listing page and reading the first matching profile link.
"""
from __future__ import annotations

import time
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urlparse

from config.settings import get_config
from modules.errors import NotFoundError
from modules.link_finder import LinkData, find_first_link

# Module logger
resolver_logger = logging.getLogger("capitol_trades.id_resolver")

ISSUER = "issuer"
POLITICIAN = "politician"

# Path segment that precedes the identifier in profile links
KIND_MARKERS = {
    ISSUER: "issuers/",
    POLITICIAN: "politicians/",
}


# -----------------------------------------------------------------------------
# Lookup Cache
# -----------------------------------------------------------------------------
@dataclass
class CacheEntry:
    key: str
    id: str
    timestamp: float


class IdentifierCache:
    """
    Process-wide name -> id cache with lazy expiry.

    Stale entries are never swept; they are ignored on read and replaced
    on the next successful lookup.
    """

    def __init__(self, ttl_seconds: Optional[float] = None,
                 clock: Callable[[], float] = time.time):
        self.ttl_seconds = (
            ttl_seconds if ttl_seconds is not None
            else get_config().scraping.id_cache_ttl_seconds
        )
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp >= self.ttl_seconds:
            return None
        return entry.id

    def set(self, key: str, identifier: str) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(key=key, id=identifier, timestamp=self._clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_id_cache = IdentifierCache()


def get_id_cache() -> IdentifierCache:
    """Get the global identifier cache."""
    return _id_cache


# -----------------------------------------------------------------------------
# Resolution
# -----------------------------------------------------------------------------
def extract_identifier(url: str, marker: str) -> str:
    """
    Return the path segment right after marker, without query or fragment.

    >>> extract_identifier("https://www.capitoltrades.com/issuers/435544?x=1", "issuers/")
    '435544'
    """
    path = urlparse(url).path
    _, found, rest = path.partition(marker)
    if not found:
        return ""
    return rest.split("/", 1)[0].split("?", 1)[0].split("#", 1)[0].strip()


def resolve(kind: str, query: str, cache: Optional[IdentifierCache] = None) -> str:
    """
    Resolve a name of the given kind to its identifier.

    Args:
        kind: 'issuer' or 'politician'
        query: Free-text name as typed by the caller
        cache: Cache to consult (defaults to the process-wide one)

    Raises:
        NotFoundError: if no profile link is found for the query
    """
    if kind not in KIND_MARKERS:
        raise ValueError(f"Unknown identifier kind: {kind}")

    cache = cache if cache is not None else get_id_cache()
    normalized = query.strip().lower()
    cache_key = f"{kind}:{normalized}"

    cached = cache.get(cache_key)
    if cached:
        resolver_logger.debug(f"Cache hit for {cache_key} -> {cached}")
        return cached

    marker = KIND_MARKERS[kind]
    scraping = get_config().scraping
    search_url = scraping.issuers_url if kind == ISSUER else scraping.politicians_url

    def is_profile_link(link: LinkData) -> bool:
        return marker in link.target_url

    resolver_logger.info(f"Searching {kind} id for '{query}'")
    try:
        link = find_first_link(search_url, is_profile_link, params={"search": normalized})
    except NotFoundError as e:
        raise NotFoundError(f"No {kind} found for '{query}'", query=query) from e

    identifier = extract_identifier(link.target_url, marker)
    if not identifier:
        raise NotFoundError(
            f"Could not extract {kind} id for '{query}' from {link.target_url}",
            query=query,
        )

    cache.set(cache_key, identifier)
    resolver_logger.info(f"Resolved {kind} '{query}' -> {identifier}")
    return identifier
