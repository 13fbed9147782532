"""
Capitol Trades Query Service - HTTP Session Helpers

Browser-like requests sessions and a single GET helper that turns
network failures and non-2xx responses into FetchError.
"""
from __future__ import annotations

import random
import logging
from typing import Optional

import requests

from config.settings import get_config
from modules.errors import FetchError

# Module logger
web_logger = logging.getLogger("capitol_trades.web")


def create_session(user_agent: Optional[str] = None) -> requests.Session:
    """Create a session with desktop browser headers."""
    config = get_config()
    session = requests.Session()
    session.headers.update({
        "User-Agent": user_agent or random.choice(config.scraping.user_agents),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
        "Accept-Encoding": "gzip, deflate, br",
        "Connection": "keep-alive",
        "Referer": config.scraping.base_url + "/",
    })
    return session


def fetch_html(session: requests.Session, url: str,
               params: Optional[dict[str, str]] = None) -> str:
    """
    GET a page and return its body.

    Redirects are followed; anything outside 2xx raises FetchError.
    """
    timeout = get_config().scraping.request_timeout
    web_logger.debug(f"GET {url} params={params}")

    try:
        response = session.get(url, params=params, timeout=timeout, allow_redirects=True)
        response.raise_for_status()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise FetchError(f"Failed to fetch {url}: HTTP {status}", url=url, status_code=status) from e
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch {url}: {e}", url=url) from e

    return response.text
