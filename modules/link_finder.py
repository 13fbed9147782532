"""
Capitol Trades Query Service - Link Finder

Lists the hyperlinks on a page and picks the first one matching a predicate.
"""
from __future__ import annotations

import re
import logging
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from modules.errors import NotFoundError
from modules.web_client import create_session, fetch_html

# Module logger
link_logger = logging.getLogger("capitol_trades.link_finder")


@dataclass
class LinkData:
    """A hyperlink found on a page."""
    target_url: str
    link_text: str
    title: Optional[str] = None


def parse_links(html: str, page_url: str) -> list[LinkData]:
    """Extract absolute, de-duplicated links in document order."""
    soup = BeautifulSoup(html, 'lxml')
    links: list[LinkData] = []
    seen_hrefs: set[str] = set()

    for anchor in soup.find_all('a', href=True):
        href = anchor['href'].strip()
        if not href or href in seen_hrefs:
            continue
        seen_hrefs.add(href)

        links.append(LinkData(
            target_url=urljoin(page_url, href),
            link_text=anchor.get_text(strip=True),
            title=anchor.get('title'),
        ))

    return links


def extract_links(url: str,
                  pattern: Optional[str] = None,
                  params: Optional[dict[str, str]] = None,
                  session: Optional[requests.Session] = None) -> list[LinkData]:
    """
    Fetch a page and return its links.

    Args:
        url: Page to fetch
        pattern: Optional case-insensitive regex matched against URL or text
        params: Optional query parameters for the request
        session: Session to reuse (a fresh one is created otherwise)
    """
    if session is None:
        with create_session() as own_session:
            html = fetch_html(own_session, url, params=params)
    else:
        html = fetch_html(session, url, params=params)
    links = parse_links(html, url)

    if pattern:
        regex = re.compile(pattern, re.IGNORECASE)
        links = [
            link for link in links
            if regex.search(link.target_url) or regex.search(link.link_text)
        ]

    link_logger.debug(f"Found {len(links)} links on {url}")
    return links


def find_first_link(url: str,
                    predicate: Callable[[LinkData], bool],
                    params: Optional[dict[str, str]] = None,
                    session: Optional[requests.Session] = None) -> LinkData:
    """Return the first link on the page satisfying predicate."""
    for link in extract_links(url, params=params, session=session):
        if predicate(link):
            return link

    raise NotFoundError("No link matched the filter criteria", context={"url": url})
