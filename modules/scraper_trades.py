"""
Capitol Trades Query Service - Trade Listing Scraper

Scrapes the /trades listing of capitoltrades.com.
Static HTML parsing only: prices are read from attributes on the size
element and are reported as "N/A" when only a hover tooltip carries them.
"""
from __future__ import annotations

import re
import time
import logging
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import requests
from bs4 import BeautifulSoup
from bs4.element import Tag

from config.settings import get_config
from modules.errors import FetchError, RowParseError, ValidationError
from modules.models import (
    NOT_AVAILABLE,
    UNKNOWN_ISSUER,
    Issuer,
    Politician,
    Trade,
    TradeDates,
    Transaction,
)
from modules.web_client import create_session, fetch_html

# Module logger
scraper_logger = logging.getLogger("capitol_trades.scraper_trades")

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
PAGE_PARAM = "page"

# "16 Oct 2025" or "Oct 2025"
_MONTH = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?"
DATE_PATTERN = re.compile(
    rf"\b(\d{{1,2}}\s+{_MONTH}\s+\d{{4}}|{_MONTH}\s+\d{{4}})\b",
    re.IGNORECASE,
)

ROW_SELECTOR = "tbody tr"
FALLBACK_ROW_SELECTOR = "tr"


# -----------------------------------------------------------------------------
# Row Parsing
# -----------------------------------------------------------------------------
def _text(row: Tag, selector: str) -> str:
    """Text of the first element matching selector, or empty string."""
    element = row.select_one(selector)
    if element is None:
        return ""
    return element.get_text(" ", strip=True)


def extract_dates(row: Tag) -> tuple[str, str]:
    """
    Find date-shaped strings in the row's cells.

    Column positions shift between table layouts, so every cell is scanned.
    The first match is taken as the trade date and the second as the
    disclosure date.

    Returns:
        (trade_date, disclosure_date), either may be empty
    """
    found: list[str] = []
    for cell in row.find_all('td'):
        match = DATE_PATTERN.search(cell.get_text(" ", strip=True))
        if match:
            found.append(re.sub(r"\s+", " ", match.group(1)))
        if len(found) == 2:
            break

    trade_date = found[0] if len(found) > 0 else ""
    disclosure_date = found[1] if len(found) > 1 else ""
    return trade_date, disclosure_date


def extract_reporting_gap(row: Tag) -> str:
    gap = _text(row, "[class*='reporting-gap-tier']")
    if not gap:
        return ""
    if gap.isdigit():
        return f"{gap} days"
    return gap


def extract_price(row: Tag) -> str:
    """Price from the size element's title or data-price attribute."""
    size_element = row.select_one(".trade-size")
    if size_element is None:
        return NOT_AVAILABLE

    raw = size_element.get("title") or size_element.get("data-price") or ""
    raw = raw.strip()
    if not raw or raw.upper() == NOT_AVAILABLE:
        return NOT_AVAILABLE
    if not raw.startswith("$"):
        raw = "$" + raw
    return raw


def extract_size(row: Tag) -> str:
    size = _text(row, ".trade-size .text-txt-dimmer")
    if not size:
        size = _text(row, ".trade-size")
    return size


def parse_row(row: Tag, index: int) -> Optional[Trade]:
    """
    Parse one table row into a Trade.

    Returns None for blank and header rows, i.e. when politician name,
    issuer name and transaction type are all empty.

    Raises:
        RowParseError: if the row markup cannot be read
    """
    try:
        politician = Politician(
            name=_text(row, ".politician-name"),
            party=_text(row, ".party"),
            chamber=_text(row, ".chamber"),
            state=_text(row, ".us-state-compact"),
        )
        issuer_name = _text(row, ".issuer-name")
        issuer_ticker = _text(row, ".issuer-ticker")
        trade_date, disclosure_date = extract_dates(row)
        transaction = Transaction(
            type=_text(row, ".tx-type"),
            size=extract_size(row),
            price=extract_price(row),
        )
        reporting_gap = extract_reporting_gap(row)
    except (AttributeError, TypeError, ValueError, KeyError) as e:
        raise RowParseError(f"Could not parse row: {e}", row_number=index) from e

    if not (politician.name or issuer_name or transaction.type):
        return None

    return Trade(
        index=index,
        politician=politician,
        issuer=Issuer(
            name=issuer_name or UNKNOWN_ISSUER,
            ticker=issuer_ticker or NOT_AVAILABLE,
        ),
        dates=TradeDates(
            disclosure=disclosure_date,
            trade=trade_date,
            reporting_gap=reporting_gap,
        ),
        transaction=transaction,
    )


def parse_trades(html: str) -> list[Trade]:
    """Parse every trade row on a listing page."""
    soup = BeautifulSoup(html, 'lxml')

    rows = soup.select(ROW_SELECTOR)
    if not rows:
        # Fallback: any table row
        rows = soup.select(FALLBACK_ROW_SELECTOR)

    trades: list[Trade] = []
    for row_number, row in enumerate(rows, start=1):
        try:
            trade = parse_row(row, index=len(trades) + 1)
        except RowParseError as e:
            scraper_logger.warning(f"Skipping row {row_number}: {e}")
            continue

        if trade is not None:
            trades.append(trade)

    return trades


# -----------------------------------------------------------------------------
# URL Helpers
# -----------------------------------------------------------------------------
def build_url(base_url: str, params: list[tuple[str, str]]) -> str:
    """Append params to base_url, keeping comma-separated values readable."""
    if not params:
        return base_url
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}{urlencode(params, safe=',')}"


def strip_page_param(url: str) -> str:
    """Remove any existing page parameter from url."""
    parts = urlsplit(url)
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key != PAGE_PARAM
    ]
    return urlunsplit((
        parts.scheme, parts.netloc, parts.path,
        urlencode(query, safe=','), parts.fragment,
    ))


def page_url(base_url: str, page: int) -> str:
    return build_url(base_url, [(PAGE_PARAM, str(page))])


# -----------------------------------------------------------------------------
# Main Scraper Class
# -----------------------------------------------------------------------------
class TradesScraper:
    """
    Fetches trade listing pages and collects trades across pages.

    One instance serves one request; pages are fetched strictly in
    sequence with a pause between them.
    """

    def __init__(self, session: Optional[requests.Session] = None,
                 page_delay: Optional[float] = None):
        self.config = get_config()
        # Only a session created here is closed by close()
        self._owns_session = session is None
        self.session = session or create_session()
        self.page_delay = (
            page_delay if page_delay is not None
            else self.config.scraping.page_delay_seconds
        )

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def fetch_page(self, url: str) -> list[Trade]:
        """
        Fetch a single listing page and parse its trades.

        Raises:
            FetchError: on network failure or non-2xx response
        """
        html = fetch_html(self.session, url)
        trades = parse_trades(html)
        scraper_logger.debug(f"Parsed {len(trades)} trades from {url}")
        return trades

    def collect(self, base_url: str, limit: int = 50) -> list[Trade]:
        """
        Collect up to limit trades, following page=1, 2, 3, ...

        Stops at the first empty page or once limit is reached. A failure on
        page 1 is raised; a failure on a later page ends pagination with the
        trades gathered so far.
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValidationError("limit must be a positive integer", {"limit": limit})

        base_url = strip_page_param(base_url)
        collected: list[Trade] = []
        page = 1

        while len(collected) < limit:
            if page > 1 and self.page_delay > 0:
                time.sleep(self.page_delay)

            url = page_url(base_url, page)
            scraper_logger.info(f"Fetching page {page}: {url}")

            try:
                page_trades = self.fetch_page(url)
            except FetchError as e:
                if page == 1:
                    raise
                scraper_logger.warning(f"Stopping pagination at page {page}: {e}")
                break

            if not page_trades:
                scraper_logger.info(f"Page {page} is empty, end of results")
                break

            for trade in page_trades:
                trade.index = len(collected) + 1
                collected.append(trade)
                if len(collected) >= limit:
                    break

            page += 1

        scraper_logger.info(f"Collected {len(collected)} trades (limit {limit})")
        return collected
