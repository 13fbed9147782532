"""
Shared fixtures for the Capitol Trades query tests.

HTML builders mirror the markup of the /trades listing table.
"""
from __future__ import annotations

import pytest

from modules.id_resolver import get_id_cache
from modules.models import Issuer, Politician, Trade, Transaction


def _trade_row(politician: str = "Nancy Pelosi",
               party: str = "Democrat",
               chamber: str = "House",
               state: str = "CA",
               issuer: str = "Apple Inc",
               ticker: str = "AAPL:US",
               published: str = "16 Oct 2025",
               traded: str = "10 Oct 2025",
               gap: str = "6",
               tx_type: str = "buy",
               size: str = "1K–15K",
               price_attr: str = "") -> str:
    return f"""
    <tr>
      <td>
        <div class="politician-info">
          <h2 class="politician-name"><a href="/politicians/P000197">{politician}</a></h2>
          <div><span class="party party--democrat">{party}</span>
          <span class="chamber">{chamber}</span>
          <span class="us-state-compact">{state}</span></div>
        </div>
      </td>
      <td>
        <h3 class="issuer-name"><a href="/issuers/435544">{issuer}</a></h3>
        <span class="issuer-ticker">{ticker}</span>
      </td>
      <td><div class="format--date">{published}</div></td>
      <td><div class="format--date">{traded}</div></td>
      <td><span class="reporting-gap-tier--2">{gap}</span></td>
      <td><span class="tx-type tx-type--{tx_type}">{tx_type}</span></td>
      <td><div class="trade-size" {price_attr}><span class="text-txt-dimmer">{size}</span></div></td>
    </tr>
    """


def _listing_page(rows: list[str]) -> str:
    return f"""
    <html><body>
      <table>
        <thead><tr><th>Politician</th><th>Traded Issuer</th><th>Published</th></tr></thead>
        <tbody>{''.join(rows)}</tbody>
      </table>
    </body></html>
    """


@pytest.fixture
def trade_row():
    """Factory for one listing row."""
    return _trade_row


@pytest.fixture
def listing_page():
    """Factory for a listing page wrapping the given rows."""
    return _listing_page


@pytest.fixture
def page_of():
    """Factory for a listing page of n default rows."""
    def build(n: int, issuer: str = "Apple Inc") -> str:
        return _listing_page([_trade_row(issuer=f"{issuer} {i}") for i in range(n)])
    return build


@pytest.fixture
def make_trade():
    """Factory for Trade records used by aggregator and query tests."""
    def build(issuer: str = "Apple Inc",
              tx_type: str = "buy",
              party: str = "Democrat",
              politician: str = "Nancy Pelosi",
              ticker: str = "N/A",
              chamber: str = "House",
              index: int = 1) -> Trade:
        return Trade(
            index=index,
            politician=Politician(name=politician, party=party, chamber=chamber, state="CA"),
            issuer=Issuer(name=issuer, ticker=ticker),
            transaction=Transaction(type=tx_type, size="1K–15K"),
        )
    return build


@pytest.fixture(autouse=True)
def clear_id_cache():
    """Keep the process-wide identifier cache empty between tests."""
    get_id_cache().clear()
    yield
    get_id_cache().clear()
