"""
Capitol Trades Query Service - Data Models

Normalized trade records as scraped from the trade listing pages.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

UNKNOWN_ISSUER = "Unknown"
NOT_AVAILABLE = "N/A"


# -----------------------------------------------------------------------------
# Data Models
# -----------------------------------------------------------------------------
@dataclass
class Politician:
    """Filer of a disclosure. Values are free text as shown on the site."""
    name: str = ""
    party: str = ""  # e.g. 'Democrat', 'Republican', 'Other'
    chamber: str = ""  # 'House' or 'Senate'
    state: str = ""


@dataclass
class Issuer:
    """The traded company, fund or asset."""
    name: str = UNKNOWN_ISSUER
    ticker: str = NOT_AVAILABLE  # e.g. 'AAPL:US'


@dataclass
class TradeDates:
    """Date strings as displayed; not parsed into calendar dates."""
    disclosure: str = ""
    trade: str = ""
    reporting_gap: str = ""  # e.g. '25 days'


@dataclass
class Transaction:
    """What was done and how large it was."""
    type: str = ""  # buy / sell / receive / exchange
    size: str = ""  # e.g. '1K–15K'
    price: str = NOT_AVAILABLE  # e.g. '$190.12'


@dataclass
class Trade:
    """One disclosed transaction."""
    index: int
    politician: Politician = field(default_factory=Politician)
    issuer: Issuer = field(default_factory=Issuer)
    dates: TradeDates = field(default_factory=TradeDates)
    transaction: Transaction = field(default_factory=Transaction)

    @property
    def tx_type(self) -> str:
        """Lowercased transaction type for case-insensitive comparisons."""
        return self.transaction.type.strip().lower()

    def to_dict(self) -> dict[str, Any]:
        """JSON shape used in every report."""
        return {
            "index": self.index,
            "politician": {
                "name": self.politician.name,
                "party": self.politician.party,
                "chamber": self.politician.chamber,
                "state": self.politician.state,
            },
            "issuer": {
                "name": self.issuer.name,
                "ticker": self.issuer.ticker,
            },
            "dates": {
                "disclosure": self.dates.disclosure,
                "trade": self.dates.trade,
                "reportingGap": self.dates.reporting_gap,
            },
            "transaction": {
                "type": self.transaction.type,
                "size": self.transaction.size,
                "price": self.transaction.price,
            },
        }
