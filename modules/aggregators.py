"""
Capitol Trades Query Service - Trade Aggregators

Read-only analytics over a collected trade set: most traded assets,
per-politician and per-asset statistics, buy momentum and the
Democrat / Republican buy split.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from modules.models import NOT_AVAILABLE, Trade

BUY = "buy"
SELL = "sell"
RECEIVE = "receive"
EXCHANGE = "exchange"


def is_democrat(party: str) -> bool:
    return "democrat" in party.lower()


def is_republican(party: str) -> bool:
    return "republican" in party.lower()


def buy_sell_ratio(buys: int, sells: int) -> float:
    """buys / sells, or buys when there are no sells; two decimals."""
    if sells == 0:
        return float(buys)
    return round(buys / sells, 2)


# -----------------------------------------------------------------------------
# Grouping
# -----------------------------------------------------------------------------
@dataclass
class AssetActivity:
    """Trade counts for one issuer."""
    name: str
    ticker: str = NOT_AVAILABLE
    trades: int = 0
    buys: int = 0
    sells: int = 0
    dem_buys: int = 0
    dem_sells: int = 0
    rep_buys: int = 0
    rep_sells: int = 0

    @property
    def net_buys(self) -> int:
        return self.buys - self.sells

    @property
    def momentum_ratio(self) -> float:
        if self.sells == 0:
            return float(self.buys)
        return self.buys / self.sells

    @property
    def dem_net(self) -> int:
        return self.dem_buys - self.dem_sells

    @property
    def rep_net(self) -> int:
        return self.rep_buys - self.rep_sells

    @property
    def dem_total(self) -> int:
        return self.dem_buys + self.dem_sells

    @property
    def rep_total(self) -> int:
        return self.rep_buys + self.rep_sells


@dataclass
class TraderActivity:
    """Trade count for one politician."""
    name: str
    party: str = ""
    chamber: str = ""
    trades: int = 0


def group_by_issuer(trades: Iterable[Trade]) -> dict[str, AssetActivity]:
    """Per-issuer counts keyed by issuer name, in first-seen order."""
    assets: dict[str, AssetActivity] = {}

    for trade in trades:
        name = trade.issuer.name
        asset = assets.get(name)
        if asset is None:
            asset = assets[name] = AssetActivity(name=name)

        # Latest known ticker wins
        ticker = trade.issuer.ticker.strip()
        if ticker and ticker != NOT_AVAILABLE:
            asset.ticker = ticker

        asset.trades += 1
        tx_type = trade.tx_type
        party = trade.politician.party

        if tx_type == BUY:
            asset.buys += 1
            if is_democrat(party):
                asset.dem_buys += 1
            elif is_republican(party):
                asset.rep_buys += 1
        elif tx_type == SELL:
            asset.sells += 1
            if is_democrat(party):
                asset.dem_sells += 1
            elif is_republican(party):
                asset.rep_sells += 1

    return assets


def group_by_politician(trades: Iterable[Trade]) -> dict[str, TraderActivity]:
    """Per-politician counts keyed by name, in first-seen order."""
    traders: dict[str, TraderActivity] = {}

    for trade in trades:
        name = trade.politician.name
        trader = traders.get(name)
        if trader is None:
            trader = traders[name] = TraderActivity(name=name)
        trader.party = trader.party or trade.politician.party
        trader.chamber = trader.chamber or trade.politician.chamber
        trader.trades += 1

    return traders


def transaction_breakdown(trades: Iterable[Trade]) -> dict[str, int]:
    """Count trades by type. Unrecognized types are not counted."""
    counts = {"buys": 0, "sells": 0, "receives": 0, "exchanges": 0}
    keys = {BUY: "buys", SELL: "sells", RECEIVE: "receives", EXCHANGE: "exchanges"}

    for trade in trades:
        key = keys.get(trade.tx_type)
        if key:
            counts[key] += 1

    return counts


def _ranked(entries: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [{"rank": rank, **entry} for rank, entry in enumerate(entries, start=1)]


# -----------------------------------------------------------------------------
# Reports
# -----------------------------------------------------------------------------
def top_traded_assets(trades: list[Trade], limit: int) -> list[dict[str, Any]]:
    """Issuers ordered by number of trades, most traded first."""
    assets = sorted(group_by_issuer(trades).values(), key=lambda a: a.trades, reverse=True)
    return _ranked([
        {"name": a.name, "ticker": a.ticker, "tradeCount": a.trades}
        for a in assets[:limit]
    ])


def politician_stats(trades: list[Trade], top_n: int = 10) -> dict[str, Any]:
    """Type breakdown, buy/sell ratio and most traded assets for one politician."""
    breakdown = transaction_breakdown(trades)
    assets = sorted(group_by_issuer(trades).values(), key=lambda a: a.trades, reverse=True)

    return {
        "totalTrades": len(trades),
        "transactions": breakdown,
        "buySellRatio": buy_sell_ratio(breakdown["buys"], breakdown["sells"]),
        "mostTradedAssets": [
            {"name": a.name, "ticker": a.ticker, "tradeCount": a.trades}
            for a in assets[:top_n]
        ],
    }


def asset_stats(trades: list[Trade], top_n: int = 10) -> dict[str, Any]:
    """Type breakdown, buy/sell ratio and most active traders for one asset."""
    breakdown = transaction_breakdown(trades)
    traders = sorted(group_by_politician(trades).values(), key=lambda t: t.trades, reverse=True)

    return {
        "totalTrades": len(trades),
        "transactions": breakdown,
        "buySellRatio": buy_sell_ratio(breakdown["buys"], breakdown["sells"]),
        "mostActiveTraders": [
            {"name": t.name, "party": t.party, "chamber": t.chamber, "tradeCount": t.trades}
            for t in traders[:top_n]
        ],
    }


def buy_momentum(trades: list[Trade], limit: int) -> list[dict[str, Any]]:
    """
    Assets with strictly more buys than sells, strongest first.

    Ordered by buy/sell ratio, then by raw buy count.
    """
    candidates = [a for a in group_by_issuer(trades).values() if a.buys > a.sells]
    candidates.sort(key=lambda a: (a.momentum_ratio, a.buys), reverse=True)

    return _ranked([
        {
            "name": a.name,
            "ticker": a.ticker,
            "buys": a.buys,
            "sells": a.sells,
            "netBuys": a.net_buys,
            "buySellRatio": round(a.momentum_ratio, 2),
            "totalTrades": a.trades,
        }
        for a in candidates[:limit]
    ])


def _party_entry(asset: AssetActivity, score: int) -> dict[str, Any]:
    return {
        "name": asset.name,
        "ticker": asset.ticker,
        "demBuys": asset.dem_buys,
        "demSells": asset.dem_sells,
        "repBuys": asset.rep_buys,
        "repSells": asset.rep_sells,
        "demNet": asset.dem_net,
        "repNet": asset.rep_net,
        "score": score,
    }


def _bucket(scored: list[tuple[AssetActivity, int]], limit: int) -> list[dict[str, Any]]:
    scored.sort(key=lambda item: item[1], reverse=True)
    return _ranked([_party_entry(asset, score) for asset, score in scored[:limit]])


def party_buy_momentum(trades: list[Trade], limit: int) -> dict[str, list[dict[str, Any]]]:
    """
    Split net buying by party into three independent rankings.

    - consensus: both parties net buying, each with at least two trades
    - democratFavorites: Democrats net buying and at least as active
    - republicanFavorites: Republicans net buying and at least as active

    An asset can appear in more than one list.
    """
    consensus: list[tuple[AssetActivity, int]] = []
    dem_favorites: list[tuple[AssetActivity, int]] = []
    rep_favorites: list[tuple[AssetActivity, int]] = []

    for asset in group_by_issuer(trades).values():
        if (asset.dem_net > 0 and asset.rep_net > 0
                and asset.dem_total >= 2 and asset.rep_total >= 2):
            consensus.append((asset, asset.dem_net + asset.rep_net))
        if asset.dem_net > 0 and asset.dem_total >= asset.rep_total:
            dem_favorites.append((asset, asset.dem_net))
        if asset.rep_net > 0 and asset.rep_total >= asset.dem_total:
            rep_favorites.append((asset, asset.rep_net))

    return {
        "consensus": _bucket(consensus, limit),
        "democratFavorites": _bucket(dem_favorites, limit),
        "republicanFavorites": _bucket(rep_favorites, limit),
    }
