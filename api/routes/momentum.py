"""
Momentum API Routes

Endpoints for buy momentum and the party buy split.
"""
from __future__ import annotations

from typing import Optional
from fastapi import APIRouter, Query

from modules.queries import get_buy_momentum_assets, get_party_buy_momentum

router = APIRouter()


@router.get("/buy")
def buy_momentum(
    party: Optional[str] = Query(None, description="DEMOCRAT or REPUBLICAN (omit for all)"),
    days: int = Query(90, description="Lookback window: 30, 90, 180 or 365"),
    limit: int = Query(10, description="Number of assets (1-20)"),
):
    """Assets with more buys than sells, ranked by buy/sell ratio."""
    return get_buy_momentum_assets(party=party, days=days, limit=limit)


@router.get("/party")
def party_momentum(
    days: int = Query(90, description="Lookback window: 30, 90, 180 or 365"),
    limit: int = Query(10, description="Entries per list (1-20)"),
):
    """Consensus buys plus Democrat and Republican favorites."""
    return get_party_buy_momentum(days=days, limit=limit)
