"""
Asset API Routes

Endpoints for most traded assets and per-asset statistics.
"""
from __future__ import annotations

from typing import Optional
from fastapi import APIRouter, Query

from modules.queries import get_asset_stats, get_top_traded_assets

router = APIRouter()


@router.get("/top")
def top_assets(
    party: Optional[str] = Query(None, description="DEMOCRAT or REPUBLICAN (omit for all)"),
    tx_type: Optional[list[str]] = Query(None, alias="type", description="BUY, SELL, RECEIVE, EXCHANGE"),
    days: int = Query(90, description="Lookback window: 30, 90, 180 or 365"),
    limit: int = Query(10, description="Number of assets (1-50)"),
):
    """Most traded assets over the lookback window."""
    return get_top_traded_assets(party=party, types=tx_type, days=days, limit=limit)


@router.get("/{stock}/stats")
def asset_stats(
    stock: str,
    days: int = Query(90, description="Lookback window: 30, 90, 180 or 365"),
):
    """Buy/sell breakdown and most active traders for one asset."""
    return get_asset_stats(stock=stock, days=days)
