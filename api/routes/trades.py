"""
Trade Lookup API Routes

Endpoint for filtered politician trade listings.
"""
from __future__ import annotations

from typing import Optional
from fastapi import APIRouter, Query

from modules.queries import get_politician_trades

router = APIRouter()


@router.get("")
def list_trades(
    stock: Optional[str] = Query(None, description="Company name or ticker, e.g. 'Apple'"),
    politician: Optional[str] = Query(None, description="Politician name, e.g. 'Nancy Pelosi'"),
    party: Optional[str] = Query(None, description="DEMOCRAT or REPUBLICAN (omit for all)"),
    tx_type: Optional[list[str]] = Query(None, alias="type", description="BUY, SELL, RECEIVE, EXCHANGE"),
    days: int = Query(90, description="Lookback window: 30, 90, 180 or 365"),
):
    """
    List up to 50 recent trades matching the filters.

    - **stock**: Filter by traded issuer
    - **politician**: Filter by politician
    - **party**: Filter by party
    - **type**: Repeat for several transaction types
    - **days**: Lookback window
    """
    return get_politician_trades(
        stock=stock,
        politician=politician,
        party=party,
        types=tx_type,
        days=days,
    )
