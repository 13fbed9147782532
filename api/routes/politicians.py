"""
Politicians API Routes

Endpoint for per-politician trading statistics.
"""
from __future__ import annotations

from fastapi import APIRouter, Query

from modules.queries import get_politician_stats

router = APIRouter()


@router.get("/{name}/stats")
def politician_stats(
    name: str,
    days: int = Query(90, description="Lookback window: 30, 90, 180 or 365"),
):
    """
    Trading statistics for a politician.

    - **name**: Politician name as searched on the site (partial names work)
    - **days**: Lookback window
    """
    return get_politician_stats(politician=name, days=days)
