"""
System API Routes

Endpoints for configuration and identifier cache status.
"""
from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from config.settings import get_config
from modules.id_resolver import get_id_cache

router = APIRouter()


class ConfigResponse(BaseModel):
    """Sanitized configuration response."""
    base_url: str
    request_timeout: int
    page_delay_seconds: float
    page_size: int
    id_cache_ttl_seconds: int
    trades_limit: int
    aggregation_sample_size: int
    allowed_days: list[int]


class CacheStatus(BaseModel):
    """Identifier cache status."""
    entries: int
    ttl_seconds: float


@router.get("/config", response_model=ConfigResponse)
def get_config_info():
    """Get current scraping and query configuration."""
    config = get_config()

    return ConfigResponse(
        base_url=config.scraping.base_url,
        request_timeout=config.scraping.request_timeout,
        page_delay_seconds=config.scraping.page_delay_seconds,
        page_size=config.scraping.page_size,
        id_cache_ttl_seconds=config.scraping.id_cache_ttl_seconds,
        trades_limit=config.query.trades_limit,
        aggregation_sample_size=config.query.aggregation_sample_size,
        allowed_days=list(config.query.allowed_days),
    )


@router.get("/cache", response_model=CacheStatus)
def get_cache_status():
    """Number of cached name lookups, stale ones included."""
    cache = get_id_cache()
    return CacheStatus(entries=len(cache), ttl_seconds=cache.ttl_seconds)
