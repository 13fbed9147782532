"""
Capitol Trades Query Service - Configuration Settings

Centralized configuration management with environment variable loading
for the source site, request behaviour, query limits and the HTTP API.
"""
from __future__ import annotations

import os
import logging
from pathlib import Path
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Load from project root .env file
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# basicConfig writes to stderr, keeping stdout free for CLI output
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format=LOG_FORMAT,
    datefmt=LOG_DATE_FORMAT
)


# -----------------------------------------------------------------------------
# Scraping Configuration
# -----------------------------------------------------------------------------
@dataclass
class ScrapingConfig:
    """Source site endpoints and request behaviour."""
    base_url: str = field(
        default_factory=lambda: os.getenv(
            "CAPITOL_TRADES_BASE_URL", "https://www.capitoltrades.com"
        ).rstrip("/")
    )

    # Seconds before a single HTTP request is abandoned
    request_timeout: int = 30

    # Pause between successive listing pages
    page_delay_seconds: float = field(
        default_factory=lambda: float(os.getenv("PAGE_DELAY_SECONDS", "0.5"))
    )

    # Rows requested per listing page; 0 leaves the site default
    page_size: int = field(
        default_factory=lambda: int(os.getenv("PAGE_SIZE", "96"))
    )

    # Name -> identifier lookups are reused for this long
    id_cache_ttl_seconds: int = 600

    # User agents for rotation
    user_agents: list[str] = field(default_factory=lambda: [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    ])

    @property
    def trades_url(self) -> str:
        return f"{self.base_url}/trades"

    @property
    def issuers_url(self) -> str:
        return f"{self.base_url}/issuers"

    @property
    def politicians_url(self) -> str:
        return f"{self.base_url}/politicians"


# -----------------------------------------------------------------------------
# Query Configuration
# -----------------------------------------------------------------------------
@dataclass
class QueryConfig:
    """Limits and allowed values for the public query operations."""
    # Trades returned by a plain trade lookup
    trades_limit: int = 50

    # Trades sampled before computing an aggregate report
    aggregation_sample_size: int = 500

    allowed_days: tuple[int, ...] = (30, 90, 180, 365)
    default_days: int = 90
    allowed_parties: tuple[str, ...] = ("DEMOCRAT", "REPUBLICAN")
    allowed_types: tuple[str, ...] = ("BUY", "SELL", "RECEIVE", "EXCHANGE")

    # Per-operation result limits
    max_top_assets: int = 50
    max_momentum_assets: int = 20
    default_result_limit: int = 10

    # Entries listed under most-traded assets / most-active traders
    stats_top_n: int = 10


# -----------------------------------------------------------------------------
# API Configuration
# -----------------------------------------------------------------------------
@dataclass
class ApiConfig:
    """HTTP API server settings."""
    host: str = field(default_factory=lambda: os.getenv("API_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("API_PORT", "8000")))
    cors_origins: list[str] = field(default_factory=lambda: [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ])


# -----------------------------------------------------------------------------
# Global Config Instance
# -----------------------------------------------------------------------------
@dataclass
class Config:
    """Main configuration container."""
    scraping: ScrapingConfig = field(default_factory=ScrapingConfig)
    query: QueryConfig = field(default_factory=QueryConfig)
    api: ApiConfig = field(default_factory=ApiConfig)


# Singleton config instance
config = Config()


def get_config() -> Config:
    """Get the global configuration instance."""
    return config
