"""
Capitol Trades Query Service - Query Operations

The six public operations. Each one validates its arguments before any
network access, resolves names to ids, collects trades from the filtered
/trades listing and returns a JSON-serializable report.
"""
from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from config.settings import get_config
from modules import aggregators
from modules.errors import QueryError, ValidationError
from modules.id_resolver import ISSUER, POLITICIAN, resolve
from modules.scraper_trades import TradesScraper, build_url

# Module logger
query_logger = logging.getLogger("capitol_trades.queries")

_query_config = get_config().query


# -----------------------------------------------------------------------------
# Argument Models
# -----------------------------------------------------------------------------
class QueryArgs(BaseModel):
    """Arguments shared by every operation."""
    model_config = ConfigDict(populate_by_name=True)

    days: int = _query_config.default_days

    @field_validator("days")
    @classmethod
    def validate_days(cls, v):
        allowed = _query_config.allowed_days
        if v not in allowed:
            raise ValueError(f"days must be one of: {', '.join(str(d) for d in allowed)}")
        return v


class PartyArgs(QueryArgs):
    party: Optional[str] = None

    @field_validator("party", mode="before")
    @classmethod
    def validate_party(cls, v):
        if v is None or v == "":
            return None
        if not isinstance(v, str) or v.upper() not in _query_config.allowed_parties:
            raise ValueError("party must be 'DEMOCRAT' or 'REPUBLICAN'")
        return v.upper()


class TypedArgs(PartyArgs):
    types: list[str] = Field(default_factory=list, alias="type")

    @field_validator("types", mode="before")
    @classmethod
    def validate_types(cls, v):
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            raise ValueError("type must be an array of strings")

        allowed = _query_config.allowed_types
        normalized: list[str] = []
        for item in v:
            if not isinstance(item, str) or item.upper() not in allowed:
                raise ValueError(f"Each type must be one of: {', '.join(allowed)}")
            if item.upper() not in normalized:
                normalized.append(item.upper())
        return normalized

    @property
    def all_types(self) -> bool:
        """Empty selection and the full set both mean no type filter."""
        return not self.types or set(self.types) == set(_query_config.allowed_types)


class TradeLookupArgs(TypedArgs):
    stock: Optional[str] = None
    politician: Optional[str] = None

    @field_validator("stock", "politician", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v


class TopAssetsArgs(TypedArgs):
    limit: int = Field(_query_config.default_result_limit, ge=1, le=_query_config.max_top_assets)


class PoliticianStatsArgs(QueryArgs):
    politician: str = Field(min_length=1)

    @field_validator("politician", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class AssetStatsArgs(QueryArgs):
    stock: str = Field(min_length=1)

    @field_validator("stock", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class BuyMomentumArgs(PartyArgs):
    limit: int = Field(_query_config.default_result_limit, ge=1, le=_query_config.max_momentum_assets)


class PartyMomentumArgs(QueryArgs):
    limit: int = Field(_query_config.default_result_limit, ge=1, le=_query_config.max_momentum_assets)


def validate_args(model: type[BaseModel], **kwargs: Any) -> Any:
    """Build an argument model, raising ValidationError with every problem listed."""
    try:
        return model(**kwargs)
    except PydanticValidationError as e:
        problems = []
        for err in e.errors():
            field_name = ".".join(str(part) for part in err["loc"]) or "arguments"
            message = err["msg"].removeprefix("Value error, ")
            if message.startswith(field_name) or message.startswith("Each " + field_name):
                problems.append(message)
            else:
                problems.append(f"{field_name}: {message}")
        raise ValidationError("; ".join(problems)) from e


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def operation(description: str) -> Callable:
    """
    Wrap a public operation so any failure surfaces as one QueryError.

    ValidationError passes through unchanged.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except ValidationError:
                raise
            except Exception as e:
                query_logger.error(f"{func.__name__} failed: {e}")
                raise QueryError(description, e) from e
        return wrapper
    return decorator


def trades_url(issuer_id: Optional[str] = None,
               politician_id: Optional[str] = None,
               party: Optional[str] = None,
               tx_types: Optional[list[str]] = None,
               days: int = 90) -> str:
    """Build a filtered /trades listing URL."""
    scraping = get_config().scraping
    params: list[tuple[str, str]] = []

    if issuer_id:
        params.append(("issuer", issuer_id))
    if politician_id:
        params.append(("politician", politician_id))
    if party:
        params.append(("party", party.lower()))
    if tx_types:
        params.append(("txType", ",".join(t.lower() for t in tx_types)))
    params.append(("txDate", f"{days}d"))
    if scraping.page_size:
        params.append(("pageSize", str(scraping.page_size)))

    return build_url(scraping.trades_url, params)


def _collect(url: str, limit: int) -> list:
    query_logger.info(f"Collecting up to {limit} trades from {url}")
    scraper = TradesScraper()
    try:
        return scraper.collect(url, limit)
    finally:
        scraper.close()


# -----------------------------------------------------------------------------
# Public Operations
# -----------------------------------------------------------------------------
@operation("get politician trades")
def get_politician_trades(stock: Optional[str] = None,
                          politician: Optional[str] = None,
                          party: Optional[str] = None,
                          types: Optional[list[str]] = None,
                          days: int = 90) -> dict[str, Any]:
    """Trades filtered by issuer, politician, party, type and period."""
    args = validate_args(
        TradeLookupArgs, stock=stock, politician=politician,
        party=party, types=types, days=days,
    )

    issuer_id = resolve(ISSUER, args.stock) if args.stock else None
    politician_id = resolve(POLITICIAN, args.politician) if args.politician else None

    url = trades_url(
        issuer_id=issuer_id,
        politician_id=politician_id,
        party=args.party,
        tx_types=None if args.all_types else args.types,
        days=args.days,
    )
    trades = _collect(url, _query_config.trades_limit)

    return {
        "filters": {
            "stock": args.stock,
            "politician": args.politician,
            "party": args.party or "ALL",
            "type": "ALL" if args.all_types else args.types,
            "days": args.days,
        },
        "totalTrades": len(trades),
        "trades": [t.to_dict() for t in trades],
    }


@operation("get top traded assets")
def get_top_traded_assets(party: Optional[str] = None,
                          types: Optional[list[str]] = None,
                          days: int = 90,
                          limit: int = 10) -> dict[str, Any]:
    """Most traded issuers over the period."""
    args = validate_args(TopAssetsArgs, party=party, types=types, days=days, limit=limit)

    url = trades_url(
        party=args.party,
        tx_types=None if args.all_types else args.types,
        days=args.days,
    )
    trades = _collect(url, _query_config.aggregation_sample_size)

    return {
        "filters": {
            "party": args.party or "ALL",
            "type": "ALL" if args.all_types else args.types,
            "days": args.days,
        },
        "totalTradesAnalyzed": len(trades),
        "totalAssets": len(aggregators.group_by_issuer(trades)),
        "topAssets": aggregators.top_traded_assets(trades, args.limit),
    }


@operation("get politician stats")
def get_politician_stats(politician: str, days: int = 90) -> dict[str, Any]:
    """Trading statistics for one politician."""
    args = validate_args(PoliticianStatsArgs, politician=politician, days=days)

    politician_id = resolve(POLITICIAN, args.politician)
    trades = _collect(
        trades_url(politician_id=politician_id, days=args.days),
        _query_config.aggregation_sample_size,
    )

    profile = trades[0].politician if trades else None
    return {
        "politician": profile.name if profile and profile.name else args.politician,
        "politicianId": politician_id,
        "party": profile.party if profile else "",
        "chamber": profile.chamber if profile else "",
        "state": profile.state if profile else "",
        "days": args.days,
        **aggregators.politician_stats(trades, _query_config.stats_top_n),
    }


@operation("get asset stats")
def get_asset_stats(stock: str, days: int = 90) -> dict[str, Any]:
    """Trading statistics for one issuer."""
    args = validate_args(AssetStatsArgs, stock=stock, days=days)

    issuer_id = resolve(ISSUER, args.stock)
    trades = _collect(
        trades_url(issuer_id=issuer_id, days=args.days),
        _query_config.aggregation_sample_size,
    )

    assets = aggregators.group_by_issuer(trades)
    issuer = next(iter(assets.values()), None)
    return {
        "asset": issuer.name if issuer else args.stock,
        "ticker": issuer.ticker if issuer else "N/A",
        "issuerId": issuer_id,
        "days": args.days,
        **aggregators.asset_stats(trades, _query_config.stats_top_n),
    }


@operation("get buy momentum assets")
def get_buy_momentum_assets(party: Optional[str] = None,
                            days: int = 90,
                            limit: int = 10) -> dict[str, Any]:
    """Assets congress members are net buying, strongest first."""
    args = validate_args(BuyMomentumArgs, party=party, days=days, limit=limit)

    trades = _collect(
        trades_url(party=args.party, days=args.days),
        _query_config.aggregation_sample_size,
    )

    return {
        "filters": {"party": args.party or "ALL", "days": args.days},
        "totalTradesAnalyzed": len(trades),
        "totalAssetsAnalyzed": len(aggregators.group_by_issuer(trades)),
        "assets": aggregators.buy_momentum(trades, args.limit),
    }


@operation("get party buy momentum")
def get_party_buy_momentum(days: int = 90, limit: int = 10) -> dict[str, Any]:
    """Net buying split by party: consensus picks and each party's favorites."""
    args = validate_args(PartyMomentumArgs, days=days, limit=limit)

    trades = _collect(trades_url(days=args.days), _query_config.aggregation_sample_size)

    return {
        "days": args.days,
        "totalTradesAnalyzed": len(trades),
        **aggregators.party_buy_momentum(trades, args.limit),
    }
