"""
Tests for the public query operations.

Name resolution and page collection are patched; validation must fail
before either is touched.
"""
from __future__ import annotations

from unittest.mock import patch

import pytest

from modules.errors import FetchError, NotFoundError, QueryError, ValidationError
from modules.queries import (
    get_asset_stats,
    get_buy_momentum_assets,
    get_party_buy_momentum,
    get_politician_stats,
    get_politician_trades,
    get_top_traded_assets,
    trades_url,
)

IDS = {"issuer": "435544", "politician": "P000197"}


@pytest.fixture
def mock_resolve():
    with patch("modules.queries.resolve", side_effect=lambda kind, query: IDS[kind]) as mock:
        yield mock


@pytest.fixture
def mock_scraper():
    with patch("modules.queries.TradesScraper") as mock:
        mock.return_value.collect.return_value = []
        yield mock


def collected_url(mock_scraper) -> str:
    return mock_scraper.return_value.collect.call_args.args[0]


def collected_limit(mock_scraper) -> int:
    return mock_scraper.return_value.collect.call_args.args[1]


class TestValidation:
    """Argument validation happens before any network access."""

    @pytest.mark.parametrize("call", [
        lambda: get_politician_trades(days=45),
        lambda: get_politician_trades(party="independent"),
        lambda: get_politician_trades(types=["BUY", "HOLD"]),
        lambda: get_politician_trades(types="BUY"),
        lambda: get_top_traded_assets(limit=51),
        lambda: get_top_traded_assets(limit=0),
        lambda: get_politician_stats(politician="   "),
        lambda: get_asset_stats(stock=""),
        lambda: get_buy_momentum_assets(limit=21),
        lambda: get_party_buy_momentum(days=7),
    ])
    def test_invalid_arguments(self, call, mock_resolve, mock_scraper):
        with pytest.raises(ValidationError):
            call()

        mock_resolve.assert_not_called()
        mock_scraper.assert_not_called()

    def test_days_message(self, mock_scraper):
        with pytest.raises(ValidationError) as exc_info:
            get_politician_trades(days=45)

        assert str(exc_info.value) == "days must be one of: 30, 90, 180, 365"

    def test_field_prefix_added_to_generic_messages(self, mock_scraper):
        with pytest.raises(ValidationError) as exc_info:
            get_top_traded_assets(limit=51)

        assert str(exc_info.value).startswith("limit: ")

    def test_party_message(self, mock_scraper):
        with pytest.raises(ValidationError, match="party must be 'DEMOCRAT' or 'REPUBLICAN'"):
            get_buy_momentum_assets(party="green")

    def test_type_message(self, mock_scraper):
        with pytest.raises(ValidationError, match="Each type must be one of: BUY, SELL, RECEIVE, EXCHANGE"):
            get_top_traded_assets(types=["gift"])

    def test_validation_error_is_not_wrapped(self, mock_scraper):
        with pytest.raises(ValidationError) as exc_info:
            get_politician_trades(days=1)

        assert not isinstance(exc_info.value, QueryError)


class TestTradesUrl:
    """Tests for trades_url()."""

    def test_all_filters(self):
        url = trades_url(
            issuer_id="435544", politician_id="P000197",
            party="DEMOCRAT", tx_types=["BUY", "SELL"], days=30,
        )

        assert "/trades?" in url
        assert "issuer=435544" in url
        assert "politician=P000197" in url
        assert "party=democrat" in url
        assert "txType=buy,sell" in url
        assert "txDate=30d" in url

    def test_no_filters(self):
        url = trades_url(days=365)

        assert "txDate=365d" in url
        for key in ("issuer=", "politician=", "party=", "txType="):
            assert key not in url


class TestGetPoliticianTrades:
    """Tests for get_politician_trades()."""

    def test_filters_and_url(self, mock_resolve, mock_scraper, make_trade):
        mock_scraper.return_value.collect.return_value = [make_trade(index=1), make_trade(index=2)]

        result = get_politician_trades(
            stock="apple", politician="nancy pelosi",
            party="democrat", types=["buy", "SELL", "buy"], days=30,
        )

        assert result["filters"] == {
            "stock": "apple",
            "politician": "nancy pelosi",
            "party": "DEMOCRAT",
            "type": ["BUY", "SELL"],
            "days": 30,
        }
        assert result["totalTrades"] == 2
        assert result["trades"][0]["issuer"] == {"name": "Apple Inc", "ticker": "N/A"}
        assert "reportingGap" in result["trades"][0]["dates"]

        url = collected_url(mock_scraper)
        assert "issuer=435544" in url
        assert "politician=P000197" in url
        assert "txType=buy,sell" in url
        assert collected_limit(mock_scraper) == 50

    def test_defaults(self, mock_resolve, mock_scraper):
        result = get_politician_trades()

        assert result["filters"] == {
            "stock": None, "politician": None, "party": "ALL", "type": "ALL", "days": 90,
        }
        assert result["totalTrades"] == 0
        mock_resolve.assert_not_called()
        assert "txDate=90d" in collected_url(mock_scraper)

    def test_all_types_means_no_type_filter(self, mock_resolve, mock_scraper):
        result = get_politician_trades(types=["BUY", "SELL", "RECEIVE", "EXCHANGE"])

        assert result["filters"]["type"] == "ALL"
        assert "txType=" not in collected_url(mock_scraper)

    def test_unknown_stock_is_wrapped(self, mock_scraper):
        with patch("modules.queries.resolve", side_effect=NotFoundError("No issuer found for 'zzzz'", query="zzzz")):
            with pytest.raises(QueryError) as exc_info:
                get_politician_trades(stock="zzzz")

        assert str(exc_info.value) == "Failed to get politician trades: No issuer found for 'zzzz'"
        assert isinstance(exc_info.value.cause, NotFoundError)
        mock_scraper.assert_not_called()

    def test_fetch_failure_is_wrapped(self, mock_resolve, mock_scraper):
        mock_scraper.return_value.collect.side_effect = FetchError("Failed to fetch page", status_code=503)

        with pytest.raises(QueryError) as exc_info:
            get_politician_trades()

        assert isinstance(exc_info.value.cause, FetchError)


class TestAggregateOperations:
    """Tests for the aggregate operations."""

    def test_top_traded_assets(self, mock_scraper, trades_sample):
        mock_scraper.return_value.collect.return_value = trades_sample

        result = get_top_traded_assets(party="REPUBLICAN", types=["BUY"], days=180, limit=2)

        assert result["filters"] == {"party": "REPUBLICAN", "type": ["BUY"], "days": 180}
        assert result["totalTradesAnalyzed"] == 15
        assert result["totalAssets"] == 3
        assert [a["name"] for a in result["topAssets"]] == ["B", "A"]
        assert collected_limit(mock_scraper) == 500
        assert "party=republican" in collected_url(mock_scraper)

    def test_politician_stats(self, mock_resolve, mock_scraper, make_trade):
        mock_scraper.return_value.collect.return_value = [
            make_trade(politician="Nancy Pelosi", tx_type="buy"),
            make_trade(politician="Nancy Pelosi", tx_type="sell"),
        ]

        result = get_politician_stats(politician="pelosi", days=365)

        assert result["politician"] == "Nancy Pelosi"
        assert result["politicianId"] == "P000197"
        assert result["party"] == "Democrat"
        assert result["chamber"] == "House"
        assert result["buySellRatio"] == 1.0
        assert collected_limit(mock_scraper) == 500
        assert "politician=P000197" in collected_url(mock_scraper)

    def test_politician_stats_without_trades(self, mock_resolve, mock_scraper):
        result = get_politician_stats(politician="pelosi")

        assert result["politician"] == "pelosi"
        assert result["totalTrades"] == 0
        assert result["buySellRatio"] == 0.0

    def test_asset_stats(self, mock_resolve, mock_scraper, make_trade):
        mock_scraper.return_value.collect.return_value = [make_trade(issuer="Apple Inc", ticker="AAPL:US")]

        result = get_asset_stats(stock="apple", days=30)

        assert result["asset"] == "Apple Inc"
        assert result["ticker"] == "AAPL:US"
        assert result["issuerId"] == "435544"
        assert result["mostActiveTraders"][0]["name"] == "Nancy Pelosi"

    def test_buy_momentum(self, mock_scraper, trades_sample):
        mock_scraper.return_value.collect.return_value = trades_sample

        result = get_buy_momentum_assets(days=30, limit=5)

        assert result["filters"] == {"party": "ALL", "days": 30}
        assert result["totalAssetsAnalyzed"] == 3
        assert [a["name"] for a in result["assets"]] == ["A", "C"]

    def test_party_momentum(self, mock_scraper, trades_sample):
        mock_scraper.return_value.collect.return_value = trades_sample

        result = get_party_buy_momentum(days=90, limit=5)

        assert result["days"] == 90
        assert result["totalTradesAnalyzed"] == 15
        assert set(result) >= {"consensus", "democratFavorites", "republicanFavorites"}

    def test_aggregate_failure_is_wrapped(self, mock_scraper):
        mock_scraper.return_value.collect.side_effect = FetchError("Failed to fetch page")

        with pytest.raises(QueryError, match="^Failed to get party buy momentum: "):
            get_party_buy_momentum()

        mock_scraper.return_value.close.assert_called_once()

    def test_scraper_closed_after_collect(self, mock_scraper):
        get_party_buy_momentum()

        mock_scraper.return_value.close.assert_called_once()


@pytest.fixture
def trades_sample(make_trade):
    """A buys 5, B sells 8, C buys 2."""
    trades = [make_trade(issuer="A", tx_type="buy", party="Democrat") for _ in range(5)]
    trades += [make_trade(issuer="B", tx_type="sell", party="Republican") for _ in range(8)]
    trades += [make_trade(issuer="C", tx_type="buy", party="Republican") for _ in range(2)]
    return trades
