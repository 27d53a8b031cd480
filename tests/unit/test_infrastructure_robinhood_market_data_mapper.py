"""Unit tests for RobinhoodMarketDataMapper.

Tests cover:
- map_quote: change figures, optional instrument, extended hours
- map_historical_data: bar order, skipped bars, empty responses
- map_interval
"""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from robinhood_connector.domain.enums import HistoricalInterval
from robinhood_connector.infrastructure.providers.robinhood.mappers import (
    RobinhoodMarketDataMapper,
)
from robinhood_connector.infrastructure.providers.robinhood.mappers.market_data_mapper import (
    map_interval,
)
from tests.factories import instrument_json, quote_json


@pytest.fixture
def mapper() -> RobinhoodMarketDataMapper:
    return RobinhoodMarketDataMapper()


def bar(begins_at: str, close: str = "174.5000") -> dict:
    return {
        "begins_at": begins_at,
        "open_price": "174.1000",
        "close_price": close,
        "high_price": "174.9000",
        "low_price": "173.9000",
        "volume": 1203400,
    }


@pytest.mark.unit
class TestMapQuote:
    """Tests for RobinhoodMarketDataMapper.map_quote."""

    def test_maps_quote_with_instrument(self, mapper: RobinhoodMarketDataMapper):
        quote = mapper.map_quote(quote_json(), instrument_json())

        assert quote.symbol == "AAPL"
        assert quote.name == "AAPL Inc."
        assert quote.price == Decimal("175.25")
        assert quote.previous_close == Decimal("174")
        assert quote.change == Decimal("1.25")
        assert quote.bid == Decimal("175.2")
        assert quote.ask == Decimal("175.3")
        assert quote.bid_size == 300
        assert quote.ask_size == 200
        assert quote.extended_hours_price == Decimal("175.4")
        assert quote.trading_halted is False
        assert quote.exchange == "https://api.robinhood.test/markets/XNAS/"
        assert quote.last_updated == datetime(2024, 1, 5, 21, 0, tzinfo=UTC)

    def test_without_instrument(self, mapper: RobinhoodMarketDataMapper):
        """Name and exchange are unknown without instrument data."""
        quote = mapper.map_quote(quote_json(last_extended_hours_trade_price=None))

        assert quote.name is None
        assert quote.exchange is None
        assert quote.extended_hours_price is None

    def test_zero_previous_close(self, mapper: RobinhoodMarketDataMapper):
        quote = mapper.map_quote(quote_json(previous_close=None))

        assert quote.change == Decimal("175.25")
        assert quote.change_percent == Decimal("0")


@pytest.mark.unit
class TestMapHistoricalData:
    """Tests for RobinhoodMarketDataMapper.map_historical_data."""

    def test_maps_bars_in_order(self, mapper: RobinhoodMarketDataMapper):
        data = {
            "symbol": "AAPL",
            "interval": "5minute",
            "span": "day",
            "historicals": [
                bar("2024-01-05T14:30:00Z"),
                bar("2024-01-05T14:35:00Z", close="175.0000"),
            ],
        }

        history = mapper.map_historical_data(data)

        assert history.symbol == "AAPL"
        assert history.interval == HistoricalInterval.MINUTE
        assert history.span == "day"
        assert len(history.data) == 2
        assert history.data[0].open == Decimal("174.1")
        assert history.data[0].volume == 1203400
        assert history.data[1].close == Decimal("175")
        assert history.start_date == datetime(2024, 1, 5, 14, 30, tzinfo=UTC)
        assert history.end_date == datetime(2024, 1, 5, 14, 35, tzinfo=UTC)

    def test_skips_bars_without_timestamp(self, mapper: RobinhoodMarketDataMapper):
        data = {"historicals": [bar("not-a-date"), bar("2024-01-05T14:30:00Z")]}

        history = mapper.map_historical_data(data, symbol="AAPL", span="week")

        assert len(history.data) == 1
        assert history.symbol == "AAPL"
        assert history.span == "week"
        assert history.interval == HistoricalInterval.DAY

    def test_empty_response(self, mapper: RobinhoodMarketDataMapper):
        """No bars give an empty series bounded by the mapping time."""
        history = mapper.map_historical_data({"historicals": None}, symbol="AAPL")

        assert history.data == ()
        assert history.start_date == history.end_date


@pytest.mark.unit
class TestMapInterval:
    """Tests for map_interval."""

    @pytest.mark.parametrize(
        ("interval", "expected"),
        [
            ("10minute", HistoricalInterval.MINUTE),
            ("hour", HistoricalInterval.HOUR),
            ("week", HistoricalInterval.WEEK),
            ("quarter", HistoricalInterval.DAY),
            (None, HistoricalInterval.DAY),
        ],
    )
    def test_interval(self, interval, expected):
        assert map_interval(interval) == expected
