"""Unit tests for RobinhoodPositionMapper.

Tests cover:
- Valuation figures derived from position, instrument and quote
- Instrument type mapping
- Defaults when instrument or quote is missing
"""

from decimal import Decimal

import pytest

from robinhood_connector.domain.enums import PositionType
from robinhood_connector.infrastructure.providers.robinhood.mappers import (
    RobinhoodPositionMapper,
)
from tests.factories import instrument_json, position_json, quote_json


@pytest.fixture
def mapper() -> RobinhoodPositionMapper:
    return RobinhoodPositionMapper()


@pytest.mark.unit
class TestMapPosition:
    """Tests for RobinhoodPositionMapper.map_position."""

    def test_valuation(self, mapper: RobinhoodPositionMapper):
        """Market value, cost basis, gain and day change are derived exactly."""
        position = mapper.map_position(position_json(), instrument_json(), quote_json())

        assert position.symbol == "AAPL"
        assert position.name == "AAPL Inc."
        assert position.type == PositionType.STOCK
        assert position.quantity == Decimal("10")
        assert position.average_cost == Decimal("150")
        assert position.current_price == Decimal("175.25")
        assert position.market_value == Decimal("1752.5")
        assert position.cost_basis == Decimal("1500")
        assert position.total_gain_loss == Decimal("252.5")
        assert position.total_gain_loss_percent.quantize(Decimal("0.0001")) == Decimal(
            "16.8333"
        )
        assert position.day_change == Decimal("12.5")
        assert position.day_change_percent.quantize(Decimal("0.00001")) == Decimal(
            "0.71839"
        )

    def test_references(self, mapper: RobinhoodPositionMapper):
        """Upstream URLs and ids are carried through."""
        position = mapper.map_position(position_json(), instrument_json(), quote_json())

        assert position.id == "https://api.robinhood.test/positions/5QR12345/aapl-id/"
        assert position.instrument_id == "aapl-id"
        assert position.instrument_url == "https://api.robinhood.test/instruments/aapl-id/"
        assert position.position_url == position.id
        assert position.exchange == "https://api.robinhood.test/markets/XNAS/"
        assert position.source == "robinhood"

    @pytest.mark.parametrize(
        ("instrument_type", "expected"),
        [
            ("etp", PositionType.ETF),
            ("adr", PositionType.STOCK),
            ("option", PositionType.OPTION),
            ("crypto", PositionType.CRYPTO),
            ("something-new", PositionType.STOCK),
            (None, PositionType.STOCK),
        ],
    )
    def test_instrument_type(
        self,
        mapper: RobinhoodPositionMapper,
        instrument_type: str | None,
        expected: PositionType,
    ):
        position = mapper.map_position(
            position_json(), instrument_json(type=instrument_type), quote_json()
        )

        assert position.type == expected

    def test_without_instrument_and_quote(self, mapper: RobinhoodPositionMapper):
        """Missing related records give placeholders and zero prices."""
        position = mapper.map_position(position_json())

        assert position.symbol == "UNKNOWN"
        assert position.name == "Unknown Instrument"
        assert position.instrument_id == "aapl-id"
        assert position.current_price == Decimal("0")
        assert position.market_value == Decimal("0")
        assert position.total_gain_loss == Decimal("-1500")
        assert position.day_change_percent == Decimal("0")

    def test_zero_cost_basis(self, mapper: RobinhoodPositionMapper):
        """A zero average cost gives a zero gain percentage."""
        position = mapper.map_position(
            position_json(average_buy_price="0"), instrument_json(), quote_json()
        )

        assert position.cost_basis == Decimal("0")
        assert position.total_gain_loss_percent == Decimal("0")

    def test_huge_values_do_not_overflow(self, mapper: RobinhoodPositionMapper):
        """Out-of-range upstream numbers are treated as 0 instead of raising."""
        position = mapper.map_position(
            position_json(quantity="1e600000", average_buy_price="1e600000"),
            instrument_json(),
            quote_json(last_trade_price="1e600000", previous_close="1e600000"),
        )

        assert position.quantity == Decimal("0")
        assert position.market_value == Decimal("0")
        assert position.total_gain_loss_percent == Decimal("0")
        assert position.day_change_percent == Decimal("0")
