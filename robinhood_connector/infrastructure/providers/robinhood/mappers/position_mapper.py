"""Robinhood position mapper.

Converts a Robinhood position, plus its optional instrument and quote, into
a StandardizedPosition with derived valuation figures.

Robinhood Position Response Structure (GET /positions/?nonzero=true):
    {
        "url": "https://api.robinhood.com/positions/5QR12345/450dfc6d/",
        "instrument": "https://api.robinhood.com/instruments/450dfc6d/",
        "quantity": "10.00000000",
        "average_buy_price": "150.0000",
        "updated_at": "2024-01-05T14:00:00.000000Z"
    }

Valuation (all Decimal, missing inputs count as 0):
    market_value            = quantity * current_price
    cost_basis              = quantity * average_cost
    total_gain_loss         = market_value - cost_basis
    total_gain_loss_percent = total_gain_loss / cost_basis * 100
    day_change              = quantity * (current_price - previous_close)
    day_change_percent      = (current_price - previous_close) / previous_close * 100

Percentages are 0 when their denominator is 0.
"""

from typing import Any

from robinhood_connector.domain.enums import PositionType
from robinhood_connector.domain.models import StandardizedPosition
from robinhood_connector.infrastructure.providers.robinhood.mappers.parsing import (
    id_from_url,
    last_updated,
    parse_decimal,
    percent,
)

UNKNOWN_SYMBOL = "UNKNOWN"
UNKNOWN_INSTRUMENT_NAME = "Unknown Instrument"


# =============================================================================
# Instrument Type Mapping
# =============================================================================

# Robinhood instrument type → standardized position type
ROBINHOOD_INSTRUMENT_TYPE_MAP: dict[str, PositionType] = {
    "stock": PositionType.STOCK,
    "adr": PositionType.STOCK,
    "reit": PositionType.STOCK,
    "etp": PositionType.ETF,
    "etf": PositionType.ETF,
    "option": PositionType.OPTION,
    "crypto": PositionType.CRYPTO,
}


class RobinhoodPositionMapper:
    """Mapper for Robinhood positions.

    Thread-safe: No mutable state, can be shared across requests.

    Example:
        >>> mapper = RobinhoodPositionMapper()
        >>> position = mapper.map_position(position_json, instrument_json, quote_json)
        >>> position.symbol
        'AAPL'
    """

    def map_position(
        self,
        position: dict[str, Any],
        instrument: dict[str, Any] | None = None,
        quote: dict[str, Any] | None = None,
    ) -> StandardizedPosition:
        """Map one position with its optional instrument and quote.

        Args:
            position: Position object from GET /positions/.
            instrument: Instrument the position refers to, if resolved.
            quote: Latest quote for the instrument, if resolved.

        Returns:
            StandardizedPosition. Without instrument the symbol is "UNKNOWN"
            and the name "Unknown Instrument"; without quote all price
            derived fields are computed from a price of 0.
        """
        instrument = instrument or {}
        quote = quote or {}

        quantity = parse_decimal(position.get("quantity"))
        average_cost = parse_decimal(position.get("average_buy_price"))
        current_price = parse_decimal(quote.get("last_trade_price"))
        previous_close = parse_decimal(quote.get("previous_close"))

        market_value = quantity * current_price
        cost_basis = quantity * average_cost
        total_gain_loss = market_value - cost_basis
        price_change = current_price - previous_close

        instrument_url = position.get("instrument") or instrument.get("url")

        return StandardizedPosition(
            id=str(position.get("url") or instrument_url or ""),
            symbol=instrument.get("symbol") or UNKNOWN_SYMBOL,
            name=instrument.get("name") or UNKNOWN_INSTRUMENT_NAME,
            type=self._map_instrument_type(instrument.get("type")),
            quantity=quantity,
            average_cost=average_cost,
            current_price=current_price,
            market_value=market_value,
            cost_basis=cost_basis,
            day_change=quantity * price_change,
            day_change_percent=percent(price_change, previous_close),
            total_gain_loss=total_gain_loss,
            total_gain_loss_percent=percent(total_gain_loss, cost_basis),
            exchange=instrument.get("market"),
            instrument_id=instrument.get("id") or id_from_url(instrument_url),
            instrument_url=instrument_url,
            position_url=position.get("url"),
            last_updated=last_updated(position.get("updated_at")),
        )

    def _map_instrument_type(self, instrument_type: Any) -> PositionType:
        if not instrument_type:
            return PositionType.STOCK
        return ROBINHOOD_INSTRUMENT_TYPE_MAP.get(
            str(instrument_type).lower(), PositionType.STOCK
        )
