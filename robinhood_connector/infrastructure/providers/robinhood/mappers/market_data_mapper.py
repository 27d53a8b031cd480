"""Robinhood market data mapper.

Converts Robinhood quote and historicals JSON into StandardizedQuote and
StandardizedHistoricalData.

Robinhood Quote Response Structure (GET /quotes/{symbol}/):
    {
        "symbol": "AAPL",
        "last_trade_price": "175.2500",
        "last_extended_hours_trade_price": "175.4000",
        "previous_close": "174.0000",
        "bid_price": "175.2000",
        "bid_size": 300,
        "ask_price": "175.3000",
        "ask_size": 200,
        "trading_halted": false,
        "updated_at": "2024-01-05T21:00:00Z"
    }

Robinhood Historicals Response Structure (GET /quotes/historicals/{symbol}/):
    {
        "symbol": "AAPL",
        "interval": "5minute",
        "span": "day",
        "historicals": [
            {
                "begins_at": "2024-01-05T14:30:00Z",
                "open_price": "174.1000",
                "close_price": "174.5000",
                "high_price": "174.9000",
                "low_price": "173.9000",
                "volume": 1203400
            }
        ]
    }
"""

from typing import Any

import structlog

from robinhood_connector.domain.enums import HistoricalInterval
from robinhood_connector.domain.models import (
    HistoricalDataPoint,
    StandardizedHistoricalData,
    StandardizedQuote,
)
from robinhood_connector.infrastructure.providers.robinhood.mappers.parsing import (
    last_updated,
    parse_datetime,
    parse_decimal,
    parse_decimal_optional,
    parse_int,
    percent,
    utc_now,
)

logger = structlog.get_logger(__name__)


# =============================================================================
# Interval Mapping
# =============================================================================

# Robinhood bar interval → standardized interval (sub-hour bars collapse to minute)
ROBINHOOD_INTERVAL_MAP: dict[str, HistoricalInterval] = {
    "5minute": HistoricalInterval.MINUTE,
    "10minute": HistoricalInterval.MINUTE,
    "15minute": HistoricalInterval.MINUTE,
    "30minute": HistoricalInterval.MINUTE,
    "hour": HistoricalInterval.HOUR,
    "day": HistoricalInterval.DAY,
    "week": HistoricalInterval.WEEK,
    "month": HistoricalInterval.MONTH,
}


def map_interval(interval: Any) -> HistoricalInterval:
    """Map a Robinhood interval string; unrecognized values map to day.

    Example:
        >>> map_interval("10minute")
        <HistoricalInterval.MINUTE: 'minute'>
        >>> map_interval("quarter")
        <HistoricalInterval.DAY: 'day'>
    """
    return ROBINHOOD_INTERVAL_MAP.get(str(interval or ""), HistoricalInterval.DAY)


class RobinhoodMarketDataMapper:
    """Mapper for Robinhood quotes and historical bars.

    Thread-safe: No mutable state, can be shared across requests.
    """

    def map_quote(
        self,
        quote: dict[str, Any],
        instrument: dict[str, Any] | None = None,
    ) -> StandardizedQuote:
        """Map a quote with its optional instrument.

        Args:
            quote: Quote object from GET /quotes/.
            instrument: Instrument for the quoted symbol, if resolved.

        Returns:
            StandardizedQuote. Without instrument, name and exchange are None.
        """
        price = parse_decimal(quote.get("last_trade_price"))
        previous_close = parse_decimal(quote.get("previous_close"))
        change = price - previous_close
        instrument = instrument or {}

        return StandardizedQuote(
            symbol=str(quote.get("symbol") or instrument.get("symbol") or ""),
            name=instrument.get("name"),
            price=price,
            previous_close=previous_close,
            change=change,
            change_percent=percent(change, previous_close),
            bid=parse_decimal(quote.get("bid_price")),
            ask=parse_decimal(quote.get("ask_price")),
            bid_size=parse_int(quote.get("bid_size")),
            ask_size=parse_int(quote.get("ask_size")),
            extended_hours_price=parse_decimal_optional(
                quote.get("last_extended_hours_trade_price")
            ),
            trading_halted=bool(quote.get("trading_halted")),
            exchange=instrument.get("market"),
            last_updated=last_updated(quote.get("updated_at")),
        )

    def map_historical_data(
        self,
        data: dict[str, Any],
        *,
        symbol: str | None = None,
        span: str | None = None,
    ) -> StandardizedHistoricalData:
        """Map a historicals response.

        Args:
            data: Historicals object from GET /quotes/historicals/{symbol}/.
            symbol: Requested symbol, used when the response omits it.
            span: Requested span, used when the response omits it.

        Returns:
            StandardizedHistoricalData in upstream (chronological) order.
            Bars without a parseable ``begins_at`` are skipped.
        """
        points: list[HistoricalDataPoint] = []
        for bar in data.get("historicals") or []:
            timestamp = parse_datetime(bar.get("begins_at"))
            if timestamp is None:
                logger.warning(
                    "robinhood_historical_bar_skipped",
                    begins_at=bar.get("begins_at"),
                )
                continue
            points.append(
                HistoricalDataPoint(
                    timestamp=timestamp,
                    open=parse_decimal(bar.get("open_price")),
                    high=parse_decimal(bar.get("high_price")),
                    low=parse_decimal(bar.get("low_price")),
                    close=parse_decimal(bar.get("close_price")),
                    volume=parse_int(bar.get("volume")),
                )
            )

        now = utc_now()
        return StandardizedHistoricalData(
            symbol=str(data.get("symbol") or symbol or ""),
            interval=map_interval(data.get("interval")),
            span=data.get("span") or span,
            data=tuple(points),
            start_date=points[0].timestamp if points else now,
            end_date=points[-1].timestamp if points else now,
            last_updated=now,
        )
