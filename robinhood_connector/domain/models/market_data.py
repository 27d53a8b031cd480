"""Standardized quote and historical-data records."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from robinhood_connector.core.constants import DEFAULT_CURRENCY, SOURCE_TAG
from robinhood_connector.domain.enums import HistoricalInterval


@dataclass(frozen=True, kw_only=True)
class StandardizedQuote:
    """Latest price snapshot for one symbol.

    Attributes:
        symbol: Ticker symbol.
        name: Security name, if instrument data was available.
        price: Last trade price.
        previous_close: Previous session close.
        change: price - previous_close.
        change_percent: change relative to previous_close (0 if none).
        bid: Best bid price.
        ask: Best ask price.
        bid_size: Shares at best bid.
        ask_size: Shares at best ask.
        extended_hours_price: Last extended-hours trade price, if any.
        trading_halted: Whether trading is halted.
        currency: ISO 4217 currency code.
        exchange: Listing market reference, if known.
        source: Integration name.
        last_updated: Upstream quote time, or mapping time.
    """

    symbol: str
    price: Decimal
    previous_close: Decimal
    change: Decimal
    change_percent: Decimal
    bid: Decimal
    ask: Decimal
    bid_size: int = 0
    ask_size: int = 0
    name: str | None = None
    extended_hours_price: Decimal | None = None
    trading_halted: bool = False
    currency: str = DEFAULT_CURRENCY
    exchange: str | None = None
    source: str = SOURCE_TAG
    last_updated: datetime


@dataclass(frozen=True, kw_only=True)
class HistoricalDataPoint:
    """One OHLCV bar."""

    timestamp: datetime
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: int


@dataclass(frozen=True, kw_only=True)
class StandardizedHistoricalData:
    """Series of bars for one symbol.

    Attributes:
        symbol: Ticker symbol.
        interval: Standardized bar interval.
        span: Upstream span requested (day, week, year, ...).
        data: Bars in upstream (chronological) order.
        start_date: Timestamp of the first bar, or mapping time when empty.
        end_date: Timestamp of the last bar, or mapping time when empty.
        currency: ISO 4217 currency code.
        source: Integration name.
        last_updated: Mapping time.
    """

    symbol: str
    interval: HistoricalInterval
    data: tuple[HistoricalDataPoint, ...]
    start_date: datetime
    end_date: datetime
    span: str | None = None
    currency: str = DEFAULT_CURRENCY
    source: str = SOURCE_TAG
    last_updated: datetime
