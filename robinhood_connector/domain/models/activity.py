"""Standardized transaction, dividend and watchlist records."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from robinhood_connector.core.constants import DEFAULT_CURRENCY, SOURCE_TAG
from robinhood_connector.domain.enums import (
    DividendStatus,
    TransactionStatus,
    TransactionType,
)


@dataclass(frozen=True, kw_only=True)
class StandardizedTransaction:
    """Trade derived from a brokerage order.

    Attributes:
        id: Upstream order id.
        type: Buy or sell.
        symbol: Ticker symbol ("UNKNOWN" without instrument data).
        name: Security name ("Unknown" without instrument data).
        quantity: Shares ordered.
        price: Average fill price, else limit price, else 0.
        amount: quantity * price.
        fee: Fees charged.
        date: Order creation time.
        status: Standardized lifecycle status.
        order_type: Upstream order type (market, limit), if present.
        currency: ISO 4217 currency code.
        order_id: Upstream order id.
        order_url: Upstream order URL.
        source: Integration name.
        last_updated: Upstream modification time, or mapping time.
    """

    id: str
    type: TransactionType
    symbol: str
    name: str
    quantity: Decimal
    price: Decimal
    amount: Decimal
    fee: Decimal
    date: datetime | None
    status: TransactionStatus
    order_type: str | None = None
    currency: str = DEFAULT_CURRENCY
    order_id: str | None = None
    order_url: str | None = None
    source: str = SOURCE_TAG
    last_updated: datetime


@dataclass(frozen=True, kw_only=True)
class StandardizedDividend:
    """Dividend payment for one holding.

    Attributes:
        id: Upstream dividend id.
        symbol: Ticker symbol ("UNKNOWN" without instrument data).
        name: Security name ("Unknown" without instrument data).
        amount: Gross dividend amount.
        rate: Dividend per share.
        withholding: Tax withheld (0 when absent).
        net_amount: amount - withholding.
        payment_date: Payable date.
        ex_dividend_date: Ex-dividend date (upstream reports the record date).
        record_date: Record date.
        paid_at: Time the payment was made, if paid.
        status: Standardized payment status.
        currency: ISO 4217 currency code.
        dividend_id: Upstream dividend id.
        source: Integration name.
        last_updated: Payment time, or mapping time.
    """

    id: str
    symbol: str
    name: str
    amount: Decimal
    rate: Decimal
    withholding: Decimal
    net_amount: Decimal
    payment_date: date | None
    ex_dividend_date: date | None
    record_date: date | None
    status: DividendStatus
    paid_at: datetime | None = None
    currency: str = DEFAULT_CURRENCY
    dividend_id: str | None = None
    source: str = SOURCE_TAG
    last_updated: datetime


@dataclass(frozen=True, kw_only=True)
class StandardizedWatchlist:
    """Named list of followed symbols.

    Attributes:
        id: Upstream watchlist URL.
        name: Watchlist name.
        symbols: Followed symbols in upstream order.
        created_at: Creation time, if known.
        updated_at: Modification time, if known.
        url: Upstream watchlist URL.
        source: Integration name.
        last_updated: Modification time, or mapping time.
    """

    id: str
    name: str
    symbols: tuple[str, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None
    url: str | None = None
    source: str = SOURCE_TAG
    last_updated: datetime
