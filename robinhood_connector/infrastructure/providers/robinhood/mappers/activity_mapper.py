"""Robinhood activity mapper.

Converts Robinhood orders and dividends into StandardizedTransaction and
StandardizedDividend. Instrument data is optional: without it the records
carry symbol "UNKNOWN" and name "Unknown".

Robinhood Order Response Structure (GET /orders/):
    {
        "id": "8d4e1ad6-...",
        "url": "https://api.robinhood.com/orders/8d4e1ad6-.../",
        "instrument": "https://api.robinhood.com/instruments/450dfc6d/",
        "side": "buy",
        "type": "limit",
        "state": "filled",
        "quantity": "10.00000",
        "average_price": "150.0000",
        "price": "151.0000",
        "fees": "0.00",
        "created_at": "2024-01-03T15:00:00.000000Z",
        "updated_at": "2024-01-03T15:00:02.000000Z"
    }

Robinhood Dividend Response Structure (GET /dividends/):
    {
        "id": "2f0a8b1c-...",
        "instrument": "https://api.robinhood.com/instruments/450dfc6d/",
        "amount": "2.40",
        "rate": "0.2400000000",
        "withholding": "0.36",
        "state": "paid",
        "record_date": "2024-02-12",
        "payable_date": "2024-02-15",
        "paid_at": "2024-02-15T14:00:00Z"
    }
"""

from typing import Any

from robinhood_connector.domain.enums import (
    DividendStatus,
    TransactionStatus,
    TransactionType,
)
from robinhood_connector.domain.models import (
    StandardizedDividend,
    StandardizedTransaction,
)
from robinhood_connector.infrastructure.providers.robinhood.mappers.parsing import (
    last_updated,
    parse_date,
    parse_datetime,
    parse_decimal,
)

UNKNOWN_SYMBOL = "UNKNOWN"
UNKNOWN_NAME = "Unknown"


# =============================================================================
# State Mappings
# =============================================================================

# Robinhood order state → transaction status (unrecognized → pending)
ROBINHOOD_ORDER_STATE_MAP: dict[str, TransactionStatus] = {
    "filled": TransactionStatus.COMPLETED,
    "executed": TransactionStatus.COMPLETED,
    "cancelled": TransactionStatus.CANCELLED,
    "canceled": TransactionStatus.CANCELLED,
    "failed": TransactionStatus.FAILED,
    "rejected": TransactionStatus.FAILED,
    "pending": TransactionStatus.PENDING,
    "queued": TransactionStatus.PENDING,
    "confirmed": TransactionStatus.PENDING,
    "partially_filled": TransactionStatus.PENDING,
}

# Robinhood dividend state → dividend status (unrecognized → pending)
ROBINHOOD_DIVIDEND_STATE_MAP: dict[str, DividendStatus] = {
    "paid": DividendStatus.PAID,
    "reinvested": DividendStatus.PAID,
    "voided": DividendStatus.CANCELLED,
    "cancelled": DividendStatus.CANCELLED,
    "pending": DividendStatus.PENDING,
}


def map_order_status(state: Any) -> TransactionStatus:
    """Map a Robinhood order state to a transaction status."""
    return ROBINHOOD_ORDER_STATE_MAP.get(str(state or ""), TransactionStatus.PENDING)


def map_dividend_status(state: Any) -> DividendStatus:
    """Map a Robinhood dividend state to a dividend status."""
    return ROBINHOOD_DIVIDEND_STATE_MAP.get(str(state or ""), DividendStatus.PENDING)


class RobinhoodActivityMapper:
    """Mapper for Robinhood orders and dividends.

    Thread-safe: No mutable state, can be shared across requests.

    Example:
        >>> mapper = RobinhoodActivityMapper()
        >>> transaction = mapper.map_transaction(order_json)
        >>> transaction.symbol
        'UNKNOWN'
    """

    def map_transaction(
        self,
        order: dict[str, Any],
        instrument: dict[str, Any] | None = None,
    ) -> StandardizedTransaction:
        """Map an order to a buy/sell transaction.

        Price is the average fill price, else the limit price, else 0.

        Args:
            order: Order object from GET /orders/.
            instrument: Instrument the order refers to, if resolved.

        Returns:
            StandardizedTransaction.
        """
        instrument = instrument or {}
        quantity = parse_decimal(order.get("quantity"))
        price = parse_decimal(order.get("average_price") or order.get("price"))
        order_id = order.get("id")

        return StandardizedTransaction(
            id=str(order_id or order.get("url") or ""),
            type=TransactionType.BUY if order.get("side") == "buy" else TransactionType.SELL,
            symbol=instrument.get("symbol") or UNKNOWN_SYMBOL,
            name=instrument.get("name") or UNKNOWN_NAME,
            quantity=quantity,
            price=price,
            amount=quantity * price,
            fee=parse_decimal(order.get("fees")),
            date=parse_datetime(order.get("created_at")),
            status=map_order_status(order.get("state")),
            order_type=order.get("type"),
            order_id=order_id,
            order_url=order.get("url"),
            last_updated=last_updated(order.get("updated_at")),
        )

    def map_dividend(
        self,
        dividend: dict[str, Any],
        instrument: dict[str, Any] | None = None,
    ) -> StandardizedDividend:
        """Map a dividend payment.

        Upstream reports no ex-dividend date; the record date is used for it.

        Args:
            dividend: Dividend object from GET /dividends/.
            instrument: Instrument that paid the dividend, if resolved.

        Returns:
            StandardizedDividend with ``net_amount = amount - withholding``.
        """
        instrument = instrument or {}
        amount = parse_decimal(dividend.get("amount"))
        withholding = parse_decimal(dividend.get("withholding"))
        record_date = parse_date(dividend.get("record_date"))
        dividend_id = dividend.get("id")

        return StandardizedDividend(
            id=str(dividend_id or dividend.get("url") or ""),
            symbol=instrument.get("symbol") or UNKNOWN_SYMBOL,
            name=instrument.get("name") or UNKNOWN_NAME,
            amount=amount,
            rate=parse_decimal(dividend.get("rate")),
            withholding=withholding,
            net_amount=amount - withholding,
            payment_date=parse_date(dividend.get("payable_date")),
            ex_dividend_date=record_date,
            record_date=record_date,
            paid_at=parse_datetime(dividend.get("paid_at")),
            status=map_dividend_status(dividend.get("state")),
            dividend_id=dividend_id,
            last_updated=last_updated(dividend.get("paid_at")),
        )
