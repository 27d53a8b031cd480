"""Standardized-model enums.

Closed vocabularies used by standardized records. Values are lowercase
strings so records serialize to the platform's wire format directly.

Usage:
    from robinhood_connector.domain.enums import TransactionStatus
"""

from enum import Enum


class AccountType(str, Enum):
    """Standardized brokerage account type."""

    INDIVIDUAL = "individual"
    JOINT = "joint"
    IRA = "ira"
    ROTH_IRA = "roth_ira"
    MARGIN = "margin"
    CASH = "cash"


class AccountStatus(str, Enum):
    """Standardized account status."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    RESTRICTED = "restricted"
    CLOSED = "closed"


class PortfolioAccountType(str, Enum):
    """Account type as reported on a portfolio summary."""

    CASH = "cash"
    MARGIN = "margin"
    CRYPTO = "crypto"


class PositionType(str, Enum):
    """Standardized security type for a position."""

    STOCK = "stock"
    ETF = "etf"
    OPTION = "option"
    CRYPTO = "crypto"


class TransactionType(str, Enum):
    """Standardized transaction type."""

    BUY = "buy"
    SELL = "sell"
    DIVIDEND = "dividend"
    INTEREST = "interest"
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    FEE = "fee"


class TransactionStatus(str, Enum):
    """Standardized transaction lifecycle status."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class DividendStatus(str, Enum):
    """Standardized dividend payment status."""

    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


class HistoricalInterval(str, Enum):
    """Standardized bar interval for historical data."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


__all__ = [
    "AccountStatus",
    "AccountType",
    "DividendStatus",
    "HistoricalInterval",
    "PortfolioAccountType",
    "PositionType",
    "TransactionStatus",
    "TransactionType",
]
