"""Standardized account and balance records."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from robinhood_connector.core.constants import DEFAULT_CURRENCY, SOURCE_TAG
from robinhood_connector.domain.enums import AccountStatus, AccountType


@dataclass(frozen=True, kw_only=True)
class TradingPermissions:
    """Asset classes the account may trade."""

    stocks: bool = True
    options: bool = True
    crypto: bool = True
    forex: bool = False


@dataclass(frozen=True, kw_only=True)
class StandardizedAccount:
    """Brokerage account in the vendor-neutral model.

    Attributes:
        id: Upstream account URL (stable identifier).
        account_number: Brokerage account number.
        type: Standardized account type.
        status: Standardized account status.
        opened_date: When the account was opened, if known.
        is_primary: Whether this is the user's primary account.
        trading_permissions: Tradable asset classes.
        margin_enabled: Whether margin trading is enabled.
        options_level: Options approval level (0 when none).
        day_trade_count: Pattern-day-trade counter.
        url: Upstream account URL.
        source: Integration name.
        last_updated: Upstream modification time, or mapping time.
    """

    id: str
    account_number: str
    type: AccountType
    status: AccountStatus
    opened_date: datetime | None
    is_primary: bool
    trading_permissions: TradingPermissions
    margin_enabled: bool
    options_level: int = 0
    day_trade_count: int = 0
    url: str | None = None
    source: str = SOURCE_TAG
    last_updated: datetime


@dataclass(frozen=True, kw_only=True)
class StandardizedBalance:
    """Cash balances for one account.

    Attributes:
        account_id: Brokerage account number.
        cash_balance: Settled cash.
        unsettled_cash: Cash from trades not yet settled.
        buying_power: Available buying power.
        margin_balance: Margin limit for margin accounts, else None.
        pending_deposits: Deposits not yet cleared.
        pending_withdrawals: Withdrawals not yet processed.
        currency: ISO 4217 currency code.
        source: Integration name.
        last_updated: Upstream modification time, or mapping time.
    """

    account_id: str
    cash_balance: Decimal
    unsettled_cash: Decimal
    buying_power: Decimal
    pending_deposits: Decimal
    pending_withdrawals: Decimal
    margin_balance: Decimal | None = None
    currency: str = DEFAULT_CURRENCY
    source: str = SOURCE_TAG
    last_updated: datetime
