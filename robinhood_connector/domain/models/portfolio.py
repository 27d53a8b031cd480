"""Standardized position and portfolio records.

A StandardizedPosition is produced from exactly one upstream position plus
zero-or-one instrument and zero-or-one quote. A StandardizedPortfolio
aggregates exactly the positions that were successfully mapped for one
account.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from robinhood_connector.core.constants import DEFAULT_CURRENCY, SOURCE_TAG
from robinhood_connector.domain.enums import PortfolioAccountType, PositionType


@dataclass(frozen=True, kw_only=True)
class StandardizedPosition:
    """Holding of one security with derived valuation figures.

    Attributes:
        id: Upstream position URL.
        symbol: Ticker symbol ("UNKNOWN" without instrument data).
        name: Security name ("Unknown Instrument" without instrument data).
        type: Standardized security type.
        quantity: Shares held.
        average_cost: Average purchase price per share.
        current_price: Last trade price (0 without quote data).
        market_value: quantity * current_price.
        cost_basis: quantity * average_cost.
        day_change: quantity * (current_price - previous_close).
        day_change_percent: Daily price change in percent (0 if no previous close).
        total_gain_loss: market_value - cost_basis.
        total_gain_loss_percent: Gain/loss relative to cost basis in percent.
        currency: ISO 4217 currency code.
        exchange: Listing market reference, if known.
        instrument_id: Upstream instrument id, if known.
        instrument_url: Upstream instrument URL.
        position_url: Upstream position URL.
        source: Integration name.
        last_updated: Upstream modification time, or mapping time.
    """

    id: str
    symbol: str
    name: str
    type: PositionType
    quantity: Decimal
    average_cost: Decimal
    current_price: Decimal
    market_value: Decimal
    cost_basis: Decimal
    day_change: Decimal
    day_change_percent: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percent: Decimal
    currency: str = DEFAULT_CURRENCY
    exchange: str | None = None
    instrument_id: str | None = None
    instrument_url: str | None = None
    position_url: str | None = None
    source: str = SOURCE_TAG
    last_updated: datetime


@dataclass(frozen=True, kw_only=True)
class StandardizedPortfolio:
    """Account-level portfolio summary with its positions.

    Attributes:
        id: Account number.
        account_number: Brokerage account number.
        account_type: Cash or margin.
        total_value: Market value of all holdings.
        equity: Current account equity.
        cash_balance: Settled cash.
        buying_power: Available buying power.
        day_change: equity - previous close equity.
        day_change_percent: day_change relative to previous close equity.
        total_gain_loss: Sum of position gains/losses.
        total_gain_loss_percent: Gain/loss relative to summed cost basis.
        positions: Successfully mapped positions, upstream order.
        currency: ISO 4217 currency code.
        source: Integration name.
        last_updated: Mapping time.
    """

    id: str
    account_number: str
    account_type: PortfolioAccountType
    total_value: Decimal
    equity: Decimal
    cash_balance: Decimal
    buying_power: Decimal
    day_change: Decimal
    day_change_percent: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percent: Decimal
    positions: tuple[StandardizedPosition, ...] = ()
    currency: str = DEFAULT_CURRENCY
    source: str = SOURCE_TAG
    last_updated: datetime

    @property
    def position_count(self) -> int:
        """Number of positions in the portfolio."""
        return len(self.positions)
