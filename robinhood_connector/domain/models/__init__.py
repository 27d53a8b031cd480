"""Standardized (vendor-neutral) records.

All records are immutable, monetary fields are Decimal, and every record
carries ``source`` and ``last_updated`` for provenance.
"""

from robinhood_connector.domain.models.account import (
    StandardizedAccount,
    StandardizedBalance,
    TradingPermissions,
)
from robinhood_connector.domain.models.activity import (
    StandardizedDividend,
    StandardizedTransaction,
    StandardizedWatchlist,
)
from robinhood_connector.domain.models.market_data import (
    HistoricalDataPoint,
    StandardizedHistoricalData,
    StandardizedQuote,
)
from robinhood_connector.domain.models.portfolio import (
    StandardizedPortfolio,
    StandardizedPosition,
)

__all__ = [
    "HistoricalDataPoint",
    "StandardizedAccount",
    "StandardizedBalance",
    "StandardizedDividend",
    "StandardizedHistoricalData",
    "StandardizedPortfolio",
    "StandardizedPosition",
    "StandardizedQuote",
    "StandardizedTransaction",
    "StandardizedWatchlist",
    "TradingPermissions",
]
