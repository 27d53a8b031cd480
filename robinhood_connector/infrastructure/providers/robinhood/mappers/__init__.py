"""Robinhood mappers.

Convert raw Robinhood JSON records into standardized records. Every mapper
method is total: missing related records or fields produce defaulted output,
never an exception.
"""

from robinhood_connector.infrastructure.providers.robinhood.mappers.account_mapper import (
    RobinhoodAccountMapper,
)
from robinhood_connector.infrastructure.providers.robinhood.mappers.activity_mapper import (
    RobinhoodActivityMapper,
)
from robinhood_connector.infrastructure.providers.robinhood.mappers.market_data_mapper import (
    RobinhoodMarketDataMapper,
)
from robinhood_connector.infrastructure.providers.robinhood.mappers.position_mapper import (
    RobinhoodPositionMapper,
)
from robinhood_connector.infrastructure.providers.robinhood.mappers.watchlist_mapper import (
    RobinhoodWatchlistMapper,
)

__all__ = [
    "RobinhoodAccountMapper",
    "RobinhoodActivityMapper",
    "RobinhoodMarketDataMapper",
    "RobinhoodPositionMapper",
    "RobinhoodWatchlistMapper",
]
