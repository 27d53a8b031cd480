"""Robinhood API clients.

Raw endpoint access - returns JSON records as returned by Robinhood.
"""

from robinhood_connector.infrastructure.providers.robinhood.api.robinhood_api import (
    RobinhoodAPI,
)

__all__ = ["RobinhoodAPI"]
