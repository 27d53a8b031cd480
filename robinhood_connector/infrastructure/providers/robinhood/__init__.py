"""Robinhood provider package.

Implements BrokerageProtocol for Robinhood's private REST API.

Architecture:
    robinhood_provider.py - Facade implementing BrokerageProtocol
    client.py - Token lifecycle, retry-once after refresh, pagination
    api/ - Raw endpoint access
    mappers/ - Data transformers (JSON → Standardized* records)

Usage:
    from robinhood_connector.infrastructure.providers.robinhood import RobinhoodProvider

    provider = RobinhoodProvider(settings=settings)
    result = await provider.authenticate(credentials)
"""

from robinhood_connector.infrastructure.providers.robinhood.api import RobinhoodAPI
from robinhood_connector.infrastructure.providers.robinhood.client import (
    MfaRequired,
    RobinhoodClient,
    TokenState,
)
from robinhood_connector.infrastructure.providers.robinhood.robinhood_provider import (
    RobinhoodProvider,
)

__all__ = [
    "MfaRequired",
    "RobinhoodAPI",
    "RobinhoodClient",
    "RobinhoodProvider",
    "TokenState",
]
