"""Robinhood connector.

Client-side adapter for Robinhood's private REST API. Every public
operation returns ``Result[T, StandardizedError]``.

Usage:
    from robinhood_connector import Credentials, RobinhoodProvider, Success

    provider = RobinhoodProvider()
    match await provider.authenticate(Credentials(username=u, password=p)):
        case Success(value=tokens):
            ...
"""

from robinhood_connector.core import (
    ErrorCode,
    Failure,
    Result,
    RobinhoodSettings,
    Success,
    configure_logging,
    get_settings,
)
from robinhood_connector.domain.errors import StandardizedError
from robinhood_connector.domain.protocols import BrokerageProtocol
from robinhood_connector.domain.value_objects import Credentials, TokenSet
from robinhood_connector.infrastructure.providers.robinhood import RobinhoodProvider

__version__ = "0.1.0"

__all__ = [
    "BrokerageProtocol",
    "Credentials",
    "ErrorCode",
    "Failure",
    "Result",
    "RobinhoodProvider",
    "RobinhoodSettings",
    "StandardizedError",
    "Success",
    "TokenSet",
    "configure_logging",
    "get_settings",
]
