"""Core shared kernel.

Foundational utilities used across all layers:
- Result types for railway-oriented programming
- Base error class and the closed error-code taxonomy
- Settings and logging setup

The core module has NO dependencies on other connector layers.
"""

from robinhood_connector.core.config import RobinhoodSettings, get_settings
from robinhood_connector.core.enums import Environment, ErrorCode
from robinhood_connector.core.errors import DomainError
from robinhood_connector.core.logging import configure_logging
from robinhood_connector.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "Environment",
    "ErrorCode",
    "Failure",
    "Result",
    "RobinhoodSettings",
    "Success",
    "configure_logging",
    "get_settings",
]
