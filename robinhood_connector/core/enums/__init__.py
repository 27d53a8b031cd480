"""Core enums package.

Usage:
    from robinhood_connector.core.enums import ErrorCode, Environment
"""

from robinhood_connector.core.enums.environment import Environment
from robinhood_connector.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
