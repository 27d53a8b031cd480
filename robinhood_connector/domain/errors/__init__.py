"""Domain errors package.

Usage:
    from robinhood_connector.domain.errors import StandardizedError
"""

from robinhood_connector.domain.errors.standardized_error import StandardizedError

__all__ = ["StandardizedError"]
