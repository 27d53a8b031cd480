"""Core errors package.

Usage:
    from robinhood_connector.core.errors import DomainError
"""

from robinhood_connector.core.errors.domain_error import DomainError

__all__ = ["DomainError"]
