"""Infrastructure errors package.

Usage:
    from robinhood_connector.infrastructure.errors import ProviderError
"""

from robinhood_connector.infrastructure.errors.provider_error import (
    ProviderAuthenticationError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)

__all__ = [
    "ProviderAuthenticationError",
    "ProviderError",
    "ProviderInvalidResponseError",
    "ProviderRateLimitError",
    "ProviderUnavailableError",
]
