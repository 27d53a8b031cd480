"""Infrastructure enums."""

from robinhood_connector.infrastructure.enums.provider_error_code import (
    ProviderErrorCode,
)

__all__ = ["ProviderErrorCode"]
