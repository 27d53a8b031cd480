"""Domain value objects."""

from robinhood_connector.domain.value_objects.auth import Credentials, TokenSet

__all__ = ["Credentials", "TokenSet"]
