"""Shared pytest fixtures.

Provides:
1. Connector settings pointing at a fake upstream host
2. Clients in each token state

Raw Robinhood record builders live in tests/factories.py.
"""

import pytest

from robinhood_connector.core.config import RobinhoodSettings
from robinhood_connector.core.enums import Environment
from robinhood_connector.domain.value_objects import TokenSet
from robinhood_connector.infrastructure.providers.robinhood.client import (
    RobinhoodClient,
)
from tests.factories import BASE_URL


@pytest.fixture
def settings() -> RobinhoodSettings:
    """Settings for a fake upstream host (no pre-seeded token)."""
    return RobinhoodSettings(
        environment=Environment.TESTING,
        base_url=BASE_URL,
        timeout=5.0,
        access_token=None,
        device_token=None,
    )


@pytest.fixture
def client(settings: RobinhoodSettings) -> RobinhoodClient:
    """Unauthenticated client."""
    return RobinhoodClient(settings=settings)


@pytest.fixture
def authenticated_client(settings: RobinhoodSettings) -> RobinhoodClient:
    """Client holding an access token and a refresh token."""
    client = RobinhoodClient(settings=settings)
    client._tokens = TokenSet(
        access_token="access-1",
        refresh_token="refresh-1",
        expires_in=86400,
        scope="internal",
    )
    return client
