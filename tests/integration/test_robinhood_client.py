"""Integration tests for RobinhoodClient.

Tests for:
- authenticate: token issue, MFA escalation, rejected credentials
- refresh_access_token: rotation, missing refresh token, failure clears state
- get: Bearer header, refresh-and-replay-once after 401
- paginate: envelope pages, bare arrays, single objects
- Transport failures: timeouts, connection errors, status mapping

Uses pytest-httpx to mock HTTP responses.
"""

import asyncio
import json

import httpx
import pytest

from robinhood_connector.core.config import RobinhoodSettings
from robinhood_connector.core.enums import Environment
from robinhood_connector.core.result import Failure, Success
from robinhood_connector.domain.value_objects import Credentials, TokenSet
from robinhood_connector.infrastructure.enums import ProviderErrorCode
from robinhood_connector.infrastructure.errors import (
    ProviderAuthenticationError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)
from robinhood_connector.infrastructure.providers.robinhood.client import (
    MfaRequired,
    RobinhoodClient,
    TokenState,
    generate_device_token,
)
from tests.factories import BASE_URL, token_json

LOGIN_URL = f"{BASE_URL}/api-token-auth/"
REFRESH_URL = f"{BASE_URL}/oauth/token/"
ACCOUNTS_URL = f"{BASE_URL}/accounts/"


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content)


# =============================================================================
# Construction & Token State
# =============================================================================


@pytest.mark.integration
class TestClientState:
    """Tests for token state handling."""

    def test_starts_unauthenticated(self, client: RobinhoodClient):
        assert client.state == TokenState.UNAUTHENTICATED
        assert client.is_authenticated is False
        assert client.tokens is None

    def test_preseeded_access_token(self):
        """A configured access token authenticates without login."""
        client = RobinhoodClient(
            settings=RobinhoodSettings(
                environment=Environment.TESTING,
                base_url=BASE_URL,
                access_token="stored",
            )
        )

        assert client.state == TokenState.AUTHENTICATED
        assert client.tokens.access_token == "stored"
        assert client.tokens.can_refresh is False

    def test_set_access_token(self, client: RobinhoodClient):
        client.set_access_token("manual")

        assert client.is_authenticated is True
        assert client._headers()["Authorization"] == "Bearer manual"

    def test_generated_device_token(self):
        token = generate_device_token()

        assert len(token) == 40
        assert token.isalnum() and token == token.lower()


# =============================================================================
# authenticate
# =============================================================================


@pytest.mark.integration
class TestAuthenticate:
    """Tests for RobinhoodClient.authenticate."""

    async def test_success_stores_tokens(self, client: RobinhoodClient, httpx_mock):
        httpx_mock.add_response(method="POST", url=LOGIN_URL, json=token_json())

        result = await client.authenticate(Credentials(username="u@x.test", password="pw"))

        assert isinstance(result, Success)
        assert result.value.access_token == "access-new"
        assert result.value.refresh_token == "refresh-new"
        assert client.state == TokenState.AUTHENTICATED

        body = request_json(httpx_mock.get_requests()[0])
        assert body["username"] == "u@x.test"
        assert body["password"] == "pw"
        assert body["scope"] == "internal"
        assert body["expires_in"] == 86400
        assert body["challenge_type"] == "sms"
        assert len(body["device_token"]) == 40
        assert "mfa_code" not in body

    async def test_sends_mfa_code_and_device_token(
        self, client: RobinhoodClient, httpx_mock
    ):
        httpx_mock.add_response(method="POST", url=LOGIN_URL, json=token_json())

        await client.authenticate(
            Credentials(
                username="u", password="pw", mfa_code="123456", device_token="dev-1"
            )
        )

        body = request_json(httpx_mock.get_requests()[0])
        assert body["mfa_code"] == "123456"
        assert body["device_token"] == "dev-1"

    @pytest.mark.parametrize("status_code", [200, 400])
    async def test_mfa_challenge(self, client: RobinhoodClient, httpx_mock, status_code: int):
        """An MFA challenge leaves the client unauthenticated."""
        httpx_mock.add_response(
            method="POST",
            url=LOGIN_URL,
            status_code=status_code,
            json={"mfa_required": True, "mfa_type": "app"},
        )

        result = await client.authenticate(Credentials(username="u", password="pw"))

        assert result == MfaRequired(mfa_type="app")
        assert client.state == TokenState.UNAUTHENTICATED

    async def test_mfa_type_defaults_to_sms(self, client: RobinhoodClient, httpx_mock):
        httpx_mock.add_response(
            method="POST", url=LOGIN_URL, status_code=400, json={"mfa_required": True}
        )

        result = await client.authenticate(Credentials(username="u", password="pw"))

        assert result == MfaRequired(mfa_type="sms")

    async def test_rejected_credentials(self, client: RobinhoodClient, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=LOGIN_URL,
            status_code=400,
            json={"detail": "Unable to log in with provided credentials."},
        )

        result = await client.authenticate(Credentials(username="u", password="bad"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderAuthenticationError)
        assert result.error.status_code == 400
        assert client.is_authenticated is False

    async def test_missing_access_token(self, client: RobinhoodClient, httpx_mock):
        httpx_mock.add_response(method="POST", url=LOGIN_URL, json={"detail": "ok"})

        result = await client.authenticate(Credentials(username="u", password="pw"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderInvalidResponseError)
        assert client.is_authenticated is False


# =============================================================================
# refresh_access_token
# =============================================================================


@pytest.mark.integration
class TestRefresh:
    """Tests for RobinhoodClient.refresh_access_token."""

    async def test_rotates_tokens(self, authenticated_client: RobinhoodClient, httpx_mock):
        httpx_mock.add_response(method="POST", url=REFRESH_URL, json=token_json())

        result = await authenticated_client.refresh_access_token()

        assert isinstance(result, Success)
        assert authenticated_client.tokens.access_token == "access-new"
        assert authenticated_client.tokens.refresh_token == "refresh-new"
        assert authenticated_client.state == TokenState.AUTHENTICATED

        request = httpx_mock.get_requests()[0]
        assert request.headers["Authorization"] == "Bearer access-1"
        assert request_json(request) == {
            "grant_type": "refresh_token",
            "refresh_token": "refresh-1",
            "scope": "internal",
            "client_id": authenticated_client._client_id,
        }

    async def test_keeps_refresh_token_when_not_rotated(
        self, authenticated_client: RobinhoodClient, httpx_mock
    ):
        httpx_mock.add_response(
            method="POST", url=REFRESH_URL, json=token_json(refresh_token=None)
        )

        await authenticated_client.refresh_access_token()

        assert authenticated_client.tokens.refresh_token == "refresh-1"

    async def test_without_refresh_token(self, client: RobinhoodClient, httpx_mock):
        """No refresh token: no request, nothing cleared."""
        client.set_access_token("stored")

        result = await client.refresh_access_token()

        assert isinstance(result, Failure)
        assert result.error.code == ProviderErrorCode.REFRESH_TOKEN_MISSING
        assert client.tokens.access_token == "stored"
        assert httpx_mock.get_requests() == []

    async def test_failure_clears_tokens(
        self, authenticated_client: RobinhoodClient, httpx_mock
    ):
        httpx_mock.add_response(method="POST", url=REFRESH_URL, status_code=401)

        result = await authenticated_client.refresh_access_token()

        assert isinstance(result, Failure)
        assert authenticated_client.tokens is None
        assert authenticated_client.state == TokenState.UNAUTHENTICATED

    async def test_concurrent_refreshes_are_not_deduplicated(
        self, authenticated_client: RobinhoodClient, httpx_mock
    ):
        """A rejected second refresh clears the tokens the first one stored."""
        calls: list[dict] = []

        def refresh_once(request: httpx.Request) -> httpx.Response:
            calls.append(request_json(request))
            if len(calls) == 1:
                return httpx.Response(200, json=token_json())
            return httpx.Response(401, json={"detail": "invalid refresh token"})

        httpx_mock.add_callback(
            refresh_once, method="POST", url=REFRESH_URL, is_reusable=True
        )

        results = await asyncio.gather(
            authenticated_client.refresh_access_token(),
            authenticated_client.refresh_access_token(),
        )

        assert len(calls) == 2
        assert sorted(type(r).__name__ for r in results) == ["Failure", "Success"]
        assert authenticated_client.tokens is None
        assert authenticated_client.state == TokenState.UNAUTHENTICATED
        assert authenticated_client.state == TokenState.UNAUTHENTICATED


# =============================================================================
# get: refresh and replay
# =============================================================================


@pytest.mark.integration
class TestRefreshAndReplay:
    """Tests for the 401 → refresh → replay-once rule."""

    async def test_sends_bearer_token(self, authenticated_client: RobinhoodClient, httpx_mock):
        httpx_mock.add_response(method="GET", url=ACCOUNTS_URL, json={"id": "1"})

        await authenticated_client.get_object("/accounts/", operation="test")

        request = httpx_mock.get_requests()[0]
        assert request.headers["Authorization"] == "Bearer access-1"
        assert request.headers["Accept"] == "application/json"

    async def test_replays_once_after_refresh(
        self, authenticated_client: RobinhoodClient, httpx_mock
    ):
        """A 401 triggers one refresh and one replay with the new token."""
        httpx_mock.add_response(method="GET", url=ACCOUNTS_URL, status_code=401)
        httpx_mock.add_response(method="POST", url=REFRESH_URL, json=token_json())
        httpx_mock.add_response(method="GET", url=ACCOUNTS_URL, json={"id": "1"})

        result = await authenticated_client.get_object("/accounts/", operation="test")

        assert result == Success(value={"id": "1"})
        requests = httpx_mock.get_requests()
        assert [r.method for r in requests] == ["GET", "POST", "GET"]
        assert requests[2].headers["Authorization"] == "Bearer access-new"

    async def test_second_401_is_returned(
        self, authenticated_client: RobinhoodClient, httpx_mock
    ):
        """The replay is never refreshed again."""
        httpx_mock.add_response(method="GET", url=ACCOUNTS_URL, status_code=401)
        httpx_mock.add_response(method="POST", url=REFRESH_URL, json=token_json())
        httpx_mock.add_response(method="GET", url=ACCOUNTS_URL, status_code=401)

        result = await authenticated_client.get_object("/accounts/", operation="test")

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderAuthenticationError)
        assert result.error.status_code == 401
        assert len(httpx_mock.get_requests()) == 3

    async def test_refresh_failure_is_returned(
        self, authenticated_client: RobinhoodClient, httpx_mock
    ):
        httpx_mock.add_response(method="GET", url=ACCOUNTS_URL, status_code=401)
        httpx_mock.add_response(method="POST", url=REFRESH_URL, status_code=400, json={})

        result = await authenticated_client.get_object("/accounts/", operation="test")

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderInvalidResponseError)
        assert authenticated_client.is_authenticated is False

    async def test_401_without_refresh_token(self, client: RobinhoodClient, httpx_mock):
        """Without a refresh token the 401 is surfaced directly."""
        client.set_access_token("stored")
        httpx_mock.add_response(method="GET", url=ACCOUNTS_URL, status_code=401)

        result = await client.get_object("/accounts/", operation="test")

        assert isinstance(result, Failure)
        assert result.error.status_code == 401
        assert len(httpx_mock.get_requests()) == 1

    async def test_403_does_not_refresh(
        self, authenticated_client: RobinhoodClient, httpx_mock
    ):
        httpx_mock.add_response(method="GET", url=ACCOUNTS_URL, status_code=403)

        result = await authenticated_client.get_object("/accounts/", operation="test")

        assert isinstance(result, Failure)
        assert result.error.status_code == 403
        assert authenticated_client.tokens.access_token == "access-1"


# =============================================================================
# paginate
# =============================================================================


@pytest.mark.integration
class TestPaginate:
    """Tests for RobinhoodClient.paginate."""

    async def test_follows_next_links(self, authenticated_client: RobinhoodClient, httpx_mock):
        """Pages are concatenated in order; params apply to the first page."""
        page2 = f"{BASE_URL}/positions/?cursor=abc&nonzero=true"
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/positions/?nonzero=true",
            json={"results": [{"id": "1"}, {"id": "2"}], "next": page2},
        )
        httpx_mock.add_response(
            method="GET", url=page2, json={"results": [{"id": "3"}], "next": None}
        )

        result = await authenticated_client.paginate(
            "/positions/", params={"nonzero": "true"}, operation="test"
        )

        assert result == Success(value=[{"id": "1"}, {"id": "2"}, {"id": "3"}])
        assert len(httpx_mock.get_requests()) == 2

    async def test_bare_array(self, authenticated_client: RobinhoodClient, httpx_mock):
        httpx_mock.add_response(method="GET", url=ACCOUNTS_URL, json=[{"id": "1"}])

        result = await authenticated_client.paginate("/accounts/", operation="test")

        assert result == Success(value=[{"id": "1"}])

    async def test_skips_null_entries(self, authenticated_client: RobinhoodClient, httpx_mock):
        """Null records in envelopes and arrays are dropped."""
        page2 = f"{ACCOUNTS_URL}?cursor=2"
        httpx_mock.add_response(
            method="GET",
            url=ACCOUNTS_URL,
            json={"results": [{"id": "1"}, None], "next": page2},
        )
        httpx_mock.add_response(method="GET", url=page2, json=[None, {"id": "2"}, 7])

        result = await authenticated_client.paginate("/accounts/", operation="test")

        assert result == Success(value=[{"id": "1"}, {"id": "2"}])

    async def test_single_object(self, authenticated_client: RobinhoodClient, httpx_mock):
        httpx_mock.add_response(method="GET", url=ACCOUNTS_URL, json={"id": "1"})

        result = await authenticated_client.paginate("/accounts/", operation="test")

        assert result == Success(value=[{"id": "1"}])

    async def test_page_failure(self, authenticated_client: RobinhoodClient, httpx_mock):
        """A failing page fails the whole collection."""
        page2 = f"{BASE_URL}/accounts/?cursor=2"
        httpx_mock.add_response(
            method="GET", url=ACCOUNTS_URL, json={"results": [{"id": "1"}], "next": page2}
        )
        httpx_mock.add_response(method="GET", url=page2, status_code=503)

        result = await authenticated_client.paginate("/accounts/", operation="test")

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderUnavailableError)

    async def test_get_object_rejects_envelope(
        self, authenticated_client: RobinhoodClient, httpx_mock
    ):
        httpx_mock.add_response(method="GET", url=ACCOUNTS_URL, json={"results": []})

        result = await authenticated_client.get_object("/accounts/", operation="test")

        assert isinstance(result, Failure)
        assert result.error.code == ProviderErrorCode.PROVIDER_INVALID_RESPONSE


# =============================================================================
# Transport Failures
# =============================================================================


@pytest.mark.integration
class TestTransportFailures:
    """Tests for network and status failures."""

    async def test_timeout(self, authenticated_client: RobinhoodClient, httpx_mock):
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"), url=ACCOUNTS_URL)

        result = await authenticated_client.get_object("/accounts/", operation="test")

        assert isinstance(result, Failure)
        assert result.error.code == ProviderErrorCode.PROVIDER_TIMEOUT

    async def test_connection_error(self, authenticated_client: RobinhoodClient, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectError("refused"), url=ACCOUNTS_URL)

        result = await authenticated_client.get_object("/accounts/", operation="test")

        assert isinstance(result, Failure)
        assert result.error.code == ProviderErrorCode.PROVIDER_CONNECTION_FAILED

    async def test_rate_limited(self, authenticated_client: RobinhoodClient, httpx_mock):
        httpx_mock.add_response(
            method="GET", url=ACCOUNTS_URL, status_code=429, headers={"Retry-After": "30"}
        )

        result = await authenticated_client.get_object("/accounts/", operation="test")

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderRateLimitError)
        assert result.error.retry_after == 30

    async def test_login_failure_never_refreshes(
        self, authenticated_client: RobinhoodClient, httpx_mock
    ):
        """A 401 on login is returned without a refresh attempt."""
        httpx_mock.add_response(method="POST", url=LOGIN_URL, status_code=401)

        result = await authenticated_client.authenticate(
            Credentials(username="u", password="pw")
        )

        assert isinstance(result, Failure)
        assert len(httpx_mock.get_requests()) == 1


@pytest.mark.integration
def test_token_set_repr_hides_secrets():
    tokens = TokenSet(access_token="secret-a", refresh_token="secret-r", expires_in=1)

    assert "secret" not in repr(tokens)
