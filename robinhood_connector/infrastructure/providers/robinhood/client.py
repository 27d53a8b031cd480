"""Robinhood HTTP client with token lifecycle management.

Owns the one TokenSet of a connector instance and every request made with it:

- authenticate(): username/password login, with MFA escalation
- refresh_access_token(): refresh-token exchange
- get() / get_object() / paginate(): resource reads

Token states:
    UNAUTHENTICATED --authenticate--> AUTHENTICATED
    AUTHENTICATED --401 on a resource call--> REFRESHING
    REFRESHING --refresh ok--> AUTHENTICATED (call replayed once)
    REFRESHING --refresh failed--> UNAUTHENTICATED (TokenSet cleared)

A resource call that receives 401 while a refresh token is held triggers
exactly one refresh and one replay of the call. The replay itself is never
refreshed again; a second 401 is returned as-is. Login and refresh calls
never trigger a refresh.

Concurrent calls that each observe a 401 each trigger their own refresh;
refresh attempts are not de-duplicated. Two refreshes can then present the
same refresh token: if upstream rotates it on the first and rejects the
second, the rejected refresh clears the TokenSet the first one just stored
and the client ends up unauthenticated. The REFRESHING state is also reset by
whichever refresh finishes first, while the other may still be in flight.

Usage:
    client = RobinhoodClient(settings=get_settings())
    match await client.authenticate(credentials):
        case Success(value=tokens):
            ...
        case MfaRequired(mfa_type=mfa_type):
            ...  # resubmit with Credentials(mfa_code=...)
        case Failure(error=error):
            ...
"""

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, TypeAlias

import httpx
import structlog

from robinhood_connector.core.config import RobinhoodSettings
from robinhood_connector.core.constants import (
    BEARER_PREFIX,
    DEFAULT_HEADERS,
    DEVICE_TOKEN_ALPHABET,
    DEVICE_TOKEN_LENGTH,
    MFA_CHALLENGE_TYPE,
    SOURCE_TAG,
    TOKEN_EXPIRES_IN,
    TOKEN_SCOPE,
)
from robinhood_connector.core.result import Failure, Result, Success
from robinhood_connector.domain.value_objects import Credentials, TokenSet
from robinhood_connector.infrastructure.enums import ProviderErrorCode
from robinhood_connector.infrastructure.errors import (
    ProviderAuthenticationError,
    ProviderError,
    ProviderInvalidResponseError,
)
from robinhood_connector.infrastructure.providers.base_api_client import (
    BaseProviderAPIClient,
)
from robinhood_connector.infrastructure.providers.response_shapes import (
    EnvelopeBody,
    ListBody,
    ObjectBody,
    ResponseBody,
)
from robinhood_connector.infrastructure.providers.robinhood import endpoints

logger = structlog.get_logger(__name__)


class TokenState(Enum):
    """Authentication state of a RobinhoodClient."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    REFRESHING = "refreshing"


@dataclass(frozen=True, slots=True, kw_only=True)
class MfaRequired:
    """Login was challenged for a one-time code.

    The client stays unauthenticated; the caller resubmits the credentials
    with ``mfa_code`` set.

    Attributes:
        mfa_type: Challenge channel reported by upstream (e.g. "sms").
    """

    mfa_type: str = MFA_CHALLENGE_TYPE


AuthOutcome: TypeAlias = Success[TokenSet] | MfaRequired | Failure[ProviderError]


def generate_device_token() -> str:
    """Generate a 40-character lowercase alphanumeric device token.

    Uses the non-cryptographic ``random`` module; the token only identifies
    the device to upstream and is not a secret.
    """
    return "".join(random.choices(DEVICE_TOKEN_ALPHABET, k=DEVICE_TOKEN_LENGTH))


class RobinhoodClient(BaseProviderAPIClient):
    """HTTP client for Robinhood's private API.

    Attributes:
        _client_id: OAuth client id sent on refresh.
        _device_token: Configured device token, used when credentials carry none.
        _tokens: Currently held TokenSet, or None when unauthenticated.
        _refreshing: True while a refresh call is in flight.

    Example:
        >>> client = RobinhoodClient(settings=settings)
        >>> client.set_access_token("token-from-storage")
        >>> result = await client.paginate("/accounts/", operation="get_accounts")
    """

    def __init__(self, *, settings: RobinhoodSettings) -> None:
        """Initialize client from settings.

        Args:
            settings: Connector settings. A configured ``access_token`` is
                applied immediately via set_access_token().
        """
        super().__init__(
            base_url=settings.base_url,
            provider_name=SOURCE_TAG,
            timeout=settings.timeout,
        )
        self._client_id = settings.client_id
        self._device_token = settings.device_token
        self._tokens: TokenSet | None = None
        self._refreshing = False

        if settings.access_token:
            self.set_access_token(settings.access_token)

    # =========================================================================
    # Token State
    # =========================================================================

    @property
    def state(self) -> TokenState:
        """Current authentication state."""
        if self._refreshing:
            return TokenState.REFRESHING
        if self.is_authenticated:
            return TokenState.AUTHENTICATED
        return TokenState.UNAUTHENTICATED

    @property
    def is_authenticated(self) -> bool:
        """True iff an access token is held."""
        return self._tokens is not None and bool(self._tokens.access_token)

    @property
    def tokens(self) -> TokenSet | None:
        """Currently held TokenSet, for callers that persist tokens."""
        return self._tokens

    def set_access_token(self, access_token: str) -> None:
        """Hold an access token obtained elsewhere.

        The resulting TokenSet has no refresh token, so a 401 on a later call
        is surfaced instead of triggering a refresh.
        """
        self._tokens = TokenSet(
            access_token=access_token,
            refresh_token="",
            expires_in=TOKEN_EXPIRES_IN,
            token_type="Bearer",
            scope=TOKEN_SCOPE,
        )
        logger.info("robinhood_access_token_set", provider=self._provider_name)

    def _headers(self) -> dict[str, str]:
        headers = dict(DEFAULT_HEADERS)
        if self._tokens is not None and self._tokens.access_token:
            headers["Authorization"] = f"{BEARER_PREFIX}{self._tokens.access_token}"
        return headers

    # =========================================================================
    # Authentication
    # =========================================================================

    async def authenticate(self, credentials: Credentials) -> AuthOutcome:
        """Log in with username and password.

        Args:
            credentials: Login credentials. ``mfa_code`` is sent only when set.

        Returns:
            Success(TokenSet): Tokens issued; the client is authenticated.
            MfaRequired: Upstream asks for a one-time code; state unchanged.
            Failure(ProviderAuthenticationError): Credentials rejected.
            Failure(ProviderError): Transport or response failure.
        """
        payload: dict[str, Any] = {
            "username": credentials.username,
            "password": credentials.password,
            "device_token": (
                credentials.device_token
                or self._device_token
                or generate_device_token()
            ),
            "expires_in": TOKEN_EXPIRES_IN,
            "scope": TOKEN_SCOPE,
            "challenge_type": MFA_CHALLENGE_TYPE,
        }
        if credentials.mfa_code:
            payload["mfa_code"] = credentials.mfa_code

        logger.info(
            "robinhood_authentication_started",
            provider=self._provider_name,
            has_mfa_code=bool(credentials.mfa_code),
        )

        result = await self._execute_request(
            method="POST",
            path=endpoints.LOGIN,
            headers=self._headers(),
            json_data=payload,
            operation="authenticate",
        )
        if isinstance(result, Failure):
            return result

        response = result.value
        mfa_type = self._mfa_challenge(response)
        if mfa_type is not None:
            logger.info(
                "robinhood_authentication_mfa_required",
                provider=self._provider_name,
                mfa_type=mfa_type,
            )
            return MfaRequired(mfa_type=mfa_type)

        if response.status_code == 400:
            logger.warning(
                "robinhood_authentication_rejected",
                provider=self._provider_name,
                status_code=response.status_code,
            )
            return Failure(
                error=ProviderAuthenticationError(
                    code=ProviderErrorCode.PROVIDER_AUTHENTICATION_FAILED,
                    message="Robinhood rejected the supplied credentials",
                    provider_name=self._provider_name,
                    status_code=response.status_code,
                )
            )

        token_result = self._handle_token_response(response, "authenticate")
        if isinstance(token_result, Failure):
            return token_result

        self._tokens = token_result.value
        logger.info(
            "robinhood_authentication_succeeded",
            provider=self._provider_name,
            expires_in=self._tokens.expires_in,
            has_refresh_token=self._tokens.can_refresh,
        )
        return token_result

    async def refresh_access_token(self) -> Result[TokenSet, ProviderError]:
        """Exchange the held refresh token for a new TokenSet.

        Returns:
            Success(TokenSet): New tokens. The previous refresh token is kept
                when upstream does not rotate it.
            Failure(ProviderAuthenticationError): REFRESH_TOKEN_MISSING when
                no refresh token is held (nothing is cleared).
            Failure(ProviderError): Refresh call failed; the TokenSet has been
                cleared and the client is unauthenticated.
        """
        current = self._tokens
        if current is None or not current.can_refresh:
            logger.warning(
                "robinhood_token_refresh_unavailable",
                provider=self._provider_name,
                has_access_token=self.is_authenticated,
            )
            return Failure(
                error=ProviderAuthenticationError(
                    code=ProviderErrorCode.REFRESH_TOKEN_MISSING,
                    message="No refresh token available",
                    provider_name=self._provider_name,
                )
            )

        logger.info("robinhood_token_refresh_started", provider=self._provider_name)

        self._refreshing = True
        try:
            result = await self._execute_request(
                method="POST",
                path=endpoints.REFRESH,
                headers=self._headers(),
                json_data={
                    "grant_type": "refresh_token",
                    "refresh_token": current.refresh_token,
                    "scope": TOKEN_SCOPE,
                    "client_id": self._client_id,
                },
                operation="refresh_access_token",
            )
            if isinstance(result, Success):
                token_result = self._handle_token_response(result.value, "refresh")
            else:
                token_result = result
        finally:
            self._refreshing = False

        if isinstance(token_result, Failure):
            self._tokens = None
            logger.warning(
                "robinhood_token_refresh_failed",
                provider=self._provider_name,
                error_code=token_result.error.code.name,
            )
            return token_result

        tokens = token_result.value
        if not tokens.refresh_token:
            tokens = replace(tokens, refresh_token=current.refresh_token)

        self._tokens = tokens
        logger.info(
            "robinhood_token_refresh_succeeded",
            provider=self._provider_name,
            expires_in=tokens.expires_in,
            refresh_token_rotated=tokens.refresh_token != current.refresh_token,
        )
        return Success(value=tokens)

    def _mfa_challenge(self, response: httpx.Response) -> str | None:
        """Return the MFA type if the login response is an MFA challenge."""
        if response.status_code not in (200, 400):
            return None
        try:
            data = response.json()
        except ValueError:
            return None
        if isinstance(data, dict) and data.get("mfa_required"):
            return data.get("mfa_type") or MFA_CHALLENGE_TYPE
        return None

    def _handle_token_response(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[TokenSet, ProviderError]:
        """Handle a login or refresh response.

        Args:
            response: HTTP response from the token endpoint.
            operation: "authenticate" or "refresh" for logging.

        Returns:
            Success(TokenSet) or Failure(ProviderError).
        """
        decoded = self._decode_json(response, f"token_{operation}")
        if isinstance(decoded, Failure):
            return decoded

        data = decoded.value
        access_token = data.get("access_token") if isinstance(data, dict) else None
        if not isinstance(access_token, str) or not access_token:
            logger.error(
                f"robinhood_token_{operation}_missing_field",
                provider=self._provider_name,
                missing_field="access_token",
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ProviderErrorCode.PROVIDER_INVALID_RESPONSE,
                    message="Missing access_token in Robinhood token response",
                    provider_name=self._provider_name,
                    status_code=response.status_code,
                )
            )

        try:
            expires_in = int(data.get("expires_in", TOKEN_EXPIRES_IN))
        except (TypeError, ValueError):
            expires_in = TOKEN_EXPIRES_IN

        return Success(
            value=TokenSet(
                access_token=access_token,
                refresh_token=data.get("refresh_token") or None,
                expires_in=expires_in,
                token_type=data.get("token_type") or "Bearer",
                scope=data.get("scope"),
            )
        )

    # =========================================================================
    # Resource Requests
    # =========================================================================

    async def get(
        self,
        path: str,
        *,
        params: dict[str, str] | None = None,
        operation: str,
    ) -> Result[ResponseBody, ProviderError]:
        """GET a resource, refreshing and replaying once on 401.

        Args:
            path: Path relative to the base URL, or an absolute URL.
            params: Optional query parameters.
            operation: Operation name for logging.

        Returns:
            Success(ResponseBody): Classified response body.
            Failure(ProviderError): Request failed. A refresh failure is
                returned in place of the original 401.
        """
        result = await self._execute_and_classify(
            method="GET",
            path=path,
            headers=self._headers(),
            params=params,
            operation=operation,
        )
        if not self._should_refresh(result):
            return result

        logger.info(
            "robinhood_request_unauthorized",
            provider=self._provider_name,
            operation=operation,
        )
        refreshed = await self.refresh_access_token()
        if isinstance(refreshed, Failure):
            return refreshed

        logger.info(
            "robinhood_request_replayed",
            provider=self._provider_name,
            operation=operation,
        )
        return await self._execute_and_classify(
            method="GET",
            path=path,
            headers=self._headers(),
            params=params,
            operation=operation,
        )

    def _should_refresh(self, result: Result[ResponseBody, ProviderError]) -> bool:
        if not isinstance(result, Failure):
            return False
        error = result.error
        return (
            isinstance(error, ProviderAuthenticationError)
            and error.status_code == 401
            and self._tokens is not None
            and self._tokens.can_refresh
        )

    async def get_object(
        self,
        path: str,
        *,
        params: dict[str, str] | None = None,
        operation: str,
    ) -> Result[dict[str, Any], ProviderError]:
        """GET a resource that must be a single JSON object.

        Returns:
            Success(dict): The decoded object.
            Failure(ProviderInvalidResponseError): Body was a list or an
                envelope.
            Failure(ProviderError): Request failed.
        """
        result = await self.get(path, params=params, operation=operation)
        if isinstance(result, Failure):
            return result

        match result.value:
            case ObjectBody(item=item):
                return Success(value=item)
            case body:
                logger.warning(
                    "robinhood_unexpected_response_shape",
                    provider=self._provider_name,
                    operation=operation,
                    shape=type(body).__name__,
                )
                return Failure(
                    error=ProviderInvalidResponseError(
                        code=ProviderErrorCode.PROVIDER_INVALID_RESPONSE,
                        message="Expected a single object from Robinhood",
                        provider_name=self._provider_name,
                    )
                )

    async def paginate(
        self,
        path: str,
        *,
        params: dict[str, str] | None = None,
        operation: str,
    ) -> Result[list[dict[str, Any]], ProviderError]:
        """Fetch every page of a collection.

        Envelope pages are accumulated while ``next`` is set; a bare array is
        returned as-is; a single object becomes a one-element list. Upstream
        order is preserved, nothing is de-duplicated, and exactly one request
        is made per page. Entries that are not JSON objects (upstream answers
        ``null`` for unknown or removed records) are skipped.

        Args:
            path: Path of the first page.
            params: Query parameters for the first page only (``next`` links
                already carry their query string).
            operation: Operation name for logging.

        Returns:
            Success(list[dict]): All records in upstream order.
            Failure(ProviderError): Any page failed.
        """
        records: list[dict[str, Any]] = []
        next_url: str | None = path
        page_params = params
        pages = 0
        skipped = 0

        while next_url:
            result = await self.get(next_url, params=page_params, operation=operation)
            if isinstance(result, Failure):
                return result
            pages += 1
            page_params = None

            match result.value:
                case EnvelopeBody(results=entries, next=next_link):
                    next_url = next_link
                case ListBody(items=entries):
                    next_url = None
                case ObjectBody(item=item):
                    entries = [item]
                    next_url = None

            for entry in entries:
                if isinstance(entry, dict):
                    records.append(entry)
                else:
                    skipped += 1

        logger.debug(
            "robinhood_pagination_completed",
            provider=self._provider_name,
            operation=operation,
            pages=pages,
            count=len(records),
            skipped=skipped,
        )
        return Success(value=records)
