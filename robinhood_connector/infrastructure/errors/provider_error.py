"""Provider error types returned by the transport and token lifecycle layers.

Architecture:
- Errors are values carried in Failure, never raised
- Subclassed by failure kind so callers can match on type
- Uses ProviderErrorCode for transport-level tracking
- Wrapped by the provider facade into StandardizedError (details["cause"])

Usage:
    from robinhood_connector.infrastructure.errors import (
        ProviderAuthenticationError,
        ProviderError,
    )

    match await client.get_object("/accounts/"):
        case Failure(error=ProviderAuthenticationError(status_code=401)):
            ...
"""

from dataclasses import dataclass
from typing import Any

from robinhood_connector.infrastructure.enums import ProviderErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderError:
    """Base upstream API error (does NOT inherit from Exception).

    Attributes:
        code: Transport-level error code.
        message: Human-readable message.
        provider_name: Name of the provider ("robinhood").
        details: Additional context (status code, error text).
    """

    code: ProviderErrorCode
    message: str
    provider_name: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.name}: {self.message}"


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderAuthenticationError(ProviderError):
    """Upstream rejected the credentials or the access token.

    Returned when:
    - Login credentials are wrong (400/401 on /api-token-auth/)
    - Access token is invalid or expired (401)
    - Refresh token is invalid, expired or missing
    - The account is not allowed to access a resource (403)

    Attributes:
        status_code: HTTP status that triggered the error, if any.
        is_token_expired: Whether the failure is due to an expired token.
    """

    status_code: int | None = None
    is_token_expired: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderUnavailableError(ProviderError):
    """Upstream could not be reached or failed internally.

    Returned when:
    - The request timed out
    - The connection could not be established
    - Upstream answered with a 5xx status

    Attributes:
        is_transient: Whether the error is likely transient.
        retry_after: Suggested retry delay in seconds, if any.
    """

    is_transient: bool = True
    retry_after: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderRateLimitError(ProviderError):
    """Upstream returned 429 Too Many Requests.

    Attributes:
        retry_after: Seconds to wait before retrying (Retry-After header).
    """

    retry_after: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderInvalidResponseError(ProviderError):
    """Upstream returned an unusable response.

    Returned when:
    - Upstream answered 400/404 or another unexpected 4xx status
    - The body is not valid JSON or not a JSON object/array

    Attributes:
        status_code: HTTP status of the response, if any.
        response_body: Truncated raw body for debugging.
    """

    status_code: int | None = None
    response_body: str | None = None
