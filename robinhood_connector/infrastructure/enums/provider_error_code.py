"""Transport-level error codes for upstream API failures.

These are internal codes for tracking why an upstream call failed. They are
never surfaced on their own: the provider facade wraps every ProviderError
into a StandardizedError carrying an operation-level ErrorCode and keeps the
ProviderError as its cause.

Categories:
- Connectivity (PROVIDER_TIMEOUT, PROVIDER_CONNECTION_FAILED, PROVIDER_UNAVAILABLE)
- Authentication (PROVIDER_AUTHENTICATION_FAILED, PROVIDER_MFA_REQUIRED,
  REFRESH_TOKEN_MISSING)
- Response problems (PROVIDER_RATE_LIMITED, PROVIDER_INVALID_RESPONSE,
  PROVIDER_RESOURCE_NOT_FOUND)
"""

from enum import Enum


class ProviderErrorCode(Enum):
    """Transport-level error codes."""

    # Connectivity
    PROVIDER_TIMEOUT = "provider_timeout"
    PROVIDER_CONNECTION_FAILED = "provider_connection_failed"
    PROVIDER_UNAVAILABLE = "provider_unavailable"

    # Authentication
    PROVIDER_AUTHENTICATION_FAILED = "provider_authentication_failed"
    PROVIDER_MFA_REQUIRED = "provider_mfa_required"
    REFRESH_TOKEN_MISSING = "refresh_token_missing"

    # Response problems
    PROVIDER_RATE_LIMITED = "provider_rate_limited"
    PROVIDER_INVALID_RESPONSE = "provider_invalid_response"
    PROVIDER_RESOURCE_NOT_FOUND = "provider_resource_not_found"
