"""Centralized constants for internal implementation details.

These are fixed protocol values, NOT environment-specific configuration.
For configurable values use `robinhood_connector/core/config.py` instead.

Categories:
- Upstream defaults: production host, public OAuth client id
- Authentication protocol: token lifetime, scope, challenge type
- HTTP: headers, prefixes
- Provenance: source tag written into every standardized record
- Limits: truncation sizes
"""

# =============================================================================
# Upstream Defaults
# =============================================================================

DEFAULT_BASE_URL: str = "https://api.robinhood.com"
"""Production API host."""

DEFAULT_CLIENT_ID: str = "c82SH0WZOsabOXGP2sxqcj34FxkvfnWRZBKlBjFS"
"""Public OAuth client identifier used by Robinhood's web client."""

PROVIDER_TIMEOUT_DEFAULT: float = 30.0
"""Default timeout for upstream API calls in seconds."""


# =============================================================================
# Authentication Protocol
# =============================================================================

TOKEN_EXPIRES_IN: int = 86400
"""Requested access token lifetime in seconds (24 hours)."""

TOKEN_SCOPE: str = "internal"
"""OAuth scope requested on login and refresh."""

MFA_CHALLENGE_TYPE: str = "sms"
"""Challenge channel requested when MFA is enforced."""

DEVICE_TOKEN_LENGTH: int = 40
"""Length of generated device tokens."""

DEVICE_TOKEN_ALPHABET: str = "abcdefghijklmnopqrstuvwxyz0123456789"
"""Characters used for generated device tokens."""


# =============================================================================
# HTTP
# =============================================================================

BEARER_PREFIX: str = "Bearer "
"""HTTP Authorization header prefix for Bearer tokens."""

USER_AGENT: str = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)
"""Browser-identifying user agent sent with every request."""

DEFAULT_HEADERS: dict[str, str] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "User-Agent": USER_AGENT,
}
"""Headers attached to every outbound request."""


# =============================================================================
# Provenance
# =============================================================================

SOURCE_TAG: str = "robinhood"
"""Integration name written into every standardized record and error."""

DEFAULT_CURRENCY: str = "USD"
"""Robinhood accounts are USD-denominated."""


# =============================================================================
# Response Limits
# =============================================================================

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum characters of an upstream body kept in error objects."""
