"""Authentication value objects.

Immutable values exchanged with the token lifecycle manager.

- Credentials: supplied by the caller for one authentication attempt and
  never stored by the connector.
- TokenSet: issued by login or refresh. A refresh supersedes the held
  TokenSet with a new instance; it is never mutated.

Usage:
    credentials = Credentials(username="user@example.com", password="...")
    outcome = await client.authenticate(credentials)
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class Credentials:
    """Login credentials for a single authentication attempt.

    Attributes:
        username: Account username (email).
        password: Account password. Excluded from repr.
        mfa_code: One-time code, required after an MFA challenge.
        device_token: Stable device identifier. Generated when absent.
    """

    username: str
    password: str = field(repr=False)
    mfa_code: str | None = field(default=None, repr=False)
    device_token: str | None = None


@dataclass(frozen=True, kw_only=True)
class TokenSet:
    """Access/refresh token pair returned by the authentication endpoints.

    Attributes:
        access_token: Bearer token for API authentication.
        refresh_token: Token for obtaining new access tokens. Empty or None
            when the TokenSet was pre-seeded from an access token only.
        expires_in: Seconds until access_token expires.
        token_type: Token type, typically "Bearer".
        scope: OAuth scope granted.
    """

    access_token: str = field(repr=False)
    refresh_token: str | None = field(default=None, repr=False)
    expires_in: int
    token_type: str = "Bearer"
    scope: str | None = None

    @property
    def can_refresh(self) -> bool:
        """Whether this TokenSet carries a usable refresh token."""
        return bool(self.refresh_token)
