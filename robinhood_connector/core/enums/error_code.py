"""Operation-level error codes surfaced to callers (machine-readable).

The taxonomy is closed: every failed public operation of the provider facade
reports exactly one of these codes. Codes follow the ENTITY_ACTION_REASON
naming convention.

Categories:
- Authentication errors (MFA_REQUIRED, AUTH_FAILED, TOKEN_REFRESH_FAILED)
- Account data errors (*_FETCH_FAILED for portfolio, positions, accounts, balance)
- Market data errors (*_FETCH_FAILED for quotes and historical data)
- Activity errors (*_FETCH_FAILED for transactions, dividends, watchlists)
"""

from enum import Enum


class ErrorCode(Enum):
    """Closed error-code taxonomy for standardized errors."""

    # Authentication errors
    MFA_REQUIRED = "mfa_required"
    AUTH_FAILED = "auth_failed"
    TOKEN_REFRESH_FAILED = "token_refresh_failed"

    # Account data errors
    PORTFOLIO_FETCH_FAILED = "portfolio_fetch_failed"
    POSITIONS_FETCH_FAILED = "positions_fetch_failed"
    POSITION_FETCH_FAILED = "position_fetch_failed"
    ACCOUNTS_FETCH_FAILED = "accounts_fetch_failed"
    BALANCE_FETCH_FAILED = "balance_fetch_failed"

    # Market data errors
    QUOTE_FETCH_FAILED = "quote_fetch_failed"
    QUOTES_FETCH_FAILED = "quotes_fetch_failed"
    HISTORICAL_DATA_FETCH_FAILED = "historical_data_fetch_failed"

    # Activity errors
    TRANSACTIONS_FETCH_FAILED = "transactions_fetch_failed"
    WATCHLISTS_FETCH_FAILED = "watchlists_fetch_failed"
    DIVIDENDS_FETCH_FAILED = "dividends_fetch_failed"
