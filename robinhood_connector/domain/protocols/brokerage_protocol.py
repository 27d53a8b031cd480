"""BrokerageProtocol for brokerage integrations.

Port (interface) for hexagonal architecture. The aggregation platform talks
to brokerages only through this contract; the Robinhood integration in
``robinhood_connector.infrastructure.providers.robinhood`` implements it.

Every operation returns a Result: Success with a standardized record, or
Failure with a StandardizedError carrying one code of the closed ErrorCode
taxonomy. Implementations never raise for expected upstream failures.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from robinhood_connector.core.result import Result
    from robinhood_connector.domain.errors import StandardizedError
    from robinhood_connector.domain.models import (
        StandardizedAccount,
        StandardizedBalance,
        StandardizedDividend,
        StandardizedHistoricalData,
        StandardizedPortfolio,
        StandardizedPosition,
        StandardizedQuote,
        StandardizedTransaction,
        StandardizedWatchlist,
    )
    from robinhood_connector.domain.value_objects import Credentials, TokenSet


class BrokerageProtocol(Protocol):
    """Protocol (port) for brokerage adapters.

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.

    Example:
        >>> provider: BrokerageProtocol = RobinhoodProvider(settings=settings)
        >>> match await provider.get_positions():
        ...     case Success(value=positions):
        ...         total = sum(p.market_value for p in positions)
        ...     case Failure(error=error):
        ...         logger.warning("positions_unavailable", code=error.code.name)
    """

    @property
    def slug(self) -> str:
        """Unique brokerage identifier (e.g. "robinhood")."""
        ...

    @property
    def is_authenticated(self) -> bool:
        """Whether an access token is currently held."""
        ...

    async def authenticate(
        self,
        credentials: "Credentials",
    ) -> "Result[TokenSet, StandardizedError]":
        """Log in with username/password (and MFA code when challenged).

        Returns:
            Success(TokenSet): Tokens are held by the implementation.
            Failure(StandardizedError): MFA_REQUIRED when a one-time code is
                needed, AUTH_FAILED otherwise.
        """
        ...

    async def refresh_token(self) -> "Result[TokenSet, StandardizedError]":
        """Obtain a new access token using the held refresh token.

        Returns:
            Success(TokenSet): New tokens.
            Failure(StandardizedError): TOKEN_REFRESH_FAILED.
        """
        ...

    async def get_portfolio(self) -> "Result[StandardizedPortfolio, StandardizedError]":
        """Portfolio summary of the primary account with its positions."""
        ...

    async def get_positions(
        self,
    ) -> "Result[list[StandardizedPosition], StandardizedError]":
        """All non-zero positions, enriched with instrument and quote data."""
        ...

    async def get_position(
        self,
        symbol: str,
    ) -> "Result[StandardizedPosition | None, StandardizedError]":
        """Position in one symbol; Success(None) when not held."""
        ...

    async def get_accounts(
        self,
    ) -> "Result[list[StandardizedAccount], StandardizedError]":
        """All brokerage accounts of the user."""
        ...

    async def get_balance(self) -> "Result[StandardizedBalance, StandardizedError]":
        """Cash balances of the primary account."""
        ...

    async def get_quote(
        self,
        symbol: str,
    ) -> "Result[StandardizedQuote, StandardizedError]":
        """Latest quote for one symbol."""
        ...

    async def get_quotes(
        self,
        symbols: list[str],
    ) -> "Result[list[StandardizedQuote], StandardizedError]":
        """Latest quotes for several symbols in one upstream call."""
        ...

    async def get_transactions(
        self,
        limit: int = 100,
    ) -> "Result[list[StandardizedTransaction], StandardizedError]":
        """Most recent trades, newest first as reported upstream."""
        ...

    async def get_historical_data(
        self,
        symbol: str,
        interval: str = "day",
        span: str = "week",
    ) -> "Result[StandardizedHistoricalData, StandardizedError]":
        """OHLCV bars for one symbol."""
        ...

    async def get_watchlists(
        self,
    ) -> "Result[list[StandardizedWatchlist], StandardizedError]":
        """Watchlists with their resolved symbols."""
        ...

    async def get_dividends(
        self,
    ) -> "Result[list[StandardizedDividend], StandardizedError]":
        """Dividend payments, paid and upcoming."""
        ...
