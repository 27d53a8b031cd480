"""Robinhood provider implementing BrokerageProtocol.

Composes raw endpoint calls and mappers per logical operation and converts
every failure into a StandardizedError.

Architecture:
    RobinhoodProvider orchestrates:
    - client.py: token lifecycle, retry-once after refresh, pagination
    - api/robinhood_api.py: one method per REST resource
    - mappers/: raw JSON → standardized records

Partial-failure policy for collections whose elements need extra lookups:
    - Positions: an element whose instrument or quote lookup fails is dropped.
      If every position fails, the operation fails.
    - Transactions, dividends, quotes: the element is kept and mapped without
      instrument data (symbol "UNKNOWN").
    - Watchlists: items that cannot be resolved to a symbol are skipped.

Absorbed per-element failures are logged, never surfaced.
"""

import asyncio
from typing import Any

import structlog

from robinhood_connector.core.config import RobinhoodSettings, get_settings
from robinhood_connector.core.constants import SOURCE_TAG
from robinhood_connector.core.enums import ErrorCode
from robinhood_connector.core.result import Failure, Result, Success
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
from robinhood_connector.infrastructure.enums import ProviderErrorCode
from robinhood_connector.infrastructure.errors import (
    ProviderError,
    ProviderInvalidResponseError,
)
from robinhood_connector.infrastructure.providers.robinhood.api import RobinhoodAPI
from robinhood_connector.infrastructure.providers.robinhood.client import (
    MfaRequired,
    RobinhoodClient,
)
from robinhood_connector.infrastructure.providers.robinhood.mappers import (
    RobinhoodAccountMapper,
    RobinhoodActivityMapper,
    RobinhoodMarketDataMapper,
    RobinhoodPositionMapper,
    RobinhoodWatchlistMapper,
)

logger = structlog.get_logger(__name__)


class RobinhoodProvider:
    """Robinhood adapter implementing BrokerageProtocol.

    Every public operation returns ``Result[T, StandardizedError]``; expected
    upstream failures are never raised. Calls made while unauthenticated are
    not pre-validated: they fail upstream and surface as the operation's
    failure code.

    Attributes:
        _client: Token lifecycle owner, one per provider instance.
        _api: Raw endpoint accessor.

    Example:
        >>> provider = RobinhoodProvider(settings=settings)
        >>> await provider.authenticate(Credentials(username=..., password=...))
        >>> match await provider.get_portfolio():
        ...     case Success(value=portfolio):
        ...         print(portfolio.total_value)
        ...     case Failure(error=error):
        ...         print(f"{error.code.name}: {error.message}")
    """

    def __init__(
        self,
        *,
        settings: RobinhoodSettings | None = None,
        client: RobinhoodClient | None = None,
    ) -> None:
        """Initialize Robinhood provider.

        Args:
            settings: Connector settings (defaults to get_settings()).
            client: Pre-built client, e.g. one holding restored tokens.
        """
        self._settings = settings or get_settings()
        self._client = client or RobinhoodClient(settings=self._settings)
        self._api = RobinhoodAPI(self._client)

        self._account_mapper = RobinhoodAccountMapper()
        self._position_mapper = RobinhoodPositionMapper()
        self._market_data_mapper = RobinhoodMarketDataMapper()
        self._activity_mapper = RobinhoodActivityMapper()
        self._watchlist_mapper = RobinhoodWatchlistMapper()

    @property
    def slug(self) -> str:
        """Return provider slug identifier."""
        return SOURCE_TAG

    @property
    def client(self) -> RobinhoodClient:
        """Client owning the TokenSet, for callers that persist tokens."""
        return self._client

    @property
    def is_authenticated(self) -> bool:
        """Whether an access token is currently held."""
        return self._client.is_authenticated

    # =========================================================================
    # Authentication
    # =========================================================================

    async def authenticate(
        self, credentials: Credentials
    ) -> Result[TokenSet, StandardizedError]:
        """Log in to Robinhood.

        Returns:
            Success(TokenSet): Logged in.
            Failure(StandardizedError): MFA_REQUIRED when a one-time code is
                needed (details["mfa_type"] names the channel), AUTH_FAILED
                for every other failure.
        """
        outcome = await self._client.authenticate(credentials)

        match outcome:
            case Success(value=tokens):
                return Success(value=tokens)
            case MfaRequired(mfa_type=mfa_type):
                return self._failure(
                    ErrorCode.MFA_REQUIRED,
                    "Multi-factor authentication required",
                    mfa_type=mfa_type,
                )
            case Failure(error=error):
                return self._failure(
                    ErrorCode.AUTH_FAILED, "Authentication failed", cause=error
                )

    async def refresh_token(self) -> Result[TokenSet, StandardizedError]:
        """Refresh the access token with the held refresh token."""
        result = await self._client.refresh_access_token()
        if isinstance(result, Failure):
            return self._failure(
                ErrorCode.TOKEN_REFRESH_FAILED,
                "Failed to refresh access token",
                cause=result.error,
            )
        return result

    # =========================================================================
    # Accounts & Portfolio
    # =========================================================================

    async def get_accounts(
        self,
    ) -> Result[list[StandardizedAccount], StandardizedError]:
        """Fetch all brokerage accounts."""
        result = await self._api.get_accounts()
        if isinstance(result, Failure):
            return self._failure(
                ErrorCode.ACCOUNTS_FETCH_FAILED,
                "Failed to fetch accounts",
                cause=result.error,
            )

        accounts = [self._account_mapper.map_account(raw) for raw in result.value]
        logger.info(
            "robinhood_get_accounts_succeeded",
            provider=self.slug,
            account_count=len(accounts),
        )
        return Success(value=accounts)

    async def get_balance(self) -> Result[StandardizedBalance, StandardizedError]:
        """Fetch cash balances of the first (primary) account."""
        result = await self._api.get_accounts()
        if isinstance(result, Failure):
            return self._failure(
                ErrorCode.BALANCE_FETCH_FAILED,
                "Failed to fetch balance",
                cause=result.error,
            )
        if not result.value:
            return self._failure(ErrorCode.BALANCE_FETCH_FAILED, "No accounts found")

        return Success(value=self._account_mapper.map_balance(result.value[0]))

    async def get_portfolio(
        self,
    ) -> Result[StandardizedPortfolio, StandardizedError]:
        """Fetch the portfolio of the first (primary) account.

        Calls accounts, the account's portfolio summary, then get_positions().
        """
        accounts = await self._api.get_accounts()
        if isinstance(accounts, Failure):
            return self._failure(
                ErrorCode.PORTFOLIO_FETCH_FAILED,
                "Failed to fetch portfolio",
                cause=accounts.error,
            )
        if not accounts.value:
            return self._failure(ErrorCode.PORTFOLIO_FETCH_FAILED, "No accounts found")

        account = accounts.value[0]
        portfolio = await self._api.get_portfolio(str(account.get("account_number") or ""))
        if isinstance(portfolio, Failure):
            return self._failure(
                ErrorCode.PORTFOLIO_FETCH_FAILED,
                "Failed to fetch portfolio",
                cause=portfolio.error,
            )

        positions = await self.get_positions()
        if isinstance(positions, Failure):
            return self._failure(
                ErrorCode.PORTFOLIO_FETCH_FAILED,
                "Failed to fetch portfolio",
                cause=positions.error,
            )

        return Success(
            value=self._account_mapper.map_portfolio(
                account, portfolio.value, positions.value
            )
        )

    # =========================================================================
    # Positions
    # =========================================================================

    async def get_positions(
        self,
    ) -> Result[list[StandardizedPosition], StandardizedError]:
        """Fetch non-zero positions with instrument and quote data.

        Positions whose instrument or quote lookup fails are dropped. If
        there were positions and every one of them failed, the operation
        fails with POSITIONS_FETCH_FAILED.
        """
        result = await self._api.get_positions(nonzero=True)
        if isinstance(result, Failure):
            return self._failure(
                ErrorCode.POSITIONS_FETCH_FAILED,
                "Failed to fetch positions",
                cause=result.error,
            )

        positions: list[StandardizedPosition] = []
        last_error: ProviderError | None = None

        for raw_position in result.value:
            enriched = await self._enrich_position(raw_position)
            if isinstance(enriched, Failure):
                last_error = enriched.error
                logger.warning(
                    "robinhood_position_skipped",
                    provider=self.slug,
                    position_url=raw_position.get("url"),
                    error_code=enriched.error.code.name,
                )
                continue
            positions.append(enriched.value)

        if result.value and not positions:
            return self._failure(
                ErrorCode.POSITIONS_FETCH_FAILED,
                "Failed to fetch data for every position",
                cause=last_error,
            )

        logger.info(
            "robinhood_get_positions_succeeded",
            provider=self.slug,
            position_count=len(positions),
            skipped_count=len(result.value) - len(positions),
        )
        return Success(value=positions)

    async def _enrich_position(
        self, raw_position: dict[str, Any]
    ) -> Result[StandardizedPosition, ProviderError]:
        instrument_url = raw_position.get("instrument")
        if not instrument_url:
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ProviderErrorCode.PROVIDER_INVALID_RESPONSE,
                    message="Position has no instrument reference",
                    provider_name=self.slug,
                )
            )

        instrument = await self._api.get_instrument_by_url(instrument_url)
        if isinstance(instrument, Failure):
            return instrument

        quote = await self._api.get_quote(str(instrument.value.get("symbol") or ""))
        if isinstance(quote, Failure):
            return quote

        return Success(
            value=self._position_mapper.map_position(
                raw_position, instrument.value, quote.value
            )
        )

    async def get_position(
        self, symbol: str
    ) -> Result[StandardizedPosition | None, StandardizedError]:
        """Fetch the position in one symbol.

        Returns:
            Success(StandardizedPosition): The symbol is held.
            Success(None): The symbol is not held.
            Failure(StandardizedError): POSITION_FETCH_FAILED.
        """
        message = f"Failed to fetch position for {symbol}"

        positions = await self._api.get_positions(nonzero=True)
        if isinstance(positions, Failure):
            return self._failure(
                ErrorCode.POSITION_FETCH_FAILED, message, cause=positions.error
            )

        instrument = await self._api.get_instrument_by_symbol(symbol)
        if isinstance(instrument, Failure):
            return self._failure(
                ErrorCode.POSITION_FETCH_FAILED, message, cause=instrument.error
            )

        instrument_url = instrument.value.get("url")
        raw_position = next(
            (p for p in positions.value if p.get("instrument") == instrument_url),
            None,
        )
        if raw_position is None:
            logger.debug("robinhood_position_not_held", provider=self.slug, symbol=symbol)
            return Success(value=None)

        quote = await self._api.get_quote(symbol)
        if isinstance(quote, Failure):
            return self._failure(
                ErrorCode.POSITION_FETCH_FAILED, message, cause=quote.error
            )

        return Success(
            value=self._position_mapper.map_position(
                raw_position, instrument.value, quote.value
            )
        )

    # =========================================================================
    # Market Data
    # =========================================================================

    async def get_quote(self, symbol: str) -> Result[StandardizedQuote, StandardizedError]:
        """Fetch quote and instrument for one symbol concurrently."""
        quote, instrument = await asyncio.gather(
            self._api.get_quote(symbol),
            self._api.get_instrument_by_symbol(symbol),
        )

        for result in (quote, instrument):
            if isinstance(result, Failure):
                return self._failure(
                    ErrorCode.QUOTE_FETCH_FAILED,
                    f"Failed to fetch quote for {symbol}",
                    cause=result.error,
                )

        return Success(
            value=self._market_data_mapper.map_quote(quote.value, instrument.value)
        )

    async def get_quotes(
        self, symbols: list[str]
    ) -> Result[list[StandardizedQuote], StandardizedError]:
        """Fetch quotes for several symbols.

        Quotes whose instrument lookup fails are kept without name/exchange.
        """
        if not symbols:
            return Success(value=[])

        result = await self._api.get_quotes(symbols)
        if isinstance(result, Failure):
            return self._failure(
                ErrorCode.QUOTES_FETCH_FAILED,
                "Failed to fetch quotes",
                cause=result.error,
            )

        quotes: list[StandardizedQuote] = []
        for raw_quote in result.value:
            instrument = await self._api.get_instrument_by_symbol(
                str(raw_quote.get("symbol") or "")
            )
            if isinstance(instrument, Failure):
                logger.warning(
                    "robinhood_quote_instrument_unavailable",
                    provider=self.slug,
                    symbol=raw_quote.get("symbol"),
                    error_code=instrument.error.code.name,
                )
                quotes.append(self._market_data_mapper.map_quote(raw_quote))
                continue
            quotes.append(self._market_data_mapper.map_quote(raw_quote, instrument.value))

        return Success(value=quotes)

    async def get_historical_data(
        self,
        symbol: str,
        interval: str = "day",
        span: str = "week",
    ) -> Result[StandardizedHistoricalData, StandardizedError]:
        """Fetch OHLCV bars for one symbol."""
        result = await self._api.get_historicals(symbol, interval=interval, span=span)
        if isinstance(result, Failure):
            return self._failure(
                ErrorCode.HISTORICAL_DATA_FETCH_FAILED,
                f"Failed to fetch historical data for {symbol}",
                cause=result.error,
            )

        return Success(
            value=self._market_data_mapper.map_historical_data(
                result.value, symbol=symbol.upper(), span=span
            )
        )

    # =========================================================================
    # Activity
    # =========================================================================

    async def get_transactions(
        self, limit: int = 100
    ) -> Result[list[StandardizedTransaction], StandardizedError]:
        """Fetch up to ``limit`` orders as transactions.

        Orders whose instrument lookup fails are kept with symbol "UNKNOWN".
        """
        result = await self._api.get_orders()
        if isinstance(result, Failure):
            return self._failure(
                ErrorCode.TRANSACTIONS_FETCH_FAILED,
                "Failed to fetch transactions",
                cause=result.error,
            )

        transactions: list[StandardizedTransaction] = []
        for order in result.value[: max(limit, 0)]:
            instrument = await self._lookup_instrument(order, entity="order")
            transactions.append(self._activity_mapper.map_transaction(order, instrument))

        return Success(value=transactions)

    async def get_dividends(
        self,
    ) -> Result[list[StandardizedDividend], StandardizedError]:
        """Fetch dividends.

        Dividends whose instrument lookup fails are kept with symbol "UNKNOWN".
        """
        result = await self._api.get_dividends()
        if isinstance(result, Failure):
            return self._failure(
                ErrorCode.DIVIDENDS_FETCH_FAILED,
                "Failed to fetch dividends",
                cause=result.error,
            )

        dividends: list[StandardizedDividend] = []
        for dividend in result.value:
            instrument = await self._lookup_instrument(dividend, entity="dividend")
            dividends.append(self._activity_mapper.map_dividend(dividend, instrument))

        return Success(value=dividends)

    async def get_watchlists(
        self,
    ) -> Result[list[StandardizedWatchlist], StandardizedError]:
        """Fetch watchlists with the symbols they follow.

        A watchlist whose items cannot be fetched is returned without
        symbols; items whose instrument cannot be resolved are skipped.
        """
        result = await self._api.get_watchlists()
        if isinstance(result, Failure):
            return self._failure(
                ErrorCode.WATCHLISTS_FETCH_FAILED,
                "Failed to fetch watchlists",
                cause=result.error,
            )

        watchlists: list[StandardizedWatchlist] = []
        for watchlist in result.value:
            symbols = await self._watchlist_symbols(watchlist)
            watchlists.append(self._watchlist_mapper.map_watchlist(watchlist, symbols))

        return Success(value=watchlists)

    async def _watchlist_symbols(self, watchlist: dict[str, Any]) -> list[str]:
        url = watchlist.get("url")
        if not url:
            return []

        items = await self._api.get_watchlist_items(url)
        if isinstance(items, Failure):
            logger.warning(
                "robinhood_watchlist_items_unavailable",
                provider=self.slug,
                watchlist=watchlist.get("name"),
                error_code=items.error.code.name,
            )
            return []

        symbols: list[str] = []
        for item in items.value:
            instrument = await self._lookup_instrument(item, entity="watchlist_item")
            if instrument and instrument.get("symbol"):
                symbols.append(instrument["symbol"])
        return symbols

    async def _lookup_instrument(
        self, record: dict[str, Any], *, entity: str
    ) -> dict[str, Any] | None:
        """Resolve the instrument URL of a record, or None (logged) on failure."""
        url = record.get("instrument")
        if not url:
            return None

        result = await self._api.get_instrument_by_url(url)
        if isinstance(result, Failure):
            logger.warning(
                "robinhood_instrument_lookup_failed",
                provider=self.slug,
                entity=entity,
                record_id=record.get("id"),
                error_code=result.error.code.name,
            )
            return None
        return result.value

    # =========================================================================
    # Error Conversion
    # =========================================================================

    def _failure(
        self,
        code: ErrorCode,
        message: str,
        *,
        cause: ProviderError | StandardizedError | None = None,
        **context: Any,
    ) -> Failure[StandardizedError]:
        """Wrap a failure into a StandardizedError and log it.

        Args:
            code: Operation-level error code.
            message: Human-readable message.
            cause: Underlying error, kept as details["cause"].
            **context: Extra details (e.g. mfa_type).
        """
        details: dict[str, Any] = dict(context)
        if cause is not None:
            details["cause"] = cause

        logger.warning(
            "robinhood_operation_failed",
            provider=self.slug,
            error_code=code.name,
            cause=str(cause) if cause is not None else None,
        )
        return Failure(
            error=StandardizedError(
                code=code,
                message=message,
                details=details or None,
            )
        )
