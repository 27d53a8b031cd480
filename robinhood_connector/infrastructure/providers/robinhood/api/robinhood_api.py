"""Robinhood raw endpoint accessor.

One method per REST resource. Handles URL construction only - requests,
token handling and pagination are delegated to RobinhoodClient, and mapping
to standardized records is done by the mappers.

Read-only: order placement and cancellation are not exposed.

Endpoints:
    GET /accounts/                          - Brokerage accounts (paginated)
    GET /accounts/{id}/                     - One account
    GET /accounts/{id}/portfolio/           - Portfolio summary of an account
    GET /positions/?nonzero=true            - Held positions (paginated)
    GET /positions/{id}/                    - One position
    GET /instruments/{id}/                  - Instrument by id
    GET /instruments/?symbol=X              - Instrument search by symbol
    GET /quotes/{symbol}/                   - One quote
    GET /quotes/?symbols=A,B                - Several quotes
    GET /quotes/historicals/{symbol}/       - OHLCV bars
    GET /orders/                            - Orders (paginated)
    GET /orders/{id}/                       - One order
    GET /dividends/                         - Dividends (paginated)
    GET /watchlists/                        - Watchlists (paginated)
    GET /watchlists/{name}/                 - Items of one watchlist (paginated)
    GET /nummus/holdings/                   - Crypto holdings (paginated)
    GET /marketdata/forex/quotes/{id}/      - Crypto pair quote
    GET /user/                              - User profile
    GET /markets/                           - Exchanges (paginated)
    GET /markets/{market}/hours/{date}/     - Trading hours of one day
    GET /news/{symbol}/                     - News for a symbol (paginated)
    GET /documents/                         - Account documents (paginated)
"""

from typing import Any

import structlog

from robinhood_connector.core.result import Failure, Result, Success
from robinhood_connector.infrastructure.enums import ProviderErrorCode
from robinhood_connector.infrastructure.errors import (
    ProviderError,
    ProviderInvalidResponseError,
)
from robinhood_connector.infrastructure.providers.robinhood import endpoints
from robinhood_connector.infrastructure.providers.robinhood.client import (
    RobinhoodClient,
)

logger = structlog.get_logger(__name__)


class RobinhoodAPI:
    """Raw accessor for Robinhood REST resources.

    Returns raw JSON records (dicts with upstream field names).

    Attributes:
        _client: Client that owns the token lifecycle.

    Example:
        >>> api = RobinhoodAPI(client)
        >>> result = await api.get_positions()
        >>> match result:
        ...     case Success(value=positions):
        ...         print(f"Got {len(positions)} positions")
        ...     case Failure(error=error):
        ...         print(f"Error: {error.message}")
    """

    def __init__(self, client: RobinhoodClient) -> None:
        self._client = client

    # =========================================================================
    # Accounts
    # =========================================================================

    async def get_accounts(self) -> Result[list[dict[str, Any]], ProviderError]:
        """Fetch all brokerage accounts of the user."""
        return await self._client.paginate(endpoints.ACCOUNTS, operation="get_accounts")

    async def get_account(
        self, account_id: str
    ) -> Result[dict[str, Any], ProviderError]:
        """Fetch one account by account number."""
        return await self._client.get_object(
            endpoints.account_detail(account_id), operation="get_account"
        )

    async def get_portfolio(
        self, account_id: str
    ) -> Result[dict[str, Any], ProviderError]:
        """Fetch the portfolio summary (equity, market value) of an account."""
        return await self._client.get_object(
            endpoints.account_portfolio(account_id), operation="get_portfolio"
        )

    async def get_positions(
        self, *, nonzero: bool = True
    ) -> Result[list[dict[str, Any]], ProviderError]:
        """Fetch positions.

        Args:
            nonzero: Only positions with a non-zero quantity.
        """
        return await self._client.paginate(
            endpoints.POSITIONS,
            params={"nonzero": "true"} if nonzero else None,
            operation="get_positions",
        )

    async def get_position(
        self, position_id: str
    ) -> Result[dict[str, Any], ProviderError]:
        return await self._client.get_object(
            endpoints.position_detail(position_id), operation="get_position"
        )

    async def get_user_profile(self) -> Result[dict[str, Any], ProviderError]:
        return await self._client.get_object(
            endpoints.USER_PROFILE, operation="get_user_profile"
        )

    async def get_documents(self) -> Result[list[dict[str, Any]], ProviderError]:
        """List account documents (statements, trade confirmations, tax forms)."""
        return await self._client.paginate(endpoints.DOCUMENTS, operation="get_documents")

    # =========================================================================
    # Instruments
    # =========================================================================

    async def get_instrument(
        self, instrument_id: str
    ) -> Result[dict[str, Any], ProviderError]:
        """Fetch an instrument by its id."""
        return await self._client.get_object(
            endpoints.instrument_detail(instrument_id), operation="get_instrument"
        )

    async def get_instrument_by_url(
        self, url: str
    ) -> Result[dict[str, Any], ProviderError]:
        """Fetch an instrument by the URL embedded in positions and orders."""
        return await self._client.get_object(url, operation="get_instrument_by_url")

    async def get_instrument_by_symbol(
        self, symbol: str
    ) -> Result[dict[str, Any], ProviderError]:
        """Look up the instrument for a ticker symbol.

        Returns:
            Success(dict): First matching instrument.
            Failure(ProviderInvalidResponseError): No instrument matches
                (PROVIDER_RESOURCE_NOT_FOUND).
            Failure(ProviderError): Request failed.
        """
        result = await self._client.paginate(
            endpoints.INSTRUMENTS,
            params={"symbol": symbol.upper()},
            operation="get_instrument_by_symbol",
        )
        if isinstance(result, Failure):
            return result

        if not result.value:
            logger.warning("robinhood_instrument_not_found", symbol=symbol)
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ProviderErrorCode.PROVIDER_RESOURCE_NOT_FOUND,
                    message=f"Instrument not found for symbol: {symbol}",
                    provider_name="robinhood",
                )
            )
        return Success(value=result.value[0])

    # =========================================================================
    # Market Data
    # =========================================================================

    async def get_quote(self, symbol: str) -> Result[dict[str, Any], ProviderError]:
        """Fetch the latest quote for one symbol."""
        return await self._client.get_object(
            endpoints.quote_detail(symbol.upper()), operation="get_quote"
        )

    async def get_quotes(
        self, symbols: list[str]
    ) -> Result[list[dict[str, Any]], ProviderError]:
        """Fetch quotes for several symbols in one request.

        Upstream answers ``null`` for unknown symbols; pagination drops those
        entries.
        """
        return await self._client.paginate(
            endpoints.QUOTES,
            params={"symbols": ",".join(s.upper() for s in symbols)},
            operation="get_quotes",
        )

    async def get_historicals(
        self,
        symbol: str,
        *,
        interval: str = "day",
        span: str = "week",
    ) -> Result[dict[str, Any], ProviderError]:
        """Fetch OHLCV bars for one symbol.

        Args:
            symbol: Ticker symbol.
            interval: Bar size (5minute, 10minute, hour, day, week).
            span: Covered period (day, week, month, 3month, year, 5year).
        """
        return await self._client.get_object(
            endpoints.quote_historicals(symbol.upper()),
            params={"interval": interval, "span": span},
            operation="get_historicals",
        )

    async def get_markets(self) -> Result[list[dict[str, Any]], ProviderError]:
        return await self._client.paginate(endpoints.MARKETS, operation="get_markets")

    async def get_market_hours(
        self, market: str, day: str
    ) -> Result[dict[str, Any], ProviderError]:
        """Fetch trading hours of a market (MIC code) on a day (YYYY-MM-DD)."""
        return await self._client.get_object(
            endpoints.market_hours(market, day), operation="get_market_hours"
        )

    async def get_news(self, symbol: str) -> Result[list[dict[str, Any]], ProviderError]:
        """Fetch news articles for one symbol."""
        return await self._client.paginate(
            endpoints.news(symbol.upper()), operation="get_news"
        )

    # =========================================================================
    # Activity
    # =========================================================================

    async def get_orders(
        self, *, state: str | None = None
    ) -> Result[list[dict[str, Any]], ProviderError]:
        """Fetch orders, newest first, optionally filtered by state."""
        return await self._client.paginate(
            endpoints.ORDERS,
            params={"state": state} if state else None,
            operation="get_orders",
        )

    async def get_order(self, order_id: str) -> Result[dict[str, Any], ProviderError]:
        return await self._client.get_object(
            endpoints.order_detail(order_id), operation="get_order"
        )

    async def get_dividends(self) -> Result[list[dict[str, Any]], ProviderError]:
        return await self._client.paginate(endpoints.DIVIDENDS, operation="get_dividends")

    async def get_watchlists(self) -> Result[list[dict[str, Any]], ProviderError]:
        return await self._client.paginate(endpoints.WATCHLISTS, operation="get_watchlists")

    async def get_watchlist_items(
        self, url: str
    ) -> Result[list[dict[str, Any]], ProviderError]:
        """Fetch the items (instrument references) of one watchlist."""
        return await self._client.paginate(url, operation="get_watchlist_items")

    async def get_watchlist(
        self, name: str
    ) -> Result[list[dict[str, Any]], ProviderError]:
        """Fetch the items of a watchlist by name (e.g. "Default")."""
        return await self._client.paginate(
            endpoints.watchlist_detail(name), operation="get_watchlist"
        )

    async def get_crypto_holdings(self) -> Result[list[dict[str, Any]], ProviderError]:
        return await self._client.paginate(
            endpoints.CRYPTO_HOLDINGS, operation="get_crypto_holdings"
        )

    async def get_crypto_quote(
        self, currency_pair_id: str
    ) -> Result[dict[str, Any], ProviderError]:
        """Fetch the quote of a crypto currency pair (e.g. the BTC-USD pair id)."""
        return await self._client.get_object(
            endpoints.crypto_quote(currency_pair_id), operation="get_crypto_quote"
        )
