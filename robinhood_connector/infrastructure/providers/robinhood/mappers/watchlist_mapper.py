"""Robinhood watchlist mapper.

Robinhood Watchlist Response Structure (GET /watchlists/):
    {
        "url": "https://api.robinhood.com/watchlists/Default/",
        "name": "Default",
        "user": "https://api.robinhood.com/user/"
    }

Watchlist items are fetched separately; the provider resolves them to
symbols and passes them in.
"""

from collections.abc import Sequence
from typing import Any

from robinhood_connector.domain.models import StandardizedWatchlist
from robinhood_connector.infrastructure.providers.robinhood.mappers.parsing import (
    parse_datetime,
    utc_now,
)


class RobinhoodWatchlistMapper:
    """Mapper for Robinhood watchlists."""

    def map_watchlist(
        self,
        watchlist: dict[str, Any],
        symbols: Sequence[str] = (),
    ) -> StandardizedWatchlist:
        url = watchlist.get("url")
        name = str(watchlist.get("display_name") or watchlist.get("name") or "")
        updated_at = parse_datetime(watchlist.get("updated_at"))

        return StandardizedWatchlist(
            id=str(url or name),
            name=name,
            symbols=tuple(symbols),
            created_at=parse_datetime(watchlist.get("created_at")),
            updated_at=updated_at,
            url=url,
            last_updated=updated_at or utc_now(),
        )
