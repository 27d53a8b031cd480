"""Robinhood REST endpoint paths.

Paths are relative to the configured base URL. Query strings are passed as
httpx params by the API layer, not baked into the paths.
"""

# Authentication
LOGIN = "/api-token-auth/"
REFRESH = "/oauth/token/"

# Accounts
ACCOUNTS = "/accounts/"
POSITIONS = "/positions/"
ORDERS = "/orders/"
DIVIDENDS = "/dividends/"
WATCHLISTS = "/watchlists/"
USER_PROFILE = "/user/"
DOCUMENTS = "/documents/"

# Market data
INSTRUMENTS = "/instruments/"
QUOTES = "/quotes/"
MARKETS = "/markets/"

# Crypto
CRYPTO_HOLDINGS = "/nummus/holdings/"


def position_detail(position_id: str) -> str:
    return f"/positions/{position_id}/"


def watchlist_detail(name: str) -> str:
    return f"/watchlists/{name}/"


def crypto_quote(currency_pair_id: str) -> str:
    return f"/marketdata/forex/quotes/{currency_pair_id}/"


def news(symbol: str) -> str:
    return f"/news/{symbol}/"


def account_detail(account_id: str) -> str:
    return f"/accounts/{account_id}/"


def account_portfolio(account_id: str) -> str:
    return f"/accounts/{account_id}/portfolio/"


def instrument_detail(instrument_id: str) -> str:
    return f"/instruments/{instrument_id}/"


def order_detail(order_id: str) -> str:
    return f"/orders/{order_id}/"


def quote_detail(symbol: str) -> str:
    return f"/quotes/{symbol}/"


def quote_historicals(symbol: str) -> str:
    return f"/quotes/historicals/{symbol}/"


def market_hours(market: str, day: str) -> str:
    return f"/markets/{market}/hours/{day}/"
