"""Robinhood account mapper.

Converts Robinhood account and portfolio JSON into StandardizedAccount,
StandardizedBalance and StandardizedPortfolio.

Robinhood Account Response Structure (GET /accounts/):
    {
        "url": "https://api.robinhood.com/accounts/5QR12345/",
        "account_number": "5QR12345",
        "type": "margin",
        "brokerage_account_type": "individual",
        "deactivated": false,
        "buying_power": "2500.0000",
        "option_level": "option_level_2",
        "cash_balances": null,
        "margin_balances": {
            "cash": "1200.0000",
            "unsettled_funds": "0.0000",
            "uncleared_deposits": "100.0000",
            "margin_limit": "5000.0000"
        },
        "created_at": "2019-03-01T15:12:08.123456Z",
        "updated_at": "2024-01-05T14:00:00.000000Z"
    }

Cash accounts carry ``cash_balances`` with the same keys instead of
``margin_balances``.

Robinhood Portfolio Response Structure (GET /accounts/{id}/portfolio/):
    {
        "market_value": "15000.0000",
        "equity": "16200.0000",
        "last_core_equity": "16000.0000",
        "equity_previous_close": "16000.0000"
    }
"""

from collections.abc import Sequence
from typing import Any

import structlog

from robinhood_connector.domain.enums import (
    AccountStatus,
    AccountType,
    PortfolioAccountType,
)
from robinhood_connector.domain.models import (
    StandardizedAccount,
    StandardizedBalance,
    StandardizedPortfolio,
    StandardizedPosition,
    TradingPermissions,
)
from robinhood_connector.infrastructure.providers.robinhood.mappers.parsing import (
    ZERO,
    last_updated,
    parse_datetime,
    parse_decimal,
    percent,
    utc_now,
)

logger = structlog.get_logger(__name__)


# =============================================================================
# Account Type Mapping
# =============================================================================

# Robinhood type / brokerage_account_type → standardized account type
ROBINHOOD_ACCOUNT_TYPE_MAP: dict[str, AccountType] = {
    "cash": AccountType.CASH,
    "margin": AccountType.MARGIN,
    "individual": AccountType.INDIVIDUAL,
    "joint": AccountType.JOINT,
    "ira_traditional": AccountType.IRA,
    "ira_roth": AccountType.ROTH_IRA,
}

RETIREMENT_ACCOUNT_TYPES = frozenset({AccountType.IRA, AccountType.ROTH_IRA})


class RobinhoodAccountMapper:
    """Mapper for Robinhood account, balance and portfolio data.

    Thread-safe: No mutable state, can be shared across requests.

    Example:
        >>> mapper = RobinhoodAccountMapper()
        >>> balance = mapper.map_balance(account_json)
        >>> balance.cash_balance
        Decimal('1200.0000')
    """

    def map_account(self, data: dict[str, Any]) -> StandardizedAccount:
        """Map a Robinhood account to StandardizedAccount.

        Args:
            data: Account object from GET /accounts/.

        Returns:
            StandardizedAccount. Unknown account types map to cash.
        """
        account_type = self._map_account_type(data)
        url = data.get("url")

        return StandardizedAccount(
            id=url or str(data.get("account_number") or ""),
            account_number=str(data.get("account_number") or ""),
            type=account_type,
            status=self._map_status(data),
            opened_date=parse_datetime(data.get("created_at")),
            is_primary=True,
            trading_permissions=TradingPermissions(),
            margin_enabled=data.get("type") == "margin",
            options_level=self._parse_options_level(data.get("option_level")),
            url=url,
            last_updated=last_updated(data.get("updated_at")),
        )

    def map_balance(self, data: dict[str, Any]) -> StandardizedBalance:
        """Map the cash figures of a Robinhood account to StandardizedBalance.

        Args:
            data: Account object from GET /accounts/.

        Returns:
            StandardizedBalance. ``margin_balance`` is set only for margin
            accounts.
        """
        balances = self._balances(data)
        is_margin = data.get("type") == "margin"
        margin_balances = data.get("margin_balances") or {}

        return StandardizedBalance(
            account_id=str(data.get("account_number") or ""),
            cash_balance=parse_decimal(balances.get("cash")),
            unsettled_cash=parse_decimal(balances.get("unsettled_funds")),
            buying_power=parse_decimal(data.get("buying_power")),
            pending_deposits=parse_decimal(balances.get("uncleared_deposits")),
            pending_withdrawals=ZERO,
            margin_balance=(
                parse_decimal(margin_balances.get("margin_limit")) if is_margin else None
            ),
            last_updated=last_updated(data.get("updated_at")),
        )

    def map_portfolio(
        self,
        account: dict[str, Any],
        portfolio: dict[str, Any],
        positions: Sequence[StandardizedPosition],
    ) -> StandardizedPortfolio:
        """Combine account, portfolio summary and mapped positions.

        Args:
            account: Account object from GET /accounts/.
            portfolio: Portfolio object from GET /accounts/{id}/portfolio/.
            positions: Positions already mapped for this account.

        Returns:
            StandardizedPortfolio. Total gain/loss is summed over
            ``positions``; its percent is taken over their summed cost basis.
        """
        equity = parse_decimal(portfolio.get("equity"))
        previous_equity = parse_decimal(
            portfolio.get("last_core_equity") or portfolio.get("equity_previous_close")
        )
        day_change = equity - previous_equity

        total_gain_loss = sum((p.total_gain_loss for p in positions), ZERO)
        total_cost_basis = sum((p.cost_basis for p in positions), ZERO)
        account_number = str(account.get("account_number") or "")

        return StandardizedPortfolio(
            id=account_number,
            account_number=account_number,
            account_type=(
                PortfolioAccountType.MARGIN
                if account.get("type") == "margin"
                else PortfolioAccountType.CASH
            ),
            total_value=parse_decimal(portfolio.get("market_value")),
            equity=equity,
            cash_balance=parse_decimal(self._balances(account).get("cash")),
            buying_power=parse_decimal(account.get("buying_power")),
            day_change=day_change,
            day_change_percent=percent(day_change, previous_equity),
            total_gain_loss=total_gain_loss,
            total_gain_loss_percent=percent(total_gain_loss, total_cost_basis),
            positions=tuple(positions),
            last_updated=utc_now(),
        )

    def _balances(self, data: dict[str, Any]) -> dict[str, Any]:
        # Margin accounts report cash under margin_balances
        return data.get("cash_balances") or data.get("margin_balances") or {}

    def _map_account_type(self, data: dict[str, Any]) -> AccountType:
        """Resolve the account type.

        Retirement types from ``brokerage_account_type`` win over the
        cash/margin ``type``; anything unrecognized maps to cash.
        """
        brokerage_type = ROBINHOOD_ACCOUNT_TYPE_MAP.get(
            str(data.get("brokerage_account_type") or "").lower()
        )
        if brokerage_type in RETIREMENT_ACCOUNT_TYPES:
            return brokerage_type

        account_type = ROBINHOOD_ACCOUNT_TYPE_MAP.get(str(data.get("type") or "").lower())
        if account_type is not None:
            return account_type

        if brokerage_type is None:
            logger.debug(
                "robinhood_unknown_account_type",
                type=data.get("type"),
                brokerage_account_type=data.get("brokerage_account_type"),
            )
        return brokerage_type or AccountType.CASH

    def _map_status(self, data: dict[str, Any]) -> AccountStatus:
        if data.get("permanently_deactivated"):
            return AccountStatus.CLOSED
        if data.get("deactivated"):
            return AccountStatus.INACTIVE
        if data.get("withdrawal_halted") or data.get("deposit_halted"):
            return AccountStatus.RESTRICTED
        return AccountStatus.ACTIVE

    def _parse_options_level(self, value: Any) -> int:
        """Parse "option_level_2" to 2; anything else is 0."""
        if not value or not isinstance(value, str):
            return 0
        suffix = value.rsplit("_", 1)[-1]
        return int(suffix) if suffix.isdigit() else 0

