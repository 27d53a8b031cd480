"""Standardized error returned by every failed provider operation.

Architecture:
- Inherits from DomainError (core layer)
- Carries one code from the closed ErrorCode taxonomy
- Provenance-tagged like every standardized record (source + timestamp)
- The underlying ProviderError, if any, is kept opaque in details["cause"]

Usage:
    match await provider.get_portfolio():
        case Failure(error=StandardizedError(code=ErrorCode.PORTFOLIO_FETCH_FAILED)):
            ...
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from robinhood_connector.core.constants import SOURCE_TAG
from robinhood_connector.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class StandardizedError(DomainError):
    """Vendor-neutral error shape for the aggregation platform.

    Attributes:
        code: ErrorCode naming the failed operation.
        message: Human-readable message.
        details: Opaque context; "cause" holds the original error.
        timestamp: When the failure was converted (UTC).
        source: Integration name.
    """

    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    source: str = SOURCE_TAG

    @property
    def cause(self) -> object | None:
        """Original error wrapped by this standardized error, if any."""
        if self.details is None:
            return None
        return self.details.get("cause")
