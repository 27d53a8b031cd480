"""Result types for railway-oriented programming.

Every layer of the connector reports expected failures as values instead of
raising: the transport returns ``Failure(ProviderError)``, the provider facade
returns ``Failure(StandardizedError)``.

Usage:
    result = await provider.get_balance()
    match result:
        case Success(value=balance):
            print(f"Cash: {balance.cash_balance}")
        case Failure(error=error):
            print(f"{error.code.name}: {error.message}")
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


Result: TypeAlias = Success[T] | Failure[E]
