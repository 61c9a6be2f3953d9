"""
Result type for factories that validate their input.

Value-object factories return ``Success`` with the built object or
``Failure`` with the domain error that rejected it, so callers can branch
on the outcome without exception handling:

    >>> result = ProviderLoad.try_create("PRV-1", "COPPER", 100, 5)
    >>> if result.is_success():
    ...     load = result.value
"""

from abc import ABC, abstractmethod
from typing import Generic, NoReturn, TypeVar

from .exceptions import DomainError

T = TypeVar("T")
E = TypeVar("E", bound=DomainError)


class Result(Generic[T, E], ABC):
    """Outcome of a validated construction."""

    @abstractmethod
    def is_success(self) -> bool:
        """Check if result represents success."""
        pass

    def is_failure(self) -> bool:
        """Check if result represents failure."""
        return not self.is_success()

    @abstractmethod
    def unwrap(self) -> T:
        """Return the value or raise the carried error."""
        pass


class Success(Result[T, E]):
    """Success result containing a value."""

    def __init__(self, value: T) -> None:
        self.value = value

    def is_success(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


class Failure(Result[T, E]):
    """Failure result containing an error."""

    def __init__(self, error: E) -> None:
        self.error = error

    def is_success(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise self.error

    def __repr__(self) -> str:
        return f"Failure({self.error!r})"
