"""
Result pattern for explicit error handling.

Service calls in this project never raise for expected failures (a remote
API rejecting a request, a token exchange failing, a model answering with
something that is not JSON). They return either a ``Success`` or a
``Failure`` and let the caller decide what to do.

Example:
    >>> def parse_shop_id(raw: str) -> Result[int, str]:
    ...     if not raw.isdigit():
    ...         return Failure("shop_id must be numeric")
    ...     return Success(int(raw))
    ...
    >>> parse_shop_id("12345").unwrap()
    12345
    >>> parse_shop_id("abc").unwrap_or(0)
    0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Never

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True, slots=True)
class Success[T]:
    """
    A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def is_success(self) -> bool:
        """Return True."""
        return True

    def is_failure(self) -> bool:
        """Return False."""
        return False

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value

    def unwrap_or(self, _default: T) -> T:
        """Return the contained value, ignoring the default."""
        return self.value

    def unwrap_or_else[E](self, _func: Callable[[E], T]) -> T:
        """Return the contained value without calling the fallback."""
        return self.value

    def map[U](self, func: Callable[[T], U]) -> Success[U]:
        """
        Apply a function to the contained value.

        Args:
            func: Function to apply.

        Returns:
            New Success wrapping the function's return value.
        """
        return Success(func(self.value))

    def map_error[E, U](self, _func: Callable[[E], U]) -> Success[T]:
        """Return self unchanged."""
        return self

    def and_then[U, E](self, func: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """
        Chain another fallible step onto this result.

        Args:
            func: Function receiving the value and returning a new Result.

        Returns:
            Whatever ``func`` returns.
        """
        return func(self.value)


@dataclass(frozen=True, slots=True)
class Failure[E]:
    """
    A failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def is_success(self) -> bool:
        """Return False."""
        return False

    def is_failure(self) -> bool:
        """Return True."""
        return True

    def unwrap(self) -> Never:
        """
        Raise, since a Failure has no value.

        Raises:
            ValueError: Always.
        """
        raise ValueError(f"Cannot unwrap Failure: {self.error}")

    def unwrap_or[T](self, default: T) -> T:
        """Return the default."""
        return default

    def unwrap_or_else[T](self, func: Callable[[E], T]) -> T:
        """
        Compute a fallback value from the error.

        Args:
            func: Function receiving the error.

        Returns:
            The function's return value.
        """
        return func(self.error)

    def map[T, U](self, _func: Callable[[T], U]) -> Failure[E]:
        """Return self unchanged."""
        return self

    def map_error[U](self, func: Callable[[E], U]) -> Failure[U]:
        """
        Apply a function to the error.

        Args:
            func: Function to apply.

        Returns:
            New Failure wrapping the mapped error.
        """
        return Failure(func(self.error))

    def and_then[T, U](self, _func: Callable[[T], Result[U, E]]) -> Failure[E]:
        """Return self unchanged; the chained step is skipped."""
        return self


type Result[T, E] = Success[T] | Failure[E]


def success[T](value: T) -> Success[T]:
    """Create a Success result."""
    return Success(value)


def failure[E](error: E) -> Failure[E]:
    """Create a Failure result."""
    return Failure(error)
