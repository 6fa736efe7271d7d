"""Tests for Result pattern implementation."""

from __future__ import annotations

import pytest

from core.result import Failure, Result, Success, failure, success


def _parse_shop_id(raw: str) -> Result[int, str]:
    if not raw.isdigit():
        return Failure("shop_id must be numeric")
    return Success(int(raw))


class TestSuccess:
    """Tests for Success class."""

    def test_is_success_returns_true(self) -> None:
        """Success.is_success() should return True."""
        result = Success(42)

        assert result.is_success() is True
        assert result.is_failure() is False

    def test_unwrap_returns_value(self) -> None:
        """Success.unwrap() should return the contained value."""
        assert Success("item-1").unwrap() == "item-1"

    def test_unwrap_or_ignores_default(self) -> None:
        """Success.unwrap_or() should return the value, ignoring the default."""
        assert Success(100).unwrap_or(0) == 100

    def test_unwrap_or_else_does_not_call_fallback(self) -> None:
        """Success.unwrap_or_else() should not call the fallback."""
        calls: list[object] = []

        value = Success("copy").unwrap_or_else(lambda e: calls.append(e) or "fallback")

        assert value == "copy"
        assert calls == []

    def test_map_transforms_value(self) -> None:
        """Success.map() should transform the contained value."""
        assert Success(5).map(lambda x: x * 2) == Success(10)

    def test_map_error_returns_self(self) -> None:
        """Success.map_error() should return self unchanged."""
        result: Success[int] = Success(42)

        assert result.map_error(str) is result

    def test_and_then_chains(self) -> None:
        """Success.and_then() should return what the chained step returns."""
        assert Success("123").and_then(_parse_shop_id) == Success(123)
        assert Success("abc").and_then(_parse_shop_id) == Failure("shop_id must be numeric")


class TestFailure:
    """Tests for Failure class."""

    def test_is_failure_returns_true(self) -> None:
        """Failure.is_failure() should return True."""
        result = Failure("error")

        assert result.is_failure() is True
        assert result.is_success() is False

    def test_unwrap_raises_value_error(self) -> None:
        """Failure.unwrap() should raise ValueError."""
        with pytest.raises(ValueError, match="Cannot unwrap Failure"):
            Failure("something went wrong").unwrap()

    def test_unwrap_or_returns_default(self) -> None:
        """Failure.unwrap_or() should return the default."""
        assert Failure("error").unwrap_or(0) == 0

    def test_unwrap_or_else_receives_error(self) -> None:
        """Failure.unwrap_or_else() should compute the fallback from the error."""
        assert Failure("not json").unwrap_or_else(lambda e: f"raw: {e}") == "raw: not json"

    def test_map_returns_self(self) -> None:
        """Failure.map() should skip the function."""
        result = Failure("error")

        assert result.map(lambda x: x * 2) is result

    def test_map_error_transforms_error(self) -> None:
        """Failure.map_error() should transform the error."""
        assert Failure("boom").map_error(str.upper) == Failure("BOOM")

    def test_and_then_skips_step(self) -> None:
        """Failure.and_then() should not run the chained step."""
        result = Failure("first")

        assert result.and_then(_parse_shop_id) is result


class TestHelpers:
    """Tests for success/failure helper functions."""

    def test_success_helper(self) -> None:
        """success() should create a Success."""
        assert success(1) == Success(1)

    def test_failure_helper(self) -> None:
        """failure() should create a Failure."""
        assert failure("e") == Failure("e")

    def test_results_are_frozen(self) -> None:
        """Results should be immutable."""
        result = Success(1)

        with pytest.raises(AttributeError):
            result.value = 2  # type: ignore[misc]
