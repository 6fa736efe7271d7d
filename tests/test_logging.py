"""Tests for structured logging configuration."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
import structlog

from core.logging import (
    REDACTED,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    redact_credentials,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Reconfigure logging on the real stdout once capsys is gone."""
    yield
    structlog.reset_defaults()
    configure_logging()


class TestRedactCredentials:
    """Tests for the credential redaction processor."""

    def test_masks_top_level_tokens(self) -> None:
        """Token values should be masked."""
        event = redact_credentials(
            None,
            "info",
            {"event": "x", "access_token": "tok", "refresh_token": "ref", "shop_id": 1},
        )

        assert event["access_token"] == REDACTED
        assert event["refresh_token"] == REDACTED
        assert event["shop_id"] == 1

    def test_masks_nested_mappings(self) -> None:
        """Credentials inside logged dicts (query params) should be masked."""
        event = redact_credentials(
            None,
            "info",
            {"event": "x", "params": {"partner_id": "1", "sign": "abc", "code": "c0de"}},
        )

        assert event["params"] == {"partner_id": "1", "sign": REDACTED, "code": REDACTED}

    def test_masks_inside_lists(self) -> None:
        """Credentials inside lists of dicts should be masked."""
        event = redact_credentials(None, "info", {"event": "x", "items": [{"api_key": "k"}]})

        assert event["items"] == [{"api_key": REDACTED}]

    def test_keeps_empty_values_visible(self) -> None:
        """An empty token should stay visible so "missing" is diagnosable."""
        event = redact_credentials(None, "info", {"event": "x", "access_token": ""})

        assert event["access_token"] == ""


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_json_output_is_redacted(self, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON log lines should never contain credential values."""
        structlog.reset_defaults()
        configure_logging(json_format=True, log_level="INFO")

        get_logger("test").info("token obtained", access_token="secret-token", shop_id=5)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        data = json.loads(line)
        assert data["access_token"] == REDACTED
        assert data["shop_id"] == 5
        assert "secret-token" not in line

    def test_json_output_keeps_non_ascii(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Chinese listing text should be written as-is."""
        structlog.reset_defaults()
        configure_logging(json_format=True)

        get_logger("test").info("listing", title="藍牙耳機")

        assert "藍牙耳機" in capsys.readouterr().out

    def test_configure_logging_console(self) -> None:
        """configure_logging should work with console output."""
        configure_logging(log_level="DEBUG")

        assert get_logger("test.module") is not None


class TestContext:
    """Tests for context binding."""

    def test_bind_context(self) -> None:
        """bind_context should add context variables."""
        clear_context()
        bind_context(request_id="abc-123")

        ctx = structlog.contextvars.get_contextvars()
        assert ctx["request_id"] == "abc-123"

        clear_context()

    def test_clear_context(self) -> None:
        """clear_context should remove all context variables."""
        bind_context(path="/api/upload/")
        clear_context()

        assert structlog.contextvars.get_contextvars() == {}
