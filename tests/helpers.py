"""Shared test constants and helpers."""

from __future__ import annotations

import hashlib
import hmac
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable

PARTNER_ID = 2001234
PARTNER_KEY = "test-partner-key"
ACCESS_TOKEN = "test-access-token"
SHOP_ID = 98765


def expected_sign(base_string: str, key: str = PARTNER_KEY) -> str:
    """Recompute a Shopee signature independently of the code under test."""
    return hmac.new(key.encode(), base_string.encode(), hashlib.sha256).hexdigest()


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    @property
    def last(self) -> httpx.Request:
        """Return the most recent request."""
        return self.requests[-1]


def json_response(data: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    """Return a handler answering every request with the same JSON body."""

    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=data)

    return handler
