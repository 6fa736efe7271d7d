"""Error types for the Shopee partner API client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(str, Enum):
    """Kinds of Shopee client failures."""

    REMOTE_API = "remote_api"
    AUTH_EXCHANGE = "auth_exchange"
    PARSE = "parse"


class ErrorPhase(str, Enum):
    """Where a remote API call failed."""

    TRANSPORT = "transport"
    APPLICATION = "application"


@dataclass(frozen=True, slots=True)
class ShopeeError:
    """
    Error returned by Shopee client operations.

    Attributes:
        code: Kind of failure.
        message: Human-readable error message.
        path: API path of the failing call.
        phase: Transport (non-2xx, network) or application (``error`` in a 2xx body).
        details: Raw detail, e.g. the response body of a non-2xx response.
        status_code: HTTP status, when a response was received.
        remote_code: Shopee's own ``error`` value (e.g. ``error_param``).
        request_id: Shopee ``request_id``, useful when contacting support.
    """

    code: ErrorCode
    message: str
    path: str
    phase: ErrorPhase | None = None
    details: str | None = None
    status_code: int | None = None
    remote_code: str | None = None
    request_id: str | None = None

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.phase is not None:
            return f"[{self.path}] {self.code.value}/{self.phase.value}: {self.message}"
        return f"[{self.path}] {self.code.value}: {self.message}"

    @property
    def is_token_error(self) -> bool:
        """Check if Shopee rejected the access token (expired or invalid)."""
        if self.status_code in {401, 403}:
            return True
        return bool(self.remote_code) and (
            "auth" in self.remote_code or "token" in self.remote_code
        )


def RemoteApiError(
    path: str,
    phase: ErrorPhase,
    message: str,
    details: str | None = None,
    status_code: int | None = None,
    remote_code: str | None = None,
    request_id: str | None = None,
) -> ShopeeError:
    """Create a remote API error."""
    return ShopeeError(
        code=ErrorCode.REMOTE_API,
        message=message,
        path=path,
        phase=phase,
        details=details,
        status_code=status_code,
        remote_code=remote_code,
        request_id=request_id,
    )


def AuthExchangeError(
    path: str,
    message: str = "Token exchange failed",
    details: str | None = None,
    status_code: int | None = None,
    remote_code: str | None = None,
    request_id: str | None = None,
) -> ShopeeError:
    """Create an OAuth code/refresh exchange error."""
    return ShopeeError(
        code=ErrorCode.AUTH_EXCHANGE,
        message=message,
        path=path,
        details=details,
        status_code=status_code,
        remote_code=remote_code,
        request_id=request_id,
    )


def ParseError(
    path: str,
    message: str = "Failed to parse response",
    details: str | None = None,
) -> ShopeeError:
    """Create a parse error."""
    return ShopeeError(
        code=ErrorCode.PARSE,
        message=message,
        path=path,
        details=details,
    )
