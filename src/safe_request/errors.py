"""Exception hierarchy for safe-request."""

from __future__ import annotations

from typing import Any


class SafeRequestError(RuntimeError):
    """Base class for errors raised by the library itself."""


class ConfigurationError(SafeRequestError):
    """Raised when settings or expected-error maps are malformed."""


class HttpStatusError(SafeRequestError):
    """Transport failure carrying the HTTP status of the response.

    For transports other than aiohttp: raise this from an operation so the
    caller can classify the failure by ``status``.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None,
        url: str | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.url = url
        self.payload = payload

    def __str__(self) -> str:
        base = super().__str__()
        if self.status is None:
            return base
        return f"{base} (HTTP {self.status})"


__all__ = ["SafeRequestError", "ConfigurationError", "HttpStatusError"]
