"""Detect status-bearing failures and resolve them against expected-error maps."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from aiohttp import ClientResponseError

from safe_request.errors import ConfigurationError, HttpStatusError

ExpectedErrorMap = Mapping[int, str]

_RESPONSE_STATUS_ATTRS = ("status", "status_code")


def _as_status(value: Any) -> int | None:
    # bool is an int subclass; True must never match key 1
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    # aiohttp stores a missing status as 0
    if value <= 0:
        return None
    return value


def describe_failure(failure: BaseException) -> str:
    """``repr(failure)``, or just its type name when ``__repr__`` itself fails."""
    try:
        return repr(failure)
    except Exception:
        return f"<{type(failure).__name__}>"


def response_status(failure: BaseException) -> int | None:
    """Return the HTTP status carried by ``failure``, or ``None``.

    Recognised carriers are aiohttp's ``ClientResponseError``, our own
    ``HttpStatusError`` and any failure whose ``response`` attribute exposes
    ``status`` or ``status_code`` (requests and httpx errors look like this).
    A carrier whose attributes raise on access counts as having no status.
    """
    try:
        if isinstance(failure, (ClientResponseError, HttpStatusError)):
            return _as_status(failure.status)
        response = getattr(failure, "response", None)
        if response is None:
            return None
        for attr in _RESPONSE_STATUS_ATTRS:
            status = _as_status(getattr(response, attr, None))
            if status is not None:
                return status
    except Exception:
        return None
    return None


def lookup_expected(
    status: int | None, expected_errors: ExpectedErrorMap | None
) -> str | None:
    """Return the registered message for ``status``; key presence is the only gate."""
    if status is None or not expected_errors:
        return None
    if status not in expected_errors:
        return None
    message = expected_errors[status]
    return message if isinstance(message, str) else str(message)


def validate_expected_errors(mapping: Mapping[Any, Any]) -> dict[int, str]:
    """Strictly validate a map loaded from configuration.

    Raises:
        ConfigurationError: non-integer or out-of-range codes, or blank messages.
    """
    if not isinstance(mapping, Mapping):
        raise ConfigurationError(
            f"Expected errors must be a mapping, got {type(mapping).__name__}"
        )
    validated: dict[int, str] = {}
    for code, message in mapping.items():
        status = _as_status(code)
        if status is None:
            raise ConfigurationError(f"Status code must be an integer: {code!r}")
        if not 100 <= status <= 599:
            raise ConfigurationError(f"Status code out of range: {status}")
        if not isinstance(message, str) or not message.strip():
            raise ConfigurationError(
                f"Message for status {status} must be a non-empty string"
            )
        validated[status] = message
    return validated


__all__ = [
    "ExpectedErrorMap",
    "describe_failure",
    "response_status",
    "lookup_expected",
    "validate_expected_errors",
]
