"""Explicit default settings for safe-request."""

from __future__ import annotations

from safe_request.constants import UNEXPECTED_ERROR_MESSAGE

SAFE_REQUEST_DEFAULTS: dict[str, object] = {
    "log_level": "INFO",
    "structured_logging": False,
    "telemetry_enabled": True,
    "unexpected_message": UNEXPECTED_ERROR_MESSAGE,
}
