"""Configuration entry points for safe-request."""

from __future__ import annotations

from safe_request.config.defaults import SAFE_REQUEST_DEFAULTS
from safe_request.config.env import (
    SafeRequestSettings,
    load_environment,
    settings_from_env,
)
from safe_request.config.loader import load_expected_errors

__all__ = [
    "SAFE_REQUEST_DEFAULTS",
    "SafeRequestSettings",
    "load_environment",
    "settings_from_env",
    "load_expected_errors",
]
