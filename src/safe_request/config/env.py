"""Loads safe-request settings from the environment and `.env` files."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv

from safe_request.config.defaults import SAFE_REQUEST_DEFAULTS
from safe_request.errors import ConfigurationError
from safe_request.utilities.logger_manager import LoggerConfig

ENV_PREFIX = "SAFE_REQUEST_"
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class SafeRequestSettings:
    """Resolved settings for a SafeCaller and its logging."""

    log_level: str = str(SAFE_REQUEST_DEFAULTS["log_level"])
    structured_logging: bool = bool(SAFE_REQUEST_DEFAULTS["structured_logging"])
    telemetry_enabled: bool = bool(SAFE_REQUEST_DEFAULTS["telemetry_enabled"])
    unexpected_message: str = str(SAFE_REQUEST_DEFAULTS["unexpected_message"])

    def logger_config(self) -> LoggerConfig:
        return LoggerConfig(
            log_level=self.log_level,
            structured_logging=self.structured_logging,
            telemetry_enabled=self.telemetry_enabled,
        )


def load_environment(dotenv_path: str | Path | None = None) -> None:
    """Load a `.env` file when available; existing variables win."""
    path = Path(dotenv_path) if dotenv_path else Path(".env")
    if path.exists():
        load_dotenv(dotenv_path=path)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean flag, got {raw!r}")


def settings_from_env(environ: Mapping[str, str] | None = None) -> SafeRequestSettings:
    """Build settings from ``SAFE_REQUEST_*`` variables, falling back to defaults."""
    env = os.environ if environ is None else environ
    defaults = SafeRequestSettings()

    log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigurationError(f"Unknown log level: {log_level}")

    structured = defaults.structured_logging
    raw_structured = env.get(f"{ENV_PREFIX}STRUCTURED_LOGGING")
    if raw_structured is not None:
        structured = _parse_bool(f"{ENV_PREFIX}STRUCTURED_LOGGING", raw_structured)

    telemetry = defaults.telemetry_enabled
    raw_telemetry = env.get(f"{ENV_PREFIX}TELEMETRY")
    if raw_telemetry is not None:
        telemetry = _parse_bool(f"{ENV_PREFIX}TELEMETRY", raw_telemetry)

    message = env.get(f"{ENV_PREFIX}UNEXPECTED_MESSAGE", "").strip()
    return SafeRequestSettings(
        log_level=log_level,
        structured_logging=structured,
        telemetry_enabled=telemetry,
        unexpected_message=message or defaults.unexpected_message,
    )


__all__ = [
    "ENV_PREFIX",
    "SafeRequestSettings",
    "load_environment",
    "settings_from_env",
]
