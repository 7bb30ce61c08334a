"""Utilities package for safe-request."""

from __future__ import annotations

from .logger_manager import LoggerConfig, LoggerManager, MetricType

__all__ = [
    "LoggerConfig",
    "LoggerManager",
    "MetricType",
]
