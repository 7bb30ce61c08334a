"""Logger manager with colored console output, JSON records, and outcome counters.

Every safe call logs through a ``CustomLogger`` obtained from a
``LoggerManager``. Structured context travels in ``extra={"context": {...}}``
and can also be scoped with ``LoggerManager.context(**fields)``, which is
task-local so concurrent calls do not leak fields into each other.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
import datetime
from enum import Enum
import json
import logging
from logging import Handler, Logger, LogRecord, getLevelName
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys
import threading
from types import MappingProxyType
from typing import Any, ClassVar

import colorlog

_EMPTY_CONTEXT: Mapping[str, Any] = MappingProxyType({})
_LOG_CONTEXT: ContextVar[Mapping[str, Any]] = ContextVar(
    "safe_request_log_context", default=_EMPTY_CONTEXT
)


class MetricType(Enum):
    """Supported metric types."""

    COUNTER = "counter"
    GAUGE = "gauge"


@dataclass
class LoggerConfig:
    """Configuration for LoggerManager."""

    log_level: str = "INFO"
    log_dir: Path | None = None
    log_file_name: str = "safe_request.log"
    max_file_size_mb: int = 10
    backup_count: int = 3
    structured_logging: bool = False
    telemetry_enabled: bool = True
    log_colors: dict[str, str] | None = None

    DEFAULT_LOG_COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "red,bg_white",
    }

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if self.log_dir is not None:
            self.log_dir = Path(self.log_dir).resolve()
            self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_colors = self.log_colors or self.DEFAULT_LOG_COLORS


class ContextFilter(logging.Filter):
    """Merge the task-local log context into each record's ``context``."""

    def filter(self, record: LogRecord) -> bool:
        scoped = _LOG_CONTEXT.get()
        explicit = getattr(record, "context", None)
        merged = dict(scoped)
        if isinstance(explicit, Mapping):
            merged.update(explicit)
        record.context = merged
        return True


class LoggerSettings:
    """Builds handlers according to a LoggerConfig."""

    def __init__(self, config: LoggerConfig) -> None:
        self.config = config

    def get_handlers(self) -> list[Handler]:
        handlers = [self._get_console_handler()]
        file_handler = self._get_file_handler()
        if file_handler is not None:
            handlers.append(file_handler)
        for handler in handlers:
            handler.addFilter(ContextFilter())
        return handlers

    def _get_console_handler(self) -> Handler:
        handler = colorlog.StreamHandler(sys.stderr)
        formatter: logging.Formatter
        if self.config.structured_logging:
            formatter = self._get_structured_formatter()
        else:
            formatter = colorlog.ColoredFormatter(
                "%(log_color)s%(asctime)s - [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                log_colors=self.config.log_colors,
            )
        handler.setFormatter(formatter)
        return handler

    def _get_file_handler(self) -> Handler | None:
        if self.config.log_dir is None:
            return None
        log_path = Path(self.config.log_dir) / self.config.log_file_name
        try:
            handler = RotatingFileHandler(
                log_path,
                maxBytes=self.config.max_file_size_mb * 1024 * 1024,
                backupCount=self.config.backup_count,
                encoding="utf-8",
            )
        except OSError as e:
            print(f"Failed to create RotatingFileHandler: {e}", file=sys.stderr)
            return None
        handler.setFormatter(self._get_structured_formatter())
        return handler

    @staticmethod
    def _get_structured_formatter() -> logging.Formatter:
        """JSON formatter; one object per line."""

        class StructuredFormatter(logging.Formatter):
            def format(self, record: LogRecord) -> str:
                log_data: dict[str, Any] = {
                    "timestamp": datetime.datetime.fromtimestamp(
                        record.created
                    ).isoformat(),
                    "level": record.levelname,
                    "name": record.name,
                    "message": record.getMessage(),
                    "module": record.module,
                    "line": record.lineno,
                    "context": getattr(record, "context", {}),
                }
                if record.exc_info:
                    log_data["exception"] = self.formatException(record.exc_info)
                return json.dumps(log_data, ensure_ascii=False, default=str)

        return StructuredFormatter()


class CustomLogger:
    """Thin wrapper over a stdlib logger that knows its manager."""

    def __init__(self, logger: Logger, manager: LoggerManager) -> None:
        self.logger = logger
        self.manager = manager

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.logger.critical(msg, *args, **kwargs)

    @contextmanager
    def context(self, **context_kwargs: Any) -> Iterator[CustomLogger]:
        with self.manager.context(**context_kwargs):
            yield self


class LoggerManager:
    """Owns one configured logger plus a small in-process metric registry."""

    def __init__(
        self,
        name: str | LoggerConfig = "safe_request",
        config: LoggerConfig | None = None,
    ) -> None:
        if isinstance(name, LoggerConfig):
            config = name
            name = "safe_request"
        self.name = name
        explicit = config is not None
        self.config = config or LoggerConfig()
        self.settings = LoggerSettings(self.config)
        self._metrics: dict[str, dict[str, Any]] = defaultdict(
            lambda: {"type": MetricType.COUNTER.value, "value": 0, "tags": {}}
        )
        self._metrics_lock = threading.Lock()
        self._logger = self._configure_logger(reconfigure=explicit)

    def get_logger(self) -> CustomLogger:
        return CustomLogger(self._logger, self)

    def _configure_logger(self, reconfigure: bool = False) -> Logger:
        """Configure the named logger once; an explicit config replaces ours.

        Handlers attached by callers (test capture handlers, for instance) are
        left in place; only handlers this class installed are swapped.
        """
        logger = logging.getLogger(self.name)
        if getattr(logger, "_is_configured", False) and not reconfigure:
            return logger

        for handler in list(logger.handlers):
            if getattr(handler, "_safe_request_owned", False):
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(getLevelName(self.config.log_level))
        for handler in self.settings.get_handlers():
            handler._safe_request_owned = True  # type: ignore[attr-defined]
            logger.addHandler(handler)
        logger.propagate = False
        logger._is_configured = True  # type: ignore[attr-defined]
        return logger

    @contextmanager
    def context(self, **context_kwargs: Any) -> Iterator[Logger]:
        """Attach ``context_kwargs`` to every record logged inside the block."""
        merged = {**_LOG_CONTEXT.get(), **context_kwargs}
        token = _LOG_CONTEXT.set(MappingProxyType(merged))
        try:
            yield self._logger
        finally:
            _LOG_CONTEXT.reset(token)

    def log_metric(
        self,
        metric_name: str,
        value: int | float,
        metric_type: MetricType = MetricType.COUNTER,
        tags: Mapping[str, str] | None = None,
    ) -> None:
        if not self.config.telemetry_enabled:
            return

        tags_dict = dict(tags or {})
        with self._metrics_lock:
            metric = self._metrics[metric_name]
            metric["type"] = metric_type.value
            metric["tags"] = tags_dict
            if metric_type == MetricType.COUNTER:
                metric["value"] += value
            else:
                metric["value"] = value

        self._logger.debug(
            f"Metric recorded: {metric_name} = {value}",
            extra={"context": {"metric": metric_name, "tags": tags_dict}},
        )

    def get_metrics(self) -> dict[str, dict[str, Any]]:
        with self._metrics_lock:
            return {name: dict(data) for name, data in self._metrics.items()}

    def metric_value(self, metric_name: str) -> int | float:
        with self._metrics_lock:
            metric = self._metrics.get(metric_name)
            return metric["value"] if metric else 0

    def reset_metrics(self) -> None:
        with self._metrics_lock:
            self._metrics.clear()
        self._logger.debug("Telemetry metrics reset")

    def flush(self) -> None:
        for handler in self._logger.handlers:
            handler.flush()


__all__ = [
    "MetricType",
    "LoggerConfig",
    "LoggerSettings",
    "CustomLogger",
    "LoggerManager",
]
