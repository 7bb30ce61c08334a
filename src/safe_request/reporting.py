"""Reporting sinks notified of unexpected failures.

A sink stands in for an error tracker. Delivery is fire-and-forget: the safe
caller never waits for a sink and a failing sink never changes an outcome.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import inspect
from typing import Any, Protocol

from safe_request.classification import describe_failure
from safe_request.utilities.logger_manager import CustomLogger, LoggerManager


class ReportingSink(Protocol):
    """Anything with a ``notify(failure)`` method; may return an awaitable.

    ``notify`` itself runs inline before the outcome is returned, so a slow
    synchronous sink delays the caller. Sinks that deliver over the network
    should return a coroutine instead; it is scheduled as a task and never
    awaited by the caller.
    """

    def notify(self, failure: BaseException) -> Awaitable[None] | None: ...


class LoggingSink:
    """Sink that writes the failure and its traceback to the error log."""

    def __init__(self, logger_manager: LoggerManager | None = None) -> None:
        self.logger_manager = logger_manager or LoggerManager()
        self.logger = self.logger_manager.get_logger()

    def notify(self, failure: BaseException) -> None:
        self.logger.error(
            f"Reported failure: {describe_failure(failure)}",
            exc_info=(type(failure), failure, failure.__traceback__),
            extra={"context": {"sink": "logging"}},
        )


class CallbackSink:
    """Adapt a plain callable (sync or async) to the sink protocol."""

    def __init__(self, callback: Callable[[BaseException], Any]) -> None:
        self._callback = callback

    def notify(self, failure: BaseException) -> Awaitable[None] | None:
        result = self._callback(failure)
        if inspect.isawaitable(result):
            return result
        return None


def _on_report_done(task: asyncio.Task[Any], logger: CustomLogger) -> None:
    if task.cancelled():
        logger.warning("Failure report was cancelled before delivery")
        return
    error = task.exception()
    if error is not None:
        logger.error(
            f"Reporting sink failed asynchronously: {describe_failure(error)}",
            extra={"context": {"stage": "report"}},
        )


def dispatch_report(
    sink: ReportingSink,
    failure: BaseException,
    logger: CustomLogger,
    pending: set[asyncio.Task[Any]],
) -> asyncio.Task[Any] | None:
    """Hand ``failure`` to ``sink`` without waiting on it or letting it raise.

    Awaitables returned by the sink are scheduled as tasks and tracked in
    ``pending`` until they finish.
    """
    try:
        result = sink.notify(failure)
    except Exception as e:
        logger.error(
            f"Reporting sink failed: {describe_failure(e)}",
            extra={"context": {"stage": "report"}},
        )
        return None
    if not inspect.isawaitable(result):
        return None

    try:
        loop = asyncio.get_running_loop()
        task = asyncio.ensure_future(result, loop=loop)
    except (RuntimeError, TypeError) as e:
        logger.error(
            f"Could not schedule failure report: {e!r}",
            extra={"context": {"stage": "report"}},
        )
        if inspect.iscoroutine(result):
            result.close()
        return None
    pending.add(task)
    task.add_done_callback(pending.discard)
    task.add_done_callback(lambda done: _on_report_done(done, logger))
    return task


__all__ = ["ReportingSink", "LoggingSink", "CallbackSink", "dispatch_report"]
