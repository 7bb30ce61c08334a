"""Execute one outbound call and turn every failure into a tagged outcome.

``SafeCaller.execute`` never raises for a failing operation. A failure whose
response status is registered in the caller's expected-error map becomes an
``ExpectedFailure`` and stays quiet; anything else is handed to the reporting
sink and becomes an ``UnexpectedFailure`` with a generic message.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar

from safe_request.classification import (
    ExpectedErrorMap,
    describe_failure,
    lookup_expected,
    response_status,
)
from safe_request.constants import UNEXPECTED_ERROR_MESSAGE
from safe_request.enums import OutcomeStatus
from safe_request.outcome import ExpectedFailure, Success, UnexpectedFailure
from safe_request.reporting import ReportingSink, dispatch_report
from safe_request.utilities.logger_manager import LoggerManager, MetricType

if TYPE_CHECKING:
    from safe_request.config.env import SafeRequestSettings
    from safe_request.outcome import Outcome

TPayload = TypeVar("TPayload")
TPayload_co = TypeVar("TPayload_co", covariant=True)


class SupportsData(Protocol, Generic[TPayload_co]):
    """Response shape an operation resolves to."""

    @property
    def data(self) -> TPayload_co: ...


Operation = Callable[[], Awaitable[SupportsData[TPayload]]]


class SafeCaller:
    """Runs operations and classifies their failures.

    The caller holds no classification state between calls. Its only mutable
    state is the set of report tasks still in flight.
    """

    def __init__(
        self,
        sink: ReportingSink,
        *,
        logger_manager: LoggerManager | None = None,
        unexpected_message: str = UNEXPECTED_ERROR_MESSAGE,
    ) -> None:
        self.sink = sink
        self.logger_manager = logger_manager or LoggerManager()
        self.logger = self.logger_manager.get_logger()
        self.unexpected_message = unexpected_message
        self._pending_reports: set[asyncio.Task[Any]] = set()

    @classmethod
    def from_settings(
        cls,
        settings: SafeRequestSettings,
        sink: ReportingSink,
        logger_manager: LoggerManager | None = None,
    ) -> SafeCaller:
        """Build a caller whose logging and messages follow ``settings``.

        Without an explicit ``logger_manager`` the shared logger is
        reconfigured from ``settings``, even if a default manager set it up
        earlier.
        """
        manager = logger_manager or LoggerManager(config=settings.logger_config())
        return cls(
            sink,
            logger_manager=manager,
            unexpected_message=settings.unexpected_message,
        )

    @property
    def pending_reports(self) -> frozenset[asyncio.Task[Any]]:
        return frozenset(self._pending_reports)

    async def execute(
        self,
        operation: Operation[TPayload],
        expected_errors: ExpectedErrorMap | None = None,
    ) -> Outcome[TPayload]:
        """Await ``operation`` once and return its outcome.

        Args:
            operation: Zero-argument coroutine function resolving to a response
                with a ``data`` attribute.
            expected_errors: Status codes the caller treats as acceptable,
                mapped to the message returned for each.

        Returns:
            ``Success`` with the response payload, ``ExpectedFailure`` with the
            registered message, or ``UnexpectedFailure`` with a generic message.
        """
        try:
            response = await operation()
            data = response.data
        except (Exception, asyncio.CancelledError) as failure:
            return self._classify(failure, expected_errors)

        self._record(OutcomeStatus.SUCCESS)
        return Success(data=data)

    def _classify(
        self,
        failure: BaseException,
        expected_errors: ExpectedErrorMap | None,
    ) -> ExpectedFailure | UnexpectedFailure:
        description = describe_failure(failure)
        try:
            status = response_status(failure)
            message = lookup_expected(status, expected_errors)
        except Exception as e:
            # a broken expected-error map falls through to the unexpected path
            self.logger.warning(
                f"Could not classify {description}: {describe_failure(e)}",
                extra={"context": {"stage": "classify"}},
            )
            status, message = None, None

        if message is not None:
            self.logger.info(
                f"Expected request failure: {description}",
                extra={"context": {"status": status, "outcome": "expectedError"}},
            )
            self._record(OutcomeStatus.EXPECTED_ERROR)
            return ExpectedFailure(message=message)

        # the sink owns error-level reporting
        self.logger.warning(
            f"Unexpected request failure: {description}",
            extra={"context": {"status": status, "outcome": "unexpectedError"}},
        )
        dispatch_report(self.sink, failure, self.logger, self._pending_reports)
        self._record(OutcomeStatus.UNEXPECTED_ERROR)
        return UnexpectedFailure(message=self.unexpected_message)

    def _record(self, status: OutcomeStatus) -> None:
        self.logger_manager.log_metric(
            status.metric_name, 1, MetricType.COUNTER, tags={"status": status.value}
        )

    async def drain_reports(self) -> None:
        """Wait for in-flight reports; their failures are already logged."""
        while self._pending_reports:
            await asyncio.gather(*self._pending_reports, return_exceptions=True)


async def handle_request(
    operation: Operation[TPayload],
    expected_errors: ExpectedErrorMap | None = None,
    *,
    sink: ReportingSink,
    logger_manager: LoggerManager | None = None,
) -> Outcome[TPayload]:
    """One-shot form of ``SafeCaller(sink).execute(...)``."""
    caller = SafeCaller(sink, logger_manager=logger_manager)
    return await caller.execute(operation, expected_errors)


__all__ = ["SafeCaller", "SupportsData", "Operation", "handle_request"]
