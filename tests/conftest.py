from __future__ import annotations

import pytest
from tests.stubs.recording_sink import RecordingSink

from safe_request.caller import SafeCaller
from safe_request.utilities.logger_manager import LoggerConfig, LoggerManager

EXPECTED_ERRORS = {403: "Not authorized", 404: "Not Found"}


@pytest.fixture
def logger_manager() -> LoggerManager:
    return LoggerManager(LoggerConfig(log_level="DEBUG"))


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def caller(recording_sink: RecordingSink, logger_manager: LoggerManager) -> SafeCaller:
    return SafeCaller(recording_sink, logger_manager=logger_manager)


@pytest.fixture
def expected_errors() -> dict[int, str]:
    return dict(EXPECTED_ERRORS)
