"""safe-request: run outbound calls and get tagged outcomes instead of exceptions.

Failures whose status code the caller registers as expected come back as
``ExpectedFailure``; everything else is reported to a sink and comes back as
``UnexpectedFailure``.
"""

from __future__ import annotations

from safe_request.caller import SafeCaller, handle_request
from safe_request.errors import ConfigurationError, HttpStatusError, SafeRequestError
from safe_request.outcome import (
    ExpectedFailure,
    Outcome,
    Success,
    UnexpectedFailure,
    match_outcome,
    parse_outcome,
)
from safe_request.reporting import CallbackSink, LoggingSink, ReportingSink

__all__ = [
    "SafeCaller",
    "handle_request",
    "Outcome",
    "Success",
    "ExpectedFailure",
    "UnexpectedFailure",
    "match_outcome",
    "parse_outcome",
    "ReportingSink",
    "LoggingSink",
    "CallbackSink",
    "SafeRequestError",
    "ConfigurationError",
    "HttpStatusError",
]
