"""Centralized semantic enums for safe-request."""

from __future__ import annotations

from enum import Enum


class OutcomeStatus(str, Enum):
    """Discriminant carried by every outcome variant."""

    SUCCESS = "success"
    EXPECTED_ERROR = "expectedError"
    UNEXPECTED_ERROR = "unexpectedError"

    @property
    def metric_name(self) -> str:
        return {
            OutcomeStatus.SUCCESS: "safe_request.success",
            OutcomeStatus.EXPECTED_ERROR: "safe_request.expected_error",
            OutcomeStatus.UNEXPECTED_ERROR: "safe_request.unexpected_error",
        }[self]
