"""Fixed strings shared by the caller and the outcome models."""

from __future__ import annotations

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"
"""Generic message returned for every unexpected failure."""
LOGGER_NAME = "safe_request"
