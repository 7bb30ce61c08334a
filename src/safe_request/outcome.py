"""Tagged result of a safe call: success, expected failure or unexpected failure.

Every variant carries a ``status`` discriminant so callers branch on a single
field instead of inspecting payload shapes. Variants are frozen pydantic models
and serialize with ``model_dump()``; ``parse_outcome`` validates the dumped
form back into the right variant.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Annotated, Any, Generic, Literal, TypeVar, Union

from pydantic import Field, TypeAdapter
from typing_extensions import TypeAliasType

from safe_request.enums import OutcomeStatus
from safe_request.schema.base import TypedBaseModel, final_class

TPayload = TypeVar("TPayload")
R = TypeVar("R")


class _OutcomeBase(TypedBaseModel):
    status: str

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS.value

    @property
    def expected(self) -> bool:
        return self.status == OutcomeStatus.EXPECTED_ERROR.value

    @property
    def unexpected(self) -> bool:
        return self.status == OutcomeStatus.UNEXPECTED_ERROR.value


class Success(_OutcomeBase, Generic[TPayload]):
    """The operation completed; ``data`` is its payload, untouched."""

    status: Literal["success"] = "success"
    data: TPayload


@final_class
class ExpectedFailure(_OutcomeBase):
    """The operation failed with a status code the caller registered."""

    status: Literal["expectedError"] = "expectedError"
    message: str


@final_class
class UnexpectedFailure(_OutcomeBase):
    """Any other failure. ``message`` never carries the underlying detail."""

    status: Literal["unexpectedError"] = "unexpectedError"
    message: str


Outcome = TypeAliasType(
    "Outcome",
    Union[Success[TPayload], ExpectedFailure, UnexpectedFailure],
    type_params=(TPayload,),
)

_OUTCOME_ADAPTER: TypeAdapter[Any] = TypeAdapter(
    Annotated[
        Union[Success[Any], ExpectedFailure, UnexpectedFailure],
        Field(discriminator="status"),
    ]
)


def parse_outcome(data: Mapping[str, Any] | _OutcomeBase) -> Outcome[Any]:
    """Validate a dumped outcome back into its variant.

    Raises:
        pydantic.ValidationError: unknown discriminant or missing fields.
    """
    if isinstance(data, _OutcomeBase):
        data = data.model_dump()
    return _OUTCOME_ADAPTER.validate_python(dict(data))


def match_outcome(
    outcome: Outcome[TPayload],
    *,
    on_success: Callable[[TPayload], R],
    on_expected: Callable[[str], R],
    on_unexpected: Callable[[str], R],
) -> R:
    """Dispatch on the outcome discriminant; every variant must be handled."""
    status = getattr(outcome, "status", None)
    if status == OutcomeStatus.SUCCESS.value and isinstance(outcome, Success):
        return on_success(outcome.data)
    if status == OutcomeStatus.EXPECTED_ERROR.value and isinstance(
        outcome, ExpectedFailure
    ):
        return on_expected(outcome.message)
    if status == OutcomeStatus.UNEXPECTED_ERROR.value and isinstance(
        outcome, UnexpectedFailure
    ):
        return on_unexpected(outcome.message)
    raise TypeError(f"Unknown outcome variant: {type(outcome).__name__}")


__all__ = [
    "Outcome",
    "Success",
    "ExpectedFailure",
    "UnexpectedFailure",
    "parse_outcome",
    "match_outcome",
]
