from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import BaseModel, TypeAdapter, ValidationError
import pytest

from safe_request.enums import OutcomeStatus
from safe_request.outcome import (
    ExpectedFailure,
    Outcome,
    Success,
    UnexpectedFailure,
    match_outcome,
    parse_outcome,
)


def test_each_variant_carries_its_discriminant() -> None:
    assert Success(data=1).status == OutcomeStatus.SUCCESS
    assert ExpectedFailure(message="m").status == OutcomeStatus.EXPECTED_ERROR
    assert UnexpectedFailure(message="m").status == OutcomeStatus.UNEXPECTED_ERROR


def test_predicates_are_mutually_exclusive() -> None:
    variants = [
        Success(data=None),
        ExpectedFailure(message="a"),
        UnexpectedFailure(message="b"),
    ]
    for outcome in variants:
        flags = [outcome.ok, outcome.expected, outcome.unexpected]
        assert flags.count(True) == 1


def test_discriminant_cannot_be_overridden() -> None:
    with pytest.raises(ValidationError):
        ExpectedFailure(status="success", message="nope")  # type: ignore[arg-type]


def test_outcomes_are_frozen() -> None:
    outcome = ExpectedFailure(message="Not Found")
    with pytest.raises(ValidationError):
        outcome.message = "changed"  # type: ignore[misc]


def test_failure_variants_are_closed() -> None:
    with pytest.raises(TypeError, match="closed outcome variant"):

        class _Custom(ExpectedFailure):  # noqa: F841
            pass


def test_dump_includes_discriminant() -> None:
    dumped = Success(data={"message": "ok"}).model_dump(mode="json")
    assert dumped == {"status": "success", "data": {"message": "ok"}}


@pytest.mark.parametrize(
    "original",
    [
        Success(data={"message": "ok"}),
        ExpectedFailure(message="Not Found"),
        UnexpectedFailure(message="An unexpected error occurred"),
    ],
)
def test_parse_outcome_restores_variant(original) -> None:
    restored = parse_outcome(original.model_dump(mode="json"))
    assert type(restored).__name__.startswith(type(original).__name__)
    assert restored.model_dump() == original.model_dump()


@settings(database=None)
@given(
    status=st.text(min_size=1).filter(
        lambda s: s not in {member.value for member in OutcomeStatus}
    )
)
def test_parse_outcome_rejects_unknown_discriminant(status: str) -> None:
    with pytest.raises(ValidationError):
        parse_outcome({"status": status, "message": "x"})


def test_match_outcome_dispatches_every_variant() -> None:
    handlers = {
        "on_success": lambda data: f"data:{data}",
        "on_expected": lambda message: f"expected:{message}",
        "on_unexpected": lambda message: f"unexpected:{message}",
    }
    assert match_outcome(Success(data=3), **handlers) == "data:3"
    assert match_outcome(ExpectedFailure(message="a"), **handlers) == "expected:a"
    assert match_outcome(UnexpectedFailure(message="b"), **handlers) == "unexpected:b"


def test_match_outcome_rejects_foreign_values() -> None:
    with pytest.raises(TypeError, match="Unknown outcome variant"):
        match_outcome(
            {"status": "success", "data": 1},  # type: ignore[arg-type]
            on_success=lambda data: data,
            on_expected=lambda message: message,
            on_unexpected=lambda message: message,
        )


def test_outcome_alias_is_subscriptable_at_runtime() -> None:
    adapter = TypeAdapter(Outcome[int])
    restored = adapter.validate_python({"status": "success", "data": 7})
    assert isinstance(restored, Success)
    assert restored.data == 7
    assert adapter.validate_python(
        {"status": "expectedError", "message": "Not Found"}
    ) == ExpectedFailure(message="Not Found")


def test_outcome_alias_works_as_a_model_field() -> None:
    class Envelope(BaseModel):
        outcome: Outcome[str]

    envelope = Envelope(outcome=UnexpectedFailure(message="boom"))
    assert envelope.outcome.unexpected
