"""Shared Pydantic base class with consistent configuration."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T", bound=type[Any])


class TypedBaseModel(BaseModel):
    """Common base for every outcome schema.

    Outcomes are values handed back to callers, so they are immutable and
    reject unknown fields. Payloads are opaque, hence arbitrary types.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra="forbid",
    )


def final_class(cls: T) -> T:
    """Forbid subclassing of ``cls`` at runtime."""

    def __init_subclass__(subcls: type[Any], **kwargs: Any) -> None:  # noqa: N807
        raise TypeError(f"{cls.__name__} is a closed outcome variant")

    cls.__init_subclass__ = classmethod(__init_subclass__)
    return cls
