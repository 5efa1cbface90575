"""Shared base for wire-format models."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

NonEmptyStr = Annotated[str, Field(min_length=1)]


def _integral_float_to_int(value: Any) -> Any:
    # JSON has a single number type, so 30000.0 and 1e2 are integers on the wire.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


JsonInt = Annotated[int, BeforeValidator(_integral_float_to_int)]
"""Strict integer that also accepts integral floats such as ``1e2``."""


class WireModel(BaseModel):
    """Strictly typed model for JSON produced by the planner model.

    Values are never coerced, and an explicit ``null`` is rejected for optional keys:
    a key is either absent or holds a value of the declared type. Integer fields use
    :data:`JsonInt` so that integral floats still count as integers.
    """

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Input should not be null")
        return value
