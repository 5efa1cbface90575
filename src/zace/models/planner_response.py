"""Strict wire format of a planner reply.

A reply is a JSON object whose ``action`` selects one of four shapes. Unknown top-level
keys are ignored; the ``toolCall`` of a ``continue`` reply is validated separately
against :mod:`zace.models.tool_calls`, where unknown keys are rejected.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from zace.models.base import NonEmptyStr, WireModel


class ContinueResponse(WireModel):
    action: Literal["continue"]
    reasoning: NonEmptyStr
    tool_call: Any = Field(alias="toolCall")


class CompleteResponse(WireModel):
    action: Literal["complete"]
    reasoning: NonEmptyStr
    gates: list[NonEmptyStr] | Literal["none"] | None = None
    user_message: NonEmptyStr | None = Field(default=None, alias="userMessage")


class AskUserResponse(WireModel):
    action: Literal["ask_user"]
    reasoning: NonEmptyStr
    user_message: NonEmptyStr | None = Field(default=None, alias="userMessage")


class BlockedResponse(WireModel):
    action: Literal["blocked"]
    reasoning: NonEmptyStr
    user_message: NonEmptyStr | None = Field(default=None, alias="userMessage")
