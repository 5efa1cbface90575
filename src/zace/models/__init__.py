"""Pydantic models used across the project."""

from __future__ import annotations

from zace.models.planner_response import (
    AskUserResponse,
    BlockedResponse,
    CompleteResponse,
    ContinueResponse,
)
from zace.models.tool_calls import (
    TOOL_ARGUMENT_MODELS,
    ExecuteCommandArguments,
    SearchSessionMessagesArguments,
    WriteSessionMessageArguments,
)

__all__ = [
    "AskUserResponse",
    "BlockedResponse",
    "CompleteResponse",
    "ContinueResponse",
    "TOOL_ARGUMENT_MODELS",
    "ExecuteCommandArguments",
    "SearchSessionMessagesArguments",
    "WriteSessionMessageArguments",
]
