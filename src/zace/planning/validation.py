"""Strict validation of planner JSON payloads.

Each validator is a pure function returning either a value or a :class:`ParseFailure`
whose reason names the violated field and constraint. Nothing here raises.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from zace.agents.actions import (
    AskUserAction,
    BlockedAction,
    CompleteAction,
    ContinueAction,
    ParseFailure,
    ParseOutcome,
    ToolCall,
)
from zace.models.planner_response import (
    AskUserResponse,
    BlockedResponse,
    CompleteResponse,
    ContinueResponse,
)
from zace.models.tool_calls import TOOL_ARGUMENT_MODELS

_TOOL_CALL_KEYS = frozenset({"name", "arguments"})


def format_validation_error(exc: ValidationError, prefix: str = "") -> str:
    """Render pydantic errors as ``path: message`` lines joined by ``; ``."""

    parts: list[str] = []
    for err in exc.errors(include_url=False):
        loc = ".".join(str(p) for p in (prefix, *err["loc"]) if p != "")
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def validate_tool_call(value: Any, *, path: str = "toolCall") -> ToolCall | ParseFailure:
    """Validate a ``{"name": ..., "arguments": {...}}`` object against its tool shape."""

    if not isinstance(value, dict):
        return ParseFailure(f"{path}: expected object")

    unexpected = sorted(set(value) - _TOOL_CALL_KEYS)
    if unexpected:
        return ParseFailure(f"{path}: unexpected keys {unexpected}")

    name = value.get("name")
    if not isinstance(name, str):
        return ParseFailure(f"{path}.name: expected tool name string")
    model = TOOL_ARGUMENT_MODELS.get(name)
    if model is None:
        return ParseFailure(f"{path}.name: unknown tool {name!r}")

    if "arguments" not in value:
        return ParseFailure(f"{path}.arguments: Field required")
    arguments = value["arguments"]
    if not isinstance(arguments, dict):
        return ParseFailure(f"{path}.arguments: expected object")

    try:
        parsed = model.model_validate(arguments)
    except ValidationError as exc:
        return ParseFailure(format_validation_error(exc, prefix=f"{path}.arguments"))
    return ToolCall(name=name, arguments=parsed.to_arguments())


def _validate_continue(data: dict) -> ParseOutcome:
    try:
        parsed = ContinueResponse.model_validate(data)
    except ValidationError as exc:
        return ParseFailure(format_validation_error(exc))
    tool_call = validate_tool_call(parsed.tool_call)
    if isinstance(tool_call, ParseFailure):
        return tool_call
    return ContinueAction(reasoning=parsed.reasoning, tool_call=tool_call)


def _validate_complete(data: dict) -> ParseOutcome:
    try:
        parsed = CompleteResponse.model_validate(data)
    except ValidationError as exc:
        return ParseFailure(format_validation_error(exc))
    if parsed.gates == "none":
        return CompleteAction(
            reasoning=parsed.reasoning,
            completion_gate_commands=(),
            completion_gates_declared_none=True,
            user_message=parsed.user_message,
        )
    return CompleteAction(
        reasoning=parsed.reasoning,
        completion_gate_commands=tuple(parsed.gates or ()),
        completion_gates_declared_none=False,
        user_message=parsed.user_message,
    )


def _validate_ask_user(data: dict) -> ParseOutcome:
    try:
        parsed = AskUserResponse.model_validate(data)
    except ValidationError as exc:
        return ParseFailure(format_validation_error(exc))
    return AskUserAction(reasoning=parsed.reasoning, user_message=parsed.user_message)


def _validate_blocked(data: dict) -> ParseOutcome:
    try:
        parsed = BlockedResponse.model_validate(data)
    except ValidationError as exc:
        return ParseFailure(format_validation_error(exc))
    return BlockedAction(reasoning=parsed.reasoning, user_message=parsed.user_message)


_VALIDATORS = {
    "continue": _validate_continue,
    "complete": _validate_complete,
    "ask_user": _validate_ask_user,
    "blocked": _validate_blocked,
}


def validate_planner_response(value: Any) -> ParseOutcome:
    """Validate a decoded planner reply and map it onto a :data:`PlannerAction`."""

    if not isinstance(value, dict):
        return ParseFailure("expected JSON object")
    action = value.get("action")
    if action is None:
        return ParseFailure("action: missing")
    if not isinstance(action, str):
        return ParseFailure(f"action: expected string, got {type(action).__name__}")
    validator = _VALIDATORS.get(action)
    if validator is None:
        return ParseFailure(f"action: unknown value {action!r}")
    return validator(value)
