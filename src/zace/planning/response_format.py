"""JSON Schema of the strict planner reply, for providers supporting structured output."""

from __future__ import annotations

import copy
from typing import Any

RESPONSE_FORMAT_NAME = "zace_planner_decision"

_SESSION_MESSAGE_ROLE = {"type": "string", "enum": ["assistant", "system", "tool", "user"]}


def _tool_call_schema(name: str, properties: dict[str, Any], required: list[str]) -> dict[str, Any]:
    return {
        "type": "object",
        "additionalProperties": False,
        "required": ["name", "arguments"],
        "properties": {
            "name": {"type": "string", "const": name},
            "arguments": {
                "type": "object",
                "additionalProperties": False,
                "required": required,
                "properties": properties,
            },
        },
    }


EXECUTE_COMMAND_SCHEMA = _tool_call_schema(
    "execute_command",
    {
        "command": {"type": "string", "minLength": 1},
        "cwd": {"type": "string"},
        "env": {"type": "object", "additionalProperties": {"type": "string"}},
        "maxRetries": {"type": "integer", "minimum": 0},
        "outputLimitChars": {"type": "integer", "minimum": 1},
        "retryMaxDelayMs": {"type": "integer", "minimum": 0},
        "timeout": {"type": "integer", "minimum": 1},
    },
    ["command"],
)

SEARCH_SESSION_MESSAGES_SCHEMA = _tool_call_schema(
    "search_session_messages",
    {
        "sessionId": {"type": "string", "minLength": 1},
        "query": {"type": "string"},
        "regex": {"type": "boolean"},
        "caseSensitive": {"type": "boolean"},
        "limit": {"type": "integer", "minimum": 1, "maximum": 200},
        "role": _SESSION_MESSAGE_ROLE,
    },
    ["sessionId"],
)

WRITE_SESSION_MESSAGE_SCHEMA = _tool_call_schema(
    "write_session_message",
    {
        "sessionId": {"type": "string", "minLength": 1},
        "content": {"type": "string", "minLength": 1},
        "role": _SESSION_MESSAGE_ROLE,
        "timestamp": {"type": "string"},
    },
    ["sessionId", "content"],
)

PLANNER_RESPONSE_JSON_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "additionalProperties": False,
    "required": ["action", "reasoning"],
    "properties": {
        "action": {"type": "string", "enum": ["continue", "ask_user", "blocked", "complete"]},
        "reasoning": {"type": "string", "minLength": 1},
        "userMessage": {"type": "string", "minLength": 1},
        "toolCall": {
            "oneOf": [
                EXECUTE_COMMAND_SCHEMA,
                SEARCH_SESSION_MESSAGES_SCHEMA,
                WRITE_SESSION_MESSAGE_SCHEMA,
            ]
        },
        "gates": {
            "oneOf": [
                {"type": "array", "items": {"type": "string", "minLength": 1}},
                {"type": "string", "const": "none"},
            ]
        },
    },
    "allOf": [
        {
            "if": {
                "required": ["action"],
                "properties": {"action": {"type": "string", "const": "continue"}},
            },
            "then": {"required": ["toolCall"]},
        }
    ],
}


def planner_response_format(*, strict: bool = True) -> dict[str, Any]:
    """Return an OpenAI-compatible ``response_format`` payload for planner calls."""

    return {
        "type": "json_schema",
        "json_schema": {
            "name": RESPONSE_FORMAT_NAME,
            "schema": copy.deepcopy(PLANNER_RESPONSE_JSON_SCHEMA),
            "strict": strict,
        },
    }
