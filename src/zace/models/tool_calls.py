"""Argument shapes of the tools the planner may call.

The set of tools is closed: adding a tool means adding an arguments model here and
registering it in :data:`TOOL_ARGUMENT_MODELS`.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import ConfigDict, Field

from zace.models.base import JsonInt, NonEmptyStr, WireModel

SessionMessageRole = Literal["assistant", "system", "tool", "user"]
NonNegativeJsonInt = Annotated[JsonInt, Field(ge=0)]
PositiveJsonInt = Annotated[JsonInt, Field(gt=0)]


class ToolArguments(WireModel):
    """Base for tool arguments. Unknown keys are rejected."""

    model_config = ConfigDict(strict=True, frozen=True, extra="forbid")

    def to_arguments(self) -> dict:
        """Return the arguments as supplied on the wire (camelCase, only set keys)."""

        return self.model_dump(by_alias=True, exclude_unset=True)


class ExecuteCommandArguments(ToolArguments):
    """Arguments of ``execute_command``."""

    command: NonEmptyStr
    cwd: str | None = None
    env: dict[str, str] | None = None
    max_retries: NonNegativeJsonInt | None = Field(default=None, alias="maxRetries")
    output_limit_chars: PositiveJsonInt | None = Field(default=None, alias="outputLimitChars")
    retry_max_delay_ms: NonNegativeJsonInt | None = Field(default=None, alias="retryMaxDelayMs")
    timeout: PositiveJsonInt | None = None


class SearchSessionMessagesArguments(ToolArguments):
    """Arguments of ``search_session_messages``."""

    session_id: NonEmptyStr = Field(alias="sessionId")
    query: str | None = None
    regex: bool | None = None
    case_sensitive: bool | None = Field(default=None, alias="caseSensitive")
    limit: Annotated[JsonInt, Field(ge=1, le=200)] | None = None
    role: SessionMessageRole | None = None


class WriteSessionMessageArguments(ToolArguments):
    """Arguments of ``write_session_message``."""

    session_id: NonEmptyStr = Field(alias="sessionId")
    content: NonEmptyStr
    role: SessionMessageRole | None = None
    timestamp: str | None = None


TOOL_ARGUMENT_MODELS: dict[str, type[ToolArguments]] = {
    "execute_command": ExecuteCommandArguments,
    "search_session_messages": SearchSessionMessagesArguments,
    "write_session_message": WriteSessionMessageArguments,
}

TOOL_DESCRIPTIONS: dict[str, str] = {
    "execute_command": (
        "Run a shell command. Arguments: command (required), cwd, env (string map), "
        "maxRetries, outputLimitChars, retryMaxDelayMs, timeout (ms)."
    ),
    "search_session_messages": (
        "Search earlier messages of a session. Arguments: sessionId (required), query, "
        "regex, caseSensitive, limit (1-200), role (assistant|system|tool|user)."
    ),
    "write_session_message": (
        "Persist a durable note into a session. Arguments: sessionId (required), "
        "content (required), role (assistant|system|tool|user), timestamp."
    ),
}
