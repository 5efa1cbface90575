"""Agent action types.

A planner step resolves to exactly one of four actions. Actions are immutable values
built once from one model reply and consumed by the agent loop.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar


@dataclass(frozen=True)
class ToolCall:
    """A validated request to run one of the registered tools."""

    name: str
    arguments: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "arguments": dict(self.arguments)}


@dataclass(frozen=True)
class ContinueAction:
    """Planner wants a tool executed."""

    kind: ClassVar[str] = "continue"

    reasoning: str
    tool_call: ToolCall

    def to_dict(self) -> dict[str, Any]:
        return {"action": self.kind, "reasoning": self.reasoning, "toolCall": self.tool_call.to_dict()}


@dataclass(frozen=True)
class CompleteAction:
    """Planner declares the task complete.

    ``completion_gates_declared_none`` is only true when gating was explicitly disabled;
    an empty ``completion_gate_commands`` on its own means no gates were supplied.
    """

    kind: ClassVar[str] = "complete"

    reasoning: str
    completion_gate_commands: tuple[str, ...] = field(default_factory=tuple)
    completion_gates_declared_none: bool = False
    user_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "action": self.kind,
            "reasoning": self.reasoning,
            "completionGateCommands": list(self.completion_gate_commands),
            "completionGatesDeclaredNone": self.completion_gates_declared_none,
        }
        if self.user_message is not None:
            data["userMessage"] = self.user_message
        return data


@dataclass(frozen=True)
class AskUserAction:
    """Planner needs input from the user."""

    kind: ClassVar[str] = "ask_user"

    reasoning: str
    user_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"action": self.kind, "reasoning": self.reasoning}
        if self.user_message is not None:
            data["userMessage"] = self.user_message
        return data


@dataclass(frozen=True)
class BlockedAction:
    """Planner cannot make progress."""

    kind: ClassVar[str] = "blocked"

    reasoning: str
    user_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"action": self.kind, "reasoning": self.reasoning}
        if self.user_message is not None:
            data["userMessage"] = self.user_message
        return data


PlannerAction = ContinueAction | CompleteAction | AskUserAction | BlockedAction


@dataclass(frozen=True)
class ParseFailure:
    """Why a piece of planner output could not be validated."""

    reason: str


ParseOutcome = PlannerAction | ParseFailure
