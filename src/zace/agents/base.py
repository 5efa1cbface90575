"""Base agent interfaces: run context, step history and message history."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Protocol

from zace.agents.actions import ToolCall
from zace.llm.client import ChatClient, ChatMessage, Role

AgentState = Literal["blocked", "completed", "error", "executing", "planning", "waiting_for_user"]


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool execution, as reported back to the planner."""

    success: bool
    output: str


@dataclass(frozen=True)
class AgentStep:
    """One finished step of an agent run."""

    step: int
    state: AgentState
    reasoning: str
    tool_call: ToolCall | None = None
    tool_result: ToolResult | None = None


@dataclass
class AgentContext:
    """Mutable state of an agent run that the planner prompt is built from."""

    task: str
    max_steps: int
    current_step: int = 0
    steps: list[AgentStep] = field(default_factory=list)
    file_summaries: dict[str, str] = field(default_factory=dict)


class MessageHistory(Protocol):
    """Anything that can hand out the conversation so far."""

    def get_messages(self) -> list[ChatMessage]: ...


class ConversationMemory:
    """In-memory conversation history."""

    def __init__(self) -> None:
        self._messages: list[ChatMessage] = []

    def add_message(self, role: Role, content: str) -> None:
        self._messages.append(ChatMessage(role=role, content=content))

    def get_messages(self) -> list[ChatMessage]:
        return list(self._messages)


class BaseAgent:
    """Base class for Zace agents."""

    def __init__(self, llm: ChatClient) -> None:
        self._llm = llm
