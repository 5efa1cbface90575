"""Planner agent.

One planning step asks the model for the next action and turns its reply into exactly
one of: continue (run a tool) / complete / ask_user / blocked. Parsing never fails;
only the model call itself can raise.
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Sequence

from zace.agents.actions import PlannerAction
from zace.agents.base import AgentContext, BaseAgent, MessageHistory
from zace.llm.client import ChatClient, ChatMessage, Usage
from zace.logging import get_logger, log_step
from zace.planning.parser import ParseMode, parse_planner_output_detailed
from zace.planning.response_format import planner_response_format
from zace.prompts.planner import build_planner_prompt

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlanOptions:
    """Options for one planning step."""

    completion_criteria: Sequence[str] = ()
    stream: bool = False
    on_stream_start: Optional[Callable[[], None]] = None
    on_stream_token: Optional[Callable[[str], None]] = None
    on_stream_end: Optional[Callable[[], None]] = None
    structured_output: bool = False
    schema_strict: bool = True


@dataclass(frozen=True)
class PlanResult:
    """The planner's decision plus call metadata."""

    action: PlannerAction
    usage: Usage | None
    mode: ParseMode
    failure_reason: str | None = None
    raw_content: str = ""

    @property
    def degraded(self) -> bool:
        """True when the reply was not valid strict JSON."""

        return self.mode != "strict"


@contextlib.contextmanager
def _stream_scope(options: PlanOptions) -> Iterator[None]:
    if not options.stream:
        yield
        return
    if options.on_stream_start is not None:
        options.on_stream_start()
    try:
        yield
    finally:
        if options.on_stream_end is not None:
            options.on_stream_end()


class PlannerAgent(BaseAgent):
    """Zace planner agent."""

    async def step(
        self,
        context: AgentContext,
        memory: MessageHistory,
        options: PlanOptions | None = None,
    ) -> PlanResult:
        """Run one planning step: exactly one model call, then parse.

        Args:
            context: Agent run context; ``current_step`` drives progress reporting.
            memory: Conversation history the planning prompt is appended to.
            options: Streaming callbacks and prompt options.

        Returns:
            The parsed action with the model's token usage.
        """

        options = options or PlanOptions()
        log_step(context.current_step + 1, "Planning next action")

        prompt = build_planner_prompt(context, options.completion_criteria)
        messages = [*memory.get_messages(), ChatMessage(role="user", content=prompt)]
        response_format = (
            planner_response_format(strict=options.schema_strict) if options.structured_output else None
        )

        with _stream_scope(options):
            response = await self._llm.chat(
                messages,
                stream=options.stream,
                on_token=options.on_stream_token if options.stream else None,
                response_format=response_format,
            )

        content = response.content.strip()
        parsed = parse_planner_output_detailed(content)
        if parsed.mode != "strict":
            logger.info("Planner reply was not strict JSON (%s): %s", parsed.mode, parsed.failure_reason)
        return PlanResult(
            action=parsed.action,
            usage=response.usage,
            mode=parsed.mode,
            failure_reason=parsed.failure_reason,
            raw_content=content,
        )


async def plan(
    llm: ChatClient,
    context: AgentContext,
    memory: MessageHistory,
    options: PlanOptions | None = None,
) -> PlanResult:
    """Convenience wrapper around :meth:`PlannerAgent.step`."""

    return await PlannerAgent(llm).step(context, memory, options)
