"""Planner prompt."""

from __future__ import annotations

from collections.abc import Sequence

from zace.agents.base import AgentContext, AgentStep
from zace.models.tool_calls import TOOL_DESCRIPTIONS

PLANNER_SYSTEM_PROMPT = (
    "You are Zace, an autonomous coding agent working inside the user's repository. "
    "At every step you choose exactly one action and answer with strict JSON."
)

NO_COMPLETION_GATES = "No completion gates configured"

_RESPONSE_FORMAT = """\
RESPONSE FORMAT:
- Return strict JSON only. No markdown, no prose outside JSON.
- Use exactly one action per response:
  - continue: must include toolCall
  - ask_user: must include reasoning
  - blocked: must include reasoning
  - complete: must include reasoning and optional gates

JSON SCHEMA:
{
  "action": "continue" | "ask_user" | "blocked" | "complete",
  "reasoning": "short explicit reasoning",
  "userMessage": "user-facing text shown in chat",
  "toolCall": {
    "name": "tool_name",
    "arguments": {}
  },
  "gates": "none" | ["command one", "command two"]
}

Notes:
- Provide "toolCall" only when action is "continue".
- Provide "gates" only when action is "complete".
- For "ask_user", always provide "userMessage" as a direct question.
- If no validation gates are required, set "gates": "none"."""

_INSTRUCTIONS = """\
INSTRUCTIONS:
1. Analyze the task and current state.
2. Before any write/create/edit command, inspect the repository with read-only commands.
3. Keep each step small and deterministic. Prefer one command per step.
4. When older conversation context is needed, use search_session_messages before asking the user to repeat details.
5. Use write_session_message to persist durable notes that may be useful after compaction.
6. If user clarification is required, choose "ask_user" with one clear question.
   - "reasoning" is an internal summary for agent memory.
   - "userMessage" is the exact text shown to the user.
7. Destructive shell commands require explicit user confirmation before execution.
8. Do not choose "complete" unless completion gates pass. If gates are missing and validation
   should run, include project-specific commands in the complete response.
9. For greetings or non-actionable messages, choose "ask_user" and ask what concrete task to perform.
10. Before repeating the same write command, verify objective state with a read command."""


def _format_step(step: AgentStep) -> str:
    line = f"Step {step.step} ({step.state}): {step.reasoning}"
    if step.tool_call is not None:
        line += f"\n  Tool: {step.tool_call.name}"
    if step.tool_result is not None:
        mark = "ok" if step.tool_result.success else "failed"
        line += f"\n  Result: {mark} {step.tool_result.output[:100]}"
    return line


def tool_descriptions() -> str:
    return "\n".join(f"- {name}: {desc}" for name, desc in TOOL_DESCRIPTIONS.items())


def build_planner_prompt(context: AgentContext, completion_criteria: Sequence[str] | None = None) -> str:
    """Build the user prompt for one planning step.

    Args:
        context: Current agent run context.
        completion_criteria: Completion gates shown to the model.

    Returns:
        Prompt text.
    """

    criteria = list(completion_criteria or []) or [NO_COMPLETION_GATES]

    lines: list[str] = []
    lines.append("You are the PLANNER. Your job is to understand the task and decide WHAT to do next.")
    lines.append("")
    lines.append(f"TASK: {context.task}")
    lines.append("")
    lines.append(f"CURRENT STEP: {context.current_step} / {context.max_steps}")
    lines.append("")

    recent = context.steps[-3:]
    if recent:
        lines.append("RECENT HISTORY:")
        lines.append("\n\n".join(_format_step(s) for s in recent))
    else:
        lines.append("This is the first step.")

    if context.file_summaries:
        lines.append("")
        lines.append("Relevant files:")
        for path, summary in context.file_summaries.items():
            lines.append(f"- {path}: {summary[:200]}")
    lines.append("")

    lines.append("COMPLETION GATES:")
    lines.extend(f"- {c}" for c in criteria)
    lines.append("")
    lines.append("AVAILABLE TOOLS:")
    lines.append(tool_descriptions())
    lines.append("")
    lines.append(_INSTRUCTIONS)
    lines.append("")
    lines.append(_RESPONSE_FORMAT)
    return "\n".join(lines)
