"""Parsers for the legacy free-text planner protocol.

Before strict JSON replies, the planner answered with markers such as ``COMPLETE:``,
``ASK_USER:``, ``BLOCKED:`` or ``CONTINUE:`` followed by an embedded tool-call object.
Each parser here returns an action or ``None``; none of them raise.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

from zace.agents.actions import (
    AskUserAction,
    BlockedAction,
    CompleteAction,
    ContinueAction,
    ParseFailure,
    PlannerAction,
)
from zace.planning.validation import validate_tool_call
from zace.utils.json_extract import greedy_brace_span, loads_or_none

DEFAULT_COMPLETE_REASONING = "Task complete"
DEFAULT_ASK_USER_MESSAGE = "What concrete task should I perform?"
DEFAULT_BLOCKED_MESSAGE = "Blocked without a clear reason."
DEFAULT_CONTINUE_REASONING = "Executing tool"

GATE_SEPARATOR = ";;"

_COMPLETE_MARKER_RE = re.compile(r"COMPLETE:", re.IGNORECASE)
_ASK_USER_RE = re.compile(r"ASK_USER:(?P<body>.*)", re.IGNORECASE | re.DOTALL)
_BLOCKED_RE = re.compile(r"BLOCKED:(?P<body>.*)", re.IGNORECASE | re.DOTALL)
_CONTINUE_PREFIX_RE = re.compile(r"^\s*CONTINUE:", re.IGNORECASE)
_LINE_SPLIT_RE = re.compile(r"\r?\n")

LegacyParser = Callable[[str], Optional[PlannerAction]]


def split_gate_commands(raw: str) -> list[str]:
    """Split a ``GATES:`` value on ``;;``, dropping empty commands."""

    return [part.strip() for part in raw.split(GATE_SEPARATOR) if part.strip()]


def parse_legacy_complete(content: str) -> Optional[CompleteAction]:
    """Parse ``COMPLETE: <reasoning>`` with optional ``GATES:`` directive lines.

    ``GATES: none`` disables gating; any other ``GATES:`` value adds ``;;``-separated
    commands. Several ``GATES:`` lines accumulate in order.
    """

    m = _COMPLETE_MARKER_RE.search(content)
    if not m:
        return None

    body = content[m.end() :].strip()
    gate_commands: list[str] = []
    declared_none = False
    reasoning_lines: list[str] = []

    for line in _LINE_SPLIT_RE.split(body):
        stripped = line.strip()
        if not stripped.upper().startswith("GATES:"):
            reasoning_lines.append(line)
            continue

        raw = stripped[len("GATES:") :].strip()
        if not raw:
            continue
        if raw.lower() == "none":
            declared_none = True
            continue
        gate_commands.extend(split_gate_commands(raw))

    reasoning = "\n".join(reasoning_lines).strip() or DEFAULT_COMPLETE_REASONING
    return CompleteAction(
        reasoning=reasoning,
        completion_gate_commands=tuple(gate_commands),
        completion_gates_declared_none=declared_none,
    )


def parse_legacy_ask_user(content: str) -> Optional[AskUserAction]:
    """Parse ``ASK_USER: <question>``; the question is both reasoning and user message."""

    m = _ASK_USER_RE.search(content)
    if not m:
        return None
    message = m.group("body").strip() or DEFAULT_ASK_USER_MESSAGE
    return AskUserAction(reasoning=message, user_message=message)


def parse_legacy_blocked(content: str) -> Optional[BlockedAction]:
    """Parse ``BLOCKED: <reason>``."""

    m = _BLOCKED_RE.search(content)
    if not m:
        return None
    message = m.group("body").strip() or DEFAULT_BLOCKED_MESSAGE
    return BlockedAction(reasoning=message, user_message=message)


def parse_legacy_continue(content: str) -> Optional[ContinueAction]:
    """Parse ``CONTINUE: <reasoning> {"name": ..., "arguments": {...}}``.

    Malformed JSON and tool calls that fail strict validation are no match.
    """

    candidate = greedy_brace_span(content)
    if candidate is None:
        return None
    payload = loads_or_none(candidate)
    if payload is None:
        return None
    tool_call = validate_tool_call(payload)
    if isinstance(tool_call, ParseFailure):
        return None

    prefix = content[: content.find("{")]
    reasoning = _CONTINUE_PREFIX_RE.sub("", prefix, count=1).strip() or DEFAULT_CONTINUE_REASONING
    return ContinueAction(reasoning=reasoning, tool_call=tool_call)


LEGACY_PARSERS: tuple[LegacyParser, ...] = (
    parse_legacy_complete,
    parse_legacy_ask_user,
    parse_legacy_blocked,
    parse_legacy_continue,
)


def parse_legacy(content: str) -> Optional[PlannerAction]:
    """Try each legacy parser in priority order; the first match wins."""

    for parser in LEGACY_PARSERS:
        action = parser(content)
        if action is not None:
            return action
    return None
