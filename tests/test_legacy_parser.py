"""Tests for the legacy marker-based planner formats."""

from __future__ import annotations

from zace.agents.actions import AskUserAction, BlockedAction, CompleteAction, ContinueAction, ToolCall
from zace.planning.legacy import (
    parse_legacy,
    parse_legacy_ask_user,
    parse_legacy_blocked,
    parse_legacy_complete,
    parse_legacy_continue,
    split_gate_commands,
)


def test_split_gate_commands_drops_empty_segments() -> None:
    """It should trim segments and drop empty ones."""

    assert split_gate_commands("a ;; b ;;  ;; c") == ["a", "b", "c"]


def test_legacy_complete_with_gates() -> None:
    """It should treat GATES lines as directives, not reasoning, and keep their order."""

    text = "Some preamble\ncomplete: All tests pass\nGATES: pytest -q ;; ruff check .\n  gates: mypy src\nBye"
    action = parse_legacy_complete(text)
    assert action == CompleteAction(
        reasoning="All tests pass\nBye",
        completion_gate_commands=("pytest -q", "ruff check .", "mypy src"),
        completion_gates_declared_none=False,
    )


def test_legacy_complete_gates_none_and_defaults() -> None:
    """It should disable gating on GATES: none and default an empty body's reasoning."""

    action = parse_legacy_complete("COMPLETE:\nGATES: None\nGATES:   ")
    assert action == CompleteAction(
        reasoning="Task complete",
        completion_gate_commands=(),
        completion_gates_declared_none=True,
    )


def test_legacy_complete_requires_marker() -> None:
    """It should not match text without a COMPLETE marker."""

    assert parse_legacy_complete("all done") is None


def test_legacy_ask_user() -> None:
    """It should use the question as both reasoning and user message."""

    action = parse_legacy_ask_user("thinking...\nask_user:  Which branch should I use?  ")
    assert action == AskUserAction(reasoning="Which branch should I use?", user_message="Which branch should I use?")
    assert parse_legacy_ask_user("ASK_USER:") == AskUserAction(
        reasoning="What concrete task should I perform?",
        user_message="What concrete task should I perform?",
    )
    assert parse_legacy_ask_user("nothing here") is None


def test_legacy_blocked() -> None:
    """It should capture everything after the first BLOCKED: marker."""

    action = parse_legacy_blocked("BLOCKED: missing credentials\nfor the registry")
    assert action == BlockedAction(
        reasoning="missing credentials\nfor the registry",
        user_message="missing credentials\nfor the registry",
    )
    assert parse_legacy_blocked("Blocked:   ") == BlockedAction(
        reasoning="Blocked without a clear reason.",
        user_message="Blocked without a clear reason.",
    )


def test_legacy_continue_with_embedded_tool_call() -> None:
    """It should keep the text before the first brace, minus the CONTINUE: marker, as reasoning."""

    text = 'CONTINUE: list the repo\n{"name": "execute_command", "arguments": {"command": "ls -la"}}'
    action = parse_legacy_continue(text)
    assert action == ContinueAction(
        reasoning="list the repo",
        tool_call=ToolCall(name="execute_command", arguments={"command": "ls -la"}),
    )

    bare = parse_legacy_continue('{"name": "execute_command", "arguments": {"command": "pwd"}}')
    assert bare is not None
    assert bare.reasoning == "Executing tool"


def test_legacy_continue_swallows_invalid_tool_calls() -> None:
    """It should treat bad JSON, unknown tools and missing arguments as no match."""

    assert parse_legacy_continue("CONTINUE: { broken") is None
    assert parse_legacy_continue("CONTINUE: { not valid json { still not valid } }") is None
    assert parse_legacy_continue('CONTINUE: {"name": "delete_everything", "arguments": {}}') is None
    assert parse_legacy_continue('CONTINUE: {"name": "execute_command", "arguments": {}}') is None
    assert (
        parse_legacy_continue('CONTINUE: {"name": "execute_command", "arguments": {"command": "ls", "x": 1}}')
        is None
    )


def test_parse_legacy_priority_order() -> None:
    """It should try COMPLETE, then ASK_USER, then BLOCKED, then CONTINUE."""

    assert isinstance(parse_legacy("BLOCKED: a\nASK_USER: b\nCOMPLETE: c"), CompleteAction)
    assert isinstance(parse_legacy("BLOCKED: a\nASK_USER: b"), AskUserAction)
    assert isinstance(
        parse_legacy('BLOCKED: stuck {"name": "execute_command", "arguments": {"command": "ls"}}'),
        BlockedAction,
    )
    assert parse_legacy("nothing recognizable") is None
