"""Tests for planner prompts."""

from __future__ import annotations

from zace.agents.base import AgentContext
from zace.prompts.planner import NO_COMPLETION_GATES, build_planner_prompt
from zace.prompts.repair import build_json_repair_prompt, build_json_retry_prompt


def test_planner_prompt_defaults() -> None:
    """It should mention the first step, the gate placeholder and every tool."""

    prompt = build_planner_prompt(AgentContext(task="add a README", max_steps=5))

    assert "TASK: add a README" in prompt
    assert "CURRENT STEP: 0 / 5" in prompt
    assert "This is the first step." in prompt
    assert f"- {NO_COMPLETION_GATES}" in prompt
    for tool in ("execute_command", "search_session_messages", "write_session_message"):
        assert tool in prompt
    assert '"gates": "none" | ["command one", "command two"]' in prompt


def test_planner_prompt_lists_file_summaries() -> None:
    """It should list known file summaries in the prompt."""

    context = AgentContext(task="t", max_steps=5, file_summaries={"src/app.py": "x" * 500})
    prompt = build_planner_prompt(context)
    assert "- src/app.py: " + "x" * 200 + "\n" in prompt


def test_repair_prompts_compact_and_truncate() -> None:
    """It should collapse whitespace and cap the reply preview."""

    previous = "COMPLETE:\n\n   done   " + "y" * 2000
    repair = build_json_repair_prompt(previous)
    retry = build_json_retry_prompt(previous)

    assert "Previous response preview: COMPLETE: done " in repair
    assert repair.endswith("...")
    assert len(repair.splitlines()[-1]) == len("Previous response preview: ") + 1200 + 3
    assert len(retry.splitlines()[-1]) == len("Last invalid response preview: ") + 800 + 3
    assert build_json_retry_prompt("short").endswith("Last invalid response preview: short")
