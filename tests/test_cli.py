"""Tests for the CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from zace.cli import app
from zace.llm.client import LLMResponse, Usage

runner = CliRunner()


def test_parse_command_reads_file(tmp_path: Path) -> None:
    """It should print the parsed action as JSON."""

    reply = tmp_path / "reply.txt"
    reply.write_text("COMPLETE: shipped\nGATES: pytest ;; ruff check .", encoding="utf-8")

    result = runner.invoke(app, ["parse", str(reply)])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "action": "complete",
        "reasoning": "shipped",
        "completionGateCommands": ["pytest", "ruff check ."],
        "completionGatesDeclaredNone": False,
    }


def test_parse_command_reads_stdin_and_reports_mode() -> None:
    """It should read stdin when no file is given and report the strategy used."""

    result = runner.invoke(app, ["parse", "--mode"], input="hello?")

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["mode"] == "fallback"
    assert data["failureReason"] == "missing_json_payload"
    assert data["result"]["action"] == "ask_user"


def test_parse_command_missing_file(tmp_path: Path) -> None:
    """It should fail with a usage error for a missing file."""

    result = runner.invoke(app, ["parse", str(tmp_path / "nope.txt")])
    assert result.exit_code != 0


def test_schema_command() -> None:
    """It should print the response JSON Schema."""

    result = runner.invoke(app, ["schema"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["required"] == ["action", "reasoning"]


class _ReplyingClient:
    """Chat client that answers every call with the same text."""

    def __init__(self, content: str) -> None:
        self.content = content

    async def chat(self, messages: Any, **kwargs: Any) -> LLMResponse:
        return LLMResponse(content=self.content, usage=Usage(3, 2, 5))


def _plan_with_reply(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, reply: str) -> Path:
    artifacts = tmp_path / "artifacts"
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ZACE_ENV_FILE", raising=False)
    monkeypatch.setenv("ZACE_PLANNER_INVALID_ARTIFACTS_DIR", str(artifacts))
    monkeypatch.setenv("ZACE_PLANNER_MAX_INVALID_ARTIFACT_CHARS", "200")
    monkeypatch.setattr("zace.cli.LLMClient", lambda settings: _ReplyingClient(reply))
    return artifacts


def test_plan_command_records_non_strict_reply(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """It should save a reply that needed the fallback under the configured directory."""

    reply = "I am not sure what to do next. " * 20
    artifacts = _plan_with_reply(monkeypatch, tmp_path, reply)

    result = runner.invoke(app, ["plan", "fix the build", "--no-stream"])

    assert result.exit_code == 0, result.output
    files = list(artifacts.glob("invalid-*.json"))
    assert len(files) == 1
    saved = json.loads(files[0].read_text(encoding="utf-8"))
    assert saved["attempts"][0]["parseReason"] == "missing_json_payload"
    assert saved["attempts"][0]["response"].startswith(reply.strip()[:200])
    assert "[truncated" in saved["attempts"][0]["response"]


def test_plan_command_skips_artifacts_for_strict_reply(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """It should print the action and usage without writing an artifact."""

    artifacts = _plan_with_reply(
        monkeypatch, tmp_path, '{"action":"blocked","reasoning":"no access","userMessage":"grant it"}'
    )

    result = runner.invoke(app, ["plan", "deploy", "--no-stream"])

    assert result.exit_code == 0, result.output
    assert not artifacts.exists()
    assert '"action": "blocked"' in result.stdout
    assert '"totalTokens": 5' in result.stdout
