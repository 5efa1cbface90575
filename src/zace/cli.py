"""CLI entrypoints for Zace."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import typer

from zace.agents.base import AgentContext, ConversationMemory
from zace.agents.planner import PlanOptions, plan
from zace.config import load_settings
from zace.llm.client import LLMClient
from zace.logging import configure_logging, get_logger, run_context
from zace.planning.artifacts import InvalidPlannerAttempt, persist_invalid_planner_output
from zace.planning.parser import parse_planner_output_detailed
from zace.planning.response_format import PLANNER_RESPONSE_JSON_SCHEMA
from zace.prompts.planner import PLANNER_SYSTEM_PROMPT

app = typer.Typer(add_completion=False, help="Zace planner output protocol CLI")
logger = get_logger(__name__)


def _dump(data: dict) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


@app.command()
def parse(
    file: Path | None = typer.Argument(
        None,
        help="File holding one raw model reply. Reads stdin when omitted.",
        show_default=False,
    ),
    show_mode: bool = typer.Option(False, "--mode", help="Also report which parse strategy matched"),
) -> None:
    """Parse a raw planner reply and print the resulting action as JSON."""

    if file is not None:
        if not file.exists():
            raise typer.BadParameter(f"File not found: {file}")
        content = file.read_text(encoding="utf-8", errors="replace")
    else:
        content = sys.stdin.read()

    parsed = parse_planner_output_detailed(content)
    data = parsed.action.to_dict()
    if show_mode:
        data = {"mode": parsed.mode, "failureReason": parsed.failure_reason, "result": data}
    typer.echo(_dump(data))


@app.command(name="plan")
def plan_command(
    task: str = typer.Argument(..., help="Task for the agent"),
    stream: bool | None = typer.Option(None, "--stream/--no-stream", help="Echo tokens as they arrive"),
    gate: list[str] = typer.Option([], "--gate", help="Completion gate command shown to the model"),
) -> None:
    """Run a single planning step against the configured model."""

    settings = load_settings()
    configure_logging(settings.log_level)

    do_stream = settings.planner_stream if stream is None else stream
    memory = ConversationMemory()
    memory.add_message("system", PLANNER_SYSTEM_PROMPT)
    context = AgentContext(task=task, max_steps=settings.planner_max_steps)
    options = PlanOptions(
        completion_criteria=gate,
        stream=do_stream,
        on_stream_start=lambda: typer.echo("[LLM:planner]", err=True),
        on_stream_token=lambda token: typer.echo(token, nl=False, err=True),
        on_stream_end=lambda: typer.echo("", err=True),
        structured_output=settings.planner_structured_output,
        schema_strict=settings.planner_schema_strict,
    )

    llm = LLMClient(settings)
    try:
        with run_context(run_id="cli"):
            result = asyncio.run(plan(llm, context, memory, options))
    except Exception as exc:  # noqa: BLE001
        logger.error("Planner call failed: %s", exc)
        raise typer.Exit(code=1) from exc

    if result.degraded and result.failure_reason is not None:
        persist_invalid_planner_output(
            [
                InvalidPlannerAttempt(
                    content=result.raw_content,
                    parse_reason=result.failure_reason,
                    transport_structured=options.structured_output,
                )
            ],
            settings.planner_invalid_artifacts_dir,
            max_chars=settings.planner_max_invalid_artifact_chars,
            output_mode="structured" if options.structured_output else "auto",
        )

    output = result.action.to_dict()
    if result.usage is not None:
        output["usage"] = {
            "inputTokens": result.usage.input_tokens,
            "outputTokens": result.usage.output_tokens,
            "totalTokens": result.usage.total_tokens,
        }
    typer.echo(_dump(output))


@app.command()
def schema() -> None:
    """Print the JSON Schema of a strict planner reply."""

    typer.echo(_dump(PLANNER_RESPONSE_JSON_SCHEMA))


if __name__ == "__main__":
    app()
