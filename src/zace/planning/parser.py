"""Planner output parsing.

:func:`parse_planner_output` is total: every string resolves to an action. Strict JSON
is tried first, then the legacy marker formats, then a fixed clarifying question.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from zace.agents.actions import AskUserAction, ParseFailure, ParseOutcome, PlannerAction
from zace.logging import get_logger
from zace.planning.legacy import parse_legacy
from zace.planning.validation import validate_planner_response
from zace.utils.json_extract import extract_json_payload

logger = get_logger(__name__)

FALLBACK_REASONING = (
    "I need a clearer task to continue. Please tell me exactly what file/path and outcome you want."
)
FALLBACK_USER_MESSAGE = (
    "What would you like me to do next? Please include the target file/path and expected outcome."
)

ParseMode = Literal["strict", "legacy", "fallback"]


@dataclass(frozen=True)
class PlannerParse:
    """An action plus which strategy produced it.

    ``failure_reason`` carries the strict-mode validation failure whenever the action
    did not come from strict JSON, for repair prompts and diagnostics.
    """

    action: PlannerAction
    mode: ParseMode
    failure_reason: Optional[str] = None


def fallback_action() -> AskUserAction:
    return AskUserAction(reasoning=FALLBACK_REASONING, user_message=FALLBACK_USER_MESSAGE)


def parse_planner_json(content: str) -> ParseOutcome:
    """Strict mode only: extract a JSON payload and validate it."""

    payload = extract_json_payload(content)
    if payload is None:
        return ParseFailure("missing_json_payload")
    return validate_planner_response(payload)


def parse_planner_output_detailed(content: str) -> PlannerParse:
    """Parse planner output and report the strategy that matched."""

    strict = parse_planner_json(content)
    if not isinstance(strict, ParseFailure):
        return PlannerParse(action=strict, mode="strict")

    logger.debug("Strict planner parse failed: %s", strict.reason)

    legacy = parse_legacy(content)
    if legacy is not None:
        logger.debug("Planner output matched legacy format: %s", legacy.kind)
        return PlannerParse(action=legacy, mode="legacy", failure_reason=strict.reason)

    logger.debug("Planner output unrecognized; using fallback question")
    return PlannerParse(action=fallback_action(), mode="fallback", failure_reason=strict.reason)


def parse_planner_output(content: str) -> PlannerAction:
    """Turn one raw model reply into exactly one planner action."""

    return parse_planner_output_detailed(content).action
