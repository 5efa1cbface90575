"""Planner output protocol: extraction, validation, legacy formats and orchestration."""

from __future__ import annotations

from zace.planning.parser import (
    PlannerParse,
    parse_planner_json,
    parse_planner_output,
    parse_planner_output_detailed,
)
from zace.planning.validation import validate_planner_response, validate_tool_call

__all__ = [
    "PlannerParse",
    "parse_planner_json",
    "parse_planner_output",
    "parse_planner_output_detailed",
    "validate_planner_response",
    "validate_tool_call",
]
