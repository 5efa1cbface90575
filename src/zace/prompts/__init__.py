from __future__ import annotations

from zace.prompts.planner import PLANNER_SYSTEM_PROMPT, build_planner_prompt
from zace.prompts.repair import build_json_repair_prompt, build_json_retry_prompt

__all__ = [
    "PLANNER_SYSTEM_PROMPT",
    "build_planner_prompt",
    "build_json_repair_prompt",
    "build_json_retry_prompt",
]
