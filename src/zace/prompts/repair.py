"""Prompts asking the model to resend a malformed planner reply as strict JSON.

The agent loop uses these when a reply only parsed through the legacy formats or the
fallback question.
"""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def _preview(previous_response: str, limit: int) -> str:
    compact = _WHITESPACE_RE.sub(" ", previous_response).strip()
    if len(compact) > limit:
        return f"{compact[:limit]}..."
    return compact


def build_json_repair_prompt(previous_response: str) -> str:
    return "\n".join(
        [
            "Your previous planner response did not match the required strict JSON schema.",
            "Return strict JSON only, exactly matching the schema from the planner prompt.",
            "Do not include markdown, XML tags, or prose outside JSON.",
            f"Previous response preview: {_preview(previous_response, 1200)}",
        ]
    )


def build_json_retry_prompt(previous_response: str) -> str:
    return "\n".join(
        [
            "Retry the planner response now.",
            "Output must be strict JSON matching the planner schema and nothing else.",
            "Do not include markdown fences, XML tags, or explanatory text.",
            f"Last invalid response preview: {_preview(previous_response, 800)}",
        ]
    )
