"""Persist rejected planner replies for later inspection.

`zace plan` and the agent loop call this once a reply could not be parsed strictly; the
parser itself never touches the filesystem.
"""

from __future__ import annotations

import json
import time
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Sequence

from zace.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class InvalidPlannerAttempt:
    """One model reply that failed strict parsing."""

    content: str
    parse_reason: str
    transport_structured: bool = False


def truncate_for_artifact(content: str, max_chars: int) -> str:
    if len(content) <= max_chars:
        return content
    return f"{content[:max_chars]}\n...[truncated {len(content) - max_chars} chars]"


def persist_invalid_planner_output(
    attempts: Sequence[InvalidPlannerAttempt],
    directory: Path,
    *,
    max_chars: int = 4000,
    output_mode: str = "auto",
) -> Path | None:
    """Write the failed attempts of one planning step to a JSON file.

    Args:
        attempts: Failed replies, oldest first.
        directory: Target directory, created if missing.
        max_chars: Per-reply character cap.
        output_mode: Planner output mode in effect, recorded for context.

    Returns:
        Path of the written file, or ``None`` when there is nothing to record.
    """

    if not attempts:
        return None

    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"invalid-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}.json"

    payload = {
        "attempts": [
            {
                "attempt": index,
                "parseReason": attempt.parse_reason,
                "response": truncate_for_artifact(attempt.content, max_chars),
                "transportStructured": attempt.transport_structured,
            }
            for index, attempt in enumerate(attempts, start=1)
        ],
        "outputMode": output_mode,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    logger.info("Recorded %d invalid planner replies at %s", len(attempts), path)
    return path
