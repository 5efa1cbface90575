"""JSON payload extraction from free-form model output.

Models often wrap structured output in prose or markdown fences. The helpers here
recover a JSON value anyway, trying strategies from strict to lenient, and return
``None`` instead of raising when nothing parses.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

from zace.logging import get_logger

logger = get_logger(__name__)


_FENCE_RE = re.compile(r"```(?:json)?\s*(?P<body>.*?)```", re.DOTALL | re.IGNORECASE)


def loads_or_none(text: str) -> Optional[Any]:
    """Decode JSON, returning ``None`` on any decoding problem.

    ``RecursionError`` is absorbed too: deeply nested input must not escape as an error.
    """

    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        return None


def greedy_brace_span(text: str) -> Optional[str]:
    """Return the substring from the first ``{`` through the last ``}``, if any.

    Being greedy, the span can swallow unrelated braces in surrounding prose.
    """

    start = text.find("{")
    if start == -1:
        return None
    end = text.rfind("}")
    if end < start:
        return None
    return text[start : end + 1]


def extract_json_payload(text: str) -> Optional[Any]:
    """Extract one JSON value from model output.

    Strategies, first success wins:
        1. The whole trimmed text is JSON.
        2. The body of the first fenced block (```` ``` ```` with optional ``json`` tag).
        3. The greedy ``{ ... }`` span from the first ``{`` to the last ``}``.

    A decoded ``null`` counts as no value.
    """

    if not text:
        return None

    cleaned = text.strip()

    value = loads_or_none(cleaned)
    if value is not None:
        return value

    m = _FENCE_RE.search(cleaned)
    if m:
        value = loads_or_none(m.group("body"))
        if value is not None:
            return value
        logger.debug("extract_json_payload: fenced block is not valid JSON")

    candidate = greedy_brace_span(cleaned)
    if candidate is not None:
        value = loads_or_none(candidate)
        if value is not None:
            return value
        logger.debug("extract_json_payload: brace span is not valid JSON")

    return None
