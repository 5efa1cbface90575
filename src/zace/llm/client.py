"""OpenAI-compatible async LLM client.

This wraps the `openai` Python SDK and provides a minimal chat interface with optional
token streaming and token-usage reporting.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Literal, Mapping, Protocol, Sequence

from openai import AsyncOpenAI

from zace.config import Settings
from zace.logging import get_logger

logger = get_logger(__name__)

Role = Literal["system", "user", "assistant", "tool"]


@dataclass(frozen=True)
class ChatMessage:
    """A chat message."""

    role: Role
    content: str


@dataclass(frozen=True)
class Usage:
    """Token accounting reported by the provider for one call."""

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0


@dataclass(frozen=True)
class LLMResponse:
    """Assistant content plus usage, when the provider reported it."""

    content: str
    usage: Usage | None = None


class ChatClient(Protocol):
    """What the planner needs from a model client."""

    async def chat(
        self,
        messages: Sequence[ChatMessage],
        *,
        stream: bool = False,
        on_token: Callable[[str], None] | None = None,
        response_format: Mapping[str, Any] | None = None,
    ) -> LLMResponse: ...


def _non_negative_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    parsed = int(value)
    return parsed if parsed >= 0 else None


def parse_usage(raw: Any) -> Usage | None:
    """Normalize a provider usage payload.

    Missing counts are derived from the other two where possible; a payload without any
    count yields ``None``.
    """

    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raw = getattr(raw, "model_dump", lambda: {})()

    prompt = _non_negative_int(raw.get("prompt_tokens"))
    completion = _non_negative_int(raw.get("completion_tokens"))
    total = _non_negative_int(raw.get("total_tokens"))

    if prompt is None and completion is None and total is None:
        return None
    if prompt is None and total is not None and completion is not None:
        prompt = max(0, total - completion)
    if completion is None and total is not None and prompt is not None:
        completion = max(0, total - prompt)
    prompt = prompt or 0
    completion = completion or 0
    if total is None:
        total = prompt + completion
    return Usage(input_tokens=prompt, output_tokens=completion, total_tokens=total)


class LLMClient:
    """LLM client using the OpenAI-compatible Chat Completions API."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        if not settings.openai_api_key:
            raise ValueError(
                "Missing ZACE_OPENAI_API_KEY. "
                "Set it in environment variables or a .env file."
            )

        self._client = AsyncOpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)

    async def chat(
        self,
        messages: Sequence[ChatMessage],
        *,
        stream: bool = False,
        on_token: Callable[[str], None] | None = None,
        response_format: Mapping[str, Any] | None = None,
    ) -> LLMResponse:
        """Generate a completion.

        Args:
            messages: Chat messages.
            stream: Stream the reply; each content delta is passed to ``on_token``.
            on_token: Token callback, called in arrival order.
            response_format: Optional ``response_format`` payload (e.g. a JSON schema).

        Returns:
            Assistant content and usage.
        """

        payload: list[dict[str, str]] = [{"role": m.role, "content": m.content} for m in messages]
        kwargs: dict[str, Any] = {
            "model": self._settings.openai_model,
            "messages": payload,
            "temperature": self._settings.openai_temperature,
            "timeout": self._settings.openai_timeout_s,
        }
        if response_format is not None:
            kwargs["response_format"] = dict(response_format)

        start_time = time.monotonic()
        if stream:
            result = await self._stream(kwargs, on_token)
        else:
            resp = await self._client.chat.completions.create(**kwargs)
            content = ""
            if resp.choices and resp.choices[0].message and resp.choices[0].message.content:
                content = resp.choices[0].message.content
            result = LLMResponse(content=content, usage=parse_usage(resp.usage))

        logger.debug(
            "LLM completion finished in %.0fms (tokens=%s)",
            (time.monotonic() - start_time) * 1000,
            result.usage.total_tokens if result.usage else None,
        )
        return result

    async def _stream(
        self,
        kwargs: dict[str, Any],
        on_token: Callable[[str], None] | None,
    ) -> LLMResponse:
        chunks: list[str] = []
        usage: Usage | None = None
        response = await self._client.chat.completions.create(
            **kwargs,
            stream=True,
            stream_options={"include_usage": True},
        )
        async for chunk in response:
            if chunk.usage is not None:
                usage = parse_usage(chunk.usage)
            if not chunk.choices:
                continue
            token = chunk.choices[0].delta.content
            if not token:
                continue
            chunks.append(token)
            if on_token is not None:
                on_token(token)
        return LLMResponse(content="".join(chunks), usage=usage)
