from __future__ import annotations

import os
from typing import Optional, Sequence

from openai import AsyncOpenAI

from resumeiq.ai.types import ChatMessage
from resumeiq.core.config import settings


class OpenAIProvider:
    provider = "openai"

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ):
        self.model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._response_format = (os.getenv("OPENAI_RESPONSE_FORMAT") or "").strip().lower()
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            timeout=settings.ai_timeout_s,
            max_retries=settings.ai_max_retries,
        )

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        create_kwargs = {
            "model": self.model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }
        if self._response_format == "json":
            create_kwargs["response_format"] = {"type": "json_object"}

        response = await self._client.chat.completions.create(**create_kwargs)
        content = response.choices[0].message.content if response.choices else ""
        return (content or "").strip()
