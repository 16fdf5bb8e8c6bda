from __future__ import annotations

import os
from typing import Optional, Sequence

import google.generativeai as genai

from resumeiq.ai.types import ChatMessage
from resumeiq.core.config import settings


class GeminiProvider:
    provider = "gemini"

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        temperature: float = 0.7,
        max_output_tokens: int = 2000,
    ):
        self.model = model
        key = (api_key or os.getenv("GEMINI_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("GEMINI_API_KEY is missing")

        genai.configure(api_key=key)
        self._generation_config = genai.GenerationConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        prompt = "\n\n".join(m.content for m in messages if m.role != "system")
        model = genai.GenerativeModel(self.model, system_instruction=system or None)
        response = await model.generate_content_async(
            prompt,
            generation_config=self._generation_config,
            request_options={"timeout": settings.ai_timeout_s},
        )
        return (response.text or "").strip()
