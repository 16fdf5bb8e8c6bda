import os
from dataclasses import dataclass

_DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "gemini": "gemini-pro",
}


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str


def load_ai_config(provider: str | None = None) -> AIConfig:
    name = (provider or os.getenv("AI_PROVIDER") or "openai").strip().lower()
    model = (os.getenv("AI_MODEL") or "").strip() or _DEFAULT_MODELS.get(name, "")
    return AIConfig(provider=name, model=model)
