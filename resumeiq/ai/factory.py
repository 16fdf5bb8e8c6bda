from resumeiq.ai.config import load_ai_config
from resumeiq.ai.types import AIClient

from resumeiq.ai.providers.gemini_provider import GeminiProvider
from resumeiq.ai.providers.openai_provider import OpenAIProvider


def get_ai_client(provider: str | None = None) -> AIClient:
    cfg = load_ai_config(provider)

    if cfg.provider == "openai":
        return OpenAIProvider(model=cfg.model)

    if cfg.provider == "gemini":
        return GeminiProvider(model=cfg.model)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
