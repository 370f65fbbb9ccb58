from __future__ import annotations

from typing import Optional

import httpx

from assistant.providers.base import ProviderAdapter
from assistant.providers.gemini import GeminiAdapter
from assistant.providers.openai import OpenAIAdapter
from config.settings import Settings


def build_provider(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
) -> ProviderAdapter:
    if settings.provider == "gemini":
        return GeminiAdapter(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout=settings.provider_timeout,
            retries=settings.provider_retries,
            transport=transport,
        )
    if settings.provider == "openai":
        return OpenAIAdapter(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout=settings.provider_timeout,
            retries=settings.provider_retries,
            transport=transport,
        )
    raise ValueError(f"Unknown LLM_PROVIDER '{settings.provider}' (expected gemini or openai)")


__all__ = ["ProviderAdapter", "GeminiAdapter", "OpenAIAdapter", "build_provider"]
