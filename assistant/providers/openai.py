from __future__ import annotations

from typing import Any, Dict, List

from langchain_core.messages import BaseMessage

from assistant.core.images import InlineImage
from assistant.providers.base import ProviderAdapter


ROLE_MAP = {"human": "user", "ai": "assistant"}


class OpenAIAdapter(ProviderAdapter):
    """OpenAI-compatible ``/chat/completions`` endpoint.

    Chat turns carry plain string content; the analysis turn uses typed
    parts with the image passed back as its data URL.
    """

    name = "openai"
    api_key_env = "OPENAI_API_KEY"

    def endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    def auth_headers(self) -> Dict[str, str]:
        return {"authorization": f"Bearer {self.api_key or ''}"}

    @property
    def label(self) -> str:
        return "OpenAI"

    def build_analyze_payload(self, image: InlineImage, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt},
                        {"type": "image_url", "image_url": {"url": image.data_url}},
                    ],
                }
            ],
        }

    def build_chat_payload(
        self, messages: List[BaseMessage], system_instruction: str
    ) -> Dict[str, Any]:
        turns = [{"role": "system", "content": system_instruction}]
        turns.extend(
            {"role": ROLE_MAP[message.type], "content": message.content} for message in messages
        )
        return {"model": self.model, "messages": turns}

    def extract_text(self, payload: Any) -> str:
        try:
            content = payload["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return ""
        if isinstance(content, str):
            return content.strip()
        if isinstance(content, list):
            # Some compatible servers answer with typed parts.
            return "".join(
                part.get("text", "")
                for part in content
                if isinstance(part, dict) and isinstance(part.get("text"), str)
            ).strip()
        return ""
