from __future__ import annotations

from typing import Any, Dict, List

from langchain_core.messages import BaseMessage

from assistant.core.images import InlineImage
from assistant.providers.base import ProviderAdapter


# Gemini names the assistant side "model" and takes the system prompt separately.
ROLE_MAP = {"human": "user", "ai": "model"}


class GeminiAdapter(ProviderAdapter):
    name = "gemini"
    api_key_env = "GEMINI_API_KEY"

    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def auth_headers(self) -> Dict[str, str]:
        return {"x-goog-api-key": self.api_key or ""}

    def build_analyze_payload(self, image: InlineImage, prompt: str) -> Dict[str, Any]:
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"inline_data": {"mime_type": image.mime_type, "data": image.data}},
                        {"text": prompt},
                    ],
                }
            ]
        }

    def build_chat_payload(
        self, messages: List[BaseMessage], system_instruction: str
    ) -> Dict[str, Any]:
        return {
            "system_instruction": {"parts": [{"text": system_instruction}]},
            "contents": [
                {"role": ROLE_MAP[message.type], "parts": [{"text": message.content}]}
                for message in messages
            ],
        }

    def extract_text(self, payload: Any) -> str:
        try:
            parts = payload["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError):
            return ""
        if not isinstance(parts, list):
            return ""
        chunks = []
        for part in parts:
            text = part.get("text") if isinstance(part, dict) else None
            if isinstance(text, str):
                chunks.append(text)
        return "".join(chunks).strip()
