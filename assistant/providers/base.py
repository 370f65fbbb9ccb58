from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

import httpx
from langchain_core.messages import BaseMessage

from assistant.core.conversation import normalize_conversation
from assistant.core.errors import ProviderError
from assistant.core.images import InlineImage, parse_image_data_url
from assistant.core.prompt import (
    ANALYZE_FALLBACK,
    ANALYZE_PROMPT,
    CHAT_FALLBACK,
    CHAT_SYSTEM_INSTRUCTION,
)


logger = logging.getLogger(__name__)


class ProviderAdapter(ABC):
    """Shapes requests for one model vendor and reads its replies back as text.

    ``analyze`` and ``chat`` are the only public operations. Each validates
    locally, makes exactly one outbound call and returns plain text.
    Subclasses supply the vendor wire format; transport, error mapping and
    fallbacks live here.
    """

    name = "base"
    api_key_env = "API_KEY"

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: str,
        timeout: float = 60.0,
        retries: int = 0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retries = retries
        self._transport = transport

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def analyze(self, image_data_url: str) -> str:
        image = parse_image_data_url(image_data_url)
        payload = self.build_analyze_payload(image, ANALYZE_PROMPT)
        text = await self._complete("analyze", payload)
        return text or ANALYZE_FALLBACK

    async def chat(self, conversation: Sequence[Any]) -> str:
        messages = normalize_conversation(conversation)
        payload = self.build_chat_payload(messages, CHAT_SYSTEM_INSTRUCTION)
        text = await self._complete("chat", payload)
        return text or CHAT_FALLBACK

    # ------------------------------------------------------------------
    # Vendor wire format
    # ------------------------------------------------------------------
    @abstractmethod
    def build_analyze_payload(self, image: InlineImage, prompt: str) -> Dict[str, Any]:
        """Single user turn carrying the image and the instruction prompt."""

    @abstractmethod
    def build_chat_payload(
        self, messages: List[BaseMessage], system_instruction: str
    ) -> Dict[str, Any]:
        """Full transcript plus the system instruction."""

    @abstractmethod
    def extract_text(self, payload: Any) -> str:
        """Pull the reply text out of the response envelope; ``""`` if absent."""

    @abstractmethod
    def endpoint(self) -> str:
        ...

    @abstractmethod
    def auth_headers(self) -> Dict[str, str]:
        ...

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def _client(self) -> httpx.AsyncClient:
        transport = self._transport or httpx.AsyncHTTPTransport(retries=self.retries)
        return httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def _complete(self, operation: str, body: Dict[str, Any]) -> str:
        if not self.api_key:
            raise ProviderError(f"{self.api_key_env} is not configured")

        headers = {"content-type": "application/json", **self.auth_headers()}
        try:
            async with self._client() as client:
                response = await client.post(self.endpoint(), json=body, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("%s %s request failed: %s", self.name, operation, exc)
            raise ProviderError(f"{self.label} request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            detail = json.dumps(data) if data is not None else response.text
            logger.error(
                "%s %s returned status=%s model=%s",
                self.name,
                operation,
                response.status_code,
                self.model,
            )
            raise ProviderError(
                f"{self.label} error: {response.status_code} {detail}",
                provider_status=response.status_code,
                detail=detail,
            )

        if data is None:
            raise ProviderError(f"{self.label} returned a non-JSON response")

        text = self.extract_text(data)
        logger.info(
            "%s %s ok: model=%s status=%s chars=%s",
            self.name,
            operation,
            self.model,
            response.status_code,
            len(text),
        )
        return text

    @property
    def label(self) -> str:
        return self.name.capitalize()
