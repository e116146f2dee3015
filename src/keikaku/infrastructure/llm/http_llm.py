"""
HTTP adapters for the LlmService port.

OpenAiLlmService speaks the OpenAI chat completions protocol, which most
hosted and local model servers also accept. GeminiLlmService calls Google's
generateContent API. Transport, status and decoding failures all surface
as LlmError.
"""

import logging
from typing import Any

import httpx

from keikaku.domain.constants import LLM_REQUEST_TIMEOUT
from keikaku.domain.errors import LlmError
from keikaku.domain.ports import LlmService

OPENAI_BASE_URL = "https://api.openai.com/v1"
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_DEFAULT_MODEL = "gemini-1.5-flash"


class HttpLlmService(LlmService):
    """Shared request handling for JSON-over-HTTP providers."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        client: httpx.AsyncClient | None = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._client = client

    async def _post(self, url: str, payload: dict[str, Any], headers: dict[str, str]) -> Any:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=LLM_REQUEST_TIMEOUT)
        try:
            resp = await self._client.post(url, json=payload, headers=headers)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            self.logger.error(f"LLM request to {self.model} failed with HTTP {status}")
            raise LlmError(f"LLM request failed with HTTP {status}") from e
        except httpx.HTTPError as e:
            self.logger.error(f"LLM request to {self.model} failed: {e!r}")
            raise LlmError(f"LLM request failed: {e}") from e
        except ValueError as e:
            raise LlmError(f"LLM response is not valid JSON: {e}") from e

    @staticmethod
    def _require_text(value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise LlmError("LLM response contains no text")
        return value.strip()

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None


class OpenAiLlmService(HttpLlmService):
    def __init__(
        self,
        api_key: str = "",
        model: str = OPENAI_DEFAULT_MODEL,
        base_url: str = OPENAI_BASE_URL,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(api_key, model, base_url, client)

    async def generate_text(self, prompt: str) -> str:
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        data = await self._post(f"{self.base_url}/chat/completions", payload, headers)
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise LlmError(f"unexpected chat completion response: {data!r}") from e
        return self._require_text(content)


class GeminiLlmService(HttpLlmService):
    def __init__(
        self,
        api_key: str,
        model: str = GEMINI_DEFAULT_MODEL,
        base_url: str = GEMINI_BASE_URL,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(api_key, model, base_url, client)

    async def generate_text(self, prompt: str) -> str:
        headers = {"x-goog-api-key": self.api_key}
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        url = f"{self.base_url}/models/{self.model}:generateContent"
        data = await self._post(url, payload, headers)
        try:
            parts = data["candidates"][0]["content"]["parts"]
            content = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise LlmError(f"unexpected generateContent response: {data!r}") from e
        return self._require_text(content)
