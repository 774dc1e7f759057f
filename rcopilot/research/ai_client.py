"""Async HTTP client for OpenAI-compatible chat-completions endpoints."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

import httpx

from rcopilot.core.config import AIServiceConfig, MIN_RESPONSE_LENGTH

LOGGER = logging.getLogger(__name__)

NO_RESULT = "No result"
COMPLETIONS_PATH = "/chat/completions"


class AIServiceError(RuntimeError):
    """The service answered, but not with usable content."""


@dataclass(slots=True)
class CompletionOutcome:
    """Either usable text or the reason the caller should fall back."""

    text: str | None = None
    failure: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.text is not None and self.failure is None

    @classmethod
    def fallback(cls, reason: str, *, status_code: int | None = None) -> "CompletionOutcome":
        return cls(text=None, failure=reason, status_code=status_code)


class ChatCompletionClient:
    def __init__(
        self,
        config: AIServiceConfig,
        *,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._api_key = api_key
        if client is None:
            self._client = httpx.AsyncClient(base_url=config.api_base, timeout=config.timeout)
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False

    @property
    def model(self) -> str:
        return self._config.model

    async def complete(self, prompt: str) -> str:
        """Send one user-role prompt and return the first choice's message text."""

        payload = {
            "model": self._config.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        response = await self._client.post(
            COMPLETIONS_PATH,
            json=payload,
            headers=self._build_headers(),
        )
        LOGGER.debug("Chat completion response %s from %s", response.status_code, self._config.provider)
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as exc:
            raise AIServiceError("Chat completion endpoint returned non-JSON payload") from exc
        return extract_message_text(data)

    async def attempt(self, prompt: str, *, min_length: int = MIN_RESPONSE_LENGTH) -> CompletionOutcome:
        """Like :meth:`complete`, but every failure becomes a fallback outcome."""

        try:
            text = await self.complete(prompt)
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            LOGGER.warning("AI request failed with HTTP %s: %s", status, _body_excerpt(exc.response))
            return CompletionOutcome.fallback(f"http_{status}", status_code=status)
        except httpx.HTTPError as exc:
            LOGGER.warning("AI request failed in transport: %s", exc)
            return CompletionOutcome.fallback(f"transport: {type(exc).__name__}")
        except AIServiceError as exc:
            LOGGER.warning("AI request returned unusable payload: %s", exc)
            return CompletionOutcome.fallback("invalid_payload")

        if text == NO_RESULT or len(text.strip()) < min_length:
            LOGGER.warning("AI response too short (%d chars); treating as insufficient.", len(text.strip()))
            return CompletionOutcome.fallback("insufficient_content")
        return CompletionOutcome(text=text)

    async def aclose(self) -> None:
        if getattr(self, "_owns_client", False):
            await self._client.aclose()

    def _build_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def __aenter__(self) -> "ChatCompletionClient":  # pragma: no cover - convenience
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - convenience
        await self.aclose()


def extract_message_text(data: Any) -> str:
    """Read ``choices[0].message.content``; anything missing yields ``"No result"``."""

    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return NO_RESULT
    if not isinstance(content, str):
        return NO_RESULT
    return content


def _body_excerpt(response: httpx.Response, limit: int = 200) -> str:
    try:
        text = response.text
    except httpx.ResponseNotRead:  # pragma: no cover - streaming responses only
        return ""
    return text[:limit]


__all__ = [
    "AIServiceError",
    "ChatCompletionClient",
    "CompletionOutcome",
    "NO_RESULT",
    "extract_message_text",
]
