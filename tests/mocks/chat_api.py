"""FastAPI mock of an OpenAI-compatible chat-completions endpoint."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional
from unittest import mock

import anyio
import httpx
from fastapi import FastAPI, Header, HTTPException
from fastapi.responses import PlainTextResponse
from httpx import ASGITransport
from pydantic import BaseModel, Field

from rcopilot.research.ai_client import ChatCompletionClient


class ChatMessage(BaseModel):
    role: str
    content: str


class ChatRequest(BaseModel):
    model: str
    messages: List[ChatMessage] = Field(default_factory=list)


class ChatCompletionsMock:
    """In-memory chat endpoint that records prompts and replies with canned content."""

    def __init__(
        self,
        *,
        base_url: str = "http://chat-mock.local",
        token: str = "test-token",
        content: str | None = "",
        status_code: int = 200,
        raw_text: str | None = None,
    ) -> None:
        self.base_url = base_url
        self.token = token
        self.content = content
        self.status_code = status_code
        self.raw_text = raw_text
        self.app = FastAPI()
        self.requests: List[Dict[str, Any]] = []
        self._clients: List[httpx.AsyncClient] = []
        self._register_routes()

    def _register_routes(self) -> None:
        app = self.app

        @app.post("/chat/completions", response_model=None)
        def chat_completions(
            payload: ChatRequest,
            authorization: Optional[str] = Header(default=None),
        ):
            if self.token and authorization != f"Bearer {self.token}":
                raise HTTPException(status_code=401, detail="invalid token")
            self.requests.append({"payload": payload.model_dump(), "authorization": authorization})
            if self.status_code != 200:
                raise HTTPException(status_code=self.status_code, detail="upstream unavailable")
            if self.raw_text is not None:
                return PlainTextResponse(self.raw_text)
            message: Dict[str, Any] = {"role": "assistant"}
            if self.content is not None:
                message["content"] = self.content
            return {
                "id": f"chatcmpl-{len(self.requests):04d}",
                "model": payload.model,
                "choices": [{"index": 0, "message": message, "finish_reason": "stop"}],
            }

    # ------------------------------------------------------------------

    @property
    def prompts(self) -> List[str]:
        return [request["payload"]["messages"][0]["content"] for request in self.requests]

    def build_async_client(self, *, timeout: float = 5.0) -> httpx.AsyncClient:
        client = httpx.AsyncClient(
            base_url=self.base_url,
            transport=ASGITransport(app=self.app),
            timeout=timeout,
        )
        self._clients.append(client)
        return client

    def build_client(self, config, *, api_key: str | None = None) -> ChatCompletionClient:
        return ChatCompletionClient(config, api_key=api_key or self.token, client=self.build_async_client())

    def close(self) -> None:
        for client in self._clients:
            anyio.run(client.aclose)
        self._clients.clear()

    @contextmanager
    def patch_chat_client(self, target: str = "rcopilot.pipeline.runtime.ChatCompletionClient"):
        """Route clients built by ``target``'s module through the FastAPI app."""

        mock_server = self

        def _factory(config, *, api_key: str | None = None, client: httpx.AsyncClient | None = None):
            return ChatCompletionClient(
                config,
                api_key=api_key,
                client=client or mock_server.build_async_client(),
            )

        with mock.patch(target, side_effect=_factory):
            yield self
