"""Pytest configuration and shared fixtures."""
import asyncio
import os
from typing import Any

import pytest

from pth2exe.llm import ChatMessage, LLMProvider, StreamingResponse


class ScriptedProvider(LLMProvider):
    """LLM provider that replays canned replies instead of calling an API.

    Each reply is a list of chunks, or an exception raised when the request is
    made. A chunk may itself be an exception, raised mid-stream.
    """

    def __init__(self, replies: list[Any] | None = None, model: str = "fake-model"):
        self._replies = list(replies or [])
        self._model = model
        self.requests: list[list[ChatMessage]] = []
        self.closed = False
        self.gate: asyncio.Event | None = None

    @property
    def model(self) -> str:
        return self._model

    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        self.requests.append(list(messages))
        reply = self._replies.pop(0) if self._replies else ["ok"]
        if isinstance(reply, Exception):
            raise reply
        response = StreamingResponse(self._stream(reply))
        response.set_usage({"prompt_tokens": 1, "completion_tokens": len(reply), "total_tokens": 1 + len(reply)})
        return response

    async def _stream(self, chunks: list[Any]):
        if self.gate is not None:
            await self.gate.wait()
        for chunk in chunks:
            if isinstance(chunk, Exception):
                raise chunk
            yield chunk

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(scope="session")
def provider_cls():
    """Return the scripted provider class (session scoped for hypothesis)."""
    return ScriptedProvider


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY"),
    }


@pytest.fixture
def onefile_answer():
    """Streamed answer to the --onefile question, split into chunks."""
    return [
        "`--onefile` packages everything ",
        "into a single executable file, ",
        "rather than a folder.",
    ]
