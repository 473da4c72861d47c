from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, StreamingResponse


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    This module hides the design decision of which LLM provider answers the
    chat. Implementations must handle provider-specific details like:
    - API client setup and authentication
    - Request/response format conversion (roles, system instructions)
    - Extracting text from streamed chunks

    Providers are stateless: the caller passes the full conversation on every
    request. A single attempt is made per call; errors propagate to the caller.

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            stream = await provider.chat_completion_stream(messages)
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Default model name used when none is passed."""

    @abstractmethod
    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        """Generate a streaming chat completion.

        Args:
            messages: Conversation history; a leading 'system' message is
                sent as the system instruction
            model: Model to use (None uses provider's default)
            temperature: Sampling temperature (0.0 to 2.0)
            max_tokens: Maximum tokens to generate
            **kwargs: Provider-specific parameters

        Returns:
            StreamingResponse that yields text chunks and captures usage info.
            After iteration, access usage via stream_response.usage

        Raises:
            Exception: Provider-specific errors during generation
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
