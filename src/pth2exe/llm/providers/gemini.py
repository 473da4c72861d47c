"""Google Gemini LLM provider implementation.

Uses the official Google GenAI SDK for async streaming chat.
Reference: https://github.com/googleapis/python-genai

Note: Gemini can return chunks without text (safety filtering, usage-only
final chunks). Those are skipped rather than yielded as empty strings.
"""

from collections.abc import AsyncIterator
from typing import Any

from google import genai
from google.genai import types

from ..base import LLMProvider
from ..models import ChatMessage, StreamingResponse

# Relaxed so that the guide's code snippets (torch.load, sys.exit, ...) are not blocked
DEFAULT_SAFETY_SETTINGS = [
    types.SafetySetting(category="HARM_CATEGORY_HARASSMENT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_HATE_SPEECH", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_SEXUALLY_EXPLICIT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_DANGEROUS_CONTENT", threshold="BLOCK_ONLY_HIGH"),
]


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider implementation.

    Hidden design decisions:
    - Google GenAI client initialization
    - Message format conversion ('system' becomes the system instruction)
    - Relaxed safety settings to avoid blocking code content
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Default model (gemini-2.5-flash, gemini-2.5-pro, ...)
            **client_kwargs: Additional kwargs for Client
        """
        self._model = model
        self._client = genai.Client(api_key=api_key, **client_kwargs)
        self._current_stream_response: StreamingResponse | None = None

    @property
    def model(self) -> str:
        return self._model

    def _convert_messages(self, messages: list[ChatMessage]) -> tuple[str | None, list[types.Content]]:
        """Convert ChatMessage list to Gemini format.

        Returns:
            Tuple of (system_instruction, contents)
        """
        system_instruction = None
        contents = []

        for msg in messages:
            if msg.role == "system":
                system_instruction = msg.content
            elif msg.role == "user":
                contents.append(types.Content(role="user", parts=[types.Part(text=msg.content)]))
            elif msg.role in ("model", "assistant"):
                contents.append(types.Content(role="model", parts=[types.Part(text=msg.content)]))

        return system_instruction, contents

    def _extract_content(self, response) -> str:
        """Extract text from a Gemini response chunk, or "" if it carries none."""
        if response.candidates:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
                if texts:
                    return "".join(texts)

        try:
            return response.text or ""
        except (ValueError, AttributeError):
            return ""

    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        """Generate a streaming chat completion using Google Gemini.

        Args:
            messages: Conversation history
            model: Model to use (overrides default)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Additional GenerateContentConfig parameters

        Returns:
            StreamingResponse that yields text chunks and captures usage info
        """
        model_to_use = model or self._model
        system_instruction, contents = self._convert_messages(messages)

        # mode=NONE keeps the script's function-like syntax from triggering tool calls
        tool_config = types.ToolConfig(
            function_calling_config=types.FunctionCallingConfig(mode="NONE")
        )
        config = types.GenerateContentConfig(
            temperature=temperature,
            system_instruction=system_instruction,
            safety_settings=DEFAULT_SAFETY_SETTINGS,
            tool_config=tool_config,
            **kwargs
        )
        if max_tokens is not None:
            config.max_output_tokens = max_tokens

        response = StreamingResponse(self._stream_generator(model_to_use, contents, config))
        self._current_stream_response = response
        return response

    async def _stream_generator(
        self,
        model: str,
        contents: list[types.Content],
        config: types.GenerateContentConfig,
    ) -> AsyncIterator[str]:
        """Yield text from each chunk and record usage from the final one."""
        usage = None
        owner = self._current_stream_response

        stream = await self._client.aio.models.generate_content_stream(
            model=model, contents=contents, config=config
        )
        async for chunk in stream:
            if chunk.usage_metadata:
                usage = {
                    "prompt_tokens": chunk.usage_metadata.prompt_token_count or 0,
                    "completion_tokens": chunk.usage_metadata.candidates_token_count or 0,
                    "total_tokens": chunk.usage_metadata.total_token_count or 0,
                }

            text = self._extract_content(chunk)
            if text:
                yield text

        if usage and owner is not None:
            owner.set_usage(usage)

    async def close(self) -> None:
        """Close the Gemini client.

        The GenAI client holds no connection that needs explicit closing.
        """
