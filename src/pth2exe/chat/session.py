"""Chat session manager.

Mediates between user text and the remote model while keeping the visible
transcript. Hides:
- The session state machine and the single-request guard
- How the guide is pinned as the system instruction
- Which turns are replayed to the stateless provider on each request
- How streamed chunks become one transcript entry
"""

from collections.abc import Callable
from typing import Any

from ..guide import GUIDE_CONTEXT
from ..llm import ChatMessage, LLMProvider
from .config import (
    EMPTY_RESPONSE_FALLBACK,
    GREETING,
    INIT_FAILURE_NOTICE,
    MISSING_CREDENTIAL_NOTICE,
    SEND_ERROR_MESSAGE,
)
from .models import SessionState, TranscriptEntry

ProviderFactory = Callable[[], LLMProvider]


class ChatSession:
    """One conversation with the remote model, scoped to one app run.

    Sending is split in two so a UI can guard re-entry synchronously:
    submit() validates and records the user turn, complete() awaits the
    stream. send() runs both.

    Example:
        session = ChatSession(lambda: create_llm_provider("gemini", api_key=key))
        session.initialize()
        await session.send("What does --onefile do?")
        print(session.transcript[-1].text)
    """

    def __init__(
        self,
        provider_factory: ProviderFactory | None,
        system_instruction: str = GUIDE_CONTEXT,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        """Create an uninitialized session.

        Args:
            provider_factory: Builds the provider; None when no credential is configured
            system_instruction: Fixed context every request is pinned to
            on_change: Called after every transcript or state change
        """
        self._provider_factory = provider_factory
        self._system_instruction = system_instruction
        self._on_change = on_change
        self._provider: LLMProvider | None = None
        self._history: list[ChatMessage] = []
        self._transcript: list[TranscriptEntry] = []
        self._state = SessionState.UNINITIALIZED
        self._notice: str | None = None
        self._pending: str | None = None
        self._debug_callback: Any = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state == SessionState.SENDING

    @property
    def is_disabled(self) -> bool:
        return self._state == SessionState.DISABLED

    @property
    def notice(self) -> str | None:
        """User-visible reason the session is disabled, if it is."""
        return self._notice

    @property
    def transcript(self) -> tuple[TranscriptEntry, ...]:
        return tuple(self._transcript)

    @property
    def history(self) -> tuple[ChatMessage, ...]:
        """Completed turns as the remote model has seen them."""
        return tuple(self._history)

    @property
    def model_name(self) -> str | None:
        return self._provider.model if self._provider is not None else None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for trace logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Chat", message)

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def _append(self, role: str, text: str) -> None:
        self._transcript.append(TranscriptEntry(role=role, text=text))
        self._changed()

    def _disable(self, notice: str) -> None:
        self._state = SessionState.DISABLED
        self._notice = notice
        self._changed()

    def initialize(self) -> None:
        """Open the session, or disable it if no provider can be built.

        Only the first call has an effect.
        """
        if self._state != SessionState.UNINITIALIZED:
            return

        if self._provider_factory is None:
            self._debug("warning", "No API credential configured, chat disabled")
            self._disable(MISSING_CREDENTIAL_NOTICE)
            return

        try:
            self._provider = self._provider_factory()
        except Exception as e:
            self._debug("error", f"Error initializing chat provider: {e}")
            self._disable(INIT_FAILURE_NOTICE)
            return

        self._debug(
            "info",
            f"Session ready on {self._provider.model} "
            f"(context {len(self._system_instruction)} chars)",
        )
        self._state = SessionState.READY
        self._append("model", GREETING)

    def submit(self, text: str) -> str | None:
        """Record a user turn and mark the session as sending.

        Returns:
            The text to pass to complete(), or None if the send was refused
            (blank text, a send already in flight, or session not ready)
        """
        if not text.strip() or self._state != SessionState.READY:
            return None

        self._state = SessionState.SENDING
        self._pending = text
        self._append("user", text)
        return text

    async def complete(self, text: str) -> None:
        """Stream the model's answer to a submitted turn into the transcript.

        Only completes the turn most recently accepted by submit(), once;
        any other call is a no-op. Failures and cancellation become an
        apology entry and the session stays usable.
        """
        if self._state != SessionState.SENDING or self._pending is None:
            return
        self._pending = None

        messages = [
            ChatMessage(role="system", content=self._system_instruction),
            *self._history,
            ChatMessage(role="user", content=text),
        ]
        self._debug("debug", f"Sending turn ({len(messages) - 1} messages)")

        reply = SEND_ERROR_MESSAGE
        try:
            stream = await self._provider.chat_completion_stream(messages)

            chunks: list[str] = []
            async for chunk in stream:
                chunks.append(chunk)
            response = "".join(chunks)

            if stream.usage:
                self._debug("debug", f"Usage: {stream.usage}")
            self._debug("info", f"Received {len(chunks)} chunk(s), {len(response)} chars")

            # Gemini rejects empty parts, so a blank answer is not replayed
            if response:
                self._history.append(ChatMessage(role="user", content=text))
                self._history.append(ChatMessage(role="model", content=response))
            reply = response or EMPTY_RESPONSE_FALLBACK
        except Exception as e:
            self._debug("error", f"Error sending message: {e}")
        finally:
            # Also runs on cancellation, which propagates without a change notification
            self._state = SessionState.READY
            self._transcript.append(TranscriptEntry(role="model", text=reply))

        self._changed()

    async def send(self, text: str) -> bool:
        """Send one user turn and wait for the answer.

        Returns:
            True if the turn was accepted, False if it was a no-op
        """
        accepted = self.submit(text)
        if accepted is None:
            return False
        await self.complete(accepted)
        return True

    async def close(self) -> None:
        """Release the provider."""
        if self._provider is not None:
            await self._provider.close()
            self._provider = None
