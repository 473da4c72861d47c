"""Unit tests for the chat session module."""
import asyncio

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from pth2exe.chat import (
    EMPTY_RESPONSE_FALLBACK,
    GREETING,
    INIT_FAILURE_NOTICE,
    MISSING_CREDENTIAL_NOTICE,
    SEND_ERROR_MESSAGE,
    ChatSession,
    SessionState,
    TranscriptEntry,
)
from pth2exe.guide import GUIDE_CONTEXT


def ready_session(provider):
    session = ChatSession(lambda: provider)
    session.initialize()
    return session


class TestInitialize:
    """Tests for session start-up."""

    def test_starts_uninitialized(self, provider_cls):
        session = ChatSession(lambda: provider_cls())

        assert session.state == SessionState.UNINITIALIZED
        assert session.transcript == ()

    def test_ready_session_greets(self, provider_cls):
        session = ready_session(provider_cls())

        assert session.state == SessionState.READY
        assert session.notice is None
        assert session.model_name == "fake-model"
        assert [(e.role, e.text) for e in session.transcript] == [("model", GREETING)]

    def test_missing_credential_disables(self):
        session = ChatSession(None)
        session.initialize()

        assert session.state == SessionState.DISABLED
        assert session.is_disabled
        assert session.notice == MISSING_CREDENTIAL_NOTICE
        assert session.transcript == ()
        assert session.model_name is None

    def test_factory_error_disables_with_distinct_notice(self):
        def broken_factory():
            raise RuntimeError("bad client configuration")

        session = ChatSession(broken_factory)
        session.initialize()

        assert session.is_disabled
        assert session.notice == INIT_FAILURE_NOTICE
        assert session.notice != MISSING_CREDENTIAL_NOTICE
        assert session.transcript == ()

    def test_initialize_is_idempotent(self, provider_cls):
        calls = []

        def factory():
            calls.append(1)
            return provider_cls()

        session = ChatSession(factory)
        session.initialize()
        session.initialize()

        assert len(calls) == 1
        assert len(session.transcript) == 1

    def test_debug_callback_receives_warning_when_disabled(self):
        records = []
        session = ChatSession(None)
        session.set_debug_callback(lambda level, component, message: records.append((level, component)))
        session.initialize()

        assert ("warning", "Chat") in records


class TestSend:
    """Tests for the send round trip."""

    @pytest.mark.asyncio
    async def test_onefile_question_appends_two_entries(self, provider_cls, onefile_answer):
        provider = provider_cls([onefile_answer])
        session = ready_session(provider)
        before = len(session.transcript)

        accepted = await session.send("What does --onefile do?")

        assert accepted is True
        assert len(session.transcript) == before + 2
        user, model = session.transcript[-2:]
        assert (user.role, user.text) == ("user", "What does --onefile do?")
        assert model.role == "model"
        assert model.text == "".join(onefile_answer)
        assert "single executable file" in model.text
        assert session.is_loading is False
        assert session.state == SessionState.READY

    @pytest.mark.asyncio
    async def test_request_is_pinned_to_guide(self, provider_cls):
        provider = provider_cls([["answer"]])
        session = ready_session(provider)

        await session.send("What does --onefile do?")

        request = provider.requests[0]
        assert request[0].role == "system"
        assert request[0].content == GUIDE_CONTEXT
        assert request[-1].role == "user"
        assert request[-1].content == "What does --onefile do?"

    @pytest.mark.asyncio
    async def test_prior_turns_are_replayed(self, provider_cls):
        provider = provider_cls([["first answer"], ["second answer"]])
        session = ready_session(provider)

        await session.send("first")
        await session.send("second")

        second_request = provider.requests[1]
        assert [(m.role, m.content) for m in second_request[1:]] == [
            ("user", "first"),
            ("model", "first answer"),
            ("user", "second"),
        ]

    @pytest.mark.asyncio
    async def test_empty_stream_uses_fallback(self, provider_cls):
        session = ready_session(provider_cls([[]]))

        await session.send("Anything?")

        assert session.transcript[-1].text == EMPTY_RESPONSE_FALLBACK
        assert session.history == ()

    @pytest.mark.asyncio
    async def test_request_failure_appends_apology(self, provider_cls):
        session = ready_session(provider_cls([ConnectionError("network down")]))

        await session.send("What does --console do?")

        user, model = session.transcript[-2:]
        assert user.text == "What does --console do?"
        assert model.text == SEND_ERROR_MESSAGE
        assert session.is_loading is False
        assert session.state == SessionState.READY

    @pytest.mark.asyncio
    async def test_midstream_failure_discards_partial_answer(self, provider_cls):
        session = ready_session(provider_cls([["partial ", RuntimeError("stream reset")]]))

        await session.send("question")

        assert session.transcript[-1].text == SEND_ERROR_MESSAGE
        assert session.history == ()

    @pytest.mark.asyncio
    async def test_session_recovers_after_failure(self, provider_cls):
        session = ready_session(provider_cls([TimeoutError("slow"), ["recovered"]]))

        await session.send("one")
        accepted = await session.send("two")

        assert accepted is True
        assert [e.text for e in session.transcript] == [
            GREETING, "one", SEND_ERROR_MESSAGE, "two", "recovered",
        ]

    @pytest.mark.asyncio
    async def test_failed_turn_not_replayed(self, provider_cls):
        provider = provider_cls([ValueError("bad request"), ["fine"]])
        session = ready_session(provider)

        await session.send("lost")
        await session.send("kept")

        assert [m.content for m in provider.requests[1][1:]] == ["kept"]

    @pytest.mark.asyncio
    async def test_send_while_loading_is_noop(self, provider_cls):
        provider = provider_cls([["done"]])
        provider.gate = asyncio.Event()
        session = ready_session(provider)

        text = session.submit("first question")
        assert text == "first question"
        assert session.is_loading

        pending = asyncio.create_task(session.complete(text))
        await asyncio.sleep(0)
        snapshot = session.transcript

        assert session.submit("second question") is None
        assert await session.send("third question") is False
        assert session.transcript == snapshot

        provider.gate.set()
        await pending
        assert session.is_loading is False
        assert len(provider.requests) == 1

    @pytest.mark.asyncio
    async def test_complete_without_submit_is_noop(self, provider_cls):
        provider = provider_cls()
        session = ready_session(provider)

        await asyncio.gather(session.complete("x"), session.complete("y"))

        assert [e.role for e in session.transcript] == ["model"]
        assert provider.requests == []
        assert session.state == SessionState.READY

    @pytest.mark.asyncio
    async def test_submitted_turn_completes_once(self, provider_cls):
        provider = provider_cls([["only answer"]])
        session = ready_session(provider)

        text = session.submit("question")
        await asyncio.gather(session.complete(text), session.complete(text))

        assert [e.role for e in session.transcript] == ["model", "user", "model"]
        assert len(provider.requests) == 1

    @pytest.mark.asyncio
    async def test_cancelled_send_releases_session(self, provider_cls):
        provider = provider_cls([["never shown"], ["after cancel"]])
        provider.gate = asyncio.Event()
        session = ready_session(provider)

        text = session.submit("slow question")
        pending = asyncio.create_task(session.complete(text))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        pending.cancel()
        with pytest.raises(asyncio.CancelledError):
            await pending

        assert session.state == SessionState.READY
        assert [e.text for e in session.transcript] == [GREETING, "slow question", SEND_ERROR_MESSAGE]
        assert session.history == ()

        provider.gate.set()
        assert await session.send("again") is True
        assert session.transcript[-1].text == "after cancel"

    @pytest.mark.asyncio
    async def test_disabled_session_refuses_sends(self):
        session = ChatSession(None)
        session.initialize()

        assert await session.send("hello") is False
        assert session.submit("hello") is None
        assert session.transcript == ()

    @pytest.mark.asyncio
    async def test_uninitialized_session_refuses_sends(self, provider_cls):
        session = ChatSession(lambda: provider_cls())

        assert await session.send("hello") is False
        assert session.transcript == ()

    @pytest.mark.asyncio
    async def test_user_text_kept_as_typed(self, provider_cls):
        session = ready_session(provider_cls())

        await session.send("  padded question  ")

        assert session.transcript[1].text == "  padded question  "

    @pytest.mark.asyncio
    async def test_on_change_called_for_each_step(self, provider_cls):
        changes = []
        session = ChatSession(lambda: provider_cls([["hi"]]))
        session._on_change = lambda: changes.append((len(session.transcript), session.is_loading))

        session.initialize()
        await session.send("hello")

        assert changes == [(1, False), (2, True), (3, False)]

    @pytest.mark.asyncio
    async def test_close_closes_provider(self, provider_cls):
        provider = provider_cls()
        session = ready_session(provider)

        await session.close()

        assert provider.closed is True


class TestTranscriptProperties:
    """Property tests for transcript ordering."""

    @given(st.text(alphabet=" \t\n\r"))
    @settings(max_examples=25)
    def test_blank_input_is_noop(self, provider_cls, text: str):
        """Property test: whitespace-only input never changes the transcript."""
        session = ready_session(provider_cls())
        before = session.transcript

        assert asyncio.run(session.send(text)) is False
        assert session.transcript == before
        assert session.is_loading is False

    @given(st.lists(st.text(min_size=1).filter(lambda s: s.strip()), max_size=6))
    @settings(max_examples=25, deadline=None)
    def test_transcript_alternates(self, provider_cls, questions: list[str]):
        """Property test: successful sends alternate user/model after the greeting."""
        session = ready_session(provider_cls([[f"answer {i}"] for i in range(len(questions))]))

        async def _run():
            for question in questions:
                assert await session.send(question) is True

        asyncio.run(_run())

        roles = [entry.role for entry in session.transcript]
        assert roles[0] == "model"
        assert session.transcript[0].text == GREETING
        assert roles == ["model"] + ["user", "model"] * len(questions)
        assert [e.text for e in session.transcript if e.role == "user"] == questions


class TestTranscriptEntry:
    """Tests for TranscriptEntry model."""

    def test_entry_is_frozen(self):
        entry = TranscriptEntry(role="user", text="hi")

        with pytest.raises(ValueError):
            entry.text = "changed"  # type: ignore[misc]

    def test_unknown_role_rejected(self):
        with pytest.raises(ValueError):
            TranscriptEntry(role="assistant", text="hi")  # type: ignore[arg-type]
