"""Chat session module.

Provides the guide assistant's conversation state, independent of any UI.
"""

from .config import (
    EMPTY_RESPONSE_FALLBACK,
    GREETING,
    INIT_FAILURE_NOTICE,
    MISSING_CREDENTIAL_NOTICE,
    SEND_ERROR_MESSAGE,
)
from .models import SessionState, TranscriptEntry
from .session import ChatSession, ProviderFactory

__all__ = [
    "EMPTY_RESPONSE_FALLBACK",
    "GREETING",
    "INIT_FAILURE_NOTICE",
    "MISSING_CREDENTIAL_NOTICE",
    "SEND_ERROR_MESSAGE",
    "ChatSession",
    "ProviderFactory",
    "SessionState",
    "TranscriptEntry",
]
