"""Data models for the chat session.

Hides the internal representation of transcript entries and session states.
"""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SessionState(str, Enum):
    """Lifecycle of a chat session.

    UNINITIALIZED -> DISABLED (terminal) or UNINITIALIZED -> READY.
    READY -> SENDING -> READY for every send, successful or not.
    """

    UNINITIALIZED = "uninitialized"
    DISABLED = "disabled"
    READY = "ready"
    SENDING = "sending"


class TranscriptEntry(BaseModel):
    """One visible turn in the chat transcript."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"] = Field(description="Who authored the turn")
    text: str = Field(description="Turn text as displayed")
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def is_model(self) -> bool:
        return self.role == "model"
