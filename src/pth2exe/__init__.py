"""
pth2exe: a terminal guide to packaging a MONAI segmentation model with
PyInstaller, with an assistant that answers questions about it.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .chat import ChatSession, SessionState, TranscriptEntry
from .guide import GUIDE, GUIDE_CONTEXT, GuideContent
from .llm import LLMProvider, create_llm_provider

__all__ = [
    "GUIDE",
    "GUIDE_CONTEXT",
    "ChatSession",
    "GuideContent",
    "LLMProvider",
    "SessionState",
    "TranscriptEntry",
    "create_llm_provider",
]
