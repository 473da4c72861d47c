"""Guide content module.

Hides the guide text and how it is combined into the assistant's context.
"""

from .content import GUIDE, GUIDE_CONTEXT, SECTION_TITLES, build_guide_context
from .models import BuildStep, FlagExplanation, GuideContent

__all__ = [
    "GUIDE",
    "GUIDE_CONTEXT",
    "SECTION_TITLES",
    "BuildStep",
    "FlagExplanation",
    "GuideContent",
    "build_guide_context",
]
