"""Terminal UI module for pth2exe.

Provides a Textual-based TUI showing the guide with a toggleable assistant.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (guide sections, code panels, chat, log panel)
- clipboard.py: Where copied text goes
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- config.py: Labels, timings and log levels
- app.py: Application orchestration (user interaction flow)
"""

from .app import GuideApp, run_textual_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, ChatPanel, CodePanel, DebugPanel, GuideView

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "ChatPanel",
    "CodePanel",
    "DebugPanel",
    "GuideApp",
    "GuideView",
    "LogLevel",
    "run_textual_tui",
]
