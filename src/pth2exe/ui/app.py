"""Main Textual TUI application.

Orchestrates the guide view, the chat panel and the log panel.
"""

import asyncio

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header

from ..chat import ProviderFactory
from ..guide import GUIDE, GuideContent
from .clipboard import copy_text
from .config import LogLevel
from .styles import APP_CSS
from .themes import GUIDE_DARK
from .widgets import ChatHistoryWidget, ChatPanel, DebugPanel, GuideView, trace


class GuideApp(App):
    """Textual TUI for the deployment guide and its assistant."""

    CSS = APP_CSS
    TITLE = "From .pth to .exe"
    SUB_TITLE = "MONAI Deployment Guide"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+t", "toggle_chat", "Chat"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Log"),
    ]

    def __init__(
        self,
        provider_factory: ProviderFactory | None,
        guide: GuideContent = GUIDE,
        log_level: str | None = None,
        open_chat: bool = False,
    ) -> None:
        super().__init__()
        self._provider_factory = provider_factory
        self._guide = guide
        self._log_level = log_level
        self._open_chat = open_chat

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="main"):
            yield GuideView(self._guide, id="guide")
            yield ChatPanel(self._provider_factory, id="chat-panel")
        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        self.register_theme(GUIDE_DARK)
        self.theme = "guide-dark"

        if self._log_level is not None:
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.write_entry("TUI", f"Log panel enabled with level: {self._log_level.upper()}", LogLevel.INFO)

        chat = self.query_one("#chat-panel", ChatPanel)
        chat.display = self._open_chat
        if self._open_chat:
            chat.focus_input()

    def on_chat_panel_session_started(self, event: ChatPanel.SessionStarted) -> None:
        """Show the model in use, or that chat is off."""
        if event.model_name:
            self.sub_title = f"{self.SUB_TITLE} | {event.model_name}"
        else:
            self.sub_title = f"{self.SUB_TITLE} | chat disabled"

    def action_toggle_chat(self) -> None:
        """Show or hide the chat panel."""
        chat = self.query_one("#chat-panel", ChatPanel)
        chat.display = not chat.display
        if chat.display:
            chat.focus_input()
        else:
            self.query_one("#guide", GuideView).focus()

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        history = self.query_one("#chat-history", ChatHistoryWidget)
        response = history.get_last_response()
        if not response:
            self.notify("No response to copy", severity="warning")
            return
        try:
            copy_text(self, response)
        except Exception as e:
            trace(self, "error", "Copy", f"Failed to copy response: {e}")
            self.notify(f"Copy failed: {e}", severity="error", timeout=5)
            return
        self.notify("Response copied")


async def run_textual_tui(
    provider_factory: ProviderFactory | None,
    log_level: str | None = None,
    open_chat: bool = False,
) -> None:
    """Run the Textual TUI.

    Args:
        provider_factory: Builds the chat provider; None disables chat
        log_level: Log level for panel (debug/info/warning/error), None to hide
        open_chat: Show the chat panel on start
    """
    app = GuideApp(
        provider_factory=provider_factory,
        log_level=log_level,
        open_chat=open_chat,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
