"""Clipboard access for the TUI.

Hides which clipboard receives copied text. The system clipboard is tried
first through pyperclip; when no clipboard mechanism is installed (headless
Linux, SSH sessions) the text is sent to the terminal with OSC 52 instead.
"""

from typing import TYPE_CHECKING

import pyperclip

if TYPE_CHECKING:
    from textual.app import App

SYSTEM_CLIPBOARD = "system"
TERMINAL_CLIPBOARD = "terminal"


def copy_text(app: "App", text: str) -> str:
    """Copy text to the best available clipboard.

    Args:
        app: Running Textual app, used for the terminal fallback
        text: Text to copy, exactly as given

    Returns:
        SYSTEM_CLIPBOARD or TERMINAL_CLIPBOARD, naming where the text went

    Raises:
        Exception: If the terminal fallback fails as well
    """
    try:
        pyperclip.copy(text)
        return SYSTEM_CLIPBOARD
    except pyperclip.PyperclipException:
        app.copy_to_clipboard(text)
        return TERMINAL_CLIPBOARD
