"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Guide section layout (header, code panels, directory tree, steps)
- Copy feedback on code panels
- Chat transcript rendering and the loading indicator
- Input history management
- Log rendering and level filtering
"""

from datetime import datetime

from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text
from textual import work
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.dom import DOMNode
from textual.events import Click
from textual.message import Message
from textual.timer import Timer
from textual.widgets import Button, Input, Label, Markdown, RichLog, Static

from ..chat import ChatSession, ProviderFactory, TranscriptEntry
from ..guide import SECTION_TITLES, BuildStep, FlagExplanation, GuideContent
from .clipboard import TERMINAL_CLIPBOARD, copy_text
from .config import (
    CHAT_DISABLED_FOOTER,
    CHAT_PLACEHOLDER,
    CHAT_TITLE,
    COPIED_LABEL,
    COPY_FEEDBACK_SECONDS,
    COPY_LABEL,
    LOADING_INDICATOR,
    LOG_TIMESTAMP_FORMAT,
    LogLevel,
)

SYNTAX_THEME = "monokai"


# ============================================
#   Log panel
# ============================================


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped entries from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def write_entry(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Chat, Copy)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)

        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        component_colors = {
            "TUI": "cyan",
            "Chat": "magenta",
            "Copy": "green",
        }
        level_color = level_colors.get(level, "white")
        comp_color = component_colors.get(component, "white")

        line = Text.from_markup(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(level):<5}[/] "
            f"[{comp_color}]\\[{component}][/] "
        )
        line.append(message)
        self.write(line)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True


def trace(node: DOMNode, level: str, component: str, message: str) -> None:
    """Route a trace record to the app's log panel.

    Args:
        node: Any mounted node of the app
        level: 'debug', 'info', 'warning' or 'error'
        component: Source component name
        message: Log message
    """
    for panel in node.app.query(DebugPanel):
        panel.write_entry(component, message, LogLevel.from_string(level))


# ============================================
#   Guide widgets
# ============================================


class GuideHeader(Static):
    """Guide title with the file extensions highlighted, and the subtitle."""

    def __init__(self, title: str, subtitle: str, *args, **kwargs) -> None:
        text = Text(title, style="bold")
        text.highlight_regex(r"\.\w+", "bold cyan")
        if subtitle:
            text.append("\n")
            text.append(subtitle, style="dim")
        super().__init__(text, *args, **kwargs)


class GuideSection(Vertical):
    """Titled card holding one section of the guide."""

    def __init__(self, title: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.border_title = title


class StructureTree(Static):
    """Directory layout drawn with box characters."""

    def __init__(self, structure: str, *args, **kwargs) -> None:
        super().__init__((structure or "").strip(), *args, markup=False, **kwargs)


class CodePanel(Vertical):
    """Syntax-highlighted code block with a language label and a copy button.

    Copying writes the trimmed code. The button reads "Copied!" for
    COPY_FEEDBACK_SECONDS afterwards. A failed copy is reported with a toast
    and in the log panel.
    """

    def __init__(self, code: str | None, language: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._code = (code or "").strip()
        self._language = language
        self._copied = False
        self._reset_timer: Timer | None = None

    @property
    def code(self) -> str:
        return self._code

    @property
    def is_copied(self) -> bool:
        return self._copied

    def compose(self):
        with Horizontal(classes="code-toolbar"):
            yield Label(self._language.upper(), classes="code-language")
            yield Button(COPY_LABEL, classes="copy-btn")
        yield Static(
            Syntax(self._code, self._language, theme=SYNTAX_THEME, background_color="default"),
            classes="code-body",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.has_class("copy-btn"):
            event.stop()
            self.copy_code()

    def copy_code(self) -> None:
        """Copy the trimmed code and show transient feedback."""
        try:
            target = copy_text(self.app, self._code)
        except Exception as e:
            trace(self, "error", "Copy", f"Failed to copy {self._language} block: {e}")
            self.app.notify(f"Copy failed: {e}", severity="error", timeout=5)
            return

        if target == TERMINAL_CLIPBOARD:
            trace(self, "warning", "Copy", "System clipboard unavailable, used terminal clipboard")
            self.app.notify("Copied via terminal (system clipboard unavailable)", severity="warning", timeout=3)
        else:
            trace(self, "debug", "Copy", f"Copied {len(self._code)} chars")

        self._set_copied(True)
        if self._reset_timer is not None:
            self._reset_timer.stop()
        self._reset_timer = self.set_timer(COPY_FEEDBACK_SECONDS, self._clear_copied)

    def _clear_copied(self) -> None:
        self._reset_timer = None
        self._set_copied(False)

    def _set_copied(self, copied: bool) -> None:
        self._copied = copied
        button = self.query_one(".copy-btn", Button)
        button.label = COPIED_LABEL if copied else COPY_LABEL
        button.set_class(copied, "-copied")


class FlagTable(Static):
    """Table explaining each flag of the build command."""

    def __init__(self, flags: tuple[FlagExplanation, ...], *args, **kwargs) -> None:
        table = Table(show_header=True, header_style="bold cyan", expand=True, box=None)
        table.add_column("Flag", style="bold", no_wrap=True)
        table.add_column("What it does")
        for item in flags:
            table.add_row(item.flag, item.description)
        super().__init__(table, *args, **kwargs)


class BuildSteps(Vertical):
    """Numbered build instructions; steps with commands get a code panel."""

    def __init__(self, steps: tuple[BuildStep, ...], *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._steps = steps

    def compose(self):
        for number, step in enumerate(self._steps, 1):
            with Vertical(classes="build-step"):
                yield Static(f"{number}. {step.title}", classes="step-title", markup=False)
                yield Markdown(step.description, classes="step-description")
                if step.code:
                    yield CodePanel(step.code, "bash")


class GuideView(VerticalScroll):
    """The whole guide, rendered once from its content bundle."""

    def __init__(self, guide: GuideContent, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._guide = guide

    def compose(self):
        guide = self._guide
        yield GuideHeader(guide.title, guide.subtitle, id="guide-header")

        with GuideSection(SECTION_TITLES[0]):
            yield StructureTree(guide.project_structure)
        with GuideSection(SECTION_TITLES[1]):
            yield CodePanel(guide.requirements_txt, "text")
        with GuideSection(SECTION_TITLES[2]):
            yield CodePanel(guide.python_script, "python")
        with GuideSection(SECTION_TITLES[3]):
            yield CodePanel(guide.pyinstaller_command, "bash")
            yield FlagTable(guide.pyinstaller_flags)
        with GuideSection(SECTION_TITLES[4]):
            yield BuildSteps(guide.build_steps)
        with GuideSection(SECTION_TITLES[5]):
            yield CodePanel(guide.usage_instructions, "bash")
            yield Static((guide.usage_explanation or "").strip(), classes="usage-explanation", markup=False)


# ============================================
#   Chat widgets
# ============================================


class ChatBubble(Vertical):
    """A transcript entry that copies its text when clicked."""

    def __init__(self, entry: TranscriptEntry, *args, **kwargs) -> None:
        role_class = "model-message" if entry.is_model else "user-message"
        super().__init__(*args, classes=f"chat-message {role_class}", **kwargs)
        self._entry = entry

    @property
    def entry(self) -> TranscriptEntry:
        return self._entry

    def compose(self):
        prefix = "< Assistant" if self._entry.is_model else "> You"
        timestamp = self._entry.timestamp.strftime("%H:%M:%S")
        yield Static(f"{prefix} [{timestamp}]", classes="message-header", markup=False)
        if self._entry.is_model:
            yield Markdown(self._entry.text, classes="message-content")
        else:
            yield Static(self._entry.text, classes="message-content", markup=False)

    def on_click(self, event: Click) -> None:
        event.stop()
        try:
            copy_text(self.app, self._entry.text)
        except Exception as e:
            trace(self, "error", "Copy", f"Failed to copy message: {e}")
            self.app.notify(f"Copy failed: {e}", severity="error", timeout=5)
            return
        self.app.notify("Message copied", timeout=2)


class ChatHistoryWidget(VerticalScroll):
    """Scrollable transcript that renders only entries it has not shown yet."""

    BORDER_SUBTITLE = "Conversation history"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._rendered = 0
        self._loading_bubble: Static | None = None

    @property
    def rendered_count(self) -> int:
        return self._rendered

    @property
    def is_showing_loading(self) -> bool:
        return self._loading_bubble is not None

    def sync(self, entries: tuple[TranscriptEntry, ...], loading: bool) -> None:
        """Bring the display in line with the transcript and loading flag."""
        for entry in entries[self._rendered:]:
            self.mount(ChatBubble(entry))
        self._rendered = len(entries)

        if loading and self._loading_bubble is None:
            self._loading_bubble = Static(
                LOADING_INDICATOR, classes="chat-message model-message loading", markup=False
            )
            self.mount(self._loading_bubble)
        elif not loading and self._loading_bubble is not None:
            self._loading_bubble.remove()
            self._loading_bubble = None

        self.border_subtitle = f"{self._rendered} messages"
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the text of the last model entry shown."""
        for bubble in reversed(list(self.query(ChatBubble))):
            if bubble.entry.is_model:
                return bubble.entry.text
        return None


class HistoryInput(Input):
    """Input widget with command history support.

    Use Up/Down arrow keys to navigate through history.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self._current_input: str = ""

    def _on_key(self, event) -> None:
        if event.key == "up":
            if self._history:
                if self._history_index == -1:
                    self._current_input = self.value
                    self._history_index = len(self._history) - 1
                elif self._history_index > 0:
                    self._history_index -= 1
                self.value = self._history[self._history_index]
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()
        elif event.key == "down":
            if self._history_index != -1:
                if self._history_index < len(self._history) - 1:
                    self._history_index += 1
                    self.value = self._history[self._history_index]
                else:
                    self._history_index = -1
                    self.value = self._current_input
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()

    def add_to_history(self, command: str) -> None:
        """Add a command to history."""
        if command and (not self._history or self._history[-1] != command):
            self._history.append(command)
        self._history_index = -1
        self._current_input = ""


class ChatInputBar(Horizontal):
    """Single-line chat input with a Send button.

    Posts Submitted with the raw value; the owner decides whether the send is
    accepted and calls clear() only if it is.
    """

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield HistoryInput(placeholder=CHAT_PLACEHOLDER, id="chat-input")
        yield Button("Send", id="send-btn", variant="success", disabled=True)

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.query_one("#send-btn", Button).disabled = not event.value.strip()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.Submitted(event.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self.post_message(self.Submitted(self.value))

    @property
    def value(self) -> str:
        return self.query_one("#chat-input", HistoryInput).value

    def clear(self) -> None:
        """Move the current value into history and empty the input."""
        text_input = self.query_one("#chat-input", HistoryInput)
        text_input.add_to_history(text_input.value)
        text_input.value = ""

    def set_busy(self, busy: bool) -> None:
        """Lock the input while a reply is pending."""
        text_input = self.query_one("#chat-input", HistoryInput)
        text_input.disabled = busy
        self.query_one("#send-btn", Button).disabled = busy or not text_input.value.strip()

    def focus_input(self) -> None:
        self.query_one("#chat-input", HistoryInput).focus()


class ChatPanel(Vertical):
    """Chat widget bound to one ChatSession for the lifetime of the panel.

    The session is created with the panel, initialized on mount and closed
    on unmount.
    """

    BORDER_TITLE = CHAT_TITLE

    class SessionStarted(Message):
        """Posted once the session has been initialized (or disabled)."""

        def __init__(self, model_name: str | None) -> None:
            super().__init__()
            self.model_name = model_name

    def __init__(self, provider_factory: ProviderFactory | None, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._session = ChatSession(provider_factory, on_change=self._sync)

    @property
    def session(self) -> ChatSession:
        return self._session

    def compose(self):
        yield ChatHistoryWidget(id="chat-history")
        yield Static("", id="chat-notice", markup=False)
        yield ChatInputBar(id="chat-input-bar")
        yield Static(CHAT_DISABLED_FOOTER, id="chat-disabled", markup=False)

    def on_mount(self) -> None:
        """Initialize the session and render its state."""
        self._session.set_debug_callback(
            lambda level, component, message: trace(self, level, component, message)
        )
        self._session.initialize()
        self._sync()
        self.post_message(self.SessionStarted(self._session.model_name))

    async def on_unmount(self) -> None:
        await self._session.close()

    def _sync(self) -> None:
        """Re-render from session state (called on every session change)."""
        history = self.query_one("#chat-history", ChatHistoryWidget)
        notice = self.query_one("#chat-notice", Static)
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        disabled_footer = self.query_one("#chat-disabled", Static)

        disabled = self._session.is_disabled
        history.display = not disabled
        input_bar.display = not disabled
        notice.display = disabled
        disabled_footer.display = disabled

        if disabled:
            notice.update(self._session.notice or "")
            return

        history.sync(self._session.transcript, self._session.is_loading)
        input_bar.set_busy(self._session.is_loading)
        if not self._session.is_loading and self.display:
            input_bar.focus_input()

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        event.stop()
        text = self._session.submit(event.value)
        if text is None:
            return
        self.query_one("#chat-input-bar", ChatInputBar).clear()
        self._complete_turn(text)

    @work(exclusive=True)
    async def _complete_turn(self, text: str) -> None:
        await self._session.complete(text)

    def focus_input(self) -> None:
        if not self._session.is_disabled:
            self.query_one("#chat-input-bar", ChatInputBar).focus_input()
