"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.

Layout: the guide fills the screen; the chat panel docks to the right when
shown; the log panel sits below both when shown.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout
   ============================================ */
Screen {
    background: $background;
}

#main {
    height: 1fr;
}

/* ============================================
   Guide - Scrollable Sections
   ============================================ */
#guide {
    width: 1fr;
    height: 100%;
    padding: 0 2;
    scrollbar-gutter: stable;
}

#guide-header {
    height: auto;
    padding: 1 0;
    margin-bottom: 1;
    border-bottom: solid $border;
}

GuideSection {
    height: auto;
    margin-bottom: 1;
    padding: 1 2;
    background: $surface 50%;
    border: round $border;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
}

StructureTree {
    height: auto;
    padding: 1 2;
    background: $panel;
    border: round $border;
    color: $foreground;
}

FlagTable {
    height: auto;
    margin-top: 1;
}

.usage-explanation {
    height: auto;
    margin-top: 1;
    color: $text-muted;
}

/* ============================================
   Build Steps - Numbered Timeline
   ============================================ */
.build-step {
    height: auto;
    padding: 0 0 1 2;
    border-left: tall $border;
}

.step-title {
    color: $primary;
    text-style: bold;
}

.step-description {
    height: auto;
    margin: 0;
    color: $text-muted;
}

/* ============================================
   Code Panels - Label, Copy Button, Code
   ============================================ */
CodePanel {
    height: auto;
    margin: 1 0 0 0;
    background: $panel;
    border: round $border;
}

.code-toolbar {
    height: 1;
    padding: 0 1;
    background: $surface;
}

.code-language {
    width: 1fr;
    color: $text-muted;
    text-style: bold;
}

.copy-btn {
    height: 1;
    min-width: 12;
    border: none;
    padding: 0 1;
    background: $surface;
    color: $text-muted;

    &:hover {
        color: $foreground;
        background: $surface-lighten-1;
    }

    &.-copied {
        color: $success;
        text-style: bold;
    }
}

.code-body {
    height: auto;
    padding: 1 2;
    overflow-x: auto;
}

/* ============================================
   Chat Panel - Docked Assistant
   ============================================ */
ChatPanel {
    width: 60;
    height: 100%;
    background: $surface 80%;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;

    &:focus-within {
        border: round $primary;
    }
}

#chat-history {
    height: 1fr;
    padding: 0 1;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    scrollbar-gutter: stable;
}

#chat-notice {
    height: 1fr;
    margin: 1;
    padding: 1;
    color: $error;
    background: $error 15%;
}

#chat-disabled {
    height: 1;
    text-align: center;
    color: $text-muted;
}

ChatInputBar {
    height: 3;
    border-top: solid $border;
}

#chat-input {
    width: 1fr;
    border: none;
    background: $panel;

    &:disabled {
        opacity: 50%;
    }
}

#send-btn {
    width: 10;
    height: 100%;
    margin: 0 0 0 1;
    min-width: 8;
    border: none;
    text-style: bold;
}

/* ============================================
   Chat Messages - Conversation Display
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 0 1;
}

.user-message {
    border-left: tall $success;
    background: $success 8%;

    & .message-header {
        color: $success;
        text-style: bold;
    }
}

.model-message {
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
        text-style: bold;
    }

    &.loading {
        color: $text-muted;
        text-style: italic;
    }
}

.message-header {
    height: auto;
}

.message-content {
    height: auto;
    margin: 0;
    padding: 0;
    color: $foreground;
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    overflow-y: scroll;
    overflow-x: auto;
}

/* ============================================
   Notification Toasts
   ============================================ */
Toast {
    background: $surface;
    border: tall $border;
    padding: 0 1;

    &.-information {
        border: tall $primary;
    }

    &.-error {
        border: tall $error;
        background: $error 12%;
    }

    &.-warning {
        border: tall $warning;
        background: $warning 12%;
    }
}

Header {
    background: $panel;
}

HeaderTitle {
    color: $primary;
    text-style: bold;
}

MarkdownFence {
    background: $panel;
    margin: 1 0;
}
"""
