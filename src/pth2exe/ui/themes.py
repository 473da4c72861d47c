"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Slate and cyan palette of the guide
GUIDE_DARK = Theme(
    name="guide-dark",
    primary="#22d3ee",      # Cyan 400 - headings, accents
    secondary="#06b6d4",    # Cyan 500 - assistant messages
    accent="#67e8f9",       # Cyan 300 - highlights
    foreground="#e5e7eb",   # Gray 200 - body text
    background="#111827",   # Gray 900 - page background
    success="#4ade80",      # Green 400 - "Copied!" check
    warning="#fbbf24",      # Amber 400
    error="#f87171",        # Red 400 - disabled notice
    surface="#1f2937",      # Gray 800 - section cards
    panel="#0f172a",        # Slate 900 - code panels
    dark=True,
    variables={
        "block-cursor-foreground": "#111827",
        "block-cursor-background": "#22d3ee",
        "block-cursor-text-style": "bold",
        "block-hover-background": "#374151 30%",

        "input-cursor-background": "#e5e7eb",
        "input-cursor-foreground": "#111827",
        "input-selection-background": "#22d3ee 30%",

        "border": "#374151",
        "border-blurred": "#1f2937",

        "scrollbar": "#374151",
        "scrollbar-hover": "#4b5563",
        "scrollbar-active": "#22d3ee",
        "scrollbar-background": "#111827",
        "scrollbar-corner-color": "#111827",

        "footer-foreground": "#9ca3af",
        "footer-background": "#111827",
        "footer-key-foreground": "#22d3ee",
        "footer-key-background": "#1f2937",
        "footer-description-foreground": "#9ca3af",

        "text-muted": "#9ca3af",
        "text-disabled": "#4b5563",

        "button-foreground": "#e5e7eb",
        "button-color-foreground": "#111827",
        "button-focus-text-style": "bold reverse",
    },
)
