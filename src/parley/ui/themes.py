"""Colour themes for the TUI.

Hides the palette choice and which dark and light themes Ctrl+T
alternates between. Both are Gruvbox variants so the toggle keeps the
same hues and only flips contrast.
"""

from textual.theme import Theme

GRUVBOX_DARK = Theme(
    name="parley-gruvbox-dark",
    primary="#83a598",
    secondary="#d3869b",
    accent="#fabd2f",
    foreground="#ebdbb2",
    background="#1d2021",
    surface="#3c3836",
    panel="#282828",
    success="#b8bb26",
    warning="#fe8019",
    error="#fb4934",
    dark=True,
    variables={
        "text-muted": "#928374",
        "border": "#504945",
        "scrollbar": "#3c3836",
        "scrollbar-hover": "#504945",
        "footer-key-foreground": "#fabd2f",
    },
)

GRUVBOX_LIGHT = Theme(
    name="parley-gruvbox-light",
    primary="#076678",
    secondary="#8f3f71",
    accent="#b57614",
    foreground="#3c3836",
    background="#f9f5d7",
    surface="#ebdbb2",
    panel="#fbf1c7",
    success="#79740e",
    warning="#af3a03",
    error="#9d0006",
    dark=False,
    variables={
        "text-muted": "#7c6f64",
        "border": "#d5c4a1",
        "scrollbar": "#ebdbb2",
        "scrollbar-hover": "#d5c4a1",
        "footer-key-foreground": "#b57614",
    },
)

DARK_THEME = GRUVBOX_DARK
LIGHT_THEME = GRUVBOX_LIGHT
