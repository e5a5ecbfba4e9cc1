"""
Linux Tools visual design system.

All colors, theme styles and icons as named constants.
Import from here — never hardcode markup strings in other modules.

Color palette is selected at import time from the terminal's advertised
background (COLORFGBG, set by rxvt, Konsole and friends). Both palettes
are 24-bit hex so they render the same across terminal emulators.
"""

import os

from rich.theme import Theme


# ── Brand ─────────────────────────────────────────────────────────────────────

from linuxtools import __version__

APP_NAME = "linux-tools"
APP_TAGLINE = "Ubuntu Setup Orchestrator"
APP_VERSION = __version__


# ── Dark/light detection ──────────────────────────────────────────────────────

def _is_dark_background(colorfgbg: str | None = None) -> bool:
    """
    Guess whether the terminal background is dark.

    COLORFGBG looks like "15;0" (fg;bg). Background colour indexes 0–6 and 8
    are dark. Falls back to True when unset or unparseable — most server
    terminals are dark.
    """
    value = os.environ.get("COLORFGBG", "") if colorfgbg is None else colorfgbg
    bg = value.split(";")[-1].strip()
    if not bg.isdigit():
        return True
    return int(bg) in (0, 1, 2, 3, 4, 5, 6, 8)


DARK_MODE: bool = _is_dark_background()


# ── Color palette ─────────────────────────────────────────────────────────────

if DARK_MODE:
    COLOR_SUCCESS = "#4DBD74"      # Calm sage-green
    COLOR_FAILURE = "#E05252"      # Warm red
    COLOR_WARNING = "#D4870A"      # Amber
    COLOR_INFO    = "#5BA3C9"      # Slate blue
    COLOR_BRAND   = "#7B9FD4"      # Periwinkle blue
    COLOR_DIM     = "#787878"      # Medium gray
    COLOR_COMMAND = "#C0C0C0"      # Light silver
    COLOR_TEXT    = "#F0F0F0"      # Near-white

    PROGRESS_BAR_COLOR      = "#7B9FD4"
    PROGRESS_COMPLETE_COLOR = "#4DBD74"

else:
    # WCAG AA contrast on white backgrounds
    COLOR_SUCCESS = "#166534"
    COLOR_FAILURE = "#B91C1C"
    COLOR_WARNING = "#92400E"
    COLOR_INFO    = "#0369A1"
    COLOR_BRAND   = "#1D4ED8"
    COLOR_DIM     = "#4B5563"
    COLOR_COMMAND = "#1F2937"
    COLOR_TEXT    = "#0F172A"

    PROGRESS_BAR_COLOR      = "#1D4ED8"
    PROGRESS_COMPLETE_COLOR = "#166534"


# ── Status icons ──────────────────────────────────────────────────────────────

ICON_SUCCESS = "✔"
ICON_FAILURE = "✖"
ICON_STEP    = "▶"


# ── Rich Theme ────────────────────────────────────────────────────────────────

LINUXTOOLS_THEME = Theme(
    {
        "success": f"{COLOR_SUCCESS} bold",
        "failure": f"{COLOR_FAILURE} bold",
        "warning": f"{COLOR_WARNING} bold",
        "info":    COLOR_INFO,
        "brand":   f"{COLOR_BRAND} bold",
        "dim":     COLOR_DIM,
        "command": COLOR_COMMAND,
        "text":    COLOR_TEXT,
    }
)
