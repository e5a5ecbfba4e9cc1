"""
Text-mode gauge for the recommended-order run.

whiptail/dialog draw a --gauge at index*100//total; without them each step
gets one line carrying the same numbers:

  ▶ 3/7  42%  Zsh(root)
"""

from rich.text import Text

from linuxtools.ui.theme import COLOR_DIM, COLOR_TEXT, ICON_STEP, PROGRESS_BAR_COLOR, PROGRESS_COMPLETE_COLOR


def percent(index: int, total: int) -> int:
    """Gauge value for step `index` of `total`; 0 when there is nothing to do."""
    if total <= 0:
        return 0
    return index * 100 // total


def step_line(text: str, index: int, total: int) -> Text:
    """The line printed as step `index` (1-based) of `total` starts."""
    last = index == total
    t = Text()
    t.append(f"{ICON_STEP} ", style="bold cyan")
    t.append(f"{index}/{total}", style=COLOR_DIM)
    t.append(f"  {percent(index, total)}%  ",
             style=f"bold {PROGRESS_COMPLETE_COLOR if last else PROGRESS_BAR_COLOR}")
    t.append(text, style=f"bold {COLOR_TEXT}")
    return t
