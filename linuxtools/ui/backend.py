"""
UI adapter — one interface over three presentation backends.

  whiptail — preferred when installed
  dialog   — second choice
  plain    — numbered list + read a line, always available

whiptail and dialog draw on the terminal through stdout and write the
user's answer to stderr, so stderr is captured and stdout is inherited.
A non-zero exit from either tool means the user pressed Cancel/Esc; that
is "no selection", never an error.
"""

from __future__ import annotations

import re
import shlex
import shutil
import subprocess
from enum import Enum
from typing import TYPE_CHECKING

from rich.text import Text
from simple_term_menu import TerminalMenu

from linuxtools.ui.progress import percent, step_line
from linuxtools.ui.theme import COLOR_DIM, COLOR_TEXT

if TYPE_CHECKING:
    from linuxtools.context import Context


class UIBackend(str, Enum):
    WHIPTAIL = "whiptail"
    DIALOG = "dialog"
    PLAIN = "plain"


# Probe order matters: whiptail wins when both are installed
_PROBE_ORDER = (UIBackend.WHIPTAIL, UIBackend.DIALOG)

_MENU_SIZE      = ("20", "78", "10")
_CHECKLIST_SIZE = ("25", "90", "15")
_YESNO_SIZE     = ("10", "78")
_GAUGE_SIZE     = ("6", "60")

_INDEX_RE = re.compile(r"^[0-9]+$")


# ── Detection ─────────────────────────────────────────────────────────────────

def detect_backend() -> UIBackend:
    """Return the first rich tool found on PATH, else PLAIN."""
    for backend in _PROBE_ORDER:
        if shutil.which(backend.value) is not None:
            return backend
    return UIBackend.PLAIN


# ── Public API ────────────────────────────────────────────────────────────────

def menu(
    ctx: Context,
    title: str,
    prompt: str,
    items: list[tuple[str, str]],
) -> str | None:
    """
    Show a single-choice menu of (tag, label) pairs.

    Returns the chosen tag (plain mode: whatever the user typed, stripped),
    or None when the user cancels.
    """
    if ctx.backend is UIBackend.PLAIN:
        ctx.console.print(Text(prompt, style=f"bold {COLOR_TEXT}"))
        for tag, label in items:
            ctx.console.print(_numbered(tag, label))
        return _read_line(ctx, ctx.t("enter_choice"))

    args = ["--title", title, "--menu", prompt, *_MENU_SIZE]
    for tag, label in items:
        args += [tag, label]
    code, answer = _run_tool(ctx.backend, args)
    if code != 0:
        return None
    return answer


def checklist(
    ctx: Context,
    title: str,
    prompt: str,
    items: list[tuple[str, str]],
) -> list[str]:
    """
    Show a multi-select list of (tag, label) pairs.

    Rich backends return the ticked tags in list order. Plain mode reads a
    comma-separated list of 1-based positions and returns the tags in the
    order typed; bad entries are reported and skipped. Cancel returns [].
    """
    if ctx.backend is UIBackend.PLAIN:
        return numbered_select(ctx, prompt, items)

    args = ["--title", title, "--checklist", prompt, *_CHECKLIST_SIZE]
    for tag, label in items:
        args += [tag, label, "OFF"]
    code, answer = _run_tool(ctx.backend, args)
    if code != 0:
        return []
    known = {tag for tag, _label in items}
    try:
        picked = shlex.split(answer)
    except ValueError:
        return []
    return [tag for tag in picked if tag in known]


def numbered_select(
    ctx: Context,
    prompt: str,
    items: list[tuple[str, str]],
) -> list[str]:
    """
    Print items as a numbered list and read "1,3"-style positions.

    Works the same on every backend. Returns the tags in the order typed;
    bad entries are reported and skipped, EOF returns [].
    """
    ctx.console.print(Text(prompt, style=f"bold {COLOR_TEXT}"))
    for pos, (_tag, label) in enumerate(items, 1):
        ctx.console.print(_numbered(str(pos), label))
    raw = _read_line(ctx, ctx.t("enter_choice"))
    if raw is None:
        return []
    positions, invalid = parse_selection(raw, len(items))
    for _token in invalid:
        ctx.console.print(f"  [warning]{ctx.t('invalid_choice')}[/warning]")
    return [items[pos - 1][0] for pos in positions]


def confirm(ctx: Context, question: str) -> bool:
    """Yes/No question. Anything but an explicit Yes is No."""
    if ctx.backend is not UIBackend.PLAIN:
        code, _ = _run_tool(
            ctx.backend,
            ["--title", ctx.t("title"), "--yesno", question, *_YESNO_SIZE],
        )
        return code == 0

    ctx.console.print(f"  [bold]{question}[/bold]")
    choice = TerminalMenu(
        ["No", "Yes"],
        menu_cursor="› ",
        menu_cursor_style=("fg_cyan", "bold"),
        menu_highlight_style=("fg_cyan", "bold"),
        cursor_index=0,
    ).show()
    return choice == 1


def gauge(ctx: Context, text: str, index: int, total: int) -> None:
    """
    Report that step `index` of `total` is starting.

    Rich backends flash a gauge at percent(index, total); plain mode prints
    the same numbers as one step line. Failures to draw are ignored.
    """
    if ctx.backend is UIBackend.PLAIN:
        ctx.console.print(step_line(text, index, total))
        return

    try:
        subprocess.run(
            [ctx.backend.value, "--gauge", text, *_GAUGE_SIZE, str(percent(index, total))],
            stdin=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        pass


# ── Selection parsing ─────────────────────────────────────────────────────────

def parse_selection(raw: str, count: int) -> tuple[list[int], list[str]]:
    """
    Split "1,3,x,9" into valid 1-based positions and rejected tokens.

    Order and duplicates are preserved; blank tokens are ignored.
    Returns (positions, invalid_tokens).
    """
    positions: list[int] = []
    invalid: list[str] = []
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        if not _INDEX_RE.match(token):
            invalid.append(token)
            continue
        pos = int(token)
        if 1 <= pos <= count:
            positions.append(pos)
        else:
            invalid.append(token)
    return positions, invalid


# ── Internal ──────────────────────────────────────────────────────────────────

def _numbered(tag: str, label: str) -> Text:
    t = Text()
    t.append(f"  [{tag}] ", style=COLOR_DIM)
    t.append(label, style=COLOR_TEXT)
    return t


def _read_line(ctx: Context, prompt: str) -> str | None:
    """Read one line from the terminal; EOF means cancel."""
    try:
        return ctx.console.input(f"  {prompt} ").strip()
    except EOFError:
        return None


def _run_tool(backend: UIBackend, args: list[str]) -> tuple[int, str]:
    """Run whiptail/dialog, returning (exit code, answer from stderr)."""
    try:
        proc = subprocess.run(
            [backend.value, *args],
            stderr=subprocess.PIPE,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        return 255, ""
    return proc.returncode, (proc.stderr or "").strip()
