"""
Linux Tools header banner.

Two-column panel:
  Left  — product name, version, host identity
  Right — session settings (ref, language, UI backend, cache, logs)
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from linuxtools.context import Context
from linuxtools.system_info import get_system_info, is_supported_ubuntu
from linuxtools.ui.theme import APP_NAME, APP_TAGLINE, APP_VERSION, COLOR_BRAND, COLOR_DIM, COLOR_TEXT


def build_header(ctx: Context, info: Optional[dict] = None) -> Panel:
    """Return the two-column startup Panel for this session."""
    info = info or get_system_info()

    table = Table(box=None, show_header=False, padding=(0, 2), expand=True)
    table.add_column(width=30, justify="center")
    table.add_column(justify="left")

    table.add_row(_build_left(ctx, info), _build_right(ctx))

    return Panel(table, border_style=COLOR_BRAND)


def _build_left(ctx: Context, info: dict) -> Text:
    """Left column: name + version, localized title, host identity."""
    t = Text(justify="center")
    t.append("\n")
    t.append(APP_NAME, style=f"bold {COLOR_BRAND}")
    t.append(f"  v{APP_VERSION}\n", style=COLOR_DIM)
    t.append(APP_TAGLINE, style=COLOR_DIM)
    t.append("\n\n")
    t.append(ctx.t("title"), style=f"bold {COLOR_TEXT}")
    t.append("\n\n")

    os_name = info.get("pretty_name") or "Linux"
    os_style = COLOR_DIM if is_supported_ubuntu(info) else "yellow"
    t.append(os_name, style=os_style)
    t.append("\n")
    t.append(f"{info.get('hostname', '')}  ·  {info.get('machine', '')}", style=COLOR_DIM)
    if info.get("is_root"):
        t.append("  ·  root", style="bold yellow")
    t.append("\n")
    return t


def _build_right(ctx: Context) -> Text:
    """Right column: the settings this session will use."""
    rows = [
        ("ref",      ctx.ref),
        ("language", ctx.lang.value),
        ("ui",       ctx.backend.value),
        ("source",   ctx.remote_base),
        ("cache",    str(ctx.cache_dir)),
        ("logs",     str(ctx.log_dir)),
    ]
    if ctx.target_user:
        rows.append(("user", ctx.target_user))

    t = Text(justify="left")
    t.append("\n")
    t.append("  Session\n\n", style=f"bold {COLOR_BRAND}")
    for label, value in rows:
        t.append(f"  {label.ljust(10)}", style=COLOR_DIM)
        t.append(f"{value}\n", style=COLOR_TEXT)
    return t


def print_header(console: Console, ctx: Context) -> None:
    console.print(build_header(ctx))
