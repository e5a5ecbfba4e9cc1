"""
Main menu state machine.

  choose-language ──► main-menu ──(9 / cancel)──► exit
                          │  ▲
                          └──┘  every other entry runs, then loops

The loop keeps no state of its own: language and UI backend live on the
Context, and the backend is re-detected each time the menu is shown.
"""

from __future__ import annotations

from pathlib import Path

from rich.markup import escape

from linuxtools.catalog import REMOTE_SCRIPTS
from linuxtools.context import Context
from linuxtools.docker_ops import configure_docker_root, install_docker, manage_stacks
from linuxtools.errors import FetchError, PreconditionError
from linuxtools.i18n import Language, language_from_choice
from linuxtools.runner import RunOutcome, run_remote_script, run_script
from linuxtools.sequencer import run_recommended_order
from linuxtools.system_info import get_system_info, is_supported_ubuntu
from linuxtools.ui.backend import checklist, detect_backend, menu, numbered_select


MENU_EXIT = "9"

_LANGUAGE_ITEMS = [("1", "中文"), ("2", "English")]


# ── States ────────────────────────────────────────────────────────────────────

def choose_language(ctx: Context) -> Language:
    """Ask for the UI language. Anything but '2' selects Chinese."""
    choice = menu(ctx, ctx.t("title"), ctx.t("choose_lang"), _LANGUAGE_ITEMS)
    ctx.lang = language_from_choice(choice)
    return ctx.lang


def main_menu_items(ctx: Context) -> list[tuple[str, str]]:
    return [
        ("1", ctx.t("opt_run_scripts")),
        ("2", ctx.t("opt_recommended")),
        ("3", ctx.t("opt_e2e")),
        ("4", ctx.t("opt_remote")),
        ("5", ctx.t("opt_switch_lang")),
        ("6", ctx.t("opt_install_docker")),
        ("7", ctx.t("opt_config_docker_root")),
        ("8", ctx.t("opt_manage_stacks")),
        (MENU_EXIT, ctx.t("opt_exit")),
    ]


def run_main_menu(ctx: Context) -> None:
    """Loop until the user picks Exit or cancels the menu."""
    while True:
        ctx.backend = detect_backend()
        choice = menu(ctx, ctx.t("title"), ctx.t("main_menu"), main_menu_items(ctx))
        if choice is None or choice == MENU_EXIT:
            return
        if not dispatch(ctx, choice):
            ctx.console.print(f"  [warning]{ctx.t('invalid_choice')}[/warning]")


def dispatch(ctx: Context, choice: str) -> bool:
    """Run the entry for a menu tag. Returns False for unknown tags."""
    actions = {
        "1": run_local_menu,
        "2": run_recommended_order,
        "3": run_e2e_test,
        "4": run_remote_menu,
        "5": choose_language,
        "6": install_docker,
        "7": configure_docker_root,
        "8": manage_stacks,
    }
    fn = actions.get(choice.strip())
    if fn is None:
        return False
    fn(ctx)
    return True


# ── Entries ───────────────────────────────────────────────────────────────────

def list_local_scripts(ctx: Context) -> list[Path]:
    """*.sh files directly under {install_root}/scripts, sorted by name."""
    if not ctx.scripts_dir.is_dir():
        return []
    return sorted(
        (p for p in ctx.scripts_dir.iterdir() if p.is_file() and p.suffix == ".sh"),
        key=lambda p: p.name,
    )


def run_local_menu(ctx: Context) -> list[RunOutcome]:
    """Checklist of local scripts; run each ticked one through the runner."""
    scripts = list_local_scripts(ctx)
    if not scripts:
        ctx.console.print(f"  [dim]{ctx.t('no_scripts')}[/dim]")
        return []

    items = [(str(i), p.name) for i, p in enumerate(scripts, 1)]
    picked = checklist(ctx, ctx.t("list_local"), ctx.t("list_local"), items)
    return [run_script(ctx, scripts[int(tag) - 1]) for tag in picked]


def run_remote_menu(ctx: Context) -> list[str]:
    """
    Numbered multi-select over the remote catalog.

    Always a typed comma list, whatever the backend, so "3,1" runs 3 first.
    Each selected script is fetched and run in the order typed. A failed
    download, missing tool or non-zero exit is reported and the next script
    still runs. Returns the names that were attempted.
    """
    items = [(str(i), entry.name) for i, entry in enumerate(REMOTE_SCRIPTS, 1)]
    picked = numbered_select(ctx, ctx.t("list_scripts"), items)

    attempted: list[str] = []
    for tag in picked:
        name = REMOTE_SCRIPTS[int(tag) - 1].name
        attempted.append(name)
        try:
            outcome = run_remote_script(ctx, name)
        except FetchError as e:
            ctx.console.print(
                f"  [failure]{ctx.t('download_failed')}: {escape(name)}[/failure]"
                f"  [dim]{escape(e.reason)}[/dim]"
            )
            continue
        except PreconditionError as e:
            ctx.console.print(
                f"  [failure]{ctx.t('error')}: {escape(name)}[/failure]"
                f"  [dim]{escape(str(e))}[/dim]"
            )
            continue
        if not outcome.ok:
            ctx.console.print(f"  [failure]{ctx.t('error')}: {escape(name)}[/failure]")
    return attempted


def run_e2e_test(ctx: Context) -> RunOutcome | None:
    """Run {install_root}/tests/e2e-ubuntu-24.sh on a supported Ubuntu."""
    info = get_system_info()
    if not is_supported_ubuntu(info):
        name = info.get("pretty_name") or info.get("os_id") or "unknown"
        ctx.console.print(f"  [warning]{escape(ctx.t('unsupported_os', name=name))}[/warning]")
        return None

    script = ctx.e2e_script
    if not script.is_file():
        ctx.console.print(f"  [warning]{escape(ctx.t('e2e_missing', path=str(script)))}[/warning]")
        return None

    return run_script(ctx, script)


def prompt_target_user(ctx: Context) -> str:
    """Ask once for the user the SSH-defaults step should target."""
    try:
        answer = ctx.console.input(f"  {ctx.t('target_user_prompt')} ")
    except EOFError:
        answer = ""
    ctx.target_user = answer.strip()
    return ctx.target_user
