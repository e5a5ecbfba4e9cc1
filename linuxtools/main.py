"""
Linux Tools — entry point.

CLI flags, config merge, startup prompts, then the main menu loop.
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from linuxtools import __version__
from linuxtools.config import load_config
from linuxtools.context import build_context
from linuxtools.errors import PreconditionError
from linuxtools.i18n import DEFAULT_LANGUAGE, parse_language
from linuxtools.menu import choose_language, prompt_target_user, run_main_menu
from linuxtools.ui.backend import detect_backend
from linuxtools.ui.header import print_header
from linuxtools.ui.theme import LINUXTOOLS_THEME


# ── Console (shared across the tool) ─────────────────────────────────────────

console = Console(theme=LINUXTOOLS_THEME)


# ── CLI ───────────────────────────────────────────────────────────────────────

@click.command(
    name="linux-tools",
    context_settings={
        "help_option_names": ["-h", "--help"],
        # Unknown flags are ignored rather than rejected
        "ignore_unknown_options": True,
        "allow_extra_args": True,
    },
)
@click.version_option(__version__, "-V", "--version", prog_name="linux-tools")
@click.option("--ref", metavar="REF", default=None, is_flag=False, flag_value="main",
              help="Branch or tag of the remote script collection (default: main).")
@click.option("--lang", "lang", type=click.Choice(["zh", "en"], case_sensitive=False),
              default=None, help="UI language; skips the language prompt.")
@click.option("--target-user", metavar="USER", default=None,
              help="User for SSH defaults; skips the target-user prompt.")
@click.option("--root", "install_root", metavar="DIR", default=None,
              type=click.Path(file_okay=False, path_type=Path),
              help="Directory holding scripts/, tests/, docker/ and .logs/ (default: cwd).")
def cli(
    ref: Optional[str],
    lang: Optional[str],
    target_user: Optional[str],
    install_root: Optional[Path],
) -> None:
    """Ubuntu setup orchestrator.

    Downloads installer scripts for the selected ref into a local cache and
    runs them from a bilingual menu (whiptail, dialog, or plain text).

    \b
    Environment variables:
      XDG_CACHE_HOME   Cache base directory (default: ~/.cache).
      NO_COLOR=1       Disable colour output.
    """
    config = load_config()

    preset_lang = parse_language(lang) or parse_language(config["language"])
    preset_user = target_user if target_user is not None else config["target_user"]

    ctx = build_context(
        console,
        ref=ref or config["ref"],
        install_root=install_root,
        lang=preset_lang or DEFAULT_LANGUAGE,
        target_user=preset_user or "",
        repo_owner=config["repo_owner"],
        repo_name=config["repo_name"],
    )
    ctx.backend = detect_backend()

    try:
        if preset_lang is None:
            choose_language(ctx)
        if preset_user is None:
            prompt_target_user(ctx)

        print_header(console, ctx)
        console.print()
        run_main_menu(ctx)
    except PreconditionError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)
    except KeyboardInterrupt:
        console.print(f"\n  [dim]{ctx.t('cancelled')}.[/dim]\n")
        raise SystemExit(130)

    console.print(ctx.t("done"))


# ── Entry ─────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    cli()
