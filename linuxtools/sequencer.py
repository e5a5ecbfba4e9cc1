"""
Recommended-order sequencer.

Walks the fixed step list once, in order. Each step: gauge → fetch → run
(with the step's declared privilege) → post-check. Any per-step failure,
including a missing downloader or sudo, marks the step ✖ and the walk
continues. Nothing already done is undone and later steps are never
skipped because an earlier one failed. Post-checks are informational: their status is discarded.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from linuxtools.catalog import Step, recommended_steps
from linuxtools.context import Context
from linuxtools.errors import FetchError, PreconditionError
from linuxtools.fetcher import fetch_script
from linuxtools.runner import ensure_privileges, invoke, log_path_for
from linuxtools.ui.backend import gauge
from linuxtools.ui.theme import COLOR_DIM, COLOR_TEXT, ICON_FAILURE, ICON_SUCCESS


@dataclass
class StepOutcome:
    step: Step
    ok: bool
    log_path: Path | None
    reason: str = ""


# ── Public API ────────────────────────────────────────────────────────────────

def run_recommended_order(
    ctx: Context,
    steps: tuple[Step, ...] | list[Step] | None = None,
) -> list[StepOutcome]:
    """
    Run every step exactly once, in declared order.

    Args:
        steps: defaults to recommended_steps(ctx.target_user).

    Returns one StepOutcome per step, in the same order.
    """
    if steps is None:
        steps = recommended_steps(ctx.target_user)

    total = len(steps)
    outcomes: list[StepOutcome] = []
    for idx, step in enumerate(steps, 1):
        gauge(ctx, step.name, idx, total)
        outcome = run_step(ctx, step)
        _print_marker(ctx, outcome)
        outcomes.append(outcome)

    _print_summary(ctx, outcomes)
    return outcomes


def run_step(ctx: Context, step: Step) -> StepOutcome:
    """
    Fetch, run and post-check a single step.

    Missing curl/wget or sudo only fails this step; the sequence goes on
    and later steps that are cached or need no root still run.
    """
    try:
        entry = fetch_script(ctx, step.script)
        prefix = ensure_privileges(ctx) if step.run_as == "root" else []
    except FetchError as e:
        return StepOutcome(step, False, None, f"{ctx.t('download_failed')}: {e.reason}")
    except PreconditionError as e:
        return StepOutcome(step, False, None, str(e))

    log_path = log_path_for(ctx, step.script)
    returncode = invoke(entry.path, step.args, prefix, log_path)
    if returncode != 0:
        return StepOutcome(step, False, log_path, f"exit {returncode}")

    run_post_check(step.post_check)
    return StepOutcome(step, True, log_path)


def run_post_check(command: str) -> None:
    """Run a post-check shell snippet, discarding its output and status."""
    if not command:
        return
    try:
        subprocess.run(
            ["bash", "-c", command],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        pass


# ── UI helpers ────────────────────────────────────────────────────────────────

def _print_marker(ctx: Context, outcome: StepOutcome) -> None:
    if outcome.ok:
        ctx.console.print(f"[success]{ICON_SUCCESS} {escape(outcome.step.name)}[/success]")
        return
    line = f"[failure]{ICON_FAILURE} {escape(outcome.step.name)}[/failure]"
    if outcome.reason:
        line += f"  [dim]{escape(outcome.reason)}[/dim]"
    ctx.console.print(line)


def _print_summary(ctx: Context, outcomes: list[StepOutcome]) -> None:
    """Panel with succeeded / failed counts and where the logs are."""
    ok = sum(1 for o in outcomes if o.ok)
    failed = len(outcomes) - ok

    body = Text()
    body.append(f"\n  {ctx.t('sequence_summary', ok=ok, failed=failed)}",
                style=f"bold {COLOR_TEXT}")
    body.append(f"\n  {ctx.t('sequence_logs', path=str(ctx.log_dir))}\n", style=COLOR_DIM)

    border = "bright_green" if failed == 0 else "yellow"
    ctx.console.print()
    ctx.console.print(
        Panel(body, title=f"[bold]{escape(ctx.t('opt_recommended'))}[/bold]",
              title_align="left", border_style=border)
    )
    ctx.console.print()
