"""
Script runner.

Runs one installer script under bash, elevated with sudo when it needs
root, with stdout+stderr captured to {log_dir}/{basename}.log. The last
few log lines are echoed afterwards whatever the exit status; the status
itself is returned but not interpreted.

Privilege comes from catalog metadata when the caller has it. Local
scripts carry none, so for them the script text is searched for the
"run as root" phrases the installer scripts print in their guards.
"""

from __future__ import annotations

import re
import shlex
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from rich.markup import escape

from linuxtools.catalog import RunAs, find_entry
from linuxtools.context import Context
from linuxtools.errors import PrivilegeError
from linuxtools.fetcher import fetch_script
from linuxtools.system_info import is_root


ROOT_MARKER = re.compile(r"Must be run as root|Please run as root", re.IGNORECASE)
TAIL_LINES = 5


@dataclass
class RunOutcome:
    path: Path
    returncode: int
    log_path: Path
    elevated: bool
    tail: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.returncode == 0


# ── Privilege ─────────────────────────────────────────────────────────────────

def requires_root(path: Path) -> bool:
    """True when the script text contains a root-required marker phrase."""
    try:
        text = path.read_text(errors="replace")
    except OSError:
        return False
    return ROOT_MARKER.search(text) is not None


def ensure_privileges(ctx: Context) -> list[str]:
    """
    Return the command prefix that runs a child process as root.

    Already root: no prefix. Otherwise announce it, refresh the sudo
    credential cache (password prompt happens here, on the terminal, not
    inside the captured log) and return ["sudo"].
    """
    if is_root():
        return []
    ctx.console.print(f"  [warning]{ctx.t('need_root')}[/warning]")
    if shutil.which("sudo") is None:
        raise PrivilegeError("sudo is required to run root scripts")
    subprocess.run(["sudo", "-v"], check=False)
    return ["sudo"]


# ── Invocation ────────────────────────────────────────────────────────────────

def log_path_for(ctx: Context, script: Path | str) -> Path:
    """{log_dir}/{basename}.log — one file per script, overwritten each run."""
    return ctx.log_dir / f"{Path(script).name}.log"


def invoke(path: Path, args: str, prefix: list[str], log_path: Path) -> int:
    """Run `[prefix] bash path args…` with all output sent to log_path."""
    log_path.parent.mkdir(parents=True, exist_ok=True)
    cmd = [*prefix, "bash", str(path), *shlex.split(args)]
    with log_path.open("w") as log:
        try:
            proc = subprocess.run(cmd, stdout=log, stderr=subprocess.STDOUT, check=False)
        except OSError as e:
            log.write(f"{cmd[0]}: {e}\n")
            return 127
    return proc.returncode


def tail_lines(path: Path, count: int = TAIL_LINES) -> list[str]:
    """Last `count` lines of a text file; [] if it cannot be read."""
    try:
        lines = path.read_text(errors="replace").splitlines()
    except OSError:
        return []
    return lines[-count:]


# ── Public API ────────────────────────────────────────────────────────────────

def run_script(
    ctx: Context,
    path: Path,
    args: str = "",
    run_as: RunAs | None = None,
) -> RunOutcome:
    """
    Run one script and echo the tail of its log.

    Args:
        run_as: declared privilege; None means "look for the marker phrase".
    """
    elevate = run_as == "root" if run_as is not None else requires_root(path)
    prefix = ensure_privileges(ctx) if elevate else []

    log_path = log_path_for(ctx, path)
    returncode = invoke(path, args, prefix, log_path)
    tail = tail_lines(log_path)

    ctx.console.print(f"  [dim]{escape(ctx.t('log_tail', path=str(log_path)))}[/dim]")
    for line in tail:
        ctx.console.print(f"  [command]{escape(line)}[/command]")

    return RunOutcome(path, returncode, log_path, elevate, tail)


def run_remote_script(ctx: Context, name: str, args: str = "") -> RunOutcome:
    """
    Fetch (or reuse) a remote script and run it.

    Privilege comes from the catalog; names outside the catalog fall back
    to the marker check. FetchError and DownloaderMissingError propagate.
    """
    entry = fetch_script(ctx, name)
    meta = find_entry(name)
    return run_script(ctx, entry.path, args, run_as=meta.run_as if meta else None)
