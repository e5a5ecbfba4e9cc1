"""
Docker housekeeping entries of the main menu.

  install_docker        — remote install-docker.sh through the runner
  configure_docker_root — move the Docker data-root to /docker
  manage_stacks         — copy local Compose stacks into /docker/stacks

Privileged steps are best-effort, like the shell they replace: each one
runs with check=False and the final `docker info` decides success.
"""

from __future__ import annotations

import json
import subprocess
from datetime import datetime
from pathlib import Path

from rich.markup import escape

from linuxtools.context import Context
from linuxtools.runner import RunOutcome, ensure_privileges, run_remote_script
from linuxtools.system_info import has_tool
from linuxtools.ui.backend import confirm


DOCKER_ROOT = "/docker"
STACKS_DST = "/docker/stacks"
VAR_LIB_DOCKER = Path("/var/lib/docker")
DAEMON_JSON = "/etc/docker/daemon.json"


# ── Install ───────────────────────────────────────────────────────────────────

def install_docker(ctx: Context) -> RunOutcome:
    return run_remote_script(ctx, "install-docker.sh")


# ── Data-root migration ───────────────────────────────────────────────────────

def merge_data_root(existing: str | None, root: str = DOCKER_ROOT) -> str:
    """
    Return daemon.json text with "data-root" set to root.

    Other keys are kept. Empty, unparseable or non-object input is replaced
    by a fresh object (the caller has already backed the old file up).
    """
    data: dict = {}
    if existing and existing.strip():
        try:
            parsed = json.loads(existing)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, dict):
            data = parsed
    data["data-root"] = root
    return json.dumps(data, indent=2) + "\n"


def configure_docker_root(ctx: Context, timestamp: str | None = None) -> bool:
    """
    Stop Docker, copy its data to /docker, point daemon.json at it, restart.

    Returns True when `docker info` reports the new root afterwards.
    """
    if not has_tool("docker"):
        ctx.console.print(f"  [warning]{ctx.t('docker_not_installed')}[/warning]")
        return False

    ctx.console.print(f"  {ctx.t('will_config_root')}")
    if not confirm(ctx, ctx.t("confirm")):
        return False

    prefix = ensure_privileges(ctx)
    ts = timestamp or datetime.now().strftime("%Y%m%d-%H%M%S")

    _run(prefix, ["mkdir", "-p", DOCKER_ROOT])
    _run(prefix, ["chown", "root:docker", DOCKER_ROOT])
    _run(prefix, ["chmod", "0755", DOCKER_ROOT])
    _run(prefix, ["systemctl", "stop", "docker.socket"])
    _run(prefix, ["systemctl", "stop", "docker"])

    if VAR_LIB_DOCKER.is_dir():
        _run(prefix, ["rsync", "-aHAX", f"{VAR_LIB_DOCKER}/", f"{DOCKER_ROOT}/"])
        _run(prefix, ["mv", str(VAR_LIB_DOCKER), f"{VAR_LIB_DOCKER}.bak.{ts}"])

    _run(prefix, ["mkdir", "-p", str(Path(DAEMON_JSON).parent)])
    code, existing = _run(prefix, ["cat", DAEMON_JSON])
    if code == 0:
        _run(prefix, ["cp", DAEMON_JSON, f"{DAEMON_JSON}.bak.{ts}"])
    else:
        existing = None
    _run(prefix, ["tee", DAEMON_JSON], stdin=merge_data_root(existing))

    _run(prefix, ["systemctl", "daemon-reload"])
    _run(prefix, ["systemctl", "start", "docker"])

    _, info = _run(prefix, ["docker", "info"])
    if f"Docker Root Dir: {DOCKER_ROOT}" in info:
        ctx.console.print(f"  [success]{ctx.t('docker_config_done')}[/success]")
        return True
    ctx.console.print(f"  [failure]{ctx.t('error')}[/failure]")
    return False


# ── Compose stacks ────────────────────────────────────────────────────────────

def manage_stacks(ctx: Context) -> list[Path]:
    """rsync every directory under {install_root}/docker into /docker/stacks."""
    prefix = ensure_privileges(ctx)
    _run(prefix, ["mkdir", "-p", STACKS_DST])

    src = ctx.stacks_dir
    if not src.is_dir():
        ctx.console.print(f"  [dim]{escape(ctx.t('no_stacks', src=str(src)))}[/dim]")
        return []

    synced: list[Path] = []
    for stack in sorted(src.iterdir()):
        if not stack.is_dir():
            continue
        _run(prefix, ["rsync", "-a", str(stack), f"{STACKS_DST}/"])
        synced.append(stack)

    ctx.console.print(f"  [success]{escape(ctx.t('stacks_synced', dst=STACKS_DST))}[/success]")
    return synced


# ── Internal ──────────────────────────────────────────────────────────────────

def _run(prefix: list[str], cmd: list[str], stdin: str | None = None) -> tuple[int, str]:
    """Run a (possibly sudo-prefixed) command; return (exit code, stdout)."""
    try:
        proc = subprocess.run(
            [*prefix, *cmd],
            input=stdin,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        return 127, str(e)
    return proc.returncode, proc.stdout or ""
