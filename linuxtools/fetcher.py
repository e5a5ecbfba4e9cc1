"""
Script cache and fetcher.

Scripts live at {cache_dir}/{name}, where cache_dir is keyed by ref:
  ${XDG_CACHE_HOME:-$HOME/.cache}/linux-tools/<ref>/scripts/<name>

A non-empty cached file is reused without touching the network. Downloads
go to a temporary file next to the target and are renamed into place only
after curl/wget succeed, so a failed download never leaves a truncated
script behind to be mistaken for a cache hit.
"""

from __future__ import annotations

import os
import shutil
import stat
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path

from linuxtools.context import Context
from linuxtools.errors import DownloaderMissingError, FetchError


# Either tool will do; curl is tried first
_DOWNLOADERS = ("curl", "wget")


@dataclass
class CacheEntry:
    name: str
    ref: str
    path: Path
    executable: bool


# ── Public API ────────────────────────────────────────────────────────────────

def cache_path(ctx: Context, name: str) -> Path:
    """Deterministic local path for a script under the context's ref."""
    return ctx.cache_dir / name


def is_cached(path: Path) -> bool:
    """True when path is a regular, non-empty file."""
    try:
        return path.is_file() and path.stat().st_size > 0
    except OSError:
        return False


def find_downloader() -> str | None:
    """Return 'curl' or 'wget', whichever is found first, else None."""
    for tool in _DOWNLOADERS:
        if shutil.which(tool) is not None:
            return tool
    return None


def fetch_script(ctx: Context, name: str) -> CacheEntry:
    """
    Return a cached, executable copy of the named remote script.

    Raises:
        DownloaderMissingError: not cached and neither curl nor wget exists.
        FetchError:             the download failed or returned nothing.
    """
    dst = cache_path(ctx, name)

    if is_cached(dst):
        ctx.console.print(f"  [dim]{ctx.t('cache_hit')}: {name}[/dim]")
        return CacheEntry(name, ctx.ref, dst, _make_executable(dst))

    tool = find_downloader()
    if tool is None:
        raise DownloaderMissingError("curl or wget required")

    ctx.cache_dir.mkdir(parents=True, exist_ok=True)
    url = ctx.remote_url(name)
    ctx.console.print(f"  [dim]{ctx.t('downloading')} {url}[/dim]")

    fd, tmp_name = tempfile.mkstemp(prefix=f".{name}.", suffix=".part", dir=ctx.cache_dir)
    os.close(fd)
    tmp = Path(tmp_name)
    try:
        proc = subprocess.run(
            _download_command(tool, url, tmp),
            capture_output=True,
            text=True,
            check=False,
        )
        if proc.returncode != 0:
            reason = (proc.stderr or "").strip() or f"{tool} exited with {proc.returncode}"
            raise FetchError(name, reason)
        if not is_cached(tmp):
            raise FetchError(name, "empty response")
        os.replace(tmp, dst)
    finally:
        tmp.unlink(missing_ok=True)

    return CacheEntry(name, ctx.ref, dst, _make_executable(dst))


# ── Internal ──────────────────────────────────────────────────────────────────

def _download_command(tool: str, url: str, dst: Path) -> list[str]:
    if tool == "curl":
        return ["curl", "-fsSL", url, "-o", str(dst)]
    return ["wget", "-qO", str(dst), url]


def _make_executable(path: Path) -> bool:
    """chmod +x, ignoring failures; return whether the file is executable."""
    try:
        mode = path.stat().st_mode
        path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError:
        pass
    return os.access(path, os.X_OK)
