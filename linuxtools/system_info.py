"""
Host detection — OS release, architecture, privileges, available tools.
The header, the runner and the e2e entry all read from here.
"""

import os
import platform
import shutil
from functools import lru_cache
from pathlib import Path
from typing import Any


_OS_RELEASE = Path("/etc/os-release")

SUPPORTED_UBUNTU: tuple[str, ...] = ("22.04", "24.04")

# Tools the orchestrator may shell out to, probed once for the header
_TOOLS = ("curl", "wget", "sudo", "whiptail", "dialog", "docker")


def is_root() -> bool:
    """True when the current process runs with uid 0."""
    return os.geteuid() == 0


def has_tool(tool: str) -> bool:
    """Return True if tool is available in PATH."""
    return shutil.which(tool) is not None


def read_os_release(path: Path | None = None) -> dict[str, str]:
    """
    Parse an os-release file into a dict.

    Returns {} when the file is missing or unreadable.
    """
    release = path or _OS_RELEASE
    try:
        lines = release.read_text().splitlines()
    except OSError:
        return {}

    fields: dict[str, str] = {}
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        fields[key.strip()] = value.strip().strip('"').strip("'")
    return fields


@lru_cache(maxsize=1)
def get_system_info() -> dict[str, Any]:
    """
    Return a dict describing this host.

    Keys:
        os_id          "ubuntu"
        version_id     "24.04"
        codename       "noble"
        pretty_name    "Ubuntu 24.04.1 LTS"
        machine        "x86_64" | "aarch64"
        hostname       "web-01"
        is_root        True | False
        tools          {"curl": True, "wget": False, ...}
    """
    release = read_os_release()
    codename = release.get("UBUNTU_CODENAME") or release.get("VERSION_CODENAME", "")

    return {
        "os_id": release.get("ID", ""),
        "version_id": release.get("VERSION_ID", ""),
        "codename": codename,
        "pretty_name": release.get("PRETTY_NAME", "") or platform.system(),
        "machine": platform.machine(),
        "hostname": platform.node(),
        "is_root": is_root(),
        "tools": {tool: has_tool(tool) for tool in _TOOLS},
    }


def is_supported_ubuntu(info: dict[str, Any]) -> bool:
    """True for Ubuntu 22.04 (jammy) and 24.04 (noble)."""
    return info.get("os_id") == "ubuntu" and info.get("version_id") in SUPPORTED_UBUNTU
