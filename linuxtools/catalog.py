"""
Script catalog — what can be fetched and in which order it should run.

Every entry declares whether it needs root. The orchestrator trusts this
metadata instead of guessing from the (remote, untrusted) script text.
"""

from dataclasses import dataclass
from typing import Literal

RunAs = Literal["user", "root"]


# ── Data model ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CatalogEntry:
    name: str           # "install-docker.sh"
    run_as: RunAs       # "root"


@dataclass(frozen=True)
class Step:
    name: str           # "Docker"
    script: str         # "install-docker.sh"
    args: str           # "--target-user dev"
    run_as: RunAs       # "root" | "user"
    post_check: str     # "docker --version"; informational only


# ── Remote catalog ────────────────────────────────────────────────────────────
# Display order of the "run remote scripts" menu; positions are 1-based there.

REMOTE_SCRIPTS: tuple[CatalogEntry, ...] = (
    CatalogEntry("setup-system-base.sh",                  "root"),
    CatalogEntry("setup-system-build-toolchain.sh",       "root"),
    CatalogEntry("setup-system-zsh-root.sh",              "root"),
    CatalogEntry("setup-system-safe-rm.sh",               "root"),
    CatalogEntry("setup-system-ssh-defaults.sh",          "root"),
    CatalogEntry("install-docker.sh",                     "root"),
    CatalogEntry("setup-user-dev-tools.sh",               "user"),
    CatalogEntry("setup-user-create-dev-from-root-zsh.sh", "root"),
    CatalogEntry("install-nginx.sh",                      "root"),
    CatalogEntry("install-php.sh",                        "root"),
)


def find_entry(name: str) -> CatalogEntry | None:
    """Catalog entry for a script name, or None if it is not listed."""
    for entry in REMOTE_SCRIPTS:
        if entry.name == name:
            return entry
    return None


# ── Recommended order ─────────────────────────────────────────────────────────

def recommended_steps(target_user: str = "") -> tuple[Step, ...]:
    """
    The fixed recommended sequence.

    The SSH-defaults step only gets --target-user when a user was given;
    the script then falls back to $SUDO_USER or root on its own.
    """
    ssh_args = f"--target-user {target_user}" if target_user else ""
    return (
        Step("Base", "setup-system-base.sh", "", "root",
             "vim --version | head -n1"),
        Step("Toolchain", "setup-system-build-toolchain.sh", "", "root",
             "cmake --version | head -n1"),
        Step("Zsh(root)", "setup-system-zsh-root.sh", "", "root",
             "zsh --version | head -n1"),
        Step("Safe rm", "setup-system-safe-rm.sh", "", "root",
             "safe-rm --version 2>/dev/null || echo safe-rm installed"),
        Step("SSH defaults", "setup-system-ssh-defaults.sh", ssh_args, "root",
             "true"),
        Step("Docker", "install-docker.sh", "", "root",
             "docker --version"),
        Step("User dev tools", "setup-user-dev-tools.sh", "", "user",
             "node -v || true"),
    )
