"""
Orchestrator context — the one object every operation receives.

Holds the active language and UI backend (the only mutable state of the
menu loop), the selected ref and the paths derived from it.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from linuxtools.i18n import DEFAULT_LANGUAGE, Language, msg
from linuxtools.ui.backend import UIBackend


PRODUCT = "linux-tools"
REMOTE_HOST = "https://raw.githubusercontent.com"


def cache_root(env: Mapping[str, str] | None = None) -> Path:
    """$XDG_CACHE_HOME, or $HOME/.cache when it is unset or empty."""
    env = os.environ if env is None else env
    xdg = env.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg)
    home = env.get("HOME") or str(Path.home())
    return Path(home) / ".cache"


def cache_dir_for(ref: str, env: Mapping[str, str] | None = None) -> Path:
    """Deterministic script cache directory for a ref."""
    return cache_root(env) / PRODUCT / ref / "scripts"


@dataclass
class Context:
    console: Console
    install_root: Path
    cache_dir: Path
    ref: str = "main"
    lang: Language = DEFAULT_LANGUAGE
    backend: UIBackend = UIBackend.PLAIN
    target_user: str = ""
    repo_owner: str = "owq-1777"
    repo_name: str = PRODUCT

    # ── Derived locations ─────────────────────────────────────────────────────

    @property
    def remote_base(self) -> str:
        return f"{REMOTE_HOST}/{self.repo_owner}/{self.repo_name}/{self.ref}"

    @property
    def scripts_dir(self) -> Path:
        return self.install_root / "scripts"

    @property
    def log_dir(self) -> Path:
        return self.install_root / ".logs"

    @property
    def e2e_script(self) -> Path:
        return self.install_root / "tests" / "e2e-ubuntu-24.sh"

    @property
    def stacks_dir(self) -> Path:
        return self.install_root / "docker"

    def remote_url(self, name: str) -> str:
        return f"{self.remote_base}/scripts/{name}"

    # ── Messages ──────────────────────────────────────────────────────────────

    def t(self, key: str, **kwargs) -> str:
        """Localized message in the active language."""
        return msg(key, self.lang, **kwargs)


def build_context(
    console: Console,
    ref: str = "main",
    install_root: Path | None = None,
    lang: Language = DEFAULT_LANGUAGE,
    target_user: str = "",
    repo_owner: str = "owq-1777",
    repo_name: str = PRODUCT,
    env: Mapping[str, str] | None = None,
) -> Context:
    """Assemble a Context, resolving the cache directory from the environment."""
    return Context(
        console=console,
        install_root=(install_root or Path.cwd()).resolve(),
        cache_dir=cache_dir_for(ref, env),
        ref=ref,
        lang=lang,
        target_user=target_user,
        repo_owner=repo_owner,
        repo_name=repo_name,
    )
