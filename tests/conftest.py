"""
Shared pytest fixtures.
"""
from io import StringIO

import pytest
from rich.console import Console

from linuxtools import system_info
from linuxtools.context import Context, build_context
from linuxtools.i18n import Language
from linuxtools.ui.backend import UIBackend
from linuxtools.ui.theme import LINUXTOOLS_THEME


@pytest.fixture(autouse=True)
def clear_lru_caches():
    """Prevent lru_cache state from leaking between tests."""
    yield
    system_info.get_system_info.cache_clear()


@pytest.fixture
def ctx(tmp_path) -> Context:
    """English, plain-backend Context rooted in tmp_path with its own cache."""
    console = Console(file=StringIO(), highlight=False, no_color=True,
                      theme=LINUXTOOLS_THEME, width=120)
    context = build_context(
        console,
        ref="main",
        install_root=tmp_path / "root",
        lang=Language.EN,
        env={"XDG_CACHE_HOME": str(tmp_path / "cache")},
    )
    context.install_root.mkdir(parents=True)
    context.backend = UIBackend.PLAIN
    return context


def output(context: Context) -> str:
    """Everything printed to the context's console so far."""
    return context.console.file.getvalue()


def feed_input(monkeypatch, *answers: str) -> None:
    """Answer successive input() calls; EOFError once answers run out."""
    queue = list(answers)

    def _input(*_args):
        if not queue:
            raise EOFError
        return queue.pop(0)

    monkeypatch.setattr("builtins.input", _input)
