"""
Tests for linuxtools/main.py — flags, config merge, exit codes.
"""

from contextlib import ExitStack
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from linuxtools.config import DEFAULTS
from linuxtools.errors import DownloaderMissingError
from linuxtools.i18n import Language
from linuxtools.main import cli
from linuxtools.ui.backend import UIBackend


@pytest.fixture
def app():
    """Patch every interactive piece of the entry point; yield the mocks."""
    with ExitStack() as stack:
        mocks = {
            name: stack.enter_context(patch(f"linuxtools.main.{name}"))
            for name in ("choose_language", "prompt_target_user", "print_header", "run_main_menu")
        }
        mocks["load_config"] = stack.enter_context(
            patch("linuxtools.main.load_config", return_value=dict(DEFAULTS))
        )
        stack.enter_context(patch("linuxtools.main.detect_backend", return_value=UIBackend.PLAIN))
        yield mocks


def _session(app):
    """The Context the main menu was started with."""
    return app["run_main_menu"].call_args[0][0]


class TestCli:
    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "linux-tools" in result.output

    def test_flags_skip_prompts(self, app, tmp_path):
        result = CliRunner().invoke(
            cli, ["--ref", "v1", "--lang", "en", "--target-user", "dev", "--root", str(tmp_path)]
        )
        assert result.exit_code == 0
        app["choose_language"].assert_not_called()
        app["prompt_target_user"].assert_not_called()

        ctx = _session(app)
        assert ctx.ref == "v1"
        assert ctx.lang is Language.EN
        assert ctx.target_user == "dev"
        assert ctx.install_root == tmp_path.resolve()
        assert ctx.cache_dir.parts[-3:] == ("linux-tools", "v1", "scripts")

    def test_unknown_flags_are_ignored(self, app):
        result = CliRunner().invoke(cli, ["--lang", "en", "--target-user", "", "--bogus", "extra"])
        assert result.exit_code == 0
        app["run_main_menu"].assert_called_once()

    def test_prompts_when_not_preset(self, app):
        result = CliRunner().invoke(cli, [])
        assert result.exit_code == 0
        app["choose_language"].assert_called_once()
        app["prompt_target_user"].assert_called_once()
        assert _session(app).ref == "main"

    def test_config_supplies_defaults(self, app):
        app["load_config"].return_value = dict(
            DEFAULTS, ref="stable", language="en", target_user="ops"
        )
        result = CliRunner().invoke(cli, [])
        assert result.exit_code == 0
        app["choose_language"].assert_not_called()
        app["prompt_target_user"].assert_not_called()
        ctx = _session(app)
        assert (ctx.ref, ctx.lang, ctx.target_user) == ("stable", Language.EN, "ops")

    def test_flag_beats_config(self, app):
        app["load_config"].return_value = dict(DEFAULTS, ref="stable")
        CliRunner().invoke(cli, ["--ref", "dev", "--lang", "zh", "--target-user", "x"])
        assert _session(app).ref == "dev"

    def test_precondition_error_exits_1(self, app):
        app["run_main_menu"].side_effect = DownloaderMissingError("curl or wget is required")
        result = CliRunner().invoke(cli, ["--lang", "en", "--target-user", ""])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "curl or wget" in result.output

    def test_ctrl_c_exits_130(self, app):
        app["run_main_menu"].side_effect = KeyboardInterrupt
        result = CliRunner().invoke(cli, ["--lang", "en", "--target-user", ""])
        assert result.exit_code == 130
        assert "Cancelled" in result.output

    def test_done_message_on_exit(self, app):
        result = CliRunner().invoke(cli, ["--lang", "en", "--target-user", ""])
        assert result.exit_code == 0
        assert "Done" in result.output

    def test_bare_ref_flag_means_main(self, app):
        app["load_config"].return_value = dict(DEFAULTS, ref="stable")
        result = CliRunner().invoke(cli, ["--lang", "en", "--target-user", "", "--ref"])
        assert result.exit_code == 0
        assert _session(app).ref == "main"
