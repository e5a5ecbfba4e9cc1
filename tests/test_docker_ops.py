"""
Tests for linuxtools/docker_ops.py.

All privileged commands are recorded, never executed.
"""

import json
import subprocess
from unittest.mock import patch

import pytest

from conftest import output
from linuxtools.docker_ops import (
    configure_docker_root,
    install_docker,
    manage_stacks,
    merge_data_root,
)


class _Recorder:
    """subprocess.run stand-in keyed on the command (without sudo)."""

    def __init__(self, responses=None):
        self.calls = []
        self.stdin = {}
        self.responses = responses or {}

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        bare = tuple(cmd[1:] if cmd[0] == "sudo" else cmd)
        if kwargs.get("input") is not None:
            self.stdin[bare] = kwargs["input"]
        code, out = self.responses.get(bare[:2], (0, ""))
        return subprocess.CompletedProcess(cmd, code, out, "")

    def bare(self):
        return [c[1:] if c[0] == "sudo" else c for c in self.calls]


# ── daemon.json merge ─────────────────────────────────────────────────────────

class TestMergeDataRoot:
    def test_keeps_other_keys(self):
        merged = json.loads(merge_data_root('{"log-driver": "json-file"}'))
        assert merged == {"log-driver": "json-file", "data-root": "/docker"}

    def test_overwrites_existing_root(self):
        merged = json.loads(merge_data_root('{"data-root": "/old"}'))
        assert merged["data-root"] == "/docker"

    @pytest.mark.parametrize("existing", [None, "", "   ", "{not json", "[1, 2]"])
    def test_unusable_input_gives_fresh_object(self, existing):
        assert json.loads(merge_data_root(existing)) == {"data-root": "/docker"}

    def test_pretty_printed_with_newline(self):
        assert merge_data_root(None) == '{\n  "data-root": "/docker"\n}\n'


# ── Data-root migration ───────────────────────────────────────────────────────

class TestConfigureDockerRoot:
    def test_docker_missing(self, ctx):
        with patch("linuxtools.docker_ops.has_tool", return_value=False), \
             patch("linuxtools.docker_ops.subprocess.run") as mock_run:
            assert configure_docker_root(ctx) is False
        mock_run.assert_not_called()
        assert "Docker not detected" in output(ctx)

    def test_declined(self, ctx):
        with patch("linuxtools.docker_ops.has_tool", return_value=True), \
             patch("linuxtools.docker_ops.confirm", return_value=False), \
             patch("linuxtools.docker_ops.ensure_privileges") as mock_priv, \
             patch("linuxtools.docker_ops.subprocess.run") as mock_run:
            assert configure_docker_root(ctx) is False
        mock_priv.assert_not_called()
        mock_run.assert_not_called()

    def test_full_migration(self, ctx, tmp_path):
        var_lib = tmp_path / "var-lib-docker"
        var_lib.mkdir()
        rec = _Recorder({
            ("cat", "/etc/docker/daemon.json"): (0, '{"log-driver": "local"}'),
            ("docker", "info"): (0, " Docker Root Dir: /docker\n"),
        })
        with patch("linuxtools.docker_ops.has_tool", return_value=True), \
             patch("linuxtools.docker_ops.confirm", return_value=True), \
             patch("linuxtools.docker_ops.ensure_privileges", return_value=["sudo"]), \
             patch("linuxtools.docker_ops.VAR_LIB_DOCKER", var_lib), \
             patch("linuxtools.docker_ops.subprocess.run", side_effect=rec):
            assert configure_docker_root(ctx, timestamp="20260101-000000") is True

        assert all(c[0] == "sudo" for c in rec.calls)
        assert rec.bare() == [
            ["mkdir", "-p", "/docker"],
            ["chown", "root:docker", "/docker"],
            ["chmod", "0755", "/docker"],
            ["systemctl", "stop", "docker.socket"],
            ["systemctl", "stop", "docker"],
            ["rsync", "-aHAX", f"{var_lib}/", "/docker/"],
            ["mv", str(var_lib), f"{var_lib}.bak.20260101-000000"],
            ["mkdir", "-p", "/etc/docker"],
            ["cat", "/etc/docker/daemon.json"],
            ["cp", "/etc/docker/daemon.json", "/etc/docker/daemon.json.bak.20260101-000000"],
            ["tee", "/etc/docker/daemon.json"],
            ["systemctl", "daemon-reload"],
            ["systemctl", "start", "docker"],
            ["docker", "info"],
        ]
        written = json.loads(rec.stdin[("tee", "/etc/docker/daemon.json")])
        assert written == {"log-driver": "local", "data-root": "/docker"}
        assert "configured to /docker" in output(ctx)

    def test_no_existing_data_or_config(self, ctx, tmp_path):
        rec = _Recorder({
            ("cat", "/etc/docker/daemon.json"): (1, ""),
            ("docker", "info"): (0, "Docker Root Dir: /var/lib/docker\n"),
        })
        with patch("linuxtools.docker_ops.has_tool", return_value=True), \
             patch("linuxtools.docker_ops.confirm", return_value=True), \
             patch("linuxtools.docker_ops.ensure_privileges", return_value=[]), \
             patch("linuxtools.docker_ops.VAR_LIB_DOCKER", tmp_path / "absent"), \
             patch("linuxtools.docker_ops.subprocess.run", side_effect=rec):
            assert configure_docker_root(ctx, timestamp="t") is False

        commands = [c[0] for c in rec.calls]
        assert "rsync" not in commands
        assert "cp" not in commands
        assert json.loads(rec.stdin[("tee", "/etc/docker/daemon.json")]) == {"data-root": "/docker"}
        assert "Error occurred" in output(ctx)


# ── Compose stacks ────────────────────────────────────────────────────────────

class TestManageStacks:
    def test_syncs_each_stack_directory(self, ctx):
        for name in ("web", "db"):
            (ctx.stacks_dir / name).mkdir(parents=True)
        (ctx.stacks_dir / "README.md").write_text("x")
        rec = _Recorder()
        with patch("linuxtools.docker_ops.ensure_privileges", return_value=[]), \
             patch("linuxtools.docker_ops.subprocess.run", side_effect=rec):
            synced = manage_stacks(ctx)

        assert [p.name for p in synced] == ["db", "web"]
        assert rec.calls[0] == ["mkdir", "-p", "/docker/stacks"]
        assert rec.calls[1] == ["rsync", "-a", str(ctx.stacks_dir / "db"), "/docker/stacks/"]
        assert "Stacks synced to /docker/stacks" in output(ctx)

    def test_no_stacks_directory(self, ctx):
        rec = _Recorder()
        with patch("linuxtools.docker_ops.ensure_privileges", return_value=[]), \
             patch("linuxtools.docker_ops.subprocess.run", side_effect=rec):
            assert manage_stacks(ctx) == []
        assert "No local docker stacks" in output(ctx)


# ── Install ───────────────────────────────────────────────────────────────────

class TestInstallDocker:
    def test_runs_remote_installer(self, ctx):
        with patch("linuxtools.docker_ops.run_remote_script", return_value="outcome") as mock_run:
            assert install_docker(ctx) == "outcome"
        mock_run.assert_called_once_with(ctx, "install-docker.sh")
