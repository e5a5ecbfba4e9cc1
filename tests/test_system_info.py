"""
Tests for linuxtools/system_info.py.
"""

from unittest.mock import patch

from linuxtools.system_info import (
    get_system_info,
    has_tool,
    is_root,
    is_supported_ubuntu,
    read_os_release,
)


NOBLE = """\
PRETTY_NAME="Ubuntu 24.04.1 LTS"
NAME="Ubuntu"
VERSION_ID="24.04"
# comment
ID=ubuntu
VERSION_CODENAME=noble
UBUNTU_CODENAME=noble
"""


class TestReadOsRelease:
    def test_parses_and_unquotes(self, tmp_path):
        path = tmp_path / "os-release"
        path.write_text(NOBLE)
        fields = read_os_release(path)
        assert fields["ID"] == "ubuntu"
        assert fields["VERSION_ID"] == "24.04"
        assert fields["PRETTY_NAME"] == "Ubuntu 24.04.1 LTS"
        assert "# comment" not in fields

    def test_missing_file(self, tmp_path):
        assert read_os_release(tmp_path / "nope") == {}


class TestIsSupportedUbuntu:
    def test_jammy_and_noble(self):
        assert is_supported_ubuntu({"os_id": "ubuntu", "version_id": "22.04"})
        assert is_supported_ubuntu({"os_id": "ubuntu", "version_id": "24.04"})

    def test_others(self):
        assert not is_supported_ubuntu({"os_id": "ubuntu", "version_id": "20.04"})
        assert not is_supported_ubuntu({"os_id": "debian", "version_id": "24.04"})
        assert not is_supported_ubuntu({})


class TestGetSystemInfo:
    def test_keys(self, tmp_path):
        path = tmp_path / "os-release"
        path.write_text(NOBLE)
        with patch("linuxtools.system_info._OS_RELEASE", path):
            info = get_system_info()
        assert info["os_id"] == "ubuntu"
        assert info["codename"] == "noble"
        assert set(info["tools"]) == {"curl", "wget", "sudo", "whiptail", "dialog", "docker"}
        assert isinstance(info["is_root"], bool)

    def test_is_cached(self):
        assert get_system_info() is get_system_info()


class TestHelpers:
    def test_is_root(self):
        with patch("linuxtools.system_info.os.geteuid", return_value=0):
            assert is_root() is True
        with patch("linuxtools.system_info.os.geteuid", return_value=1000):
            assert is_root() is False

    def test_has_tool(self):
        with patch("linuxtools.system_info.shutil.which", return_value=None):
            assert has_tool("docker") is False
        with patch("linuxtools.system_info.shutil.which", return_value="/usr/bin/docker"):
            assert has_tool("docker") is True
