"""Тесты настроек hostprobe."""

import pytest

from hostprobe.config import DISABLE_PREFIX, disable_var, is_disabled


class TestDisableVar:
    @pytest.mark.parametrize("name,expected", [
        ("disk-space", "HOSTPROBE_DISABLE_DISK_SPACE"),
        ("ld-preload", "HOSTPROBE_DISABLE_LD_PRELOAD"),
        ("single", "HOSTPROBE_DISABLE_SINGLE"),
    ])
    def test_mapping(self, name, expected):
        assert disable_var(name) == expected

    def test_prefix(self):
        assert disable_var("x").startswith(DISABLE_PREFIX)


class TestIsDisabled:
    def test_explicit_environ(self):
        env = {"HOSTPROBE_DISABLE_DISK_SPACE": "yes"}
        assert is_disabled("disk-space", env) is True
        assert is_disabled("zombie-processes", env) is False

    def test_empty_value(self):
        assert is_disabled("disk-space", {"HOSTPROBE_DISABLE_DISK_SPACE": ""}) is False

    def test_process_environ(self, monkeypatch):
        monkeypatch.setenv("HOSTPROBE_DISABLE_PROXY_ACTIVE", "1")
        assert is_disabled("proxy-active") is True
        monkeypatch.delenv("HOSTPROBE_DISABLE_PROXY_ACTIVE")
        assert is_disabled("proxy-active") is False
