"""Тесты зондов категории opsec."""

import os
import sys

import pytest

from hostprobe.context import CheckContext
from hostprobes.opsec.debug_enabled import DebugEnabled
from hostprobes.opsec.docker_socket import DockerSocket
from hostprobes.opsec.history_disabled import HistoryDisabled
from hostprobes.opsec.history_permissions import HistoryPermissions
from hostprobes.opsec.ld_preload import LdPreload
from hostprobes.opsec.permissive_umask import PermissiveUmask, read_umask
from hostprobes.opsec.proxy_active import ProxyActive

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX-права")


@pytest.fixture
def clean_env(monkeypatch):
    for var in list(os.environ):
        if not var.startswith("PYTEST_"):
            monkeypatch.delenv(var)
    return monkeypatch


@pytest.fixture
def ctx():
    return CheckContext.background()


class TestLdPreload:
    def test_linux(self, clean_env, ctx):
        clean_env.setenv("LD_PRELOAD", "/tmp/evil.so")
        probe = LdPreload(platform="linux")
        assert probe.check(ctx) is True
        assert probe.diagnostic() == "LD_PRELOAD = /tmp/evil.so"
        assert "LD_PRELOAD" in probe.remediation()

    def test_darwin(self, clean_env, ctx):
        clean_env.setenv("DYLD_INSERT_LIBRARIES", "/tmp/evil.dylib")
        probe = LdPreload(platform="darwin")
        assert probe.check(ctx) is True
        assert probe.var == "DYLD_INSERT_LIBRARIES"

    def test_wrong_platform_variable(self, clean_env, ctx):
        clean_env.setenv("DYLD_INSERT_LIBRARIES", "/tmp/evil.dylib")
        assert LdPreload(platform="linux").check(ctx) is False

    def test_unsupported_platform(self, clean_env, ctx):
        clean_env.setenv("LD_PRELOAD", "/tmp/evil.so")
        assert LdPreload(platform="win32").check(ctx) is False


class TestProxyActive:
    def test_clean(self, clean_env, ctx):
        assert ProxyActive().check(ctx) is False

    def test_lowercase_var(self, clean_env, ctx):
        clean_env.setenv("https_proxy", "http://proxy:3128")
        probe = ProxyActive()
        assert probe.check(ctx) is True
        assert "https_proxy" in probe.diagnostic()


class TestDebugEnabled:
    def test_presence_is_enough(self, clean_env, ctx):
        clean_env.setenv("DEBUG", "")
        probe = DebugEnabled()
        assert probe.check(ctx) is True
        assert "DEBUG" in probe.diagnostic()

    def test_clean(self, clean_env, ctx):
        assert DebugEnabled().check(ctx) is False

    def test_disabled(self, clean_env, ctx):
        clean_env.setenv("TRACE", "1")
        clean_env.setenv("HOSTPROBE_DISABLE_DEBUG_ENABLED", "1")
        assert DebugEnabled().check(ctx) is False


@posix_only
class TestPermissiveUmask:
    @pytest.fixture(autouse=True)
    def keep_umask(self):
        original = os.umask(0o022)
        yield
        os.umask(original)

    def test_read_umask_restores(self):
        os.umask(0o027)
        assert read_umask() == 0o027
        assert read_umask() == 0o027

    @pytest.mark.parametrize("mask,expected", [
        (0o000, True), (0o002, True), (0o022, False), (0o077, False),
    ])
    def test_masks(self, ctx, mask, expected):
        os.umask(mask)
        probe = PermissiveUmask()
        assert probe.check(ctx) is expected
        assert probe.diagnostic().endswith(f"{mask:04o}")


class TestHistoryDisabled:
    def test_histfile_dev_null(self, clean_env, ctx):
        clean_env.setenv("HISTFILE", "/dev/null")
        subject = HistoryDisabled()
        assert subject.check(ctx) is True
        assert "/dev/null" in subject.diagnostic()

    @pytest.mark.parametrize("value", ["ignorespace", "ignoreboth"])
    def test_histcontrol_skips_commands(self, clean_env, ctx, value):
        clean_env.setenv("HISTCONTROL", value)
        subject = HistoryDisabled()
        assert subject.check(ctx) is True
        assert value in subject.diagnostic()

    @pytest.mark.parametrize("env", [
        {},
        {"HISTFILE": "~/.bash_history"},
        {"HISTCONTROL": "ignoredups"},
    ])
    def test_history_kept(self, clean_env, ctx, env):
        for var, value in env.items():
            clean_env.setenv(var, value)
        assert HistoryDisabled().check(ctx) is False

    def test_disabled(self, clean_env, ctx):
        clean_env.setenv("HISTFILE", "/dev/null")
        clean_env.setenv("HOSTPROBE_DISABLE_HISTORY_DISABLED", "1")
        assert HistoryDisabled().check(ctx) is False


@posix_only
class TestHistoryPermissions:
    def test_world_readable(self, monkeypatch, ctx, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        hist = tmp_path / ".bash_history"
        hist.write_text("ls\n")
        os.chmod(hist, 0o644)
        probe = HistoryPermissions()
        assert probe.check(ctx) is True
        assert ".bash_history" in probe.diagnostic()

    def test_private(self, monkeypatch, ctx, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        hist = tmp_path / ".zsh_history"
        hist.write_text("ls\n")
        os.chmod(hist, 0o600)
        assert HistoryPermissions().check(ctx) is False

    def test_no_history(self, monkeypatch, ctx, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert HistoryPermissions().check(ctx) is False


@posix_only
class TestDockerSocket:
    def test_world_accessible_socket(self, monkeypatch, ctx, tmp_path):
        monkeypatch.delenv("DOCKER_HOST", raising=False)
        sock = tmp_path / "docker.sock"
        sock.write_text("")
        os.chmod(sock, 0o666)
        probe = DockerSocket(socket_path=str(sock))
        assert probe.check(ctx) is True
        assert probe.issue == "permissions"
        assert "0666" in probe.diagnostic()

    def test_group_only_socket(self, monkeypatch, ctx, tmp_path):
        monkeypatch.delenv("DOCKER_HOST", raising=False)
        sock = tmp_path / "docker.sock"
        sock.write_text("")
        os.chmod(sock, 0o660)
        assert DockerSocket(socket_path=str(sock)).check(ctx) is False

    def test_missing_socket(self, monkeypatch, ctx, tmp_path):
        monkeypatch.delenv("DOCKER_HOST", raising=False)
        assert DockerSocket(socket_path=str(tmp_path / "none.sock")).check(ctx) is False

    def test_orphaned_docker_host(self, monkeypatch, ctx, tmp_path):
        missing = tmp_path / "gone.sock"
        monkeypatch.setenv("DOCKER_HOST", f"unix://{missing}")
        probe = DockerSocket(socket_path=str(tmp_path / "none.sock"))
        assert probe.check(ctx) is True
        assert probe.issue == "orphaned"
        assert str(missing) in probe.diagnostic()
        assert "DOCKER_HOST" in probe.remediation()

    def test_tcp_docker_host_ignored(self, monkeypatch, ctx, tmp_path):
        monkeypatch.setenv("DOCKER_HOST", "tcp://127.0.0.1:2375")
        assert DockerSocket(socket_path=str(tmp_path / "none.sock")).check(ctx) is False
