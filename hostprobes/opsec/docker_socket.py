"""Зонд docker-socket — открытый или потерянный сокет Docker."""

from __future__ import annotations

import os
import stat
import sys

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe

DEFAULT_SOCKET = "/var/run/docker.sock"


def _socket_from_docker_host(docker_host: str) -> str:
    """Путь к unix-сокету из DOCKER_HOST; пусто для tcp:// и прочих схем."""
    if docker_host.startswith("unix://"):
        return docker_host[len("unix://"):]
    if docker_host.startswith("/"):
        return docker_host
    return ""


class DockerSocket(BaseProbe):
    """Два случая: DOCKER_HOST указывает на несуществующий сокет (orphaned)
    или системный сокет доступен на чтение/запись всем (permissions)."""

    name = "docker-socket"
    title = "Exposed Socket"
    emoji = "🐳"
    category = "opsec"

    def __init__(self, socket_path: str = DEFAULT_SOCKET) -> None:
        self.socket_path = socket_path
        self.issue = ""
        self.orphaned_path = ""
        self.mode = 0

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled() or sys.platform == "win32":
            return False

        sock = _socket_from_docker_host(os.environ.get("DOCKER_HOST", ""))
        if sock and not os.path.exists(sock):
            self.issue = "orphaned"
            self.orphaned_path = sock
            return True

        try:
            st = os.lstat(self.socket_path)
        except OSError:
            return False

        if sys.platform == "darwin" and stat.S_ISLNK(st.st_mode):
            return self._check_darwin_link()
        return self._check_mode(st.st_mode)

    def _check_darwin_link(self) -> bool:
        # Docker Desktop держит настоящий сокет в ~/.docker/run
        try:
            target = os.readlink(self.socket_path)
        except OSError:
            return False
        if "/.docker/run/docker.sock" not in target:
            return False
        try:
            st = os.stat(target)
        except OSError:
            self.issue = "orphaned"
            self.orphaned_path = target
            return True
        return self._check_mode(st.st_mode, readable_ok=True)

    def _check_mode(self, mode: int, readable_ok: bool = False) -> bool:
        self.mode = stat.S_IMODE(mode)
        if self.mode & stat.S_IWOTH or (not readable_ok and self.mode & stat.S_IROTH):
            self.issue = "permissions"
            return True
        return False

    def diagnostic(self) -> str:
        if self.issue == "orphaned":
            return "DOCKER_HOST указывает на несуществующий сокет: " + self.orphaned_path
        return f"Слишком широкие права на сокет Docker ({self.mode:04o})"

    def remediation(self) -> str:
        if self.issue == "orphaned":
            return "Снимите DOCKER_HOST или исправьте путь (иначе команды docker зависнут)"
        return "Ограничьте доступ к сокету группой docker"
