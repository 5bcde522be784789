"""Зонд cargo-path-deps — зависимости по локальному пути в Cargo.toml."""

from __future__ import annotations

from hostprobe.context import CheckContext
from hostprobes.base import BaseProbe
from hostprobes.fsutil import read_limited

MAX_CARGO_BYTES = 256 * 1024

_DEPENDENCY_SECTIONS = ("[dependencies", "[dev-dependencies", "[build-dependencies")


class CargoPathDeps(BaseProbe):
    name = "cargo-path-deps"
    title = "Cargo Path Dependencies"
    emoji = "🦀"
    category = "repo"

    def __init__(self) -> None:
        self.dependency = ""

    def check(self, ctx: CheckContext) -> bool:
        if self.disabled():
            return False
        try:
            data = read_limited("Cargo.toml", MAX_CARGO_BYTES)
        except OSError:
            return False

        in_deps = False
        for raw in data.splitlines():
            if ctx.done():
                return False
            line = raw.strip()
            if line.startswith("#"):
                continue
            if line.startswith("["):
                in_deps = line.startswith(_DEPENDENCY_SECTIONS)
                continue
            if in_deps and "path" in line and "=" in line:
                self.dependency = line
                return True
        return False

    def diagnostic(self) -> str:
        return f"Cargo.toml ссылается на локальный путь: {self.dependency}"

    def remediation(self) -> str:
        return "Замените path-зависимости версиями с crates.io перед коммитом"
