"""Shared fakes for the external dependency lister and patcher."""

from __future__ import annotations

from pathlib import Path

import pytest

from uhaul.errors import DependencyListError, PatchError
from uhaul.tools.base import DependencyLister, SearchPathPatcher


class FakeLister(DependencyLister):
    """Answers from a {file: [deps]} table keyed by file name under a root."""

    def __init__(self, root: Path, table: dict[str, list[str]], fail_on: set[str] | None = None):
        self.root = root
        self.table = table
        self.fail_on = fail_on or set()
        self.calls: list[Path] = []

    def list(self, path: Path) -> list[Path]:
        self.calls.append(path)
        if path.name in self.fail_on:
            raise DependencyListError(f"cannot list {path}")
        return [self.root / name for name in self.table.get(path.name, [])]


class RecordingPatcher(SearchPathPatcher):
    def __init__(self, fail_on: set[str] | None = None):
        self.fail_on = fail_on or set()
        self.calls: list[tuple[Path, str]] = []

    def set_search_path(self, path: Path, search_path: str) -> None:
        if path.name in self.fail_on:
            raise PatchError(f"patch failed on {path}")
        self.calls.append((path, search_path))

    @property
    def search_paths(self) -> dict[str, str]:
        return {p.name: sp for p, sp in self.calls}


@pytest.fixture
def sysroot(tmp_path):
    """Directory of fake ELF files; call with names to create them."""
    root = tmp_path / "sysroot"
    root.mkdir()
    root = root.resolve()

    def make(*names: str) -> Path:
        for name in names:
            (root / name).write_bytes(f"ELF:{name}".encode())
        return root

    make.root = root
    return make


@pytest.fixture
def patcher():
    return RecordingPatcher()
