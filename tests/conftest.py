"""Shared test fixtures for webwrap-core tests."""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from webwrap_core.infrastructure.materializer import MaterializationError
from webwrap_core.logic.models import ArtifactTree


def write_file(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def tree_factory(tmp_path) -> Callable[..., ArtifactTree]:
    """Build an artifact tree on disk from relative paths and contents."""

    def build(files: Optional[Dict[str, str]] = None, name: str = "app.apk",
              with_disassembly: bool = True) -> ArtifactTree:
        tree = ArtifactTree(package_name=name, root=tmp_path / "zips" / Path(name).stem)
        tree.root.mkdir(parents=True, exist_ok=True)
        if with_disassembly:
            tree.disassembly_dir.mkdir(parents=True, exist_ok=True)
        for relative, content in (files or {}).items():
            write_file(tree.root / relative, content)
        return tree

    return build


def make_package(path: Path, entries: Dict[str, str]) -> Path:
    """Write a zip-format package with the given entries."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as archive:
        for name, content in entries.items():
            archive.writestr(name, content)
    return path


class FakeToolRunner:
    """
    Stand-in for the external tools.

    dex2jar writes a jar holding `classes`; ddx writes one listing per entry
    in `listings`. Commands are recorded for assertions.
    """

    def __init__(self, classes: Optional[List[str]] = None,
                 listings: Optional[Dict[str, str]] = None,
                 fail: Optional[List[str]] = None):
        self.classes = classes or []
        self.listings = listings or {}
        self.fail = fail or []
        self.calls: List[List[str]] = []

    def __call__(self, cmd: List[str], cwd: Path) -> None:
        self.calls.append(list(cmd))
        tool = "dex2jar" if "dex2jar" in cmd[0] else "ddx"
        if tool in self.fail:
            raise MaterializationError(f"{cmd[0]} exited with status 1: boom")

        if tool == "dex2jar":
            with zipfile.ZipFile(Path(cwd) / "classes-dex2jar.jar", "w") as jar:
                for class_name in self.classes:
                    jar.writestr(class_name, "\xca\xfe\xba\xbe")
        else:
            for relative, content in self.listings.items():
                write_file(Path(cwd) / "ddx" / relative, content)


@pytest.fixture
def fake_runner_factory() -> Callable[..., FakeToolRunner]:
    return FakeToolRunner
