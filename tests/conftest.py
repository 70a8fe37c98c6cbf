"""Shared test fixtures — language trees, in-memory revisions, temp git repos."""

from __future__ import annotations

import hashlib
import subprocess
from pathlib import Path
from typing import Dict, Iterable, Optional

import pytest

from transdiff.core.changes import (
    ChangeAction,
    ChangeSet,
    ContentError,
    RevisionRange,
    RevisionTree,
    diff_trees,
)

ROOT = Path("/docs")


class MemoryTree(RevisionTree):
    """In-memory revision tree: path -> content, hash derived from content."""

    def __init__(self, name: str, files: Dict[str, str], hashes: Optional[Dict[str, str]] = None) -> None:
        self.name = name
        self._files = dict(files)
        self._hashes = hashes or {}

    def entries(self) -> Dict[str, str]:
        return {
            path: self._hashes.get(path, hashlib.sha1(text.encode()).hexdigest())
            for path, text in self._files.items()
        }

    def content(self, path: str) -> str:
        if path not in self._files:
            raise ContentError(f"File not found in revision {self.name}: {path}")
        return self._files[path]


def make_range(older: Dict[str, str], newer: Dict[str, str]) -> RevisionRange:
    return RevisionRange(
        older=MemoryTree("old", older),
        newer=MemoryTree("new", newer),
        root=ROOT,
    )


def make_change_set(actions: Dict[str, ChangeAction]) -> ChangeSet:
    """ChangeSet with the given repo-relative path -> action, backed by memory trees."""
    older: Dict[str, str] = {}
    newer: Dict[str, str] = {}
    for path, action in actions.items():
        if action is ChangeAction.INSERTED:
            newer[path] = f"new {path}\n"
        elif action is ChangeAction.MODIFIED:
            older[path] = f"old {path}\n"
            newer[path] = f"new {path}\n"
        elif action is ChangeAction.DELETED:
            older[path] = f"old {path}\n"
    revision_range = make_range(older, newer)
    return ChangeSet(ROOT, diff_trees(revision_range))


def abs_path(rel: str) -> str:
    return str(ROOT / rel)


def write_files(root: Path, paths: Iterable[str], content: str = "text\n") -> None:
    for rel in paths:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")


def git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True,
    )
    return result.stdout


@pytest.fixture
def sub_layout(tmp_path: Path) -> Path:
    """Each language in its own subdirectory; de lacks second.md and section/two.md."""
    write_files(tmp_path, [
        "en/first.md",
        "en/second.md",
        "en/section/one.md",
        "en/section/two.md",
        "de/first.md",
        "de/section/one.md",
    ])
    return tmp_path


@pytest.fixture
def ext_layout(tmp_path: Path) -> Path:
    """Language code inside the file extension."""
    write_files(tmp_path, [
        "first.en.md",
        "second.en.md",
        "section/one.en.md",
        "section/two.en.md",
        "first.de.md",
        "section/one.de.md",
    ])
    return tmp_path


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Temporary git repository with en/de docs committed."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    git(tmp_path, "config", "user.email", "test@test.com")
    git(tmp_path, "config", "user.name", "Test")
    git(tmp_path, "config", "commit.gpgsign", "false")

    (tmp_path / "en").mkdir()
    (tmp_path / "de").mkdir()
    (tmp_path / "en" / "first.md").write_text("# First\n\nHello.\n")
    (tmp_path / "de" / "first.md").write_text("# Erste\n\nHallo.\n")
    (tmp_path / "en" / "second.md").write_text("# Second\n")
    (tmp_path / "de" / "second.md").write_text("# Zweite\n")
    git(tmp_path, "add", ".")
    git(tmp_path, "commit", "-m", "init")
    return tmp_path.resolve()
