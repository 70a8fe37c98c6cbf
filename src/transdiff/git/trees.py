"""Revision trees backed by git, and revision range resolution.

The older end of a range defaults to ``HEAD``. The newer end defaults to the
working copy: tracked files (staged or not) plus untracked files that are
not ignored, which is what a pre-commit check needs to see.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from transdiff.core.changes import EMPTY_HASH, ContentError, RevisionRange, RevisionTree
from transdiff.git.adapter import (
    GitError,
    RevisionError,
    get_repo_root,
    hash_files,
    list_tree,
    list_worktree_files,
    resolve_commit,
    show_file,
)

logger = logging.getLogger(__name__)

WORKING_COPY = "working copy"


class CommitTree(RevisionTree):
    """Immutable tree of a committed revision."""

    def __init__(self, repo_root: Path, rev: str, commit: str) -> None:
        self.repo_root = repo_root
        self.name = rev
        self.commit = commit
        self._entries: Optional[Dict[str, str]] = None

    @classmethod
    def resolve(cls, repo_root: Path, rev: str) -> "CommitTree":
        return cls(repo_root, rev, resolve_commit(repo_root, rev))

    def entries(self) -> Dict[str, str]:
        if self._entries is None:
            self._entries = list_tree(self.repo_root, self.commit)
        return self._entries

    def content(self, path: str) -> str:
        if path not in self.entries():
            raise ContentError(f"File not found in revision {self.name}: {path}")
        try:
            return show_file(self.repo_root, self.commit, path)
        except GitError as exc:
            raise ContentError(
                f"Unable to read {path} from revision {self.name}: {exc}"
            ) from exc

    def __repr__(self) -> str:
        return f"CommitTree({self.name!r}, {self.commit[:12]})"


class WorkingTree(RevisionTree):
    """Live working copy, listed once and then treated as a snapshot."""

    name = WORKING_COPY

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root
        self._entries: Optional[Dict[str, str]] = None

    def entries(self) -> Dict[str, str]:
        if self._entries is None:
            self._entries = self._scan()
        return self._entries

    def _scan(self) -> Dict[str, str]:
        hashable: list[str] = []
        entries: Dict[str, str] = {}
        for path in list_worktree_files(self.repo_root):
            full = self.repo_root / path
            if full.is_symlink():
                entries[path] = EMPTY_HASH
            elif full.is_file():
                hashable.append(path)
            # else: deleted from disk or a submodule directory

        for path, sha in zip(hashable, hash_files(self.repo_root, hashable)):
            entries[path] = sha
        logger.debug("Working copy: %d files", len(entries))
        return entries

    def content(self, path: str) -> str:
        full = self.repo_root / path
        if not full.is_file():
            raise ContentError(f"File not found in working tree: {path}")
        try:
            return full.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ContentError(
                f"Unable to read {path} from working tree: {exc}"
            ) from exc

    def __repr__(self) -> str:
        return f"WorkingTree({str(self.repo_root)!r})"


def resolve_range(
    path: Path,
    older: Optional[str] = None,
    newer: Optional[str] = None,
) -> RevisionRange:
    """Open the repository containing *path* and resolve both ends of a range.

    Raises RepoNotFoundError when there is no repository, RevisionError when
    either name does not resolve.
    """
    repo_root = get_repo_root(path)

    try:
        older_tree: RevisionTree = CommitTree.resolve(repo_root, older or "HEAD")
    except RevisionError as exc:
        raise RevisionError(f"Invalid older revision: {exc}") from exc

    if newer:
        try:
            newer_tree: RevisionTree = CommitTree.resolve(repo_root, newer)
        except RevisionError as exc:
            raise RevisionError(f"Invalid newer revision: {exc}") from exc
    else:
        newer_tree = WorkingTree(repo_root)

    revision_range = RevisionRange(older=older_tree, newer=newer_tree, root=repo_root)
    logger.info("Revision range: %s", revision_range.describe())
    return revision_range
