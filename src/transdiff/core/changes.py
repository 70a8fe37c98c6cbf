"""Change sets between two revision trees.

A :class:`RevisionRange` pairs an older and a newer :class:`RevisionTree`.
:func:`diff_trees` compares their path → hash listings and yields one
:class:`Change` per differing path. Content is never read here; a change
only fetches before/after text when asked.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)

# Hash of entries without a stable content hash. Never equal to anything.
EMPTY_HASH = "0" * 40


class ContentError(Exception):
    """Raised when a path has no readable content at a revision."""


class ChangeAction(str, Enum):
    INSERTED = "inserted"
    MODIFIED = "modified"
    DELETED = "deleted"


class RevisionTree(ABC):
    """Snapshot of a tree: a committed revision or the working copy."""

    name: str = ""

    @abstractmethod
    def entries(self) -> Dict[str, str]:
        """Return ``{path: hash}`` for every file, paths relative to the repo root."""

    @abstractmethod
    def content(self, path: str) -> str:
        """Return the text of *path*. Raises ContentError if unavailable."""


@dataclass(frozen=True)
class RevisionRange:
    """Older and newer trees between which changes are computed."""

    older: RevisionTree
    newer: RevisionTree
    root: Path

    def describe(self) -> str:
        return f"{self.older.name}..{self.newer.name}"


@dataclass(frozen=True)
class Change:
    """A single path that differs between the two trees of a range."""

    from_path: Optional[str]
    to_path: Optional[str]
    action: ChangeAction
    revision_range: Optional[RevisionRange] = field(
        default=None, repr=False, compare=False
    )

    @property
    def path(self) -> str:
        """Path the change is known by (new path, or old path for deletions)."""
        return self.to_path or self.from_path or ""

    def content_before(self) -> str:
        if self.from_path is None:
            return ""
        return self._range().older.content(self.from_path)

    def content_after(self) -> str:
        if self.to_path is None:
            return ""
        return self._range().newer.content(self.to_path)

    def _range(self) -> RevisionRange:
        if self.revision_range is None:
            raise ContentError(f"No revision range bound to change of {self.path}")
        return self.revision_range


def _same_hash(a: str, b: str) -> bool:
    if a == EMPTY_HASH or b == EMPTY_HASH:
        return False
    return a == b


def diff_trees(revision_range: RevisionRange) -> List[Change]:
    """Compare both trees of *revision_range*; changes are ordered by path."""
    older = revision_range.older.entries()
    newer = revision_range.newer.entries()

    changes: List[Change] = []
    for path in sorted(older.keys() | newer.keys()):
        if path not in newer:
            action = ChangeAction.DELETED
            from_path, to_path = path, None
        elif path not in older:
            action = ChangeAction.INSERTED
            from_path, to_path = None, path
        elif not _same_hash(older[path], newer[path]):
            action = ChangeAction.MODIFIED
            from_path, to_path = path, path
        else:
            continue
        changes.append(
            Change(
                from_path=from_path,
                to_path=to_path,
                action=action,
                revision_range=revision_range,
            )
        )
    return changes


class ChangeSet:
    """Ordered changes of a range, addressable by absolute path."""

    def __init__(self, root: Path, changes: List[Change]) -> None:
        self._root = root
        self._changes = list(changes)
        self._by_path: Dict[str, Change] = {
            self.absolute_path(c): c for c in self._changes
        }

    @classmethod
    def between(cls, revision_range: RevisionRange) -> "ChangeSet":
        changes = diff_trees(revision_range)
        logger.info(
            "%d changed paths in %s", len(changes), revision_range.describe()
        )
        return cls(revision_range.root, changes)

    @property
    def root(self) -> Path:
        return self._root

    def absolute_path(self, change: Change) -> str:
        return str(self._root / change.path)

    def change_for(self, path: str) -> Optional[Change]:
        return self._by_path.get(path)

    def action_for(self, path: str) -> Optional[ChangeAction]:
        change = self._by_path.get(path)
        return change.action if change is not None else None

    def created_or_modified(self) -> Iterator[Change]:
        for change in self._changes:
            if change.action in (ChangeAction.INSERTED, ChangeAction.MODIFIED):
                yield change

    def __iter__(self) -> Iterator[Change]:
        return iter(self._changes)

    def __len__(self) -> int:
        return len(self._changes)
