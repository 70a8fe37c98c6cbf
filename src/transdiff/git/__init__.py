"""Git interface layer — subprocess adapter and revision trees."""

from transdiff.git.adapter import (
    GitError,
    RepoNotFoundError,
    RevisionError,
    get_hooks_dir,
    get_repo_root,
    resolve_commit,
)
from transdiff.git.trees import WORKING_COPY, CommitTree, WorkingTree, resolve_range

__all__ = [
    "CommitTree",
    "GitError",
    "RepoNotFoundError",
    "RevisionError",
    "WORKING_COPY",
    "WorkingTree",
    "get_hooks_dir",
    "get_repo_root",
    "resolve_commit",
    "resolve_range",
]
