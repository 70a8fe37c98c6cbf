"""Git subprocess wrapper — repo discovery, revisions, trees, file content."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Dict, List, Optional


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


class RepoNotFoundError(GitError):
    """Raised when no git repository exists at or above the given path."""


class RevisionError(GitError):
    """Raised when a revision name cannot be resolved to a commit."""


def _run_git(
    args: list[str],
    cwd: Path,
    timeout: int = 30,
    input: Optional[str] = None,
) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            input=input,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip()
        # --quiet lookups fail without a message
        if not stderr or "fatal" not in stderr.lower():
            return result.stdout
        if "not a git repository" in stderr.lower():
            raise RepoNotFoundError(f"repository not found: {cwd}")
        raise GitError(f"git error: {stderr}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the git repository containing *cwd*."""
    cwd = cwd or Path.cwd()
    if not cwd.is_dir():
        raise GitError(f"not a directory: {cwd}")
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    if not out.strip():
        raise RepoNotFoundError(f"repository not found: {cwd}")
    return Path(out.strip()).resolve()


def get_hooks_dir(repo_root: Path) -> Path:
    """Return the directory git runs hooks from for the work tree at *repo_root*.

    Honours ``core.hooksPath`` and linked worktrees (where ``.git`` is a file).
    """
    out = _run_git(["rev-parse", "--git-path", "hooks"], cwd=repo_root).strip()
    if not out:
        raise RepoNotFoundError(f"repository not found: {repo_root}")
    hooks_dir = Path(out)
    if not hooks_dir.is_absolute():
        hooks_dir = repo_root / hooks_dir
    return hooks_dir.resolve()


def resolve_commit(repo_root: Path, rev: str) -> str:
    """Resolve *rev* (commit, tag, branch, ``HEAD~2`` …) to a commit sha."""
    out = _run_git(
        ["rev-parse", "--verify", "--quiet", f"{rev}^{{commit}}"],
        cwd=repo_root,
    )
    sha = out.strip()
    if not sha:
        raise RevisionError(f"cannot resolve revision: {rev}")
    return sha


def list_tree(repo_root: Path, commit: str) -> Dict[str, str]:
    """Return ``{path: blob sha}`` for every file in *commit*."""
    output = _run_git(["ls-tree", "-r", "-z", "--full-tree", commit], cwd=repo_root)
    entries: Dict[str, str] = {}
    for record in output.split("\0"):
        if not record:
            continue
        # <mode> SP <type> SP <object> TAB <path>
        meta, _, path = record.partition("\t")
        parts = meta.split()
        if len(parts) != 3 or parts[1] != "blob":
            continue  # submodules, malformed
        entries[path] = parts[2]
    return entries


def show_file(repo_root: Path, commit: str, path: str) -> str:
    """Return the content of *path* at *commit*."""
    return _run_git(["show", f"{commit}:{path}"], cwd=repo_root)


def list_worktree_files(repo_root: Path) -> List[str]:
    """Return tracked and untracked (not ignored) paths in the working tree."""
    output = _run_git(
        ["ls-files", "-z", "--cached", "--others", "--exclude-standard"],
        cwd=repo_root,
    )
    return list(dict.fromkeys(p for p in output.split("\0") if p))


def hash_files(repo_root: Path, paths: List[str]) -> List[str]:
    """Return the blob sha git would store for each of *paths*, in order."""
    if not paths:
        return []
    output = _run_git(
        ["hash-object", "--stdin-paths"],
        cwd=repo_root,
        input="\n".join(paths) + "\n",
        timeout=120,
    )
    hashes = [line.strip() for line in output.splitlines() if line.strip()]
    if len(hashes) != len(paths):
        raise GitError(
            f"git hash-object returned {len(hashes)} hashes for {len(paths)} paths"
        )
    return hashes
