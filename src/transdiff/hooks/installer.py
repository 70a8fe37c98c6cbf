"""Pre-commit hook management for ``transdiff install`` / ``uninstall``.

The hook lives wherever git looks for hooks (``core.hooksPath``, or the
common git dir shared by linked worktrees). It audits HEAD against the
working copy and skips repositories that have no ``.transdiff.toml``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from transdiff.config.loader import CONFIG_FILE
from transdiff.git.adapter import GitError, get_hooks_dir

logger = logging.getLogger(__name__)

HOOK_NAME = "pre-commit"
HOOK_MARKER = "# transdiff-hook"
HOOK_COMMAND = "transdiff check --fail-on-diffs"

HOOK_SCRIPT = f"""\
#!/bin/sh
{HOOK_MARKER}
# Installed by transdiff. To uninstall: transdiff uninstall

# hooks run from the top of the work tree
if [ ! -f {CONFIG_FILE} ]; then
    exit 0
fi

exec {HOOK_COMMAND}
"""


def hook_path(repo_root: Path) -> Path:
    """Path of the pre-commit hook for the work tree at *repo_root*."""
    return get_hooks_dir(repo_root) / HOOK_NAME


def is_transdiff_hook(path: Path) -> bool:
    return HOOK_MARKER in path.read_text(encoding="utf-8", errors="replace")


def install_hook(repo_root: Path, *, force: bool = False) -> Tuple[bool, str]:
    """Write the transdiff pre-commit hook. Returns (success, message)."""
    try:
        path = hook_path(repo_root)
    except GitError as exc:
        return False, f"Cannot locate hooks directory for {repo_root}: {exc}"

    if path.exists():
        if is_transdiff_hook(path):
            return True, f"transdiff hook is already installed at {path}."
        if not force:
            return (
                False,
                f"{path} belongs to another tool. "
                f"Re-run with --force to replace it, or call '{HOOK_COMMAND}' from it.",
            )
        logger.info("Replacing existing hook %s", path)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(HOOK_SCRIPT, encoding="utf-8")
    try:
        path.chmod(0o755)
    except OSError:
        pass  # Windows doesn't need chmod

    return True, f"Installed transdiff pre-commit hook at {path}"


def uninstall_hook(repo_root: Path) -> Tuple[bool, str]:
    """Delete the hook if transdiff wrote it. Returns (success, message)."""
    try:
        path = hook_path(repo_root)
    except GitError as exc:
        return False, f"Cannot locate hooks directory for {repo_root}: {exc}"

    if not path.exists():
        return True, f"No {HOOK_NAME} hook at {path}; nothing to remove."
    if not is_transdiff_hook(path):
        return False, f"{path} was not installed by transdiff; leaving it in place."

    path.unlink()
    return True, f"Removed transdiff pre-commit hook from {path}"
