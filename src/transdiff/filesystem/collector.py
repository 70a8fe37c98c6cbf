"""Collect language files from the filesystem."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

from transdiff.core.files import LanguageFile
from transdiff.filesystem.pattern import Pattern

logger = logging.getLogger(__name__)

_SKIP_DIRS = {".git"}


def walk_files(root: Path) -> List[str]:
    """Return every file below *root* as a sorted ``/``-separated relative path."""
    rel_paths: List[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in _SKIP_DIRS)
        base = Path(dirpath).relative_to(root)
        for name in filenames:
            rel_paths.append((base / name).as_posix())
    return sorted(rel_paths)


def collect_files(root: Path, pattern: Pattern, langs: List[str]) -> List[LanguageFile]:
    """Return files matching *pattern* for each of *langs*.

    Files are grouped by language in *langs* order; within a language they
    are sorted by relative path, so repeated runs see the same order.
    Paths are absolute.
    """
    root = root.resolve()
    rel_paths = walk_files(root)

    files: List[LanguageFile] = []
    for lang in langs:
        matcher = pattern.compile(lang)
        found = [p for p in rel_paths if matcher.match(p)]
        logger.debug("%s: %d files match %s", lang, len(found), pattern)
        files.extend(LanguageFile(path=str(root / p), lang=lang) for p in found)
    return files
