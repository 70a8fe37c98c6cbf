"""Header-less unified patches computed from raw before/after text."""

from __future__ import annotations

import difflib
from typing import List

DEFAULT_CONTEXT_LINES = 3

_NO_NEWLINE = "\\ No newline at end of file\n"


def unified_patch(before: str, after: str, context: int = DEFAULT_CONTEXT_LINES) -> str:
    """Return the unified diff body between *before* and *after*.

    File headers (``---``/``+++``) are dropped: the caller already knows
    which files are compared. The result starts at the first ``@@`` hunk
    marker, or is empty when the texts are equal.
    """
    diff = difflib.unified_diff(
        before.splitlines(keepends=True),
        after.splitlines(keepends=True),
        n=context,
    )

    out: List[str] = []
    for line in diff:
        if not out and not line.startswith("@@"):
            continue  # file headers
        if line.endswith("\n"):
            out.append(line)
        else:
            out.append(line + "\n")
            out.append(_NO_NEWLINE)
    return "".join(out).rstrip("\n")
