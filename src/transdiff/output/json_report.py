"""JSON reporter for CI pipelines and tooling."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from transdiff.audit.models import AuditReport
from transdiff.core.diffs import Diff, Missing, ModifiedBase, ModifiedBoth, Patch
from transdiff.output.terminal import display_path


def _patch_text(patch: Patch, include: bool) -> Optional[str]:
    # only patches the engine already computed; never triggers content reads
    if not include or not patch.is_computed:
        return None
    return patch.text


def _diff_dict(diff: Diff, report: AuditReport, absolute: bool, patches: bool) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "lang": diff.lang,
        "base": display_path(diff.base, report.root, absolute),
        "translation": display_path(diff.translation, report.root, absolute)
        if diff.translation is not None
        else None,
    }
    if isinstance(diff, Missing):
        entry["kind"] = diff.kind.value
    elif isinstance(diff, ModifiedBase):
        entry["kind"] = diff.kind.value
        entry["base_patch"] = _patch_text(diff.base_patch, patches)
    elif isinstance(diff, ModifiedBoth):
        entry["kind"] = diff.kind.value
        entry["base_patch"] = _patch_text(diff.base_patch, patches)
        entry["translation_patch"] = _patch_text(diff.translation_patch, patches)
    else:
        entry["kind"] = "unknown"
    return entry


def to_dict(
    report: AuditReport,
    *,
    absolute_paths: bool = False,
    show_diff: bool = False,
) -> Dict[str, Any]:
    """Convert AuditReport to a JSON-serialisable dict."""
    diffs: List[Dict[str, Any]] = [
        _diff_dict(d, report, absolute_paths, show_diff) for d in report.diffs
    ]
    unclassifiable = [
        {
            "lang": u.lang,
            "base": display_path(u.base, report.root, absolute_paths),
            "translation": display_path(u.translation, report.root, absolute_paths)
            if u.translation is not None
            else None,
            "reason": u.reason,
        }
        for u in report.unclassifiable
    ]

    return {
        "version": "1.0",
        "root": report.root,
        "base_lang": report.base_lang,
        "langs": report.langs,
        "git_available": report.git_available,
        "revision_range": report.revision_range,
        "total_diffs": report.total_diffs,
        "diffs": diffs,
        "unclassifiable": unclassifiable,
        "files_by_lang": report.files_by_lang,
        "duration_ms": report.duration_ms,
    }


def render(
    report: AuditReport,
    *,
    absolute_paths: bool = False,
    show_diff: bool = False,
) -> str:
    """Return formatted JSON string."""
    return json.dumps(
        to_dict(report, absolute_paths=absolute_paths, show_diff=show_diff),
        indent=2,
    )
