"""Audit engine — orchestrates discovery, classification, and patches.

Structural (Missing) diffs are always computed. Historical diffs need a git
repository; when none is found the run degrades to structural checks and
``AuditReport.git_available`` stays False. Content errors hit while
computing patches are recorded per pair and never abort the run.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from pathlib import Path
from typing import List, Optional

from transdiff.audit.models import AuditReport, Unclassifiable
from transdiff.config.schema import TransdiffConfig
from transdiff.core.basic import BasicClassifier
from transdiff.core.bundle import Bundle
from transdiff.core.changes import ChangeSet, ContentError
from transdiff.core.diffs import Diff
from transdiff.core.history import HistoricalClassifier
from transdiff.filesystem.collector import collect_files
from transdiff.filesystem.pattern import PatternRegistry, build_pattern_registry
from transdiff.git.adapter import RepoNotFoundError
from transdiff.git.trees import resolve_range

logger = logging.getLogger(__name__)


class AuditError(Exception):
    """Raised when the audit cannot start (e.g. invalid languages)."""


def _validate_languages(config: TransdiffConfig) -> tuple[str, List[str]]:
    langs = list(dict.fromkeys(config.languages.langs))
    if len(langs) < 2:
        raise AuditError(
            "provide at least two language codes (base language and one translation)"
        )
    base_lang = config.languages.base_lang
    if base_lang not in langs:
        raise AuditError(f"base language '{base_lang}' is not one of: {', '.join(langs)}")
    return base_lang, langs


def split_unreadable(diffs: List[Diff]) -> tuple[List[Diff], List[Unclassifiable]]:
    """Compute every patch now; pairs whose content fails move to a side list."""
    kept: List[Diff] = []
    skipped: List[Unclassifiable] = []
    for diff in diffs:
        try:
            for patch in diff.patches:
                _ = patch.text
        except ContentError as exc:
            logger.warning("Skipping %s: %s", diff.base.path, exc)
            skipped.append(
                Unclassifiable(
                    base=diff.base,
                    translation=diff.translation,
                    lang=diff.lang,
                    reason=str(exc),
                )
            )
            continue
        kept.append(diff)
    return kept, skipped


def run_audit(
    root: Path,
    config: TransdiffConfig,
    *,
    registry: Optional[PatternRegistry] = None,
) -> AuditReport:
    """Execute the full audit of *root*. Returns an AuditReport.

    Raises AuditError, PatternError, or GitError (other than a missing
    repository) before any classification happens.
    """
    start = time.perf_counter()
    root = root.resolve()

    base_lang, langs = _validate_languages(config)
    registry = registry or build_pattern_registry(root)
    pattern = registry.parse(config.discovery.glob, config.discovery.extensions)

    # --- Discovery + bundle ---
    files = collect_files(root, pattern, langs)
    bundle = Bundle(base_lang, files)
    counts = Counter(f.lang for f in files)

    report = AuditReport(
        root=str(root),
        base_lang=base_lang,
        langs=langs,
        files_by_lang={lang: counts.get(lang, 0) for lang in langs},
    )

    # --- Structural ---
    report.diffs.extend(BasicClassifier(langs).classify(bundle))

    # --- Historical ---
    if config.git.enabled:
        try:
            revision_range = resolve_range(
                root, config.git.from_revision, config.git.to_revision
            )
        except RepoNotFoundError:
            logger.info("No git repository at %s; structural checks only", root)
        else:
            change_set = ChangeSet.between(revision_range)
            historical = HistoricalClassifier().classify(bundle, change_set)
            if config.output.show_diff:
                historical, skipped = split_unreadable(historical)
                report.unclassifiable.extend(skipped)
            report.diffs.extend(historical)
            report.git_available = True
            report.revision_range = revision_range.describe()

    report.duration_ms = round((time.perf_counter() - start) * 1000, 2)
    return report
