"""Matching and classification core — bundle, change sets, diffs, classifiers."""

from transdiff.core.basic import BasicClassifier
from transdiff.core.bundle import Bundle
from transdiff.core.changes import (
    EMPTY_HASH,
    Change,
    ChangeAction,
    ChangeSet,
    ContentError,
    RevisionRange,
    RevisionTree,
    diff_trees,
)
from transdiff.core.diffs import Diff, DiffKind, Missing, ModifiedBase, ModifiedBoth, Patch
from transdiff.core.files import LanguageFile, matches
from transdiff.core.history import DECISION_TABLE, HistoricalClassifier, decide
from transdiff.core.patch import unified_patch

__all__ = [
    "BasicClassifier",
    "Bundle",
    "Change",
    "ChangeAction",
    "ChangeSet",
    "ContentError",
    "DECISION_TABLE",
    "Diff",
    "DiffKind",
    "EMPTY_HASH",
    "HistoricalClassifier",
    "LanguageFile",
    "Missing",
    "ModifiedBase",
    "ModifiedBoth",
    "Patch",
    "RevisionRange",
    "RevisionTree",
    "decide",
    "diff_trees",
    "matches",
    "unified_patch",
]
