"""Audit report models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from transdiff.core.diffs import Diff, Missing, ModifiedBase, ModifiedBoth
from transdiff.core.files import LanguageFile


@dataclass(frozen=True)
class Unclassifiable:
    """A base/translation pair skipped because its content could not be read."""

    base: LanguageFile
    translation: Optional[LanguageFile]
    lang: str
    reason: str


@dataclass
class AuditReport:
    """Complete result of an audit run."""

    root: str = ""
    base_lang: str = ""
    langs: List[str] = field(default_factory=list)
    diffs: List[Diff] = field(default_factory=list)
    unclassifiable: List[Unclassifiable] = field(default_factory=list)
    files_by_lang: Dict[str, int] = field(default_factory=dict)
    git_available: bool = False
    revision_range: Optional[str] = None
    duration_ms: float = 0.0

    @property
    def total_diffs(self) -> int:
        return len(self.diffs)

    @property
    def missing(self) -> List[Missing]:
        return [d for d in self.diffs if isinstance(d, Missing)]

    @property
    def modified(self) -> List[Diff]:
        return [d for d in self.diffs if isinstance(d, (ModifiedBase, ModifiedBoth))]

    @property
    def has_problems(self) -> bool:
        return bool(self.diffs or self.unclassifiable)
