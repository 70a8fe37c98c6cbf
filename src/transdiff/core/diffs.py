"""Diff outcomes — a closed set of three value types.

``Diff`` is a union, not a class hierarchy. Consumers dispatch with
``isinstance`` and keep an explicit fallback for anything unrecognised::

    for diff in diffs:
        if isinstance(diff, Missing):
            ...
        elif isinstance(diff, ModifiedBase):
            ...
        elif isinstance(diff, ModifiedBoth):
            ...
        else:
            ...  # unknown kind
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union

from transdiff.core.changes import Change
from transdiff.core.files import LanguageFile
from transdiff.core.patch import unified_patch


class DiffKind(str, Enum):
    MISSING = "missing"
    MODIFIED_BASE = "modified_base"
    MODIFIED_BOTH = "modified_both"


@dataclass
class Patch:
    """Textual changes of one file, computed on first access.

    The text is memoized after a successful computation. Content errors
    are raised from :attr:`text` and not cached.
    """

    change: Change

    _text: Optional[str] = field(default=None, init=False, repr=False, compare=False)

    @property
    def text(self) -> str:
        if self._text is None:
            self._text = unified_patch(
                self.change.content_before(), self.change.content_after()
            )
        return self._text

    @property
    def is_computed(self) -> bool:
        return self._text is not None


@dataclass(frozen=True)
class Missing:
    """No translation of *base* exists in *lang*."""

    kind: ClassVar[DiffKind] = DiffKind.MISSING

    base: LanguageFile
    lang: str

    @property
    def translation(self) -> None:
        return None

    @property
    def patches(self) -> Tuple[Patch, ...]:
        return ()


@dataclass(frozen=True)
class ModifiedBase:
    """The base file changed but its translation did not."""

    kind: ClassVar[DiffKind] = DiffKind.MODIFIED_BASE

    # equality and hashing cover the files only; patches are derived values

    base: LanguageFile
    base_patch: Patch = field(compare=False)
    translation: LanguageFile

    @property
    def lang(self) -> str:
        return self.translation.lang

    @property
    def patches(self) -> Tuple[Patch, ...]:
        return (self.base_patch,)


@dataclass(frozen=True)
class ModifiedBoth:
    """The base file and its translation changed in the same range."""

    kind: ClassVar[DiffKind] = DiffKind.MODIFIED_BOTH

    base: LanguageFile
    base_patch: Patch = field(compare=False)
    translation: LanguageFile
    translation_patch: Patch = field(compare=False)

    @property
    def lang(self) -> str:
        return self.translation.lang

    @property
    def patches(self) -> Tuple[Patch, ...]:
        return (self.base_patch, self.translation_patch)


Diff = Union[Missing, ModifiedBase, ModifiedBoth]
