"""Language files and the path matcher that pairs them across languages."""

from __future__ import annotations

from dataclasses import dataclass


def matches(base_path: str, other_path: str, other_lang: str) -> bool:
    """Return True if *other_path* is the *other_lang* translation of *base_path*.

    Only string structure is compared. The two paths are expected to differ
    solely by the language code, so:

    1. paths of different length never match;
    2. the diff span is *other_path* from the first to the last index where
       the paths differ (characters in between included);
    3. a span longer than the language code is rejected;
    4. the language code must contain the span.

    Containment (rather than equality) covers codes sharing characters with
    the base code: ``sk/a.md`` vs ``sl/a.md`` differs only in ``l``.
    Identical paths produce an empty span and match any non-empty code.
    """
    if not other_lang:
        return False
    if len(base_path) != len(other_path):
        return False

    differing = [i for i, (b, o) in enumerate(zip(base_path, other_path)) if b != o]
    span = other_path[differing[0]:differing[-1] + 1] if differing else ""

    if len(span) > len(other_lang):
        return False
    return span in other_lang


@dataclass(frozen=True)
class LanguageFile:
    """A file path together with the language its content is written in."""

    path: str
    lang: str

    def is_translated_by(self, other: "LanguageFile") -> bool:
        """True if *other* is the translation of this file into ``other.lang``."""
        return matches(self.path, other.path, other.lang)

    def __str__(self) -> str:
        return f"{self.path} ({self.lang})"
