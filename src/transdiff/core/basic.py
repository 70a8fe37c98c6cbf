"""Structural classifier — missing translations from file paths alone."""

from __future__ import annotations

from typing import List

from transdiff.core.bundle import Bundle
from transdiff.core.diffs import Diff, Missing


class BasicClassifier:
    """Report base files without a translation in each declared language.

    Needs no history and reads no content.
    """

    def __init__(self, langs: List[str]) -> None:
        self._langs = list(langs)

    def classify(self, bundle: Bundle) -> List[Diff]:
        diffs: List[Diff] = []
        for lang in self._langs:
            if lang == bundle.base_lang:
                continue
            for base in bundle.base_files():
                if bundle.file_in_lang(base.path, lang) is None:
                    diffs.append(Missing(base=base, lang=lang))
        return diffs
