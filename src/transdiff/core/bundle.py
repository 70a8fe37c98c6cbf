"""Bundle — base-language files and their per-language translations."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from transdiff.core.files import LanguageFile

logger = logging.getLogger(__name__)


class Bundle:
    """Read-only association of base files with their translations.

    Built once per run. For every base file, every file of every other
    language is probed with the path matcher; the first match in discovery
    order wins and later candidates are ignored.
    """

    def __init__(self, base_lang: str, files: Iterable[LanguageFile]) -> None:
        self._base_lang = base_lang

        # lang -> ordered, de-duplicated files (discovery order)
        self._files_by_lang: Dict[str, List[LanguageFile]] = {}
        seen: set[LanguageFile] = set()
        for f in files:
            if f in seen:
                continue
            seen.add(f)
            self._files_by_lang.setdefault(f.lang, []).append(f)

        # base path -> lang -> translation
        self._translations: Dict[str, Dict[str, LanguageFile]] = {}
        # translation path -> base path
        self._base_of: Dict[str, str] = {}

        for base in self._files_by_lang.get(base_lang, []):
            section: Dict[str, LanguageFile] = {}
            for lang, candidates in self._files_by_lang.items():
                if lang == base_lang:
                    continue
                for candidate in candidates:
                    if base.is_translated_by(candidate):
                        section[lang] = candidate
                        self._base_of.setdefault(candidate.path, base.path)
                        break
            self._translations[base.path] = section

        logger.debug(
            "Bundle built: %d base files, %d languages",
            len(self._translations),
            len(self._files_by_lang),
        )

    # ---- languages ----

    @property
    def base_lang(self) -> str:
        return self._base_lang

    @property
    def langs(self) -> List[str]:
        """All languages with at least one file, base language first."""
        others = [lang for lang in self._files_by_lang if lang != self._base_lang]
        return [self._base_lang, *others]

    # ---- files ----

    def base_files(self) -> List[LanguageFile]:
        return list(self._files_by_lang.get(self._base_lang, []))

    def base_paths(self) -> List[str]:
        return list(self._translations)

    def files_for_lang(self, lang: str) -> List[LanguageFile]:
        return list(self._files_by_lang.get(lang, []))

    def is_base(self, path: str) -> bool:
        return path in self._translations

    def base_file(self, base_path: str) -> Optional[LanguageFile]:
        if base_path not in self._translations:
            return None
        return LanguageFile(path=base_path, lang=self._base_lang)

    def file_in_lang(self, base_path: str, lang: str) -> Optional[LanguageFile]:
        """Translation of *base_path* in *lang*, or None."""
        return self._translations.get(base_path, {}).get(lang)

    def translations_of(self, base_path: str) -> List[LanguageFile]:
        """All translations of *base_path*, in language discovery order."""
        return list(self._translations.get(base_path, {}).values())

    def base_of(self, translation_path: str) -> Optional[str]:
        """Base path a translation file is associated with, or None."""
        return self._base_of.get(translation_path)

    def __repr__(self) -> str:
        return f"Bundle(base_lang={self._base_lang!r}, base_files={len(self._translations)})"
