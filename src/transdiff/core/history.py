"""Historical classifier — stale translations from a change set.

Each (base, translation) pair is classified by looking up the actions
observed for both files in :data:`DECISION_TABLE`. ``None`` stands for "no
action observed". Deletions never surface: only combinations where the
content a translator must react to still exists produce an outcome.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from transdiff.core.bundle import Bundle
from transdiff.core.changes import ChangeAction, ChangeSet
from transdiff.core.diffs import Diff, DiffKind, ModifiedBase, ModifiedBoth, Patch
from transdiff.core.files import LanguageFile

logger = logging.getLogger(__name__)

_I = ChangeAction.INSERTED
_M = ChangeAction.MODIFIED
_D = ChangeAction.DELETED

ActionPair = Tuple[Optional[ChangeAction], Optional[ChangeAction]]

# (base action, translation action) -> outcome
DECISION_TABLE: Dict[ActionPair, Optional[DiffKind]] = {
    (_I, _I): DiffKind.MODIFIED_BOTH,
    (_M, _M): DiffKind.MODIFIED_BOTH,
    (_I, _M): DiffKind.MODIFIED_BOTH,
    (_M, _I): DiffKind.MODIFIED_BOTH,
    (_D, _D): None,
    (_I, _D): None,
    (_M, _D): None,
    (_D, _I): None,
    (_D, _M): None,
    (_I, None): DiffKind.MODIFIED_BASE,
    (_M, None): DiffKind.MODIFIED_BASE,
    (_D, None): None,
    (None, _I): None,
    (None, _M): None,
    (None, _D): None,
    (None, None): None,
}


def decide(
    base_action: Optional[ChangeAction],
    translation_action: Optional[ChangeAction],
) -> Optional[DiffKind]:
    """Return the outcome for a pair of observed actions, or None."""
    return DECISION_TABLE[(base_action, translation_action)]


class HistoricalClassifier:
    """Classify base/translation pairs touched by a change set."""

    def classify(self, bundle: Bundle, change_set: ChangeSet) -> List[Diff]:
        pairs = self._touched_pairs(bundle, change_set)

        diffs: List[Diff] = []
        for base_path, translation in pairs:
            base_change = change_set.change_for(base_path)
            translation_change = change_set.change_for(translation.path)
            outcome = decide(
                base_change.action if base_change else None,
                translation_change.action if translation_change else None,
            )
            # every outcome requires a base change
            if outcome is None or base_change is None:
                continue

            base = LanguageFile(path=base_path, lang=bundle.base_lang)

            if outcome is DiffKind.MODIFIED_BOTH and translation_change is not None:
                diffs.append(
                    ModifiedBoth(
                        base=base,
                        base_patch=Patch(base_change),
                        translation=translation,
                        translation_patch=Patch(translation_change),
                    )
                )
            elif outcome is DiffKind.MODIFIED_BASE:
                diffs.append(
                    ModifiedBase(
                        base=base,
                        base_patch=Patch(base_change),
                        translation=translation,
                    )
                )

        logger.debug("%d pairs examined, %d historical diffs", len(pairs), len(diffs))
        return diffs

    @staticmethod
    def _touched_pairs(
        bundle: Bundle, change_set: ChangeSet
    ) -> List[Tuple[str, LanguageFile]]:
        """Pairs reached from inserted/modified paths, in change order."""
        pairs: Dict[Tuple[str, LanguageFile], None] = {}
        for change in change_set.created_or_modified():
            path = change_set.absolute_path(change)

            if bundle.is_base(path):
                for translation in bundle.translations_of(path):
                    pairs.setdefault((path, translation), None)
                continue

            base_path = bundle.base_of(path)
            if base_path is None:
                continue
            for translation in bundle.translations_of(base_path):
                if translation.path == path:
                    pairs.setdefault((base_path, translation), None)
        return list(pairs)
