"""Tests for the structural (Missing) classifier."""

from transdiff.core.basic import BasicClassifier
from transdiff.core.bundle import Bundle
from transdiff.core.diffs import DiffKind, Missing
from transdiff.core.files import LanguageFile


class TestBasicClassifier:
    def test_single_missing_translation(self):
        bundle = Bundle("en", [
            LanguageFile("en/first.md", "en"),
            LanguageFile("en/second.md", "en"),
            LanguageFile("de/first.md", "de"),
        ])
        diffs = BasicClassifier(["de"]).classify(bundle)
        assert diffs == [Missing(base=LanguageFile("en/second.md", "en"), lang="de")]

    def test_missing_exposes_common_accessors(self):
        diff = Missing(base=LanguageFile("en/a.md", "en"), lang="de")
        assert diff.kind is DiffKind.MISSING
        assert diff.translation is None
        assert diff.lang == "de"
        assert diff.patches == ()

    def test_base_language_skipped(self):
        bundle = Bundle("en", [LanguageFile("en/a.md", "en")])
        assert BasicClassifier(["en"]).classify(bundle) == []

    def test_language_without_any_files(self):
        bundle = Bundle("en", [
            LanguageFile("en/a.md", "en"),
            LanguageFile("en/b.md", "en"),
        ])
        diffs = BasicClassifier(["en", "fr"]).classify(bundle)
        assert [(d.base.path, d.lang) for d in diffs] == [("en/a.md", "fr"), ("en/b.md", "fr")]

    def test_order_follows_languages_then_discovery(self):
        bundle = Bundle("en", [
            LanguageFile("en/b.md", "en"),
            LanguageFile("en/a.md", "en"),
        ])
        diffs = BasicClassifier(["en", "fr", "de"]).classify(bundle)
        assert [(d.lang, d.base.path) for d in diffs] == [
            ("fr", "en/b.md"),
            ("fr", "en/a.md"),
            ("de", "en/b.md"),
            ("de", "en/a.md"),
        ]

    def test_complete_bundle_yields_nothing(self):
        langs = ["en", "de", "fr"]
        files = [LanguageFile(f"{lang}/{name}", lang) for lang in langs for name in ("a.md", "b.md")]
        assert BasicClassifier(langs).classify(Bundle("en", files)) == []

    def test_idempotent(self):
        bundle = Bundle("en", [
            LanguageFile("en/a.md", "en"),
            LanguageFile("en/b.md", "en"),
            LanguageFile("de/a.md", "de"),
        ])
        classifier = BasicClassifier(["en", "de", "fr"])
        assert classifier.classify(bundle) == classifier.classify(bundle)
