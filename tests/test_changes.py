"""Tests for change sets, revision ranges, and patch text."""

import pytest

from conftest import ROOT, MemoryTree, abs_path, make_range
from transdiff.core.changes import (
    EMPTY_HASH,
    Change,
    ChangeAction,
    ChangeSet,
    ContentError,
    RevisionRange,
    diff_trees,
)
from transdiff.core.diffs import Patch
from transdiff.core.patch import unified_patch


class TestDiffTrees:
    def test_actions(self):
        rr = make_range(
            {"keep.md": "same\n", "edit.md": "v1\n", "gone.md": "bye\n"},
            {"keep.md": "same\n", "edit.md": "v2\n", "new.md": "hi\n"},
        )
        changes = diff_trees(rr)
        assert [(c.path, c.action) for c in changes] == [
            ("edit.md", ChangeAction.MODIFIED),
            ("gone.md", ChangeAction.DELETED),
            ("new.md", ChangeAction.INSERTED),
        ]

    def test_paths_per_action(self):
        rr = make_range({"a.md": "1\n", "b.md": "x\n"}, {"a.md": "2\n", "c.md": "y\n"})
        by_path = {c.path: c for c in diff_trees(rr)}
        assert (by_path["a.md"].from_path, by_path["a.md"].to_path) == ("a.md", "a.md")
        assert (by_path["b.md"].from_path, by_path["b.md"].to_path) == ("b.md", None)
        assert (by_path["c.md"].from_path, by_path["c.md"].to_path) == (None, "c.md")

    def test_identical_trees(self):
        rr = make_range({"a.md": "1\n"}, {"a.md": "1\n"})
        assert diff_trees(rr) == []

    def test_empty_hash_never_equal(self):
        rr = RevisionRange(
            older=MemoryTree("old", {"link.md": "x"}, hashes={"link.md": EMPTY_HASH}),
            newer=MemoryTree("new", {"link.md": "x"}, hashes={"link.md": EMPTY_HASH}),
            root=ROOT,
        )
        [change] = diff_trees(rr)
        assert change.action is ChangeAction.MODIFIED

    def test_describe(self):
        assert make_range({}, {}).describe() == "old..new"


class TestChangeContent:
    def test_lazy_content(self):
        rr = make_range({"a.md": "before\n"}, {"a.md": "after\n"})
        [change] = diff_trees(rr)
        assert change.content_before() == "before\n"
        assert change.content_after() == "after\n"

    def test_inserted_has_empty_before(self):
        rr = make_range({}, {"a.md": "after\n"})
        [change] = diff_trees(rr)
        assert change.content_before() == ""

    def test_deleted_has_empty_after(self):
        rr = make_range({"a.md": "before\n"}, {})
        [change] = diff_trees(rr)
        assert change.content_after() == ""

    def test_unbound_change_raises(self):
        change = Change(from_path="a.md", to_path="a.md", action=ChangeAction.MODIFIED)
        with pytest.raises(ContentError):
            change.content_before()

    def test_missing_content_raises(self):
        rr = make_range({}, {})
        change = Change(
            from_path="a.md", to_path="a.md", action=ChangeAction.MODIFIED, revision_range=rr,
        )
        with pytest.raises(ContentError, match="a.md"):
            change.content_after()

    def test_equality_ignores_range(self):
        a = Change("a.md", "a.md", ChangeAction.MODIFIED, make_range({}, {}))
        b = Change("a.md", "a.md", ChangeAction.MODIFIED, make_range({}, {}))
        assert a == b


class TestChangeSet:
    def _change_set(self):
        rr = make_range(
            {"en/a.md": "1\n", "en/gone.md": "x\n"},
            {"en/a.md": "2\n", "de/new.md": "y\n"},
        )
        return ChangeSet.between(rr)

    def test_lookup_by_absolute_path(self):
        cs = self._change_set()
        assert cs.action_for(abs_path("en/a.md")) is ChangeAction.MODIFIED
        assert cs.action_for(abs_path("en/gone.md")) is ChangeAction.DELETED
        assert cs.action_for(abs_path("en/other.md")) is None
        assert cs.change_for(abs_path("de/new.md")).to_path == "de/new.md"

    def test_created_or_modified_skips_deletions(self):
        cs = self._change_set()
        assert [c.path for c in cs.created_or_modified()] == ["de/new.md", "en/a.md"]

    def test_iteration_and_len(self):
        cs = self._change_set()
        assert len(cs) == 3
        assert cs.root == ROOT
        assert [c.path for c in cs] == ["de/new.md", "en/a.md", "en/gone.md"]


class TestUnifiedPatch:
    def test_equal_texts(self):
        assert unified_patch("same\n", "same\n") == ""

    def test_header_stripped(self):
        patch = unified_patch("a\nb\nc\n", "a\nB\nc\n")
        assert patch.startswith("@@")
        assert "---" not in patch
        assert "+++" not in patch
        assert patch.splitlines() == ["@@ -1,3 +1,3 @@", " a", "-b", "+B", " c"]

    def test_inserted_file(self):
        assert unified_patch("", "one\ntwo\n") == "@@ -0,0 +1,2 @@\n+one\n+two"

    def test_no_newline_marker(self):
        patch = unified_patch("a\n", "a\nb")
        assert patch.splitlines()[-2:] == ["+b", "\\ No newline at end of file"]

    def test_context_lines(self):
        before = "".join(f"{i}\n" for i in range(20))
        after = before.replace("10\n", "ten\n")
        lines = unified_patch(before, after).splitlines()
        assert lines[0] == "@@ -8,7 +8,7 @@"
        assert len(lines) == 9


class TestPatch:
    def test_memoized(self):
        calls = []

        class CountingTree(MemoryTree):
            def content(self, path):
                calls.append(path)
                return super().content(path)

        rr = RevisionRange(
            older=CountingTree("old", {"a.md": "1\n"}),
            newer=CountingTree("new", {"a.md": "2\n"}),
            root=ROOT,
        )
        [change] = diff_trees(rr)
        patch = Patch(change)
        assert patch.text == patch.text
        assert calls == ["a.md", "a.md"]

    def test_error_not_cached(self):
        rr = make_range({}, {})
        patch = Patch(Change("a.md", "a.md", ChangeAction.MODIFIED, rr))
        with pytest.raises(ContentError):
            _ = patch.text
        assert not patch.is_computed
