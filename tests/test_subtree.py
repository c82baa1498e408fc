# tests/test_subtree.py
"""Tests for core.subtree -- list, recursive delete, recursive copy, move."""

import locale

import pytest

from core.files import read_file, write_file
from core.lookup import stat
from core.materializer import ensure_dir
from core.subtree import copy_tree, delete_tree, list_children, move_tree
from model.entry import DirEntry, FileEntry
from repository.entry_repository import EntryRepository
from repository.memory_substrate import MemorySubstrate
from repository.substrate import SubstrateKey
from util.errors import NotFoundError, SubstrateError, UsageError

SCOPE = "alice"


@pytest.fixture
def c_collation():
    previous = locale.setlocale(locale.LC_COLLATE)
    locale.setlocale(locale.LC_COLLATE, "C")
    yield
    locale.setlocale(locale.LC_COLLATE, previous)


class FlakySubstrate(MemorySubstrate):
    """Fails every delete after the first `allowed` ones."""

    def __init__(self, allowed: int) -> None:
        super().__init__()
        self.allowed = allowed

    async def delete(self, key: SubstrateKey) -> None:
        if self.allowed <= 0:
            raise SubstrateError("delete", key.path)
        self.allowed -= 1
        await super().delete(key)


class TestList:
    async def test_fresh_directory_is_empty_and_materialized(self, entries):
        dp, items = await list_children(entries, SCOPE, "/empty/")
        assert dp == "/empty/"
        assert items == []
        assert isinstance(await entries.get(SCOPE, "/empty/"), DirEntry)

    async def test_immediate_children_only(self, entries):
        await write_file(entries, SCOPE, "/d/b.txt", b"bb")
        await write_file(entries, SCOPE, "/d/a.txt", b"a")
        await write_file(entries, SCOPE, "/d/sub/deep.txt", b"x")
        await ensure_dir(entries, SCOPE, "/d/sub/")
        _, items = await list_children(entries, SCOPE, "/d")
        assert [(c.name, c.path, c.kind) for c in items] == [
            ("a.txt", "/d/a.txt", "file"),
            ("b.txt", "/d/b.txt", "file"),
            ("sub", "/d/sub/", "dir"),
        ]
        assert items[1].size == 2
        assert items[2].size == 0
        assert items[2].created_at is not None

    async def test_directory_marker_and_descendants_dedupe(self, entries):
        await ensure_dir(entries, SCOPE, "/d/")
        await ensure_dir(entries, SCOPE, "/d/e/")
        await write_file(entries, SCOPE, "/d/e/1.txt", b"1")
        await write_file(entries, SCOPE, "/d/e/2.txt", b"2")
        _, items = await list_children(entries, SCOPE, "/d/")
        assert [c.path for c in items] == ["/d/e/"]

    async def test_orphaned_descendant_is_reported_with_null_stats(self, entries):
        # Writes only materialize one level up, so /o/x/ has no marker
        await write_file(entries, SCOPE, "/o/x/y/z.txt", b"z")
        await ensure_dir(entries, SCOPE, "/o/")
        _, items = await list_children(entries, SCOPE, "/o/")
        assert len(items) == 1
        orphan = items[0]
        assert (orphan.name, orphan.path, orphan.kind) == ("x", "/o/x/", "dir")
        assert orphan.size is None
        assert orphan.created_at is None
        assert orphan.modified_at is None

    async def test_never_includes_the_directory_itself(self, entries):
        await write_file(entries, SCOPE, "/solo.txt", b"x")
        _, items = await list_children(entries, SCOPE, "/")
        assert [c.path for c in items] == ["/solo.txt"]

    async def test_sibling_prefix_names_are_not_children(self, entries):
        await write_file(entries, SCOPE, "/d/x", b"")
        await write_file(entries, SCOPE, "/dd/y", b"")
        _, items = await list_children(entries, SCOPE, "/d/")
        assert [c.path for c in items] == ["/d/x"]

    async def test_names_sort_case_insensitively(self, entries, c_collation):
        for name in ["b.txt", "B2.txt", "a.txt", "Z.txt"]:
            await write_file(entries, SCOPE, f"/n/{name}", b"")
        _, items = await list_children(entries, SCOPE, "/n/")
        assert [c.name for c in items] == ["a.txt", "b.txt", "B2.txt", "Z.txt"]

    async def test_same_folded_name_orders_by_raw_name(self, entries, c_collation):
        for name in ["a", "A"]:
            await write_file(entries, SCOPE, f"/n/{name}", b"")
        _, items = await list_children(entries, SCOPE, "/n/")
        assert [c.name for c in items] == ["A", "a"]

    async def test_name_with_nul_still_lists(self, entries):
        await write_file(entries, SCOPE, "/n/a\x00b", b"x")
        await write_file(entries, SCOPE, "/n/c", b"y")
        _, items = await list_children(entries, SCOPE, "/n/")
        assert [c.path for c in items] == ["/n/a\x00b", "/n/c"]

    async def test_corrupt_file_lists_as_orphan(self, entries, substrate):
        await ensure_dir(entries, SCOPE, "/d/")
        await substrate.put(SubstrateKey("fs", SCOPE, "/d/bad.txt"), b"{")
        _, items = await list_children(entries, SCOPE, "/d/")
        assert [(c.path, c.kind, c.size) for c in items] == [
            ("/d/bad.txt", "file", None)
        ]


class TestDelete:
    async def test_recursive_delete_removes_every_descendant(self, entries):
        await write_file(entries, SCOPE, "/d/x.txt", b"x")
        await ensure_dir(entries, SCOPE, "/d/e/")
        await write_file(entries, SCOPE, "/d/e/y.txt", b"y")
        outcome = await delete_tree(entries, SCOPE, "/d/")
        assert outcome.path == "/d/"
        assert outcome.removed_children == 3
        for p in ["/d/x.txt", "/d/e/y.txt", "/d/e/", "/d/"]:
            assert await stat(entries, SCOPE, p) is None

    async def test_single_file(self, entries):
        await write_file(entries, SCOPE, "/d/x.txt", b"x")
        await write_file(entries, SCOPE, "/d/keep.txt", b"k")
        outcome = await delete_tree(entries, SCOPE, "/d/x.txt")
        assert (outcome.path, outcome.removed_children) == ("/d/x.txt", 0)
        assert await stat(entries, SCOPE, "/d/x.txt") is None
        assert await stat(entries, SCOPE, "/d/keep.txt") is not None
        assert await stat(entries, SCOPE, "/d/") is not None

    async def test_slashless_directory_is_deleted_as_directory(self, entries):
        await write_file(entries, SCOPE, "/d/x.txt", b"x")
        outcome = await delete_tree(entries, SCOPE, "/d")
        assert outcome.path == "/d/"
        assert await stat(entries, SCOPE, "/d/x.txt") is None
        assert await stat(entries, SCOPE, "/d/") is None

    async def test_missing_path_removes_nothing(self, entries):
        await write_file(entries, SCOPE, "/keep.txt", b"k")
        outcome = await delete_tree(entries, SCOPE, "/nothing")
        assert outcome.removed_children == 0
        assert await stat(entries, SCOPE, "/keep.txt") is not None

    async def test_empty_parent_is_not_pruned(self, entries):
        await write_file(entries, SCOPE, "/d/only.txt", b"x")
        await delete_tree(entries, SCOPE, "/d/only.txt")
        assert isinstance(await stat(entries, SCOPE, "/d/"), DirEntry)

    async def test_failure_mid_scan_leaves_partial_subtree(self):
        substrate = FlakySubstrate(allowed=1000)
        entries = EntryRepository(substrate)
        for name in ["a", "b", "c"]:
            await write_file(entries, SCOPE, f"/d/{name}.txt", b"x")
        substrate.allowed = 1

        with pytest.raises(SubstrateError):
            await delete_tree(entries, SCOPE, "/d/")

        remaining = [p for p, _ in await entries.scan(SCOPE, "/d/")]
        assert remaining == ["/d/", "/d/b.txt", "/d/c.txt"]


class TestCopy:
    async def test_directory_copy_preserves_structure_and_content(self, entries):
        await write_file(entries, SCOPE, "/src/f.txt", b"hi")
        await ensure_dir(entries, SCOPE, "/src/inner/")
        await write_file(entries, SCOPE, "/src/inner/g.txt", b"deep")
        outcome = await copy_tree(entries, SCOPE, "/src/", "/dst/")
        assert (outcome.from_path, outcome.to_path) == ("/src/", "/dst/")
        assert (await read_file(entries, SCOPE, "/dst/f.txt")).content == b"hi"
        assert (await read_file(entries, SCOPE, "/dst/inner/g.txt")).content == b"deep"
        assert isinstance(await stat(entries, SCOPE, "/dst/inner/"), DirEntry)
        assert (await read_file(entries, SCOPE, "/src/f.txt")).content == b"hi"

    async def test_slashless_directory_source(self, entries):
        await write_file(entries, SCOPE, "/src/f.txt", b"hi")
        outcome = await copy_tree(entries, SCOPE, "/src", "/dst")
        assert outcome.to_path == "/dst/"
        assert (await read_file(entries, SCOPE, "/dst/f.txt")).content == b"hi"

    async def test_file_into_directory_keeps_base_name(self, entries):
        await write_file(entries, SCOPE, "/a.txt", b"A")
        outcome = await copy_tree(entries, SCOPE, "/a.txt", "/dir/")
        assert outcome.to_path == "/dir/a.txt"
        assert (await read_file(entries, SCOPE, "/dir/a.txt")).content == b"A"

    async def test_file_to_literal_path(self, entries):
        await write_file(entries, SCOPE, "/a.txt", b"A")
        outcome = await copy_tree(entries, SCOPE, "/a.txt", "/x/b.txt")
        assert outcome.to_path == "/x/b.txt"
        assert isinstance(await stat(entries, SCOPE, "/x/"), DirEntry)
        assert (await read_file(entries, SCOPE, "/x/b.txt")).content == b"A"

    async def test_missing_source(self, entries):
        with pytest.raises(NotFoundError):
            await copy_tree(entries, SCOPE, "/ghost.txt", "/x.txt")

    async def test_copy_into_own_subtree_terminates(self, entries):
        await write_file(entries, SCOPE, "/a/f.txt", b"f")
        await copy_tree(entries, SCOPE, "/a/", "/a/b/")
        assert (await read_file(entries, SCOPE, "/a/b/f.txt")).content == b"f"
        assert await stat(entries, SCOPE, "/a/b/b/") is None

    async def test_copied_file_gets_fresh_entry(self, entries, monkeypatch):
        import core.files as files_mod

        monkeypatch.setattr(files_mod, "now_ms", lambda: 1)
        await write_file(entries, SCOPE, "/a.txt", b"A")
        monkeypatch.setattr(files_mod, "now_ms", lambda: 2)
        await copy_tree(entries, SCOPE, "/a.txt", "/b.txt")
        copied = await read_file(entries, SCOPE, "/b.txt")
        assert (copied.created_at, copied.modified_at) == (2, 2)


class TestMove:
    async def test_file_move(self, entries):
        await write_file(entries, SCOPE, "/a.txt", b"orig")
        outcome = await move_tree(entries, SCOPE, "/a.txt", "/b.txt")
        assert (outcome.from_path, outcome.to_path) == ("/a.txt", "/b.txt")
        assert await stat(entries, SCOPE, "/a.txt") is None
        assert (await read_file(entries, SCOPE, "/b.txt")).content == b"orig"

    async def test_directory_move(self, entries):
        await write_file(entries, SCOPE, "/from/x.txt", b"x")
        await move_tree(entries, SCOPE, "/from/", "/to/")
        assert await stat(entries, SCOPE, "/from/") is None
        assert await stat(entries, SCOPE, "/from/x.txt") is None
        assert isinstance(await stat(entries, SCOPE, "/to/x.txt"), FileEntry)

    async def test_failed_copy_skips_delete(self, entries):
        await write_file(entries, SCOPE, "/keep.txt", b"k")
        with pytest.raises(NotFoundError):
            await move_tree(entries, SCOPE, "/ghost.txt", "/keep.txt")
        assert (await read_file(entries, SCOPE, "/keep.txt")).content == b"k"

    async def test_failed_delete_leaves_both_sides(self):
        substrate = FlakySubstrate(allowed=0)
        entries = EntryRepository(substrate)
        await write_file(entries, SCOPE, "/a.txt", b"orig")
        with pytest.raises(SubstrateError):
            await move_tree(entries, SCOPE, "/a.txt", "/b.txt")
        assert (await read_file(entries, SCOPE, "/a.txt")).content == b"orig"
        assert (await read_file(entries, SCOPE, "/b.txt")).content == b"orig"

    async def test_file_onto_itself_is_rejected(self, entries):
        await write_file(entries, SCOPE, "/a.txt", b"orig")
        with pytest.raises(UsageError):
            await move_tree(entries, SCOPE, "/a.txt", "/a.txt")
        assert (await read_file(entries, SCOPE, "/a.txt")).content == b"orig"

    async def test_file_into_its_own_directory_is_rejected(self, entries):
        await write_file(entries, SCOPE, "/d/a.txt", b"orig")
        with pytest.raises(UsageError):
            await move_tree(entries, SCOPE, "/d/a.txt", "/d/")
        assert (await read_file(entries, SCOPE, "/d/a.txt")).content == b"orig"

    @pytest.mark.parametrize("dest", ["/a/", "/a", "/a/b/"])
    async def test_directory_onto_itself_or_inside_is_rejected(self, entries, dest):
        await write_file(entries, SCOPE, "/a/f.txt", b"f")
        with pytest.raises(UsageError):
            await move_tree(entries, SCOPE, "/a/", dest)
        assert (await read_file(entries, SCOPE, "/a/f.txt")).content == b"f"
        assert await stat(entries, SCOPE, "/a/b/") is None

    async def test_sibling_with_shared_prefix_is_allowed(self, entries):
        await write_file(entries, SCOPE, "/a/f.txt", b"f")
        await move_tree(entries, SCOPE, "/a/", "/ab/")
        assert (await read_file(entries, SCOPE, "/ab/f.txt")).content == b"f"
        assert await stat(entries, SCOPE, "/a/") is None
