"""Tests for directory enumeration and the listing cache."""

import os

from autoloader import listing as listing_module
from autoloader.listing import ListingCache, ListingState, scan_directory

from conftest import write_files


def keys(listing, namespaced=True):
    return [entry.comparison_key(namespaced) for entry in listing]


class TestScanDirectory:
    def test_depth_first_preorder_sorted(self, temp_dir):
        write_files(
            temp_dir,
            {
                "b.py": "",
                "a/z.py": "",
                "a/inner/y.py": "",
                "a/b.py": "",
                "c.py": "",
            },
        )
        result = scan_directory(temp_dir)

        assert keys(result) == [
            os.sep.join(["a", "b.py"]),
            os.sep.join(["a", "inner", "y.py"]),
            os.sep.join(["a", "z.py"]),
            "b.py",
            "c.py",
        ]

    def test_entries_carry_subpath_and_absolute_path(self, temp_dir):
        write_files(temp_dir, {"Ns/Sub/Bar.py": ""})
        (entry,) = scan_directory(temp_dir)

        assert entry.subpath == os.sep.join(["Ns", "Sub"])
        assert entry.filename == "Bar.py"
        assert os.path.isabs(entry.path)
        assert entry.is_readable is True
        assert entry.comparison_key(True) == os.sep.join(["ns", "sub", "bar.py"])
        assert entry.comparison_key(False) == "bar.py"

    def test_skips_hidden_entries(self, temp_dir):
        write_files(
            temp_dir,
            {".hidden.py": "", ".git/config.py": "", "visible.py": ""},
        )
        assert keys(scan_directory(temp_dir)) == ["visible.py"]

    def test_directories_are_not_entries(self, temp_dir):
        (temp_dir / "empty_dir").mkdir()
        assert len(scan_directory(temp_dir)) == 0

    def test_missing_root_is_empty(self, temp_dir):
        result = scan_directory(temp_dir / "does-not-exist")
        assert len(result) == 0
        assert list(result) == []

    def test_root_is_a_file(self, temp_dir):
        write_files(temp_dir, {"file.py": ""})
        assert len(scan_directory(temp_dir / "file.py")) == 0

    def test_symlinked_directories_not_descended(self, temp_dir):
        root = write_files(temp_dir / "root", {"lib/foo.py": ""})
        write_files(temp_dir, {"outside/bar.py": ""})
        (root / "linked").symlink_to(temp_dir / "outside", target_is_directory=True)
        (root / "lib" / "loop").symlink_to(root, target_is_directory=True)

        assert keys(scan_directory(root)) == [os.sep.join(["lib", "foo.py"])]

    def test_symlinked_files_are_listed(self, temp_dir):
        write_files(temp_dir, {"outside/bar.py": ""})
        root = temp_dir / "root"
        root.mkdir()
        (root / "alias.py").symlink_to(temp_dir / "outside" / "bar.py")

        (entry,) = scan_directory(root)
        assert entry.filename == "alias.py"
        assert entry.path == os.path.abspath(root / "alias.py")

    def test_readability_recorded(self, temp_dir, monkeypatch):
        write_files(temp_dir, {"locked.py": "", "open.py": ""})
        monkeypatch.setattr(
            listing_module, "_is_readable", lambda path: not path.endswith("locked.py")
        )
        by_name = {e.filename: e.is_readable for e in scan_directory(temp_dir)}
        assert by_name == {"locked.py": False, "open.py": True}


class TestFind:
    def test_first_match_in_enumeration_order_wins(self, temp_dir):
        write_files(temp_dir, {"a/foo.py": "", "b/foo.py": ""})
        entry = scan_directory(temp_dir).find(["foo.py"], namespaced=False)
        assert entry.subpath == "a"

    def test_any_candidate_matches(self, temp_dir):
        write_files(temp_dir, {"trait-foo.py": ""})
        entry = scan_directory(temp_dir).find(["class-foo.py", "trait-foo.py"], False)
        assert entry.filename == "trait-foo.py"

    def test_no_candidates(self, temp_dir):
        write_files(temp_dir, {"foo.py": ""})
        assert scan_directory(temp_dir).find([], namespaced=False) is None


class TestListingCache:
    def test_state_transition(self, temp_dir):
        cache = ListingCache(temp_dir)
        assert cache.state is ListingState.UNBUILT

        cache.get()
        assert cache.state is ListingState.CACHED

    def test_built_once(self, temp_dir, monkeypatch):
        calls = []
        real_scan = listing_module.scan_directory

        def counting_scan(root):
            calls.append(root)
            return real_scan(root)

        monkeypatch.setattr(listing_module, "scan_directory", counting_scan)
        cache = ListingCache(temp_dir)

        first = cache.get()
        second = cache.get()

        assert first is second
        assert len(calls) == 1

    def test_filesystem_changes_not_seen(self, temp_dir):
        write_files(temp_dir, {"one.py": ""})
        cache = ListingCache(temp_dir)
        assert len(cache.get()) == 1

        write_files(temp_dir, {"two.py": ""})
        assert len(cache.get()) == 1
