"""Tests for bounded directory scanning.

Covers exclusion/hidden pruning, depth and count caps, traversal order,
and error tolerance below the root.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fuzzyfiler import scanner
from fuzzyfiler.config import DEFAULT_EXCLUDE_PATTERNS, should_exclude
from fuzzyfiler.scanner import (
    DEFAULT_LIMITS,
    Disposition,
    Entry,
    LimitVisitor,
    ScanError,
    ScanLimits,
    node_depth,
    scan_entries,
)


def _touch(path: Path, text: str = "x") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class ScanEntriesTests(unittest.TestCase):
    def test_default_excludes_prune_node_modules(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "src" / "main.go")
            _touch(root / "README.md")
            _touch(root / "node_modules" / "pkg.json")

            entries = scan_entries(root, DEFAULT_LIMITS)

            self.assertEqual(
                [entry.path for entry in entries],
                ["README.md", "src", os.path.join("src", "main.go")],
            )

    def test_entries_carry_name_kind_and_parent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "src" / "main.go")

            entries = scan_entries(root, DEFAULT_LIMITS)

            self.assertEqual(
                entries,
                [
                    Entry(path="src", name="src", is_dir=True, parent_path="."),
                    Entry(path=os.path.join("src", "main.go"), name="main.go", is_dir=False, parent_path="src"),
                ],
            )

    def test_traversal_is_lexical_pre_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "b" / "z.txt")
            _touch(root / "b" / "a.txt")
            _touch(root / "a.txt")
            _touch(root / "c.txt")

            entries = scan_entries(root, DEFAULT_LIMITS)

            self.assertEqual(
                [entry.path for entry in entries],
                ["a.txt", "b", os.path.join("b", "a.txt"), os.path.join("b", "z.txt"), "c.txt"],
            )

    def test_hidden_entries_are_skipped_and_hidden_dirs_pruned(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / ".env")
            _touch(root / ".config" / "visible.txt")
            _touch(root / "src" / ".secret")
            _touch(root / "src" / "app.py")

            limits = ScanLimits(max_depth=10, max_file_count=100, exclude_patterns=())
            entries = scan_entries(root, limits)

            self.assertEqual([entry.path for entry in entries], ["src", os.path.join("src", "app.py")])

    def test_glob_and_substring_excludes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "debug.log")
            _touch(root / "notes.txt")
            _touch(root / "build" / "out.txt")

            limits = ScanLimits(max_depth=10, max_file_count=100, exclude_patterns=("*.log", "build"))
            entries = scan_entries(root, limits)

            self.assertEqual([entry.path for entry in entries], ["notes.txt"])

    def test_max_depth_prunes_deeper_levels(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "a" / "b" / "c" / "d.txt")

            limits = ScanLimits(max_depth=2, max_file_count=100)
            entries = scan_entries(root, limits)

            self.assertEqual([entry.path for entry in entries], ["a", os.path.join("a", "b")])

    def test_file_cap_stops_whole_scan(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("a", "b", "c", "d", "e"):
                _touch(root / "dir" / f"{name}.txt")
            _touch(root / "zzz.txt")

            limits = ScanLimits(max_depth=10, max_file_count=3)
            entries = scan_entries(root, limits)

            self.assertEqual(
                [entry.path for entry in entries],
                ["dir", os.path.join("dir", "a.txt"), os.path.join("dir", "b.txt")],
            )

    def test_missing_root_raises_scan_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "nope"
            with self.assertRaises(ScanError):
                scan_entries(missing, DEFAULT_LIMITS)

    def test_file_root_raises_scan_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "file.txt"
            _touch(target)
            with self.assertRaises(ScanError):
                scan_entries(target, DEFAULT_LIMITS)

    def test_unreadable_subdirectory_is_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "locked" / "secret.txt")
            _touch(root / "open" / "readme.txt")
            real_list_children = scanner._list_children

            def fake_list_children(directory: str):
                if os.path.basename(directory) == "locked":
                    raise PermissionError(13, "Permission denied", directory)
                return real_list_children(directory)

            with mock.patch("fuzzyfiler.scanner._list_children", side_effect=fake_list_children):
                entries = scan_entries(root, DEFAULT_LIMITS)

            self.assertEqual(
                [entry.path for entry in entries],
                ["locked", "open", os.path.join("open", "readme.txt")],
            )

    def test_directory_symlinks_are_listed_as_files_and_not_followed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "real" / "inner.txt")
            os.symlink(root / "real", root / "link")

            entries = scan_entries(root, DEFAULT_LIMITS)

            self.assertEqual(
                entries,
                [
                    Entry(path="link", name="link", is_dir=False, parent_path="."),
                    Entry(path="real", name="real", is_dir=True, parent_path="."),
                    Entry(path=os.path.join("real", "inner.txt"), name="inner.txt", is_dir=False, parent_path="real"),
                ],
            )

    def test_scan_results_respect_all_limits(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for top in ("alpha", "beta", ".hidden", "node_modules", "gamma"):
                for mid in ("one", "two"):
                    for leaf in ("x.py", "y.log", "z.txt"):
                        _touch(root / top / mid / "deep" / leaf)

            limits = ScanLimits(max_depth=3, max_file_count=12, exclude_patterns=DEFAULT_EXCLUDE_PATTERNS)
            entries = scan_entries(root, limits)

            self.assertLessEqual(len(entries), 12)
            self.assertEqual(len({entry.path for entry in entries}), len(entries))
            for entry in entries:
                self.assertLessEqual(node_depth(entry.path), 3)
                self.assertFalse(should_exclude(entry.path, limits.exclude_patterns))
                self.assertFalse(any(part.startswith(".") for part in entry.path.split(os.sep)))


class LimitVisitorTests(unittest.TestCase):
    def test_rejected_directories_prune_and_files_skip(self) -> None:
        visitor = LimitVisitor(ScanLimits(max_depth=1, max_file_count=10, exclude_patterns=("dist",)))

        self.assertIs(visitor.visit(os.path.join("a", "b"), "b", True), Disposition.PRUNE)
        self.assertIs(visitor.visit(os.path.join("a", "b"), "b", False), Disposition.SKIP)
        self.assertIs(visitor.visit("dist", "dist", True), Disposition.PRUNE)
        self.assertIs(visitor.visit(".git", ".git", True), Disposition.PRUNE)
        self.assertIs(visitor.visit(".env", ".env", False), Disposition.SKIP)
        self.assertEqual(visitor.accepted, 0)

    def test_stop_after_cap_reached(self) -> None:
        visitor = LimitVisitor(ScanLimits(max_depth=5, max_file_count=2))

        self.assertIs(visitor.visit("a", "a", False), Disposition.INCLUDE)
        self.assertIs(visitor.visit("b", "b", False), Disposition.INCLUDE)
        self.assertIs(visitor.visit("c", "c", False), Disposition.STOP)

    def test_errors_are_skipped(self) -> None:
        visitor = LimitVisitor(DEFAULT_LIMITS)
        self.assertIs(visitor.visit_error("x", PermissionError("denied")), Disposition.SKIP)

    def test_node_depth_counts_separators_from_root(self) -> None:
        self.assertEqual(node_depth("a"), 1)
        self.assertEqual(node_depth(os.path.join("a", "b", "c")), 3)


if __name__ == "__main__":
    unittest.main()
