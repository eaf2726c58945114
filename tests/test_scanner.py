"""Directory scanner tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from scout.models import FileKind
from scout.scanner import DirectoryScanner, ScanError, scan_directory
from tests._fixtures.directory_builder import DirectoryBuilder


def test_scanner_walks_tree_in_lexical_order(directory_builder: DirectoryBuilder) -> None:
    directory_builder.write(
        {
            "b.txt": "b",
            "a.PY": "print('a')",
            "docs/guide.md": "# Guide",
            "docs/deep/notes.txt": "notes",
            "Makefile": "all:",
        }
    )

    result = directory_builder.scan()

    assert [entry.name for entry in result.files] == ["Makefile", "a.PY", "b.txt", "notes.txt", "guide.md"]
    assert [entry.extension for entry in result.files] == ["", ".py", ".txt", ".txt", ".md"]
    assert all(entry.kind is FileKind.FILE for entry in result.files)
    root = directory_builder.path().resolve()
    assert result.subdirectories == [str(root / "docs"), str(root / "docs" / "deep")]


def test_scanner_skips_hidden_entries(directory_builder: DirectoryBuilder) -> None:
    directory_builder.write(
        {
            ".env": "SECRET=1",
            ".git/config": "[core]",
            "visible.txt": "hi",
            "nested/.cache/blob.bin": "x",
        }
    )

    result = directory_builder.scan()

    assert [entry.name for entry in result.files] == ["visible.txt"]
    assert all(".git" not in sub and ".cache" not in sub for sub in result.subdirectories)


def test_scanner_records_sizes_and_absolute_paths(directory_builder: DirectoryBuilder) -> None:
    directory_builder.write({"empty.dat": b"", "big.bin": 2048})

    result = directory_builder.scan()

    sizes = {entry.name: entry.size for entry in result.files}
    assert sizes == {"big.bin": 2048, "empty.dat": 0}
    assert all(Path(entry.path).is_absolute() for entry in result.files)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_scanner_does_not_follow_symlink_loops(directory_builder: DirectoryBuilder) -> None:
    directory_builder.write({"inner/file.txt": "data"})
    loop = directory_builder.path("inner/loop")
    try:
        os.symlink(directory_builder.path(), loop, target_is_directory=True)
    except OSError:
        pytest.skip("cannot create symlinks here")

    result = directory_builder.scan()

    assert [entry.name for entry in result.files] == ["file.txt", "loop"]


def test_scanner_rejects_missing_root(tmp_path: Path) -> None:
    with pytest.raises(ScanError):
        scan_directory(tmp_path / "missing")


def test_scanner_rejects_file_root(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")

    with pytest.raises(ScanError):
        DirectoryScanner().scan(target)


def test_empty_directory_scans_to_nothing(directory_builder: DirectoryBuilder) -> None:
    result = directory_builder.scan()

    assert result.files == []
    assert result.subdirectories == []


def test_pretty_lists_files_and_relative_subdirectories(directory_builder: DirectoryBuilder) -> None:
    directory_builder.write({"src/main.go": "package main", "README.md": "# Demo"})

    rendered = directory_builder.scan().pretty()

    assert "  - README.md (.md, 6 bytes)" in rendered
    assert "  - main.go (.go, 12 bytes)" in rendered
    assert rendered.rstrip().endswith("  - src")
