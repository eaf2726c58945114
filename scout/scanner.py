"""Directory walking and file descriptor collection."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from .logging import get_logger
from .models import DirectoryScanResult, FileDescriptor, FileKind

logger = get_logger("scanner")


class ScanError(RuntimeError):
    """Raised when the scan root cannot be opened or listed."""


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def _entry_size(entry: os.DirEntry) -> int:
    try:
        return entry.stat().st_size
    except OSError as exc:
        logger.debug("Unable to stat %s: %s", entry.path, exc)
        return 0


def _is_directory(entry: os.DirEntry) -> bool:
    # Symlinked directories are recorded as files so link loops cannot recurse.
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def _list_entries(directory: str) -> List[os.DirEntry]:
    with os.scandir(directory) as iterator:
        return sorted(iterator, key=lambda entry: entry.name)


class DirectoryScanner:
    """Walks a directory tree depth-first in lexical order."""

    def scan(self, root: str | os.PathLike[str]) -> DirectoryScanResult:
        """Return every non-hidden file and subdirectory beneath ``root``."""
        root_path = Path(root).expanduser()
        try:
            root_path = root_path.resolve()
        except OSError as exc:
            raise ScanError(f"Unable to resolve directory {root}: {exc}") from exc
        if not root_path.exists():
            raise ScanError(f"Directory not found: {root}")
        if not root_path.is_dir():
            raise ScanError(f"Path is not a directory: {root}")

        try:
            entries = _list_entries(str(root_path))
        except OSError as exc:
            raise ScanError(f"Unable to read directory {root_path}: {exc}") from exc

        result = DirectoryScanResult(root=str(root_path))
        self._visit(entries, result)
        logger.debug(
            "Scanned %s: %d files, %d subdirectories",
            root_path,
            len(result.files),
            len(result.subdirectories),
        )
        return result

    def _visit(self, entries: List[os.DirEntry], result: DirectoryScanResult) -> None:
        for entry in entries:
            if _is_hidden(entry.name):
                continue

            if _is_directory(entry):
                result.subdirectories.append(entry.path)
                try:
                    children = _list_entries(entry.path)
                except OSError as exc:
                    logger.debug("Skipping unreadable directory %s: %s", entry.path, exc)
                    continue
                self._visit(children, result)
                continue

            result.files.append(
                FileDescriptor(
                    name=entry.name,
                    path=entry.path,
                    kind=FileKind.FILE,
                    extension=os.path.splitext(entry.name)[1].lower(),
                    size=_entry_size(entry),
                )
            )


def scan_directory(root: str | os.PathLike[str]) -> DirectoryScanResult:
    """Convenience wrapper around :class:`DirectoryScanner`."""
    return DirectoryScanner().scan(root)


__all__ = ["DirectoryScanner", "ScanError", "scan_directory"]
