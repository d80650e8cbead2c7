"""Browsable entry datatypes and the filesystem reads that produce them.

Entries form a closed union of frozen dataclasses. Path-bearing variants come
from directory listings; text lines come from reading a file for content view;
the search-box and empty placeholders never touch the filesystem.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

from .errors import FileSystemError

logger = logging.getLogger(__name__)

SYMLINK_TO_DIRECTORY = "directory"
SYMLINK_TO_FILE = "file"


@dataclass(frozen=True)
class DirectoryEntry:
    path: Path


@dataclass(frozen=True)
class FileEntry:
    path: Path


@dataclass(frozen=True)
class SymlinkEntry:
    """Symbolic link classified by the type of the entry it points to."""

    path: Path
    target: str = SYMLINK_TO_FILE


@dataclass(frozen=True)
class UnknownEntry:
    """Path that exists but is neither a directory nor a regular file."""

    path: Path


@dataclass(frozen=True)
class TextLineEntry:
    content: str


@dataclass(frozen=True)
class SearchQueryEntry:
    text: str


@dataclass(frozen=True)
class EmptyEntry:
    """Placeholder for an unreadable, empty, or non-directory listing."""


PathEntry = DirectoryEntry | FileEntry | SymlinkEntry | UnknownEntry
Entry = PathEntry | TextLineEntry | SearchQueryEntry | EmptyEntry


@dataclass(frozen=True)
class EntryRecord:
    """One pane row.

    ``origin_index`` is the row's position in the unfiltered list it was
    derived from. Directory listings leave it unset; text-line enumeration and
    search filtering set it.
    """

    entry: Entry
    origin_index: int | None = None


EMPTY_RECORD = EntryRecord(EmptyEntry())


def entry_path(entry: Entry) -> Path | None:
    """Return the filesystem path of a path-bearing entry, else ``None``."""
    if isinstance(entry, (DirectoryEntry, FileEntry, SymlinkEntry, UnknownEntry)):
        return entry.path
    return None


def entry_name(entry: Entry) -> str | None:
    path = entry_path(entry)
    if path is None:
        return None
    return path.name or str(path)


def entry_label(entry: Entry) -> str:
    """Return the text a pane shows for ``entry``."""
    if isinstance(entry, TextLineEntry):
        return entry.content
    if isinstance(entry, SearchQueryEntry):
        return entry.text
    if isinstance(entry, EmptyEntry):
        return ""
    return entry_name(entry) or ""


def is_directory_like(entry: Entry) -> bool:
    if isinstance(entry, DirectoryEntry):
        return True
    return isinstance(entry, SymlinkEntry) and entry.target == SYMLINK_TO_DIRECTORY


def is_file_like(entry: Entry) -> bool:
    if isinstance(entry, FileEntry):
        return True
    return isinstance(entry, SymlinkEntry) and entry.target == SYMLINK_TO_FILE


def classify_path(path: Path) -> PathEntry:
    """Classify one path without raising.

    Symlinks are followed one step to classify their target; anything whose
    metadata cannot be read degrades to ``UnknownEntry``.
    """
    try:
        link_stat = os.lstat(path)
    except OSError:
        return UnknownEntry(path)

    if stat.S_ISLNK(link_stat.st_mode):
        try:
            target_stat = os.stat(path)
        except OSError:
            return UnknownEntry(path)
        if stat.S_ISDIR(target_stat.st_mode):
            return SymlinkEntry(path, SYMLINK_TO_DIRECTORY)
        if stat.S_ISREG(target_stat.st_mode):
            return SymlinkEntry(path, SYMLINK_TO_FILE)
        return UnknownEntry(path)

    if stat.S_ISDIR(link_stat.st_mode):
        return DirectoryEntry(path)
    if stat.S_ISREG(link_stat.st_mode):
        return FileEntry(path)
    return UnknownEntry(path)


def _listing_sort_key(record: EntryRecord) -> tuple[bool, str, str]:
    name = entry_name(record.entry) or ""
    return (not is_directory_like(record.entry), name.casefold(), name)


def list_directory(path: Path) -> list[EntryRecord]:
    """List and classify the immediate children of ``path``.

    Directories sort first, then names case-insensitively, so index-based
    selection survives re-reads of the same directory. Raises
    ``FileSystemError`` only when the directory itself cannot be scanned.
    """
    try:
        with os.scandir(path) as children:
            names = [child.name for child in children]
    except (PermissionError, OSError) as exc:
        raise FileSystemError(f"cannot read directory {path}: {exc}", path) from exc

    records = [EntryRecord(classify_path(path / name)) for name in names]
    records.sort(key=_listing_sort_key)
    return records


def load_records(path: Path | None) -> list[EntryRecord]:
    """Return a pane-ready listing for ``path``; never empty, never raises.

    ``None`` stands for the level above the filesystem root.
    """
    if path is None:
        return [EMPTY_RECORD]
    try:
        records = list_directory(path)
    except FileSystemError as exc:
        logger.debug("listing degraded to empty: %s", exc)
        return [EMPTY_RECORD]
    return records or [EMPTY_RECORD]


def split_text_lines(text: str) -> list[str]:
    """Split on ``\\n``, dropping one trailing ``\\r`` per line and the final empty line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_text_lines(path: Path) -> list[EntryRecord]:
    """Enumerate a UTF-8 text file as ``TextLineEntry`` records.

    Binary, unreadable, and zero-line files give ``[Empty]``.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("content view degraded to empty for %s: %s", path, exc)
        return [EMPTY_RECORD]
    records = [
        EntryRecord(TextLineEntry(line), origin_index=idx)
        for idx, line in enumerate(split_text_lines(text))
    ]
    return records or [EMPTY_RECORD]


def materialize_children(record: EntryRecord, view_file_contents: bool) -> list[EntryRecord]:
    """Build the descendant preview for ``record``.

    Directories list their children; files list their lines when content view
    is enabled; every other entry, and every failure, yields ``[Empty]``.
    """
    entry = record.entry
    if isinstance(entry, SymlinkEntry):
        try:
            resolved = entry.path.resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            logger.debug("symlink resolution failed for %s: %s", entry.path, exc)
            return [EMPTY_RECORD]
        target = classify_path(resolved)
        if isinstance(target, DirectoryEntry):
            # List through the link so child paths stay under the link path.
            return load_records(entry.path)
        if isinstance(target, FileEntry) and view_file_contents:
            return read_text_lines(resolved)
        return [EMPTY_RECORD]
    if isinstance(entry, DirectoryEntry):
        return load_records(entry.path)
    if isinstance(entry, FileEntry) and view_file_contents:
        return read_text_lines(entry.path)
    return [EMPTY_RECORD]


__all__ = [
    "SYMLINK_TO_DIRECTORY",
    "SYMLINK_TO_FILE",
    "DirectoryEntry",
    "FileEntry",
    "SymlinkEntry",
    "UnknownEntry",
    "TextLineEntry",
    "SearchQueryEntry",
    "EmptyEntry",
    "PathEntry",
    "Entry",
    "EntryRecord",
    "EMPTY_RECORD",
    "entry_path",
    "entry_name",
    "entry_label",
    "is_directory_like",
    "is_file_like",
    "classify_path",
    "list_directory",
    "load_records",
    "split_text_lines",
    "read_text_lines",
    "materialize_children",
]
