"""Selectable list backing each of the four navigator columns."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .entries import EntryRecord


class Pane:
    """Ordered records plus an optional cursor.

    ``select`` does not bounds-check: the navigator always derives indices from
    list lengths it already holds.
    """

    def __init__(self, entries: Sequence[EntryRecord], selected: int | None = None) -> None:
        self.entries: list[EntryRecord] = list(entries)
        self.selected = selected

    @classmethod
    def with_entries(cls, entries: Sequence[EntryRecord]) -> Pane:
        return cls(entries, None)

    @classmethod
    def with_entries_selecting(cls, entries: Sequence[EntryRecord], index: int | None) -> Pane:
        """Build a pane selecting ``index`` when it is in range, else unselected."""
        pane = cls(entries, None)
        if index is not None and 0 <= index < len(pane.entries):
            pane.selected = index
        return pane

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Pane(entries={len(self.entries)}, selected={self.selected!r})"

    def is_empty(self) -> bool:
        return not self.entries

    def next(self) -> int:
        """Move one row down, wrapping to the top; unset selects the first row."""
        if not self.entries:
            return 0
        if self.selected is None or self.selected >= len(self.entries) - 1:
            index = 0
        else:
            index = self.selected + 1
        self.selected = index
        return index

    def previous(self) -> int:
        """Move one row up, wrapping to the bottom; unset selects the first row."""
        if not self.entries:
            return 0
        if self.selected is None:
            index = 0
        elif self.selected == 0:
            index = len(self.entries) - 1
        else:
            index = self.selected - 1
        self.selected = index
        return index

    def select(self, index: int | None) -> None:
        self.selected = index

    def unselect(self) -> None:
        self.selected = None

    def selected_record(self) -> EntryRecord | None:
        if self.selected is None or not 0 <= self.selected < len(self.entries):
            return None
        return self.entries[self.selected]

    def reselected(self, index: int | None) -> Pane:
        """Return a copy sharing the same records with a different cursor."""
        return Pane(self.entries, index)

    def view(self) -> PaneView:
        return PaneView(entries=tuple(self.entries), selected=self.selected)


@dataclass(frozen=True)
class PaneView:
    """Immutable snapshot of a pane for renderers and tests."""

    entries: tuple[EntryRecord, ...]
    selected: int | None

    def selected_record(self) -> EntryRecord | None:
        if self.selected is None or not 0 <= self.selected < len(self.entries):
            return None
        return self.entries[self.selected]
