"""Search overlay: a filtered, separately-selectable view over the current pane."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from .entries import EntryRecord, TextLineEntry, entry_name
from .pane import Pane


def record_matches(record: EntryRecord, query: str) -> bool:
    """Case-sensitive substring match on line content or file name.

    Records without text or a path (search box, empty placeholder) never match.
    """
    entry = record.entry
    if isinstance(entry, TextLineEntry):
        return query in entry.content
    name = entry_name(entry)
    if name is None:
        return False
    return query in name


def filter_records(records: Sequence[EntryRecord], query: str) -> list[EntryRecord]:
    """Return matching records in source order, tagged with their source index."""
    return [
        replace(record, origin_index=idx)
        for idx, record in enumerate(records)
        if record_matches(record, query)
    ]


@dataclass
class SearchState:
    """Query text plus the filtered result list and its own cursor.

    There is no stored mode flag: the overlay is active exactly when ``query``
    is non-empty.
    """

    query: str = ""
    results: Pane = field(default_factory=lambda: Pane([]))

    @property
    def active(self) -> bool:
        return bool(self.query)

    @property
    def filtered(self) -> list[EntryRecord]:
        return self.results.entries

    @property
    def selected(self) -> int | None:
        return self.results.selected

    def selected_record(self) -> EntryRecord | None:
        return self.results.selected_record()

    def refiltered(self, query: str, records: Sequence[EntryRecord]) -> SearchState:
        """Return the state for ``query`` over ``records``.

        An empty query clears the overlay. Otherwise the cursor is kept when it
        still fits the new result list and reset to the first row when it does
        not.
        """
        if not query:
            return SearchState()
        filtered = filter_records(records, query)
        previous = self.results.selected
        if not filtered:
            selected = None
        elif previous is None or previous >= len(filtered):
            selected = 0
        else:
            selected = previous
        return SearchState(query=query, results=Pane(filtered, selected))
