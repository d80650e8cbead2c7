"""Miller-column navigation state machine.

``Navigator`` owns four panes (two ancestor levels, the current directory, and
a descendant preview), the working-directory path, and the search overlay.
Every transition computes its new panes before assigning any of them, so an
error raised mid-transition leaves the navigator exactly as it was.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .config import NavigatorConfig
from .entries import (
    EMPTY_RECORD,
    EntryRecord,
    entry_path,
    is_directory_like,
    is_file_like,
    load_records,
    materialize_children,
)
from .errors import FileSystemError, InvalidSelectionError
from .pane import Pane, PaneView
from .search import SearchState

logger = logging.getLogger(__name__)

MODE_NORMAL = "normal"
MODE_SEARCH = "search"
PAGE_JUMP = 4


def parent_of(path: Path | None) -> Path | None:
    """Return the parent directory, or ``None`` at (and above) the filesystem root."""
    if path is None:
        return None
    parent = path.parent
    if parent == path:
        return None
    return parent


def generate_index(records: Sequence[EntryRecord], target: Path | None) -> int:
    """Return the index of the first record whose path is ``target``, else 0."""
    if target is None:
        return 0
    for idx, record in enumerate(records):
        if entry_path(record.entry) == target:
            return idx
    return 0


@dataclass(frozen=True)
class NavigatorView:
    """Read-only snapshot of everything a renderer needs for one frame.

    ``current`` is the authoritative list: the current pane in normal mode and
    the filtered search results in search mode.
    """

    working_directory: str
    query: str
    search_active: bool
    content_view: bool
    ancestor2: PaneView
    ancestor1: PaneView
    current: PaneView
    preview: PaneView


class Navigator:
    def __init__(
        self,
        working_directory: Path,
        grandparent_path: Path | None,
        ancestor2: Pane,
        ancestor1: Pane,
        current: Pane,
        preview: Pane,
        config: NavigatorConfig | None = None,
        search: SearchState | None = None,
    ) -> None:
        self.working_directory = working_directory
        self.grandparent_path = grandparent_path
        self.ancestor2 = ancestor2
        self.ancestor1 = ancestor1
        self.current = current
        self.preview = preview
        self.config = config if config is not None else NavigatorConfig()
        self.search = search if search is not None else SearchState()

    @classmethod
    def from_directory(cls, path: Path, config: NavigatorConfig | None = None) -> Navigator:
        """Build the initial state for ``path``.

        Ancestor panes are pre-selected on the entries leading to ``path`` and
        the current pane starts on its first row.
        """
        config = config if config is not None else NavigatorConfig()
        working_directory = Path(path)
        parent_path = parent_of(working_directory)
        grandparent_path = parent_of(parent_path)

        records = load_records(working_directory)
        parent_records = load_records(parent_path)
        grandparent_records = load_records(grandparent_path)

        current = Pane.with_entries_selecting(records, 0)
        first = records[0]
        preview = Pane.with_entries(materialize_children(first, config.view_file_contents))
        return cls(
            working_directory=working_directory,
            grandparent_path=grandparent_path,
            ancestor2=Pane.with_entries_selecting(
                grandparent_records,
                generate_index(grandparent_records, parent_path),
            ),
            ancestor1=Pane.with_entries_selecting(
                parent_records,
                generate_index(parent_records, working_directory),
            ),
            current=current,
            preview=preview,
            config=config,
        )

    @property
    def mode(self) -> str:
        return MODE_SEARCH if self.search.query else MODE_NORMAL

    def _active_pane(self) -> Pane:
        if self.mode == MODE_NORMAL:
            return self.current
        return self.search.results

    def _active_index(self) -> int:
        selected = self._active_pane().selected
        return 0 if selected is None else selected

    def _selected_record(self) -> EntryRecord:
        pane = self._active_pane()
        record = pane.selected_record()
        if record is None:
            raise InvalidSelectionError(pane.selected)
        return record

    def _demoted_current_index(self) -> int | None:
        """Index of the selection in ``current`` as seen from one level up.

        In search mode this maps the filtered cursor back through the selected
        record's ``origin_index``.
        """
        if self.mode == MODE_NORMAL:
            return self._active_index()
        record = self.search.selected_record()
        if record is not None and record.origin_index is not None:
            return record.origin_index
        return self.search.selected

    def is_content_view(self) -> bool:
        """Return whether ``current`` holds the lines of a file rather than a listing."""
        record = self.ancestor1.selected_record()
        return record is not None and is_file_like(record.entry)

    def _build_preview(self, index: int) -> Pane:
        active = self._active_pane()
        if active.is_empty():
            return Pane([])
        tentative = self.preview.selected
        record = active.entries[index] if 0 <= index < len(active) else EMPTY_RECORD
        preview = Pane.with_entries_selecting(
            materialize_children(record, self.config.view_file_contents),
            tentative,
        )
        if is_file_like(record.entry):
            preview.unselect()
        return preview

    def recompute_descendant_preview(self, index: int) -> None:
        """Rebuild the preview pane for the entry at ``index`` of the authoritative list.

        The previous preview cursor is carried over as a tentative selection;
        file entries never keep one.
        """
        self.preview = self._build_preview(index)

    def _jump_to(self, index: int) -> None:
        self._active_pane().select(index)
        self.recompute_descendant_preview(index)

    def move_next(self) -> None:
        pane = self._active_pane()
        if pane.is_empty():
            return
        self.recompute_descendant_preview(pane.next())

    def move_previous(self) -> None:
        pane = self._active_pane()
        if pane.is_empty():
            return
        self.recompute_descendant_preview(pane.previous())

    def move_home(self) -> None:
        if self._active_pane().is_empty():
            return
        self._jump_to(0)

    def move_end(self) -> None:
        pane = self._active_pane()
        if pane.is_empty():
            return
        self._jump_to(len(pane) - 1)

    def move_page_down(self) -> None:
        pane = self._active_pane()
        if pane.is_empty():
            return
        last = len(pane) - 1
        self._jump_to(min(last, self._active_index() + PAGE_JUMP))

    def move_page_up(self) -> None:
        if self._active_pane().is_empty():
            return
        self._jump_to(max(0, self._active_index() - PAGE_JUMP))

    def move_page(self, direction: int) -> None:
        if direction > 0:
            self.move_page_down()
        elif direction < 0:
            self.move_page_up()

    def move_child(self) -> None:
        """Descend into the selected directory, or into a file's lines.

        Files are entered only when content view is enabled; every other entry
        is a no-op. Raises ``InvalidSelectionError`` when nothing is selected.
        """
        if self._active_pane().is_empty() or self.preview.is_empty():
            return

        selected = self._selected_record()
        entry = selected.entry
        if is_directory_like(entry):
            new_working_directory = entry.path
        elif is_file_like(entry) and self.config.view_file_contents:
            self.move_content(selected)
            return
        else:
            return

        # Keep the preview cursor when it points at a real row so repeated
        # descents continue where the preview left off.
        tentative = self.preview.selected
        if tentative is not None and 0 <= tentative < len(self.preview):
            new_index = tentative
        else:
            new_index = 0
        grandchildren = materialize_children(
            self.preview.entries[new_index],
            self.config.view_file_contents,
        )

        new_ancestor1 = self.current.reselected(self._demoted_current_index())
        new_current = self.preview.reselected(new_index)
        new_grandparent_path = parent_of(self.working_directory)

        logger.debug("descend %s -> %s", self.working_directory, new_working_directory)
        self.ancestor2 = self.ancestor1
        self.ancestor1 = new_ancestor1
        self.current = new_current
        self.preview = Pane.with_entries(grandchildren)
        self.grandparent_path = new_grandparent_path
        self.working_directory = new_working_directory
        self.search = SearchState()

    def move_content(self, record: EntryRecord) -> None:
        """Enter content view: browse the lines of the file ``record`` points at."""
        path = entry_path(record.entry)
        if path is None:
            raise FileSystemError("content item has no path")

        lines = materialize_children(record, view_file_contents=True)
        new_ancestor1 = self.current.reselected(self._demoted_current_index())
        new_grandparent_path = parent_of(self.working_directory)

        logger.debug("content view %s", path)
        self.ancestor2 = self.ancestor1
        self.ancestor1 = new_ancestor1
        self.current = Pane.with_entries_selecting(lines, 0)
        self.preview = Pane.with_entries([EMPTY_RECORD])
        self.grandparent_path = new_grandparent_path
        self.working_directory = path
        self.search = SearchState()

    def move_parent(self) -> None:
        """Ascend one level, loading the new great-ancestor listing from disk.

        No-op at the filesystem root.
        """
        new_working_directory = parent_of(self.working_directory)
        if new_working_directory is None:
            return

        new_grandparent_path = parent_of(self.grandparent_path)
        new_grandparent_records = load_records(new_grandparent_path)

        if self.is_content_view():
            # Line numbers mean nothing once the file is only a preview.
            preview_index = None
        else:
            preview_index = self._demoted_current_index()
            if preview_index is None:
                # A search without results keeps the cursor of the listing.
                preview_index = 0 if self.current.selected is None else self.current.selected
        new_ancestor2 = Pane.with_entries_selecting(
            new_grandparent_records,
            generate_index(new_grandparent_records, self.grandparent_path),
        )

        logger.debug("ascend %s -> %s", self.working_directory, new_working_directory)
        self.preview = self.current.reselected(preview_index)
        self.current = self.ancestor1
        self.ancestor1 = self.ancestor2
        self.ancestor2 = new_ancestor2
        self.grandparent_path = new_grandparent_path
        self.working_directory = new_working_directory
        self.search = SearchState()

    def update_search_query(self, text: str) -> None:
        """Replace the query, refilter ``current``, and refresh the preview.

        Clearing the query returns to normal mode with the current pane
        selecting the row the search cursor was on.
        """
        new_search = self.search.refiltered(text, self.current.entries)
        restore_index: int | None = None
        if not new_search.active:
            record = self.search.selected_record()
            if record is not None and record.origin_index is not None:
                restore_index = record.origin_index

        self.search = new_search
        if restore_index is not None and restore_index < len(self.current):
            self.current.select(restore_index)
        self.recompute_descendant_preview(self._active_index())

    def append_search_char(self, char: str) -> None:
        self.update_search_query(self.search.query + char)

    def backspace_search(self) -> None:
        self.update_search_query(self.search.query[:-1])

    def clear_search(self) -> None:
        self.update_search_query("")

    def view(self) -> NavigatorView:
        return NavigatorView(
            working_directory=str(self.working_directory),
            query=self.search.query,
            search_active=self.mode == MODE_SEARCH,
            content_view=self.is_content_view(),
            ancestor2=self.ancestor2.view(),
            ancestor1=self.ancestor1.view(),
            current=self._active_pane().view(),
            preview=self.preview.view(),
        )
