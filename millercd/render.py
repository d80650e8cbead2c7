"""Frame composition for the four-column view.

``build_frame`` turns a ``NavigatorView`` into a list of terminal rows and has
no side effects; ``render_frame`` writes those rows to the terminal.
"""

from __future__ import annotations

from pathlib import Path

from .ansi import fit_ansi_line
from .config import NavigatorConfig
from .entries import (
    DirectoryEntry,
    EntryRecord,
    SearchQueryEntry,
    SymlinkEntry,
    SYMLINK_TO_DIRECTORY,
    UnknownEntry,
    entry_label,
    entry_path,
    is_file_like,
)
from .highlight import highlight_lines
from .navigation import NavigatorView
from .pane import PaneView
from .theme import UITheme

SELECTION_MARKER = "> "
DIVIDER = "│"
STATUS_HINTS = "j/k move  h/l out/in  C-s search  Enter cd  V edit  q quit"


def column_widths(width: int) -> tuple[int, int, int, int]:
    """Split ``width`` into 20% / 20% / remainder / 30% around three dividers."""
    usable = max(0, width - 3)
    grandparent = usable * 20 // 100
    parent = usable * 20 // 100
    preview = usable * 30 // 100
    current = usable - grandparent - parent - preview
    return grandparent, parent, current, preview


def scroll_start(selected: int | None, total: int, rows: int) -> int:
    """Return the first visible row so that ``selected`` stays on screen."""
    if rows <= 0 or selected is None or total <= rows:
        return 0
    if selected < rows:
        return 0
    return min(selected - rows + 1, total - rows)


def entry_style(record: EntryRecord, theme: UITheme) -> str:
    entry = record.entry
    if isinstance(entry, DirectoryEntry):
        return theme.entry_directory
    if isinstance(entry, SymlinkEntry):
        if entry.target == SYMLINK_TO_DIRECTORY:
            return theme.entry_symlink_directory
        return theme.entry_symlink_file
    if isinstance(entry, UnknownEntry):
        return theme.entry_unknown
    if isinstance(entry, SearchQueryEntry):
        return theme.entry_search
    return theme.entry_plain


def _shows_index(pane: PaneView, config: NavigatorConfig) -> bool:
    if not config.show_index or not pane.entries:
        return False
    return not isinstance(pane.entries[0].entry, SearchQueryEntry)


def format_row(
    record: EntryRecord,
    position: int,
    *,
    label: str | None = None,
    selected: bool,
    is_current: bool,
    show_index: bool,
    theme: UITheme,
) -> str:
    """Render one pane row (without padding).

    ``label`` overrides the plain entry text, e.g. with syntax-coloured output.
    """
    text = entry_label(record.entry) if label is None else label
    if show_index:
        number = record.origin_index if record.origin_index is not None else position
        text = f"{number + 1} {text}"

    style = entry_style(record, theme)
    if selected:
        style += theme.selected_current if is_current else theme.selected_other
    row = f"{style}{text}{theme.reset}" if style else text
    if is_current:
        row = (SELECTION_MARKER if selected else " " * len(SELECTION_MARKER)) + row
    return row


def _highlighted_labels(
    pane: PaneView,
    filename: str | None,
    config: NavigatorConfig,
) -> list[str] | None:
    if filename is None or config.no_color or not pane.entries:
        return None
    if any(record.origin_index is None for record in pane.entries):
        return None
    lines = tuple(entry_label(record.entry) for record in pane.entries)
    return list(highlight_lines(lines, filename, config.style))


def render_column(
    pane: PaneView,
    width: int,
    rows: int,
    *,
    is_current: bool,
    config: NavigatorConfig,
    theme: UITheme,
    labels: list[str] | None = None,
) -> list[str]:
    """Return exactly ``rows`` cells of ``width`` columns for one pane."""
    start = scroll_start(pane.selected, len(pane.entries), rows)
    show_index = _shows_index(pane, config)
    cells: list[str] = []
    for position in range(start, min(len(pane.entries), start + rows)):
        row = format_row(
            pane.entries[position],
            position,
            label=labels[position] if labels is not None else None,
            selected=position == pane.selected,
            is_current=is_current,
            show_index=show_index,
            theme=theme,
        )
        cells.append(fit_ansi_line(row, width))
    cells.extend(" " * max(0, width) for _ in range(rows - len(cells)))
    return cells


def build_header(view: NavigatorView, width: int, theme: UITheme) -> str:
    """Working directory on the left, search box on the right."""
    search = format_row(
        EntryRecord(SearchQueryEntry(view.query)),
        0,
        selected=view.search_active,
        is_current=True,
        show_index=False,
        theme=theme,
    )
    search_width = min(max(12, width * 20 // 100), width)
    left_width = width - search_width - 1
    if left_width <= 0:
        return fit_ansi_line(search, width)
    left = f"{theme.header}{view.working_directory}{theme.reset}" if theme.header else view.working_directory
    return fit_ansi_line(left, left_width) + " " + fit_ansi_line(search, search_width)


def build_status_line(view: NavigatorView, width: int, theme: UITheme) -> str:
    total = len(view.current.entries)
    position = 0 if view.current.selected is None else view.current.selected + 1
    right = f"{position}/{total}"
    usable = max(0, width)
    if usable <= len(right):
        text = right[-usable:] if usable else ""
    else:
        left = STATUS_HINTS[: max(0, usable - len(right) - 1)]
        text = left + " " * (usable - len(left) - len(right)) + right
    return f"{theme.reverse}{text}{theme.reset}" if theme.reverse else text


def _with_background(row: str, theme: UITheme) -> str:
    if not theme.background:
        return row
    return theme.background + row.replace(theme.reset, theme.reset + theme.background) + theme.reset


def build_frame(
    view: NavigatorView,
    width: int,
    height: int,
    config: NavigatorConfig,
    theme: UITheme,
) -> list[str]:
    """Compose the full screen as ``height`` rows of ``width`` columns."""
    if width <= 0 or height <= 0:
        return []
    body_rows = max(0, height - 2)
    widths = column_widths(width)

    current_labels = None
    if view.content_view and not view.search_active:
        current_labels = _highlighted_labels(view.current, Path(view.working_directory).name, config)
    preview_labels = None
    selected = view.current.selected_record()
    if selected is not None and is_file_like(selected.entry):
        path = entry_path(selected.entry)
        preview_labels = _highlighted_labels(view.preview, path.name if path else None, config)

    columns = [
        render_column(view.ancestor2, widths[0], body_rows, is_current=False, config=config, theme=theme),
        render_column(view.ancestor1, widths[1], body_rows, is_current=False, config=config, theme=theme),
        render_column(
            view.current,
            widths[2],
            body_rows,
            is_current=True,
            config=config,
            theme=theme,
            labels=current_labels,
        ),
        render_column(
            view.preview,
            widths[3],
            body_rows,
            is_current=False,
            config=config,
            theme=theme,
            labels=preview_labels,
        ),
    ]
    divider = f"{theme.divider}{DIVIDER}{theme.reset}" if theme.divider else DIVIDER

    rows = [build_header(view, width, theme)]
    for row_idx in range(body_rows):
        rows.append(divider.join(column[row_idx] for column in columns))
    rows.append(build_status_line(view, width, theme))
    rows = rows[:height]
    if config.set_background:
        rows = [_with_background(row, theme) for row in rows]
    return rows


def render_frame(rows: list[str], write) -> None:
    """Clear the screen and emit ``rows`` through ``write``."""
    write("\033[H\033[J" + "\r\n".join(rows))


__all__ = [
    "build_frame",
    "build_header",
    "build_status_line",
    "column_widths",
    "entry_style",
    "format_row",
    "render_column",
    "render_frame",
    "scroll_start",
]
