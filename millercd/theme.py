"""ANSI palettes for the column view.

Entry colours, selection markers, and chrome styles. Syntax highlighting of
file contents uses a Pygments style configured separately.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    reverse: str
    divider: str
    header: str
    background: str
    entry_directory: str
    entry_symlink_directory: str
    entry_symlink_file: str
    entry_unknown: str
    entry_search: str
    entry_plain: str
    selected_current: str
    selected_other: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    divider="\033[2m",
    header="\033[1;33m",
    background="\033[48;2;10;10;10m",
    entry_directory="\033[1;34m",
    entry_symlink_directory="\033[36m",
    entry_symlink_file="\033[96m",
    entry_unknown="\033[31m",
    entry_search="\033[32m",
    entry_plain="\033[90m",
    selected_current="\033[1;4m",
    selected_other="\033[35m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    divider="",
    header="",
    background="",
    entry_directory="",
    entry_symlink_directory="",
    entry_symlink_file="",
    entry_unknown="",
    entry_search="",
    entry_plain="",
    selected_current="",
    selected_other="",
)


def resolve_theme(*, no_color: bool = False) -> UITheme:
    """Return the palette for the requested colour mode."""
    if no_color:
        return PLAIN_THEME
    return DEFAULT_THEME


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "resolve_theme",
]
