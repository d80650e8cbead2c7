"""Navigator configuration: persisted JSON file plus environment overrides.

The JSON file lives under the platform config directory. File access is
defensive: a missing or malformed file falls back to defaults. Environment
values are strict because they are set deliberately by shell integration.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path

from platformdirs import user_config_dir

from .errors import ConfigError

APP_NAME = "millercd"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
ENV_PREFIX = "MILLERCD_"

# Environment variable suffix -> config field for the integer switches.
ENV_SWITCHES: dict[str, str] = {
    "VIEW_FILE_CONTENTS": "view_file_contents",
    "SHOW_INDEX": "show_index",
    "SET_BG": "set_background",
    "LOG": "log",
    "PWD": "print_pwd",
}


@dataclass(frozen=True)
class NavigatorConfig:
    """Immutable options handed to the navigator and renderer at startup.

    ``view_file_contents`` changes navigation (descending into files). The
    remaining fields only affect rendering, logging, and the CLI.
    """

    view_file_contents: bool = False
    show_index: bool = False
    set_background: bool = False
    log: bool = False
    print_pwd: bool = False
    style: str = "monokai"
    no_color: bool = False


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _config_from_file(data: Mapping[str, object]) -> NavigatorConfig:
    """Apply type-checked file values over defaults; wrong types are ignored."""
    defaults = NavigatorConfig()
    values: dict[str, object] = {}
    for config_field in fields(NavigatorConfig):
        raw = data.get(config_field.name)
        default = getattr(defaults, config_field.name)
        if isinstance(default, bool):
            if isinstance(raw, bool):
                values[config_field.name] = raw
        elif isinstance(raw, str) and raw.strip():
            values[config_field.name] = raw.strip()
    return replace(defaults, **values)


def _parse_switch(name: str, raw: str) -> bool:
    """Parse an integer switch where ``1`` enables and any other integer disables."""
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc
    return value == 1


def apply_environment(config: NavigatorConfig, environ: Mapping[str, str]) -> NavigatorConfig:
    """Override ``config`` with ``MILLERCD_*`` variables present in ``environ``.

    Raises ``ConfigError`` for switch values that are not integers.
    """
    overrides: dict[str, object] = {}
    for suffix, field_name in ENV_SWITCHES.items():
        name = ENV_PREFIX + suffix
        raw = environ.get(name)
        if raw is None or raw == "":
            continue
        overrides[field_name] = _parse_switch(name, raw)
    style = environ.get(ENV_PREFIX + "STYLE", "").strip()
    if style:
        overrides["style"] = style
    if environ.get("NO_COLOR"):
        overrides["no_color"] = True
    return replace(config, **overrides)


def load_navigator_config(environ: Mapping[str, str] | None = None) -> NavigatorConfig:
    """Build the effective config from the JSON file and the environment."""
    if environ is None:
        environ = os.environ
    return apply_environment(_config_from_file(load_config()), environ)


def describe_config(config: NavigatorConfig) -> list[str]:
    """Return ``NAME = value`` lines for every option, as ``--show-config`` prints them."""
    lines: list[str] = []
    switch_names = {field_name: ENV_PREFIX + suffix for suffix, field_name in ENV_SWITCHES.items()}
    switch_names["style"] = ENV_PREFIX + "STYLE"
    switch_names["no_color"] = "NO_COLOR"
    for config_field in fields(NavigatorConfig):
        value = getattr(config, config_field.name)
        name = switch_names.get(config_field.name, config_field.name)
        if isinstance(value, bool):
            lines.append(f"{name} = {int(value)}")
        else:
            lines.append(f"{name} = {value}")
    lines.append(f"config file = {CONFIG_PATH}")
    return lines
