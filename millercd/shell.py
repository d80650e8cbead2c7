"""Shell integration: wrapper functions that ``cd`` into the chosen directory.

A child process cannot change its parent shell's directory, so the wrapper
runs ``millercd --output <temp file>`` and then changes into whatever path the
session wrote there.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

TEMP_FILENAME = "_millercd.txt"
TEMP_PATH = Path(tempfile.gettempdir()) / TEMP_FILENAME
FUNCTION_NAME = "mcd"

_POSIX_TEMPLATE = """\
{name}() {{
  command millercd --output '{temp_path}' "$@"
  if [ -f '{temp_path}' ]; then
    cd -- "$(cat '{temp_path}')" || return
    rm -f '{temp_path}'
  fi
}}
"""

_FISH_TEMPLATE = """\
function {name}
  command millercd --output '{temp_path}' $argv
  if test -f '{temp_path}'
    cd (cat '{temp_path}')
    rm -f '{temp_path}'
  end
end
"""

_POWERSHELL_TEMPLATE = """\
function {name} {{
  millercd --output '{temp_path}' @args
  if (Test-Path '{temp_path}') {{
    Set-Location (Get-Content -Raw '{temp_path}')
    Remove-Item '{temp_path}'
  }}
}}
"""

SHELL_TEMPLATES: dict[str, str] = {
    "bash": _POSIX_TEMPLATE,
    "zsh": _POSIX_TEMPLATE,
    "fish": _FISH_TEMPLATE,
    "powershell": _POWERSHELL_TEMPLATE,
}
SHELLS: tuple[str, ...] = tuple(SHELL_TEMPLATES)


def init_script(shell: str, temp_path: Path = TEMP_PATH) -> str:
    """Return the wrapper function source for ``shell``.

    Raises ``ValueError`` for shells without a template.
    """
    template = SHELL_TEMPLATES.get(shell)
    if template is None:
        raise ValueError(f"unsupported shell: {shell!r} (choose from {', '.join(SHELLS)})")
    return template.format(name=FUNCTION_NAME, temp_path=temp_path)


def write_result(path: Path, temp_path: Path = TEMP_PATH) -> None:
    """Write ``path`` to ``temp_path`` for the wrapper to pick up, without a newline."""
    temp_path.write_text(str(path), encoding="utf-8")
