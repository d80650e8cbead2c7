"""Command-line front door for millercd.

Parses CLI options, loads configuration, and runs the interactive session.
The chosen directory is written to ``--output`` for the shell wrapper.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .config import NavigatorConfig, describe_config, load_navigator_config
from .errors import MillercdError
from .log import close_logging, init_logging
from .navigation import Navigator
from .session import Change, Outcome, run_session
from .shell import SHELLS, init_script, write_result
from .terminal import TerminalController

ERROR_PREFIX = "\x1b[31mError:\x1b[m"


def format_error(message: object) -> str:
    return f"{ERROR_PREFIX} {message}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="millercd",
        description="Browse directories in Miller columns and cd into the chosen one.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Starting directory. Defaults to current directory.")
    parser.add_argument("--output", metavar="FILE", help="Write the chosen path to FILE instead of stdout.")
    parser.add_argument("--init", choices=SHELLS, help="Print the shell integration function and exit.")
    parser.add_argument("--show-config", action="store_true", help="Print the effective configuration and exit.")
    parser.add_argument(
        "--view-file-contents",
        action="store_true",
        default=None,
        help="Preview file contents and allow descending into files.",
    )
    parser.add_argument("--show-index", action="store_true", default=None, help="Prefix rows with their index.")
    parser.add_argument("--style", default=None, help="Pygments style name for file contents.")
    parser.add_argument("--no-color", action="store_true", default=None, help="Disable color output.")
    return parser


def apply_cli_flags(config: NavigatorConfig, args: argparse.Namespace) -> NavigatorConfig:
    """Override ``config`` with flags that were given on the command line."""
    overrides: dict[str, object] = {}
    if args.view_file_contents:
        overrides["view_file_contents"] = True
    if args.show_index:
        overrides["show_index"] = True
    if args.no_color:
        overrides["no_color"] = True
    if args.style:
        overrides["style"] = args.style
    return replace(config, **overrides)


def resolve_start_path(raw: str | None, default_path: Path | None = None) -> Path:
    """Return the absolute starting directory or exit with an error."""
    if raw is not None:
        path = Path(raw)
    elif default_path is not None:
        path = default_path
    else:
        path = Path.cwd()
    if not path.exists():
        raise SystemExit(format_error(f"Path not found: {path}"))
    if not path.is_dir():
        raise SystemExit(format_error(f"Not a directory: {path}"))
    return path.resolve()


def open_terminal() -> TerminalController:
    return TerminalController(sys.stdin.fileno(), sys.stdout.fileno())


def report_outcome(outcome: Outcome, output: str | None, config: NavigatorConfig) -> None:
    """Hand the outcome path to the shell wrapper (or stdout)."""
    if output is None:
        print(outcome.path)
        return
    try:
        write_result(outcome.path, Path(output))
    except OSError as exc:
        raise SystemExit(format_error(f"cannot write {output}: {exc}")) from exc
    if config.print_pwd and isinstance(outcome, Change):
        print(outcome.path)


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and run a navigation session.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)

    if args.init is not None:
        sys.stdout.write(init_script(args.init))
        return

    try:
        config = apply_cli_flags(load_navigator_config(), args)
    except MillercdError as exc:
        raise SystemExit(format_error(exc)) from exc

    if args.show_config:
        for line in describe_config(config):
            print(line)
        return

    path = resolve_start_path(args.path, default_path)
    if not sys.stdin.isatty():
        raise SystemExit(format_error("stdin is not a terminal"))

    handler = None
    try:
        if config.log:
            handler = init_logging()
        navigator = Navigator.from_directory(path, config)
        outcome = run_session(navigator, open_terminal())
    except MillercdError as exc:
        raise SystemExit(format_error(exc)) from exc
    finally:
        if handler is not None:
            close_logging(handler)

    report_outcome(outcome, args.output, config)


if __name__ == "__main__":
    main()
