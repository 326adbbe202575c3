"""Command-line front door for cliui.

Parses CLI options, merges them over the persisted config, sets up logging,
then hands the terminal to the interactive browser.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from .config import Settings, load_settings
from .logs import configure_logging, default_log_path
from .theme import available_theme_names

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cliui",
        description="Browse drives and directories in the terminal, with a built-in line editor.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to start in. Defaults to the desktop view.")
    parser.add_argument("--page-size", type=_positive_int, default=None, help="Entries per page.")
    parser.add_argument("--wrap-width", type=_positive_int, default=None, help="Editor soft-wrap width.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--show-hidden", action="store_true", help="List dot-files and dot-directories.")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, type=str.upper, help="Log verbosity.")
    parser.add_argument("--log-file", type=Path, default=None, help=f"Log file (default: {default_log_path()}).")
    return parser


def resolve_settings(args: argparse.Namespace, base: Settings) -> Settings:
    """Overlay explicit CLI options on top of the persisted settings."""
    overrides: dict[str, object] = {}
    if args.page_size is not None:
        overrides["page_size"] = args.page_size
    if args.wrap_width is not None:
        overrides["wrap_width"] = args.wrap_width
    if args.theme is not None:
        overrides["theme"] = args.theme
    if args.no_color:
        overrides["no_color"] = True
    if args.show_hidden:
        overrides["show_hidden"] = True
    return dataclasses.replace(base, **overrides)


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and launch the browser."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    start: Path | None = None
    if args.path is not None:
        start = Path(args.path).expanduser()
        if not start.is_dir():
            raise SystemExit(f"Not a directory: {start}")
        start = start.resolve()

    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise SystemExit("cliui needs an interactive terminal.")

    settings = resolve_settings(args, load_settings())
    logger.debug("settings: %s", settings)

    from .app import run_browser

    run_browser(settings, start)


if __name__ == "__main__":
    main()
