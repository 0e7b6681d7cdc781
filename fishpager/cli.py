"""Command-line front door for fishpager.

Parses CLI options, resolves the target path, and configures logging.
Then dispatches into the interactive pager runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from .config import PagerSettings, load_settings
from .errors import FileAccessError, PagerError, UsageError
from .runtime import run_pager

logger = logging.getLogger(__name__)

HELP_TEXT = """Name:
  fish - A minimalist command-line reader for novels and long-form text.

Usage:
  fish <FILE>

Description:
  fish reads the specified text file in the terminal.
  Your reading progress is automatically saved to: ~/.cmdline-reader-progress.
  fish will resume from where you left off.

Keys:
  q, Ctrl-C, Ctrl-D  quit
  a                  cycle auto-scroll (off, 1, 2 lines per second)
  Enter, Down        next line
  Up                 previous line
  Right              next page
  Left               previous page
  Space              next half page

Examples:
  fish story.txt
  fish ~/books/novel.txt"""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise UsageError(f"{self.prog}: {message}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="fish", add_help=False)
    parser.add_argument("path", nargs="?", default=None)
    parser.add_argument("-h", "--help", action="store_true")
    return parser


def configure_logging(settings: PagerSettings) -> None:
    """Send logs to the configured file; stdout belongs to the pager."""
    if settings.log_file is None:
        return
    try:
        handler = logging.FileHandler(settings.log_file, mode="a", encoding="utf-8")
    except OSError as exc:
        reason = exc.strerror or exc.__class__.__name__
        raise FileAccessError(f"cannot open log file {settings.log_file}: {reason}") from exc
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(name)s[%(process)d]: %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
    )


def main(argv: list[str] | None = None) -> int:
    """Run the pager CLI. Always returns 0: usage and fatal errors print one line."""
    try:
        args = build_parser().parse_args(argv)
        if args.help or args.path is None:
            print(HELP_TEXT)
            return 0
        settings = load_settings()
        configure_logging(settings)
        path = Path(os.path.abspath(os.path.expanduser(args.path)))
        if not path.exists():
            raise FileAccessError(f"file not found: {path}")
        run_pager(path, settings)
    except PagerError as exc:
        logger.error("%s error: %s", exc.kind.value, exc)
        print(exc)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
