"""Pager runtime bootstrap: engage the terminal, load inputs, run the loop."""

from __future__ import annotations

import logging
import signal
import sys
import threading
from pathlib import Path

from .commands import CommandChannel
from .config import PagerSettings, load_settings
from .coordinator import Coordinator
from .document import Document
from .input import InputDispatcher
from .progress import ProgressStore
from .resize import ResizeWatcher
from .terminal import TerminalController
from .ticker import ScrollTicker

logger = logging.getLogger(__name__)

_TERMINATION_SIGNALS = ("SIGTERM", "SIGHUP")


def _install_termination_handlers(stop: threading.Event) -> dict[int, object]:
    """Route termination signals into the shutdown event; returns previous handlers."""

    def _request_stop(*_args: object) -> None:
        stop.set()

    previous: dict[int, object] = {}
    for name in _TERMINATION_SIGNALS:
        signum = getattr(signal, name, None)
        if signum is not None:
            previous[signum] = signal.signal(signum, _request_stop)
    return previous


def _restore_handlers(previous: dict[int, object]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


def run_pager(
    path: Path,
    settings: PagerSettings | None = None,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> None:
    """Page ``path`` (absolute) until the user quits.

    The alternate screen is entered and cleared before the document and
    progress record load. Teardown order: stop producers, flush progress,
    restore tty mode, leave the alternate screen.
    """
    settings = settings or load_settings()
    if stdin_fd is None:
        stdin_fd = sys.stdin.fileno()
    if stdout_fd is None:
        stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)

    channel = CommandChannel()
    stop = threading.Event()
    coordinator: Coordinator | None = None
    producers = [
        InputDispatcher(terminal.stdin_fd, channel, stop),
        ScrollTicker(channel, stop, settings.scroll_interval),
        ResizeWatcher(channel, stop),
    ]

    logger.info("session start: %s", path)
    previous_handlers = _install_termination_handlers(stop)
    try:
        with terminal.raw_mode():
            terminal.clear()
            document = Document.load(path)
            progress = ProgressStore(settings.resolved_progress_path())
            progress.load()
            coordinator = Coordinator(document, progress, terminal, channel, stop, settings.page_factor)
            try:
                coordinator.open()
                for producer in producers:
                    producer.start()
                coordinator.run()
            finally:
                coordinator.shutdown(producers)
    finally:
        _restore_handlers(previous_handlers)
        if coordinator is not None:
            logger.info("session end: %s at line %d", path, coordinator.state.current_line)
