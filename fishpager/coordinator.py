"""Single owner of pager view state.

Consumes commands from the fan-in channel, applies viewport transitions,
renders, and persists progress. Producers never touch ``ViewportState``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Protocol

from .commands import Command, CommandChannel
from .document import Document
from .navigation import PAGE_FACTOR, apply_command
from .progress import ProgressStore
from .render import render_page
from .state import ViewportState

logger = logging.getLogger(__name__)

RECEIVE_POLL_SECONDS = 0.2
PRODUCER_JOIN_SECONDS = 1.0


class Producer(Protocol):
    def start(self) -> None: ...

    def join(self, timeout: float | None = None) -> None: ...


class Coordinator:
    def __init__(
        self,
        document: Document,
        progress: ProgressStore,
        terminal,
        channel: CommandChannel,
        stop: threading.Event,
        page_factor: float = PAGE_FACTOR,
    ) -> None:
        self.document = document
        self.progress = progress
        self.terminal = terminal
        self.channel = channel
        self.stop = stop
        self.page_factor = page_factor
        self.state = ViewportState(total_lines=document.total_lines)
        self._shut_down = False

    @property
    def progress_key(self) -> str:
        return str(self.document.path)

    def open(self) -> None:
        """Restore the saved offset, read the terminal size, and draw the first frame."""
        saved = self.progress.get(self.progress_key)
        if saved is not None and saved < self.state.total_lines:
            self.state.current_line = saved
        self.refresh_size()
        self.render()

    def refresh_size(self) -> None:
        columns, rows = self.terminal.size()
        self.state.win_width = max(1, columns)
        self.state.win_height = max(1, rows)

    def render(self) -> None:
        render_page(self.terminal, self.document, self.state.snapshot())

    def persist(self) -> bool:
        return self.progress.save(self.progress_key, self.state.current_line)

    def handle(self, command: Command) -> bool:
        """Apply one command; returns ``False`` once the session should end."""
        logger.debug("command %s at line %d", command.value, self.state.current_line)
        if command is Command.EXIT:
            return False
        if command is Command.REDRAW:
            self.refresh_size()
        if apply_command(self.state, command, self.page_factor):
            self.render()
            self.persist()
        return True

    def run(self) -> None:
        while not self.stop.is_set():
            command = self.channel.receive(timeout=RECEIVE_POLL_SECONDS)
            if command is None:
                continue
            if not self.handle(command):
                break

    def shutdown(self, producers: Iterable[Producer] = ()) -> None:
        """Stop producers, then flush progress. Runs at most once."""
        if self._shut_down:
            return
        self._shut_down = True
        self.stop.set()
        self.channel.close()
        for producer in producers:
            producer.join(PRODUCER_JOIN_SECONDS)
        self.persist()
