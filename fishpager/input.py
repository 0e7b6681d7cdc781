"""Low-level terminal input decoding.

Reads raw bytes from stdin on a background thread and translates them into
pager ``Command`` values delivered through the command channel.
"""

from __future__ import annotations

import logging
import os
import select
import threading

from .commands import Command, CommandChannel

logger = logging.getLogger(__name__)

READ_CHUNK_BYTES = 3
POLL_SECONDS = 0.1
RETRY_DELAY_SECONDS = 0.05

_SINGLE_BYTE_COMMANDS = {
    0x03: Command.EXIT,  # ctrl-c
    0x04: Command.EXIT,  # ctrl-d
    ord("q"): Command.EXIT,
    ord("a"): Command.TOGGLE_SCROLL_MODE,
    0x0D: Command.NEXT_LINE,  # enter
    ord(" "): Command.NEXT_HALF_PAGE,
}

_ARROW_COMMANDS = {
    ord("A"): Command.PREV_LINE,
    ord("B"): Command.NEXT_LINE,
    ord("C"): Command.NEXT_PAGE,
    ord("D"): Command.PREV_PAGE,
}


def decode_input(data: bytes) -> Command | None:
    """Map one raw read to a command; unknown or partial sequences yield ``None``."""
    if not data:
        return None
    first = data[0]
    if first != 0x1B:
        return _SINGLE_BYTE_COMMANDS.get(first)
    if len(data) < 3 or data[1] != ord("["):
        return None
    return _ARROW_COMMANDS.get(data[2])


class InputDispatcher:
    """Background reader turning keystrokes into commands until shutdown."""

    def __init__(
        self,
        stdin_fd: int,
        channel: CommandChannel,
        stop: threading.Event,
        poll_seconds: float = POLL_SECONDS,
    ) -> None:
        self.stdin_fd = stdin_fd
        self.channel = channel
        self.stop = stop
        self.poll_seconds = poll_seconds
        self._thread: threading.Thread | None = None

    def _read_chunk(self) -> bytes | None:
        """Wait up to one poll interval for input; ``None`` when nothing arrived."""
        ready, _, _ = select.select([self.stdin_fd], [], [], self.poll_seconds)
        if not ready:
            return None
        return os.read(self.stdin_fd, READ_CHUNK_BYTES)

    def run(self) -> None:
        while not self.stop.is_set():
            try:
                data = self._read_chunk()
            except OSError as exc:
                logger.debug("stdin read failed, retrying: %s", exc)
                self.stop.wait(RETRY_DELAY_SECONDS)
                continue
            if data is None:
                continue
            if not data:
                # EOF is treated like a transient read error.
                self.stop.wait(RETRY_DELAY_SECONDS)
                continue
            command = decode_input(data)
            if command is None or self.stop.is_set():
                continue
            if not self.channel.send(command):
                return

    def start(self) -> None:
        self._thread = threading.Thread(target=self.run, name="fishpager-input", daemon=True)
        self._thread.start()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)
