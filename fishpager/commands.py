"""Pager commands and the fan-in channel that carries them to the coordinator."""

from __future__ import annotations

import threading
from enum import Enum
from queue import Empty, Queue


class Command(Enum):
    EXIT = "exit"
    NEXT_LINE = "next_line"
    PREV_LINE = "prev_line"
    NEXT_PAGE = "next_page"
    PREV_PAGE = "prev_page"
    NEXT_HALF_PAGE = "next_half_page"
    TOGGLE_SCROLL_MODE = "toggle_scroll_mode"
    REDRAW = "redraw"
    SCROLL_TICK = "scroll_tick"


class CommandChannel:
    """Many-producer, single-consumer command queue.

    Once closed, ``send`` drops commands and reports ``False``; producers
    use that to stop without racing the coordinator's teardown.
    """

    def __init__(self) -> None:
        self._queue: Queue[Command] = Queue()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def send(self, command: Command) -> bool:
        with self._lock:
            if self._closed:
                return False
            self._queue.put(command)
            return True

    def receive(self, timeout: float | None = None) -> Command | None:
        """Block for the next command; ``None`` when ``timeout`` elapses first."""
        try:
            return self._queue.get(timeout=timeout)
        except Empty:
            return None

    def close(self) -> None:
        with self._lock:
            self._closed = True
