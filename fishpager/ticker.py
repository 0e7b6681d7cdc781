"""Auto-scroll clock."""

from __future__ import annotations

import threading

from .commands import Command, CommandChannel


class ScrollTicker:
    """Sends ``SCROLL_TICK`` once per interval until shutdown.

    The ticker carries no view state; the coordinator decides whether a tick
    advances anything.
    """

    def __init__(self, channel: CommandChannel, stop: threading.Event, interval: float = 1.0) -> None:
        self.channel = channel
        self.stop = stop
        self.interval = interval
        self._thread: threading.Thread | None = None

    def run(self) -> None:
        while not self.stop.wait(self.interval):
            if not self.channel.send(Command.SCROLL_TICK):
                return

    def start(self) -> None:
        self._thread = threading.Thread(target=self.run, name="fishpager-ticker", daemon=True)
        self._thread.start()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)
