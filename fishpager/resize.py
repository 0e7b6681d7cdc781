"""Terminal resize notifications.

The SIGWINCH handler only flags a pending resize; a watcher thread turns the
flag into a ``REDRAW`` command so the coordinator re-reads the dimensions.
"""

from __future__ import annotations

import signal
import threading

from .commands import Command, CommandChannel

WAKE_SECONDS = 0.1


class ResizeWatcher:
    def __init__(self, channel: CommandChannel, stop: threading.Event) -> None:
        self.channel = channel
        self.stop = stop
        self._pending = threading.Event()
        self._previous_handler: object = None
        self._installed = False
        self._thread: threading.Thread | None = None

    def notify(self, *_args: object) -> None:
        """Signal-handler entry point; safe to call from any thread."""
        self._pending.set()

    def run(self) -> None:
        while not self.stop.is_set():
            if not self._pending.wait(WAKE_SECONDS):
                continue
            self._pending.clear()
            if self.stop.is_set() or not self.channel.send(Command.REDRAW):
                return

    def start(self) -> None:
        """Install the SIGWINCH handler (main thread only) and start the watcher."""
        if hasattr(signal, "SIGWINCH"):
            self._previous_handler = signal.signal(signal.SIGWINCH, self.notify)
            self._installed = True
        self._thread = threading.Thread(target=self.run, name="fishpager-resize", daemon=True)
        self._thread.start()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)
        if self._installed:
            signal.signal(signal.SIGWINCH, self._previous_handler or signal.SIG_DFL)
            self._installed = False
