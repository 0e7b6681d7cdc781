"""Terminal control helpers for the pager session.

Owns raw-mode lifecycle, alternate-screen switching, and size queries.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty
from collections.abc import Callable, Iterator

from .errors import TerminalError, TerminalQueryError

logger = logging.getLogger(__name__)

ENTER_ALT_SCREEN = b"\x1b[?1049h\x1b[?25l"
EXIT_ALT_SCREEN = b"\x1b[?25h\x1b[?1049l"
CLEAR_SCREEN = "\x1b[2J\x1b[H"


class TerminalController:
    """Manage terminal mode transitions for one pager session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalError("standard input is not a terminal") from exc
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def _emit(self, data: bytes) -> None:
        try:
            os.write(self.stdout_fd, data)
        except OSError as exc:
            reason = exc.strerror or exc.__class__.__name__
            raise TerminalError(f"cannot write to terminal: {reason}") from exc

    def enter(self) -> Callable[[], None]:
        """Enter the alternate screen and raw input mode; return the restore callable."""
        self._emit(ENTER_ALT_SCREEN)
        self._active = True
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        except termios.error as exc:
            self.restore()
            raise TerminalError("cannot switch terminal to raw mode") from exc
        return self.restore

    def restore(self) -> None:
        """Restore the saved tty mode, then leave the alternate screen. Idempotent.

        Leaving the alternate screen is best effort: the output device may
        already be gone when this runs during teardown.
        """
        if not self._active:
            return
        self._active = False
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        finally:
            try:
                os.write(self.stdout_fd, EXIT_ALT_SCREEN)
            except OSError as exc:
                logger.debug("cannot leave alternate screen: %s", exc)

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)`` of the output device."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError as exc:
            raise TerminalQueryError("cannot query terminal size") from exc
        return size.columns, size.lines

    def clear(self) -> None:
        self._emit(CLEAR_SCREEN.encode("ascii"))

    def write(self, text: str) -> None:
        self._emit(text.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Context manager that brackets code with enter/restore calls."""
        restore = self.enter()
        try:
            yield
        finally:
            restore()
