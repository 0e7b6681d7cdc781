"""Runtime bootstrap tests: wiring, teardown order, and fatal-error cleanup."""

from __future__ import annotations

import contextlib
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fishpager import runtime
from fishpager.commands import Command
from fishpager.config import PagerSettings
from fishpager.errors import FileAccessError, ProgressCorruptError, TerminalQueryError


class _FakeTerminal:
    events: list[str] = []
    fds: list[tuple[int, int]] = []
    fail_size = False

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.fds.append((stdin_fd, stdout_fd))

    @contextlib.contextmanager
    def raw_mode(self):
        self.events.append("enter")
        try:
            yield
        finally:
            self.events.append("restore")

    def clear(self) -> None:
        self.events.append("clear")

    def size(self) -> tuple[int, int]:
        if self.fail_size:
            raise TerminalQueryError("cannot query terminal size")
        return 80, 24

    def write(self, _text: str) -> None:
        self.events.append("render")


class _FakeProducer:
    script: tuple[Command, ...] = ()

    def __init__(self, *args, **_kwargs) -> None:
        self.channel = next(arg for arg in args if hasattr(arg, "send"))

    def start(self) -> None:
        _FakeTerminal.events.append("start")
        for command in self.script:
            self.channel.send(command)

    def join(self, timeout: float | None = None) -> None:
        _FakeTerminal.events.append("join")


class _ScriptedInput(_FakeProducer):
    script = (Command.NEXT_LINE, Command.NEXT_LINE, Command.EXIT)


class RunPagerTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name).resolve()
        self.book = root / "book.txt"
        self.book.write_text("\n".join(f"line {i}" for i in range(100)), encoding="utf-8")
        self.settings = PagerSettings(progress_path=root / "progress.json")
        _FakeTerminal.events = []
        _FakeTerminal.fds = []
        _FakeTerminal.fail_size = False
        self._patches = [
            mock.patch("fishpager.runtime.TerminalController", _FakeTerminal),
            mock.patch("fishpager.runtime.InputDispatcher", _ScriptedInput),
            mock.patch("fishpager.runtime.ScrollTicker", _FakeProducer),
            mock.patch("fishpager.runtime.ResizeWatcher", _FakeProducer),
        ]
        for patcher in self._patches:
            patcher.start()

    def tearDown(self) -> None:
        for patcher in reversed(self._patches):
            patcher.stop()
        self._tmp.cleanup()

    def test_session_runs_until_exit_and_tears_down_in_order(self) -> None:
        runtime.run_pager(self.book, self.settings, stdin_fd=0, stdout_fd=1)

        events = _FakeTerminal.events
        self.assertEqual(events[:2], ["enter", "clear"])
        self.assertEqual(events[-4:], ["join", "join", "join", "restore"])
        self.assertEqual(events.count("start"), 3)
        # Initial frame plus one per line move.
        self.assertEqual(events.count("render"), 3)
        saved = json.loads(self.settings.progress_path.read_text(encoding="utf-8"))
        self.assertEqual(saved, {str(self.book): 2})

    def test_terminal_is_restored_when_session_fails(self) -> None:
        _FakeTerminal.fail_size = True

        with self.assertRaises(TerminalQueryError):
            runtime.run_pager(self.book, self.settings, stdin_fd=0, stdout_fd=1)

        self.assertEqual(_FakeTerminal.events[0], "enter")
        self.assertEqual(_FakeTerminal.events[-1], "restore")
        self.assertNotIn("start", _FakeTerminal.events)

    def test_corrupt_progress_is_reported_after_screen_is_cleared(self) -> None:
        self.settings.progress_path.write_text("{oops", encoding="utf-8")

        with self.assertRaises(ProgressCorruptError):
            runtime.run_pager(self.book, self.settings, stdin_fd=0, stdout_fd=1)

        self.assertEqual(_FakeTerminal.events, ["enter", "clear", "restore"])
        self.assertEqual(self.settings.progress_path.read_text(encoding="utf-8"), "{oops")

    def test_missing_document_restores_terminal_without_touching_progress(self) -> None:
        with self.assertRaises(FileAccessError):
            runtime.run_pager(self.book.with_name("absent.txt"), self.settings, stdin_fd=0, stdout_fd=1)

        self.assertEqual(_FakeTerminal.events, ["enter", "clear", "restore"])
        self.assertFalse(self.settings.progress_path.exists())

    def test_descriptors_default_to_process_stdio(self) -> None:
        fake_sys = mock.Mock()
        fake_sys.stdin.fileno.return_value = 7
        fake_sys.stdout.fileno.return_value = 8

        with mock.patch("fishpager.runtime.sys", fake_sys):
            runtime.run_pager(self.book, self.settings)

        self.assertEqual(_FakeTerminal.fds, [(7, 8)])

    def test_explicit_descriptors_bypass_process_stdio(self) -> None:
        with mock.patch("fishpager.runtime.sys") as fake_sys:
            runtime.run_pager(self.book, self.settings, stdin_fd=3, stdout_fd=4)

        fake_sys.stdin.fileno.assert_not_called()
        self.assertEqual(_FakeTerminal.fds, [(3, 4)])

if __name__ == "__main__":
    unittest.main()
