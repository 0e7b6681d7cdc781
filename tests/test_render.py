"""Rendering/status-line regression tests."""

from __future__ import annotations

import unittest
from pathlib import Path

from fishpager.document import Document
from fishpager.render import build_frame, build_status_line, render_page
from fishpager.state import BreakMark, ScrollMode, ViewportSnapshot
from fishpager.terminal import CLEAR_SCREEN


def _document(count: int) -> Document:
    return Document(path=Path("/books/novel.txt"), lines=tuple(str(i) for i in range(count)))


def _snapshot(**overrides) -> ViewportSnapshot:
    values = dict(
        current_line=0,
        total_lines=100,
        win_height=10,
        win_width=80,
        scroll_mode=ScrollMode.OFF,
        break_mark=BreakMark(),
    )
    values.update(overrides)
    return ViewportSnapshot(**values)


def _rows(frame: str) -> list[str]:
    assert frame.startswith(CLEAR_SCREEN)
    return frame[len(CLEAR_SCREEN):].split("\r\n")


class StatusLineTests(unittest.TestCase):
    def test_status_line_format(self) -> None:
        status = build_status_line("novel.txt", _snapshot(current_line=50, total_lines=1000))
        self.assertEqual(status, "> novel.txt 50/1000 5.00% [Q]:Quit [A]:Scroll(off)")

    def test_status_line_shows_scroll_mode_label(self) -> None:
        status = build_status_line("novel.txt", _snapshot(scroll_mode=ScrollMode.TWO))
        self.assertTrue(status.endswith("[A]:Scroll(2)"))

    def test_status_line_is_clipped_to_width(self) -> None:
        status = build_status_line("novel.txt", _snapshot(win_width=20))
        self.assertEqual(len(status), 19)


class FrameTests(unittest.TestCase):
    def test_frame_writes_height_minus_one_rows_then_status(self) -> None:
        rows = _rows(build_frame(_document(100), _snapshot(current_line=5)))

        self.assertEqual(rows[:9], [str(i) for i in range(5, 14)])
        self.assertEqual(len(rows), 10)
        self.assertTrue(rows[-1].startswith("> novel.txt 5/100"))

    def test_short_page_is_padded_so_status_stays_pinned(self) -> None:
        rows = _rows(build_frame(_document(3), _snapshot(total_lines=3)))

        self.assertEqual(rows[:3], ["0", "1", "2"])
        self.assertEqual(rows[3:9], [""] * 6)
        self.assertEqual(len(rows), 10)

    def test_visible_break_mark_inserts_separator_before_marked_line(self) -> None:
        snapshot = _snapshot(break_mark=BreakMark(index=3, visible=True))
        rows = _rows(build_frame(_document(100), snapshot))

        self.assertEqual(rows[:9], ["0", "1", "2", "=====↓", "3", "4", "5", "6", "7"])
        self.assertEqual(len(rows), 10)

    def test_hidden_or_offscreen_break_mark_is_not_drawn(self) -> None:
        hidden = _rows(build_frame(_document(100), _snapshot(break_mark=BreakMark(index=3, visible=False))))
        offscreen = _rows(build_frame(_document(100), _snapshot(break_mark=BreakMark(index=50, visible=True))))

        for rows in (hidden, offscreen):
            self.assertNotIn("=====↓", rows)
            self.assertEqual(rows[:9], [str(i) for i in range(9)])

    def test_render_page_writes_one_frame(self) -> None:
        written: list[str] = []

        class _Terminal:
            def write(self, text: str) -> None:
                written.append(text)

        snapshot = _snapshot()
        render_page(_Terminal(), _document(100), snapshot)

        self.assertEqual(written, [build_frame(_document(100), snapshot)])


if __name__ == "__main__":
    unittest.main()
