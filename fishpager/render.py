"""Frame composition for the pager viewport and status line.

Rendering reads a ``ViewportSnapshot`` and never mutates pager state.
"""

from __future__ import annotations

from .document import Document
from .state import ViewportSnapshot
from .terminal import CLEAR_SCREEN

BREAK_MARK_GLYPH = "↓"


def break_mark_line(win_height: int) -> str:
    return "=" * (win_height // 2) + BREAK_MARK_GLYPH


def progress_percent(current_line: int, total_lines: int) -> float:
    if total_lines <= 0:
        return 0.0
    return current_line / total_lines * 100.0


def build_status_line(name: str, snapshot: ViewportSnapshot) -> str:
    """Compose the bottom status row, clipped so it never wraps."""
    percent = progress_percent(snapshot.current_line, snapshot.total_lines)
    status = (
        f"> {name} {snapshot.current_line}/{snapshot.total_lines} {percent:.2f}% "
        f"[Q]:Quit [A]:Scroll({snapshot.scroll_mode.label})"
    )
    usable = max(1, snapshot.win_width - 1)
    return status[:usable]


def build_frame(document: Document, snapshot: ViewportSnapshot) -> str:
    """Build one full-screen frame.

    ``win_height - 1`` content rows are written from ``current_line``, with a
    separator row inserted before the break-mark line when visible. Short
    pages are padded so the status line stays pinned to the last row.
    """
    out: list[str] = [CLEAR_SCREEN]
    page_rows = max(0, snapshot.win_height - 1)
    mark = snapshot.break_mark
    rows = 0
    idx = snapshot.current_line
    while rows < page_rows and idx < document.total_lines:
        if mark.visible and idx == mark.index and rows + 1 < page_rows:
            out.append(break_mark_line(snapshot.win_height))
            out.append("\r\n")
            rows += 1
        out.append(document.lines[idx])
        out.append("\r\n")
        rows += 1
        idx += 1
    out.append("\r\n" * (page_rows - rows))
    out.append(build_status_line(document.name, snapshot))
    return "".join(out)


def render_page(terminal, document: Document, snapshot: ViewportSnapshot) -> None:
    terminal.write(build_frame(document, snapshot))
