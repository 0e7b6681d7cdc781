from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class ScrollMode(IntEnum):
    """Auto-scroll step in lines per tick."""

    OFF = 0
    ONE = 1
    TWO = 2

    @property
    def label(self) -> str:
        return "off" if self is ScrollMode.OFF else str(self.value)

    def next(self) -> ScrollMode:
        return ScrollMode((self.value + 1) % len(ScrollMode))


@dataclass(frozen=True)
class BreakMark:
    """Separator drawn before ``index`` after a page-style jump."""

    index: int = 0
    visible: bool = False


@dataclass(frozen=True)
class ViewportSnapshot:
    current_line: int
    total_lines: int
    win_height: int
    win_width: int
    scroll_mode: ScrollMode
    break_mark: BreakMark


@dataclass
class ViewportState:
    total_lines: int
    current_line: int = 0
    win_height: int = 24
    win_width: int = 80
    scroll_mode: ScrollMode = ScrollMode.OFF
    break_mark: BreakMark = field(default_factory=BreakMark)

    def snapshot(self) -> ViewportSnapshot:
        return ViewportSnapshot(
            current_line=self.current_line,
            total_lines=self.total_lines,
            win_height=self.win_height,
            win_width=self.win_width,
            scroll_mode=self.scroll_mode,
            break_mark=self.break_mark,
        )
