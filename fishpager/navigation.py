"""Viewport transitions for each pager command.

These functions mutate only the ``ViewportState`` they are given and have no
terminal or persistence concerns. ``apply_command`` reports whether a render
is needed.
"""

from __future__ import annotations

import math

from .commands import Command
from .state import BreakMark, ScrollMode, ViewportState

PAGE_FACTOR = 0.75


def page_offset(win_height: int, page_factor: float = PAGE_FACTOR) -> int:
    """Lines moved by a page jump, rounded half away from zero.

    Deliberately less than a full screen: soft-wrapped lines mean fewer
    logical lines fit than ``win_height``.
    """
    return int(math.floor(win_height * page_factor + 0.5))


def half_page_offset(win_height: int) -> int:
    return win_height // 2


def _set_break_mark(state: ViewportState) -> None:
    state.break_mark = BreakMark(index=state.current_line + state.win_height - 1, visible=True)


def next_line(state: ViewportState) -> None:
    if state.current_line < state.total_lines - 1:
        state.current_line += 1


def prev_line(state: ViewportState) -> None:
    if state.current_line > 0:
        state.current_line -= 1


def next_page(state: ViewportState, page_factor: float = PAGE_FACTOR) -> None:
    _set_break_mark(state)
    offset = page_offset(state.win_height, page_factor)
    if state.current_line + offset < state.total_lines:
        state.current_line += offset


def prev_page(state: ViewportState, page_factor: float = PAGE_FACTOR) -> None:
    _set_break_mark(state)
    offset = page_offset(state.win_height, page_factor)
    state.current_line = max(0, state.current_line - offset)


def next_half_page(state: ViewportState) -> None:
    """Advance half a screen, refused unless the following full page stays in bounds."""
    _set_break_mark(state)
    offset = half_page_offset(state.win_height)
    if state.current_line + state.win_height - 1 < state.total_lines:
        state.current_line = min(state.total_lines - 1, state.current_line + offset)


def scroll_tick(state: ViewportState) -> bool:
    """Advance by the scroll-mode step; ``False`` when off or already at the last line."""
    if state.scroll_mode is ScrollMode.OFF or state.current_line >= state.total_lines - 1:
        return False
    state.current_line = min(state.total_lines - 1, state.current_line + int(state.scroll_mode))
    return True


def apply_command(state: ViewportState, command: Command, page_factor: float = PAGE_FACTOR) -> bool:
    """Apply one navigation command to ``state``.

    ``EXIT`` is handled by the coordinator and leaves the state untouched.
    Page-style jumps replace the break mark; it stays visible at its document
    position until the next jump.
    """
    if command is Command.NEXT_PAGE:
        next_page(state, page_factor)
    elif command is Command.PREV_PAGE:
        prev_page(state, page_factor)
    elif command is Command.NEXT_HALF_PAGE:
        next_half_page(state)
    elif command is Command.NEXT_LINE:
        next_line(state)
    elif command is Command.PREV_LINE:
        prev_line(state)
    elif command is Command.TOGGLE_SCROLL_MODE:
        state.scroll_mode = state.scroll_mode.next()
    elif command is Command.SCROLL_TICK:
        return scroll_tick(state)
    else:
        return command is Command.REDRAW
    return True
