"""curses frontend: the same layout as the pygame window, drawn in the terminal.

``curses.wrapper`` owns terminal setup and guarantees the terminal is restored
on every exit path, including exceptions raised by the session.
"""

from __future__ import annotations

import curses
import locale
import os
from collections.abc import Callable

from .alphabet import RandomPairGenerator, SeededRng
from .render import STAT_TITLES, SegmentStyle, stat_values, styled_runs
from .round_engine import RoundEngine, RoundSnapshot
from .session import CharKey, ExitKey, InputEvent, OtherEvent, SessionController, SessionError

ESCAPE = "\x1b"

STATS_TOP = 1
STATS_HEIGHT = 7
STATS_MARGIN = 2

PAIR_HIT = 1
PAIR_MISS = 2
PAIR_VALUE = 3


def translate_key(key: str | int) -> InputEvent:
    if key == ESCAPE or key == 27:
        return ExitKey()
    if isinstance(key, str):
        if len(key) == 1 and key.isprintable():
            return CharKey(key)
        return OtherEvent(repr(key))
    return OtherEvent(f"key-{key}")


class CursesInput:
    def __init__(self, window) -> None:
        self._window = window

    def next_event(self) -> InputEvent:
        key = self._window.get_wch()
        if key != ESCAPE:
            return translate_key(key)

        # Alt+key arrives as ESC followed immediately by the key.
        self._window.nodelay(True)
        try:
            follow = self._window.get_wch()
        except curses.error:
            return ExitKey()
        finally:
            self._window.nodelay(False)
        return OtherEvent(f"alt-{follow!r}")


class CursesRenderer:
    """Draws snapshots into a curses window.

    ``attrs`` maps each segment style to a curses attribute; ``title_attr`` and
    ``value_attr`` style the score boxes.
    """

    def __init__(
        self,
        window,
        attrs: dict[SegmentStyle, int],
        *,
        title_attr: int = 0,
        value_attr: int = 0,
    ) -> None:
        self._window = window
        self._attrs = attrs
        self._title_attr = title_attr
        self._value_attr = value_attr

    def render(self, snapshot: RoundSnapshot) -> None:
        win = self._window
        win.erase()
        h, w = win.getmaxyx()

        # Two boxes at 45% of the inset width each, 10% gap between them.
        inner_x = 1 + STATS_MARGIN
        inner_w = max(0, w - 2 * inner_x)
        box_y = STATS_TOP + STATS_MARGIN
        box_h = STATS_HEIGHT - 2 * STATS_MARGIN
        box_w = (inner_w * 45) // 100
        lefts = (inner_x, inner_x + inner_w - box_w)

        for x, title, value in zip(lefts, STAT_TITLES, stat_values(snapshot)):
            self._draw_box(box_y, x, box_h, box_w, title, value)

        runs = styled_runs(snapshot)
        total = sum(len(text) for text, _ in runs)
        y = STATS_TOP + STATS_HEIGHT
        x = max(0, (w - total) // 2)
        for text, style in runs:
            self._put(y, x, text, self._attrs.get(style, 0) | curses.A_BOLD)
            x += len(text)

        win.refresh()

    def _draw_box(self, y: int, x: int, height: int, width: int, title: str, value: str) -> None:
        if width < 2 or height < 2:
            return
        self._put(y, x, "╭" + "─" * (width - 2) + "╮")
        for row in range(y + 1, y + height - 1):
            self._put(row, x, "│")
            self._put(row, x + width - 1, "│")
        self._put(y + height - 1, x, "╰" + "─" * (width - 2) + "╯")

        self._put(y, x + max(1, (width - len(title)) // 2), title[: width - 2], self._title_attr | curses.A_BOLD)
        mid = y + height // 2
        self._put(mid, x + max(1, (width - len(value)) // 2), value[: width - 2], self._value_attr | curses.A_BOLD)

    def _put(self, y: int, x: int, text: str, attr: int = 0) -> None:
        h, w = self._window.getmaxyx()
        if y < 0 or y >= h or x < 0 or x >= w:
            return
        # Writing into the bottom-right cell makes curses raise; stop one short.
        room = w - x - (1 if y == h - 1 else 0)
        if room <= 0:
            return
        self._window.addstr(y, x, text[:room], attr)


def _style_attrs() -> tuple[dict[SegmentStyle, int], int]:
    attrs = {style: 0 for style in SegmentStyle}
    value_attr = 0
    if curses.has_colors():
        curses.use_default_colors()
        curses.init_pair(PAIR_HIT, curses.COLOR_GREEN, -1)
        curses.init_pair(PAIR_MISS, curses.COLOR_RED, -1)
        curses.init_pair(PAIR_VALUE, curses.COLOR_YELLOW, -1)
        attrs[SegmentStyle.HIT] = curses.color_pair(PAIR_HIT)
        attrs[SegmentStyle.MISS] = curses.color_pair(PAIR_MISS)
        value_attr = curses.color_pair(PAIR_VALUE)
    return attrs, value_attr


def _main_curses(stdscr, engine_factory: Callable[[], RoundEngine]) -> None:
    curses.raw()
    try:
        curses.curs_set(0)
    except curses.error:
        # Some terminals cannot hide the cursor.
        pass

    attrs, value_attr = _style_attrs()
    controller = SessionController(
        engine=engine_factory(),
        renderer=CursesRenderer(stdscr, attrs, value_attr=value_attr),
        input_source=CursesInput(stdscr),
    )
    controller.run()


def run(
    *,
    seed: int | None = None,
    engine_factory: Callable[[], RoundEngine] | None = None,
) -> int:
    factory = engine_factory or (lambda: RoundEngine(generator=RandomPairGenerator(SeededRng(seed))))

    # curses holds a lone Escape for ESCDELAY ms (default 1000) before delivering it.
    os.environ.setdefault("ESCDELAY", "25")
    locale.setlocale(locale.LC_ALL, "")
    try:
        curses.wrapper(_main_curses, factory)
    except curses.error as exc:
        raise SessionError("terminal setup failed") from exc
    return 0
