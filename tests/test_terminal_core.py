from __future__ import annotations

import curses
from dataclasses import dataclass, field

import pytest

import typing_trainer.terminal as terminal
from typing_trainer.render import SegmentStyle
from typing_trainer.round_engine import RoundEngine, RoundSnapshot
from typing_trainer.segments import TextSegment
from typing_trainer.session import CharKey, ExitKey, OtherEvent, SessionError
from typing_trainer.terminal import STATS_HEIGHT, STATS_TOP, CursesInput, CursesRenderer, translate_key


@dataclass
class FakeWindow:
    height: int = 24
    width: int = 80
    keys: list[str | int] = field(default_factory=list)
    delay: bool = True
    writes: list[tuple[int, int, str, int]] = field(default_factory=list)
    refreshed: int = 0

    def getmaxyx(self) -> tuple[int, int]:
        return self.height, self.width

    def erase(self) -> None:
        self.writes.clear()

    def addstr(self, y: int, x: int, text: str, attr: int = 0) -> None:
        assert 0 <= y < self.height
        assert 0 <= x and x + len(text) <= self.width
        self.writes.append((y, x, text, attr))

    def refresh(self) -> None:
        self.refreshed += 1

    def nodelay(self, flag: bool) -> None:
        self.delay = not flag

    def get_wch(self) -> str | int:
        if not self.keys:
            if not self.delay:
                raise curses.error("no input")
            raise AssertionError("blocking read with no scripted keys")
        return self.keys.pop(0)


ATTRS = {SegmentStyle.DEFAULT: 0, SegmentStyle.HIT: 1 << 8, SegmentStyle.MISS: 2 << 8}


def _snapshot(*segments: TextSegment, miss: bool = False, wins: int = 0, fails: int = 0) -> RoundSnapshot:
    return RoundSnapshot(
        segments=segments,
        remainder=segments[-1].text,
        miss_this_round=miss,
        wins=wins,
        fails=fails,
        round_index=1,
    )


def test_translate_key() -> None:
    assert translate_key("\x1b") == ExitKey()
    assert translate_key(27) == ExitKey()
    assert translate_key("a") == CharKey("a")
    assert translate_key(" ") == CharKey(" ")
    assert isinstance(translate_key("\x03"), OtherEvent)
    assert isinstance(translate_key(curses.KEY_RESIZE), OtherEvent)


def test_curses_input_reads_one_key_per_event() -> None:
    window = FakeWindow(keys=["q", curses.KEY_LEFT, "\x1b"])
    source = CursesInput(window)

    assert source.next_event() == CharKey("q")
    assert isinstance(source.next_event(), OtherEvent)
    assert source.next_event() == ExitKey()


def test_renderer_draws_titles_values_and_coloured_input_line() -> None:
    window = FakeWindow()
    renderer = CursesRenderer(window, ATTRS)

    renderer.render(_snapshot(TextSegment.hit("a"), TextSegment.pending("b"), miss=True, wins=4, fails=2))

    texts = [w[2] for w in window.writes]
    assert " WINS " in texts
    assert " FAILS " in texts
    assert "4" in texts
    assert "2" in texts

    line = [(x, text, attr) for y, x, text, attr in window.writes if y == STATS_TOP + STATS_HEIGHT]
    assert [(text, attr & ~curses.A_BOLD) for _, text, attr in line] == [
        ("a", ATTRS[SegmentStyle.HIT]),
        ("b", ATTRS[SegmentStyle.MISS]),
    ]
    assert line[0][0] == (80 - 2) // 2
    assert line[1][0] == line[0][0] + 1
    assert window.refreshed == 1


def test_renderer_clips_to_a_tiny_window() -> None:
    window = FakeWindow(height=9, width=6)
    renderer = CursesRenderer(window, ATTRS)

    renderer.render(_snapshot(TextSegment.pending("abcdefghij")))

    assert window.refreshed == 1
    bottom = [w for w in window.writes if w[0] == 8]
    assert bottom and all(x + len(text) <= 5 for _, x, text, _ in bottom)


def test_lone_escape_quits_and_restores_blocking_reads() -> None:
    window = FakeWindow(keys=["\x1b"])

    assert CursesInput(window).next_event() == ExitKey()
    assert window.delay is True


def test_escape_followed_by_a_key_is_an_alt_chord_not_a_quit() -> None:
    window = FakeWindow(keys=["\x1b", "a", "b"])
    source = CursesInput(window)

    assert isinstance(source.next_event(), OtherEvent)
    assert window.delay is True
    assert source.next_event() == CharKey("b")


class _FixedGenerator:
    def __init__(self, target: str) -> None:
        self._target = target

    def next_target(self) -> str:
        return self._target


@pytest.fixture
def fake_curses(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    calls: list[str] = []

    def no_cursor(visibility: int) -> None:
        raise curses.error("cursor cannot be hidden")

    monkeypatch.setenv("ESCDELAY", "")
    monkeypatch.delenv("ESCDELAY")
    monkeypatch.setattr(terminal.locale, "setlocale", lambda category, value: calls.append("setlocale"))
    monkeypatch.setattr(curses, "raw", lambda: calls.append("raw"))
    monkeypatch.setattr(curses, "curs_set", no_cursor)
    monkeypatch.setattr(curses, "has_colors", lambda: False)
    return calls


def test_run_plays_a_session_and_returns_zero(monkeypatch: pytest.MonkeyPatch, fake_curses: list[str]) -> None:
    window = FakeWindow(keys=["a", "b", "\x1b"])
    engines: list[RoundEngine] = []

    def factory() -> RoundEngine:
        engines.append(RoundEngine(generator=_FixedGenerator("ab")))
        return engines[-1]

    monkeypatch.setattr(curses, "wrapper", lambda func, *args: func(window, *args))

    assert terminal.run(engine_factory=factory) == 0
    assert engines[0].wins == 1
    assert window.refreshed == 3
    assert "raw" in fake_curses
    assert terminal.os.environ["ESCDELAY"] == "25"


def test_run_lets_session_errors_propagate(monkeypatch: pytest.MonkeyPatch, fake_curses: list[str]) -> None:
    window = FakeWindow(keys=["\x1b"])
    restored: list[bool] = []

    def wrapper(func, *args):
        try:
            return func(window, *args)
        finally:
            restored.append(True)

    monkeypatch.setattr(curses, "wrapper", wrapper)

    with pytest.raises(SessionError, match="generating the first round failed"):
        terminal.run(engine_factory=lambda: RoundEngine(generator=_FixedGenerator("")))
    assert restored == [True]
    assert window.refreshed == 0


def test_run_reports_terminal_setup_failure(monkeypatch: pytest.MonkeyPatch, fake_curses: list[str]) -> None:
    def wrapper(func, *args):
        raise curses.error("nocbreak() returned ERR")

    monkeypatch.setattr(curses, "wrapper", wrapper)

    with pytest.raises(SessionError, match="terminal setup failed") as info:
        terminal.run(seed=1)
    assert isinstance(info.value.__cause__, curses.error)


def test_style_attrs_use_colour_pairs_when_available(monkeypatch: pytest.MonkeyPatch) -> None:
    pairs: dict[int, tuple[int, int]] = {}
    monkeypatch.setattr(curses, "has_colors", lambda: True)
    monkeypatch.setattr(curses, "use_default_colors", lambda: None)
    monkeypatch.setattr(curses, "init_pair", lambda n, fg, bg: pairs.__setitem__(n, (fg, bg)))
    monkeypatch.setattr(curses, "color_pair", lambda n: n << 8)

    attrs, value_attr = terminal._style_attrs()

    assert attrs[SegmentStyle.DEFAULT] == 0
    assert attrs[SegmentStyle.HIT] == terminal.PAIR_HIT << 8
    assert attrs[SegmentStyle.MISS] == terminal.PAIR_MISS << 8
    assert value_attr == terminal.PAIR_VALUE << 8
    assert pairs[terminal.PAIR_HIT] == (curses.COLOR_GREEN, -1)
