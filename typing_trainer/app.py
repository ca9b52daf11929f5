"""Pygame window frontend for the typing trainer.

Two score boxes (wins and fails) sit above a single centred line showing the
current target: correctly typed characters in green, the untyped remainder in
the default colour, or in red once the round has a miss.

Deterministic matching/scoring/RNG/state lives in round_engine/alphabet; this
module only draws snapshots and turns pygame events into session events.
"""

from __future__ import annotations

from collections.abc import Callable

import pygame

from .alphabet import RandomPairGenerator, SeededRng
from .render import STAT_TITLES, SegmentStyle, stat_values, styled_runs
from .round_engine import RoundEngine, RoundSnapshot
from .session import CharKey, ExitKey, InputEvent, OtherEvent, SessionController, SessionError

WINDOW_SIZE = (720, 360)

BG = (10, 10, 14)
BORDER = (226, 236, 255)
TEXT_MAIN = (235, 235, 245)
STAT_VALUE = (250, 214, 64)
SEGMENT_COLOURS: dict[SegmentStyle, tuple[int, int, int]] = {
    SegmentStyle.DEFAULT: TEXT_MAIN,
    SegmentStyle.HIT: (92, 214, 112),
    SegmentStyle.MISS: (232, 84, 84),
}


def translate_event(event: pygame.event.Event) -> InputEvent:
    if event.type == pygame.QUIT:
        return ExitKey()
    if event.type != pygame.KEYDOWN:
        return OtherEvent(pygame.event.event_name(event.type))
    if event.key == pygame.K_ESCAPE:
        return ExitKey()
    text = getattr(event, "unicode", "")
    if len(text) == 1 and text.isprintable():
        return CharKey(text)
    return OtherEvent(pygame.key.name(event.key))


class PygameInput:
    """Blocking event source over the pygame queue."""

    def __init__(self, *, event_injector: Callable[[int], None] | None = None) -> None:
        self._event_injector = event_injector
        self._frame = 0

    def next_event(self) -> InputEvent:
        if self._event_injector is not None:
            self._event_injector(self._frame)
        self._frame += 1
        return translate_event(pygame.event.wait())


class PygameRenderer:
    def __init__(self, surface: pygame.Surface) -> None:
        self._surface = surface
        self._title_font = pygame.font.Font(None, 30)
        self._title_font.set_bold(True)
        self._value_font = pygame.font.Font(None, 48)
        self._value_font.set_bold(True)
        self._input_font = pygame.font.Font(None, 64)
        self._input_font.set_bold(True)

    def render(self, snapshot: RoundSnapshot) -> None:
        surface = self._surface
        w, h = surface.get_size()
        surface.fill(BG)

        margin = max(8, w // 60)
        stats_h = max(120, h // 2)
        stats = pygame.Rect(margin, margin, w - margin * 2, stats_h)
        input_row = pygame.Rect(margin, stats.bottom + margin, w - margin * 2, h - stats.bottom - margin * 2)

        # 45% | 10% | 45% split between the two score boxes.
        inset = margin * 2
        inner = stats.inflate(-inset * 2, -inset * 2)
        box_w = int(inner.w * 0.45)
        left = pygame.Rect(inner.x, inner.y, box_w, inner.h)
        right = pygame.Rect(inner.right - box_w, inner.y, box_w, inner.h)

        for rect, title, value in zip((left, right), STAT_TITLES, stat_values(snapshot)):
            self._render_stat_box(rect, title, value)

        self._render_input_line(input_row, snapshot)
        pygame.display.flip()

    def _render_stat_box(self, rect: pygame.Rect, title: str, value: str) -> None:
        surface = self._surface
        pygame.draw.rect(surface, BORDER, rect, 2, border_radius=10)

        title_surf = self._title_font.render(title, True, TEXT_MAIN, BG)
        surface.blit(title_surf, title_surf.get_rect(center=(rect.centerx, rect.y)))

        value_surf = self._value_font.render(value, True, STAT_VALUE)
        surface.blit(value_surf, value_surf.get_rect(center=rect.center))

    def _render_input_line(self, rect: pygame.Rect, snapshot: RoundSnapshot) -> None:
        runs = [
            self._input_font.render(text, True, SEGMENT_COLOURS[style])
            for text, style in styled_runs(snapshot)
        ]
        total_w = sum(r.get_width() for r in runs)
        x = rect.centerx - total_w // 2
        for run_surf in runs:
            self._surface.blit(run_surf, run_surf.get_rect(midleft=(x, rect.centery)))
            x += run_surf.get_width()


def run(
    *,
    max_frames: int | None = None,
    event_injector: Callable[[int], None] | None = None,
    seed: int | None = None,
    engine_factory: Callable[[], RoundEngine] | None = None,
) -> int:
    pygame.init()
    try:
        try:
            pygame.display.set_caption("Typing Trainer")
            surface = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)
        except pygame.error as exc:
            raise SessionError("opening the window failed") from exc

        if engine_factory is None:
            engine = RoundEngine(generator=RandomPairGenerator(SeededRng(seed)))
        else:
            engine = engine_factory()

        controller = SessionController(
            engine=engine,
            renderer=PygameRenderer(surface),
            input_source=PygameInput(event_injector=event_injector),
        )
        controller.run(max_frames=max_frames)
    finally:
        pygame.quit()

    return 0
