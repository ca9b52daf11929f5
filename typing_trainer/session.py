"""Session loop shared by every frontend.

The controller owns nothing but the exit flag.  Game state lives in the
:class:`~typing_trainer.round_engine.RoundEngine`; drawing and keyboard access
are injected so the loop can be driven headlessly by tests.  Each iteration
renders the current snapshot, blocks for one input event and dispatches it.
Any failure along the way ends the session with a :class:`SessionError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, Union

from .round_engine import RoundEngine, RoundSnapshot

logger = logging.getLogger(__name__)


class SessionError(RuntimeError):
    """Unrecoverable failure; the session has already been marked for exit."""


@dataclass(frozen=True, slots=True)
class CharKey:
    char: str


@dataclass(frozen=True, slots=True)
class ExitKey:
    pass


@dataclass(frozen=True, slots=True)
class OtherEvent:
    name: str = ""


InputEvent = Union[CharKey, ExitKey, OtherEvent]


class Renderer(Protocol):
    def render(self, snapshot: RoundSnapshot) -> None: ...


class InputSource(Protocol):
    def next_event(self) -> InputEvent:
        """Block until the next input event is available."""
        ...


class SessionController:
    def __init__(self, *, engine: RoundEngine, renderer: Renderer, input_source: InputSource) -> None:
        self._engine = engine
        self._renderer = renderer
        self._input = input_source
        self._exit = False
        self._frames = 0

    @property
    def engine(self) -> RoundEngine:
        return self._engine

    @property
    def exit_requested(self) -> bool:
        return self._exit

    @property
    def frames(self) -> int:
        return self._frames

    def request_exit(self) -> None:
        self._exit = True

    def run(self, *, max_frames: int | None = None) -> None:
        logger.info("session started")
        try:
            self._engine.start_round()
        except Exception as exc:
            self.request_exit()
            raise SessionError("generating the first round failed") from exc

        while not self._exit:
            self._render()
            self._frames += 1
            self._handle_event(self._read_event())
            if max_frames is not None and self._frames >= max_frames:
                break

        logger.info(
            "session finished after %d rounds (wins=%d fails=%d)",
            len(self._engine.history()),
            self._engine.wins,
            self._engine.fails,
        )

    def _render(self) -> None:
        try:
            self._renderer.render(self._engine.snapshot())
        except Exception as exc:
            self.request_exit()
            raise SessionError("rendering failed") from exc

    def _read_event(self) -> InputEvent:
        try:
            return self._input.next_event()
        except Exception as exc:
            self.request_exit()
            raise SessionError("reading input failed") from exc

    def _handle_event(self, event: InputEvent) -> None:
        if isinstance(event, ExitKey):
            self.request_exit()
            return
        if not isinstance(event, CharKey):
            return
        try:
            self._engine.submit_char(event.char)
        except Exception as exc:
            self.request_exit()
            raise SessionError(f"handling key event failed: {event!r}") from exc
