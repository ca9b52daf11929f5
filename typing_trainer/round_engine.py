from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .alphabet import TargetGenerator
from .segments import TextSegment, append_hit

logger = logging.getLogger(__name__)

COUNTER_MAX = 255


class InvariantViolation(RuntimeError):
    """Internal state reached a configuration the engine never produces."""


class KeyOutcome(str, Enum):
    HIT = "hit"
    MISS = "miss"
    ROUND_WON = "round_won"
    ROUND_FAILED = "round_failed"


class RoundOutcome(str, Enum):
    WIN = "win"
    FAIL = "fail"


@dataclass(frozen=True, slots=True)
class CompletedRound:
    index: int
    target: str
    outcome: RoundOutcome


@dataclass(frozen=True, slots=True)
class RoundSnapshot:
    """View model for renderers (pure data)."""

    segments: tuple[TextSegment, ...]
    remainder: str
    miss_this_round: bool
    wins: int
    fails: int
    round_index: int


class RoundEngine:
    """Matches keystrokes against the current target and keeps score.

    - Only the leading character of the remainder is ever tested.
    - A miss never advances; it only marks the round as failed-on-completion.
    - Completing a round immediately deals the next one.
    """

    def __init__(self, *, generator: TargetGenerator) -> None:
        self._generator = generator

        self._target = ""
        self._remainder = ""
        self._hit_segments: tuple[TextSegment, ...] = ()
        self._miss_this_round = False
        self._round_index = 0
        self._started = False

        self._wins = 0
        self._fails = 0
        self._history: list[CompletedRound] = []

    @property
    def target(self) -> str:
        return self._target

    @property
    def remainder(self) -> str:
        return self._remainder

    @property
    def hit_segments(self) -> tuple[TextSegment, ...]:
        return self._hit_segments

    @property
    def miss_this_round(self) -> bool:
        return self._miss_this_round

    @property
    def wins(self) -> int:
        return self._wins

    @property
    def fails(self) -> int:
        return self._fails

    @property
    def round_index(self) -> int:
        return self._round_index

    def history(self) -> list[CompletedRound]:
        return list(self._history)

    def start_round(self) -> None:
        target = self._generator.next_target()
        if not target:
            raise InvariantViolation("generator produced an empty target")

        self._target = target
        self._remainder = target
        self._hit_segments = ()
        self._miss_this_round = False
        self._round_index += 1
        self._started = True
        logger.debug("round %d started, target=%r", self._round_index, target)

    def submit_char(self, ch: str) -> KeyOutcome:
        if len(ch) != 1:
            raise ValueError("submit_char expects exactly one character")
        if not self._started:
            raise InvariantViolation("no round in progress")
        if not self._remainder:
            raise InvariantViolation("remainder is empty but the round was not completed")

        if not self._remainder.startswith(ch):
            self._miss_this_round = True
            logger.debug("miss %r, expected %r", ch, self._remainder[0])
            return KeyOutcome.MISS

        new_remainder = self._remainder[1:]
        if not new_remainder:
            return self._complete_round()

        self._hit_segments = append_hit(self._hit_segments, ch)
        self._remainder = new_remainder
        logger.debug("hit %r, remainder=%r", ch, new_remainder)
        return KeyOutcome.HIT

    def segments(self) -> tuple[TextSegment, ...]:
        return (*self._hit_segments, TextSegment.pending(self._remainder))

    def snapshot(self) -> RoundSnapshot:
        return RoundSnapshot(
            segments=self.segments(),
            remainder=self._remainder,
            miss_this_round=self._miss_this_round,
            wins=self._wins,
            fails=self._fails,
            round_index=self._round_index,
        )

    def _complete_round(self) -> KeyOutcome:
        if self._miss_this_round:
            outcome = RoundOutcome.FAIL
            self._fails = min(COUNTER_MAX, self._fails + 1)
        else:
            outcome = RoundOutcome.WIN
            self._wins = min(COUNTER_MAX, self._wins + 1)

        self._history.append(CompletedRound(index=self._round_index, target=self._target, outcome=outcome))
        logger.debug(
            "round %d complete: %s (wins=%d fails=%d)",
            self._round_index,
            outcome.value,
            self._wins,
            self._fails,
        )

        self.start_round()
        return KeyOutcome.ROUND_WON if outcome is RoundOutcome.WIN else KeyOutcome.ROUND_FAILED
