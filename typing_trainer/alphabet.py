from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol

DIGITS: tuple[str, ...] = tuple("0123456789")
LETTERS: tuple[str, ...] = tuple("abcdefghijklmnopqrstuvwxyz")
# Double quote is listed twice; kept so the table stays 31 entries wide.
SPECIALS: tuple[str, ...] = (
    "!", "@", "#", "$", "%", "^", "&", "*", "(", ")", "-", "_", "+", "=", "{", "}",
    "[", "]", "|", "\\", ":", ";", '"', '"', "<", ">", ",", ".", "/", "?", "`",
)


class SymbolPicker(Protocol):
    """Uniform pick from a finite, non-empty sequence."""

    def choice(self, seq: Sequence[str]) -> str:
        ...


class TargetGenerator(Protocol):
    def next_target(self) -> str:
        ...


class SeededRng:
    """Simple seeded RNG wrapper to keep deterministic streams explicit."""

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = random.SystemRandom().randint(1, 2**31 - 1)
        self._seed = int(seed)
        self._rng = random.Random(self._seed)

    @property
    def seed(self) -> int:
        return self._seed

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def choice(self, seq: Sequence[str]) -> str:
        return self._rng.choice(seq)


class RandomPairGenerator:
    """Draws ``length`` symbols independently from ``alphabet`` for each round.

    The defaults are the game's only mode: two lowercase letters.
    """

    def __init__(self, rng: SymbolPicker, *, alphabet: Sequence[str] = LETTERS, length: int = 2) -> None:
        if not alphabet:
            raise ValueError("alphabet must not be empty")
        if length < 1:
            raise ValueError("length must be >= 1")
        self._rng = rng
        self._alphabet = tuple(alphabet)
        self._length = int(length)

    @property
    def length(self) -> int:
        return self._length

    def next_target(self) -> str:
        return "".join(self._rng.choice(self._alphabet) for _ in range(self._length))
