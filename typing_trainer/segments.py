from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class SegmentKind(str, Enum):
    HIT = "hit"
    PENDING = "pending"


@dataclass(frozen=True, slots=True)
class TextSegment:
    """Plain text tagged with how it was typed. Styling is left to renderers."""

    kind: SegmentKind
    text: str

    @classmethod
    def hit(cls, text: str) -> "TextSegment":
        return cls(kind=SegmentKind.HIT, text=text)

    @classmethod
    def pending(cls, text: str) -> "TextSegment":
        return cls(kind=SegmentKind.PENDING, text=text)


def append_hit(segments: tuple[TextSegment, ...], ch: str) -> tuple[TextSegment, ...]:
    """Return ``segments`` with ``ch`` added as correctly typed text.

    Consecutive hits coalesce into the trailing HIT segment.
    """

    if segments and segments[-1].kind is SegmentKind.HIT:
        last = segments[-1]
        return (*segments[:-1], TextSegment.hit(last.text + ch))
    return (*segments, TextSegment.hit(ch))


def plain_text(segments: Iterable[TextSegment]) -> str:
    return "".join(s.text for s in segments)
