from __future__ import annotations

from enum import Enum

from .round_engine import RoundSnapshot
from .segments import SegmentKind

STAT_TITLES = (" WINS ", " FAILS ")


class SegmentStyle(str, Enum):
    DEFAULT = "default"
    HIT = "hit"
    MISS = "miss"


def style_for(kind: SegmentKind, miss_this_round: bool) -> SegmentStyle:
    if kind is SegmentKind.HIT:
        return SegmentStyle.HIT
    # Untyped text turns red once the round can no longer count as a win.
    return SegmentStyle.MISS if miss_this_round else SegmentStyle.DEFAULT


def styled_runs(snapshot: RoundSnapshot) -> list[tuple[str, SegmentStyle]]:
    return [
        (segment.text, style_for(segment.kind, snapshot.miss_this_round))
        for segment in snapshot.segments
        if segment.text
    ]


def stat_values(snapshot: RoundSnapshot) -> tuple[str, str]:
    return (str(snapshot.wins), str(snapshot.fails))
