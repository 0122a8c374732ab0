"""Reporting of the time spent by serializers."""

from __future__ import annotations

import math
import sys
from typing import Iterable, Protocol, Sequence


class _TimedSerializer(Protocol):
    name: str

    def accumulated_time(self) -> int: ...


def summarize_serializers(
    serializers_per_lane: Iterable[Sequence[_TimedSerializer]],
) -> list[tuple[str, int]]:
    """Print the time each serializer took, summed over lanes, slowest first.

    Times are in microseconds. Returns the (name, time) pairs in printed order.
    """
    totals: list[list] = []
    total_time = 0
    for lane_number, serializers in enumerate(serializers_per_lane):
        if lane_number == 0:
            totals = [[s.name, s.accumulated_time()] for s in serializers]
            total_time += sum(entry[1] for entry in totals)
            continue
        if len(serializers) != len(totals):
            raise ValueError("every lane must have the same number of serializers")
        for entry, serializer in zip(totals, serializers):
            spent = serializer.accumulated_time()
            entry[1] += spent
            total_time += spent

    ordered = sorted(((name, spent) for name, spent in totals), key=lambda p: p[1], reverse=True)

    print(f"Serialization total time: {total_time}us")
    print("Serialization times")
    for name, spent in ordered:
        percent = 100.0 * spent / total_time if total_time else math.nan
        print(f"time: {spent}us {percent:.4g}%\tname: {name}")
    sys.stdout.flush()
    return ordered