"""Fleet-wide feature prevalence bar.

Segments are sized by share of all flag occurrences and arranged with the
most common feature in the middle, smaller ones alternating outward.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Optional, Sequence, TypeVar, Union

from .feature_flags import FEATURE_FLAGS
from .models import EventAttributes, EventEntry, Segment, SegmentKind
from .palette import FEATURE_COLORS, merge_colors

logger = logging.getLogger(__name__)

T = TypeVar("T")


def center_out(items: Sequence[T]) -> List[T]:
    """Even positions go to the right end, odd positions to the left end.

    ``[A, B, C, D]`` becomes ``[D, B, A, C]``.
    """
    arranged: List[T] = []
    for index, item in enumerate(items):
        if index % 2 == 0:
            arranged.append(item)
        else:
            arranged.insert(0, item)
    return arranged


def _events(entries: Iterable[Union[EventEntry, EventAttributes]]) -> List[EventAttributes]:
    return [entry.event if isinstance(entry, EventEntry) else entry for entry in entries]


def compose_aggregate_bar(
    entries: Iterable[Union[EventEntry, EventAttributes]],
    color_overrides: Optional[Mapping[str, str]] = None,
) -> List[Segment]:
    events = _events(entries)
    colors = merge_colors(FEATURE_COLORS, color_overrides)

    counted = []
    for flag in FEATURE_FLAGS:
        count = sum(1 for event in events if flag.counted(event))
        if count > 0:
            counted.append((flag, count))

    total = sum(count for _, count in counted)
    if total == 0:
        return []

    ranked = sorted(counted, key=lambda pair: pair[1], reverse=True)
    arranged = center_out(ranked)
    last = len(arranged) - 1

    segments = [
        Segment(
            kind=SegmentKind.aggregate,
            key=flag.key,
            color=colors[flag.key],
            label=flag.label,
            count=count,
            width_pct=count / total * 100,
            nav_key=flag.nav_key,
            nav_path=f"/type/{flag.nav_key}",
            title=f"{flag.label} ({count} event{'s' if count > 1 else ''})",
            rounded_start=index == 0,
            rounded_end=index == last,
        )
        for index, (flag, count) in enumerate(arranged)
    ]
    logger.debug("Aggregate bar over %d events: %s", len(events), [s.key for s in segments])
    return segments
