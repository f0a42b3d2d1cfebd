"""Per-ticket badge bar composition.

Layout, left to right:
  [MISSION] [VALIDATED] [ fill slices (equal width) ] [pass uses]

The mission feature is shown by its text badge, so it never also appears
as a fill slice.  A bar with nothing to show is omitted (empty list).
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from .feature_flags import present_feature_flags
from .models import EventAttributes, ReentryType, Segment, SegmentKind, TicketState
from .palette import BADGE_COLORS, BADGE_TEXT_COLORS, merge_colors

logger = logging.getLogger(__name__)

MISSION_TEXT = "MISSION"
VALIDATED_TEXT = "VALIDATED"
UNLIMITED_USES_TEXT = "∞"
RESALE_STATUS = "for_resale"

_TEXT_BADGE_FLAGS = {"isAdminCreated"}


def pass_uses_text(event: EventAttributes, ticket: Optional[TicketState]) -> Optional[str]:
    """Use-count label for multi-use events, None for single-use ones."""
    reentry = event.reentry_type
    if not reentry or reentry == ReentryType.single_use.value:
        return None
    if reentry == ReentryType.no_limit.value:
        return UNLIMITED_USES_TEXT
    return str(ticket.use_count if ticket is not None else 0)


def _text_badge(key: str, text: str, colors: Mapping[str, str]) -> Segment:
    return Segment(
        kind=SegmentKind.badge,
        key=key,
        color=colors[key],
        text=text,
        text_color=BADGE_TEXT_COLORS[key],
    )


def compose_badge_bar(
    ticket: Optional[TicketState],
    event: EventAttributes,
    show_badges: bool = True,
    color_overrides: Optional[Mapping[str, str]] = None,
    badge_color_overrides: Optional[Mapping[str, str]] = None,
) -> List[Segment]:
    colors = merge_colors(BADGE_COLORS, badge_color_overrides)

    leading: List[Segment] = []
    if event.is_admin_created:
        leading.append(_text_badge("mission", MISSION_TEXT, colors))
    if show_badges and ticket is not None and ticket.is_validated:
        leading.append(_text_badge("validated", VALIDATED_TEXT, colors))

    fills = [
        (item.key, item.color, item.label)
        for item in present_feature_flags(event, color_overrides)
        if item.key not in _TEXT_BADGE_FLAGS
    ]
    if show_badges and ticket is not None:
        if ticket.resell_status == RESALE_STATUS:
            fills.append(("resale", colors["resale"], "For Resale"))
        if ticket.nft_media_url:
            fills.append(("nft", colors["nft"], "NFT Media"))

    trailing: List[Segment] = []
    uses = pass_uses_text(event, ticket) if show_badges else None
    if uses is not None:
        trailing.append(_text_badge("pass", uses, colors))

    if not (leading or fills or trailing):
        return []

    width = 100.0 / len(fills) if fills else 0.0
    middle = [
        Segment(kind=SegmentKind.fill, key=key, color=color, label=label, width_pct=width)
        for key, color, label in fills
    ]
    bar = leading + middle + trailing
    logger.debug("Badge bar for %r: %s", event.name, [s.key for s in bar])
    return bar
