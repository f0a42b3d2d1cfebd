"""Feature flag extraction: event fields → ordered (key, colour, label) tuples.

The order of ``FEATURE_FLAGS`` is the display order of every bar; it is
never re-sorted per event.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional

from .models import EventAttributes, FeatureFlagTuple
from .palette import FEATURE_COLORS, merge_colors


def _is_set(value: Optional[str]) -> bool:
    return bool(value)


def _is_multi_day(event: EventAttributes) -> bool:
    return _is_set(event.end_date) and event.end_date != event.date


@dataclass(frozen=True)
class FeatureFlag:
    key: str
    label: str
    nav_key: str
    present: Callable[[EventAttributes], bool]
    # presence used when counting across many events
    counted: Callable[[EventAttributes], bool]


FEATURE_FLAGS: List[FeatureFlag] = [
    FeatureFlag("isAdminCreated", "Mission Event", "mission",
                lambda e: e.is_admin_created, lambda e: e.is_admin_created),
    FeatureFlag("goldenTicketEnabled", "Golden Tickets", "golden",
                lambda e: e.golden_ticket_enabled, lambda e: e.golden_ticket_enabled),
    FeatureFlag("specialEffectsEnabled", "Special Effects", "effects",
                lambda e: e.special_effects_enabled, lambda e: e.special_effects_enabled),
    FeatureFlag("surgePricing", "Surge Pricing", "surge",
                lambda e: e.surge_pricing, lambda e: e.surge_pricing),
    FeatureFlag("stickerUrl", "Custom Stickers", "stickers",
                lambda e: _is_set(e.sticker_url), lambda e: _is_set(e.sticker_url)),
    FeatureFlag("p2pValidation", "P2P Validation", "p2p",
                lambda e: e.p2p_validation, lambda e: e.p2p_validation),
    FeatureFlag("allowMinting", "Collectable NFT", "nft",
                lambda e: e.allow_minting, lambda e: e.allow_minting),
    FeatureFlag("geofence", "Location Lock", "geofenced",
                lambda e: e.geofence, lambda e: e.geofence),
    FeatureFlag("enableVoting", "Voting Enabled", "voting",
                lambda e: e.enable_voting, lambda e: e.enable_voting),
    FeatureFlag("recurringType", "Recurring", "recurring",
                lambda e: _is_set(e.recurring_type), lambda e: _is_set(e.recurring_type)),
    FeatureFlag("endDate", "Multi-day", "multiday",
                _is_multi_day, lambda e: _is_set(e.end_date)),
]

FEATURE_KEYS: List[str] = [flag.key for flag in FEATURE_FLAGS]

NAV_KEYS: Dict[str, str] = {flag.key: flag.nav_key for flag in FEATURE_FLAGS}


def extract_feature_flags(
    event: EventAttributes,
    color_overrides: Optional[Mapping[str, str]] = None,
) -> List[FeatureFlagTuple]:
    """Return one tuple per known feature, in fixed order, present or not."""
    colors = merge_colors(FEATURE_COLORS, color_overrides)
    return [
        FeatureFlagTuple(
            key=flag.key,
            color=colors[flag.key],
            label=flag.label,
            present=bool(flag.present(event)),
        )
        for flag in FEATURE_FLAGS
    ]


def present_feature_flags(
    event: EventAttributes,
    color_overrides: Optional[Mapping[str, str]] = None,
) -> List[FeatureFlagTuple]:
    return [item for item in extract_feature_flags(event, color_overrides) if item.present]
