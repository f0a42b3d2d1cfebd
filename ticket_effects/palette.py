"""Static colour tables: monthly gradients, feature flags, fixed badges.

Month indices are 1-based (1 = January).
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Mapping, Optional

from .models import MonthColor

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

# ── Monthly palette (month → two-colour gradient) ──────────────────────────
MONTHLY_PALETTE: Dict[int, MonthColor] = {
    1: MonthColor(name="Navy Blue", color1="#002366", color2="#003380"),
    2: MonthColor(name="Crimson", color1="#DC143C", color2="#B91C3C"),
    3: MonthColor(name="Emerald", color1="#008000", color2="#00A000"),
    4: MonthColor(name="Bright Pink", color1="#FF69B4", color2="#FF1493"),
    5: MonthColor(name="Leaf Green", color1="#32CD32", color2="#3CB371"),
    6: MonthColor(name="Sky Blue", color1="#1E90FF", color2="#87CEEB"),
    7: MonthColor(name="Pure Red", color1="#FF0000", color2="#CC0000"),
    8: MonthColor(name="Golden", color1="#FFD700", color2="#FFA500"),
    9: MonthColor(name="Orange", color1="#FF8C00", color2="#FF6347"),
    10: MonthColor(name="Pumpkin", color1="#FF4500", color2="#FF6347"),
    11: MonthColor(name="Brown", color1="#8B4513", color2="#A0522D"),
    12: MonthColor(name="Holiday Green", color1="#006400", color2="#228B22"),
}

# ── Feature flag colours (key → hex) ────────────────────────────────────────
FEATURE_COLORS: Dict[str, str] = {
    "isAdminCreated": "#DC2626",         # red
    "goldenTicketEnabled": "#FFD700",    # gold
    "specialEffectsEnabled": "#9333EA",  # purple
    "surgePricing": "#DC2626",           # red
    "stickerUrl": "#EC4899",             # pink
    "p2pValidation": "#3B82F6",          # blue
    "allowMinting": "#000000",           # black
    "geofence": "#F59E0B",               # orange
    "enableVoting": "#EAB308",           # yellow
    "recurringType": "#059669",          # green
    "endDate": "#6B7280",                # gray
}

# ── Fixed badge / extra segment colours ─────────────────────────────────────
BADGE_COLORS: Dict[str, str] = {
    "mission": "#DC2626",
    "validated": "#059669",
    "pass": "#0DCAF0",
    "resale": "#FFC107",
    "nft": "#17A2B8",
}

BADGE_TEXT_COLORS: Dict[str, str] = {
    "mission": "#FFFFFF",
    "validated": "#FFFFFF",
    "pass": "#000000",
}


def monthly_color(month: Optional[int]) -> Optional[MonthColor]:
    if month is None:
        return None
    return MONTHLY_PALETTE.get(month)


def is_hex_color(value: object) -> bool:
    return isinstance(value, str) and bool(_HEX_RE.match(value))


def merge_colors(
    defaults: Mapping[str, str],
    overrides: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Return ``defaults`` with valid ``overrides`` applied.

    Overrides for unknown keys or with malformed hex values are dropped.
    """
    merged = dict(defaults)
    if not overrides:
        return merged
    for key, value in overrides.items():
        if key not in merged:
            logger.warning("Ignoring colour override for unknown key %r", key)
            continue
        if not is_hex_color(value):
            logger.warning("Ignoring colour override %r=%r (expected #RRGGBB)", key, value)
            continue
        merged[key] = value.upper()
    return merged
