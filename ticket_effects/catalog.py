"""Effect catalog for editors and the rendering layer.

The rendering layer owns animation; it only needs to know which tags are
particle effects and which are glows, plus safe names for unknown tags.
"""

from __future__ import annotations

import calendar
import datetime
from typing import Dict, List, Optional

from .models import EffectInfo, EffectTag, EffectValue, EventAttributes, RenderKind, TicketState

PREVIEW_TICKET_NUMBER = "PREVIEW-001"

_RENDER_KINDS: Dict[EffectTag, RenderKind] = {
    EffectTag.snowflakes: RenderKind.particles,
    EffectTag.confetti: RenderKind.particles,
    EffectTag.fireworks: RenderKind.particles,
    EffectTag.hearts: RenderKind.particles,
    EffectTag.spooky: RenderKind.particles,
    EffectTag.sticker: RenderKind.particles,
    EffectTag.nice: RenderKind.glow,
    EffectTag.pride: RenderKind.glow,
    EffectTag.monthly: RenderKind.glow,
    EffectTag.rainbow: RenderKind.glow,
    EffectTag.none: RenderKind.none,
}

# (tag, name, description) in the order the event editor offers them
_CATALOG_ROWS = [
    (EffectTag.monthly, "{month} Color", "Colour glow themed on the event month"),
    (EffectTag.snowflakes, "Christmas (Dec. 25 Only)", "Falling snowflakes"),
    (EffectTag.confetti, "Confetti (Party Events)", "Confetti burst for party events"),
    (EffectTag.fireworks, "New Year's (Dec. 31 Only)", "Firework bursts"),
    (EffectTag.hearts, "Valentine's (Feb. 14 Only)", "Falling hearts"),
    (EffectTag.spooky, "Halloween (Oct. 31 Only)", "Floating ghosts and fog"),
    (EffectTag.pride, "Pride (June + Keywords)", "Rainbow glow for pride events"),
    (EffectTag.nice, "Nice Day (Mar. 10 Only)", "Glow on the 69th day of the year"),
    (EffectTag.rainbow, "Super RGB (Rare)", "Animated rainbow for double golden tickets"),
    (EffectTag.sticker, "Custom Sticker", "Floating event stickers"),
]

# assigned from the event sticker, never offered by the editor cycle
_NOT_CYCLED = {EffectTag.sticker}


def render_kind_for(tag: EffectValue) -> RenderKind:
    known = coerce_effect_tag(tag)
    if known is None:
        return RenderKind.none
    return _RENDER_KINDS[known]


def coerce_effect_tag(value: Optional[EffectValue]) -> Optional[EffectTag]:
    """Map a (possibly server-introduced) tag string to ``EffectTag``."""
    if value is None:
        return None
    try:
        return EffectTag(value)
    except ValueError:
        return None


def effect_catalog(today: Optional[datetime.date] = None) -> List[EffectInfo]:
    month_name = calendar.month_name[(today or datetime.date.today()).month]
    return [
        EffectInfo(
            tag=tag,
            name=name.format(month=month_name),
            description=description,
            render_kind=_RENDER_KINDS[tag],
        )
        for tag, name, description in _CATALOG_ROWS
    ]


def effect_display_name(tag: EffectValue, today: Optional[datetime.date] = None) -> str:
    known = coerce_effect_tag(tag)
    if known is EffectTag.none:
        return "None"
    for info in effect_catalog(today):
        if info.tag is known:
            return info.name
    return str(getattr(tag, "value", tag)).replace("_", " ").title()


def preview_effect_cycle(index: int, today: Optional[datetime.date] = None) -> EffectInfo:
    cycle = [info for info in effect_catalog(today) if info.tag not in _NOT_CYCLED]
    return cycle[index % len(cycle)]


def build_preview_ticket(
    event: EventAttributes,
    effect: Optional[EffectValue] = None,
) -> TicketState:
    """Synthetic, non-persisted ticket used by the event editor preview."""
    has_sticker = bool(event.sticker_url)
    saved = effect if effect is not None else ("sticker" if has_sticker else None)
    return TicketState(
        is_preview=True,
        is_validated=event.special_effects_enabled or has_sticker,
        is_golden_ticket=event.golden_ticket_enabled and not event.special_effects_enabled,
        is_double_golden=effect == EffectTag.rainbow,
        saved_special_effect=None if saved is None else str(getattr(saved, "value", saved)),
        ticket_number=PREVIEW_TICKET_NUMBER,
    )
