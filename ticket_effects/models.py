"""Pydantic data models for the ticket visual classification engine.

Input records (events, tickets) arrive from the event/ticket store as
camelCase JSON; every field also accepts its snake_case name.
Colours are always ``#RRGGBB`` hex strings.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ── Enums ───────────────────────────────────────────────────────────────────
class EffectTag(str, Enum):
    snowflakes = "snowflakes"
    confetti = "confetti"
    fireworks = "fireworks"
    hearts = "hearts"
    spooky = "spooky"
    pride = "pride"
    nice = "nice"
    monthly = "monthly"
    rainbow = "rainbow"
    sticker = "sticker"
    none = "none"


class ReentryType(str, Enum):
    single_use = "No Reentry (Single Use)"
    pass_multiple_use = "Pass (Multiple Use)"
    no_limit = "No Limit"


class SegmentKind(str, Enum):
    badge = "badge"
    fill = "fill"
    aggregate = "aggregate"


class RenderKind(str, Enum):
    particles = "particles"
    glow = "glow"
    none = "none"


# ── Input Models ────────────────────────────────────────────────────────────
class _StoreRecord(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class EventAttributes(_StoreRecord):
    name: str = ""
    date: str = ""  # literal YYYY-MM-DD
    special_effects_enabled: bool = False
    sticker_url: Optional[str] = None
    is_admin_created: bool = False
    golden_ticket_enabled: bool = False
    surge_pricing: bool = False
    p2p_validation: bool = Field(default=False, alias="p2pValidation")
    allow_minting: bool = False
    geofence: bool = False
    enable_voting: bool = False
    recurring_type: Optional[str] = None
    end_date: Optional[str] = None
    reentry_type: Optional[str] = ReentryType.single_use.value


class TicketState(_StoreRecord):
    is_validated: Optional[bool] = None
    is_golden_ticket: bool = False
    is_double_golden: bool = False
    saved_special_effect: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("savedSpecialEffect", "specialEffect"),
    )
    is_preview: bool = False
    use_count: int = 0
    resell_status: Optional[str] = None
    nft_media_url: Optional[str] = None
    ticket_number: Optional[str] = None


class EventEntry(_StoreRecord):
    """Wrapper shape used by event listings (``{"event": {...}}``)."""

    event: EventAttributes


# ── Output Models ───────────────────────────────────────────────────────────
class MonthColor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    color1: str
    color2: str


class FeatureFlagTuple(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    color: str
    label: str
    present: bool


class Segment(BaseModel):
    """One slot of a badge bar or aggregate bar."""

    model_config = ConfigDict(frozen=True)

    kind: SegmentKind
    key: str
    color: str
    label: str = ""
    text: str = ""
    text_color: Optional[str] = None
    width_pct: Optional[float] = None
    count: Optional[int] = None
    nav_key: Optional[str] = None
    nav_path: Optional[str] = None
    title: str = ""
    rounded_start: bool = False
    rounded_end: bool = False


class EffectInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: EffectTag
    name: str
    description: str
    render_kind: RenderKind


class TicketDecoration(BaseModel):
    model_config = ConfigDict(frozen=True)

    effect: str
    monthly_color: Optional[MonthColor] = None
    header_badge: Optional[str] = None  # "rainbow" | "golden" | "monthly"
    has_special_effects: bool = False
    render_kind: RenderKind = RenderKind.none


# ── Batch Input ─────────────────────────────────────────────────────────────
class TicketRequest(_StoreRecord):
    event: EventAttributes
    ticket: Optional[TicketState] = None
    show_badges: bool = True


class EngineInput(_StoreRecord):
    """Top-level document consumed by the pipeline and CLI."""

    tickets: List[TicketRequest] = Field(default_factory=list)
    events: List[EventEntry] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)


EffectValue = Union[EffectTag, str]
