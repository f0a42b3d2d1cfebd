"""Tests for the effect catalog and the editor preview ticket."""

from __future__ import annotations

import datetime

import pytest

from ticket_effects.catalog import (
    build_preview_ticket,
    coerce_effect_tag,
    effect_catalog,
    effect_display_name,
    preview_effect_cycle,
    render_kind_for,
)
from ticket_effects.decision_engine import resolve
from ticket_effects.models import EffectTag, EventAttributes, RenderKind

MARCH = datetime.date(2025, 3, 20)


class TestCatalog:

    def test_every_tag_but_none_is_listed_once(self):
        tags = [info.tag for info in effect_catalog(MARCH)]
        assert sorted(t.value for t in tags) == sorted(t.value for t in EffectTag if t is not EffectTag.none)
        assert tags[0] == EffectTag.monthly

    def test_monthly_name_follows_current_month(self):
        assert effect_catalog(MARCH)[0].name == "March Color"
        assert effect_display_name("monthly", datetime.date(2024, 12, 1)) == "December Color"

    def test_display_names(self):
        assert effect_display_name(EffectTag.rainbow) == "Super RGB (Rare)"
        assert effect_display_name("none") == "None"
        assert effect_display_name("aurora_borealis") == "Aurora Borealis"

    def test_coerce(self):
        assert coerce_effect_tag("spooky") is EffectTag.spooky
        assert coerce_effect_tag("aurora") is None
        assert coerce_effect_tag(None) is None

    @pytest.mark.parametrize(
        "tag,kind",
        [
            ("snowflakes", RenderKind.particles),
            ("sticker", RenderKind.particles),
            ("nice", RenderKind.glow),
            ("monthly", RenderKind.glow),
            ("none", RenderKind.none),
            ("aurora", RenderKind.none),
        ],
    )
    def test_render_kinds(self, tag, kind):
        assert render_kind_for(tag) == kind

    def test_preview_cycle_wraps(self):
        assert preview_effect_cycle(0, MARCH).tag == EffectTag.monthly
        assert preview_effect_cycle(9, MARCH).tag == EffectTag.monthly
        assert preview_effect_cycle(10, MARCH).tag == EffectTag.snowflakes
        assert preview_effect_cycle(-1, MARCH).tag == EffectTag.rainbow

    def test_preview_cycle_skips_sticker(self):
        cycled = [preview_effect_cycle(i, MARCH).tag for i in range(9)]
        assert EffectTag.sticker not in cycled
        assert len(set(cycled)) == 9
        assert EffectTag.sticker in [info.tag for info in effect_catalog(MARCH)]


class TestPreviewTicket:

    def test_rainbow_preview(self):
        event = EventAttributes(name="Launch", date="2024-05-01", special_effects_enabled=True, golden_ticket_enabled=True)
        ticket = build_preview_ticket(event, EffectTag.rainbow)
        assert ticket.is_preview
        assert ticket.is_validated
        assert ticket.is_double_golden
        assert not ticket.is_golden_ticket
        assert ticket.saved_special_effect == "rainbow"
        assert ticket.ticket_number == "PREVIEW-001"
        assert resolve(event, ticket) == EffectTag.rainbow

    def test_golden_without_effects(self):
        event = EventAttributes(golden_ticket_enabled=True)
        ticket = build_preview_ticket(event)
        assert ticket.is_golden_ticket
        assert not ticket.is_validated
        assert ticket.saved_special_effect is None

    def test_sticker_fallback(self):
        event = EventAttributes(sticker_url="/objects/s.png")
        ticket = build_preview_ticket(event)
        assert ticket.is_validated
        assert ticket.saved_special_effect == "sticker"
        assert resolve(event, ticket) == "sticker"

    def test_chosen_effect_is_shown(self):
        event = EventAttributes(name="Quiet", date="2024-05-01", special_effects_enabled=True)
        ticket = build_preview_ticket(event, "hearts")
        assert resolve(event, ticket) == "hearts"

    def test_no_choice_uses_rule_table(self):
        event = EventAttributes(name="Quiet", date="2024-10-31", special_effects_enabled=True)
        assert resolve(event, build_preview_ticket(event)) == EffectTag.spooky
