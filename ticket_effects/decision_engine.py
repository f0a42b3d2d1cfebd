"""Effect resolver: one effect tag per (event, ticket) pair.

Precedence (first hit wins):
  1. double golden ticket          → rainbow
  2. saved effect on the ticket    → returned verbatim
  3. effects disabled on the event → none
  4. no ticket / unvalidated real  → none
  5. real validated ticket         → none (effects are saved at validation)
  6. preview ticket                → rule table, monthly as the floor
"""

from __future__ import annotations

import datetime
import logging
from typing import Iterable, Optional

from .catalog import render_kind_for
from .models import (
    EffectTag,
    EffectValue,
    EventAttributes,
    MonthColor,
    TicketDecoration,
    TicketState,
)
from .palette import monthly_color
from .rule_tables import EffectRule, event_month, first_matching_rule

logger = logging.getLogger(__name__)


def effect_month(
    event: EventAttributes,
    ticket: Optional[TicketState] = None,
    today: Optional[datetime.date] = None,
) -> Optional[int]:
    """Month used for the monthly effect.

    Preview tickets look forward to the current calendar month; everything
    else reads the month from the literal event date.
    """
    if ticket is not None and ticket.is_preview:
        return (today or datetime.date.today()).month
    return event_month(event.date)


def resolve(
    event: EventAttributes,
    ticket: Optional[TicketState] = None,
    today: Optional[datetime.date] = None,
    rules: Optional[Iterable[EffectRule]] = None,
) -> EffectValue:
    """Return the single effect tag to display for ``ticket`` of ``event``."""
    if ticket is not None and ticket.is_double_golden:
        return EffectTag.rainbow

    if ticket is not None and ticket.saved_special_effect is not None:
        return ticket.saved_special_effect

    if not event.special_effects_enabled:
        return EffectTag.none

    if ticket is None or (not ticket.is_validated and not ticket.is_preview):
        return EffectTag.none

    if not ticket.is_preview:
        # Real tickets get their effect persisted at validation time.
        # TODO: confirm with product whether unannotated validated tickets
        # should stay effect-less or fall through to the rule table.
        logger.debug("Validated ticket %s has no saved effect", ticket.ticket_number)
        return EffectTag.none

    rule = first_matching_rule(event, rules)
    if rule is None:
        return EffectTag.monthly
    if rule.tag == EffectTag.monthly and effect_month(event, ticket, today) is None:
        return EffectTag.none
    return rule.tag


def get_monthly_color(
    event: EventAttributes,
    ticket: Optional[TicketState] = None,
    today: Optional[datetime.date] = None,
) -> Optional[MonthColor]:
    return monthly_color(effect_month(event, ticket, today))


def describe_ticket_decoration(
    event: EventAttributes,
    ticket: TicketState,
    today: Optional[datetime.date] = None,
    rules: Optional[Iterable[EffectRule]] = None,
) -> TicketDecoration:
    """Combine the resolved effect with golden-ticket state for one ticket.

    The header badge shows rainbow over golden over the monthly gradient.
    """
    effect = resolve(event, ticket, today=today, rules=rules)
    color = get_monthly_color(event, ticket, today) if effect == EffectTag.monthly else None

    if effect == EffectTag.rainbow:
        header: Optional[str] = "rainbow"
    elif ticket.is_golden_ticket:
        header = "golden"
    elif effect == EffectTag.monthly and color is not None:
        header = "monthly"
    else:
        header = None

    return TicketDecoration(
        effect=str(getattr(effect, "value", effect)),
        monthly_color=color,
        header_badge=header,
        has_special_effects=ticket.is_golden_ticket or effect != EffectTag.none,
        render_kind=render_kind_for(effect),
    )
