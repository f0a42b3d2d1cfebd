"""Built-in calendar/keyword effect rules + literal date helpers.

Event dates are ``YYYY-MM-DD`` strings.  Month and day are always taken
from the literal string components; no timezone-aware date object is ever
built from the raw string, so an event on Dec 25 stays on Dec 25 whatever
the server or viewer timezone.
"""

from __future__ import annotations

import datetime
import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from .models import EffectTag, EventAttributes

logger = logging.getLogger(__name__)

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_LOOSE_MONTH_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})(?!\d)")

NICE_DAY_OF_YEAR = 69


# ── Date decomposition ──────────────────────────────────────────────────────

def parse_event_date(value: Optional[str]) -> Optional[Tuple[int, int, int]]:
    """Split a strict ``YYYY-MM-DD`` string into ``(year, month, day)``.

    Returns None for anything else, including impossible calendar dates
    such as ``2023-02-30``.
    """
    if not value:
        return None
    match = _ISO_DATE_RE.match(value)
    if match is None:
        logger.debug("Event date %r is not YYYY-MM-DD", value)
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        datetime.date(year, month, day)
    except ValueError:
        logger.debug("Event date %r is not a calendar date", value)
        return None
    return year, month, day


def event_month(value: Optional[str]) -> Optional[int]:
    """Best-effort month (1-12) of an event date string.

    Accepts strict dates as well as prefixes such as ``2024-06`` or
    ``2024-06-15T19:00:00Z``; the month is still read from the literal text.
    """
    parsed = parse_event_date(value)
    if parsed is not None:
        return parsed[1]
    if not value:
        return None
    match = _LOOSE_MONTH_RE.match(value)
    if match is None:
        return None
    month = int(match.group(2))
    if 1 <= month <= 12:
        return month
    return None


def day_of_year(year: int, month: int, day: int) -> int:
    """1-based ordinal day: days elapsed since "Jan 0" of ``year``."""
    return (datetime.date(year, month, day) - datetime.date(year, 1, 1)).days + 1


# ── Rule definition ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class EffectRule:
    tag: EffectTag
    priority: int
    predicate: Callable[[EventAttributes], bool]
    description: str = ""

    def matches(self, event: EventAttributes) -> bool:
        return bool(self.predicate(event))


def _on_day(month: int, day: int) -> Callable[[EventAttributes], bool]:
    def predicate(event: EventAttributes) -> bool:
        parsed = parse_event_date(event.date)
        return parsed is not None and parsed[1] == month and parsed[2] == day

    return predicate


def _name_contains(*keywords: str) -> Callable[[EventAttributes], bool]:
    def predicate(event: EventAttributes) -> bool:
        name = (event.name or "").lower()
        return any(keyword in name for keyword in keywords)

    return predicate


def _is_nice_day(event: EventAttributes) -> bool:
    parsed = parse_event_date(event.date)
    return parsed is not None and day_of_year(*parsed) == NICE_DAY_OF_YEAR


def _always(event: EventAttributes) -> bool:
    return True


# ── Default table (declaration order is NOT evaluation order) ──────────────

_DEFAULT_RULES: List[EffectRule] = [
    EffectRule(EffectTag.nice, 100, _is_nice_day, "69th day of the year"),
    EffectRule(EffectTag.pride, 90, _name_contains("pride", "gay"), "Pride keywords in name"),
    EffectRule(EffectTag.hearts, 80, _on_day(2, 14), "Valentine's Day"),
    EffectRule(EffectTag.spooky, 80, _on_day(10, 31), "Halloween"),
    EffectRule(EffectTag.snowflakes, 80, _on_day(12, 25), "Christmas Day"),
    EffectRule(EffectTag.fireworks, 80, _on_day(12, 31), "New Year's Eve"),
    EffectRule(EffectTag.confetti, 70, _name_contains("party"), "Party in name"),
    EffectRule(EffectTag.monthly, 10, _always, "Monthly colour (fallback)"),
]


def get_default_rules() -> List[EffectRule]:
    """Return a copy of the built-in rule table."""
    return list(_DEFAULT_RULES)


def sort_rules(rules: Iterable[EffectRule]) -> List[EffectRule]:
    """Highest priority first; equal priorities keep declaration order."""
    return sorted(rules, key=lambda rule: rule.priority, reverse=True)


def first_matching_rule(
    event: EventAttributes,
    rules: Optional[Iterable[EffectRule]] = None,
) -> Optional[EffectRule]:
    """Re-sort the table and return the first rule matching ``event``."""
    table = sort_rules(_DEFAULT_RULES if rules is None else rules)
    for rule in table:
        if rule.matches(event):
            logger.debug("Rule %s (priority %d) matched %r", rule.tag.value, rule.priority, event.name)
            return rule
    return None
