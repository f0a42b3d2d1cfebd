"""Batch orchestrator.

Runs: effect resolution → ticket decoration → badge bars →
      aggregate bar → JSON summary.
"""

from __future__ import annotations

import datetime
import json
import logging
import os
from collections import Counter
from typing import Any, Dict, List, Mapping, Optional

from .aggregate_bar import compose_aggregate_bar
from .badge_bar import compose_badge_bar
from .decision_engine import describe_ticket_decoration, resolve
from .models import EngineInput, EventEntry, TicketRequest, TicketState

logger = logging.getLogger(__name__)


def _ticket_summary(
    index: int,
    request: TicketRequest,
    color_overrides: Optional[Mapping[str, str]],
    badge_color_overrides: Optional[Mapping[str, str]],
    today: Optional[datetime.date],
) -> Dict[str, Any]:
    event, ticket = request.event, request.ticket
    effect = resolve(event, ticket, today=today)
    decoration = describe_ticket_decoration(event, ticket or TicketState(), today=today)
    bar = compose_badge_bar(
        ticket,
        event,
        show_badges=request.show_badges,
        color_overrides=color_overrides,
        badge_color_overrides=badge_color_overrides,
    )
    return {
        "index": index,
        "event_name": event.name,
        "event_date": event.date,
        "ticket_number": ticket.ticket_number if ticket else None,
        "effect": str(getattr(effect, "value", effect)),
        "decoration": decoration.model_dump(mode="json"),
        "badge_bar": [segment.model_dump(mode="json") for segment in bar],
    }


def run_pipeline(
    engine_input: EngineInput,
    color_overrides: Optional[Mapping[str, str]] = None,
    badge_color_overrides: Optional[Mapping[str, str]] = None,
    today: Optional[datetime.date] = None,
) -> Dict[str, Any]:
    """Resolve every ticket request and the aggregate bar.

    The aggregate bar covers ``engine_input.events`` when given, otherwise
    the events of the ticket requests.

    Returns:
        dict with keys: tickets, aggregate_bar, effect_counts, metadata
    """
    logger.info("Step 1: Resolving %d ticket request(s)", len(engine_input.tickets))
    tickets: List[Dict[str, Any]] = [
        _ticket_summary(i, request, color_overrides, badge_color_overrides, today)
        for i, request in enumerate(engine_input.tickets)
    ]

    entries = engine_input.events or [EventEntry(event=r.event) for r in engine_input.tickets]
    logger.info("Step 2: Composing aggregate bar over %d event(s)", len(entries))
    aggregate = compose_aggregate_bar(entries, color_overrides=color_overrides)

    effect_counts = Counter(item["effect"] for item in tickets)

    logger.info("Pipeline complete.")
    return {
        "tickets": tickets,
        "aggregate_bar": [segment.model_dump(mode="json") for segment in aggregate],
        "effect_counts": dict(sorted(effect_counts.items())),
        "metadata": engine_input.metadata,
    }


def write_summary(path: str, summary: Dict[str, Any]) -> str:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2, ensure_ascii=False, default=str)
    logger.info("Wrote summary: %s", path)
    return path
