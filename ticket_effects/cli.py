"""
cli.py – Resolve ticket effects and badge bars for a batch of events/tickets.

Usage:
    python -m ticket_effects.cli --input samples/sample_input.json --out outputs/summary.json
"""
from __future__ import annotations

import argparse
import datetime
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ticket_effects.config import color_overrides, load_config, preview_today, setup_logging
from ticket_effects.models import EngineInput
from ticket_effects.pipeline import run_pipeline, write_summary

logger = logging.getLogger(__name__)


def _print_separator(title: str = ""):
    width = 72
    if title:
        pad = (width - len(title) - 4) // 2
        print(f"\n{'='*pad} [{title}] {'='*pad}")
    else:
        print("=" * width)


def _bar_layout(segments: List[Dict[str, Any]]) -> str:
    parts = []
    for seg in segments:
        if seg["kind"] == "badge":
            parts.append(f"[{seg['text']}]")
        elif seg["kind"] == "fill":
            parts.append(f"{seg['key']}:{seg['width_pct']:.1f}%")
        else:
            parts.append(f"{seg['nav_key']}({seg['count']}):{seg['width_pct']:.1f}%")
    return " ".join(parts) if parts else "(omitted)"


def _print_summary(summary: Dict[str, Any]):
    """Print summary report to console."""
    _print_separator("TICKETS")
    for item in summary["tickets"]:
        deco = item["decoration"]
        print(f"  #{item['index']} {item['event_name']} ({item['event_date']})")
        print(f"      effect       : {item['effect']}")
        print(f"      header badge : {deco['header_badge'] or '-'}")
        if deco["monthly_color"]:
            mc = deco["monthly_color"]
            print(f"      month colour : {mc['name']} {mc['color1']}/{mc['color2']}")
        print(f"      badge bar    : {_bar_layout(item['badge_bar'])}")
    print()

    _print_separator("EFFECT COUNTS")
    for effect, count in summary["effect_counts"].items():
        print(f"  {effect:<12} {count}")
    print()

    _print_separator("AGGREGATE BAR")
    print(f"  {_bar_layout(summary['aggregate_bar'])}")
    _print_separator()


def _parse_date(value: str) -> datetime.date:
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Ticket special-effect and badge bar resolver"
    )
    parser.add_argument(
        "--input", "-i", required=True,
        help="Path to input JSON (tickets + events)"
    )
    parser.add_argument(
        "--config", "-c", default=None,
        help="Path to YAML config (default: config.yaml)"
    )
    parser.add_argument(
        "--out", "-o", default=None,
        help="Write the JSON summary to this path"
    )
    parser.add_argument(
        "--today", type=_parse_date, default=None,
        help="Pin the current date used for preview tickets (YYYY-MM-DD)"
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true",
        help="Do not print the summary report"
    )
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Config error: %s", e)
        return 1
    setup_logging(cfg)

    input_path = Path(args.input)
    if not input_path.exists():
        logger.error("Input file not found: %s", input_path)
        return 1

    try:
        with open(input_path, "r", encoding="utf-8") as f:
            raw_input = json.load(f)
    except json.JSONDecodeError as e:
        logger.error("Input file is not valid JSON %s: %s", input_path, e)
        return 1

    try:
        engine_input = EngineInput.model_validate(raw_input)
    except ValidationError as e:
        logger.error("Invalid input document %s: %s", input_path, e)
        return 1

    today = args.today or preview_today(cfg)
    logger.info("Input: %s (%d tickets, %d events)",
                input_path, len(engine_input.tickets), len(engine_input.events))

    summary = run_pipeline(
        engine_input,
        color_overrides=color_overrides(cfg, "features"),
        badge_color_overrides=color_overrides(cfg, "badges"),
        today=today,
    )

    if args.out:
        write_summary(args.out, summary)

    if not args.quiet:
        _print_summary(summary)

    logger.info("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
