"""End-to-end tests: pipeline over the sample input, CLI, config loading."""

from __future__ import annotations

import datetime
import json
from pathlib import Path

import pytest

from ticket_effects.cli import main
from ticket_effects.config import color_overrides, load_config, preview_today
from ticket_effects.models import EngineInput
from ticket_effects.pipeline import run_pipeline, write_summary

SAMPLE_INPUT = Path(__file__).resolve().parent.parent / "samples" / "sample_input.json"


@pytest.fixture
def engine_input() -> EngineInput:
    with open(SAMPLE_INPUT, encoding="utf-8") as f:
        return EngineInput.model_validate(json.load(f))


class TestPipeline:

    def test_effects(self, engine_input):
        summary = run_pipeline(engine_input, today=datetime.date(2024, 6, 1))
        assert [t["effect"] for t in summary["tickets"]] == ["pride", "snowflakes", "rainbow", "none"]
        assert summary["effect_counts"] == {"none": 1, "pride": 1, "rainbow": 1, "snowflakes": 1}
        assert summary["metadata"] == {"source": "sample"}

    def test_badge_bars(self, engine_input):
        tickets = run_pipeline(engine_input)["tickets"]
        keys = [[seg["key"] for seg in t["badge_bar"]] for t in tickets]
        assert keys[0] == ["mission", "validated", "goldenTicketEnabled", "specialEffectsEnabled"]
        assert keys[1] == ["specialEffectsEnabled", "stickerUrl", "pass"]
        assert keys[2] == ["validated", "specialEffectsEnabled", "allowMinting", "endDate", "resale", "nft", "pass"]
        assert keys[3] == []
        assert tickets[1]["badge_bar"][-1]["text"] == "2"
        assert tickets[2]["badge_bar"][-1]["text"] == "∞"

    def test_decorations(self, engine_input):
        tickets = run_pipeline(engine_input)["tickets"]
        assert tickets[2]["decoration"]["header_badge"] == "rainbow"
        assert tickets[1]["decoration"]["render_kind"] == "particles"
        assert tickets[3]["decoration"]["has_special_effects"] is False

    def test_aggregate_bar(self, engine_input):
        bar = run_pipeline(engine_input)["aggregate_bar"]
        assert [s["nav_key"] for s in bar] == ["geofenced", "golden", "effects", "p2p", "multiday"]
        assert sum(s["width_pct"] for s in bar) == pytest.approx(100.0)

    def test_aggregate_falls_back_to_ticket_events(self, engine_input):
        only_tickets = EngineInput(tickets=engine_input.tickets)
        bar = run_pipeline(only_tickets)["aggregate_bar"]
        counts = {s["key"]: s["count"] for s in bar}
        assert counts["specialEffectsEnabled"] == 3

    def test_feature_color_override(self, engine_input):
        summary = run_pipeline(engine_input, color_overrides={"goldenTicketEnabled": "#111111"})
        golden = [s for s in summary["aggregate_bar"] if s["key"] == "goldenTicketEnabled"]
        assert golden[0]["color"] == "#111111"

    def test_write_summary(self, engine_input, tmp_path):
        path = write_summary(str(tmp_path / "out" / "summary.json"), run_pipeline(engine_input))
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        assert len(data["tickets"]) == 4


class TestCli:

    def test_run_writes_summary(self, tmp_path, capsys):
        out = tmp_path / "summary.json"
        code = main(["--input", str(SAMPLE_INPUT), "--out", str(out), "--today", "2024-06-01"])
        assert code == 0
        assert json.loads(out.read_text(encoding="utf-8"))["tickets"][1]["effect"] == "snowflakes"
        assert "AGGREGATE BAR" in capsys.readouterr().out

    def test_quiet(self, capsys):
        assert main(["--input", str(SAMPLE_INPUT), "--quiet"]) == 0
        assert "TICKETS" not in capsys.readouterr().out

    def test_missing_input(self, tmp_path):
        assert main(["--input", str(tmp_path / "nope.json"), "--quiet"]) == 1

    def test_invalid_input(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"tickets": [{"event": {"name": ["not", "a", "string"]}}]}), encoding="utf-8")
        assert main(["--input", str(bad), "--quiet"]) == 1

    def test_input_not_json(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        assert main(["--input", str(bad), "--quiet"]) == 1

    def test_missing_config(self, tmp_path):
        assert main(["-i", str(SAMPLE_INPUT), "-c", str(tmp_path / "missing.yaml"), "-q"]) == 1

    def test_bad_today(self):
        with pytest.raises(SystemExit):
            main(["--input", str(SAMPLE_INPUT), "--today", "June"])


class TestConfig:

    def test_defaults_when_default_file_missing(self, monkeypatch, tmp_path):
        monkeypatch.setattr("ticket_effects.config.DEFAULT_CONFIG_PATH", tmp_path / "config.yaml")
        cfg = load_config()
        assert cfg["logging"]["level"] == "INFO"
        assert preview_today(cfg) is None

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)

    def test_overrides_and_preview_date(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "logging:\n  level: debug\n"
            "colors:\n  features:\n    geofence: '#ABCDEF'\n    voting: purple\n"
            "preview:\n  today: 2024-06-01\n",
            encoding="utf-8",
        )
        cfg = load_config(path)
        assert cfg["logging"]["level"] == "debug"
        assert cfg["colors"]["badges"] == {}
        assert color_overrides(cfg, "features") == {"geofence": "#ABCDEF"}
        assert preview_today(cfg) == datetime.date(2024, 6, 1)

    def test_bad_preview_date(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("preview:\n  today: June\n", encoding="utf-8")
        with pytest.raises(ValueError, match="preview.today"):
            load_config(path)
        assert main(["-i", str(SAMPLE_INPUT), "-c", str(path), "-q"]) == 1

    def test_cli_uses_config(self, tmp_path):
        cfg_path = tmp_path / "config.yaml"
        cfg_path.write_text("colors:\n  badges:\n    mission: '#00FF00'\n", encoding="utf-8")
        out = tmp_path / "summary.json"
        assert main(["-i", str(SAMPLE_INPUT), "-c", str(cfg_path), "-o", str(out), "-q"]) == 0
        first_bar = json.loads(out.read_text(encoding="utf-8"))["tickets"][0]["badge_bar"]
        assert first_bar[0]["color"] == "#00FF00"
