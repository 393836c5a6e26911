from __future__ import annotations

import json

import pytest

from statboard.dashboard import compute_dashboard
from statboard.filters import DashboardFilters
from statboard.sections import DEFAULT_SECTIONS, build_catalog, get_sections, load_sections


class TestComputeDashboard:
    def test_no_rows(self, catalog) -> None:
        payload = compute_dashboard([], catalog)
        assert payload["row_count"] == 0
        assert payload["totals"]["total_rows"] == 0
        assert payload["totals"]["fraction_good"] == 0.0
        assert [s["rows"] for s in payload["sections"]] == [0, 0]
        assert payload["charts"] == {}

    def test_end_to_end(self, fold_section) -> None:
        payload = compute_dashboard([{"Position": "Button", "Fold to 3-bet": "45%"}], [fold_section])
        (section,) = payload["sections"]
        assert section["rows"] == 1
        assert section["good"] == 0
        assert section["bad"] == 1
        assert section["fraction_good"] == 0.0
        assert section["table"] == [
            {
                "position": "Button",
                "hands": None,
                "value": 45.0,
                "target": {"min": 50.0, "max": 65.0},
                "result": "LOW",
                "rec_action": "tighten",
            }
        ]
        assert "section_results" in payload["charts"]

    def test_filters_flow_through(self, catalog) -> None:
        rows = [{"Position": "Button", "VPIP": "30", "Att To Steal": "60"}]
        payload = compute_dashboard(rows, catalog, DashboardFilters(global_filter="GOOD", sort_mode="A_Z"))
        assert [s["key"] for s in payload["sections"]] == ["steal", "vpip"]
        assert [s["shown"] for s in payload["sections"]] == [0, 1]
        assert payload["filters"]["global_filter"] == "GOOD"

    def test_payload_is_json_serializable(self, catalog) -> None:
        payload = compute_dashboard([{"Position": "BB", "VPIP": "30"}], catalog)
        json.dumps(payload)


class TestCatalog:
    def test_default_catalog(self) -> None:
        sections = build_catalog(DEFAULT_SECTIONS)
        assert len({s.key for s in sections}) == len(sections)
        for s in sections:
            assert s.targets
            assert all(t.min <= t.max for t in s.targets.values())

    def test_targets_are_read_only(self, fold_section) -> None:
        with pytest.raises(TypeError):
            fold_section.targets["CO"] = None  # type: ignore[index]

    def test_duplicate_keys_rejected(self) -> None:
        raw = {"key": "x", "targets": {}}
        with pytest.raises(ValueError):
            build_catalog([raw, raw])

    def test_load_from_json(self, tmp_path) -> None:
        path = tmp_path / "sections.json"
        path.write_text(
            json.dumps({"sections": [{"key": "x", "title": "X", "column": "X %", "targets": {"CO": {"min": 1, "max": 2}}}]}),
            encoding="utf-8",
        )
        (section,) = load_sections(path)
        assert section.column == "X %"
        assert section.target_for("CO").max == 2.0
        assert section.target_for("co") is None

    def test_env_override(self, tmp_path, monkeypatch) -> None:
        path = tmp_path / "sections.json"
        path.write_text(json.dumps([{"key": "only", "targets": {}}]), encoding="utf-8")
        monkeypatch.setenv("STATBOARD_SECTIONS_PATH", str(path))
        get_sections.cache_clear()
        try:
            assert [s.key for s in get_sections()] == ["only"]
        finally:
            get_sections.cache_clear()
