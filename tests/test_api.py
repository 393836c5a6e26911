from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.main import app
from statboard.sections import get_sections


@pytest.fixture
def client():
    get_sections.cache_clear()
    return TestClient(app)


ROW = {"Position": "Button", "Hands": "120", "Fold to 3-bet": "45%"}


class TestApi:
    def test_meta_sections(self, client) -> None:
        res = client.get("/meta/sections")
        assert res.status_code == 200
        keys = [s["key"] for s in res.json()["sections"]]
        assert "fold_to_three_bet" in keys

    def test_classify(self, client) -> None:
        res = client.post("/classify", json={"rows": [ROW]})
        assert res.status_code == 200
        body = res.json()
        (item,) = body["fold_to_three_bet"]
        assert item["result"] == "LOW"
        assert item["hands"] == "120"
        assert body["vpip"] == []

    def test_dashboard(self, client) -> None:
        res = client.post(
            "/dashboard",
            json={"rows": [ROW], "filters": {"scope": "WITH_DATA", "section_filters": {"fold_to_three_bet": "GOOD"}}},
        )
        assert res.status_code == 200
        body = res.json()
        (section,) = body["sections"]
        assert section["key"] == "fold_to_three_bet"
        assert section["bad"] == 1
        assert section["shown"] == 0
        assert body["totals"]["sections_with_bad"] == 1

    def test_dashboard_rejects_unknown_filter(self, client) -> None:
        res = client.post("/dashboard", json={"rows": [], "filters": {"global_filter": "SOME"}})
        assert res.status_code == 422

    def test_dashboard_csv(self, client) -> None:
        res = client.post(
            "/dashboard/csv",
            params={"scope": "WITH_BAD", "query": "fold"},
            content=b"Position,Hands,Fold to 3-bet\nButton,120,45%\nBB,80,30%\n",
            headers={"Content-Type": "text/csv"},
        )
        assert res.status_code == 200
        body = res.json()
        assert body["row_count"] == 2
        assert [s["key"] for s in body["sections"]] == ["fold_to_three_bet"]

    def test_dashboard_csv_malformed(self, client) -> None:
        res = client.post("/dashboard/csv", content=b"a,b\n1,2\n1,2,3,4\n")
        assert res.status_code == 400
        assert res.json()["type"] == "CsvLoadError"

    def test_export(self, client) -> None:
        res = client.post("/export/fold_to_three_bet", json={"rows": [ROW]})
        assert res.status_code == 200
        assert res.headers["content-type"].startswith("text/csv")
        lines = res.text.strip().splitlines()
        assert lines[0] == "Position,Hands,Value,Result,Target,Rec. action"
        assert lines[1].startswith("Button,120,45.0,LOW,50% - 65%")

    def test_export_unknown_section(self, client) -> None:
        res = client.post("/export/nope", json={"rows": [ROW]})
        assert res.status_code == 404

    def test_export_failure_is_json_error(self, client, monkeypatch) -> None:
        def boom(_df):
            raise RuntimeError("disk full")

        monkeypatch.setattr("api.main.export_csv_bytes", boom)
        res = client.post("/export/fold_to_three_bet", json={"rows": [ROW]})
        assert res.status_code == 500
        assert res.json() == {"error": "disk full", "type": "RuntimeError"}
