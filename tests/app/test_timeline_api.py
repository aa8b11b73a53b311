from __future__ import annotations

import json
from collections.abc import Callable

from fastapi.testclient import TestClient

from app.config import AppSettings
from app.web_main import create_app
from tests.helpers.timeline_fixtures import load_day_payload


def test_health(app_settings: AppSettings) -> None:
    client = TestClient(create_app(app_settings))
    assert client.get("/api/health").json() == {"status": "ok"}


def test_layout_endpoint_returns_plan(app_settings: AppSettings) -> None:
    client = TestClient(create_app(app_settings))
    response = client.post("/api/layout", json=load_day_payload("client_day.json"))
    assert response.status_code == 200
    plan = response.json()
    assert plan["day"] == "2024-05-01"
    assert plan["scroll_minute"] == 360
    assert {entry["id"] for entry in plan["entries"]} == {
        "sleep-1",
        "run",
        "stretch",
        "check-in",
        "water",
        "plan",
    }


def test_layout_endpoint_uses_default_surface(
    app_settings_factory: Callable[..., AppSettings],
) -> None:
    payload = load_day_payload("coach_day.json")
    payload.pop("surface")
    client = TestClient(create_app(app_settings_factory(default_surface="coach")))
    plan = client.post("/api/layout", json=payload).json()
    assert plan["surface"] == "coach"
    assert [entry["display_key"] for entry in plan["entries"]] == ["zoom", "personal", "manual"]


def test_layout_endpoint_rejects_invalid_document(app_settings: AppSettings) -> None:
    client = TestClient(create_app(app_settings))
    response = client.post("/api/layout", json={"day": "yesterday", "events": []})
    assert response.status_code == 422


def test_record_plan_reads_records_dir(app_settings: AppSettings) -> None:
    records_dir = app_settings.timeline.records_dir
    records_dir.mkdir(parents=True)
    (records_dir / "coach.json").write_text(
        json.dumps(load_day_payload("coach_day.json")), encoding="utf-8"
    )
    (records_dir / "broken.json").write_text("{}", encoding="utf-8")
    client = TestClient(create_app(app_settings))

    plan = client.get("/api/records/coach/plan").json()
    assert [entry["width"] for entry in plan["entries"]] == [49.5, 49.5, 99.5]

    as_client = client.get("/api/records/coach/plan", params={"surface": "client"}).json()
    assert as_client["surface"] == "client"

    assert client.get("/api/records/missing/plan").status_code == 404
    assert client.get("/api/records/broken/plan").status_code == 422


def test_layout_endpoint_skips_non_object_records(app_settings: AppSettings) -> None:
    client = TestClient(create_app(app_settings))
    payload = {
        "day": "2024-05-01",
        "events": [
            {
                "id": "run",
                "pillar": "activity",
                "entryDate": "2024-05-01T09:00:00",
                "duration": 30,
            },
            None,
            "not-a-record",
        ],
    }
    response = client.post("/api/layout", json=payload)
    assert response.status_code == 200
    assert [entry["id"] for entry in response.json()["entries"]] == ["run"]
