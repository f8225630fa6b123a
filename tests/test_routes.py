from __future__ import annotations

import logging
import sys
from io import BytesIO
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import dependencies, main
from app.main import app
from app.services.sessions import SessionStore

JSON_HEADERS = {"Accept": "application/json"}


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _post(client: TestClient, url: str, data: dict | None = None) -> dict:
    response = client.post(url, data=data or {}, headers=JSON_HEADERS)
    assert response.status_code == 200
    return response.json()


def test_index_redirects_to_builder(client) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert "British Army" in response.text
    assert "No Commander selected." in response.text


def test_form_posts_redirect_back_to_builder(client) -> None:
    response = client.post(
        "/roster/commander",
        data={"commander_id": "british_officer"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/roster"


def test_builder_flow_updates_costs(client) -> None:
    summary = _post(client, "/roster/commander", {"commander_id": "british_officer"})
    assert summary["commander"]["cost"] == 20

    summary = _post(client, "/roster/commander/options/mount")
    assert summary["commander_cost"] == 24

    summary = _post(client, "/roster/units/add", {"unit_id": "line_infantry"})
    uid = summary["units"][0]["uid"]
    assert summary["units"][0]["quantity"] == 6

    summary = _post(client, f"/roster/units/{uid}/quantity", {"delta": "4"})
    assert summary["units"][0]["cost"] == 30

    summary = _post(client, f"/roster/units/{uid}/upgrades/musician")
    assert summary["units"][0]["cost"] == 36

    summary = _post(client, f"/roster/units/{uid}/condition/veteran")
    assert summary["units"][0]["condition"] == "veteran"
    assert summary["units"][0]["cost"] == 46
    assert summary["total_cost"] == 70
    assert summary["warnings"] == []

    assert client.get("/roster/summary").json() == summary


def test_artillery_and_cavalry_routes(client) -> None:
    _post(client, "/roster/commander", {"commander_id": "british_cavalry_officer"})
    _post(client, "/roster/units/add", {"unit_id": "line_infantry"})
    _post(client, "/roster/units/add", {"unit_id": "light_dragoons"})
    summary = _post(client, "/roster/units/add", {"unit_id": "field_gun"})
    gun_uid = summary["units"][2]["uid"]

    assert summary["units"][1]["role_label"] == "core (cav.)"
    assert summary["core_count"] == 2

    summary = _post(client, f"/roster/units/{gun_uid}/cannon", {"cannon_type": "heavy"})
    assert summary["units"][2]["cannon"] == "Heavy Cannon (9/12 pdr)"
    assert summary["units"][2]["cost"] == 18


def test_points_and_faction_changes(client) -> None:
    summary = _post(client, "/roster/points", {"points_limit": "20"})
    assert summary["points_limit"] == 50

    _post(client, "/roster/units/add", {"unit_id": "line_infantry"})
    summary = _post(client, "/roster/faction", {"faction_id": "french_army"})

    assert summary["faction_id"] == "french_army"
    assert summary["units"] == []
    assert summary["points_limit"] == 50

    summary = _post(client, "/roster/faction", {"faction_id": "nowhere"})
    assert summary["faction_id"] == "french_army"


def test_remove_and_clear(client) -> None:
    _post(client, "/roster/commander", {"commander_id": "british_officer"})
    summary = _post(client, "/roster/units/add", {"unit_id": "riflemen"})
    uid = summary["units"][0]["uid"]

    summary = _post(client, f"/roster/units/{uid}/delete")
    assert summary["units"] == []

    _post(client, "/roster/units/add", {"unit_id": "riflemen"})
    summary = _post(client, "/roster/clear")

    assert summary["commander"] is None
    assert summary["units"] == []
    assert summary["faction_id"] == "british_army"


def test_sessions_do_not_share_rosters() -> None:
    first = TestClient(app)
    second = TestClient(app)

    _post(first, "/roster/units/add", {"unit_id": "line_infantry"})

    assert len(first.get("/roster/summary").json()["units"]) == 1
    assert second.get("/roster/summary").json()["units"] == []


def test_text_export_download(client) -> None:
    _post(client, "/roster/commander", {"commander_id": "british_officer"})

    response = client.get("/roster/export/txt")

    assert response.status_code == 200
    assert "blood-bayonets-force.txt" in response.headers["content-disposition"]
    assert response.text.startswith("BLOOD & BAYONETS - FORCE ROSTER")


def test_print_and_pdf_exports(client) -> None:
    _post(client, "/roster/units/add", {"unit_id": "line_infantry"})

    printed = client.get("/roster/print")
    pdf = client.get("/roster/pdf")

    assert printed.status_code == 200
    assert "Line Infantry" in printed.text
    assert pdf.headers["content-type"] == "application/pdf"
    assert pdf.content.startswith(b"%PDF")


def test_xlsx_export_download(client) -> None:
    _post(client, "/roster/units/add", {"unit_id": "line_infantry"})

    response = client.get("/export/xlsx")

    assert response.status_code == 200
    assert "force_british_army_18.xlsx" in response.headers["content-disposition"]
    workbook = load_workbook(BytesIO(response.content))
    assert workbook.sheetnames == ["Force", "Cannons"]


def test_cookieless_clients_keep_store_bounded(monkeypatch) -> None:
    capped = SessionStore(max_sessions=4)
    monkeypatch.setattr(dependencies, "store", capped)

    for _ in range(20):
        TestClient(app).get("/roster/summary")

    assert len(capped) == 4


def test_startup_warns_about_unknown_default_faction(monkeypatch, caplog) -> None:
    monkeypatch.setattr(main, "DEFAULT_FACTION", "atlantis")

    with caplog.at_level(logging.WARNING, logger="app.main"):
        main.startup_event()

    assert "Default faction 'atlantis' is not in the catalog" in caplog.text


def test_startup_accepts_known_default_faction(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="app.main"):
        main.startup_event()

    assert "Default faction" not in caplog.text
