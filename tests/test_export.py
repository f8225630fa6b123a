from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.models import new_roster_state
from app.routers.export import roster_pdf_bytes, roster_text
from app.services import roster_ops
from app.services.summary import build_roster_view

GENERATED_AT = datetime(2024, 5, 17, 18, 30)


def _sample_view(catalog, state):
    roster_ops.select_commander(catalog, state, "cav_officer")
    infantry = roster_ops.add_unit(catalog, state, "infantry")
    roster_ops.toggle_veteran(catalog, state, infantry.uid)
    roster_ops.toggle_unit_upgrade(state, infantry.uid, "standard")
    roster_ops.add_unit(catalog, state, "cavalry")
    gun = roster_ops.add_unit(catalog, state, "gun")
    roster_ops.set_cannon_type(state, gun.uid, "heavy")
    return build_roster_view(catalog, state)


def test_text_export_header_and_totals(catalog, state) -> None:
    view = _sample_view(catalog, state)

    text = roster_text(view, GENERATED_AT)
    lines = text.splitlines()

    assert lines[0] == "BLOOD & BAYONETS - FORCE ROSTER"
    assert lines[2] == "Faction: Test Faction"
    assert lines[3] == f"Points: {view['total_cost']} / 250"
    assert lines[4] == "Date: 2024-05-17"
    assert "COMMANDER: Cavalry Officer [25 pts]" in lines
    assert lines[-1] == f"TOTAL: {view['total_cost']} pts"
    assert text.endswith("\n")


def test_text_export_sections_follow_catalog_lists(catalog, state) -> None:
    view = _sample_view(catalog, state)

    lines = roster_text(view, GENERATED_AT).splitlines()

    support_index = lines.index("SUPPORT UNITS (2)")
    assert lines.index("CORE UNITS (1)") < lines.index("Infantry [30 pts]") < support_index
    assert lines.index("Cavalry [28 pts]") > support_index
    assert "  + Veteran" in lines
    assert "  Upgrades: Standard Bearer" in lines
    assert "Gun [18 pts]" in lines
    assert any(line.startswith("  Crew") and "Heavy Cannon" in line for line in lines)


def test_text_export_without_commander(catalog, state) -> None:
    view = build_roster_view(catalog, state)

    lines = roster_text(view, GENERATED_AT).splitlines()

    assert "COMMANDER: None [0 pts]" in lines
    assert "CORE UNITS (0)" in lines
    assert "SUPPORT UNITS (0)" in lines


def test_pdf_export_produces_document(catalog, state) -> None:
    view = _sample_view(catalog, state)

    payload = roster_pdf_bytes(view, GENERATED_AT)

    assert payload.startswith(b"%PDF")
    assert len(payload) > 500


def test_pdf_export_spans_long_rosters(catalog, state) -> None:
    roster_ops.select_commander(catalog, state, "officer")
    for _ in range(60):
        roster_ops.add_unit(catalog, state, "infantry")

    empty_view = build_roster_view(catalog, new_roster_state("test_faction"))
    short_payload = roster_pdf_bytes(empty_view, GENERATED_AT)
    payload = roster_pdf_bytes(build_roster_view(catalog, state), GENERATED_AT)

    assert payload.startswith(b"%PDF")
    assert len(payload) > len(short_payload)
