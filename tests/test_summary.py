from __future__ import annotations

import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.schemas import RosterSummary
from app.services import costs, roster_ops
from app.services.summary import build_roster_view


def test_view_totals_match_cost_functions(catalog, state) -> None:
    roster_ops.select_commander(catalog, state, "officer")
    roster_ops.toggle_commander_option(catalog, state, "mount")
    infantry = roster_ops.add_unit(catalog, state, "infantry")
    roster_ops.toggle_unit_upgrade(state, infantry.uid, "musician")
    roster_ops.add_unit(catalog, state, "gun")

    view = build_roster_view(catalog, state)

    assert view["commander_cost"] == 24
    assert view["total_cost"] == costs.roster_total(catalog, state) == 24 + 24 + 14
    assert [entry["cost"] for entry in view["units"]] == [24, 14]
    assert view["over_limit"] is False
    assert view["percent_of_limit"] == 62 / 250 * 100
    assert view["warnings"] == ["Too many Support units (1). For 1 Core units you may take 0."]

    roster_ops.add_unit(catalog, state, "militia")

    assert build_roster_view(catalog, state)["warnings"] == []


def test_view_groups_units_by_effective_and_listed_role(catalog, state) -> None:
    roster_ops.select_commander(catalog, state, "cav_officer")
    roster_ops.add_unit(catalog, state, "infantry")
    roster_ops.add_unit(catalog, state, "cavalry")
    roster_ops.add_unit(catalog, state, "skirmishers")

    view = build_roster_view(catalog, state)

    assert [entry["unit_id"] for entry in view["core_units"]] == ["infantry", "cavalry"]
    assert [entry["unit_id"] for entry in view["support_units"]] == ["skirmishers"]
    assert [entry["unit_id"] for entry in view["listed_support_units"]] == [
        "cavalry",
        "skirmishers",
    ]
    assert view["units"][1]["role_label"] == "core (cav.)"
    assert view["cavalry_commander"] is True
    assert (view["core_count"], view["support_count"], view["max_support"]) == (2, 1, 1)
    assert view["support_over"] is False


def test_artillery_entry_has_cannon_choices(catalog, state) -> None:
    gun = roster_ops.add_unit(catalog, state, "gun")
    roster_ops.set_cannon_type(state, gun.uid, "heavy")

    entry = build_roster_view(catalog, state)["units"][0]

    assert entry["quantity"] is None
    assert entry["cannon"] == "Heavy Cannon"
    assert entry["cannon_points"] == 6
    assert [choice["id"] for choice in entry["cannon_choices"]] == ["light", "heavy"]
    assert [choice["selected"] for choice in entry["cannon_choices"]] == [False, True]
    assert entry["condition_toggles"] == [
        {"key": "veteran", "label": "Veteran (+4 pts)", "active": False}
    ]


def test_condition_toggles_hide_conflicting_choices(catalog, state) -> None:
    militia = roster_ops.add_unit(catalog, state, "militia")

    toggles = build_roster_view(catalog, state)["units"][0]["condition_toggles"]
    assert [toggle["key"] for toggle in toggles] == ["trained", "downgrade"]

    roster_ops.toggle_trained(catalog, state, militia.uid)

    toggles = build_roster_view(catalog, state)["units"][0]["condition_toggles"]
    assert toggles == [
        {"key": "trained", "label": "Upgrade to Trained (+1 pt/model)", "active": True}
    ]


def test_unit_upgrades_listed_only_when_offered(catalog, state) -> None:
    roster_ops.add_unit(catalog, state, "skirmishers")

    entry = build_roster_view(catalog, state)["units"][0]

    assert [upgrade["key"] for upgrade in entry["upgrades"]] == ["officer"]
    assert entry["upgrades"][0]["label"] == "Officer/N.C.O. (+10 pts)"


def test_attachment_commander_hides_options_and_upgrades(catalog, state) -> None:
    roster_ops.select_commander(catalog, state, "attache")

    commander = build_roster_view(catalog, state)["commander"]

    assert commander["options"] == []
    assert commander["upgrades"] == []
    assert commander["cost"] == 15


def test_commander_upgrade_labels_use_unit_model_cost(catalog, state) -> None:
    roster_ops.select_commander(catalog, state, "heavy_officer")
    roster_ops.toggle_commander_upgrade(state, "aide_de_camp")

    commander = build_roster_view(catalog, state)["commander"]

    assert [upgrade["label"] for upgrade in commander["upgrades"]] == [
        "Musician (+10 pts)",
        "Standard Bearer (+10 pts)",
        "Aide-de-Camp (+10 pts)",
    ]
    assert commander["active_upgrades"] == ["Aide-de-Camp"]


def test_summary_schema_from_view(catalog, state) -> None:
    roster_ops.select_commander(catalog, state, "officer")
    roster_ops.toggle_commander_option(catalog, state, "veteran")
    militia = roster_ops.add_unit(catalog, state, "militia")
    roster_ops.toggle_downgrade(catalog, state, militia.uid)

    summary = RosterSummary.from_view(build_roster_view(catalog, state))

    assert summary.commander.active_options == ["Upgrade to Veteran"]
    assert summary.commander_cost == 24
    assert summary.units[0].condition == "downgraded"
    assert summary.units[0].quantity == 8
    assert summary.total_cost == 32
    assert summary.warnings == []


def test_zero_limit_does_not_divide(catalog, state) -> None:
    state.points_limit = 0

    assert build_roster_view(catalog, state)["percent_of_limit"] == 100.0
