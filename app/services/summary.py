"""Computed roster view shared by the builder page, the JSON API and exports."""

from __future__ import annotations

from typing import Any

from ..models import (
    COMMANDER_UPGRADE_KEYS,
    COMMANDER_UPGRADE_LABELS,
    UNIT_UPGRADE_LABELS,
    RosterState,
    UnitInstance,
    UnitRole,
)
from . import costs
from .catalog import Catalog, CommanderDef
from .rules import collect_roster_warnings


def _commander_entry(
    catalog: Catalog, state: RosterState, commander: CommanderDef
) -> dict[str, Any]:
    upgrade_cost = costs.commander_upgrade_cost(commander)
    options = [
        {
            "key": option.key,
            "label": option.display_label,
            "name": option.label,
            "points": option.points,
            "active": bool(state.commander_options.get(option.key)),
        }
        for option in commander.options
    ]
    upgrades = []
    if commander.has_unit_upgrades:
        upgrades = [
            {
                "key": key,
                "label": f"{COMMANDER_UPGRADE_LABELS[key]} (+{upgrade_cost} pts)",
                "name": COMMANDER_UPGRADE_LABELS[key],
                "points": upgrade_cost,
                "active": bool(state.commander_upgrades.get(key)),
            }
            for key in COMMANDER_UPGRADE_KEYS
        ]
    return {
        "id": commander.id,
        "definition": commander,
        "name": commander.name,
        "cost": costs.commander_cost(catalog, state),
        "options": options if not commander.is_attachment else [],
        "active_options": [entry["name"] for entry in options if entry["active"]],
        "upgrades": upgrades,
        "active_upgrades": [entry["name"] for entry in upgrades if entry["active"]],
        "special": [
            {"name": name, "description": catalog.rule_description(name)}
            for name in commander.special
        ],
    }


def _condition_toggles(definition, unit: UnitInstance) -> list[dict[str, Any]]:
    toggles: list[dict[str, Any]] = []
    if definition.veteran_cost and not unit.is_trained and not unit.is_downgraded:
        suffix = "pts" if definition.is_artillery else "pt/model"
        toggles.append(
            {
                "key": "veteran",
                "label": f"Veteran (+{definition.veteran_cost} {suffix})",
                "active": unit.is_veteran,
            }
        )
    if definition.trained_cost is not None and not unit.is_veteran and not unit.is_downgraded:
        toggles.append(
            {
                "key": "trained",
                "label": f"Upgrade to Trained (+{definition.trained_cost} pt/model)",
                "active": unit.is_trained,
            }
        )
    if definition.downgrade_cost is not None and not unit.is_veteran and not unit.is_trained:
        toggles.append(
            {
                "key": "downgrade",
                "label": f"Downgrade to Half Pikes ({definition.downgrade_cost} pt/model)",
                "active": unit.is_downgraded,
            }
        )
    return toggles


def unit_entry(catalog: Catalog, state: RosterState, unit: UnitInstance) -> dict[str, Any] | None:
    definition = costs.unit_definition(catalog, state, unit)
    if definition is None:
        return None
    cannon = catalog.cannon_type(unit.cannon_type) if definition.uses_cannon_type else None
    upgrades = [
        {
            "key": key,
            "label": f"{UNIT_UPGRADE_LABELS[key]} (+{definition.upgrade_cost} pts)",
            "name": UNIT_UPGRADE_LABELS[key],
            "active": bool(unit.upgrades.get(key)),
        }
        for key in UNIT_UPGRADE_LABELS
        if definition.allows_upgrade(key)
    ]
    cannon_choices = []
    if definition.uses_cannon_type:
        for cannon_id in definition.cannon_types:
            choice = catalog.cannon_type(cannon_id)
            if choice is None:
                continue
            cannon_choices.append(
                {
                    "id": choice.id,
                    "label": choice.display_label,
                    "selected": choice.id == unit.cannon_type,
                }
            )
    return {
        "uid": unit.uid,
        "unit_id": definition.id,
        "definition": definition,
        "name": definition.name,
        "quantity": None if definition.is_artillery else unit.quantity,
        "cost": costs.unit_cost(catalog, state, unit),
        "role": costs.effective_role(catalog, state, unit).value,
        "role_label": costs.role_label(catalog, state, unit),
        "listed_role": catalog.listed_role(state.faction_id, unit.unit_id).value,
        "cannon": cannon.name if cannon else None,
        "cannon_id": cannon.id if cannon else None,
        "cannon_points": cannon.points if cannon else 0,
        "cannon_choices": cannon_choices,
        "condition": unit.condition.value,
        "is_veteran": unit.is_veteran,
        "is_trained": unit.is_trained,
        "is_downgraded": unit.is_downgraded,
        "upgrades": upgrades,
        "active_upgrades": [entry["name"] for entry in upgrades if entry["active"]],
        "condition_toggles": _condition_toggles(definition, unit),
        "equipment": [
            {"name": name, "description": catalog.weapon_description(name)}
            for name in definition.equipment
        ],
        "special": [
            {"name": name, "description": catalog.rule_description(name)}
            for name in definition.special
        ],
    }


def build_roster_view(catalog: Catalog, state: RosterState) -> dict[str, Any]:
    faction = catalog.faction(state.faction_id)
    commander = costs.selected_commander(catalog, state)
    units = [entry for entry in (unit_entry(catalog, state, unit) for unit in state.units) if entry]
    commander_total = costs.commander_cost(catalog, state)
    total = commander_total + sum(entry["cost"] for entry in units)
    core = costs.core_count(catalog, state)
    support = costs.support_count(catalog, state)
    limit = state.points_limit
    return {
        "faction": faction,
        "faction_id": state.faction_id,
        "points_limit": limit,
        "commander": _commander_entry(catalog, state, commander) if commander else None,
        "commander_cost": commander_total,
        "units": units,
        "core_units": [entry for entry in units if entry["role"] == UnitRole.CORE.value],
        "support_units": [entry for entry in units if entry["role"] == UnitRole.SUPPORT.value],
        "listed_core_units": [
            entry for entry in units if entry["listed_role"] == UnitRole.CORE.value
        ],
        "listed_support_units": [
            entry for entry in units if entry["listed_role"] == UnitRole.SUPPORT.value
        ],
        "core_count": core,
        "support_count": support,
        "max_support": core // 2,
        "support_over": support > core // 2,
        "cavalry_commander": costs.is_cavalry_commander(catalog, state),
        "total_cost": total,
        "over_limit": total > limit,
        "percent_of_limit": min(100.0, total / limit * 100) if limit > 0 else 100.0,
        "warnings": collect_roster_warnings(catalog, state, total_cost=total),
    }
