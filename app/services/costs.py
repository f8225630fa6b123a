"""Point costs and core/support classification of a force."""

from __future__ import annotations

from ..models import COMMANDER_UPGRADE_KEYS, RosterState, UnitInstance, UnitRole
from .catalog import Catalog, CommanderDef, UnitDef


def selected_commander(catalog: Catalog, state: RosterState) -> CommanderDef | None:
    return catalog.commander(state.faction_id, state.commander_id)


def unit_definition(catalog: Catalog, state: RosterState, unit: UnitInstance) -> UnitDef | None:
    return catalog.unit_def(state.faction_id, unit.unit_id)


def is_cavalry_commander(catalog: Catalog, state: RosterState) -> bool:
    commander = selected_commander(catalog, state)
    return bool(commander and commander.is_cavalry_commander)


def effective_role(catalog: Catalog, state: RosterState, unit: UnitInstance) -> UnitRole:
    """Role used for counting: cavalry support units count as core under a cavalry commander."""

    listed = catalog.listed_role(state.faction_id, unit.unit_id)
    if listed is not UnitRole.SUPPORT:
        return listed
    definition = unit_definition(catalog, state, unit)
    if definition is not None and definition.is_cavalry and is_cavalry_commander(catalog, state):
        return UnitRole.CORE
    return UnitRole.SUPPORT


def is_reclassified(catalog: Catalog, state: RosterState, unit: UnitInstance) -> bool:
    listed = catalog.listed_role(state.faction_id, unit.unit_id)
    return listed is UnitRole.SUPPORT and effective_role(catalog, state, unit) is UnitRole.CORE


def role_label(catalog: Catalog, state: RosterState, unit: UnitInstance) -> str:
    if is_reclassified(catalog, state, unit):
        return "core (cav.)"
    return effective_role(catalog, state, unit).value


def _role_count(catalog: Catalog, state: RosterState, role: UnitRole) -> int:
    return sum(1 for unit in state.units if effective_role(catalog, state, unit) is role)


def core_count(catalog: Catalog, state: RosterState) -> int:
    return _role_count(catalog, state, UnitRole.CORE)


def support_count(catalog: Catalog, state: RosterState) -> int:
    return _role_count(catalog, state, UnitRole.SUPPORT)


def max_support(catalog: Catalog, state: RosterState) -> int:
    return core_count(catalog, state) // 2


def commander_upgrade_cost(commander: CommanderDef | None) -> int:
    if commander is None or not commander.has_unit_upgrades:
        return 0
    return commander.unit_upgrade_cost


def commander_cost(catalog: Catalog, state: RosterState) -> int:
    commander = selected_commander(catalog, state)
    if commander is None:
        return 0
    points = commander.points
    for key in state.active_commander_options():
        option = commander.option(key)
        if option is not None:
            points += option.points
    upgrade_cost = commander_upgrade_cost(commander)
    for key in COMMANDER_UPGRADE_KEYS:
        if state.commander_upgrades.get(key):
            points += upgrade_cost
    return points


def _artillery_cost(catalog: Catalog, definition: UnitDef, unit: UnitInstance) -> int:
    points = definition.cost_per_crew
    if definition.uses_cannon_type:
        cannon = catalog.cannon_type(unit.cannon_type)
        if cannon is not None:
            points += cannon.points
    if unit.is_veteran and definition.veteran_cost:
        points += definition.veteran_cost
    return points


def _model_cost(definition: UnitDef, unit: UnitInstance) -> int:
    quantity = unit.quantity
    points = definition.cost_per_model * quantity
    if unit.is_trained and definition.trained_cost:
        points += definition.trained_cost * quantity
    if unit.is_downgraded and definition.downgrade_cost:
        points += definition.downgrade_cost * quantity
    for key in unit.active_upgrades():
        if definition.allows_upgrade(key):
            points += definition.upgrade_cost
    if unit.is_veteran and definition.veteran_cost:
        points += definition.veteran_cost * quantity
    return points


def unit_cost(catalog: Catalog, state: RosterState, unit: UnitInstance) -> int:
    definition = unit_definition(catalog, state, unit)
    if definition is None:
        return 0
    if definition.is_artillery:
        return _artillery_cost(catalog, definition, unit)
    return _model_cost(definition, unit)


def units_total(catalog: Catalog, state: RosterState) -> int:
    return sum(unit_cost(catalog, state, unit) for unit in state.units)


def roster_total(catalog: Catalog, state: RosterState) -> int:
    return commander_cost(catalog, state) + units_total(catalog, state)
