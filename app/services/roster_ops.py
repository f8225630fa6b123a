"""State transitions of a roster.

Every operation edits ``RosterState`` in place and returns whether anything
changed. Costs and warnings are not touched here; callers recompute them from
the new state.
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import DEFAULT_POINTS_LIMIT, MIN_POINTS_LIMIT
from ..models import (
    COMMANDER_UPGRADE_KEYS,
    UNIT_UPGRADE_KEYS,
    RosterState,
    UnitCondition,
    UnitInstance,
)
from . import costs
from .catalog import Catalog, UnitDef
from .utils import parse_leading_int

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 99


def select_faction(catalog: Catalog, state: RosterState, faction_id: str) -> bool:
    if catalog.faction(faction_id) is None:
        logger.debug("Ignoring unknown faction %r", faction_id)
        return False
    state.faction_id = faction_id
    state.commander_id = None
    state.reset_commander_selections()
    state.units = []
    return True


def set_points_limit(state: RosterState, value: Any) -> int:
    parsed = parse_leading_int(value)
    if not parsed:
        parsed = DEFAULT_POINTS_LIMIT
    state.points_limit = max(MIN_POINTS_LIMIT, parsed)
    return state.points_limit


def select_commander(catalog: Catalog, state: RosterState, commander_id: str | None) -> bool:
    commander_id = commander_id or None
    if commander_id and catalog.commander(state.faction_id, commander_id) is None:
        logger.debug("Commander %r is not part of faction %r", commander_id, state.faction_id)
    state.commander_id = commander_id
    state.reset_commander_selections()
    return True


def toggle_commander_option(catalog: Catalog, state: RosterState, key: str) -> bool:
    commander = costs.selected_commander(catalog, state)
    if commander is None or commander.option(key) is None:
        logger.debug("Ignoring unknown commander option %r", key)
        return False
    state.commander_options[key] = not state.commander_options.get(key, False)
    return True


def toggle_commander_upgrade(state: RosterState, key: str) -> bool:
    if key not in COMMANDER_UPGRADE_KEYS:
        logger.debug("Ignoring unknown commander upgrade %r", key)
        return False
    state.commander_upgrades[key] = not state.commander_upgrades.get(key, False)
    return True


def add_unit(catalog: Catalog, state: RosterState, unit_id: str) -> UnitInstance | None:
    definition = catalog.unit_def(state.faction_id, unit_id)
    if definition is None:
        logger.debug("Unit %r is not available to faction %r", unit_id, state.faction_id)
        return None
    unit = UnitInstance(
        uid=state.allocate_uid(),
        unit_id=definition.id,
        quantity=definition.min_size or 1,
        cannon_type=definition.cannon_types[0] if definition.cannon_types else None,
    )
    state.units.append(unit)
    return unit


def remove_unit(state: RosterState, uid: int) -> bool:
    remaining = [unit for unit in state.units if unit.uid != uid]
    if len(remaining) == len(state.units):
        return False
    state.units = remaining
    return True


def _size_bounds(definition: UnitDef) -> tuple[int, int]:
    return definition.min_size or 1, definition.max_size or DEFAULT_MAX_SIZE


def change_quantity(catalog: Catalog, state: RosterState, uid: int, delta: int) -> bool:
    unit = state.find_unit(uid)
    if unit is None:
        return False
    definition = costs.unit_definition(catalog, state, unit)
    if definition is None or definition.is_artillery:
        return False
    lower, upper = _size_bounds(definition)
    unit.quantity = max(lower, min(upper, unit.quantity + delta))
    return True


def set_cannon_type(state: RosterState, uid: int, cannon_type: str | None) -> bool:
    unit = state.find_unit(uid)
    if unit is None:
        return False
    unit.cannon_type = cannon_type or None
    return True


def _toggle_condition(unit: UnitInstance, condition: UnitCondition) -> None:
    if unit.condition is condition:
        unit.condition = UnitCondition.NONE
    else:
        unit.condition = condition


def toggle_veteran(catalog: Catalog, state: RosterState, uid: int) -> bool:
    unit = state.find_unit(uid)
    definition = costs.unit_definition(catalog, state, unit) if unit else None
    if definition is None or not definition.veteran_cost:
        return False
    _toggle_condition(unit, UnitCondition.VETERAN)
    return True


def toggle_trained(catalog: Catalog, state: RosterState, uid: int) -> bool:
    unit = state.find_unit(uid)
    definition = costs.unit_definition(catalog, state, unit) if unit else None
    if definition is None or definition.trained_cost is None:
        return False
    _toggle_condition(unit, UnitCondition.TRAINED)
    return True


def toggle_downgrade(catalog: Catalog, state: RosterState, uid: int) -> bool:
    unit = state.find_unit(uid)
    definition = costs.unit_definition(catalog, state, unit) if unit else None
    if definition is None or definition.downgrade_cost is None:
        return False
    _toggle_condition(unit, UnitCondition.DOWNGRADED)
    return True


def toggle_unit_upgrade(state: RosterState, uid: int, key: str) -> bool:
    unit = state.find_unit(uid)
    if unit is None or key not in UNIT_UPGRADE_KEYS:
        return False
    unit.upgrades[key] = not unit.upgrades.get(key, False)
    return True


def clear_force(state: RosterState) -> None:
    state.commander_id = None
    state.reset_commander_selections()
    state.units = []
