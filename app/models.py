from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .config import DEFAULT_FACTION, DEFAULT_POINTS_LIMIT


class UnitCondition(str, Enum):
    """Experience modifier of a roster entry; only one can apply at a time."""

    NONE = "none"
    VETERAN = "veteran"
    TRAINED = "trained"
    DOWNGRADED = "downgraded"


class UnitRole(str, Enum):
    CORE = "core"
    SUPPORT = "support"
    UNKNOWN = "unknown"


UNIT_UPGRADE_LABELS = {
    "officer": "Officer/N.C.O.",
    "musician": "Musician",
    "standard": "Standard Bearer",
}
UNIT_UPGRADE_KEYS = tuple(UNIT_UPGRADE_LABELS)

COMMANDER_UPGRADE_LABELS = {
    "musician": "Musician",
    "standard": "Standard Bearer",
    "aide_de_camp": "Aide-de-Camp",
}
COMMANDER_UPGRADE_KEYS = tuple(COMMANDER_UPGRADE_LABELS)


def _empty_unit_upgrades() -> Dict[str, bool]:
    return dict.fromkeys(UNIT_UPGRADE_KEYS, False)


def _empty_commander_upgrades() -> Dict[str, bool]:
    return dict.fromkeys(COMMANDER_UPGRADE_KEYS, False)


@dataclass
class UnitInstance:
    uid: int
    unit_id: str
    quantity: int = 1
    cannon_type: Optional[str] = None
    condition: UnitCondition = UnitCondition.NONE
    upgrades: Dict[str, bool] = field(default_factory=_empty_unit_upgrades)

    @property
    def is_veteran(self) -> bool:
        return self.condition is UnitCondition.VETERAN

    @property
    def is_trained(self) -> bool:
        return self.condition is UnitCondition.TRAINED

    @property
    def is_downgraded(self) -> bool:
        return self.condition is UnitCondition.DOWNGRADED

    def active_upgrades(self) -> List[str]:
        return [key for key in UNIT_UPGRADE_KEYS if self.upgrades.get(key)]


@dataclass
class RosterState:
    """Selections of one builder session. Derived values are never stored here."""

    faction_id: str
    points_limit: int = DEFAULT_POINTS_LIMIT
    commander_id: Optional[str] = None
    commander_options: Dict[str, bool] = field(default_factory=dict)
    commander_upgrades: Dict[str, bool] = field(default_factory=_empty_commander_upgrades)
    units: List[UnitInstance] = field(default_factory=list)
    next_uid: int = 1

    def allocate_uid(self) -> int:
        uid = self.next_uid
        self.next_uid += 1
        return uid

    def find_unit(self, uid: int) -> Optional[UnitInstance]:
        for unit in self.units:
            if unit.uid == uid:
                return unit
        return None

    def active_commander_options(self) -> List[str]:
        return [key for key, enabled in self.commander_options.items() if enabled]

    def reset_commander_selections(self) -> None:
        self.commander_options = {}
        self.commander_upgrades = _empty_commander_upgrades()


def new_roster_state(
    faction_id: Optional[str] = None, points_limit: Optional[int] = None
) -> RosterState:
    return RosterState(
        faction_id=faction_id or DEFAULT_FACTION,
        points_limit=points_limit if points_limit is not None else DEFAULT_POINTS_LIMIT,
    )
