"""Read-only catalog of factions, commanders and unit definitions."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

import yaml

from ..config import CATALOG_PATH
from ..data import factions as bundled
from ..models import UNIT_UPGRADE_LABELS, UnitRole
from .utils import coerce_bool, coerce_int, coerce_optional_int, text_list

logger = logging.getLogger(__name__)

DEFAULT_UNIT_MODEL_COST = 3


class CatalogError(ValueError):
    pass


@dataclass(frozen=True)
class CannonType:
    id: str
    name: str
    points: int = 0

    @property
    def display_label(self) -> str:
        return f"{self.name} (+{self.points} pts)"


@dataclass(frozen=True)
class CommanderOption:
    key: str
    label: str
    points: int = 0

    @property
    def display_label(self) -> str:
        return f"{self.label} (+{self.points} pts)"


@dataclass(frozen=True)
class CommanderDef:
    id: str
    name: str
    points: int
    shoot: str = ""
    melee: str = ""
    resolve: str = ""
    cmd_range: int = 0
    cmd_points: int = 0
    experience: str = "Trained"
    composition: str = ""
    is_cavalry_commander: bool = False
    is_attachment: bool = False
    is_navy: bool = False
    is_named: bool = False
    attach_to: str = ""
    options: tuple[CommanderOption, ...] = ()
    unit_model_cost: int = DEFAULT_UNIT_MODEL_COST
    special: tuple[str, ...] = ()

    @property
    def has_unit_upgrades(self) -> bool:
        return not self.is_attachment and not self.is_navy

    @property
    def unit_upgrade_cost(self) -> int:
        return self.unit_model_cost * 2

    def option(self, key: str) -> CommanderOption | None:
        for option in self.options:
            if option.key == key:
                return option
        return None


@dataclass(frozen=True)
class UnitDef:
    id: str
    name: str
    cost_per_model: int = 0
    cost_per_crew: int = 0
    min_size: int | None = None
    max_size: int | None = None
    is_artillery: bool = False
    is_howitzer: bool = False
    is_rocket: bool = False
    is_cavalry: bool = False
    upgrades: tuple[str, ...] = ()
    veteran_cost: int | None = None
    trained_cost: int | None = None
    downgrade_cost: int | None = None
    trained_effect: str = ""
    cannon_types: tuple[str, ...] = ()
    shoot: str = ""
    melee: str = ""
    resolve: str = ""
    experience: str = ""
    composition: str = ""
    equipment: tuple[str, ...] = ()
    special: tuple[str, ...] = ()
    formations: tuple[str, ...] = ()
    notes: str = ""

    @property
    def uses_cannon_type(self) -> bool:
        return self.is_artillery and not self.is_howitzer and not self.is_rocket

    @property
    def upgrade_cost(self) -> int:
        return self.cost_per_model * 2

    @property
    def cost_label(self) -> str:
        if self.is_artillery:
            return f"{self.cost_per_crew} pts (crew)"
        return f"{self.cost_per_model} pts/model"

    def allows_upgrade(self, key: str) -> bool:
        return key in self.upgrades


@dataclass(frozen=True)
class Faction:
    id: str
    name: str
    description: str = ""
    commanders: tuple[CommanderDef, ...] = ()
    core_units: tuple[UnitDef, ...] = ()
    support_units: tuple[UnitDef, ...] = ()
    force_rules: tuple[str, ...] = ()
    allies: tuple[str, ...] = ()


@dataclass(frozen=True)
class PointGuidance:
    label: str
    description: str
    points: int


@dataclass
class Catalog:
    """Faction data indexed by id once per load."""

    factions: tuple[Faction, ...]
    cannon_types: Mapping[str, CannonType]
    point_guidance: tuple[PointGuidance, ...] = ()
    special_rules_glossary: Mapping[str, str] = field(default_factory=dict)
    weapon_glossary: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._factions: dict[str, Faction] = {}
        self._commanders: dict[tuple[str, str], CommanderDef] = {}
        self._units: dict[tuple[str, str], tuple[UnitDef, UnitRole]] = {}
        for faction in self.factions:
            self._factions[faction.id] = faction
            for commander in faction.commanders:
                self._commanders.setdefault((faction.id, commander.id), commander)
            for unit in faction.core_units:
                self._units.setdefault((faction.id, unit.id), (unit, UnitRole.CORE))
            for unit in faction.support_units:
                self._units.setdefault((faction.id, unit.id), (unit, UnitRole.SUPPORT))

    def faction(self, faction_id: str | None) -> Faction | None:
        if faction_id is None:
            return None
        return self._factions.get(faction_id)

    def commander(self, faction_id: str | None, commander_id: str | None) -> CommanderDef | None:
        if faction_id is None or commander_id is None:
            return None
        return self._commanders.get((faction_id, commander_id))

    def unit_def(self, faction_id: str | None, unit_id: str | None) -> UnitDef | None:
        entry = self._units.get((faction_id, unit_id)) if faction_id and unit_id else None
        return entry[0] if entry else None

    def listed_role(self, faction_id: str | None, unit_id: str | None) -> UnitRole:
        """Role of a unit by the faction list it is printed in."""

        entry = self._units.get((faction_id, unit_id)) if faction_id and unit_id else None
        return entry[1] if entry else UnitRole.UNKNOWN

    def cannon_type(self, cannon_id: str | None) -> CannonType | None:
        if not cannon_id:
            return None
        return self.cannon_types.get(cannon_id)

    def rule_description(self, name: str) -> str:
        return self.special_rules_glossary.get(name, name)

    def weapon_description(self, name: str) -> str:
        return self.weapon_glossary.get(name, name)


def _require_id(entry: Mapping[str, Any], kind: str) -> str:
    identifier = str(entry.get("id") or "").strip()
    if not identifier:
        raise CatalogError(f"{kind} entry without an id: {entry.get('name')!r}")
    return identifier


def _parse_option(entry: Any) -> CommanderOption | None:
    if not isinstance(entry, Mapping):
        return None
    key = str(entry.get("key") or "").strip()
    if not key:
        return None
    label = str(entry.get("label") or key)
    return CommanderOption(key=key, label=label, points=coerce_int(entry.get("pts"), 0))


def _parse_commander(entry: Mapping[str, Any]) -> CommanderDef:
    options = tuple(
        option for option in (_parse_option(item) for item in entry.get("options") or []) if option
    )
    model_cost = coerce_optional_int(entry.get("unit_model_cost"))
    return CommanderDef(
        id=_require_id(entry, "Commander"),
        name=str(entry.get("name") or entry.get("id")),
        points=coerce_int(entry.get("pts"), 0),
        shoot=str(entry.get("shoot") or ""),
        melee=str(entry.get("melee") or ""),
        resolve=str(entry.get("resolve") or ""),
        cmd_range=coerce_int(entry.get("cmd_range"), 0),
        cmd_points=coerce_int(entry.get("cmd_pts"), 0),
        experience=str(entry.get("experience") or "Trained"),
        composition=str(entry.get("composition") or ""),
        is_cavalry_commander=coerce_bool(entry.get("is_cavalry_commander")),
        is_attachment=coerce_bool(entry.get("is_attachment")),
        is_navy=coerce_bool(entry.get("is_navy")),
        is_named=coerce_bool(entry.get("is_named")),
        attach_to=str(entry.get("attach_to") or ""),
        options=options,
        unit_model_cost=model_cost or DEFAULT_UNIT_MODEL_COST,
        special=text_list(entry.get("special")),
    )


_UPGRADE_KEYS_BY_LABEL = {label.casefold(): key for key, label in UNIT_UPGRADE_LABELS.items()}


def _parse_unit_upgrades(values: Iterable[Any] | None) -> tuple[str, ...]:
    keys: list[str] = []
    for value in text_list(values):
        folded = value.casefold()
        key = folded if folded in UNIT_UPGRADE_LABELS else _UPGRADE_KEYS_BY_LABEL.get(folded)
        if key and key not in keys:
            keys.append(key)
    return tuple(keys)


def _parse_unit(entry: Mapping[str, Any]) -> UnitDef:
    return UnitDef(
        id=_require_id(entry, "Unit"),
        name=str(entry.get("name") or entry.get("id")),
        cost_per_model=coerce_int(entry.get("cost_per_model"), 0),
        cost_per_crew=coerce_int(entry.get("cost_per_crew"), 0),
        min_size=coerce_optional_int(entry.get("min_size")),
        max_size=coerce_optional_int(entry.get("max_size")),
        is_artillery=coerce_bool(entry.get("is_artillery")),
        is_howitzer=coerce_bool(entry.get("is_howitzer")),
        is_rocket=coerce_bool(entry.get("is_rocket")),
        is_cavalry=coerce_bool(entry.get("is_cavalry")),
        upgrades=_parse_unit_upgrades(entry.get("upgrades")),
        veteran_cost=coerce_optional_int(entry.get("vet_cost")),
        trained_cost=coerce_optional_int(entry.get("trained_cost")),
        downgrade_cost=coerce_optional_int(entry.get("downgrade_cost")),
        trained_effect=str(entry.get("trained_effect") or ""),
        cannon_types=text_list(entry.get("cannon_upgrades")),
        shoot=str(entry.get("shoot") or ""),
        melee=str(entry.get("melee") or ""),
        resolve=str(entry.get("resolve") or ""),
        experience=str(entry.get("experience") or ""),
        composition=str(entry.get("composition") or ""),
        equipment=text_list(entry.get("equipment")),
        special=text_list(entry.get("special")),
        formations=text_list(entry.get("formations")),
        notes=str(entry.get("notes") or ""),
    )


def _parse_faction(entry: Mapping[str, Any]) -> Faction:
    return Faction(
        id=_require_id(entry, "Faction"),
        name=str(entry.get("name") or entry.get("id")),
        description=str(entry.get("description") or ""),
        commanders=tuple(_parse_commander(item) for item in entry.get("commanders") or []),
        core_units=tuple(_parse_unit(item) for item in entry.get("core") or []),
        support_units=tuple(_parse_unit(item) for item in entry.get("support") or []),
        force_rules=text_list(entry.get("force_rules")),
        allies=text_list(entry.get("allies")),
    )


def _glossary(payload: Mapping[str, Any], key: str) -> dict[str, str]:
    raw = payload.get(key) or {}
    if not isinstance(raw, Mapping):
        raise CatalogError(f"Catalog {key} must be a mapping of name to text")
    return {str(name): str(text) for name, text in raw.items()}


def build_catalog(payload: Mapping[str, Any]) -> Catalog:
    if not isinstance(payload, Mapping):
        raise CatalogError("Catalog payload must be a mapping")
    raw_factions = payload.get("factions")
    if isinstance(raw_factions, Mapping):
        raw_factions = list(raw_factions.values())
    if isinstance(raw_factions, (str, bytes)) or not isinstance(raw_factions, Sequence):
        raise CatalogError("Catalog factions must be a list of entries")
    parsed_factions = tuple(_parse_faction(item) for item in raw_factions if isinstance(item, Mapping))
    if not parsed_factions:
        raise CatalogError("Catalog does not define any factions")

    cannon_types: dict[str, CannonType] = {}
    raw_cannons = payload.get("cannon_types") or {}
    if isinstance(raw_cannons, Mapping):
        for cannon_id, raw in raw_cannons.items():
            if not isinstance(raw, Mapping):
                continue
            cannon_types[str(cannon_id)] = CannonType(
                id=str(cannon_id),
                name=str(raw.get("name") or cannon_id),
                points=coerce_int(raw.get("pts"), 0),
            )

    guidance = tuple(
        PointGuidance(
            label=str(item.get("label") or ""),
            description=str(item.get("desc") or ""),
            points=coerce_int(item.get("pts"), 0),
        )
        for item in payload.get("point_guidance") or []
        if isinstance(item, Mapping)
    )

    return Catalog(
        factions=parsed_factions,
        cannon_types=cannon_types,
        point_guidance=guidance,
        special_rules_glossary=_glossary(payload, "special_rules_glossary"),
        weapon_glossary=_glossary(payload, "weapon_glossary"),
    )


def _read_catalog_file(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fp:
            if path.suffix.lower() in {".yml", ".yaml"}:
                return yaml.safe_load(fp)
            return json.load(fp)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        logger.error("Unable to read catalog file %s: %s", path, exc)
        raise CatalogError(f"Unable to read catalog file {path}") from exc


def load_catalog(path: str | Path | None = None) -> Catalog:
    source = str(path) if path else CATALOG_PATH
    if source:
        catalog = build_catalog(_read_catalog_file(Path(source)))
        logger.info("Loaded catalog from %s (%d factions)", source, len(catalog.factions))
        return catalog
    catalog = build_catalog(bundled.raw_catalog())
    logger.info("Loaded bundled catalog (%d factions)", len(catalog.factions))
    return catalog


@lru_cache()
def default_catalog() -> Catalog:
    return load_catalog()
