"""Bundled sample catalog for the force builder.

The layout matches the external catalog files accepted through ``CATALOG_PATH``.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any

CANNON_TYPES: dict[str, dict[str, Any]] = {
    "light": {"name": "Light Cannon (3/4 pdr)", "pts": 0},
    "medium": {"name": "Medium Cannon (6/8 pdr)", "pts": 3},
    "heavy": {"name": "Heavy Cannon (9/12 pdr)", "pts": 6},
}

POINT_GUIDANCE: list[dict[str, Any]] = [
    {"label": "Skirmish", "desc": "A short introductory game", "pts": 150},
    {"label": "Standard", "desc": "A typical evening's battle", "pts": 250},
    {"label": "Grand Action", "desc": "Several commanders may be needed", "pts": 400},
]

SPECIAL_RULES_GLOSSARY: dict[str, str] = {
    "Leader": "Units within command range may use this model's Resolve.",
    "Inspiring": "Friendly units within 6\" re-roll failed Resolve tests.",
    "Volley Fire": "Add one die when the whole unit fires at the same target.",
    "Skirmishers": "May move and shoot without penalty; never form Square.",
    "Poor Leadership": "Suffers -1 to Resolve tests when out of command range.",
    "Battle Hardened": "Ignore the first Disorder marker each turn.",
    "Sharpshooters": "Re-roll one missed shot per turn.",
    "Shock Cavalry": "+1 Melee on the turn the unit charges.",
    "Fast": "Move an extra 3\" when not in melee.",
    "Indirect Fire": "May fire at targets out of line of sight.",
    "Unreliable": "On a roll of 1 the shot deviates 2D6\".",
    "Grenadiers": "May throw grenades at a building within 6\".",
}

WEAPON_GLOSSARY: dict[str, str] = {
    "Musket": "Range 18\". Standard smoothbore firearm.",
    "Bayonet": "Melee weapon fixed to a musket.",
    "Rifle": "Range 24\". Slow to reload.",
    "Sabre": "Cavalry melee weapon.",
    "Carbine": "Range 12\". Short cavalry firearm.",
    "Pike": "Melee weapon, +1 Melee against cavalry.",
    "Half Pike": "Cheaper pike without the cavalry bonus.",
    "Pistol": "Range 6\". Officer sidearm.",
    "Cannon": "Roundshot and canister; see cannon type.",
    "Howitzer": "Short barrel firing explosive shells.",
    "Congreve Rockets": "Inaccurate but terrifying rocket battery.",
}

_MOUNT = {"key": "mount", "label": "Mount Commander", "pts": 4}
_VETERAN = {"key": "veteran", "label": "Upgrade to Veteran", "pts": 4}

FACTIONS: list[dict[str, Any]] = [
    {
        "id": "british_army",
        "name": "British Army",
        "description": "Steady redcoats relying on disciplined volleys.",
        "force_rules": [
            "Line infantry may form a two-deep firing line.",
            "One unit may be upgraded to Grenadiers for free.",
        ],
        "allies": ["Portuguese Army", "Spanish Guerrillas"],
        "commanders": [
            {
                "id": "british_officer",
                "name": "British Officer",
                "pts": 20,
                "shoot": "4+",
                "melee": "4+",
                "resolve": 4,
                "cmd_range": 12,
                "cmd_pts": 3,
                "experience": "Trained",
                "composition": "1 Officer and 5 Infantrymen",
                "options": [_MOUNT, _VETERAN],
                "special": ["Leader"],
            },
            {
                "id": "british_cavalry_officer",
                "name": "Cavalry Officer",
                "pts": 28,
                "shoot": "5+",
                "melee": "3+",
                "resolve": 4,
                "cmd_range": 18,
                "cmd_pts": 3,
                "experience": "Veteran",
                "composition": "1 mounted Officer and 3 Troopers",
                "is_cavalry_commander": True,
                "unit_model_cost": 5,
                "options": [_VETERAN],
                "special": ["Leader", "Shock Cavalry"],
            },
            {
                "id": "naval_officer",
                "name": "Naval Officer",
                "pts": 18,
                "shoot": "4+",
                "melee": "4+",
                "resolve": 4,
                "cmd_range": 9,
                "cmd_pts": 2,
                "experience": "Trained",
                "composition": "1 Officer and 5 Sailors",
                "is_navy": True,
                "options": [_VETERAN],
                "special": ["Leader"],
            },
            {
                "id": "captain_harding",
                "name": "Captain Harding",
                "pts": 24,
                "shoot": "3+",
                "melee": "3+",
                "resolve": 5,
                "cmd_range": 12,
                "cmd_pts": 3,
                "experience": "Veteran",
                "composition": "1 Officer",
                "is_named": True,
                "is_attachment": True,
                "attach_to": "Any Line Infantry or Riflemen unit",
                "options": [],
                "special": ["Leader", "Inspiring"],
            },
        ],
        "core": [
            {
                "id": "line_infantry",
                "name": "Line Infantry",
                "cost_per_model": 3,
                "min_size": 6,
                "max_size": 16,
                "shoot": "5+",
                "melee": "5+",
                "resolve": 4,
                "experience": "Trained",
                "upgrades": ["Officer/N.C.O.", "Musician", "Standard Bearer"],
                "vet_cost": 1,
                "equipment": ["Musket", "Bayonet"],
                "special": ["Volley Fire"],
                "formations": ["Line", "Column", "Square"],
            },
            {
                "id": "light_infantry",
                "name": "Light Infantry",
                "cost_per_model": 4,
                "min_size": 6,
                "max_size": 12,
                "shoot": "4+",
                "melee": "5+",
                "resolve": 4,
                "experience": "Trained",
                "upgrades": ["Officer/N.C.O.", "Musician"],
                "vet_cost": 1,
                "equipment": ["Musket", "Bayonet"],
                "special": ["Skirmishers"],
                "formations": ["Line", "Open Order"],
            },
            {
                "id": "local_militia",
                "name": "Local Militia",
                "cost_per_model": 2,
                "min_size": 8,
                "max_size": 20,
                "shoot": "6+",
                "melee": "5+",
                "resolve": 3,
                "experience": "Inexperienced",
                "upgrades": ["Officer/N.C.O."],
                "trained_cost": 1,
                "trained_effect": "Loses Poor Leadership, gains Battle Hardened",
                "downgrade_cost": -1,
                "equipment": ["Pike"],
                "special": ["Poor Leadership"],
                "notes": "May be downgraded to half pikes.",
            },
        ],
        "support": [
            {
                "id": "riflemen",
                "name": "Riflemen",
                "cost_per_model": 5,
                "min_size": 4,
                "max_size": 10,
                "shoot": "3+",
                "melee": "5+",
                "resolve": 4,
                "experience": "Veteran",
                "upgrades": ["Officer/N.C.O."],
                "vet_cost": 1,
                "equipment": ["Rifle"],
                "special": ["Skirmishers", "Sharpshooters"],
            },
            {
                "id": "light_dragoons",
                "name": "Light Dragoons",
                "cost_per_model": 7,
                "min_size": 4,
                "max_size": 8,
                "shoot": "5+",
                "melee": "4+",
                "resolve": 4,
                "experience": "Trained",
                "is_cavalry": True,
                "upgrades": ["Officer/N.C.O.", "Musician", "Standard Bearer"],
                "vet_cost": 2,
                "equipment": ["Sabre", "Carbine"],
                "special": ["Fast"],
            },
            {
                "id": "field_gun",
                "name": "Field Gun",
                "cost_per_crew": 12,
                "shoot": "4+",
                "melee": "6+",
                "resolve": 4,
                "experience": "Trained",
                "composition": "4 Crew and 1 Cannon",
                "is_artillery": True,
                "vet_cost": 4,
                "cannon_upgrades": ["light", "medium", "heavy"],
                "equipment": ["Cannon"],
            },
            {
                "id": "howitzer",
                "name": "Howitzer",
                "cost_per_crew": 20,
                "shoot": "4+",
                "melee": "6+",
                "resolve": 4,
                "experience": "Trained",
                "composition": "4 Crew and 1 Howitzer",
                "is_artillery": True,
                "is_howitzer": True,
                "vet_cost": 4,
                "equipment": ["Howitzer"],
                "special": ["Indirect Fire"],
            },
            {
                "id": "rocket_troop",
                "name": "Rocket Troop",
                "cost_per_crew": 16,
                "shoot": "5+",
                "melee": "6+",
                "resolve": 3,
                "experience": "Trained",
                "composition": "4 Crew and 1 Rocket Frame",
                "is_artillery": True,
                "is_rocket": True,
                "equipment": ["Congreve Rockets"],
                "special": ["Unreliable"],
            },
        ],
    },
    {
        "id": "french_army",
        "name": "French Army",
        "description": "Aggressive columns backed by massed guns and cavalry.",
        "force_rules": [
            "Infantry in Column add +1 Melee when charging.",
        ],
        "allies": ["Confederation of the Rhine"],
        "commanders": [
            {
                "id": "french_officer",
                "name": "French Officer",
                "pts": 20,
                "shoot": "4+",
                "melee": "4+",
                "resolve": 4,
                "cmd_range": 12,
                "cmd_pts": 3,
                "experience": "Trained",
                "composition": "1 Officer and 5 Fusiliers",
                "options": [_MOUNT, _VETERAN],
                "special": ["Leader"],
            },
            {
                "id": "french_cavalry_officer",
                "name": "Officer of Hussars",
                "pts": 30,
                "shoot": "5+",
                "melee": "3+",
                "resolve": 5,
                "cmd_range": 18,
                "cmd_pts": 3,
                "experience": "Veteran",
                "composition": "1 mounted Officer and 3 Hussars",
                "is_cavalry_commander": True,
                "unit_model_cost": 7,
                "options": [_VETERAN],
                "special": ["Leader", "Shock Cavalry"],
            },
        ],
        "core": [
            {
                "id": "ligne_infantry",
                "name": "Infanterie de Ligne",
                "cost_per_model": 3,
                "min_size": 6,
                "max_size": 16,
                "shoot": "5+",
                "melee": "4+",
                "resolve": 4,
                "experience": "Trained",
                "upgrades": ["Officer/N.C.O.", "Musician", "Standard Bearer"],
                "vet_cost": 1,
                "equipment": ["Musket", "Bayonet"],
                "formations": ["Line", "Column", "Square"],
            },
            {
                "id": "garde_nationale",
                "name": "Garde Nationale",
                "cost_per_model": 2,
                "min_size": 8,
                "max_size": 20,
                "shoot": "6+",
                "melee": "5+",
                "resolve": 3,
                "experience": "Inexperienced",
                "upgrades": ["Officer/N.C.O.", "Musician"],
                "trained_cost": 1,
                "equipment": ["Musket"],
                "special": ["Poor Leadership"],
            },
        ],
        "support": [
            {
                "id": "voltigeurs",
                "name": "Voltigeurs",
                "cost_per_model": 4,
                "min_size": 4,
                "max_size": 10,
                "shoot": "4+",
                "melee": "5+",
                "resolve": 4,
                "experience": "Trained",
                "upgrades": ["Officer/N.C.O.", "Musician"],
                "vet_cost": 1,
                "equipment": ["Musket", "Bayonet"],
                "special": ["Skirmishers"],
            },
            {
                "id": "hussars",
                "name": "Hussars",
                "cost_per_model": 7,
                "min_size": 4,
                "max_size": 8,
                "shoot": "5+",
                "melee": "3+",
                "resolve": 4,
                "experience": "Veteran",
                "is_cavalry": True,
                "upgrades": ["Officer/N.C.O.", "Musician", "Standard Bearer"],
                "vet_cost": 2,
                "equipment": ["Sabre", "Pistol"],
                "special": ["Fast", "Shock Cavalry"],
            },
            {
                "id": "foot_artillery",
                "name": "Foot Artillery",
                "cost_per_crew": 12,
                "shoot": "4+",
                "melee": "6+",
                "resolve": 4,
                "experience": "Trained",
                "composition": "4 Crew and 1 Cannon",
                "is_artillery": True,
                "vet_cost": 4,
                "cannon_upgrades": ["medium", "heavy"],
                "equipment": ["Cannon"],
            },
        ],
    },
]


def raw_catalog() -> dict[str, Any]:
    """Return a fresh copy of the bundled catalog payload."""

    return deepcopy(
        {
            "factions": FACTIONS,
            "cannon_types": CANNON_TYPES,
            "point_guidance": POINT_GUIDANCE,
            "special_rules_glossary": SPECIAL_RULES_GLOSSARY,
            "weapon_glossary": WEAPON_GLOSSARY,
        }
    )
