from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.data import factions
from app.models import RosterState, new_roster_state
from app.services.catalog import Catalog, build_catalog


SCENARIO_PAYLOAD = {
    "factions": [
        {
            "id": "test_faction",
            "name": "Test Faction",
            "commanders": [
                {
                    "id": "officer",
                    "name": "Officer",
                    "pts": 20,
                    "options": [
                        {"key": "mount", "label": "Mount Commander", "pts": 4},
                        {"key": "veteran", "label": "Upgrade to Veteran", "pts": 4},
                    ],
                },
                {"id": "general", "name": "General", "pts": 30},
                {
                    "id": "cav_officer",
                    "name": "Cavalry Officer",
                    "pts": 25,
                    "is_cavalry_commander": True,
                },
                {"id": "attache", "name": "Attache", "pts": 15, "is_attachment": True},
                {"id": "navy", "name": "Navy Officer", "pts": 18, "is_navy": True},
                {"id": "heavy_officer", "name": "Heavy Officer", "pts": 22, "unit_model_cost": 5},
            ],
            "core": [
                {
                    "id": "infantry",
                    "name": "Infantry",
                    "cost_per_model": 3,
                    "min_size": 6,
                    "max_size": 16,
                    "upgrades": ["Officer/N.C.O.", "Musician", "Standard Bearer"],
                    "vet_cost": 1,
                },
                {
                    "id": "militia",
                    "name": "Militia",
                    "cost_per_model": 2,
                    "min_size": 8,
                    "max_size": 20,
                    "trained_cost": 1,
                    "downgrade_cost": -1,
                },
            ],
            "support": [
                {
                    "id": "cavalry",
                    "name": "Cavalry",
                    "cost_per_model": 7,
                    "min_size": 4,
                    "max_size": 8,
                    "is_cavalry": True,
                    "vet_cost": 2,
                },
                {
                    "id": "skirmishers",
                    "name": "Skirmishers",
                    "cost_per_model": 5,
                    "min_size": 4,
                    "max_size": 10,
                    "upgrades": ["Officer/N.C.O."],
                },
                {
                    "id": "gun",
                    "name": "Gun",
                    "cost_per_crew": 12,
                    "is_artillery": True,
                    "vet_cost": 4,
                    "cannon_upgrades": ["light", "heavy"],
                },
                {
                    "id": "howitzer",
                    "name": "Howitzer",
                    "cost_per_crew": 20,
                    "is_artillery": True,
                    "is_howitzer": True,
                },
            ],
        },
        {
            "id": "other_faction",
            "name": "Other Faction",
            "commanders": [{"id": "captain", "name": "Captain", "pts": 16}],
            "core": [
                {"id": "levy", "name": "Levy", "cost_per_model": 2, "min_size": 10, "max_size": 24}
            ],
        },
    ],
    "cannon_types": {
        "light": {"name": "Light Cannon", "pts": 2},
        "heavy": {"name": "Heavy Cannon", "pts": 6},
    },
}


@pytest.fixture
def catalog() -> Catalog:
    return build_catalog(SCENARIO_PAYLOAD)


@pytest.fixture
def state() -> RosterState:
    return new_roster_state("test_faction", 250)


@pytest.fixture
def bundled_catalog() -> Catalog:
    return build_catalog(factions.raw_catalog())
