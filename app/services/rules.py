from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from ..models import RosterState
from . import costs
from .catalog import Catalog


@dataclass
class UnitSummary:
    """Light-weight snapshot of a roster entry used for size validation."""

    name: str
    models: int
    min_size: int | None
    max_size: int | None


def _summaries(catalog: Catalog, state: RosterState) -> Iterable[UnitSummary]:
    for unit in state.units:
        definition = costs.unit_definition(catalog, state, unit)
        if definition is None or definition.is_artillery:
            continue
        yield UnitSummary(
            name=definition.name,
            models=unit.quantity,
            min_size=definition.min_size,
            max_size=definition.max_size,
        )


def collect_roster_warnings(
    catalog: Catalog, state: RosterState, total_cost: int | None = None
) -> List[str]:
    """Return the force's rule violations in a stable order; empty means legal."""

    if total_cost is None:
        total_cost = costs.roster_total(catalog, state)

    core = costs.core_count(catalog, state)
    support = costs.support_count(catalog, state)
    allowed_support = core // 2

    warnings: List[str] = []

    if not state.commander_id:
        warnings.append("No Commander selected.")

    if total_cost > state.points_limit:
        warnings.append(f"Over points limit by {total_cost - state.points_limit} pts.")

    if support > allowed_support:
        warnings.append(
            f"Too many Support units ({support}). "
            f"For {core} Core units you may take {allowed_support}."
        )

    if state.commander_id and core == 0:
        warnings.append("Must include at least 1 Core unit.")

    for summary in _summaries(catalog, state):
        if summary.min_size is not None and summary.models < summary.min_size:
            warnings.append(
                f"{summary.name}: minimum {summary.min_size} models (currently {summary.models})."
            )
        if summary.max_size is not None and summary.models > summary.max_size:
            warnings.append(
                f"{summary.name}: maximum {summary.max_size} models (currently {summary.models})."
            )

    return warnings
