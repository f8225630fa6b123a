from __future__ import annotations

from io import BytesIO
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from openpyxl import Workbook

from ..dependencies import get_catalog, get_roster_state
from ..models import RosterState
from ..services.catalog import Catalog
from ..services.summary import build_roster_view

router = APIRouter(prefix="/export", tags=["export"])


def _autosize(sheet, limit: int) -> None:
    for column_cells in sheet.columns:
        max_length = max(len(str(cell.value or "")) for cell in column_cells)
        adjusted = max_length + 2
        column_letter = column_cells[0].column_letter
        sheet.column_dimensions[column_letter].width = min(adjusted, limit)


def _options_text(entry: dict[str, Any]) -> str:
    parts: list[str] = []
    if entry["is_veteran"]:
        parts.append("Veteran")
    if entry["is_trained"]:
        parts.append("Trained")
    if entry["is_downgraded"]:
        parts.append("Half Pikes")
    parts.extend(entry["active_upgrades"])
    if entry.get("cannon"):
        parts.append(entry["cannon"])
    return ", ".join(parts) if parts else "-"


def _append_roster_sheet(workbook: Workbook, view: dict[str, Any]) -> int:
    sheet = workbook.active
    sheet.title = "Force"
    faction = view["faction"]
    sheet.append([f"Faction: {faction.name if faction else view['faction_id']}"])
    sheet.append(["Unit", "Role", "Models", "Experience", "Options", "Points"])

    commander = view["commander"]
    if commander:
        chosen = [*commander["active_options"], *commander["active_upgrades"]]
        sheet.append(
            [
                commander["name"],
                "commander",
                "",
                commander["definition"].experience,
                ", ".join(chosen) if chosen else "-",
                commander["cost"],
            ]
        )

    for entry in view["units"]:
        definition = entry["definition"]
        sheet.append(
            [
                entry["name"],
                entry["role_label"],
                entry["quantity"] if entry["quantity"] is not None else definition.composition,
                definition.experience,
                _options_text(entry),
                entry["cost"],
            ]
        )

    total_cost = view["total_cost"]
    sheet.append(["", "", "", "", "Total", total_cost])
    sheet.append(["", "", "", "", "Limit", view["points_limit"]])
    _autosize(sheet, 60)
    return total_cost


def _append_cannons_sheet(workbook: Workbook, view: dict[str, Any]) -> None:
    sheet = workbook.create_sheet("Cannons")
    sheet.append(["Unit", "Cannon", "Points"])
    for entry in view["units"]:
        if not entry["cannon"]:
            continue
        sheet.append([entry["name"], entry["cannon"], entry["cannon_points"]])
    _autosize(sheet, 50)


@router.get("/xlsx")
def export_xlsx(
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    view = build_roster_view(catalog, state)
    workbook = Workbook()
    total_cost = _append_roster_sheet(workbook, view)
    _append_cannons_sheet(workbook, view)

    buffer = BytesIO()
    workbook.save(buffer)
    buffer.seek(0)
    filename = f"force_{view['faction_id']}_{total_cost}.xlsx"
    headers = {"Content-Disposition": f"attachment; filename={filename}"}
    return StreamingResponse(
        buffer,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers=headers,
    )
