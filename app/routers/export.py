from __future__ import annotations

import io
import textwrap
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from ..config import TEMPLATES_DIR
from ..dependencies import get_catalog, get_roster_state
from ..models import RosterState
from ..services.catalog import Catalog
from ..services.summary import build_roster_view

router = APIRouter(prefix="/roster", tags=["export"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

TITLE = "BLOOD & BAYONETS - FORCE ROSTER"
TEXT_FILENAME = "blood-bayonets-force.txt"
PDF_FILENAME = "blood-bayonets-force.pdf"
PDF_BASE_FONT = "Helvetica"
PDF_BOLD_FONT = "Helvetica-Bold"


def _unit_profile_line(entry: dict[str, Any], separator: str = " · ") -> str:
    definition = entry["definition"]
    if definition.is_artillery:
        parts = ["Crew", definition.experience, definition.composition]
    else:
        parts = [
            f"{entry['quantity']} models",
            definition.experience,
            f"Shoot {definition.shoot}",
            f"Melee {definition.melee}",
        ]
    if entry.get("cannon"):
        parts.append(entry["cannon"])
    return separator.join(part for part in parts if part)


def _unit_detail_lines(entry: dict[str, Any]) -> list[str]:
    lines: list[str] = []
    if entry["is_veteran"]:
        lines.append("+ Veteran")
    if entry["is_trained"]:
        lines.append("+ Upgraded to Trained")
    if entry["is_downgraded"]:
        lines.append("+ Downgraded to Half Pikes")
    if entry["active_upgrades"]:
        lines.append(f"Upgrades: {', '.join(entry['active_upgrades'])}")
    return lines


def _commander_lines(commander: dict[str, Any] | None, separator: str = " · ") -> list[str]:
    if not commander:
        return []
    definition = commander["definition"]
    lines = [
        separator.join(
            [
                definition.experience,
                f"Shoot {definition.shoot}",
                f"Melee {definition.melee}",
                f"Resolve {definition.resolve}",
            ]
        ),
        f'Command {definition.cmd_range}" / {definition.cmd_points} pts',
    ]
    if definition.composition:
        lines.append(definition.composition)
    if commander["active_options"]:
        lines.append(f"Options: {', '.join(commander['active_options'])}")
    if commander["active_upgrades"]:
        lines.append(f"Unit upgrades: {', '.join(commander['active_upgrades'])}")
    return lines


def _unit_sections(view: dict[str, Any]) -> list[tuple[str, list[dict[str, Any]]]]:
    return [
        ("CORE UNITS", view["listed_core_units"]),
        ("SUPPORT UNITS", view["listed_support_units"]),
    ]


def roster_text(view: dict[str, Any], generated_at: datetime) -> str:
    faction = view["faction"]
    commander = view["commander"]
    lines = [
        TITLE,
        "=" * 50,
        f"Faction: {faction.name if faction else view['faction_id']}",
        f"Points: {view['total_cost']} / {view['points_limit']}",
        f"Date: {generated_at.strftime('%Y-%m-%d')}",
        "",
    ]
    commander_name = commander["name"] if commander else "None"
    lines.append(f"COMMANDER: {commander_name} [{view['commander_cost']} pts]")
    lines.extend(f"  {line}" for line in _commander_lines(commander))
    lines.append("")

    for index, (title, entries) in enumerate(_unit_sections(view)):
        if index:
            lines.append("")
        lines.append(f"{title} ({len(entries)})")
        lines.append("-" * 40)
        for entry in entries:
            lines.append(f"{entry['name']} [{entry['cost']} pts]")
            lines.append(f"  {_unit_profile_line(entry)}")
            lines.extend(f"  {line}" for line in _unit_detail_lines(entry))
            lines.append("")

    lines.append("=" * 50)
    lines.append(f"TOTAL: {view['total_cost']} pts")
    return "\n".join(lines) + "\n"


@router.get("/export/txt", response_class=PlainTextResponse)
def roster_export_text(
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    view = build_roster_view(catalog, state)
    headers = {"Content-Disposition": f"attachment; filename={TEXT_FILENAME}"}
    return PlainTextResponse(roster_text(view, datetime.now()), headers=headers)


@router.get("/print", response_class=HTMLResponse)
def roster_print(
    request: Request,
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    view = build_roster_view(catalog, state)
    return templates.TemplateResponse(
        request,
        "roster_print.html",
        {
            "request": request,
            "view": view,
            "sections": [
                ("Core Units", view["listed_core_units"]),
                ("Support Units", view["listed_support_units"]),
            ],
            "generated_at": datetime.now(),
        },
    )


def roster_pdf_bytes(view: dict[str, Any], generated_at: datetime) -> bytes:
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    y = height - 50
    line_height = 12
    margin = 60

    def wrap_line(text: str, width_limit: int = 100) -> list[str]:
        if not text:
            return [""]
        wrapped = textwrap.wrap(text, width=width_limit)
        return wrapped or [text]

    def draw_page_header() -> None:
        nonlocal y
        faction = view["faction"]
        pdf.setFont(PDF_BOLD_FONT, 14)
        pdf.drawString(40, y, TITLE)
        y -= 16
        pdf.setFont(PDF_BASE_FONT, 10)
        pdf.drawString(40, y, f"Faction: {faction.name if faction else view['faction_id']}")
        y -= 14
        pdf.drawString(40, y, f"Points: {view['total_cost']} / {view['points_limit']}")
        y -= 14
        pdf.drawString(
            40,
            y,
            f"Core: {len(view['listed_core_units'])} | Support: {len(view['listed_support_units'])}",
        )
        y -= 14
        pdf.drawString(40, y, f"Date: {generated_at.strftime('%Y-%m-%d')}")
        y -= 18

    def draw_block(line_specs: list[tuple[str, float, int, str]]) -> None:
        nonlocal y
        required_space = line_height * (len(line_specs) + 1)
        if y - required_space < margin:
            pdf.showPage()
            y = height - 50
            draw_page_header()
        for font_name, font_size, x_offset, text in line_specs:
            pdf.setFont(font_name, font_size)
            pdf.drawString(x_offset, y, text)
            y -= line_height
        y -= 6

    draw_page_header()

    commander = view["commander"]
    commander_specs: list[tuple[str, float, int, str]] = [(PDF_BOLD_FONT, 12, 40, "Commander")]
    if commander:
        commander_specs.append(
            (PDF_BOLD_FONT, 11, 40, f"{commander['name']} ({view['commander_cost']} pts)")
        )
        for line in _commander_lines(commander, separator=" | "):
            for segment in wrap_line(line):
                commander_specs.append((PDF_BASE_FONT, 10, 50, segment))
        special = ", ".join(item["name"] for item in commander["special"])
        if special:
            commander_specs.append((PDF_BASE_FONT, 10, 50, special))
    else:
        commander_specs.append((PDF_BASE_FONT, 10, 40, "None"))
    draw_block(commander_specs)

    for title, entries in _unit_sections(view):
        draw_block([(PDF_BOLD_FONT, 12, 40, f"{title.title()} ({len(entries)})")])
        for entry in entries:
            line_specs: list[tuple[str, float, int, str]] = [
                (PDF_BOLD_FONT, 11, 40, f"{entry['name']} ({entry['cost']} pts)")
            ]
            for line in [_unit_profile_line(entry, separator=" | "), *_unit_detail_lines(entry)]:
                for segment in wrap_line(line):
                    line_specs.append((PDF_BASE_FONT, 10, 50, segment))
            special = ", ".join(item["name"] for item in entry["special"])
            if special:
                line_specs.append((PDF_BASE_FONT, 10, 50, special))
            draw_block(line_specs)

    draw_block([(PDF_BOLD_FONT, 12, 40, f"TOTAL: {view['total_cost']} / {view['points_limit']} pts")])

    pdf.showPage()
    pdf.save()
    buffer.seek(0)
    return buffer.getvalue()


@router.get("/pdf")
def roster_pdf(
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    view = build_roster_view(catalog, state)
    headers = {"Content-Disposition": f"attachment; filename={PDF_FILENAME}"}
    return Response(
        roster_pdf_bytes(view, datetime.now()),
        media_type="application/pdf",
        headers=headers,
    )
