from __future__ import annotations

import logging
from typing import Callable

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..config import TEMPLATES_DIR
from ..dependencies import get_catalog, get_roster_state
from ..models import RosterState
from ..schemas import RosterSummary
from ..services import roster_ops
from ..services.catalog import Catalog
from ..services.summary import build_roster_view

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/roster", tags=["roster"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

_CONDITION_TOGGLES: dict[str, Callable[[Catalog, RosterState, int], bool]] = {
    "veteran": roster_ops.toggle_veteran,
    "trained": roster_ops.toggle_trained,
    "downgrade": roster_ops.toggle_downgrade,
}


def _summary(catalog: Catalog, state: RosterState) -> RosterSummary:
    return RosterSummary.from_view(build_roster_view(catalog, state))


def _respond(request: Request, catalog: Catalog, state: RosterState):
    accept_header = (request.headers.get("accept") or "").lower()
    if "application/json" in accept_header:
        return JSONResponse(_summary(catalog, state).model_dump())
    return RedirectResponse(url="/roster", status_code=303)


@router.get("", response_class=HTMLResponse)
def edit_roster(
    request: Request,
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    view = build_roster_view(catalog, state)
    return templates.TemplateResponse(
        request,
        "roster.html",
        {
            "request": request,
            "catalog": catalog,
            "state": state,
            "view": view,
        },
    )


@router.get("/summary", response_model=RosterSummary)
def roster_summary(
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    return _summary(catalog, state)


@router.post("/faction")
def select_faction(
    request: Request,
    faction_id: str = Form(...),
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    if roster_ops.select_faction(catalog, state, faction_id):
        logger.info("Faction switched to %s", faction_id)
    return _respond(request, catalog, state)


@router.post("/points")
def set_points_limit(
    request: Request,
    points_limit: str = Form(""),
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    roster_ops.set_points_limit(state, points_limit)
    return _respond(request, catalog, state)


@router.post("/commander")
def select_commander(
    request: Request,
    commander_id: str = Form(""),
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    roster_ops.select_commander(catalog, state, commander_id or None)
    return _respond(request, catalog, state)


@router.post("/commander/options/{key}")
def toggle_commander_option(
    key: str,
    request: Request,
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    roster_ops.toggle_commander_option(catalog, state, key)
    return _respond(request, catalog, state)


@router.post("/commander/upgrades/{key}")
def toggle_commander_upgrade(
    key: str,
    request: Request,
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    roster_ops.toggle_commander_upgrade(state, key)
    return _respond(request, catalog, state)


@router.post("/units/add")
def add_unit(
    request: Request,
    unit_id: str = Form(...),
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    roster_ops.add_unit(catalog, state, unit_id)
    return _respond(request, catalog, state)


@router.post("/units/{uid}/delete")
def remove_unit(
    uid: int,
    request: Request,
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    roster_ops.remove_unit(state, uid)
    return _respond(request, catalog, state)


@router.post("/units/{uid}/quantity")
def change_quantity(
    uid: int,
    request: Request,
    delta: int = Form(...),
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    roster_ops.change_quantity(catalog, state, uid, delta)
    return _respond(request, catalog, state)


@router.post("/units/{uid}/cannon")
def set_cannon_type(
    uid: int,
    request: Request,
    cannon_type: str = Form(""),
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    roster_ops.set_cannon_type(state, uid, cannon_type or None)
    return _respond(request, catalog, state)


@router.post("/units/{uid}/condition/{key}")
def toggle_condition(
    uid: int,
    key: str,
    request: Request,
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    toggle = _CONDITION_TOGGLES.get(key)
    if toggle is not None:
        toggle(catalog, state, uid)
    return _respond(request, catalog, state)


@router.post("/units/{uid}/upgrades/{key}")
def toggle_unit_upgrade(
    uid: int,
    key: str,
    request: Request,
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    roster_ops.toggle_unit_upgrade(state, uid, key)
    return _respond(request, catalog, state)


@router.post("/clear")
def clear_force(
    request: Request,
    catalog: Catalog = Depends(get_catalog),
    state: RosterState = Depends(get_roster_state),
):
    roster_ops.clear_force(state)
    return _respond(request, catalog, state)
