from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from .config import DEBUG, DEFAULT_FACTION, LOG_LEVEL, SECRET_KEY, STATIC_DIR
from .routers import export, export_xlsx, rosters
from .services.catalog import default_catalog

logging.getLogger("app").setLevel(LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(debug=DEBUG)
app.add_middleware(SessionMiddleware, secret_key=SECRET_KEY)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


@app.on_event("startup")
def startup_event() -> None:
    catalog = default_catalog()
    logger.info("Application started with %d factions", len(catalog.factions))
    if catalog.faction(DEFAULT_FACTION) is None:
        logger.warning(
            "Default faction %r is not in the catalog; new rosters cannot add units",
            DEFAULT_FACTION,
        )


@app.get("/")
def index():
    return RedirectResponse(url="/roster", status_code=303)


app.include_router(rosters.router)
app.include_router(export.router)
app.include_router(export_xlsx.router)
