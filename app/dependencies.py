from fastapi import Request

from .models import RosterState
from .services.catalog import Catalog, default_catalog
from .services.sessions import store

SESSION_TOKEN_KEY = "roster_token"


def get_catalog() -> Catalog:
    return default_catalog()


def get_roster_state(request: Request) -> RosterState:
    token = request.session.get(SESSION_TOKEN_KEY)
    new_token, state = store.get_or_create(token)
    if new_token != token:
        request.session[SESSION_TOKEN_KEY] = new_token
    return state
