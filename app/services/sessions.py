from __future__ import annotations

import logging
import secrets
from collections import OrderedDict

from ..config import MAX_SESSIONS
from ..models import RosterState, new_roster_state

logger = logging.getLogger(__name__)


class SessionStore:
    """In-process roster states keyed by the token kept in the session cookie.

    Nothing is written to disk. At most ``max_sessions`` states are kept; the
    least recently used one is dropped when a new session would exceed that.
    """

    def __init__(self, max_sessions: int = MAX_SESSIONS) -> None:
        self.max_sessions = max(1, max_sessions)
        self._states: OrderedDict[str, RosterState] = OrderedDict()

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, token: object) -> bool:
        return token in self._states

    def _evict(self) -> None:
        while len(self._states) > self.max_sessions:
            token, _ = self._states.popitem(last=False)
            logger.debug("Evicted idle roster session %s", token)

    def create(self) -> tuple[str, RosterState]:
        token = secrets.token_urlsafe(16)
        state = new_roster_state()
        self._states[token] = state
        self._evict()
        logger.debug("Created roster session %s", token)
        return token, state

    def get(self, token: str | None) -> RosterState | None:
        if not token or token not in self:
            return None
        self._states.move_to_end(token)
        return self._states[token]

    def get_or_create(self, token: str | None) -> tuple[str, RosterState]:
        state = self.get(token)
        if state is not None:
            return token, state
        return self.create()

    def discard(self, token: str | None) -> None:
        if token:
            self._states.pop(token, None)


store = SessionStore()
