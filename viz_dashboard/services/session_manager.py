from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from typing import Callable, Optional

from viz_dashboard.services.dashboard_controller import DashboardController

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 100


def generate_session_id() -> str:
    return f"session-{uuid.uuid4().hex}"


class SessionManager:
    """
    One DashboardController per browser page.

    Pages hold their session id in a memory store, so every tab gets its own
    FilterSet, Dataset and render snapshot. Controllers are created lazily;
    past `max_sessions` the least recently used one is dropped and that page
    starts over on its next filter callback.
    """

    def __init__(
            self,
            factory: Callable[[], DashboardController],
            max_sessions: int = DEFAULT_MAX_SESSIONS,
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._factory = factory
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, DashboardController] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def get(self, session_id: Optional[str]) -> Optional[DashboardController]:
        if session_id is None or session_id not in self._sessions:
            return None
        self._sessions.move_to_end(session_id)
        return self._sessions[session_id]

    def get_or_create(self, session_id: str) -> DashboardController:
        controller = self.get(session_id)
        if controller is not None:
            return controller

        controller = self._factory()
        self._sessions[session_id] = controller
        logger.info("session_created", extra={"session_id": session_id, "sessions": len(self._sessions)})

        while len(self._sessions) > self._max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("session_evicted", extra={"session_id": evicted})
        return controller
