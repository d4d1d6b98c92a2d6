"""
In-memory registry of design assistant sessions.

One DesignAssistantSession per client-chosen session id, so a new streaming
request supersedes the previous one for the same client. Nothing is persisted:
a session is kept only while its run is in flight, and the registry never holds
more than ``settings.design_max_sessions`` entries.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import Optional

from ballmill.core.engine import DesignAssistantSession
from ballmill.core.logging import get_logger
from ballmill.core.settings import settings

logger = get_logger(__name__)

# Oldest first; a lookup moves the session to the end
_sessions: "OrderedDict[str, DesignAssistantSession]" = OrderedDict()


def _is_idle(session: DesignAssistantSession) -> bool:
    run = session.current_run
    return run is None or run.done


def prune_sessions() -> int:
    """Drop sessions with nothing in flight; returns how many were dropped."""
    idle = [key for key, session in _sessions.items() if _is_idle(session)]
    for key in idle:
        del _sessions[key]
    return len(idle)


def _evict_oldest(limit: int) -> None:
    while len(_sessions) >= limit:
        session_id, session = _sessions.popitem(last=False)
        # Its stream ends with a superseded event
        session.edit_requirements()
        logger.warning("design_session_evicted", session_id=session_id, limit=limit)


def get_session(session_id: str, step_delay: Optional[float] = None) -> DesignAssistantSession:
    session = _sessions.get(session_id)
    if session is not None:
        _sessions.move_to_end(session_id)
        return session

    prune_sessions()
    _evict_oldest(max(1, settings.design_max_sessions))
    session = DesignAssistantSession(step_delay=step_delay)
    _sessions[session_id] = session
    logger.debug("design_session_created", session_id=session_id, active=len(_sessions))
    return session


def session_count() -> int:
    return len(_sessions)


def reset_sessions() -> None:
    """Cancel runs in flight and forget all sessions."""
    for session in _sessions.values():
        session.edit_requirements()
    _sessions.clear()
