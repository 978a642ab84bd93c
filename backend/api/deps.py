# Role: Composition root for the HTTP layer. Builds the process-wide SessionStore, SessionReaper and
# ChatOrchestrator once, and exposes them as FastAPI dependencies (overridable in tests).

from __future__ import annotations

import backend.config as config
from backend.core.chat_orchestrator import ChatOrchestrator
from backend.core.session_reaper import SessionReaper
from backend.core.session_store import SessionStore

session_store = SessionStore(
    max_history=config.MAX_HISTORY,
    session_ttl_minutes=config.SESSION_TTL_MINUTES,
)
session_reaper = SessionReaper(session_store, interval_seconds=config.REAPER_INTERVAL_SECONDS)
chat_orchestrator = ChatOrchestrator(session_store=session_store)


def get_chat_orchestrator() -> ChatOrchestrator:
    return chat_orchestrator


def get_session_store() -> SessionStore:
    return session_store
