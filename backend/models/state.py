# Role: Per-session state container. Holds the bounded conversation history plus activity timestamps.
# Each state carries its own lock; SessionStore is the only writer and always mutates under that lock.

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import List

from pydantic import BaseModel, Field, PrivateAttr

from backend.models.message import Turn


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ConversationState(BaseModel):
    session_id: str
    history: List[Turn] = Field(default_factory=list)

    # Key line: turn_count counts user turns only (useful for debugging the state snapshot).
    turn_count: int = 0

    created_at: datetime = Field(default_factory=utc_now)
    last_activity_at: datetime = Field(default_factory=utc_now)

    _lock: threading.RLock = PrivateAttr(default_factory=threading.RLock)
    _evicted: bool = PrivateAttr(default=False)

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def evicted(self) -> bool:
        return self._evicted

    def mark_evicted(self) -> None:
        # Called by SessionStore under self.lock once the state has left the map.
        self._evicted = True

    def touch(self, now: datetime | None = None) -> None:
        self.last_activity_at = now or utc_now()

    def is_expired(self, now: datetime, ttl: timedelta) -> bool:
        return (now - self.last_activity_at) > ttl

    def snapshot_history(self) -> List[Turn]:
        # Turns are frozen, so a shallow copy is enough to hand out.
        with self._lock:
            return list(self.history)
