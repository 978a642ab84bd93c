# Role: In-memory session store. Owns lifecycle of ConversationState objects:
# create/get by session_id, append turns, enforce bounded history, and sweep expired sessions.
#
# Locking: a short map lock guards lookup/insert/remove; each state has its own lock for mutation.
# The sweep takes the same locks (map -> state), so it can never evict a state mid-append.

from __future__ import annotations

import threading
from datetime import datetime, timedelta
from typing import Dict, List, Optional

import backend.config as config
from backend.models.message import Turn
from backend.models.state import ConversationState, utc_now


class SessionStore:
    def __init__(self, max_history: int = 10, session_ttl_minutes: int = 60) -> None:
        if max_history <= 0:
            raise ValueError("max_history must be > 0")
        self._states: Dict[str, ConversationState] = {}
        self._map_lock = threading.Lock()
        self._max_history = max_history
        self._ttl = timedelta(minutes=session_ttl_minutes)

    @property
    def max_history(self) -> int:
        return self._max_history

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def __len__(self) -> int:
        with self._map_lock:
            return len(self._states)

    def __contains__(self, session_id: str) -> bool:
        with self._map_lock:
            return session_id in self._states

    def get_or_create(self, session_id: str) -> ConversationState:
        # 1) Reuse existing state or insert a fresh one (atomic under the map lock)
        # 2) Refresh last activity under the state lock
        # 3) Retry if a sweep evicted the state between the two steps
        while True:
            with self._map_lock:
                state = self._states.get(session_id)
                if state is None:
                    state = ConversationState(session_id=session_id)
                    self._states[session_id] = state

            with state.lock:
                if state.evicted:
                    continue
                state.touch()
                return state

    def peek(self, session_id: str) -> Optional[ConversationState]:
        # Read-only lookup; does not count as user activity.
        with self._map_lock:
            return self._states.get(session_id)

    def get_history(self, session_id: str) -> List[Turn]:
        state = self.peek(session_id)
        if state is None:
            return []
        return state.snapshot_history()

    def append_turn(self, session_id: str, turn: Turn) -> Optional[ConversationState]:
        # 1) Look the state up (no-op returning None if missing; callers get_or_create first)
        # 2) Append + refresh activity + trim oldest, all under the state lock
        # 3) Return the state that actually holds the turn
        while True:
            state = self.peek(session_id)
            if state is None:
                if config.DEBUG:
                    print(f"[SESSION_STORE] append ignored, unknown session: {session_id}")
                return None

            with state.lock:
                if state.evicted:
                    # Swept after our lookup; re-check whether the id was recreated.
                    continue

                state.history.append(turn)
                if turn.role == "user":
                    state.turn_count += 1
                state.touch()

                overflow = len(state.history) - self._max_history
                if overflow > 0:
                    # Key line: drop oldest first, keep the most recent max_history turns.
                    del state.history[:overflow]
                return state

    def clear(self, session_id: str) -> bool:
        # Idempotent: clearing an unknown session is not an error.
        with self._map_lock:
            state = self._states.pop(session_id, None)
            if state is None:
                return False
            with state.lock:
                state.mark_evicted()

        if config.DEBUG:
            print(f"[SESSION_STORE] cleared session: {session_id}")
        return True

    def sweep_expired(self, now: Optional[datetime] = None, ttl: Optional[timedelta] = None) -> int:
        # Role: drop inactive sessions to avoid unbounded growth (long-running servers).
        now = now or utc_now()
        ttl = self._ttl if ttl is None else ttl
        evicted: List[str] = []

        with self._map_lock:
            for session_id, state in list(self._states.items()):
                # Key line: a state whose lock is busy is being mutated right now, so it is live.
                if not state.lock.acquire(blocking=False):
                    continue
                try:
                    if state.is_expired(now, ttl):
                        state.mark_evicted()
                        del self._states[session_id]
                        evicted.append(session_id)
                finally:
                    state.lock.release()

        if evicted and config.DEBUG:
            print(f"[SESSION_STORE] swept {len(evicted)} expired session(s): {evicted}")
        return len(evicted)
