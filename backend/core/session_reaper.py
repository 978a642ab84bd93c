# Role: Background janitor for SessionStore. A daemon thread that wakes on a fixed interval and
# evicts idle sessions. Lifecycle is explicit (start/stop from the app lifespan), never tied to import.

from __future__ import annotations

import threading
from typing import Optional

import backend.config as config
from backend.core.session_store import SessionStore


class SessionReaper:
    def __init__(self, session_store: SessionStore, interval_seconds: float = 3600) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        self.session_store = session_store
        self.interval_seconds = interval_seconds
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="session-reaper", daemon=True)
        self._thread.start()
        if config.DEBUG:
            print(f"[SESSION_REAPER] started (interval={self.interval_seconds}s)")

    def stop(self, timeout: float = 5.0) -> None:
        # Abrupt loss of in-memory sessions on shutdown is fine: same as idle expiry.
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
        if config.DEBUG:
            print("[SESSION_REAPER] stopped")

    def run_once(self) -> int:
        try:
            evicted = self.session_store.sweep_expired()
        except Exception as e:
            # Key line: one failed sweep must not kill the loop; the next tick retries.
            print(f"[SESSION_REAPER] sweep failed: {e!r}")
            return 0

        if config.DEBUG:
            print(f"[SESSION_REAPER] sweep evicted {evicted} session(s), {len(self.session_store)} active")
        return evicted

    def _run(self) -> None:
        # wait() returns True once stop() is called, which ends the loop without sleeping out the interval.
        while not self._stop_event.wait(self.interval_seconds):
            self.run_once()
