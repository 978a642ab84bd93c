# Role: Central configuration module. Loads .env into environment variables and computes runtime settings
# (DEBUG, history/TTL bounds, timeouts, post search endpoint). Importers read backend.config.<NAME>
# so flags don't have to be threaded through every call.

from __future__ import annotations

import os
from dotenv import load_dotenv

DEBUG: bool = False

MAX_HISTORY: int = 10
SESSION_TTL_MINUTES: int = 60
REAPER_INTERVAL_SECONDS: int = 3600

COMPLETION_TIMEOUT_SECONDS: float = 30.0

POSTS_API_URL: str = "http://localhost:5006"
POST_SEARCH_TIMEOUT_SECONDS: float = 10.0
POST_SEARCH_MAX_RESULTS: int = 3


def _int_env(name: str, default: int) -> int:
    # Key line: a typo in .env must not crash startup; keep the default instead.
    try:
        value = int(os.getenv(name, str(default)))
    except ValueError:
        return default
    return value if value > 0 else default


def _float_env(name: str, default: float) -> float:
    try:
        value = float(os.getenv(name, str(default)))
    except ValueError:
        return default
    return value if value > 0 else default


def load_env() -> None:
    """
    Load .env into os.environ, then recompute every setting.
    This makes the settings correct even if load_env() is called after import.
    """
    global DEBUG, MAX_HISTORY, SESSION_TTL_MINUTES, REAPER_INTERVAL_SECONDS
    global COMPLETION_TIMEOUT_SECONDS, POSTS_API_URL, POST_SEARCH_TIMEOUT_SECONDS, POST_SEARCH_MAX_RESULTS
    load_dotenv()
    # Key line: accept common truthy values.
    DEBUG = os.getenv("DEBUG", "0").lower() in {"1", "true", "yes"}

    MAX_HISTORY = _int_env("MAX_HISTORY", 10)
    SESSION_TTL_MINUTES = _int_env("SESSION_TTL_MINUTES", 60)
    REAPER_INTERVAL_SECONDS = _int_env("REAPER_INTERVAL_SECONDS", 3600)

    COMPLETION_TIMEOUT_SECONDS = _float_env("COMPLETION_TIMEOUT_SECONDS", 30.0)

    POSTS_API_URL = os.getenv("POSTS_API_URL", "http://localhost:5006").rstrip("/")
    POST_SEARCH_TIMEOUT_SECONDS = _float_env("POST_SEARCH_TIMEOUT_SECONDS", 10.0)
    POST_SEARCH_MAX_RESULTS = _int_env("POST_SEARCH_MAX_RESULTS", 3)
