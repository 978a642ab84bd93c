import time
from datetime import timedelta

import pytest

from backend.core.session_reaper import SessionReaper
from backend.models.state import utc_now


def test_run_once_sweeps_expired(store):
    stale = store.get_or_create("stale")
    store.get_or_create("fresh")
    stale.last_activity_at = utc_now() - timedelta(hours=2)

    reaper = SessionReaper(store)
    assert reaper.run_once() == 1
    assert "stale" not in store
    assert "fresh" in store


def test_not_started_on_construction(store):
    reaper = SessionReaper(store, interval_seconds=0.01)
    assert reaper.is_running is False


def test_start_and_stop_background_thread(store):
    stale = store.get_or_create("stale")
    stale.last_activity_at = utc_now() - timedelta(hours=2)

    reaper = SessionReaper(store, interval_seconds=0.01)
    reaper.start()
    try:
        assert reaper.is_running
        deadline = time.monotonic() + 2
        while "stale" in store and time.monotonic() < deadline:
            time.sleep(0.01)
        assert "stale" not in store
    finally:
        reaper.stop()

    assert reaper.is_running is False


def test_start_twice_keeps_one_thread(store):
    reaper = SessionReaper(store, interval_seconds=10)
    reaper.start()
    try:
        first = reaper._thread
        reaper.start()
        assert reaper._thread is first
    finally:
        reaper.stop()


def test_stop_is_prompt_with_long_interval(store):
    reaper = SessionReaper(store, interval_seconds=3600)
    reaper.start()
    started = time.monotonic()
    reaper.stop()
    assert time.monotonic() - started < 2


def test_sweep_failure_does_not_raise(store, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("sweep exploded")

    monkeypatch.setattr(store, "sweep_expired", boom)
    reaper = SessionReaper(store)
    assert reaper.run_once() == 0


def test_invalid_interval_rejected(store):
    with pytest.raises(ValueError):
        SessionReaper(store, interval_seconds=0)
