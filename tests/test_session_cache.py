"""
Tests for the in-memory storefront session cache.
"""

import time

import pytest

import storefront.config as config_mod
from storefront.services import session as session_mod
from storefront.services.session import (
    SESSION_CACHE,
    clear_cache,
    create_session,
    get_cache_stats,
    get_session,
)


@pytest.fixture(autouse=True)
def empty_cache():
    clear_cache()
    yield
    clear_cache()


class TestSessionCache:

    def test_create_and_get(self, catalog):
        session = create_session(catalog)
        assert get_session(session.session_id) is session
        assert len(session.cart) == 0
        assert session.flow is None

    def test_unknown_session(self):
        assert get_session("missing") is None

    def test_expired_session_is_dropped(self, catalog, monkeypatch):
        monkeypatch.setattr(config_mod, "SESSION_TTL_SECONDS", 60)
        session = create_session(catalog)
        SESSION_CACHE[session.session_id]["last_access"] = time.time() - 120
        assert get_session(session.session_id) is None
        assert session.session_id not in SESSION_CACHE

    def test_get_refreshes_last_access(self, catalog):
        session = create_session(catalog)
        SESSION_CACHE[session.session_id]["last_access"] = time.time() - 10
        get_session(session.session_id)
        assert time.time() - SESSION_CACHE[session.session_id]["last_access"] < 5

    def test_cleanup_expired(self, catalog, monkeypatch):
        monkeypatch.setattr(config_mod, "SESSION_TTL_SECONDS", 60)
        old = create_session(catalog)
        fresh = create_session(catalog)
        SESSION_CACHE[old.session_id]["last_access"] = time.time() - 120
        assert session_mod._cleanup_expired_sessions() == 1
        assert fresh.session_id in SESSION_CACHE

    def test_full_cache_evicts_oldest(self, catalog, monkeypatch):
        """At capacity, the least recently used 10% are evicted."""
        monkeypatch.setattr(config_mod, "SESSION_MAX_CACHE_SIZE", 10)
        sessions = [create_session(catalog) for _ in range(10)]
        SESSION_CACHE[sessions[3].session_id]["last_access"] = time.time() - 1000
        create_session(catalog)
        assert len(SESSION_CACHE) == 10
        assert sessions[3].session_id not in SESSION_CACHE

    def test_stats(self, catalog):
        create_session(catalog)
        stats = get_cache_stats()
        assert stats["size"] == 1
        assert stats["max_size"] == config_mod.SESSION_MAX_CACHE_SIZE
        assert stats["oldest_access"] is not None

    def test_clear_cache(self, catalog):
        create_session(catalog)
        create_session(catalog)
        assert clear_cache() == 2
        assert get_cache_stats()["size"] == 0
