"""
Storefront Session Service
==========================

This module keeps the per-customer state of the storefront in memory: the
cart, the customization flow currently open (if any), the selected outlet
and the cutlery preference.

Sessions are not persisted. A session that is not touched within
SESSION_TTL_SECONDS is dropped together with its cart and flow.

Cache Eviction Strategy:
------------------------
1. **TTL-based**: Expired sessions are removed probabilistically (~1% of
   lookups) to avoid a dedicated maintenance task.

2. **LRU-based**: When the cache reaches SESSION_MAX_CACHE_SIZE, the oldest
   10% of sessions (by last access time) are evicted.

Thread Safety:
--------------
``_cache_lock`` guards the cache dictionary. Each session also carries its
own ``lock``; routes hold it for the whole of a mutation so that the
transitions of one customer's flow are applied one at a time.

Usage:
------
    from storefront.services.session import create_session, get_session

    session = create_session(catalog)
    with session.lock:
        session.orchestrator.select_item("classic-burger")
"""

import logging
import random
import threading
import time
import uuid
from typing import Any, Dict, Optional

from .. import config
from ..catalog import Catalog
from ..tasks.orchestrator import OrderingOrchestrator
from ..tasks.pricing import PricingEngine
from .cart import Cart

logger = logging.getLogger(__name__)


class StorefrontSession:
    """State of one customer browsing the storefront."""

    def __init__(self, session_id: str, catalog: Catalog):
        self.session_id = session_id
        self.lock = threading.Lock()
        self.cart = Cart(PricingEngine(catalog.config.currency_symbol))
        self.orchestrator = OrderingOrchestrator(catalog, self.cart)
        self.outlet_id: Optional[str] = None
        self.needs_cutlery = False

    @property
    def flow(self):
        return self.orchestrator.flow


# =============================================================================
# Session Cache
# =============================================================================
# {session_id: {"data": StorefrontSession, "last_access": timestamp}}

SESSION_CACHE: Dict[str, Dict[str, Any]] = {}
_cache_lock = threading.Lock()


# =============================================================================
# Cache Maintenance Functions
# =============================================================================

def _cleanup_expired_sessions() -> int:
    """
    Remove sessions not accessed within SESSION_TTL_SECONDS.

    Returns:
        int: Number of sessions removed
    """
    now = time.time()
    with _cache_lock:
        expired = [
            sid for sid, entry in SESSION_CACHE.items()
            if now - entry.get("last_access", 0) > config.SESSION_TTL_SECONDS
        ]
        for sid in expired:
            del SESSION_CACHE[sid]

    if expired:
        logger.debug("Cleaned up %d expired sessions from cache", len(expired))
    return len(expired)


def _evict_oldest_sessions(count: int) -> None:
    """Evict the ``count`` least recently used sessions. Caller holds ``_cache_lock``."""
    sorted_sessions = sorted(SESSION_CACHE.items(), key=lambda x: x[1].get("last_access", 0))
    for sid, _ in sorted_sessions[:count]:
        del SESSION_CACHE[sid]
    logger.debug("Evicted %d oldest sessions from cache", min(count, len(sorted_sessions)))


# =============================================================================
# Public Session Management Functions
# =============================================================================

def create_session(catalog: Catalog) -> StorefrontSession:
    """Create and cache a new storefront session."""
    session = StorefrontSession(str(uuid.uuid4()), catalog)
    with _cache_lock:
        if len(SESSION_CACHE) >= config.SESSION_MAX_CACHE_SIZE:
            _evict_oldest_sessions(max(1, config.SESSION_MAX_CACHE_SIZE // 10))
        SESSION_CACHE[session.session_id] = {
            "data": session,
            "last_access": time.time(),
        }
    logger.info("Created storefront session %s", session.session_id[:8])
    return session


def get_session(session_id: str) -> Optional[StorefrontSession]:
    """
    Look up a session and refresh its last access time.

    Returns:
        The session, or None if it does not exist or has expired.
    """
    if random.randint(1, 100) == 1:
        _cleanup_expired_sessions()

    with _cache_lock:
        entry = SESSION_CACHE.get(session_id)
        if entry is None:
            return None
        if time.time() - entry["last_access"] > config.SESSION_TTL_SECONDS:
            del SESSION_CACHE[session_id]
            return None
        entry["last_access"] = time.time()
        return entry["data"]


def clear_cache() -> int:
    """
    Drop every session. Used by tests.

    Returns:
        int: Number of sessions that were cached
    """
    with _cache_lock:
        count = len(SESSION_CACHE)
        SESSION_CACHE.clear()
    logger.info("Cleared %d sessions from cache", count)
    return count


def get_cache_stats() -> Dict[str, Any]:
    """Cache size and configuration, for the admin status endpoint."""
    with _cache_lock:
        access_times = [entry["last_access"] for entry in SESSION_CACHE.values()]
        return {
            "size": len(SESSION_CACHE),
            "max_size": config.SESSION_MAX_CACHE_SIZE,
            "ttl_seconds": config.SESSION_TTL_SECONDS,
            "oldest_access": min(access_times) if access_times else None,
            "newest_access": max(access_times) if access_times else None,
        }
