"""
Session Routes for the Storefront
=================================

Endpoints:
----------
- POST /sessions: Start a storefront session (empty cart, no flow)
- GET /sessions/{session_id}: Session summary
- PUT /sessions/{session_id}/outlet: Select the outlet orders go to

Every other customer-facing route takes the session id in its path and
resolves it with ``require_session``, which returns 404 for unknown or
expired sessions.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..catalog import Catalog, get_catalog
from ..schemas.session import OutletSelect, SessionOut
from ..services.session import StorefrontSession, create_session, get_session


logger = logging.getLogger(__name__)

sessions_router = APIRouter(prefix="/sessions", tags=["Sessions"])


# =============================================================================
# Helper Functions
# =============================================================================

def require_session(session_id: str) -> StorefrontSession:
    """FastAPI dependency resolving a storefront session from the path."""
    session = get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Invalid session_id")
    return session


def serialize_session(session: StorefrontSession) -> SessionOut:
    return SessionOut(
        session_id=session.session_id,
        outlet_id=session.outlet_id,
        needs_cutlery=session.needs_cutlery,
        item_count=session.cart.item_count(),
    )


# =============================================================================
# Session Endpoints
# =============================================================================

@sessions_router.post("", response_model=SessionOut, status_code=201)
def start_session(catalog: Catalog = Depends(get_catalog)) -> SessionOut:
    """Start a new storefront session."""
    return serialize_session(create_session(catalog))


@sessions_router.get("/{session_id}", response_model=SessionOut)
def read_session(session: StorefrontSession = Depends(require_session)) -> SessionOut:
    return serialize_session(session)


@sessions_router.put("/{session_id}/outlet", response_model=SessionOut)
def select_outlet(
    payload: OutletSelect,
    session: StorefrontSession = Depends(require_session),
    catalog: Catalog = Depends(get_catalog),
) -> SessionOut:
    """Select the outlet for this session. Only active outlets can be picked."""
    if payload.outlet_id is not None:
        outlet = catalog.get_outlet(payload.outlet_id)
        if outlet is None or not outlet.is_active:
            raise HTTPException(status_code=404, detail="Outlet not found")
    with session.lock:
        session.outlet_id = payload.outlet_id
    return serialize_session(session)
