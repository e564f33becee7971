"""
Admin Menu Routes for the Storefront
====================================

Back office endpoints for managing menu items.

Endpoints:
----------
- GET /admin/menu: List all menu items (hidden ones included)
- POST /admin/menu: Create a menu item
- GET /admin/menu/status: Catalog and session cache counts
- GET /admin/menu/{id}: Get a menu item
- PUT /admin/menu/{id}: Update a menu item (only provided fields)
- DELETE /admin/menu/{id}: Delete a menu item
- POST /admin/menu/{id}/duplicate: Copy an item, placed right after it
- POST /admin/menu/{id}/move: Move an item up or down within its category

Authentication:
---------------
All endpoints require admin authentication via HTTP Basic Auth.
See auth.py for credential verification.

Usage:
------
    # Hide an item from the storefront
    PUT /admin/menu/classic-burger
    {"isHidden": true}
"""

import logging
import uuid
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from ..auth import verify_admin_credentials
from ..catalog import Catalog, get_catalog
from ..schemas.catalog import MenuItem, MenuItemCreate, MenuItemUpdate, MoveRequest
from ..services.session import get_cache_stats


logger = logging.getLogger(__name__)

admin_menu_router = APIRouter(prefix="/admin/menu", tags=["Admin - Menu"])


# =============================================================================
# Helper Functions
# =============================================================================

def get_item_or_404(catalog: Catalog, item_id: str) -> MenuItem:
    item = catalog.get_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item


# =============================================================================
# Menu Endpoints
# =============================================================================

@admin_menu_router.get("", response_model=List[MenuItem])
def admin_menu(
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> List[MenuItem]:
    """List all menu items. Requires admin authentication."""
    return catalog.items()


@admin_menu_router.post("", response_model=MenuItem, status_code=201)
def create_menu_item(
    payload: MenuItemCreate,
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> MenuItem:
    """Create a new menu item. New items are listed first."""
    item_id = payload.id or f"item-{uuid.uuid4().hex[:8]}"
    if catalog.get_item(item_id) is not None:
        raise HTTPException(status_code=409, detail="Menu item id already exists")
    item = MenuItem(**payload.model_dump(exclude={"id"}), id=item_id)
    return catalog.upsert_item(item)


@admin_menu_router.get("/status", response_model=Dict[str, Any])
def get_status(
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> Dict[str, Any]:
    """Catalog counts and storefront session cache statistics."""
    return {
        "catalog": catalog.get_status(),
        "sessions": get_cache_stats(),
    }


@admin_menu_router.get("/{item_id}", response_model=MenuItem)
def get_menu_item(
    item_id: str,
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> MenuItem:
    return get_item_or_404(catalog, item_id)


@admin_menu_router.put("/{item_id}", response_model=MenuItem)
def update_menu_item(
    item_id: str,
    payload: MenuItemUpdate,
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> MenuItem:
    """Update a menu item. Fields left out of the request are unchanged."""
    item = get_item_or_404(catalog, item_id)
    updated = item.model_copy(update=payload.model_dump(exclude_unset=True))
    return catalog.upsert_item(MenuItem.model_validate(updated.model_dump()))


@admin_menu_router.delete("/{item_id}", status_code=204)
def delete_menu_item(
    item_id: str,
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> None:
    if not catalog.delete_item(item_id):
        raise HTTPException(status_code=404, detail="Menu item not found")
    return None


@admin_menu_router.post("/{item_id}/duplicate", response_model=MenuItem, status_code=201)
def duplicate_menu_item(
    item_id: str,
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> MenuItem:
    copy = catalog.duplicate_item(item_id)
    if copy is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return copy


@admin_menu_router.post("/{item_id}/move", response_model=List[MenuItem])
def move_menu_item(
    item_id: str,
    payload: MoveRequest,
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> List[MenuItem]:
    """
    Swap an item with its neighbour in the same category.

    Moving past the edge of the category is a no-op. Returns the full list.
    """
    get_item_or_404(catalog, item_id)
    catalog.move_item(item_id, payload.direction)
    return catalog.items()
