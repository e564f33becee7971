"""
Public Routes for the Storefront
================================

Endpoints that don't require authentication. They feed the storefront
menu, the outlet selector and the store branding.

Endpoints:
----------
- GET /menu: Visible menu items (optionally filtered by outlet)
- GET /menu/{item_id}: A single menu item (hidden items included, for share links)
- GET /outlets: Active outlets with their current opening status
- GET /config: Store configuration (categories, option groups, flow groups)

Data Filtering:
---------------
- Hidden items are left out of /menu
- Items restricted to other outlets are left out when ``outlet_id`` is given
- Inactive outlets are left out of /outlets
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from ..catalog import Catalog, get_catalog
from ..schemas.catalog import MenuItem, OutletOut, StoreConfig
from ..services.checkout import is_business_open


logger = logging.getLogger(__name__)

public_menu_router = APIRouter(prefix="/menu", tags=["Menu"])
public_outlets_router = APIRouter(prefix="/outlets", tags=["Outlets"])
public_config_router = APIRouter(prefix="/config", tags=["Config"])


# =============================================================================
# Public Menu Endpoints
# =============================================================================

@public_menu_router.get("", response_model=List[MenuItem])
def list_menu(
    outlet_id: Optional[str] = None,
    catalog: Catalog = Depends(get_catalog),
) -> List[MenuItem]:
    """List menu items shown on the storefront."""
    return catalog.visible_items(outlet_id)


@public_menu_router.get("/{item_id}", response_model=MenuItem)
def get_menu_item(item_id: str, catalog: Catalog = Depends(get_catalog)) -> MenuItem:
    item = catalog.get_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item


# =============================================================================
# Public Outlet Endpoints
# =============================================================================

@public_outlets_router.get("", response_model=List[OutletOut])
def list_outlets(catalog: Catalog = Depends(get_catalog)) -> List[OutletOut]:
    """List active outlets for the outlet selector."""
    return [
        OutletOut(**outlet.model_dump(), is_open=is_business_open(catalog.config, outlet))
        for outlet in catalog.outlets()
        if outlet.is_active
    ]


# =============================================================================
# Public Config Endpoints
# =============================================================================

@public_config_router.get("", response_model=StoreConfig)
def get_store_config(catalog: Catalog = Depends(get_catalog)) -> StoreConfig:
    """Store branding, categories and option groups for the storefront."""
    return catalog.config
