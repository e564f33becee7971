"""
Admin System Routes for the Storefront
======================================

Back office endpoints for the store configuration and catalog backups.

Endpoints:
----------
- GET /admin/config: Store configuration
- PUT /admin/config: Replace the store configuration
- GET /admin/backup: Export the whole catalog (items, config, outlets)
- POST /admin/backup: Import a backup, replacing the whole catalog

Backup Format:
--------------
Backups are camelCase JSON documents with three keys:

    {"menuItems": [...], "config": {...}, "outlets": [...]}

Imports are validated before anything is replaced; an invalid document
returns 422 and leaves the catalog untouched.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError

from ..auth import verify_admin_credentials
from ..catalog import Catalog, get_catalog
from ..schemas.catalog import CatalogBackup, StoreConfig


logger = logging.getLogger(__name__)

admin_config_router = APIRouter(prefix="/admin/config", tags=["Admin - Config"])
admin_backup_router = APIRouter(prefix="/admin/backup", tags=["Admin - Backup"])


# =============================================================================
# Store Configuration Endpoints
# =============================================================================

@admin_config_router.get("", response_model=StoreConfig)
def get_config(
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> StoreConfig:
    return catalog.config


@admin_config_router.put("", response_model=StoreConfig)
def update_config(
    payload: StoreConfig,
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> StoreConfig:
    return catalog.update_config(payload)


# =============================================================================
# Backup Endpoints
# =============================================================================

@admin_backup_router.get("", response_model=CatalogBackup)
def export_backup(
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> CatalogBackup:
    """Export the catalog as a backup document."""
    return catalog.export_backup()


@admin_backup_router.post("", response_model=Dict[str, Any])
def import_backup(
    data: Dict[str, Any] = Body(...),
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> Dict[str, Any]:
    """Replace the catalog with a backup document."""
    try:
        catalog.import_backup(data)
    except ValidationError as e:
        logger.warning("Rejected catalog backup: %d validation errors", e.error_count())
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False, include_input=False))
    logger.info("Catalog restored from backup")
    return {"message": "Backup imported", "status": catalog.get_status()}
