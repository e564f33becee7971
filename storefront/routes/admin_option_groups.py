"""
Admin Option Group Routes for the Storefront
============================================

Back office endpoints for the option groups that make up flow steps.

Endpoints:
----------
- GET /admin/option-groups: List option groups
- POST /admin/option-groups: Create an option group
- GET /admin/option-groups/{id}: Get an option group
- PUT /admin/option-groups/{id}: Replace an option group
- DELETE /admin/option-groups/{id}: Delete a group and unlink it from items
- POST /admin/option-groups/{id}/duplicate: Copy a group

Deleting a group removes it from every item's linked groups, so open and
future flows never reference it.
"""

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..auth import verify_admin_credentials
from ..catalog import Catalog, get_catalog
from ..schemas.catalog import OptionGroup, OptionGroupCreate


logger = logging.getLogger(__name__)

admin_option_groups_router = APIRouter(prefix="/admin/option-groups", tags=["Admin - Option Groups"])


def get_group_or_404(catalog: Catalog, group_id: str) -> OptionGroup:
    group = catalog.get_option_group(group_id)
    if group is None:
        raise HTTPException(status_code=404, detail="Option group not found")
    return group


@admin_option_groups_router.get("", response_model=List[OptionGroup])
def list_option_groups(
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> List[OptionGroup]:
    return list(catalog.config.option_groups)


@admin_option_groups_router.post("", response_model=OptionGroup, status_code=201)
def create_option_group(
    payload: OptionGroupCreate,
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> OptionGroup:
    group_id = payload.id or f"og-{uuid.uuid4().hex[:8]}"
    if catalog.get_option_group(group_id) is not None:
        raise HTTPException(status_code=409, detail="Option group id already exists")
    group = OptionGroup(**payload.model_dump(exclude={"id"}), id=group_id)
    return catalog.upsert_option_group(group)


@admin_option_groups_router.get("/{group_id}", response_model=OptionGroup)
def get_option_group(
    group_id: str,
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> OptionGroup:
    return get_group_or_404(catalog, group_id)


@admin_option_groups_router.put("/{group_id}", response_model=OptionGroup)
def update_option_group(
    group_id: str,
    payload: OptionGroupCreate,
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> OptionGroup:
    """Replace an option group. The id in the path wins over the body."""
    get_group_or_404(catalog, group_id)
    group = OptionGroup(**payload.model_dump(exclude={"id"}), id=group_id)
    return catalog.upsert_option_group(group)


@admin_option_groups_router.delete("/{group_id}", status_code=204)
def delete_option_group(
    group_id: str,
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> None:
    if not catalog.delete_option_group(group_id):
        raise HTTPException(status_code=404, detail="Option group not found")
    return None


@admin_option_groups_router.post("/{group_id}/duplicate", response_model=OptionGroup, status_code=201)
def duplicate_option_group(
    group_id: str,
    catalog: Catalog = Depends(get_catalog),
    _admin: str = Depends(verify_admin_credentials),
) -> OptionGroup:
    copy = catalog.duplicate_option_group(group_id)
    if copy is None:
        raise HTTPException(status_code=404, detail="Option group not found")
    return copy
