"""Schemas for storefront session endpoints."""

from typing import Optional

from .catalog import CatalogModel


class SessionOut(CatalogModel):
    session_id: str
    outlet_id: Optional[str] = None
    needs_cutlery: bool = False
    item_count: int = 0


class OutletSelect(CatalogModel):
    """Select (or clear, with null) the outlet orders are sent to."""
    outlet_id: Optional[str] = None
