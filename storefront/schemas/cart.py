"""
Cart Schemas for the Storefront
===============================

Pydantic models for cart lines and the cart/checkout endpoints.

Cart Concepts:
--------------
1. **Cart Lines**: One line per distinct (item, selections, combo flag).
   Adding the same configuration again increments the line quantity.

2. **Effective Price**: A line stores the item price that applied when it
   was added (combo price for combo lines). Option deltas are stored on the
   selected options and summed on display.

3. **Checkout**: The cart is handed off to an outlet as a WhatsApp message;
   the service only builds the message and the wa.me link.
"""

from uuid import uuid4
from typing import List, Optional

from pydantic import Field

from .catalog import CatalogModel, MenuItemOption


class CartItem(CatalogModel):
    """A line in the customer's cart."""
    uuid: str = Field(default_factory=lambda: str(uuid4()))
    menu_item_id: str
    name: str
    price: float
    selected_options: List[MenuItemOption] = Field(default_factory=list)
    qty: int = 1
    is_combo: bool = False


class GroupedOption(CatalogModel):
    """Options of one line grouped by name for display ("Cheese x2")."""
    name: str
    count: int
    type: str


class CartLineOut(CatalogModel):
    """Cart line as returned by the API."""
    uuid: str
    menu_item_id: str
    name: str
    price: float
    qty: int
    is_combo: bool
    selected_options: List[MenuItemOption]
    grouped_options: List[GroupedOption]
    unit_price: float
    line_total: float


class CartOut(CatalogModel):
    """Full cart as returned by the API."""
    lines: List[CartLineOut]
    item_count: int
    total: float
    formatted_total: str
    editing_cart_item_uuid: Optional[str] = None


class QuantityUpdate(CatalogModel):
    """Request body for changing a line quantity by a delta."""
    delta: int


class CheckoutRequest(CatalogModel):
    needs_cutlery: bool = False


class CheckoutResponse(CatalogModel):
    message: str
    url: str
    total: float
