"""
Flow Schemas for the Storefront
===============================

Request bodies for the customization flow endpoints and the view model the
flow endpoints return after every transition.

The view carries everything a client needs to render a flow screen:
the current step, the options offered on it (with what is selected), the
running total, the Next button label and whether Next is enabled.
"""

from typing import List, Literal, Optional

from pydantic import Field

from .catalog import CatalogModel, FlowMode, MenuItem, MenuItemOption


class StepOptionOut(CatalogModel):
    """An option on the current step with its selection count."""
    name: str
    price: float
    formatted_price: str
    type: str
    count: int = 0
    selected: bool = False


class VariationOut(CatalogModel):
    """A sibling item offered on a Variation step."""
    id: str
    name: str
    price: float
    formatted_price: str
    current: bool = False
    can_customize: bool = False


class ReviewRowOut(CatalogModel):
    step_index: int
    token: str
    name: str
    text: str
    has_selection: bool


class FlowView(CatalogModel):
    """Snapshot of a storefront session's flow."""
    active: bool
    phase: str
    item: Optional[MenuItem] = None
    step: Optional[str] = None
    step_index: Optional[int] = None
    step_name: str = ""
    steps: List[str] = Field(default_factory=list)
    mode: Optional[FlowMode] = None
    meat_filter: Optional[str] = None
    options: List[StepOptionOut] = Field(default_factory=list)
    variations: List[VariationOut] = Field(default_factory=list)
    max_selection: int = 0
    allow_quantity: bool = False
    working: List[MenuItemOption] = Field(default_factory=list)
    review_rows: List[ReviewRowOut] = Field(default_factory=list)
    customization: Optional[MenuItemOption] = None
    can_customize: bool = False
    can_advance: bool = False
    next_label: str = ""
    total: float = 0.0
    formatted_total: str = ""
    editing_cart_item_uuid: Optional[str] = None


class OpenRequest(CatalogModel):
    """Open the flow for a menu item (a menu tap)."""
    item_id: str
    force_modal: bool = False
    mode: Optional[FlowMode] = None


class OpenResponse(CatalogModel):
    """
    Result of opening an item.

    ``added_to_cart`` is True when the item had nothing to customize and
    went straight into the cart; ``flow`` is inactive in that case.
    """
    added_to_cart: bool
    cart_item_uuid: Optional[str] = None
    flow: FlowView


class SelectRequest(CatalogModel):
    option_name: str
    action: Literal["toggle", "increment", "decrement"] = "toggle"


class NextRequest(CatalogModel):
    """Continue / Save Changes / Add to Order; ``variation_item_id`` on Variation steps."""
    variation_item_id: Optional[str] = None


class NextResponse(CatalogModel):
    flow: FlowView
    cart_item_uuid: Optional[str] = None


class JumpRequest(CatalogModel):
    step_index: int


class CustomizationPick(CatalogModel):
    group_id: str
    option_name: str
    count: int = Field(default=1, ge=1, le=99)


class CustomizeRequest(CatalogModel):
    """
    Customize an item offered in the flow.

    ``item_id`` defaults to the flow item. Each pick is applied ``count``
    times (quantity groups) or toggled once.
    """
    item_id: Optional[str] = None
    picks: List[CustomizationPick] = Field(default_factory=list)
