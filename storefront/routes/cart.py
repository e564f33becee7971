"""
Cart Routes for the Storefront
==============================

Endpoints:
----------
- GET /cart/{session_id}: Cart contents and total
- PATCH /cart/{session_id}/items/{uuid}: Change a line quantity by a delta
- DELETE /cart/{session_id}/items/{uuid}: Remove a line
- POST /cart/{session_id}/items/{uuid}/edit: Re-open a line in the flow
- POST /cart/{session_id}/checkout: Build the WhatsApp order hand-off

Editing a Line:
---------------
Editing re-opens the line's menu item in the customization flow. When the
flow finishes, the line is updated in place instead of adding a new one.
Lines whose menu item was deleted from the catalog cannot be edited (409).
"""

import logging
from collections import Counter

from fastapi import APIRouter, Depends, HTTPException

from ..catalog import Catalog, get_catalog
from ..schemas.cart import (
    CartItem,
    CartLineOut,
    CartOut,
    CheckoutRequest,
    CheckoutResponse,
    GroupedOption,
    QuantityUpdate,
)
from ..schemas.flow import FlowView
from ..services.checkout import build_order_message, is_business_open, whatsapp_url
from ..services.session import StorefrontSession
from ..tasks.errors import UnknownCartLineError
from .flow import build_flow_view
from .sessions import require_session


logger = logging.getLogger(__name__)

cart_router = APIRouter(prefix="/cart", tags=["Cart"])


# =============================================================================
# Helper Functions
# =============================================================================

def group_options(line: CartItem) -> list[GroupedOption]:
    """Collapse repeated options of a line into ``name x count`` entries, first-seen order."""
    counts = Counter(opt.name for opt in line.selected_options)
    grouped = []
    seen = set()
    for opt in line.selected_options:
        if opt.name in seen:
            continue
        seen.add(opt.name)
        grouped.append(GroupedOption(name=opt.name, count=counts[opt.name], type=opt.type.value))
    return grouped


def serialize_cart(session: StorefrontSession) -> CartOut:
    cart = session.cart
    lines = [
        CartLineOut(
            uuid=line.uuid,
            menu_item_id=line.menu_item_id,
            name=line.name,
            price=line.price,
            qty=line.qty,
            is_combo=line.is_combo,
            selected_options=line.selected_options,
            grouped_options=group_options(line),
            unit_price=cart.pricing.unit_price(line),
            line_total=cart.pricing.line_total(line),
        )
        for line in cart.lines
    ]
    total = cart.total()
    return CartOut(
        lines=lines,
        item_count=cart.item_count(),
        total=total,
        formatted_total=cart.pricing.format_amount(total),
        editing_cart_item_uuid=session.orchestrator.editing_cart_item_uuid,
    )


# =============================================================================
# Cart Endpoints
# =============================================================================

@cart_router.get("/{session_id}", response_model=CartOut)
def read_cart(session: StorefrontSession = Depends(require_session)) -> CartOut:
    return serialize_cart(session)


@cart_router.patch("/{session_id}/items/{uuid}", response_model=CartOut)
def update_quantity(
    uuid: str,
    payload: QuantityUpdate,
    session: StorefrontSession = Depends(require_session),
) -> CartOut:
    """Change a line quantity. Lines reaching zero are removed."""
    with session.lock:
        try:
            session.cart.update_quantity(uuid, payload.delta)
        except UnknownCartLineError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return serialize_cart(session)


@cart_router.delete("/{session_id}/items/{uuid}", response_model=CartOut)
def remove_item(
    uuid: str,
    session: StorefrontSession = Depends(require_session),
) -> CartOut:
    with session.lock:
        try:
            session.cart.remove_item(uuid)
        except UnknownCartLineError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return serialize_cart(session)


@cart_router.post("/{session_id}/items/{uuid}/edit", response_model=FlowView)
def edit_item(
    uuid: str,
    session: StorefrontSession = Depends(require_session),
    catalog: Catalog = Depends(get_catalog),
) -> FlowView:
    """Re-open a cart line in the customization flow."""
    with session.lock:
        try:
            flow = session.orchestrator.edit_cart_line(uuid)
        except UnknownCartLineError as e:
            raise HTTPException(status_code=404, detail=str(e))
        if flow is None:
            raise HTTPException(status_code=409, detail="Menu item of this cart line no longer exists")
        return build_flow_view(session, catalog)


@cart_router.post("/{session_id}/checkout", response_model=CheckoutResponse)
def checkout(
    payload: CheckoutRequest,
    session: StorefrontSession = Depends(require_session),
    catalog: Catalog = Depends(get_catalog),
) -> CheckoutResponse:
    """
    Build the WhatsApp order for the selected outlet.

    Returns 409 when the cart is empty, no outlet is selected, or the
    outlet is closed.
    """
    with session.lock:
        if not len(session.cart):
            raise HTTPException(status_code=409, detail="Cart is empty")
        outlet = catalog.get_outlet(session.outlet_id) if session.outlet_id else None
        if outlet is None:
            raise HTTPException(status_code=409, detail="No outlet selected")
        if not is_business_open(catalog.config, outlet):
            raise HTTPException(status_code=409, detail="Outlet is closed")

        session.needs_cutlery = payload.needs_cutlery
        message = build_order_message(session.cart, outlet, catalog.config, payload.needs_cutlery)
        logger.info("Checkout for session %s to outlet %s", session.session_id[:8], outlet.id)
        return CheckoutResponse(
            message=message,
            url=whatsapp_url(outlet, message),
            total=session.cart.total(),
        )
