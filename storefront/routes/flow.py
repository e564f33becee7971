"""
Flow Routes for the Storefront
==============================

Customer-facing endpoints driving the item customization flow of a
storefront session. Every endpoint returns the flow view after the
transition, so the client never computes steps or prices itself.

Endpoints:
----------
- POST /flow/{session_id}/open: Open an item (menu tap)
- POST /flow/{session_id}/shared/{item_id}: Open a shared/deep-linked item
- GET /flow/{session_id}: Current flow view
- POST /flow/{session_id}/select: Toggle/increment/decrement an option
- POST /flow/{session_id}/next: Continue / Save Changes / Add to Order
- POST /flow/{session_id}/back: Back
- POST /flow/{session_id}/jump: Edit a committed step from the review screen
- POST /flow/{session_id}/customize: Apply an ingredient customization
- DELETE /flow/{session_id}: Close the flow, discarding its selections

Error Handling:
---------------
- 404: Unknown session or menu item
- 409: No open flow, or the cart line being edited no longer exists

Invalid selections and Next on a step that still needs a selection are not
errors; the view simply comes back unchanged.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..catalog import Catalog, get_catalog
from ..schemas.flow import (
    CustomizeRequest,
    FlowView,
    JumpRequest,
    NextRequest,
    NextResponse,
    OpenRequest,
    OpenResponse,
    ReviewRowOut,
    SelectRequest,
    StepOptionOut,
    VariationOut,
)
from ..services.session import StorefrontSession
from ..tasks.errors import UnknownCartLineError, UnknownMenuItemError
from ..tasks.models import REVIEW_STEP, VARIATION_STEP
from ..tasks.orchestrator import OrderingOrchestratorResult
from ..tasks.state_machine import FlowSession
from .sessions import require_session


logger = logging.getLogger(__name__)

flow_router = APIRouter(prefix="/flow", tags=["Flow"])


# =============================================================================
# Helper Functions
# =============================================================================

def build_flow_view(session: StorefrontSession, catalog: Catalog) -> FlowView:
    """Render the session's flow (or its absence) as a view model."""
    flow = session.flow
    if flow is None or flow.is_closed:
        return FlowView(active=False, phase="closed")

    pricing = flow.pricing
    token = flow.current_step
    group = flow.current_group()

    options = [
        StepOptionOut(
            name=opt.name,
            price=opt.price,
            formatted_price=pricing.format_price(opt.price),
            type=opt.type.value,
            count=flow.working.count(opt.name),
            selected=flow.working.count(opt.name) > 0,
        )
        for opt in flow.step_options()
    ]

    variations = []
    if token == VARIATION_STEP:
        variations = [
            VariationOut(
                id=v.id,
                name=v.name,
                price=v.price,
                formatted_price=pricing.format_price(v.price),
                current=v.id == flow.item.id,
                can_customize=bool(catalog.customization_groups(v)),
            )
            for v in flow.variation_choices()
        ]

    review_rows = []
    if token == REVIEW_STEP:
        review_rows = [
            ReviewRowOut(
                step_index=row.step_index,
                token=row.token,
                name=row.name,
                text=row.text,
                has_selection=row.has_selection,
            )
            for row in flow.review_rows()
        ]

    total = flow.total()
    return FlowView(
        active=True,
        phase=flow.state.phase.value,
        item=flow.item,
        step=token,
        step_index=flow.step_index,
        step_name=flow.step_name(),
        steps=flow.steps,
        mode=flow.mode,
        meat_filter=flow.meat_filter,
        options=options,
        variations=variations,
        max_selection=flow.max_selection(),
        allow_quantity=bool(group and group.allow_quantity),
        working=flow.working.selections,
        review_rows=review_rows,
        customization=flow.customization,
        can_customize=bool(catalog.customization_groups(flow.item)),
        can_advance=flow.can_advance(),
        next_label=flow.next_label,
        total=total,
        formatted_total=pricing.format_price(total),
        editing_cart_item_uuid=session.orchestrator.editing_cart_item_uuid,
    )


def require_flow(session: StorefrontSession) -> FlowSession:
    flow = session.flow
    if flow is None or flow.is_closed:
        raise HTTPException(status_code=409, detail="No customization flow is open")
    return flow


def _open_response(
    session: StorefrontSession,
    catalog: Catalog,
    result: OrderingOrchestratorResult,
) -> OpenResponse:
    return OpenResponse(
        added_to_cart=result.added_directly,
        cart_item_uuid=result.cart_item.uuid if result.cart_item else None,
        flow=build_flow_view(session, catalog),
    )


# =============================================================================
# Opening Items
# =============================================================================

@flow_router.post("/{session_id}/open", response_model=OpenResponse)
def open_item(
    payload: OpenRequest,
    session: StorefrontSession = Depends(require_session),
    catalog: Catalog = Depends(get_catalog),
) -> OpenResponse:
    """
    Open a menu item.

    Items with nothing to customize are added to the cart directly unless
    ``forceModal`` is set. ``mode`` starts a flow-group flow in that mode.
    """
    with session.lock:
        try:
            item = catalog.get_item(payload.item_id)
            if payload.mode is not None and item is not None and catalog.find_flow_group(item.category):
                flow = session.orchestrator.start_flow_group(payload.item_id, payload.mode)
                result = OrderingOrchestratorResult(flow=flow)
            else:
                result = session.orchestrator.select_item(payload.item_id, payload.force_modal)
        except UnknownMenuItemError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return _open_response(session, catalog, result)


@flow_router.post("/{session_id}/shared/{item_id}", response_model=OpenResponse)
def open_shared_item(
    item_id: str,
    session: StorefrontSession = Depends(require_session),
    catalog: Catalog = Depends(get_catalog),
) -> OpenResponse:
    """Open an item from a share link; always shows the flow."""
    with session.lock:
        try:
            result = session.orchestrator.open_shared_item(item_id)
        except UnknownMenuItemError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return _open_response(session, catalog, result)


# =============================================================================
# Flow Transitions
# =============================================================================

@flow_router.get("/{session_id}", response_model=FlowView)
def read_flow(
    session: StorefrontSession = Depends(require_session),
    catalog: Catalog = Depends(get_catalog),
) -> FlowView:
    with session.lock:
        return build_flow_view(session, catalog)


@flow_router.post("/{session_id}/select", response_model=FlowView)
def select_option(
    payload: SelectRequest,
    session: StorefrontSession = Depends(require_session),
    catalog: Catalog = Depends(get_catalog),
) -> FlowView:
    with session.lock:
        require_flow(session).select(payload.option_name, payload.action)
        return build_flow_view(session, catalog)


@flow_router.post("/{session_id}/next", response_model=NextResponse)
def next_step(
    payload: NextRequest,
    session: StorefrontSession = Depends(require_session),
    catalog: Catalog = Depends(get_catalog),
) -> NextResponse:
    """Advance the flow. On the review screen this adds the item to the cart."""
    with session.lock:
        require_flow(session)
        try:
            line = session.orchestrator.advance(payload.variation_item_id)
        except UnknownCartLineError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return NextResponse(
            flow=build_flow_view(session, catalog),
            cart_item_uuid=line.uuid if line else None,
        )


@flow_router.post("/{session_id}/back", response_model=FlowView)
def back(
    session: StorefrontSession = Depends(require_session),
    catalog: Catalog = Depends(get_catalog),
) -> FlowView:
    with session.lock:
        flow = require_flow(session)
        flow.back()
        if flow.is_closed:
            session.orchestrator.close_flow()
        return build_flow_view(session, catalog)


@flow_router.post("/{session_id}/jump", response_model=FlowView)
def jump_to_step(
    payload: JumpRequest,
    session: StorefrontSession = Depends(require_session),
    catalog: Catalog = Depends(get_catalog),
) -> FlowView:
    with session.lock:
        require_flow(session).jump_to_step(payload.step_index)
        return build_flow_view(session, catalog)


@flow_router.post("/{session_id}/customize", response_model=FlowView)
def customize(
    payload: CustomizeRequest,
    session: StorefrontSession = Depends(require_session),
    catalog: Catalog = Depends(get_catalog),
) -> FlowView:
    """Customize the flow item (or an item offered in it) and fold the result into the flow."""
    with session.lock:
        flow = require_flow(session)
        try:
            customization = flow.open_customization(payload.item_id)
        except UnknownMenuItemError as e:
            raise HTTPException(status_code=404, detail=str(e))

        for pick in payload.picks:
            group = next((g for g in customization.groups if g.id == pick.group_id), None)
            if group is not None and group.allow_quantity:
                for _ in range(pick.count):
                    customization.select(pick.group_id, pick.option_name, "increment")
            else:
                customization.select(pick.group_id, pick.option_name, "toggle")

        flow.apply_customization(customization.save())
        return build_flow_view(session, catalog)


@flow_router.delete("/{session_id}", response_model=FlowView)
def close_flow(
    session: StorefrontSession = Depends(require_session),
    catalog: Catalog = Depends(get_catalog),
) -> FlowView:
    with session.lock:
        session.orchestrator.close_flow()
        return build_flow_view(session, catalog)
