"""
Ordering Orchestrator - Entry point from a menu tap to a cart line.

The orchestrator decides how a selected item reaches the cart:

1. The item's category triggers a flow group -> flow-group flow
2. The item links option groups -> step-by-step flow
3. The item has inline options, or the caller forces the flow open (shared
   links, ads) -> flow with an Add-ons step
4. Otherwise -> added to the cart directly with no selections

It also owns the hand-off at the end of a flow: a FlowResult is
materialized into the cart, updating the cart line being edited when the
flow was opened from the cart.
"""

import logging
from typing import TYPE_CHECKING, Optional

from ..schemas.cart import CartItem
from ..schemas.catalog import FlowMode, MenuItem
from .errors import UnknownCartLineError, UnknownMenuItemError
from .models import FlowResult
from .pricing import PricingEngine
from .state_machine import FlowSession

if TYPE_CHECKING:
    from ..catalog import Catalog
    from ..services.cart import Cart

logger = logging.getLogger(__name__)


class OrderingOrchestratorResult:
    """Result of selecting an item: either an open flow or a direct cart line."""

    def __init__(self, flow: Optional[FlowSession] = None, cart_item: Optional[CartItem] = None):
        self.flow = flow
        self.cart_item = cart_item

    @property
    def added_directly(self) -> bool:
        return self.flow is None and self.cart_item is not None


class OrderingOrchestrator:
    """
    Glue between the catalog, a customer's flow and their cart.

    Args:
        catalog: Catalog the items come from.
        cart: The customer's cart.
    """

    def __init__(self, catalog: "Catalog", cart: "Cart"):
        self.catalog = catalog
        self.cart = cart
        self.flow: Optional[FlowSession] = None
        self.editing_cart_item_uuid: Optional[str] = None

    def _pricing(self) -> PricingEngine:
        return PricingEngine(self.catalog.config.currency_symbol)

    def _resolve(self, item_id: str) -> MenuItem:
        item = self.catalog.get_item(item_id)
        if item is None:
            raise UnknownMenuItemError(item_id)
        return item

    def select_item(self, item_id: str, force_modal: bool = False) -> OrderingOrchestratorResult:
        """
        Open the right flow for an item, or add it straight to the cart.

        Raises:
            UnknownMenuItemError: If the item does not exist.
        """
        item = self._resolve(item_id)
        self.close_flow()

        flow_group = self.catalog.find_flow_group(item.category)
        if flow_group is not None:
            self.flow = FlowSession(item, self.catalog, flow_group, FlowMode.ALA_CARTE, self._pricing())
            return OrderingOrchestratorResult(flow=self.flow)

        if item.linked_option_group_ids or item.options or force_modal:
            self.flow = FlowSession(item, self.catalog, pricing=self._pricing())
            return OrderingOrchestratorResult(flow=self.flow)

        line = self.cart.materialize(item, [], is_combo=False)
        return OrderingOrchestratorResult(cart_item=line)

    def start_flow_group(self, item_id: str, mode: FlowMode = FlowMode.ALA_CARTE) -> FlowSession:
        """Open a flow-group flow explicitly in a given mode (e.g. a combo ad)."""
        item = self._resolve(item_id)
        flow_group = self.catalog.find_flow_group(item.category)
        self.close_flow()
        self.flow = FlowSession(item, self.catalog, flow_group, mode, self._pricing())
        return self.flow

    def open_shared_item(self, item_id: str) -> OrderingOrchestratorResult:
        """Deep link / share link: always open the flow, even for plain items."""
        logger.debug("Opening shared item %s", item_id)
        return self.select_item(item_id, force_modal=True)

    def edit_cart_line(self, uuid: str) -> Optional[FlowSession]:
        """
        Re-open the item of a cart line; finishing the flow updates that line.

        Returns:
            The flow, or None when the line's menu item no longer exists in
            the catalog (the line is left untouched).

        Raises:
            UnknownCartLineError: If no line has this uuid.
        """
        line = self.cart.get(uuid)
        if line is None:
            raise UnknownCartLineError(uuid)
        item = self.catalog.get_item(line.menu_item_id)
        if item is None:
            logger.warning("Cannot edit cart line %s: item %s no longer exists", uuid[:8], line.menu_item_id)
            return None

        result = self.select_item(item.id, force_modal=True)
        self.editing_cart_item_uuid = uuid
        return result.flow

    def advance(self, variation_item_id: Optional[str] = None) -> Optional[CartItem]:
        """
        Press Next on the open flow; materialize into the cart if it finished.

        Raises:
            UnknownCartLineError: If the line being edited was removed meanwhile.

        Returns:
            The created, merged or updated cart line when the flow ended.
        """
        if self.flow is None:
            return None
        result = self.flow.next(variation_item_id)
        if result is None:
            return None
        return self.materialize(result)

    def materialize(self, result: FlowResult) -> CartItem:
        editing_uuid = self.editing_cart_item_uuid
        try:
            return self.cart.materialize(result.item, result.selections, result.is_combo, editing_uuid)
        finally:
            self.flow = None
            self.editing_cart_item_uuid = None

    def close_flow(self) -> None:
        if self.flow is not None:
            self.flow.close()
        self.flow = None
        self.editing_cart_item_uuid = None
