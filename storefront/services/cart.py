"""
Cart Service - Materializing Flow Results into Cart Lines.

The cart is the boundary the customization flow hands its result to. It
owns line merging: adding an item whose id, selections and combo flag match
an existing line increments that line instead of creating a new one.

Selections are compared by full value and in order. Two lines whose options
only differ in order are different lines; the flow always produces options
in step order, so the same path through the flow always merges.
"""

import logging
from typing import Iterable, List, Optional

from ..schemas.cart import CartItem
from ..schemas.catalog import MenuItem, MenuItemOption
from ..tasks.errors import UnknownCartLineError
from ..tasks.pricing import PricingEngine

logger = logging.getLogger(__name__)


class Cart:
    """
    A customer's cart for one storefront session.

    Args:
        pricing: Engine used for totals. Defaults to a plain PricingEngine.
    """

    def __init__(self, pricing: PricingEngine | None = None):
        self.pricing = pricing or PricingEngine()
        self._lines: List[CartItem] = []

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> List[CartItem]:
        return list(self._lines)

    def get(self, uuid: str) -> Optional[CartItem]:
        for line in self._lines:
            if line.uuid == uuid:
                return line
        return None

    def materialize(
        self,
        item: MenuItem,
        selections: Iterable[MenuItemOption],
        is_combo: bool = False,
        editing_uuid: Optional[str] = None,
    ) -> CartItem:
        """
        Turn a finished flow into a cart line.

        Args:
            item: The customized item.
            selections: Flattened selections, in step order.
            is_combo: Whether the flow ended in combo mode.
            editing_uuid: When editing an existing line, that line is updated
                in place instead of adding or merging.

        Returns:
            The created, merged or updated line.
        """
        selections = list(selections)
        price = PricingEngine.effective_price(item, is_combo)

        if editing_uuid is not None:
            line = self.get(editing_uuid)
            if line is None:
                raise UnknownCartLineError(editing_uuid)
            line.menu_item_id = item.id
            line.name = item.name
            line.selected_options = selections
            line.price = price
            line.is_combo = is_combo
            logger.info("Updated cart line %s (%s)", editing_uuid[:8], item.name)
            return line

        for line in self._lines:
            if (
                line.menu_item_id == item.id
                and line.selected_options == selections
                and line.is_combo == is_combo
            ):
                line.qty += 1
                logger.info("Merged %s into cart line %s (qty=%d)", item.name, line.uuid[:8], line.qty)
                return line

        line = CartItem(
            menu_item_id=item.id,
            name=item.name,
            price=price,
            selected_options=selections,
            qty=1,
            is_combo=is_combo,
        )
        self._lines.append(line)
        logger.info("Added %s to cart (line %s)", item.name, line.uuid[:8])
        return line

    def update_quantity(self, uuid: str, delta: int) -> Optional[CartItem]:
        """
        Change a line quantity by ``delta``. Lines that reach zero are removed.

        Returns:
            The updated line, or None if it was removed.
        """
        line = self.get(uuid)
        if line is None:
            raise UnknownCartLineError(uuid)
        line.qty = max(0, line.qty + delta)
        if line.qty == 0:
            self._lines = [l for l in self._lines if l.uuid != uuid]
            logger.info("Removed cart line %s (quantity reached zero)", uuid[:8])
            return None
        return line

    def remove_item(self, uuid: str) -> None:
        if self.get(uuid) is None:
            raise UnknownCartLineError(uuid)
        self._lines = [line for line in self._lines if line.uuid != uuid]
        logger.info("Removed cart line %s", uuid[:8])

    def clear(self) -> None:
        self._lines = []

    def item_count(self) -> int:
        return sum(line.qty for line in self._lines)

    def total(self) -> float:
        return self.pricing.cart_total(self._lines)
