"""
Pricing Engine for the customization flow and the cart.

The running total of a flow is

    base price + committed selections (minus the step under edit) + working buffer

where the base price switches to the item's combo price as soon as combo
mode is active OR any counted selection is a combo trigger. Checking both
signals means the combo price applies on the very step the trigger is
picked, before the mode itself has been updated by a commit.
"""

import logging
from typing import TYPE_CHECKING, Iterable

from ..schemas.catalog import FlowMode, MenuItem, MenuItemOption

if TYPE_CHECKING:
    from ..schemas.cart import CartItem

logger = logging.getLogger(__name__)


def has_combo_trigger(options: Iterable[MenuItemOption]) -> bool:
    return any(opt.is_combo_trigger for opt in options)


def sum_options(options: Iterable[MenuItemOption]) -> float:
    return sum(opt.price for opt in options)


class PricingEngine:
    """
    Price calculations for flows and cart lines.

    Args:
        currency_symbol: Prefix used by format_price (e.g. "RM").
    """

    def __init__(self, currency_symbol: str = "RM"):
        self.currency_symbol = currency_symbol

    @staticmethod
    def effective_price(item: MenuItem, is_combo: bool) -> float:
        """Combo price when combo applies and the item defines one, else the base price."""
        if is_combo and item.combo_price is not None:
            return item.combo_price
        return item.price

    def base_price(
        self,
        item: MenuItem,
        mode: FlowMode,
        priceable: Iterable[MenuItemOption],
        working: Iterable[MenuItemOption],
    ) -> float:
        combo = (
            mode == FlowMode.COMBO
            or has_combo_trigger(priceable)
            or has_combo_trigger(working)
        )
        return self.effective_price(item, combo)

    def calculate_total(
        self,
        item: MenuItem,
        mode: FlowMode,
        priceable: Iterable[MenuItemOption],
        working: Iterable[MenuItemOption],
    ) -> float:
        """
        Running total shown on every flow step.

        Args:
            item: Item being customized.
            mode: Current flow mode.
            priceable: Committed selections excluding the step under edit.
            working: Uncommitted selections of the step on screen.
        """
        priceable = list(priceable)
        working = list(working)
        base = self.base_price(item, mode, priceable, working)
        total = base + sum_options(priceable) + sum_options(working)
        return round(total, 2)

    @staticmethod
    def unit_price(cart_item: "CartItem") -> float:
        """Price of one unit of a cart line including its options."""
        return round(cart_item.price + sum_options(cart_item.selected_options), 2)

    def line_total(self, cart_item: "CartItem") -> float:
        return round(self.unit_price(cart_item) * cart_item.qty, 2)

    def cart_total(self, lines: Iterable["CartItem"]) -> float:
        return round(sum(self.line_total(line) for line in lines), 2)

    def format_price(self, price: float) -> str:
        """Format a price for display; zero renders as an empty string."""
        if price == 0:
            return ""
        return f"{self.currency_symbol} {price:.2f}"

    def format_amount(self, price: float) -> str:
        """Format a price for display, including zero."""
        return f"{self.currency_symbol} {price:.2f}"
