"""
Checkout Service - WhatsApp order hand-off.

The storefront does not take payment. Checkout renders the cart as a
WhatsApp message for the selected outlet and returns a wa.me link that
opens the chat with the message pre-filled.

Message format (one block per cart line):

    ▪️ 2x Classic Burger (COMBO)
       + Cheese, Fries
       ! NO Onion
"""

import logging
from datetime import datetime
from typing import Optional
from urllib.parse import quote

from .. import config
from ..schemas.catalog import OptionType, Outlet, StoreConfig
from .cart import Cart

logger = logging.getLogger(__name__)


def _minutes(hhmm: str) -> int:
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


def is_business_open(store: StoreConfig, outlet: Optional[Outlet], now: Optional[datetime] = None) -> bool:
    """
    Whether orders can be sent to an outlet right now.

    Closing times earlier than opening times are overnight windows
    (e.g. 18:00 - 02:00).
    """
    if not store.is_store_open or outlet is None or not outlet.is_active:
        return False
    now = now or datetime.now()
    current = now.hour * 60 + now.minute
    open_at = _minutes(outlet.opening_time)
    close_at = _minutes(outlet.closing_time)
    if close_at < open_at:
        return current >= open_at or current < close_at
    return open_at <= current < close_at


def format_order_lines(cart: Cart) -> str:
    lines = []
    for item in cart.lines:
        line = f"▪️ {item.qty}x {item.name}"
        if item.is_combo:
            line += " (COMBO)"
        addons = [o.name for o in item.selected_options if o.type == OptionType.ADDON]
        prefs = [o.name for o in item.selected_options if o.type == OptionType.PREFERENCE]
        if addons:
            line += f"\n   + {', '.join(addons)}"
        if prefs:
            no_prefs = []
            for name in prefs:
                if name.lower().startswith("no "):
                    name = name[3:].lstrip()
                no_prefs.append(f"NO {name}")
            line += f"\n   ! {', '.join(no_prefs)}"
        lines.append(line)
    return "\n".join(lines)


def build_order_message(cart: Cart, outlet: Outlet, store: StoreConfig, needs_cutlery: bool = False) -> str:
    """Fill the store's WhatsApp template with the cart contents."""
    template = store.whatsapp_template or config.DEFAULT_WHATSAPP_TEMPLATE
    total = f"{store.currency_symbol} {cart.total():.2f}"
    return (
        template
        .replace("{OUTLET}", outlet.name)
        .replace("{ORDER_LIST}", format_order_lines(cart))
        .replace("{TOTAL}", total)
        .replace("{CUTLERY}", "YES" if needs_cutlery else "NO")
    )


def whatsapp_url(outlet: Outlet, message: str) -> str:
    """wa.me link for an outlet; the number is already stored in E.164 form."""
    return f"https://wa.me/{outlet.whatsapp_number.lstrip('+')}?text={quote(message, safe='')}"
