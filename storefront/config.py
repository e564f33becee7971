"""
Configuration Module for the Storefront
=======================================

This module centralizes the environment variables and constants used by the
storefront ordering service. Values are parsed once at import time; tests
override the module attributes directly.

Configuration Categories:
-------------------------
- **Store Presentation**: Currency symbol and the WhatsApp order template used
  when a cart is handed off to an outlet.

- **Catalog Loading**: Optional path to a JSON backup that replaces the demo
  seed catalog at startup.

- **Session Management**: TTL and cache size for the in-memory storefront
  session cache (cart + active customization flow per browser session).

- **CORS Settings**: Allowed origins for the storefront frontend.

- **Admin Authentication**: Credentials for the back office endpoints.

Environment Variables:
----------------------
- CURRENCY_SYMBOL: Prefix used when formatting prices (default: "RM")
- DEFAULT_PHONE_REGION: Region for local outlet WhatsApp numbers (default: "MY")
- CATALOG_PATH: JSON backup to load at startup (default: unset, demo seed)
- SESSION_TTL_SECONDS: Session cache TTL (default: 3600)
- SESSION_MAX_CACHE_SIZE: Max cached sessions (default: 1000)
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")
- ADMIN_USERNAME: Admin username (default: "admin")
- ADMIN_PASSWORD: Admin password (required for admin access)

Usage:
------
    from storefront.config import CURRENCY_SYMBOL, SESSION_TTL_SECONDS
"""

import os
from typing import List, Optional


# =============================================================================
# Store Presentation
# =============================================================================

CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "RM")

# Placeholders: {OUTLET}, {ORDER_LIST}, {TOTAL}, {CUTLERY}
DEFAULT_WHATSAPP_TEMPLATE: str = (
    "Hi ({OUTLET})! I'd like to place an order:\n"
    "\n"
    "{ORDER_LIST}\n"
    "\n"
    "Total: {TOTAL}\n"
    "Need Cutlery: {CUTLERY}\n"
    "Payment Method: Transfer / Cash"
)

# Region used to read outlet WhatsApp numbers typed without a country code
DEFAULT_PHONE_REGION: str = os.getenv("DEFAULT_PHONE_REGION", "MY")


# =============================================================================
# Catalog Loading
# =============================================================================
# When unset, the demo catalog from seed_menu.py is used.

CATALOG_PATH: Optional[str] = os.getenv("CATALOG_PATH") or None


# =============================================================================
# Session Management Configuration
# =============================================================================
# Storefront sessions live only in memory (no persistence). Sessions not
# touched within the TTL are dropped together with their cart and flow.

SESSION_TTL_SECONDS: int = int(os.getenv("SESSION_TTL_SECONDS", "3600"))  # 1 hour

SESSION_MAX_CACHE_SIZE: int = int(os.getenv("SESSION_MAX_CACHE_SIZE", "1000"))


# =============================================================================
# CORS Configuration
# =============================================================================

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]


# =============================================================================
# Admin Authentication Configuration
# =============================================================================
# ADMIN_PASSWORD must be set for the back office to be reachable at all.

ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")
