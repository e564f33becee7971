"""
Routes Package for the Storefront
=================================

API route definitions organized by domain. Each module defines FastAPI
APIRouters with related endpoints grouped together.

**Customer-Facing Routes:**
- sessions.py: Storefront sessions and outlet selection
- public.py: Menu, outlets and store configuration (no auth required)
- flow.py: The item customization flow
- cart.py: Cart lines, line editing and WhatsApp checkout

**Admin Routes (require authentication):**
- admin_menu.py: Menu item CRUD, duplicate and reorder
- admin_option_groups.py: Option group CRUD and duplicate
- admin_system.py: Store configuration and catalog backups

Router Registration:
--------------------
All routers are registered in main.py under two prefixes:
1. /api/v1/* - Versioned API
2. /* - Root paths

Error Handling:
---------------
Routes raise HTTPException for error conditions:
- 401: Unauthorized (invalid admin credentials)
- 404: Not found (unknown session, item, line, group)
- 409: Conflict (no open flow, stale cart edit, checkout not possible)
- 422: Validation errors
- 503: Admin password not configured
"""

from .sessions import sessions_router
from .public import public_menu_router, public_outlets_router, public_config_router
from .flow import flow_router
from .cart import cart_router
from .admin_menu import admin_menu_router
from .admin_option_groups import admin_option_groups_router
from .admin_system import admin_config_router, admin_backup_router

__all__ = [
    "sessions_router",
    "public_menu_router",
    "public_outlets_router",
    "public_config_router",
    "flow_router",
    "cart_router",
    "admin_menu_router",
    "admin_option_groups_router",
    "admin_config_router",
    "admin_backup_router",
]
