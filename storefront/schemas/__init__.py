"""
Schemas Package for the Storefront
==================================

Pydantic models for the catalog and for API request validation and
response serialization.

Schema Organization:
--------------------
- **catalog.py**: Menu items, option groups, flow groups, outlets, store config
- **cart.py**: Cart lines and checkout
- **flow.py**: Customization flow view and requests
- **session.py**: Storefront session endpoints

Naming Conventions:
-------------------
- *Out: Response models (e.g., CartOut)
- *Create / *Update: Admin request models
- *Request / *Response: Flow and checkout bodies

All models serialize with camelCase aliases and accept either spelling on
input.
"""
