"""
Services Package for the Storefront
===================================

- cart.py: Cart lines, merging and quantities
- session.py: In-memory storefront sessions (cart + open flow per customer)
- checkout.py: Opening hours and the WhatsApp order hand-off
"""
