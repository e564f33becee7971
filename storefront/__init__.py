"""Storefront ordering service with a guided item customization flow."""

__version__ = "1.0.0"
