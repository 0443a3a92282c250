"""Ordering domain API package."""

from ordering.api.routes import admin_router, cart_router, history_router

__all__ = ["cart_router", "history_router", "admin_router"]
