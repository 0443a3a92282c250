"""Ordering bounded context: Shopping Cart, Order ledger and Checkout.

Handles the per-user cart (CQRS), the order ledger with its status
transitions, and the checkout flow that converts the active part of a cart
into an order in a single unit of work.
"""

from protean.domain import Domain
from shared.logging import configure_logging, get_logger

configure_logging()

ordering = Domain(name="ordering")

logger = get_logger(__name__)
