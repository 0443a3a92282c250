"""Order aggregate (CQRS): an immutable purchase record with a three-state lifecycle.

An order is a frozen snapshot of what was bought, at what price, shipped
where. After placement only its status moves:

    ordered → cancelled
    ordered → delivered

Both targets are terminal. The owner may cancel only within the
cancellation window; an administrator is not bound by the window.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.domain import ordering
from ordering.order.events import OrderCancelled, OrderDelivered, OrderPlaced
from ordering.order.policy import admin_can_cancel_delivered, cancellation_window
from shared.errors import AlreadyTerminal, TimeWindowExceeded


class OrderStatus(Enum):
    ORDERED = "ordered"
    CANCELLED = "cancelled"
    DELIVERED = "delivered"


DEFAULT_COUNTRY = "India"


class CancellationActor(Enum):
    OWNER = "owner"
    ADMIN = "admin"


def as_utc(moment):
    if moment is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingAddress:
    """The delivery address captured at checkout time.

    Once recorded on an Order the address never changes, whatever happens to
    the user's address book afterwards.
    """

    name = String(required=True, max_length=100)
    address_line1 = String(required=True, max_length=255)
    address_line2 = String(max_length=255, default="")
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    pincode = String(required=True, max_length=20)
    country = String(required=True, max_length=100, default=DEFAULT_COUNTRY)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A line of the order: product name, quantity and the unit price paid."""

    product_id = Identifier()
    name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    user_id = Identifier(required=True)
    checkout_id = String(max_length=255)
    owner_name = String(max_length=100)
    owner_email = String(max_length=254)
    items = HasMany(OrderItem)
    total = Float(required=True, min_value=0.0)
    shipping_address = ValueObject(ShippingAddress)
    phone = String(required=True, max_length=20)
    status = String(choices=OrderStatus, default=OrderStatus.ORDERED.value)
    ordered_at = DateTime(required=True)
    delivered_at = DateTime()
    cancelled_at = DateTime()
    cancelled_by = String(choices=CancellationActor)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        user_id,
        lines,
        shipping_address,
        phone,
        checkout_id=None,
        owner_name=None,
        owner_email=None,
        now=None,
    ):
        """Record a new order.

        Args:
            user_id: The owner of the order.
            lines: List of dicts with product_id, name, quantity, price.
            shipping_address: Dict with name, address_line1, address_line2,
                              city, state, pincode, country.
            phone: Contact phone for the delivery.
            checkout_id: Client-supplied id of the checkout attempt.
            owner_name, owner_email: Contact details of the owner at placement.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = now or datetime.now(UTC)
        optional = {
            field: value
            for field, value in (
                ("checkout_id", checkout_id),
                ("owner_name", owner_name),
                ("owner_email", owner_email),
            )
            if value
        }
        total = round(sum(line["price"] * line["quantity"] for line in lines), 2)

        order = cls(
            user_id=str(user_id),
            total=total,
            shipping_address=ShippingAddress(**shipping_address),
            phone=phone,
            status=OrderStatus.ORDERED.value,
            ordered_at=now,
            **optional,
        )
        for line in lines:
            order.add_items(
                OrderItem(
                    product_id=line.get("product_id"),
                    name=line["name"],
                    quantity=line["quantity"],
                    price=line["price"],
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                items=json.dumps(lines),
                total=total,
                ordered_at=now,
                checkout_id=checkout_id or "",
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def is_terminal(self):
        return OrderStatus(self.status) != OrderStatus.ORDERED

    def within_cancellation_window(self, now=None):
        now = as_utc(now) or datetime.now(UTC)
        return now - as_utc(self.ordered_at) <= cancellation_window()

    def can_cancel(self, now=None):
        """Whether the owner could cancel the order at ``now``."""
        return not self.is_terminal() and self.within_cancellation_window(now)

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def cancel(self, by_admin=False, now=None):
        current = OrderStatus(self.status)
        if current == OrderStatus.CANCELLED:
            raise AlreadyTerminal({"status": ["Order is already cancelled"]})
        if current == OrderStatus.DELIVERED and not (by_admin and admin_can_cancel_delivered()):
            raise AlreadyTerminal({"status": ["Order has already been delivered"]})
        if not by_admin and not self.within_cancellation_window(now):
            minutes = int(cancellation_window().total_seconds() // 60)
            raise TimeWindowExceeded(
                {"status": [f"Orders can only be cancelled within {minutes} minutes of placing them"]}
            )

        now = now or datetime.now(UTC)
        actor = CancellationActor.ADMIN if by_admin else CancellationActor.OWNER
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_at = now
        self.cancelled_by = actor.value

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                user_id=str(self.user_id),
                cancelled_by=actor.value,
                cancelled_at=now,
            )
        )

    def mark_delivered(self, now=None):
        current = OrderStatus(self.status)
        if current == OrderStatus.CANCELLED:
            raise AlreadyTerminal({"status": ["Cannot deliver a cancelled order"]})
        if current == OrderStatus.DELIVERED:
            raise AlreadyTerminal({"status": ["Order is already delivered"]})

        now = now or datetime.now(UTC)
        self.status = OrderStatus.DELIVERED.value
        self.delivered_at = now

        self.raise_(
            OrderDelivered(
                order_id=str(self.id),
                user_id=str(self.user_id),
                delivered_at=now,
            )
        )
