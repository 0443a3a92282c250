"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A new order was recorded from the active part of a user's cart."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    checkout_id = String()
    items = Text(required=True)  # JSON: list of {product_id, name, quantity, price}
    total = Float(required=True)
    ordered_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled by its owner or an administrator."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    cancelled_by = String(required=True)
    cancelled_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderDelivered:
    """The order was handed over to the customer."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    delivered_at = DateTime(required=True)
