"""Read side of the order ledger: order history for owners and administrators."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.order.order import Order, as_utc


def load_order(order_id, owner_id=None) -> Order:
    """Fetch an order, optionally requiring it to belong to ``owner_id``.

    Another user's order is reported exactly like a missing one.
    """
    try:
        order = current_domain.repository_for(Order).get(str(order_id))
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"order": ["Order not found"]}) from None

    if owner_id is not None and str(order.user_id) != str(owner_id):
        raise ObjectNotFoundError({"order": ["Order not found"]})
    return order


def order_payload(order: Order, now=None) -> dict:
    address = order.shipping_address
    return {
        "id": str(order.id),
        "user_id": str(order.user_id),
        "checkout_id": order.checkout_id,
        "owner_name": order.owner_name,
        "owner_email": order.owner_email,
        "items": [{"name": i.name, "quantity": i.quantity, "price": i.price} for i in order.items],
        "total": order.total,
        "shipping_address": {
            "name": address.name,
            "address_line1": address.address_line1,
            "address_line2": address.address_line2 or "",
            "city": address.city,
            "state": address.state,
            "pincode": address.pincode,
            "country": address.country,
        }
        if address
        else None,
        "phone": order.phone,
        "status": order.status,
        "ordered_at": order.ordered_at.isoformat() if order.ordered_at else None,
        "delivered_at": order.delivered_at.isoformat() if order.delivered_at else None,
        "can_cancel": order.can_cancel(now),
    }


def _newest_first(orders):
    return sorted(orders, key=lambda o: as_utc(o.ordered_at), reverse=True)


def orders_for(user_id, now=None) -> list[dict]:
    """The user's orders, newest first."""
    repo = current_domain.repository_for(Order)
    orders = repo._dao.query.filter(user_id=str(user_id)).all().items
    return [order_payload(o, now) for o in _newest_first(orders)]


def all_orders(now=None) -> list[dict]:
    """Every order in the ledger, newest first."""
    repo = current_domain.repository_for(Order)
    orders = repo._dao.query.all().items
    return [order_payload(o, now) for o in _newest_first(orders)]


def order_detail(order_id, user_id, now=None) -> dict:
    return order_payload(load_order(order_id, owner_id=user_id), now)
