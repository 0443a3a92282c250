"""Checkout: turns the active part of a user's cart into an order.

The order is created and the cart truncated inside the same unit of work,
so no reader sees the new order while the cart still holds the ordered
items. Each attempt carries a client-supplied ``checkout_id``; repeating an
attempt returns the order it already produced.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.catalogue import get_catalogue
from ordering.domain import logger, ordering
from ordering.order.order import DEFAULT_COUNTRY, Order
from shared.errors import StateError


@ordering.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    checkout_id = String(max_length=255)
    name = String(required=True, max_length=100)
    address_line1 = String(required=True, max_length=255)
    address_line2 = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    pincode = String(required=True, max_length=20)
    country = String(max_length=100, default=DEFAULT_COUNTRY)
    phone = String(required=True, max_length=20)
    owner_name = String(max_length=100)
    owner_email = String(max_length=254)


def _existing_order(user_id, checkout_id):
    if not checkout_id:
        return None
    repo = current_domain.repository_for(Order)
    matches = repo._dao.query.filter(user_id=str(user_id), checkout_id=checkout_id).all().items
    return matches[0] if matches else None


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        existing = _existing_order(command.user_id, command.checkout_id)
        if existing is not None:
            logger.info(
                "Checkout replayed",
                order_id=str(existing.id),
                checkout_id=command.checkout_id,
            )
            return str(existing.id)

        cart_repo = current_domain.repository_for(ShoppingCart)
        try:
            cart = cart_repo.get(str(command.user_id))
        except ObjectNotFoundError:
            raise StateError({"cart": ["Your cart is empty"]}) from None

        if not cart.items:
            raise StateError({"cart": ["Your cart is empty"]})

        active = cart.active_items()
        if not active:
            raise StateError({"cart": ["No items to order"]})

        products = get_catalogue().get_products(cart.product_ids())
        lines = []
        for item in active:
            product = products.get(str(item.product_id))
            if product is None:
                raise ObjectNotFoundError({"product_id": [f"Product {item.product_id} is no longer available"]})
            lines.append(
                {
                    "product_id": str(item.product_id),
                    "name": product.name,
                    "quantity": item.quantity,
                    "price": product.unit_price,
                }
            )

        order = Order.place(
            user_id=command.user_id,
            lines=lines,
            shipping_address={
                "name": command.name,
                "address_line1": command.address_line1,
                "address_line2": command.address_line2 or "",
                "city": command.city,
                "state": command.state,
                "pincode": command.pincode,
                "country": command.country or DEFAULT_COUNTRY,
            },
            phone=command.phone,
            checkout_id=command.checkout_id,
            owner_name=command.owner_name,
            owner_email=command.owner_email,
        )
        current_domain.repository_for(Order).add(order)

        cart.check_out(order_id=order.id, order_total=order.total)
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(order.user_id),
            total=order.total,
            items=len(lines),
        )
        return str(order.id)
