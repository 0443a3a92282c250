"""Read side of the cart: live-priced view of a user's cart."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.catalogue import get_catalogue


def _line(item, products) -> dict:
    product = products.get(str(item.product_id))
    return {
        "item_id": str(item.id),
        "product_id": str(item.product_id),
        "quantity": item.quantity,
        "is_saved_for_later": bool(item.is_saved_for_later),
        "name": product.name if product else None,
        "price": product.price if product else None,
        "discount_price": product.discount_price if product else None,
        "added_at": item.added_at.isoformat() if item.added_at else None,
    }


def cart_view(user_id) -> dict:
    """Active items, saved items and the total at current catalogue prices.

    A user without a cart gets the empty view.
    """
    try:
        cart = current_domain.repository_for(ShoppingCart).get(str(user_id))
    except ObjectNotFoundError:
        return {"items": [], "saved_for_later": [], "total": 0.0}

    products = get_catalogue().get_products(cart.product_ids())
    return {
        "items": [_line(i, products) for i in cart.active_items()],
        "saved_for_later": [_line(i, products) for i in cart.saved_items()],
        "total": cart.compute_total(products),
    }
