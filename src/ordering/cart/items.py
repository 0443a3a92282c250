"""Cart item management: commands and handler.

Every mutation re-prices the cart from the live catalogue before it is
stored. The cart itself is created on the first AddToCart.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart, parse_product_id
from ordering.catalogue import get_catalogue
from ordering.domain import ordering


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    new_quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class SaveForLater:
    """Park an active item outside the next order."""

    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class MoveToCart:
    """Bring a saved-for-later item back into the active cart."""

    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    """Remove every active item, keeping saved-for-later items."""

    user_id = Identifier(required=True)


def load_cart(user_id) -> ShoppingCart:
    try:
        return current_domain.repository_for(ShoppingCart).get(str(user_id))
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"cart": ["Cart not found"]}) from None


def store_repriced(cart: ShoppingCart) -> ShoppingCart:
    """Refresh the cart total from current prices and persist it."""
    cart.reprice(get_catalogue().get_products(cart.product_ids()))
    current_domain.repository_for(ShoppingCart).add(cart)
    return cart


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product_id = parse_product_id(command.product_id)
        if get_catalogue().get_product(product_id) is None:
            raise ObjectNotFoundError({"product_id": ["Product not found"]})

        repo = current_domain.repository_for(ShoppingCart)
        try:
            cart = repo.get(str(command.user_id))
        except ObjectNotFoundError:
            cart = ShoppingCart.create(user_id=command.user_id)

        item = cart.add_item(product_id=product_id, quantity=command.quantity)
        store_repriced(cart)
        return str(item.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        cart = load_cart(command.user_id)
        cart.update_item_quantity(
            item_id=command.item_id,
            new_quantity=command.new_quantity,
        )
        store_repriced(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = load_cart(command.user_id)
        cart.remove_item(item_id=command.item_id)
        store_repriced(cart)

    @handle(SaveForLater)
    def save_for_later(self, command):
        cart = load_cart(command.user_id)
        cart.save_for_later(item_id=command.item_id)
        store_repriced(cart)

    @handle(MoveToCart)
    def move_to_cart(self, command):
        cart = load_cart(command.user_id)
        cart.move_to_cart(item_id=command.item_id)
        store_repriced(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = load_cart(command.user_id)
        cart.clear()
        store_repriced(cart)
