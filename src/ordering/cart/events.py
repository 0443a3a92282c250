"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Float, Identifier, Integer

from ordering.domain import ordering


@ordering.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the cart, or its quantity topped up."""

    __version__ = 1

    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    """The quantity of a cart item was changed."""

    __version__ = 1

    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartItemRemoved:
    """An item was removed from the cart."""

    __version__ = 1

    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.event(part_of="ShoppingCart")
class CartItemSavedForLater:
    """An item was parked in the saved-for-later list."""

    __version__ = 1

    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@ordering.event(part_of="ShoppingCart")
class CartItemMovedToCart:
    """A saved-for-later item was moved back into the active cart."""

    __version__ = 1

    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@ordering.event(part_of="ShoppingCart")
class CartCleared:
    """All active items were removed; saved-for-later items were kept."""

    __version__ = 1

    user_id = Identifier(required=True)
    items_removed = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartCheckedOut:
    """The active part of the cart was turned into an order."""

    __version__ = 1

    user_id = Identifier(required=True)
    order_id = Identifier(required=True)
    items_ordered = Integer(required=True)
    order_total = Float(required=True)
