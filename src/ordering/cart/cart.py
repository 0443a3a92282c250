"""Shopping Cart aggregate (CQRS): one cart per user, split into active and saved items.

The cart is a standard CQRS aggregate keyed by the owning user's id and
created lazily on the first add. Items are either active (part of the next
order) or saved for later. The stored ``total`` is a cache: it is recomputed
from live catalogue prices on every mutation and again on every read, so a
price change shows up in an existing cart without the cart being touched.
"""

from datetime import UTC, datetime
from uuid import UUID

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer

from ordering.cart.events import (
    CartCheckedOut,
    CartCleared,
    CartItemAdded,
    CartItemMovedToCart,
    CartItemRemoved,
    CartItemSavedForLater,
    CartQuantityUpdated,
)
from ordering.domain import ordering
from shared.errors import StateError


def parse_product_id(product_id) -> str:
    """Return the canonical form of a product id, or raise ValidationError."""
    try:
        return str(UUID(str(product_id)))
    except (TypeError, ValueError):
        raise ValidationError({"product_id": ["Invalid product id"]}) from None


def price_lines(lines, products) -> float:
    """Sum ``unit price × quantity`` over (product_id, quantity) pairs.

    Products missing from ``products`` contribute nothing.
    """
    total = 0.0
    for product_id, quantity in lines:
        product = products.get(str(product_id))
        if product is not None:
            total += product.unit_price * quantity
    return round(total, 2)


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    is_saved_for_later = Boolean(default=False)
    added_at = DateTime()


@ordering.aggregate
class ShoppingCart:
    user_id = Identifier(identifier=True, required=True)
    items = HasMany(CartItem)
    total = Float(default=0.0, min_value=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=str(user_id), total=0.0, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------
    def active_items(self):
        return sorted(
            (i for i in self.items if not i.is_saved_for_later),
            key=lambda i: i.added_at or datetime.min.replace(tzinfo=UTC),
        )

    def saved_items(self):
        return sorted(
            (i for i in self.items if i.is_saved_for_later),
            key=lambda i: i.added_at or datetime.min.replace(tzinfo=UTC),
        )

    def product_ids(self):
        return {str(i.product_id) for i in self.items}

    def compute_total(self, products) -> float:
        """Total of the active items at the given product prices."""
        return price_lines(((i.product_id, i.quantity) for i in self.active_items()), products)

    def reprice(self, products) -> float:
        """Refresh the cached total from the given product snapshots."""
        self.total = self.compute_total(products)
        return self.total

    def _item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ObjectNotFoundError({"item_id": ["Item not found in cart"]})
        return item

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity):
        """Add a product to the cart, or top up the item already holding it.

        The existing item may be active or saved for later; it stays where it is.
        """
        product_id = parse_product_id(product_id)
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = next((i for i in self.items if str(i.product_id) == product_id), None)
        now = datetime.now(UTC)

        if existing:
            existing.quantity += quantity
            item = existing
        else:
            item = CartItem(
                product_id=product_id,
                quantity=quantity,
                is_saved_for_later=False,
                added_at=now,
            )
            self.add_items(item)

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                user_id=self.user_id,
                item_id=str(item.id),
                product_id=product_id,
                quantity=quantity,
                new_quantity=item.quantity,
            )
        )
        return item

    def update_item_quantity(self, item_id, new_quantity):
        """Set the quantity of an existing cart item."""
        if new_quantity is None or new_quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        item = self._item(item_id)
        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                user_id=self.user_id,
                item_id=str(item.id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, item_id):
        item = self._item(item_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                user_id=self.user_id,
                item_id=str(item.id),
                product_id=str(item.product_id),
            )
        )

    # -------------------------------------------------------------------
    # Save for later
    # -------------------------------------------------------------------
    def save_for_later(self, item_id):
        item = self._item(item_id)
        if item.is_saved_for_later:
            raise StateError({"item_id": ["Item is already saved for later"]})

        item.is_saved_for_later = True
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemSavedForLater(user_id=self.user_id, item_id=str(item.id)))

    def move_to_cart(self, item_id):
        item = self._item(item_id)
        if not item.is_saved_for_later:
            raise StateError({"item_id": ["Item is already in cart"]})

        item.is_saved_for_later = False
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemMovedToCart(user_id=self.user_id, item_id=str(item.id)))

    # -------------------------------------------------------------------
    # Whole-cart operations
    # -------------------------------------------------------------------
    def clear(self):
        """Remove every active item. Saved-for-later items are kept."""
        active = self.active_items()
        for item in active:
            self.remove_items(item)

        self.total = 0.0
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(user_id=self.user_id, items_removed=len(active)))

    def check_out(self, order_id, order_total):
        """Drop the active items that were just ordered and zero the total."""
        active = self.active_items()
        if not active:
            raise StateError({"cart": ["Cart is empty"]})

        for item in active:
            self.remove_items(item)

        self.total = 0.0
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartCheckedOut(
                user_id=self.user_id,
                order_id=str(order_id),
                items_ordered=len(active),
                order_total=order_total,
            )
        )
