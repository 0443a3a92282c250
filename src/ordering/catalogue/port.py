"""Catalogue port: abstract interface for live product lookups.

Cart totals and checkout snapshots are always priced from the catalogue at
the moment of the call. Products, images and pricing rules are owned by the
external catalogue service; the storefront only reads them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProductSnapshot:
    """What the storefront needs to know about a product right now."""

    product_id: str
    name: str
    price: float
    discount_price: float | None = None

    @property
    def unit_price(self) -> float:
        """Effective unit price: the discount price when one is set."""
        return self.discount_price if self.discount_price else self.price


class CataloguePort(ABC):
    """Abstract interface for catalogue adapters."""

    def open(self) -> None:  # noqa: B027
        """Acquire connections or warm caches. Called on application startup."""

    def close(self) -> None:  # noqa: B027
        """Release resources. Called on application shutdown."""

    @abstractmethod
    def get_product(self, product_id: str) -> ProductSnapshot | None:
        """Look up a single product.

        Returns:
            The current snapshot, or None when the product does not exist.
        """
        ...

    def get_products(self, product_ids) -> dict[str, ProductSnapshot]:
        """Look up several products at once, keyed by product id.

        Products that do not exist are left out of the result.
        """
        found = {}
        for product_id in product_ids:
            snapshot = self.get_product(str(product_id))
            if snapshot is not None:
                found[str(product_id)] = snapshot
        return found
