"""In-memory catalogue: a product table for testing and development."""

from ordering.catalogue.port import CataloguePort, ProductSnapshot


class InMemoryCatalogue(CataloguePort):
    """Catalogue adapter backed by a dict. Prices can be changed at will."""

    def __init__(self):
        self._products: dict[str, ProductSnapshot] = {}
        self.is_open = False

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def add_product(
        self,
        product_id: str,
        name: str,
        price: float,
        discount_price: float | None = None,
    ) -> ProductSnapshot:
        """Register (or replace) a product."""
        snapshot = ProductSnapshot(
            product_id=str(product_id),
            name=name,
            price=price,
            discount_price=discount_price,
        )
        self._products[str(product_id)] = snapshot
        return snapshot

    def set_price(self, product_id: str, price: float, discount_price: float | None = None) -> None:
        """Change the live price of an existing product."""
        current = self._products[str(product_id)]
        self.add_product(current.product_id, current.name, price, discount_price)

    def remove_product(self, product_id: str) -> None:
        self._products.pop(str(product_id), None)

    def get_product(self, product_id: str) -> ProductSnapshot | None:
        return self._products.get(str(product_id))

    def reset(self):
        """Forget every product (useful between tests)."""
        self._products.clear()
