"""Read-side queries over the Product collection.

Listings read committed stock without synchronization; they never write.
"""

from storefront.domain import storefront
from storefront.product.product import Product

ALL_CATEGORIES = "all"


def _in_category(product, category):
    return not category or category == ALL_CATEGORIES or product.category == category


@storefront.repository(part_of=Product)
class ProductRepository:
    def _everything(self) -> list[Product]:
        return self._dao.query.all().items

    def search(self, search: str = "", category: str = ALL_CATEGORIES) -> list[Product]:
        """Case-insensitive name search, optionally narrowed to one category."""
        needle = (search or "").lower()
        return [
            product
            for product in self._everything()
            if _in_category(product, category) and needle in (product.name or "").lower()
        ]

    def new_arrivals(self, category: str | None = None) -> list[Product]:
        return [product for product in self._everything() if product.is_new_arrival and _in_category(product, category)]

    def discounted(self, category: str | None = None) -> list[Product]:
        return [
            product
            for product in self._everything()
            if product.discount_price is not None and _in_category(product, category)
        ]
