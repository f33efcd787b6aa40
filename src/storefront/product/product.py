"""Product aggregate root with per-size stock entries."""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Integer, String, Text

from storefront.domain import storefront


def _utcnow():
    return datetime.now(UTC)


@storefront.entity(part_of="Product")
class SizeStock:
    """Remaining purchasable quantity for one size of a product."""

    size: String(required=True, max_length=20)
    stock: Integer(default=0, min_value=0)


@storefront.aggregate
class Product:
    """Product aggregate root.

    ``sizes`` holds the stock counters. Outside catalog restocking, they are
    only written by the order engine while placing or cancelling an order.
    """

    name: String(required=True, max_length=255)
    category: String(required=True, max_length=100)
    description: Text()
    price: Float(min_value=0.0)
    discount_price: Float(min_value=0.0)
    image: String(max_length=500)
    is_new_arrival: Boolean(default=False)
    sizes: HasMany(SizeStock)
    created_at: DateTime(default=_utcnow)
    updated_at: DateTime(default=_utcnow)

    @invariant.post
    def sizes_must_be_unique(self):
        labels = [entry.size for entry in self.sizes]
        if len(labels) != len(set(labels)):
            raise ValidationError({"sizes": ["Size labels must be unique within a product"]})

    @classmethod
    def create(
        cls,
        name,
        category,
        sizes=None,
        price=None,
        discount_price=None,
        description=None,
        image=None,
        is_new_arrival=False,
    ):
        from storefront.product.events import ProductAdded

        sizes = sizes or []
        labels = [entry.get("size") for entry in sizes]
        if len(labels) != len(set(labels)):
            raise ValidationError({"sizes": ["Size labels must be unique within a product"]})

        now = datetime.now(UTC)
        product = cls(
            name=name,
            category=category,
            description=description,
            price=price,
            discount_price=discount_price,
            image=image,
            is_new_arrival=bool(is_new_arrival),
            sizes=[SizeStock(size=entry.get("size"), stock=entry.get("stock", 0)) for entry in sizes],
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=name,
                category=category,
                sizes=json.dumps([{"size": s.size, "stock": s.stock} for s in product.sizes]),
                added_at=now,
            )
        )
        return product

    def size_entry(self, size):
        """Return the SizeStock entry for ``size``, or None."""
        return next((entry for entry in self.sizes if entry.size == size), None)

    def update_details(
        self,
        name=None,
        category=None,
        description=None,
        price=None,
        discount_price=None,
        image=None,
        is_new_arrival=None,
        clear_discount=False,
    ):
        from storefront.product.events import ProductDetailsUpdated

        if name is not None:
            self.name = name
        if category is not None:
            self.category = category
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if clear_discount:
            self.discount_price = None
        elif discount_price is not None:
            self.discount_price = discount_price
        if image is not None:
            self.image = image
        if is_new_arrival is not None:
            self.is_new_arrival = is_new_arrival

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                category=self.category,
                price=self.price,
                discount_price=self.discount_price,
            )
        )

    def set_stock(self, size, new_stock, order_id=None, reason=None):
        """Write a stock value computed by the stock ledger."""
        from storefront.product.events import StockLevelChanged

        entry = self.size_entry(size)
        if entry is None:
            raise ValidationError({"size": [f"Size {size} not found for {self.name}"]})
        if new_stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

        previous_stock = entry.stock
        entry.stock = new_stock
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockLevelChanged(
                product_id=self.id,
                size=size,
                previous_stock=previous_stock,
                new_stock=new_stock,
                order_id=order_id,
                reason=reason,
            )
        )

    def restock(self, size, quantity):
        """Add ``quantity`` units to ``size``, creating the size if needed."""
        from storefront.product.events import SizeRestocked

        if quantity < 1:
            raise ValidationError({"quantity": ["Restock quantity must be at least 1"]})

        entry = self.size_entry(size)
        if entry is None:
            entry = SizeStock(size=size, stock=quantity)
            self.add_sizes(entry)
        else:
            entry.stock = entry.stock + quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            SizeRestocked(
                product_id=self.id,
                size=size,
                quantity=quantity,
                new_stock=entry.stock,
            )
        )
        return entry

