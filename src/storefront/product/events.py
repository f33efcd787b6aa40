"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalog with its initial size stock."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    sizes: Text()  # JSON: [{"size": ..., "stock": ...}]
    added_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """Descriptive fields of a product changed. Stock is never part of this."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float()
    discount_price: Float()


@storefront.event(part_of="Product")
class SizeRestocked:
    """Units were added to a size by a catalog operation."""

    __version__ = 1

    product_id: Identifier(required=True)
    size: String(required=True)
    quantity: Integer(required=True)
    new_stock: Integer(required=True)


@storefront.event(part_of="Product")
class StockLevelChanged:
    """The order engine deducted or restored stock for a size."""

    __version__ = 1

    product_id: Identifier(required=True)
    size: String(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
    order_id: Identifier()
    reason: String(max_length=50)
