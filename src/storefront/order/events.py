"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """An order was accepted and its stock deducted in the same transaction."""

    __version__ = 1

    order_id: Identifier(required=True)
    customer_name: String(required=True)
    items: Text(required=True)  # JSON: [{"product_id", "size", "quantity"}, ...]
    placed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """An order was cancelled and the stock of its lines given back.

    ``skipped_items`` lists lines whose product or size had left the catalog.
    """

    __version__ = 1

    order_id: Identifier(required=True)
    previous_status: String(required=True)
    restored_items: Text()  # JSON
    skipped_items: Text()  # JSON
    cancelled_at: DateTime(required=True)
