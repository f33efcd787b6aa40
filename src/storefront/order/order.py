"""Order aggregate root with its lines and customer details."""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.order.status import INITIAL_STATUS, OrderStatus


@storefront.value_object(part_of="Order")
class Customer:
    """Who the order is for. Opaque to the stock engine beyond the name."""

    name: String(required=True, max_length=255)
    email: String(max_length=254)
    phone: String(max_length=30)
    address: Text()


@storefront.entity(part_of="Order")
class OrderLine:
    product_id: Identifier(required=True)
    product_name: String(max_length=255)
    size: String(required=True, max_length=20)
    quantity: Integer(required=True, min_value=1)


@storefront.aggregate
class Order:
    customer: ValueObject(Customer, required=True)
    items: HasMany(OrderLine)
    status: String(choices=OrderStatus, default=INITIAL_STATUS.value)
    created_at: DateTime()
    updated_at: DateTime()
    cancelled_at: DateTime()

    @classmethod
    def place(cls, customer, lines):
        """Build a pending order. Stock is handled by the caller's transaction.

        Args:
            customer: Dict with name and optional email, phone, address.
            lines: List of OrderLine entities, in request order.
        """
        from storefront.order.events import OrderPlaced

        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            customer=Customer(**customer),
            items=lines,
            status=INITIAL_STATUS.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_name=order.customer.name,
                items=json.dumps(
                    [
                        {"product_id": str(line.product_id), "size": line.size, "quantity": line.quantity}
                        for line in order.items
                    ]
                ),
                placed_at=now,
            )
        )
        return order

    @property
    def is_cancelled(self):
        return self.status == OrderStatus.CANCELLED.value

    def change_status(self, target: OrderStatus, restored=None, skipped=None):
        """Persist a new status. Restoration bookkeeping is passed in on cancel."""
        from storefront.order.events import OrderCancelled, OrderStatusChanged

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )

        if target is OrderStatus.CANCELLED:
            self.cancelled_at = now
            self.raise_(
                OrderCancelled(
                    order_id=str(self.id),
                    previous_status=previous,
                    restored_items=json.dumps(restored or []),
                    skipped_items=json.dumps(skipped or []),
                    cancelled_at=now,
                )
            )
