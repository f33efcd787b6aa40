"""Read-side queries over the Order collection."""

from datetime import UTC, datetime

from storefront.domain import storefront
from storefront.order.order import Order

_EPOCH = datetime.min.replace(tzinfo=UTC)


@storefront.repository(part_of=Order)
class OrderRepository:
    def recent_first(self) -> list[Order]:
        """All orders, newest first."""
        orders = self._dao.query.all().items
        return sorted(orders, key=lambda order: order.created_at or _EPOCH, reverse=True)
