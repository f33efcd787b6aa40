"""Order status change — command and handler.

Moving a non-cancelled order to ``cancelled`` gives every line's stock back in
the same unit of work that writes the new status. Products or sizes that have
left the catalog since the order was placed are skipped with a warning.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.errors import OrderNotFound
from storefront.order import ledger
from storefront.order.order import Order
from storefront.order.status import OrderStatus, check_transition, restores_stock
from storefront.product.product import Product


@storefront.command(part_of="Order")
class ChangeOrderStatus:
    order_id: Identifier(required=True)
    status: String(required=True, max_length=50)


def _line_ref(line):
    return {"product_id": str(line.product_id), "size": line.size, "quantity": line.quantity}


def _restore_stock(order):
    """Stage stock restoration for every line. Returns (restored, skipped)."""
    product_repo = current_domain.repository_for(Product)
    snapshots = {}
    changed = {}
    restored, skipped = [], []

    for line in order.items:
        product_id = str(line.product_id)
        product = snapshots.get(product_id)
        if product is None:
            try:
                product = product_repo.get(product_id)
            except ObjectNotFoundError:
                logger.warning(
                    "Product no longer in catalog, stock not restored",
                    order_id=str(order.id),
                    product_id=product_id,
                    size=line.size,
                    quantity=line.quantity,
                )
                skipped.append(_line_ref(line))
                continue
            snapshots[product_id] = product

        new_stock = ledger.release(product, line)
        if new_stock is None:
            skipped.append(_line_ref(line))
            continue

        product.set_stock(line.size, new_stock, order_id=order.id, reason="order_cancelled")
        changed[product_id] = product
        restored.append(_line_ref(line))

    for product in changed.values():
        product_repo.add(product)
    return restored, skipped


@storefront.command_handler(part_of=Order)
class ChangeOrderStatusHandler:
    @handle(ChangeOrderStatus)
    def change_order_status(self, command):
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise OrderNotFound(command.order_id) from None

        current = OrderStatus(order.status)
        target = check_transition(current, command.status)

        restored, skipped = [], []
        if restores_stock(current, target):
            restored, skipped = _restore_stock(order)

        order.change_status(target, restored=restored, skipped=skipped)
        repo.add(order)

        logger.info(
            "Order status changed",
            order_id=str(order.id),
            previous_status=current.value,
            new_status=target.value,
            restored_lines=len(restored),
            skipped_lines=len(skipped),
        )
        return target.value
