"""Administrative order deletion: command and handler.

Deleting an order is an override outside the stock engine: it never touches
product stock, whatever the order's status.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.errors import OrderNotFound
from storefront.order.order import Order


@storefront.command(part_of="Order")
class DeleteOrder:
    order_id: Identifier(required=True)


@storefront.command_handler(part_of=Order)
class DeleteOrderHandler:
    @handle(DeleteOrder)
    def delete_order(self, command):
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise OrderNotFound(command.order_id) from None

        repo._dao.delete(order)
        logger.info("Order deleted", order_id=str(command.order_id), status=order.status)
