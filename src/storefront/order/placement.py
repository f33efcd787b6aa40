"""Order placement — command and handler.

The handler runs inside one unit of work. It reads every product the order
touches, checks each line against the stock ledger, and only then writes the
product stock and inserts the order. Any refused line aborts before the first
write, and the unit of work discards everything on error.
"""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.errors import ProductNotFound
from storefront.order import ledger
from storefront.order.order import Order, OrderLine
from storefront.product.product import Product


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_name: String(required=True, max_length=255)
    customer_email: String(max_length=254)
    customer_phone: String(max_length=30)
    customer_address: Text()
    items: Text(required=True)  # JSON: [{"product_id", "size", "quantity"}, ...]


def _parse_lines(raw_items):
    try:
        items = json.loads(raw_items) if isinstance(raw_items, str) else raw_items
    except json.JSONDecodeError:
        raise ValidationError({"items": ["Items must be valid JSON"]}) from None

    if not isinstance(items, list) or not items:
        raise ValidationError({"items": ["An order needs at least one item"]})

    lines = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValidationError({"items": [f"Item {index} must be an object"]})
        quantity = item.get("quantity")
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValidationError({"quantity": [f"Item {index} must have a positive integer quantity"]})
        lines.append(
            OrderLine(
                product_id=item.get("product_id"),
                size=item.get("size"),
                quantity=quantity,
            )
        )
    return lines


def _fetch_product(repo, product_id, line_index):
    try:
        return repo.get(product_id)
    except ObjectNotFoundError:
        raise ProductNotFound(product_id, line_index=line_index) from None


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        lines = _parse_lines(command.items)
        customer = {
            "name": command.customer_name,
            "email": command.customer_email,
            "phone": command.customer_phone,
            "address": command.customer_address,
        }
        order = Order.place(customer, lines)

        product_repo = current_domain.repository_for(Product)
        staged = {}  # product_id -> Product snapshot, in first-touch order
        for index, line in enumerate(lines):
            product_id = str(line.product_id)
            product = staged.get(product_id)
            if product is None:
                product = _fetch_product(product_repo, product_id, index)

            # Staged on the snapshot, so repeated lines on one size add up.
            new_stock = ledger.check_and_reserve(product, line, line_index=index)
            product.set_stock(line.size, new_stock, order_id=order.id, reason="order_placed")
            line.product_name = product.name
            staged[product_id] = product

        for product in staged.values():
            product_repo.add(product)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            lines=len(lines),
            products=len(staged),
        )
        return str(order.id)
