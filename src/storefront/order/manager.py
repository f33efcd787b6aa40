"""Order transaction manager: the entry points the HTTP layer calls.

Each call dispatches exactly one command. Protean runs the command handler
inside a unit of work, which is the transaction boundary: the session is
acquired when the handler starts, committed when it returns and rolled back
when it raises, and released on every path.

Stale writes detected by the store's aggregate versioning surface as
``TransactionConflict``. Nothing here retries; callers may.
"""

import json

from protean.exceptions import ExpectedVersionError, ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.domain import logger
from storefront.errors import OrderNotFound, TransactionConflict
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.order.status_change import ChangeOrderStatus


def _dispatch(command):
    try:
        return current_domain.process(command, asynchronous=False)
    except ExpectedVersionError as exc:
        logger.warning("Transaction conflict", command=type(command).__name__, detail=str(exc))
        raise TransactionConflict() from exc


def place_order(customer: dict, items: list[dict]) -> Order:
    """Deduct stock for every line and insert a pending order, atomically.

    Args:
        customer: Dict with ``name`` (required) and optional ``email``,
            ``phone`` and ``address``.
        items: List of dicts with ``product_id``, ``size`` and ``quantity``.

    Raises:
        ValidationError: malformed request.
        ProductNotFound, SizeNotFound, InsufficientStock: a line was refused;
            nothing was written.
        TransactionConflict: a concurrent transaction won; safe to retry.
    """
    customer = customer or {}
    command = PlaceOrder(
        customer_name=customer.get("name"),
        customer_email=customer.get("email"),
        customer_phone=customer.get("phone"),
        customer_address=customer.get("address"),
        items=json.dumps(items or []),
    )
    order_id = _dispatch(command)
    return current_domain.repository_for(Order).get(order_id)


def change_status(order_id: str, new_status: str) -> Order:
    """Persist a new order status, restoring stock on the first cancellation.

    Raises:
        OrderNotFound: no such order.
        InvalidTransition: unknown status, or leaving ``cancelled``.
        NoEffectiveChange: the order already has that status.
        TransactionConflict: a concurrent transaction won; safe to retry.
    """
    command = ChangeOrderStatus(order_id=order_id, status=new_status)
    _dispatch(command)
    return current_domain.repository_for(Order).get(order_id)


def get_order(order_id: str) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise OrderNotFound(order_id) from None
