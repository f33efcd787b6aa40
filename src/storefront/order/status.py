"""Order status values and the transition rules the stock engine cares about.

Only one edge has a stock side effect: any non-cancelled status moving to
``cancelled`` restores every line's stock. ``cancelled`` is terminal, so that
edge can fire at most once per order. Every other edge between recognized
statuses just persists the new value.
"""

from enum import Enum

from storefront.errors import InvalidTransition, NoEffectiveChange


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


INITIAL_STATUS = OrderStatus.PENDING


def parse_status(value) -> OrderStatus:
    """Resolve a raw status value, raising InvalidTransition if unrecognized."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        raise InvalidTransition(None, value) from None


def restores_stock(current: OrderStatus, target: OrderStatus) -> bool:
    return target is OrderStatus.CANCELLED and current is not OrderStatus.CANCELLED


def check_transition(current, target) -> OrderStatus:
    """Validate ``current -> target`` and return the parsed target status."""
    target_status = parse_status(target)
    current_status = OrderStatus(current)

    if current_status is target_status:
        raise NoEffectiveChange(
            f"Order status unchanged: already {current_status.value}",
            current=current_status.value,
        )
    if current_status is OrderStatus.CANCELLED:
        raise InvalidTransition(current_status.value, target_status.value)
    return target_status
