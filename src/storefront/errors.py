"""Error taxonomy for the storefront domain.

Malformed input is reported with ``protean.exceptions.ValidationError``.
Everything else the order engine can refuse is a ``StorefrontError``. Like
Protean's ValidationError, each carries a ``messages`` dict keyed by the
offending field, so the HTTP layer can render both the same way.
"""


class StorefrontError(Exception):
    kind = "storefront_error"
    retryable = False

    def __init__(self, message: str, field: str = "_entity", **context):
        super().__init__(message)
        self.message = message
        self.messages = {field: [message]}
        self.context = context

    def __repr__(self):
        return f"{type(self).__name__}({self.message!r})"


class ProductNotFound(StorefrontError):
    kind = "product_not_found"

    def __init__(self, product_id, line_index=None):
        super().__init__(
            f"Product not found: {product_id}",
            field="product_id",
            product_id=str(product_id),
            line_index=line_index,
        )


class SizeNotFound(StorefrontError):
    kind = "size_not_found"

    def __init__(self, product_id, product_name, size, line_index=None):
        super().__init__(
            f"Size {size} not found for {product_name}",
            field="size",
            product_id=str(product_id),
            size=size,
            line_index=line_index,
        )


class InsufficientStock(StorefrontError):
    kind = "insufficient_stock"

    def __init__(self, product_id, product_name, size, requested, available, line_index=None):
        super().__init__(
            f"Insufficient stock for {product_name} ({size}): requested {requested}, available {available}",
            field="quantity",
            product_id=str(product_id),
            size=size,
            requested=requested,
            available=available,
            line_index=line_index,
        )


class OrderNotFound(StorefrontError):
    kind = "order_not_found"

    def __init__(self, order_id):
        super().__init__(f"Order not found: {order_id}", field="order_id", order_id=str(order_id))


class UserNotFound(StorefrontError):
    kind = "user_not_found"

    def __init__(self, user_id):
        super().__init__(f"User not found: {user_id}", field="user_id", user_id=str(user_id))


class InvalidTransition(StorefrontError):
    kind = "invalid_transition"

    def __init__(self, current, target):
        if current is None:
            message = f"Unknown order status: {target}"
        else:
            message = f"Cannot transition from {current} to {target}"
        super().__init__(message, field="status", current=current, target=target)


class NoEffectiveChange(StorefrontError):
    kind = "no_effective_change"

    def __init__(self, message, field="status", **context):
        super().__init__(message, field=field, **context)


class TransactionConflict(StorefrontError):
    """A concurrent transaction modified the same documents. Safe to retry."""

    kind = "transaction_conflict"
    retryable = True

    def __init__(self, message="Concurrent update detected, please retry", **context):
        super().__init__(message, **context)
