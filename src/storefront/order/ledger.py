"""Stock ledger: pure stock arithmetic for one order line against one product.

Nothing here touches storage. The caller hands in the product snapshot it read
inside its unit of work and decides what to persist.
"""

import structlog

from storefront.errors import InsufficientStock, SizeNotFound

logger = structlog.get_logger(__name__)


def check_and_reserve(product, line, line_index=None) -> int:
    """Return the stock left for ``line.size`` after taking ``line.quantity``."""
    entry = product.size_entry(line.size)
    if entry is None:
        raise SizeNotFound(product.id, product.name, line.size, line_index=line_index)
    if entry.stock < line.quantity:
        raise InsufficientStock(
            product.id,
            product.name,
            line.size,
            requested=line.quantity,
            available=entry.stock,
            line_index=line_index,
        )
    return entry.stock - line.quantity


def release(product, line) -> int | None:
    """Return the stock for ``line.size`` with ``line.quantity`` given back.

    Returns None when the size no longer exists on the product.
    """
    entry = product.size_entry(line.size)
    if entry is None:
        logger.warning(
            "Size no longer in catalog, stock not restored",
            product_id=str(product.id),
            size=line.size,
            quantity=line.quantity,
        )
        return None
    return entry.stock + line.quantity
