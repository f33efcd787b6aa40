"""Storefront bounded context: Catalog, Users and Order/Inventory consistency.

Products carry per-size stock counters. Orders deduct stock when placed and
restore it exactly once when cancelled. Every command handler runs inside a
Protean unit of work, so stock writes and order writes commit or roll back
together.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
