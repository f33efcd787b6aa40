"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state, with no cross-user sharing.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks state for a single simulated shopping journey."""

    product_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)
    refused: int = 0


@dataclass
class HotProductState:
    """Tracks one shopper's share of the orders against the hot product."""

    placed_order_ids: list[str] = field(default_factory=list)
    refused: int = 0
    conflicts: int = 0
