"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules and
match the exact field names expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

SIZES = ["XS", "S", "M", "L", "XL"]
CATEGORIES = ["shirts", "jackets", "trousers", "dresses", "accessories"]


def product_data(stock_per_size: int = 50, **overrides) -> dict:
    payload = {
        "name": f"{fake.color_name()} {random.choice(['Shirt', 'Jacket', 'Coat', 'Dress'])} {uuid.uuid4().hex[:4]}",
        "category": random.choice(CATEGORIES),
        "price": round(random.uniform(15, 250), 2),
        "description": fake.sentence(nb_words=12),
        "is_new_arrival": random.random() < 0.3,
        "sizes": [{"size": size, "stock": stock_per_size} for size in random.sample(SIZES, k=3)],
    }
    if random.random() < 0.25:
        payload["discount_price"] = round(payload["price"] * 0.8, 2)
    payload.update(overrides)
    return payload


def customer_data() -> dict:
    return {
        "name": fake.name(),
        "email": f"{fake.user_name()[:20]}.{uuid.uuid4().hex[:4]}@{fake.free_email_domain()}",
        "phone": fake.numerify("+1-###-###-####"),
        "address": fake.address().replace("\n", ", "),
    }


def order_data(lines: list[tuple[str, str, int]]) -> dict:
    """Build an order payload from (product_id, size, quantity) tuples."""
    return {
        "customer": customer_data(),
        "items": [{"product_id": pid, "size": size, "quantity": qty} for pid, size, qty in lines],
    }
