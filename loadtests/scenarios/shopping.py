"""Everyday shopping load: browse the catalog, order, sometimes cancel.

Requires an admin bearer token so the journey can stock its own products
(start the server with STOREFRONT_DEV_TOKENS and STOREFRONT_ADMIN_EMAILS and
export the same token as LOADTEST_ADMIN_TOKEN).
"""

import os
import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import CATEGORIES, order_data, product_data
from loadtests.helpers.response import extract_error_detail, is_expected_refusal
from loadtests.helpers.state import ShopperState


def admin_headers() -> dict:
    return {"Authorization": f"Bearer {os.getenv('LOADTEST_ADMIN_TOKEN', 'admin-token')}"}


class BrowseAndOrderJourney(SequentialTaskSet):
    """Stock Products -> Browse -> View -> Place Order -> Maybe Cancel."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def stock_products(self):
        for _ in range(2):
            with self.client.post(
                "/products",
                json=product_data(stock_per_size=20),
                headers=admin_headers(),
                catch_response=True,
                name="POST /products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["product_id"])
                else:
                    resp.failure(f"Add product failed: {resp.status_code} — {extract_error_detail(resp)}")
                    self.interrupt()

    @task
    def browse(self):
        self.client.get("/products", params={"category": random.choice(CATEGORIES + ["all"])}, name="GET /products")
        self.client.get("/products/new-arrivals", name="GET /products/new-arrivals")
        self.client.get("/products/discounts", name="GET /products/discounts")

    @task
    def place_order(self):
        lines = []
        for product_id in self.state.product_ids:
            product = self.client.get(f"/products/{product_id}", name="GET /products/{id}").json()
            entry = random.choice(product["sizes"])
            lines.append((product_id, entry["size"], random.randint(1, 3)))

        with self.client.post("/orders", json=order_data(lines), catch_response=True, name="POST /orders") as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["order_id"])
            elif is_expected_refusal(resp):
                self.state.refused += 1
                resp.success()
            else:
                resp.failure(f"Place order failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def maybe_cancel(self):
        if not self.state.order_ids or random.random() < 0.5:
            return
        order_id = self.state.order_ids[-1]
        with self.client.patch(
            f"/orders/{order_id}",
            json={"status": "cancelled"},
            headers=admin_headers(),
            catch_response=True,
            name="PATCH /orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Cancel failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def stop(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Simulated shopper running the browse-and-order journey."""

    tasks = [BrowseAndOrderJourney]
    wait_time = between(1, 3)
