"""Hot product contention: every user orders the same size of one product.

The first user to start creates the product with a fixed stock. The run is
healthy when the number of successful orders never exceeds that stock and
every other attempt is refused with insufficient_stock or transaction_conflict.
"""

import threading

from locust import HttpUser, constant_pacing, events, task

from loadtests.data_generators import order_data, product_data
from loadtests.helpers.response import extract_error_detail, is_expected_refusal
from loadtests.scenarios.shopping import admin_headers

HOT_SIZE = "M"
HOT_STOCK = 100

_lock = threading.Lock()
_hot = {"product_id": None, "placed": 0, "refused": 0, "conflicts": 0}


class HotProductUser(HttpUser):
    wait_time = constant_pacing(0.2)

    def on_start(self):
        with _lock:
            if _hot["product_id"] is None:
                resp = self.client.post(
                    "/products",
                    json=product_data(name="Hot Drop Hoodie", sizes=[{"size": HOT_SIZE, "stock": HOT_STOCK}]),
                    headers=admin_headers(),
                    name="[HOT] POST /products",
                )
                _hot["product_id"] = resp.json()["product_id"]

    @task
    def order_one(self):
        payload = order_data([(_hot["product_id"], HOT_SIZE, 1)])
        with self.client.post("/orders", json=payload, catch_response=True, name="[HOT] POST /orders") as resp:
            if resp.status_code == 201:
                with _lock:
                    _hot["placed"] += 1
            elif is_expected_refusal(resp):
                with _lock:
                    if resp.json()["kind"] == "transaction_conflict":
                        _hot["conflicts"] += 1
                    else:
                        _hot["refused"] += 1
                resp.success()
            else:
                resp.failure(f"Hot order failed: {resp.status_code} — {extract_error_detail(resp)}")


@events.test_stop.add_listener
def report_hot_product(**_kwargs):
    if _hot["product_id"] is None:
        return
    print(
        f"[LOADTEST] Hot product: placed={_hot['placed']} refused={_hot['refused']} "
        f"conflicts={_hot['conflicts']} stock={HOT_STOCK}"
    )
    if _hot["placed"] > HOT_STOCK:
        print("[LOADTEST] OVERSOLD: more orders placed than stock available")
