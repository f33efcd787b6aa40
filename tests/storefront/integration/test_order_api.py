"""Integration tests for the order endpoints via TestClient."""


def _order_body(product_id, quantity=1, size="M", **customer):
    return {
        "customer": {"name": "Ada Lovelace", **customer},
        "items": [{"product_id": product_id, "size": size, "quantity": quantity}],
    }


def _stock(client, product_id, size="M"):
    sizes = client.get(f"/products/{product_id}").json()["sizes"]
    return next(entry["stock"] for entry in sizes if entry["size"] == size)


class TestPlaceOrderAPI:
    def test_place_returns_201(self, client, product_id):
        response = client.post("/orders", json=_order_body(product_id, quantity=2))
        assert response.status_code == 201

        body = response.json()
        assert body["success"] is True
        assert body["order"]["status"] == "pending"
        assert body["order"]["items"][0]["product_name"] == "Linen Shirt"
        assert _stock(client, product_id) == 3

    def test_accepts_camel_case_product_id(self, client, product_id):
        response = client.post(
            "/orders",
            json={"customer": {"name": "Ada"}, "items": [{"productId": product_id, "size": "M", "quantity": 1}]},
        )
        assert response.status_code == 201

    def test_insufficient_stock_returns_409(self, client, product_id):
        response = client.post("/orders", json=_order_body(product_id, quantity=6))
        assert response.status_code == 409

        body = response.json()
        assert body["kind"] == "insufficient_stock"
        assert body["retryable"] is False
        assert _stock(client, product_id) == 5

    def test_unknown_size_returns_409(self, client, product_id):
        response = client.post("/orders", json=_order_body(product_id, size="XS"))
        assert response.status_code == 409
        assert response.json()["message"] == "Size XS not found for Linen Shirt"

    def test_unknown_product_returns_404(self, client):
        response = client.post("/orders", json=_order_body("no-such-product"))
        assert response.status_code == 404
        assert response.json()["kind"] == "product_not_found"

    def test_empty_items_returns_400(self, client):
        response = client.post("/orders", json={"customer": {"name": "Ada"}, "items": []})
        assert response.status_code == 400

    def test_missing_customer_returns_400(self, client, product_id):
        response = client.post("/orders", json={"items": [{"product_id": product_id, "size": "M", "quantity": 1}]})
        assert response.status_code == 400

    def test_zero_quantity_returns_400(self, client, product_id):
        response = client.post("/orders", json=_order_body(product_id, quantity=0))
        assert response.status_code == 400
        assert _stock(client, product_id) == 5


class TestOrderAdminAPI:
    def _place(self, client, product_id, quantity=1):
        return client.post("/orders", json=_order_body(product_id, quantity=quantity)).json()["order_id"]

    def test_listing_needs_a_token(self, client):
        assert client.get("/orders").status_code == 401

    def test_malformed_header_returns_401(self, client):
        assert client.get("/orders", headers={"Authorization": "Token abc"}).status_code == 401

    def test_unknown_token_returns_403(self, client, verifier):
        assert client.get("/orders", headers={"Authorization": "Bearer forged"}).status_code == 403

    def test_customers_cannot_list(self, client, customer_headers):
        assert client.get("/orders", headers=customer_headers).status_code == 403

    def test_list_orders(self, client, product_id, admin_headers):
        self._place(client, product_id)
        self._place(client, product_id)

        response = client.get("/orders", headers=admin_headers)
        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_get_order(self, client, product_id, admin_headers):
        order_id = self._place(client, product_id)
        response = client.get(f"/orders/{order_id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["id"] == order_id

    def test_get_unknown_order(self, client, admin_headers):
        assert client.get("/orders/missing", headers=admin_headers).status_code == 404

    def test_cancel_restores_stock(self, client, product_id, admin_headers):
        order_id = self._place(client, product_id, quantity=4)
        assert _stock(client, product_id) == 1

        response = client.patch(f"/orders/{order_id}", json={"status": "cancelled"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Order status updated to cancelled"
        assert _stock(client, product_id) == 5

    def test_cancel_twice_returns_409(self, client, product_id, admin_headers):
        order_id = self._place(client, product_id, quantity=2)
        client.patch(f"/orders/{order_id}", json={"status": "cancelled"}, headers=admin_headers)

        response = client.patch(f"/orders/{order_id}", json={"status": "cancelled"}, headers=admin_headers)
        assert response.status_code == 409
        assert response.json()["kind"] == "no_effective_change"
        assert _stock(client, product_id) == 5

    def test_reopen_cancelled_returns_422(self, client, product_id, admin_headers):
        order_id = self._place(client, product_id)
        client.patch(f"/orders/{order_id}", json={"status": "cancelled"}, headers=admin_headers)

        response = client.patch(f"/orders/{order_id}", json={"status": "pending"}, headers=admin_headers)
        assert response.status_code == 422
        assert response.json()["kind"] == "invalid_transition"

    def test_unknown_status_returns_422(self, client, product_id, admin_headers):
        order_id = self._place(client, product_id)
        response = client.patch(f"/orders/{order_id}", json={"status": "lost"}, headers=admin_headers)
        assert response.status_code == 422

    def test_missing_status_returns_400(self, client, product_id, admin_headers):
        order_id = self._place(client, product_id)
        response = client.patch(f"/orders/{order_id}", json={}, headers=admin_headers)
        assert response.status_code == 400

    def test_delete_order_keeps_stock(self, client, product_id, admin_headers):
        order_id = self._place(client, product_id, quantity=2)

        response = client.delete(f"/orders/{order_id}", headers=admin_headers)
        assert response.status_code == 200
        assert client.get(f"/orders/{order_id}", headers=admin_headers).status_code == 404
        assert _stock(client, product_id) == 3


class TestScenarioAPI:
    def test_sell_out_refuse_cancel_restore(self, client, product_id, admin_headers):
        first = client.post("/orders", json=_order_body(product_id, quantity=5))
        assert first.status_code == 201
        assert _stock(client, product_id) == 0

        second = client.post("/orders", json=_order_body(product_id, quantity=1))
        assert second.status_code == 409

        order_id = first.json()["order_id"]
        client.patch(f"/orders/{order_id}", json={"status": "cancelled"}, headers=admin_headers)
        assert _stock(client, product_id) == 5
