"""Integration tests for the user endpoints via TestClient."""


class TestRegisterUserAPI:
    def test_new_user_returns_201(self, client):
        response = client.post("/users", json={"email": "grace@example.com", "name": "Grace"})
        assert response.status_code == 201
        assert response.json()["created"] is True

    def test_existing_user_returns_200(self, client):
        client.post("/users", json={"email": "grace@example.com"})
        response = client.post("/users", json={"email": "grace@example.com"})
        assert response.status_code == 200
        assert response.json()["message"] == "User already exists"

    def test_missing_email_returns_400(self, client):
        assert client.post("/users", json={"name": "Nobody"}).status_code == 400


class TestRoleAPI:
    def test_own_role(self, client, customer_headers):
        response = client.get("/role/users", params={"email": "shopper@example.com"}, headers=customer_headers)
        assert response.status_code == 200
        assert response.json() == {"role": "customer"}

    def test_someone_elses_role_is_forbidden(self, client, customer_headers, admin_headers):
        response = client.get("/role/users", params={"email": "admin@example.com"}, headers=customer_headers)
        assert response.status_code == 403

    def test_unregistered_caller(self, client, verifier):
        verifier.issue("ghost-token", "ghost@example.com")
        response = client.get(
            "/role/users",
            params={"email": "ghost@example.com"},
            headers={"Authorization": "Bearer ghost-token"},
        )
        assert response.status_code == 404

    def test_list_users_needs_admin(self, client, customer_headers):
        assert client.get("/users", headers=customer_headers).status_code == 403

    def test_list_users(self, client, admin_headers, customer_headers):
        response = client.get("/users", headers=admin_headers)
        assert response.status_code == 200
        assert sorted(u["email"] for u in response.json()) == ["admin@example.com", "shopper@example.com"]

    def test_promote_user(self, client, admin_headers, customer_headers):
        users = client.get("/users", headers=admin_headers).json()
        shopper = next(u for u in users if u["email"] == "shopper@example.com")

        response = client.patch(f"/users/{shopper['id']}/role", json={"role": "admin"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "User role updated to admin"

        # The promoted customer can now use admin endpoints
        assert client.get("/orders", headers=customer_headers).status_code == 200

    def test_same_role_returns_409(self, client, admin_headers, customer_headers):
        users = client.get("/users", headers=admin_headers).json()
        shopper = next(u for u in users if u["email"] == "shopper@example.com")

        response = client.patch(f"/users/{shopper['id']}/role", json={"role": "customer"}, headers=admin_headers)
        assert response.status_code == 409

    def test_invalid_role_returns_400(self, client, admin_headers, customer_headers):
        users = client.get("/users", headers=admin_headers).json()
        shopper = next(u for u in users if u["email"] == "shopper@example.com")

        response = client.patch(f"/users/{shopper['id']}/role", json={"role": "owner"}, headers=admin_headers)
        assert response.status_code == 400

    def test_unknown_user_returns_404(self, client, admin_headers):
        response = client.patch("/users/missing/role", json={"role": "admin"}, headers=admin_headers)
        assert response.status_code == 404
