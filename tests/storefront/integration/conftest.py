import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain
from protean.integrations.fastapi import register_exception_handlers

from storefront.api import order_router, product_router, user_router
from storefront.api.errors import register_error_handlers
from storefront.auth import set_verifier
from storefront.auth.fake_adapter import FakeTokenVerifier
from storefront.user.registration import ChangeUserRole, RegisterUser

ADMIN_EMAIL = "admin@example.com"
CUSTOMER_EMAIL = "shopper@example.com"


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(product_router)
    app.include_router(order_router)
    app.include_router(user_router)
    register_exception_handlers(app)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def verifier():
    fake = FakeTokenVerifier({"admin-token": ADMIN_EMAIL, "customer-token": CUSTOMER_EMAIL})
    set_verifier(fake)
    return fake


@pytest.fixture()
def admin_headers(verifier):
    result = current_domain.process(RegisterUser(email=ADMIN_EMAIL), asynchronous=False)
    current_domain.process(ChangeUserRole(user_id=result["user_id"], role="admin"), asynchronous=False)
    return {"Authorization": "Bearer admin-token"}


@pytest.fixture()
def customer_headers(verifier):
    current_domain.process(RegisterUser(email=CUSTOMER_EMAIL), asynchronous=False)
    return {"Authorization": "Bearer customer-token"}


@pytest.fixture()
def product_id(client, admin_headers):
    response = client.post(
        "/products",
        json={
            "name": "Linen Shirt",
            "category": "shirts",
            "price": 40.0,
            "sizes": [{"size": "M", "stock": 5}, {"size": "L", "stock": 2}],
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()["product_id"]
