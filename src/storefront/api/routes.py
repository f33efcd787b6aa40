"""FastAPI routes for the Storefront: products, orders and users."""

import json

from fastapi import APIRouter, Depends, HTTPException, Response
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.dependencies import require_admin, require_self_email
from storefront.api.schemas import (
    AddProductRequest,
    ChangeOrderStatusRequest,
    ChangeRoleRequest,
    OrderResponse,
    OrderStatusResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    ProductIdResponse,
    ProductResponse,
    RegisterUserRequest,
    RegisterUserResponse,
    RestockRequest,
    RestockResponse,
    RoleResponse,
    StatusResponse,
    UpdateProductRequest,
    UserResponse,
)
from storefront.order import manager
from storefront.order.order import Order
from storefront.order.removal import DeleteOrder
from storefront.product.management import AddProduct, RemoveProduct, RestockSize, UpdateProductDetails
from storefront.product.product import Product
from storefront.product.repository import ALL_CATEGORIES
from storefront.user.registration import ChangeUserRole, RegisterUser
from storefront.user.user import User

# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=list[ProductResponse])
async def list_products(search: str = "", category: str = ALL_CATEGORIES) -> list[ProductResponse]:
    products = current_domain.repository_for(Product).search(search=search, category=category)
    return [ProductResponse.from_product(product) for product in products]


@product_router.get("/new-arrivals", response_model=list[ProductResponse])
async def list_new_arrivals(category: str | None = None) -> list[ProductResponse]:
    products = current_domain.repository_for(Product).new_arrivals(category=category)
    return [ProductResponse.from_product(product) for product in products]


@product_router.get("/discounts", response_model=list[ProductResponse])
async def list_discounted(category: str | None = None) -> list[ProductResponse]:
    products = current_domain.repository_for(Product).discounted(category=category)
    return [ProductResponse.from_product(product) for product in products]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail=f"Product not found: {product_id}") from None
    return ProductResponse.from_product(product)


@product_router.post(
    "",
    status_code=201,
    response_model=ProductIdResponse,
    dependencies=[Depends(require_admin)],
)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        category=body.category,
        sizes=json.dumps([entry.model_dump() for entry in body.sizes]),
        price=body.price,
        discount_price=body.discount_price,
        description=body.description,
        image=body.image,
        is_new_arrival=body.is_new_arrival,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=StatusResponse, dependencies=[Depends(require_admin)])
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProductDetails(product_id=product_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse(message="Product updated")


@product_router.post("/{product_id}/restock", response_model=RestockResponse, dependencies=[Depends(require_admin)])
async def restock_size(product_id: str, body: RestockRequest) -> RestockResponse:
    command = RestockSize(product_id=product_id, size=body.size, quantity=body.quantity)
    stock = current_domain.process(command, asynchronous=False)
    return RestockResponse(product_id=product_id, size=body.size, stock=stock)


@product_router.delete("/{product_id}", response_model=StatusResponse, dependencies=[Depends(require_admin)])
async def remove_product(product_id: str) -> StatusResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(message="Product removed")


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(body: PlaceOrderRequest) -> PlaceOrderResponse:
    customer = body.customer.model_dump() if body.customer else {}
    items = [line.model_dump() for line in body.items]
    order = manager.place_order(customer, items)
    return PlaceOrderResponse(order_id=str(order.id), order=OrderResponse.from_order(order))


@order_router.get("", response_model=list[OrderResponse], dependencies=[Depends(require_admin)])
async def list_orders() -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).recent_first()
    return [OrderResponse.from_order(order) for order in orders]


@order_router.get("/{order_id}", response_model=OrderResponse, dependencies=[Depends(require_admin)])
async def get_order(order_id: str) -> OrderResponse:
    return OrderResponse.from_order(manager.get_order(order_id))


@order_router.patch("/{order_id}", response_model=OrderStatusResponse, dependencies=[Depends(require_admin)])
async def change_order_status(order_id: str, body: ChangeOrderStatusRequest) -> OrderStatusResponse:
    order = manager.change_status(order_id, body.status)
    return OrderStatusResponse(
        message=f"Order status updated to {order.status}",
        order=OrderResponse.from_order(order),
    )


@order_router.delete("/{order_id}", response_model=StatusResponse, dependencies=[Depends(require_admin)])
async def delete_order(order_id: str) -> StatusResponse:
    current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)
    return StatusResponse(message="Order deleted")


# ---------------------------------------------------------------------------
# User Router
# ---------------------------------------------------------------------------
user_router = APIRouter(tags=["users"])


@user_router.post("/users", response_model=RegisterUserResponse)
async def register_user(body: RegisterUserRequest, response: Response) -> RegisterUserResponse:
    """Upsert keyed on email. 201 for a new user, 200 for a returning one."""
    command = RegisterUser(email=body.email, name=body.name, photo_url=body.photo_url)
    result = current_domain.process(command, asynchronous=False)
    if result["created"]:
        response.status_code = 201
        return RegisterUserResponse(message="New user created", **result)
    return RegisterUserResponse(message="User already exists", **result)


@user_router.get("/users", response_model=list[UserResponse], dependencies=[Depends(require_admin)])
async def list_users() -> list[UserResponse]:
    return [UserResponse.from_user(user) for user in current_domain.repository_for(User).everyone()]


@user_router.get("/role/users", response_model=RoleResponse)
async def get_user_role(email: str = Depends(require_self_email)) -> RoleResponse:
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return RoleResponse(role=user.role)


@user_router.patch("/users/{user_id}/role", response_model=StatusResponse, dependencies=[Depends(require_admin)])
async def change_user_role(user_id: str, body: ChangeRoleRequest) -> StatusResponse:
    role = current_domain.process(ChangeUserRole(user_id=user_id, role=body.role), asynchronous=False)
    return StatusResponse(message=f"User role updated to {role}")
