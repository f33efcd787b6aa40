"""Pydantic request/response schemas for the Storefront API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Requests stay permissive where the domain already
validates, so malformed orders are refused by the domain with one consistent
error shape.
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class SizeSchema(BaseModel):
    size: str = Field(min_length=1, max_length=20)
    stock: int = Field(ge=0, default=0)


class CustomerSchema(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class OrderLineSchema(BaseModel):
    product_id: str | None = Field(default=None, validation_alias=AliasChoices("product_id", "productId"))
    size: str | None = None
    quantity: int | None = None


# ---------------------------------------------------------------------------
# Product Schemas
# ---------------------------------------------------------------------------
class AddProductRequest(BaseModel):
    name: str
    category: str
    sizes: list[SizeSchema] = Field(default_factory=list)
    price: float | None = Field(default=None, ge=0)
    discount_price: float | None = Field(default=None, ge=0)
    description: str | None = None
    image: str | None = None
    is_new_arrival: bool = False


class UpdateProductRequest(BaseModel):
    name: str | None = None
    category: str | None = None
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    discount_price: float | None = Field(default=None, ge=0)
    clear_discount: bool = False
    image: str | None = None
    is_new_arrival: bool | None = None


class RestockRequest(BaseModel):
    size: str = Field(min_length=1, max_length=20)
    quantity: int = Field(ge=1)


class ProductIdResponse(BaseModel):
    product_id: str


class RestockResponse(BaseModel):
    product_id: str
    size: str
    stock: int


class ProductResponse(BaseModel):
    id: str
    name: str
    category: str
    description: str | None = None
    price: float | None = None
    discount_price: float | None = None
    image: str | None = None
    is_new_arrival: bool = False
    sizes: list[SizeSchema] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            id=str(product.id),
            name=product.name,
            category=product.category,
            description=product.description,
            price=product.price,
            discount_price=product.discount_price,
            image=product.image,
            is_new_arrival=bool(product.is_new_arrival),
            sizes=[SizeSchema(size=entry.size, stock=entry.stock) for entry in product.sizes],
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    customer: CustomerSchema | None = None
    items: list[OrderLineSchema] = Field(default_factory=list)


class ChangeOrderStatusRequest(BaseModel):
    status: str | None = None


class OrderLineResponse(BaseModel):
    product_id: str
    product_name: str | None = None
    size: str
    quantity: int


class OrderResponse(BaseModel):
    id: str
    customer: CustomerSchema
    items: list[OrderLineResponse]
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    cancelled_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            customer=CustomerSchema(
                name=order.customer.name,
                email=order.customer.email,
                phone=order.customer.phone,
                address=order.customer.address,
            ),
            items=[
                OrderLineResponse(
                    product_id=str(line.product_id),
                    product_name=line.product_name,
                    size=line.size,
                    quantity=line.quantity,
                )
                for line in order.items
            ],
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
            cancelled_at=order.cancelled_at,
        )


class PlaceOrderResponse(BaseModel):
    success: bool = True
    order_id: str
    order: OrderResponse


class OrderStatusResponse(BaseModel):
    success: bool = True
    message: str
    order: OrderResponse


# ---------------------------------------------------------------------------
# User Schemas
# ---------------------------------------------------------------------------
class RegisterUserRequest(BaseModel):
    email: str | None = None
    name: str | None = None
    photo_url: str | None = None


class RegisterUserResponse(BaseModel):
    message: str
    user_id: str
    created: bool


class ChangeRoleRequest(BaseModel):
    role: str | None = None


class RoleResponse(BaseModel):
    role: str | None


class UserResponse(BaseModel):
    id: str
    email: str
    name: str | None = None
    photo_url: str | None = None
    role: str
    created_at: datetime | None = None
    last_login: datetime | None = None

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            photo_url=user.photo_url,
            role=user.role,
            created_at=user.created_at,
            last_login=user.last_login,
        )


class StatusResponse(BaseModel):
    success: bool = True
    message: str = "ok"
