from storefront.api.routes import order_router, product_router, user_router

__all__ = ["order_router", "product_router", "user_router"]
